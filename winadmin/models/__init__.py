from .health import DiskStats, HealthSnapshot, MemoryStats
from .outcome import Outcome, OutcomeKind
from .users import CleanupEntry, ProfileInfo, UserRecord

__all__ = [
    "CleanupEntry",
    "DiskStats",
    "HealthSnapshot",
    "MemoryStats",
    "Outcome",
    "OutcomeKind",
    "ProfileInfo",
    "UserRecord",
]
