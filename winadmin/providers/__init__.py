from .accounts import WindowsAccountDirectory
from .audit_log import FAILED_LOGON_EVENT_ID, WindowsSecurityAuditLog
from .base import AccountDirectory, NetworkProbe, ProfileStore, SecurityAuditLog, SystemMetrics
from .metrics import PsutilSystemMetrics
from .network import WindowsNetworkProbe
from .profiles import WindowsProfileStore

__all__ = [
    "AccountDirectory",
    "FAILED_LOGON_EVENT_ID",
    "NetworkProbe",
    "ProfileStore",
    "PsutilSystemMetrics",
    "SecurityAuditLog",
    "SystemMetrics",
    "WindowsAccountDirectory",
    "WindowsNetworkProbe",
    "WindowsProfileStore",
    "WindowsSecurityAuditLog",
]
