from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, SecretStr

REDACTED = "<redacted>"


class OutcomeKind(StrEnum):
    CREATED = "CREATED"
    SKIPPED = "SKIPPED"
    ERROR = "ERROR"
    SKIP = "SKIP"
    PROFILE_REMOVED = "PROFILE REMOVED"
    WARNING = "WARNING"
    ACCOUNT_DELETED = "ACCOUNT DELETED"


class Outcome(BaseModel):
    """Result of one processing step for one account.

    ``final`` marks the outcome that closes a record; every record processed
    by a job ends with exactly one final outcome.
    """

    kind: OutcomeKind
    username: str
    message: str
    secret: SecretStr | None = None
    final: bool = True

    def render(self, redact: bool = False) -> str:
        line = f"{self.kind}: {self.message}"
        if self.secret is not None:
            shown = REDACTED if redact else self.secret.get_secret_value()
            line += f" (password: {shown})"
        return line

    # ── constructors ────────────────────────────────────

    @classmethod
    def created(cls, username: str, full_name: str, department: str, password: str) -> Outcome:
        return cls(
            kind=OutcomeKind.CREATED,
            username=username,
            message=f"{username} ({full_name}) Dept={department}",
            secret=SecretStr(password),
        )

    @classmethod
    def skipped(cls, username: str) -> Outcome:
        return cls(kind=OutcomeKind.SKIPPED, username=username, message=f"{username} already exists")

    @classmethod
    def not_found(cls, username: str) -> Outcome:
        return cls(kind=OutcomeKind.SKIP, username=username, message=f"{username} not found")

    @classmethod
    def error(cls, username: str, detail: str, final: bool = True) -> Outcome:
        return cls(kind=OutcomeKind.ERROR, username=username, message=f"{username} -> {detail}", final=final)
