from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

from winadmin.models import Outcome


class OutcomeLog:
    """Writes each outcome to the console and, optionally, to a log file.

    The log file is truncated when opened so every run starts a fresh log.
    Secrets are shown on the console but redacted in the file unless
    ``log_secrets`` is set.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        log_secrets: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        self.path = Path(path) if path else None
        self.log_secrets = log_secrets
        self._stream = stream
        self._file: TextIO | None = None

    def __enter__(self) -> OutcomeLog:
        if self.path is not None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.path, "w", encoding="utf-8")
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __call__(self, outcome: Outcome) -> None:
        self.emit(outcome)

    def emit(self, outcome: Outcome) -> None:
        stream = self._stream or sys.stdout
        print(outcome.render(), file=stream, flush=True)
        if self._file is not None:
            self._file.write(outcome.render(redact=not self.log_secrets) + "\n")
            self._file.flush()
