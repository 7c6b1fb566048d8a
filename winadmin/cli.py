"""Command-line entry points for the three administration jobs.

Usage:
    winadmin-provision   [--csv users.csv]   [--log provision.log]
    winadmin-deprovision [--csv cleanup.csv] [--log cleanup.log]
    winadmin-health      [--out reports]

Defaults come from :mod:`winadmin.config` (``WINADMIN_*`` environment
variables or ``.env``).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from winadmin.config import settings
from winadmin.errors import InputError
from winadmin.inputs import load_cleanup_entries, load_user_records
from winadmin.jobs import (
    OutcomeLog,
    collect_snapshot,
    deprovision_users,
    make_password_source,
    provision_users,
    write_reports,
)
from winadmin.providers import (
    PsutilSystemMetrics,
    WindowsAccountDirectory,
    WindowsNetworkProbe,
    WindowsProfileStore,
    WindowsSecurityAuditLog,
)

logger = logging.getLogger(__name__)


def _setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
        stream=sys.stderr,
    )


# ── provision ────────────────────────────────────────


def provision_main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create local accounts from a CSV file")
    parser.add_argument("--csv", type=Path, default=settings.users_csv, help="input CSV (UserName, FirstName, LastName, Department)")
    parser.add_argument("--log", type=Path, default=settings.provision_log, help="outcome log, truncated on each run")
    args = parser.parse_args(argv)
    _setup_logging()

    try:
        records = load_user_records(args.csv)
    except InputError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    if settings.default_password is None:
        logger.info("No default password configured; generating one per account")
    password_for = make_password_source(settings.default_password, settings.password_length)

    with OutcomeLog(args.log, log_secrets=settings.log_passwords) as log:
        provision_users(records, WindowsAccountDirectory(), password_for, emit=log)
    return 0


# ── deprovision ──────────────────────────────────────


def deprovision_main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Delete local accounts and their profiles from a CSV file")
    parser.add_argument("--csv", type=Path, default=settings.cleanup_csv, help="input CSV with a UserName column")
    parser.add_argument("--log", type=Path, default=None, help="optional outcome log, truncated on each run")
    args = parser.parse_args(argv)
    _setup_logging()

    try:
        entries = load_cleanup_entries(args.csv)
    except InputError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    with OutcomeLog(args.log) as log:
        deprovision_users(
            entries,
            WindowsAccountDirectory(),
            WindowsProfileStore(),
            block_on_loaded_profile=settings.block_on_loaded_profile,
            emit=log,
        )
    return 0


# ── health ───────────────────────────────────────────


def health_main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Write a system health report (TXT + CSV)")
    parser.add_argument("--out", type=Path, default=settings.report_dir, help="report directory, created if missing")
    args = parser.parse_args(argv)
    _setup_logging()

    snapshot = collect_snapshot(
        PsutilSystemMetrics(),
        WindowsSecurityAuditLog(),
        WindowsNetworkProbe(),
        config=settings,
    )
    print(snapshot.render_report(), flush=True)
    txt_path, csv_path = write_reports(snapshot, args.out)
    print(f"Saved: {txt_path}")
    print(f"Saved: {csv_path}")
    return 0
