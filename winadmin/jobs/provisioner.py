from __future__ import annotations

import logging
from typing import Callable, Iterable

from winadmin.jobs.passwords import PasswordSource
from winadmin.models import Outcome, OutcomeKind, UserRecord
from winadmin.providers.base import AccountDirectory

logger = logging.getLogger(__name__)


def provision_user(
    record: UserRecord,
    accounts: AccountDirectory,
    password_for: PasswordSource,
) -> Outcome:
    """Create one enabled local account unless it already exists."""
    username = record.username
    try:
        if accounts.exists(username):
            return Outcome.skipped(username)
        password = password_for(username)
        accounts.create(username, password, record.full_name, f"Dept: {record.department}")
        accounts.set_enabled(username, True)
    except Exception as exc:
        logger.debug("Provisioning %s failed", username, exc_info=True)
        return Outcome.error(username, str(exc))
    return Outcome.created(username, record.full_name, record.department, password)


def provision_users(
    records: Iterable[UserRecord],
    accounts: AccountDirectory,
    password_for: PasswordSource,
    emit: Callable[[Outcome], None] | None = None,
) -> list[Outcome]:
    """Provision *records* in input order; one failing record never stops the batch."""
    outcomes: list[Outcome] = []
    for record in records:
        outcome = provision_user(record, accounts, password_for)
        if emit is not None:
            emit(outcome)
        outcomes.append(outcome)

    created = sum(1 for o in outcomes if o.kind == OutcomeKind.CREATED)
    logger.info("Provisioning finished: %d record(s), %d created", len(outcomes), created)
    return outcomes
