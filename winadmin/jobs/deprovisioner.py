from __future__ import annotations

import logging
from typing import Callable, Iterable

from winadmin.models import CleanupEntry, Outcome, OutcomeKind
from winadmin.providers.base import AccountDirectory, ProfileStore

logger = logging.getLogger(__name__)


def unique_usernames(entries: Iterable[CleanupEntry]) -> list[str]:
    """Stripped, non-blank, de-duplicated usernames in sorted order."""
    return sorted({e.username.strip() for e in entries if e.username.strip()})


def deprovision_user(
    username: str,
    accounts: AccountDirectory,
    profiles: ProfileStore,
    block_on_loaded_profile: bool = False,
    emit: Callable[[Outcome], None] | None = None,
) -> list[Outcome]:
    """Remove the profile (when not loaded) and then the account.

    A loaded profile is left in place and reported as a warning. The
    account is still deleted unless *block_on_loaded_profile* is set.
    """
    outcomes: list[Outcome] = []

    def report(outcome: Outcome) -> None:
        outcomes.append(outcome)
        if emit is not None:
            emit(outcome)

    try:
        if not accounts.exists(username):
            report(Outcome.not_found(username))
            return outcomes

        profile = profiles.find(accounts.get_sid(username))
        if profile is not None and profile.loaded:
            report(Outcome(
                kind=OutcomeKind.WARNING,
                username=username,
                message=f"profile for {username} is loaded (in use); left intact",
                final=False,
            ))
            if block_on_loaded_profile:
                report(Outcome(
                    kind=OutcomeKind.SKIP,
                    username=username,
                    message=f"{username} has a loaded profile; account kept",
                ))
                return outcomes
        elif profile is not None:
            try:
                profiles.delete(profile)
            except Exception as exc:
                report(Outcome.error(username, f"profile removal failed: {exc}", final=False))
            else:
                report(Outcome(
                    kind=OutcomeKind.PROFILE_REMOVED,
                    username=username,
                    message=f"{username} ({profile.path})",
                    final=False,
                ))

        accounts.delete(username)
        report(Outcome(kind=OutcomeKind.ACCOUNT_DELETED, username=username, message=username))
    except Exception as exc:
        logger.debug("Deprovisioning %s failed", username, exc_info=True)
        report(Outcome.error(username, str(exc)))
    return outcomes


def deprovision_users(
    entries: Iterable[CleanupEntry],
    accounts: AccountDirectory,
    profiles: ProfileStore,
    block_on_loaded_profile: bool = False,
    emit: Callable[[Outcome], None] | None = None,
) -> list[Outcome]:
    outcomes: list[Outcome] = []
    usernames = unique_usernames(entries)
    for username in usernames:
        outcomes.extend(
            deprovision_user(username, accounts, profiles, block_on_loaded_profile, emit)
        )

    deleted = sum(1 for o in outcomes if o.kind == OutcomeKind.ACCOUNT_DELETED)
    logger.info("Cleanup finished: %d account(s) processed, %d deleted", len(usernames), deleted)
    return outcomes
