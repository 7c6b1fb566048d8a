from __future__ import annotations

import logging

from winadmin.errors import OperationFailed
from winadmin.providers.base import AccountDirectory

logger = logging.getLogger(__name__)

NERR_USER_NOT_FOUND = 2221


def _describe(exc: Exception) -> str:
    # pywintypes.error carries (winerror, funcname, strerror)
    strerror = getattr(exc, "strerror", None)
    return strerror or str(exc)


class WindowsAccountDirectory(AccountDirectory):
    """Local SAM accounts through the NetUser* API (pywin32)."""

    def __init__(self, server: str | None = None) -> None:
        # None targets the local machine
        self._server = server

    def exists(self, username: str) -> bool:
        import pywintypes  # type: ignore[import-not-found]
        import win32net  # type: ignore[import-not-found]

        try:
            win32net.NetUserGetInfo(self._server, username, 0)
        except pywintypes.error as exc:
            if exc.winerror == NERR_USER_NOT_FOUND:
                return False
            raise OperationFailed(_describe(exc)) from exc
        return True

    def create(self, username: str, password: str, full_name: str, description: str) -> None:
        import pywintypes  # type: ignore[import-not-found]
        import win32net  # type: ignore[import-not-found]
        import win32netcon  # type: ignore[import-not-found]

        info = {
            "name": username,
            "password": password,
            "priv": win32netcon.USER_PRIV_USER,
            "home_dir": None,
            "comment": description,
            "flags": win32netcon.UF_SCRIPT | win32netcon.UF_NORMAL_ACCOUNT,
            "script_path": None,
        }
        try:
            win32net.NetUserAdd(self._server, 1, info)
            win32net.NetUserSetInfo(self._server, username, 1011, {"full_name": full_name})
        except pywintypes.error as exc:
            raise OperationFailed(_describe(exc)) from exc
        logger.debug("NetUserAdd succeeded for %s", username)

    def set_enabled(self, username: str, enabled: bool) -> None:
        import pywintypes  # type: ignore[import-not-found]
        import win32net  # type: ignore[import-not-found]
        import win32netcon  # type: ignore[import-not-found]

        try:
            flags = win32net.NetUserGetInfo(self._server, username, 1)["flags"]
            if enabled:
                flags &= ~win32netcon.UF_ACCOUNTDISABLE
            else:
                flags |= win32netcon.UF_ACCOUNTDISABLE
            win32net.NetUserSetInfo(self._server, username, 1008, {"flags": flags})
        except pywintypes.error as exc:
            raise OperationFailed(_describe(exc)) from exc

    def get_sid(self, username: str) -> str:
        import pywintypes  # type: ignore[import-not-found]
        import win32security  # type: ignore[import-not-found]

        try:
            sid, _domain, _kind = win32security.LookupAccountName(self._server, username)
        except pywintypes.error as exc:
            raise OperationFailed(_describe(exc)) from exc
        return win32security.ConvertSidToStringSid(sid)

    def delete(self, username: str) -> None:
        import pywintypes  # type: ignore[import-not-found]
        import win32net  # type: ignore[import-not-found]

        try:
            win32net.NetUserDel(self._server, username)
        except pywintypes.error as exc:
            raise OperationFailed(_describe(exc)) from exc
