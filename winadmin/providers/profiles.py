from __future__ import annotations

import logging
import os

from winadmin.errors import OperationFailed, Unavailable
from winadmin.models import ProfileInfo
from winadmin.providers.base import ProfileStore

logger = logging.getLogger(__name__)

PROFILE_LIST_KEY = r"SOFTWARE\Microsoft\Windows NT\CurrentVersion\ProfileList"


class WindowsProfileStore(ProfileStore):
    """Profiles registered under the ProfileList registry key.

    A profile counts as loaded while its hive is mounted under HKEY_USERS,
    which is the case for any active session or service using it.
    """

    def find(self, sid: str) -> ProfileInfo | None:
        import winreg

        try:
            with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, rf"{PROFILE_LIST_KEY}\{sid}") as key:
                raw_path, _ = winreg.QueryValueEx(key, "ProfileImagePath")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise Unavailable(f"cannot read profile list: {exc}") from exc

        return ProfileInfo(
            sid=sid,
            path=os.path.expandvars(str(raw_path)),
            loaded=self._is_loaded(sid),
        )

    def delete(self, profile: ProfileInfo) -> None:
        import pywintypes  # type: ignore[import-not-found]
        import win32profile  # type: ignore[import-not-found]

        try:
            win32profile.DeleteProfile(profile.sid)
        except pywintypes.error as exc:
            raise OperationFailed(exc.strerror or str(exc)) from exc
        logger.debug("Deleted profile %s (%s)", profile.sid, profile.path)

    @staticmethod
    def _is_loaded(sid: str) -> bool:
        import winreg

        try:
            winreg.OpenKey(winreg.HKEY_USERS, sid).Close()
        except FileNotFoundError:
            return False
        return True
