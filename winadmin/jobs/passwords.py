from __future__ import annotations

import secrets
import string
from typing import Callable

from pydantic import SecretStr

PasswordSource = Callable[[str], str]

_CLASSES = (string.ascii_lowercase, string.ascii_uppercase, string.digits, "!#$%*+-=?@_")
_ALPHABET = "".join(_CLASSES)


def generate_password(length: int = 16) -> str:
    """Random password containing every character class Windows complexity asks for."""
    if length < len(_CLASSES):
        raise ValueError(f"password length must be at least {len(_CLASSES)}")
    while True:
        candidate = "".join(secrets.choice(_ALPHABET) for _ in range(length))
        if all(any(c in cls for c in candidate) for cls in _CLASSES):
            return candidate


def make_password_source(default_password: SecretStr | None, length: int = 16) -> PasswordSource:
    """Shared fixed password when one is configured, otherwise one per account."""
    if default_password is not None:
        fixed = default_password.get_secret_value()
        return lambda _username: fixed
    return lambda _username: generate_password(length)
