"""
Exception types raised while reading a MySQL login-path file.

Format, crypto and encoding failures share `MyLoginError`, which is a
`ValueError` so callers that already treat malformed payloads as bad values
keep working. Missing or unreadable files surface as the regular `OSError`
family (`FileNotFoundError`, `PermissionError`, ...).
"""

from __future__ import annotations

from typing import Iterable, Tuple


class MyLoginError(ValueError):
    """Base class for login file decoding failures."""


class FormatError(MyLoginError):
    """The file layout is not a login-path file (short header, frame overrun, ...)."""


class CryptoError(MyLoginError):
    """AES decryption or padding removal failed; wrong key material or corrupted data."""


class EncodingError(MyLoginError):
    """The decrypted bytes are not valid UTF-8."""


class SectionNotFound(MyLoginError, KeyError):
    """The requested login path is not present in the decoded file."""

    def __init__(self, section: str, available: Iterable[str] = ()) -> None:
        self.section = section
        self.available: Tuple[str, ...] = tuple(available)
        super().__init__(section)

    def __str__(self) -> str:
        if self.available:
            return f"Login path '{self.section}' not found (available: {', '.join(self.available)})"
        return f"Login path '{self.section}' not found"


__all__ = [
    "CryptoError",
    "EncodingError",
    "FormatError",
    "MyLoginError",
    "SectionNotFound",
]
