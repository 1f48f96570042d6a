"""
MYLOGINDEC - reader for MySQL's obfuscated login-path file

This module provides easy-to-use functions for recovering the connection
options that `mysql_config_editor` stores in `.mylogin.cnf`.
Nothing is ever written back; the file is only read and decrypted.
"""

from .errors import CryptoError, EncodingError, FormatError, MyLoginError, SectionNotFound
from .main import mylogin, cli, main
from .version import __version__

# ============================================================================
# LOGIN FILE DECODING
# ============================================================================

def decode_file(path=None, *, environ=None) -> str:
    """
    Decrypt a login-path file and return its option-file text.

    Args:
        path: Login file location (optional)
        environ: Environment mapping used to resolve the default location
            (defaults to os.environ)

    Returns:
        The decrypted text, e.g. "[client]\\nuser = root\\n..."

    Resolution order:
        - explicit path
        - $MYSQL_LOGIN_FILE
        - %APPDATA%\\MySQL\\.mylogin.cnf on Windows, ~/.mylogin.cnf elsewhere

    Raises:
        FileNotFoundError: the file does not exist
        FormatError: truncated header or corrupt frame
        CryptoError: AES decryption or padding failure
        EncodingError: decrypted bytes are not UTF-8
    """
    return mylogin.decode_file(path, environ=environ)


def decode_section(section_name: str, path=None, *, environ=None) -> dict:
    """
    Decrypt a login-path file and return one login path as a dict.

    Args:
        section_name: Login path to select ("client", "remote", ...)
        path: Login file location (optional, see decode_file)
        environ: Environment mapping (optional, see decode_file)

    Returns:
        Option name -> value, e.g. {"user": "root", "host": "localhost"}

    Note:
        - Option names are lower-cased
        - Surrounding quotes are removed from values

    Raises:
        SectionNotFound: the login path is not in the file
        plus every error decode_file() raises
    """
    return mylogin.decode_section(section_name, path, environ=environ)


def decode_sections(path=None, *, environ=None) -> dict:
    """Every login path in the file, keyed by section name."""
    return mylogin.decode_sections(path, environ=environ)


def decode_bytes(raw: bytes) -> str:
    """Decrypt an already-loaded login file buffer."""
    return mylogin.decode_bytes(raw)


def login_path_file(path=None, *, environ=None):
    return mylogin.login_path_file(path, environ=environ)


__all__ = [
    "CryptoError",
    "EncodingError",
    "FormatError",
    "MyLoginError",
    "SectionNotFound",
    "__version__",
    "cli",
    "decode_bytes",
    "decode_file",
    "decode_section",
    "decode_sections",
    "login_path_file",
    "main",
    "mylogin",
]
