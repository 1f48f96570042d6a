# MYLOGINDEC LOGIN-PATH READER ->

import os as _os_module

from .errors import CryptoError, EncodingError, FormatError, MyLoginError, SectionNotFound
from .loginfile import decode_login_text


class mylogin:
    import configparser
    import os
    import pathlib
    import stat
    import sys
    import typing
    import warnings

    @staticmethod
    def _env_int(name: str) -> "mylogin.typing.Optional[int]":
        value = _os_module.getenv(name)
        if not value:
            return None
        try:
            parsed = int(value)
        except (TypeError, ValueError):
            return None
        if parsed <= 0:
            return None
        return parsed

    ENGINE_VERSION = "1.2.0"
    LOGIN_FILE_ENV = "MYSQL_LOGIN_FILE"
    LOGIN_FILE_NAME = ".mylogin.cnf"
    WINDOWS_APPDATA_ENV = "APPDATA"
    WINDOWS_SUBDIR = "MySQL"
    DEFAULT_LOGIN_PATH = "client"
    PASSWORD_OPTIONS = ("password",)
    PASSWORD_MASK = "*****"
    MAX_INPUT_BYTES = 1024 * 1024  # login files are a handful of short lines
    _MAX_INPUT_BYTES_ENV = _env_int("MYLOGINDEC_MAX_INPUT_BYTES")
    if _MAX_INPUT_BYTES_ENV is not None:
        MAX_INPUT_BYTES = _MAX_INPUT_BYTES_ENV
    _QUOTES = ("'", '"')

    # ------------------------------------------------------------------
    # Path resolution
    # ------------------------------------------------------------------

    @staticmethod
    def _default_login_file(
        environ: "mylogin.typing.Mapping[str, str]",
        os_name: str,
    ) -> "mylogin.pathlib.Path":
        if os_name == "nt":
            appdata = environ.get(mylogin.WINDOWS_APPDATA_ENV)
            if not appdata:
                raise FileNotFoundError(
                    f"Cannot locate {mylogin.LOGIN_FILE_NAME}: "
                    f"environment variable '{mylogin.WINDOWS_APPDATA_ENV}' is not set"
                )
            return mylogin.pathlib.Path(appdata) / mylogin.WINDOWS_SUBDIR / mylogin.LOGIN_FILE_NAME
        return mylogin.pathlib.Path("~").expanduser() / mylogin.LOGIN_FILE_NAME

    @staticmethod
    def login_path_file(
        path=None,
        environ: "mylogin.typing.Optional[mylogin.typing.Mapping[str, str]]" = None,
        os_name: "mylogin.typing.Optional[str]" = None,
    ) -> "mylogin.pathlib.Path":
        """Explicit path, else $MYSQL_LOGIN_FILE, else the platform default location."""
        if path is not None and str(path) != "":
            return mylogin.pathlib.Path(str(path)).expanduser()
        env = mylogin.os.environ if environ is None else environ
        override = env.get(mylogin.LOGIN_FILE_ENV)
        if override:
            return mylogin.pathlib.Path(override).expanduser()
        return mylogin._default_login_file(env, os_name or mylogin.os.name)

    # ------------------------------------------------------------------
    # File loading
    # ------------------------------------------------------------------

    @staticmethod
    def _normalize_path(path_like) -> "mylogin.pathlib.Path":
        if isinstance(path_like, mylogin.pathlib.Path):
            path = path_like
        else:
            path = mylogin.pathlib.Path(str(path_like))
        path = path.expanduser()
        try:
            return path.resolve(strict=False)
        except (OSError, RuntimeError):
            return path

    @staticmethod
    def _ensure_existing_file(path: "mylogin.pathlib.Path") -> None:
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Login file not found: {path}")

    @staticmethod
    def _ensure_size_limit(path: "mylogin.pathlib.Path", max_bytes: int = None) -> None:
        limit = mylogin.MAX_INPUT_BYTES if max_bytes is None else max_bytes
        size = path.stat().st_size
        if size > limit:
            raise FormatError(
                f"{path.name} is {size} bytes, exceeding the {limit} byte limit for login files"
            )

    @staticmethod
    def _warn_on_permissions(path: "mylogin.pathlib.Path") -> None:
        if mylogin.os.name == "nt":
            return
        mode = path.stat().st_mode
        if mode & mylogin.stat.S_IWOTH:
            mylogin.warnings.warn(
                f"Login file {path} is world-writable; MySQL clients ignore such files.",
                UserWarning,
            )

    @staticmethod
    def read_login_file(path, max_bytes: int = None) -> bytes:
        normalized = mylogin._normalize_path(path)
        mylogin._ensure_existing_file(normalized)
        mylogin._ensure_size_limit(normalized, max_bytes)
        mylogin._warn_on_permissions(normalized)
        return normalized.read_bytes()

    # ------------------------------------------------------------------
    # Option-file parsing
    # ------------------------------------------------------------------

    @staticmethod
    def _unquote(value: "mylogin.typing.Optional[str]") -> str:
        if value is None:
            return ""
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in mylogin._QUOTES:
            return value[1:-1]
        return value

    @staticmethod
    def parse_sections(text: str) -> "dict[str, dict[str, str]]":
        parser = mylogin.configparser.ConfigParser(
            interpolation=None,
            allow_no_value=True,
            strict=False,
            default_section="\x00",
        )
        try:
            parser.read_string(text, source=mylogin.LOGIN_FILE_NAME)
        except mylogin.configparser.Error as exc:
            raise FormatError(f"Malformed login file contents: {exc}") from exc
        sections: "dict[str, dict[str, str]]" = {}
        for name in parser.sections():
            sections[name] = {
                key: mylogin._unquote(value)
                for key, value in parser.items(name, raw=True)
            }
        return sections

    @staticmethod
    def select_section(
        sections: "mylogin.typing.Mapping[str, mylogin.typing.Mapping[str, str]]",
        name: str,
    ) -> "dict[str, str]":
        if name not in sections:
            raise SectionNotFound(name, sections.keys())
        return dict(sections[name])

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    @staticmethod
    def decode_bytes(raw: bytes) -> str:
        return decode_login_text(raw)

    @staticmethod
    def decode_file(path=None, environ=None) -> str:
        resolved = mylogin.login_path_file(path, environ=environ)
        return decode_login_text(mylogin.read_login_file(resolved))

    @staticmethod
    def decode_sections(path=None, environ=None) -> "dict[str, dict[str, str]]":
        return mylogin.parse_sections(mylogin.decode_file(path, environ=environ))

    @staticmethod
    def decode_section(section_name: str, path=None, environ=None) -> "dict[str, str]":
        return mylogin.select_section(mylogin.decode_sections(path, environ=environ), section_name)

    @staticmethod
    def format_section(
        name: str,
        options: "mylogin.typing.Mapping[str, str]",
        show_password: bool = False,
    ) -> str:
        lines = [f"[{name}]"]
        for key, value in options.items():
            if key in mylogin.PASSWORD_OPTIONS and not show_password:
                value = mylogin.PASSWORD_MASK
            lines.append(f"{key} = {value}")
        return "\n".join(lines)


def cli(argv=None) -> int:
    import argparse

    parser = argparse.ArgumentParser(
        prog="mylogindec",
        description="Decode MySQL login-path files (.mylogin.cnf)"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {mylogin.ENGINE_VERSION}"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    printer = subparsers.add_parser(
        "print",
        help="Print one or all login paths, masking passwords"
    )
    printer.add_argument(
        "-G", "--login-path",
        dest="login_path",
        default=mylogin.DEFAULT_LOGIN_PATH,
        help=f"Login path (section) to print (default: {mylogin.DEFAULT_LOGIN_PATH})"
    )
    printer.add_argument(
        "--all",
        dest="print_all",
        action="store_true",
        help="Print every login path in the file"
    )
    printer.add_argument(
        "--show-password",
        action="store_true",
        help="Print passwords in clear text instead of masking them"
    )

    decoder = subparsers.add_parser(
        "decode",
        help="Print the decrypted login file verbatim"
    )

    for sub in (printer, decoder):
        sub.add_argument(
            "-f", "--file",
            dest="path",
            default=None,
            help=f"Login file path (default: ${mylogin.LOGIN_FILE_ENV} or the platform location)"
        )

    args = parser.parse_args(argv)

    try:
        if args.command == "decode":
            mylogin.sys.stdout.write(mylogin.decode_file(args.path))
            return 0

        sections = mylogin.decode_sections(args.path)
        if args.print_all:
            selected = sections
        else:
            selected = {args.login_path: mylogin.select_section(sections, args.login_path)}
        print("\n".join(
            mylogin.format_section(name, options, show_password=args.show_password)
            for name, options in selected.items()
        ))
    except (OSError, MyLoginError) as exc:
        print(f"error: {exc}", file=mylogin.sys.stderr)
        return 1
    return 0


def main(argv=None) -> int:
    return cli(argv)


__all__ = [
    "CryptoError",
    "EncodingError",
    "FormatError",
    "MyLoginError",
    "SectionNotFound",
    "cli",
    "main",
    "mylogin",
]


if __name__ == "__main__":
    raise SystemExit(main())
