from __future__ import annotations

import argparse
import getpass
import logging
import sys
from typing import Dict, List, Optional, Sequence, Tuple

from confstack.crypto import AesGcmPropertyEncryptor, wrap
from confstack.errors import ConfigurationError
from confstack.keys import ENCRYPTION_KEY_PROP, normalize
from confstack.loader import DEFAULT_CONFIG_NAME, ConfigLoadRequest, ConfigurationLoader, RuntimeSnapshot
from confstack.logging import LoggingSettings, init_logging

logger = logging.getLogger(__name__)

_MASK = "****"


def _add_load_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config-name",
        default=DEFAULT_CONFIG_NAME,
        help=f"Base configuration name (default: {DEFAULT_CONFIG_NAME})",
    )
    parser.add_argument(
        "--config-path",
        action="append",
        default=None,
        help="Directory searched for configuration files. Repeatable (default: current directory)",
    )
    parser.add_argument("--resource-package", default=None, help="Package whose bundled files are read first")
    parser.add_argument("--strict", action="store_true", help="Fail when a configuration file is missing or malformed")
    parser.add_argument("--dotenv", default=None, help="Merge a .env file under the process environment")
    parser.add_argument("--env-prefix", default=None, help="Only copy environment variables with this prefix")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="confstack",
        description="Layered configuration resolver",
        epilog="Extra -Dkey=value arguments become process properties; --key=value arguments override everything.",
        allow_abbrev=False,
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    # Command: encrypt
    encrypt_parser = subparsers.add_parser("encrypt", help="Produce an ENC(...) value", allow_abbrev=False)
    encrypt_parser.add_argument("--key", default=None, help="16 character encryption key (prompted when omitted)")
    encrypt_parser.add_argument("value", nargs="?", default=None, help="Value to encrypt (prompted when omitted)")

    # Command: show
    show_parser = subparsers.add_parser("show", help="Print every resolved key", allow_abbrev=False)
    _add_load_arguments(show_parser)

    # Command: get
    get_parser = subparsers.add_parser("get", help="Print one resolved value", allow_abbrev=False)
    get_parser.add_argument("key", help="Configuration key, e.g. app.name")
    _add_load_arguments(get_parser)

    return parser


def _split_extras(extras: Sequence[str]) -> Tuple[Dict[str, str], List[str], List[str]]:
    properties: Dict[str, str] = {}
    overrides: List[str] = []
    unknown: List[str] = []
    for arg in extras:
        if arg.startswith("-D") and "=" in arg:
            key, _, value = arg[2:].partition("=")
            properties[key] = value
        elif arg.startswith("--") and "=" in arg:
            overrides.append(arg)
        else:
            unknown.append(arg)
    return properties, overrides, unknown


def _load(args: argparse.Namespace, extras: Sequence[str]) -> ConfigurationLoader:
    properties, overrides, _ = _split_extras(extras)
    request = ConfigLoadRequest(
        base_name=args.config_name,
        search_paths=tuple(args.config_path or (".",)),
        resource_package=args.resource_package,
        strict=args.strict,
        env_prefix=args.env_prefix,
    )
    loader = ConfigurationLoader(request)
    snapshot = RuntimeSnapshot.capture(argv=overrides, properties=properties, dotenv_path=args.dotenv)
    loader.load_configuration(snapshot)
    return loader


def _display_value(key: str, value: str) -> str:
    return _MASK if normalize(key) == normalize(ENCRYPTION_KEY_PROP) else value


def _encrypt(args: argparse.Namespace) -> int:
    key = args.key if args.key is not None else getpass.getpass("Enter a 16-character encryption key: ")
    value = args.value if args.value is not None else input("Enter a value to encrypt: ")

    encryptor = AesGcmPropertyEncryptor(key)
    encrypted = encryptor.encrypt(value)
    if encryptor.decrypt(encrypted) != value:
        raise ConfigurationError("Encrypted value did not decrypt back to the input.")

    print("Place this in your configuration.")
    print(f"Encrypted Value: {wrap(encrypted)}")
    return 0


def _show(args: argparse.Namespace, extras: Sequence[str]) -> int:
    loader = _load(args, extras)
    for key, value in loader.store.items():
        print(f"{key}={_display_value(key, value)}")
    return 0


def _get(args: argparse.Namespace, extras: Sequence[str]) -> int:
    loader = _load(args, extras)
    value = loader.get_property(args.key)
    if value is None:
        logger.warning("cli.key_missing key=%s", args.key)
        return 1
    print(_display_value(args.key, value))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args, extras = parser.parse_known_args(argv)
    init_logging(LoggingSettings(level=args.log_level))

    _, _, unknown = _split_extras(extras)
    if unknown or (args.command == "encrypt" and extras):
        parser.error(f"unrecognized arguments: {' '.join(unknown or extras)}")

    try:
        if args.command == "encrypt":
            return _encrypt(args)
        if args.command == "show":
            return _show(args, extras)
        return _get(args, extras)
    except ConfigurationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
