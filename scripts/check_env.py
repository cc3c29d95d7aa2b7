"""Verify that the client's environment configuration loads and has not drifted.

The tool performs two checks:

1. It loads ``AppSettings`` from the provided ``.env`` file, surfacing an
   unknown flavor, a malformed timeout or a negative cache window before the
   client starts against the wrong backend.
2. It can record and verify a checksum for the ``.env`` file so unexpected
   edits are detected.

Example usages::

    # Validate the settings and record the expected checksum.
    python -m scripts.check_env record --env-file .env.staging \
        --hash-file .env.staging.sha256

    # Run later (e.g. in CI before a release build) to catch drift.
    python -m scripts.check_env verify --env-file .env.staging \
        --hash-file .env.staging.sha256
"""

from __future__ import annotations

import argparse
import hashlib
import sys
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from clean_client.core.config import AppSettings

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_CHECKSUM_ERROR = 3
EXIT_RUNTIME_ERROR = 5


def _compute_hash(env_file: Path) -> str:
    return hashlib.sha256(env_file.read_bytes()).hexdigest()


def _validate_settings(env_file: Path) -> AppSettings:
    return AppSettings.from_env_file(env_file)


def _record_checksum(env_file: Path, hash_file: Path) -> int:
    checksum = _compute_hash(env_file)
    hash_file.write_text(f"{checksum}\n", encoding="utf-8")
    print(f"Recorded checksum to {hash_file} ({checksum})")
    return EXIT_OK


def _verify_checksum(env_file: Path, hash_file: Path) -> int:
    """Compare the current checksum to the recorded baseline."""
    if not hash_file.exists():
        print(
            f"Expected checksum file {hash_file} is missing. "
            "Run the 'record' command first to establish a baseline.",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    expected = hash_file.read_text(encoding="utf-8").strip()
    actual = _compute_hash(env_file)
    if expected == actual:
        print("Environment checksum OK.")
        return EXIT_OK

    print(
        "Environment checksum mismatch!\n"
        f"  expected: {expected}\n"
        f"  actual:   {actual}",
        file=sys.stderr,
    )
    return EXIT_CHECKSUM_ERROR


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate client settings and detect .env drift."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_env_file(subparser: argparse.ArgumentParser) -> None:
        subparser.add_argument(
            "--env-file",
            default=".env",
            type=Path,
            help="Path to the environment file (default: .env).",
        )

    def add_hash_file(subparser: argparse.ArgumentParser, help_text: str) -> None:
        subparser.add_argument("--hash-file", required=True, type=Path, help=help_text)

    record_parser = subparsers.add_parser(
        "record", help="Validate settings and store the checksum baseline."
    )
    add_env_file(record_parser)
    add_hash_file(record_parser, "Location to write the checksum baseline.")

    verify_parser = subparsers.add_parser(
        "verify", help="Validate settings and compare the checksum with the baseline."
    )
    add_env_file(verify_parser)
    add_hash_file(verify_parser, "Location of the recorded checksum baseline.")

    check_parser = subparsers.add_parser(
        "check", help="Validate settings and print the resolved backend."
    )
    add_env_file(check_parser)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    env_file: Path = args.env_file

    if not env_file.exists():
        print(f"Environment file {env_file} does not exist.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        settings = _validate_settings(env_file)
    except ValidationError as exc:
        print(
            "Settings validation failed. Missing or invalid values detected:\n"
            f"{exc.json(indent=2)}",
            file=sys.stderr,
        )
        return EXIT_VALIDATION_ERROR
    except OSError as exc:
        print(f"Could not read {env_file}: {exc}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    def _report() -> int:
        print(f"flavor={settings.flavor.value} base_url={settings.base_url}")
        return EXIT_OK

    handlers: dict[str, Callable[[], int]] = {
        "record": lambda: _record_checksum(env_file, args.hash_file),
        "verify": lambda: _verify_checksum(env_file, args.hash_file),
        "check": _report,
    }
    return handlers[args.command]()


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
