"""Command line interface for i4tow."""
from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from rich.logging import RichHandler

from . import __version__
from .cli_progress import (
    AlbumProgressDisplay,
    render_configuration_summary,
    render_error,
    render_results,
)
from .models import AlbumResult, GitHubCredentials, PublishConfig, PublishMode
from .orchestrator import AlbumOrchestrator
from .services.git_transport import GitTransport
from .services.scanner import PhotoScanner
from .utils.events import ALBUM_COMPLETE, ALBUM_START, PROGRESS


class CLIError(RuntimeError):
    """Raised when CLI validation/execution fails."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.hint = hint


def _setup_logging(debug: bool, silent: bool, log_level: Optional[str]) -> str:
    """
    Configure logging.

    Default behavior is silent unless --debug or --log-level is provided.
    Returns a string describing effective mode.
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    logging.disable(logging.NOTSET)

    if silent or (not debug and not log_level):
        logging.disable(logging.CRITICAL)
        root_logger.setLevel(logging.CRITICAL + 1)
        return "silent"

    if debug:
        level = logging.DEBUG
    else:
        level = getattr(logging, log_level.upper(), None)
        if not isinstance(level, int):
            env_level = os.getenv("LOG_LEVEL")
            level = getattr(logging, (env_level or "INFO").upper(), logging.INFO)

    handler = RichHandler(
        rich_tracebacks=True,
        markup=False,
        show_time=False,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    return logging.getLevelName(level)


def _strip_optional_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        return value[1:-1]
    return value


def _load_env_file(path: Path, override: bool = False) -> None:
    if not path.exists():
        raise CLIError(f"env file not found: {path}")
    if not path.is_file():
        raise CLIError(f"env path is not a file: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CLIError(f"could not read env file {path}: {exc}") from exc

    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :].strip()
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        if not key:
            continue

        value = _strip_optional_quotes(value.strip())
        if override or key not in os.environ:
            os.environ[key] = value


def _resolve_default_env_file() -> Optional[Path]:
    default_env = Path(".env")
    return default_env if default_env.exists() and default_env.is_file() else None


def _resolve_credentials(token: Optional[str], username: Optional[str]) -> GitHubCredentials:
    """Flags first, then GITHUB_TOKEN / GITHUB_USERNAME, then git config user.name."""
    token = token or os.getenv("GITHUB_TOKEN")
    if not token:
        raise CLIError(
            "GitHub token required",
            hint="Set GITHUB_TOKEN env or use --token flag",
        )

    username = username or os.getenv("GITHUB_USERNAME") or GitTransport.configured_username()
    if not username:
        raise CLIError(
            "GitHub username required",
            hint="Set GITHUB_USERNAME env, use --username flag, or configure git user.name",
        )

    return GitHubCredentials(token=token, username=username)


def _env_number(name: str, cast, default):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise CLIError(f"{name} must be a number, got {raw!r}") from exc


def _build_config() -> PublishConfig:
    """Defaults with environment overrides."""
    defaults = PublishConfig()
    return dataclasses.replace(
        defaults,
        template_url=os.getenv("I4TOW_TEMPLATE_URL") or defaults.template_url,
        api_url=os.getenv("GITHUB_API_URL") or defaults.api_url,
        provisioning_delay=_env_number(
            "I4TOW_PROVISIONING_DELAY", float, defaults.provisioning_delay
        ),
        push_retry_delay=_env_number("I4TOW_PUSH_RETRY_DELAY", float, defaults.push_retry_delay),
        max_push_attempts=_env_number("I4TOW_MAX_PUSH_ATTEMPTS", int, defaults.max_push_attempts),
    )


async def _run_albums(
    directory: Path,
    credentials: GitHubCredentials,
    mode: PublishMode,
    config: PublishConfig,
) -> List[AlbumResult]:
    display = AlbumProgressDisplay(show_steps=not mode.dry_run)
    try:
        async with AlbumOrchestrator(config) as orchestrator:
            orchestrator.on(ALBUM_START, display.on_album_start)
            orchestrator.on(PROGRESS, display.on_progress)
            orchestrator.on(ALBUM_COMPLETE, display.on_album_complete)
            return await orchestrator.process_directory(directory, credentials, mode)
    finally:
        display.stop()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="i4tow",
        description="Create photo albums backed by GitHub repos.",
    )
    parser.add_argument(
        "directory",
        nargs="?",
        type=Path,
        default=Path.cwd(),
        help="Directory to process (default: current directory)",
    )
    parser.add_argument("-t", "--token", default=None, help="GitHub token (or set GITHUB_TOKEN env)")
    parser.add_argument(
        "-u",
        "--username",
        default=None,
        help="GitHub user or org (default: GITHUB_USERNAME env or git config user.name)",
    )
    parser.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        help="Preview what would be created without making changes",
    )
    parser.add_argument(
        "-s",
        "--single",
        action="store_true",
        help="Force single album mode (directory = one album)",
    )
    parser.add_argument(
        "-b",
        "--batch",
        action="store_true",
        help="Force batch mode (each subdirectory = one album)",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Load environment variables from this .env file",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logs")
    parser.add_argument("--silent", action="store_true", help="Disable logs")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Explicit log level (DEBUG/INFO/WARNING/ERROR)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"i4tow {__version__}",
    )
    return parser


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        used_env_file = args.env_file or _resolve_default_env_file()
        if used_env_file is not None:
            _load_env_file(Path(used_env_file))

        _setup_logging(debug=args.debug, silent=args.silent, log_level=args.log_level)

        credentials = _resolve_credentials(args.token, args.username)
        config = _build_config()

        directory = Path(args.directory).expanduser()
        if not directory.is_dir():
            raise CLIError(f"directory does not exist: {directory}")
    except CLIError as exc:
        render_error(str(exc), exc.hint)
        return 1

    mode = PublishMode(dry_run=args.dry_run, force_single=args.single, force_batch=args.batch)
    scanner = PhotoScanner()
    render_configuration_summary(
        {
            "Directory": str(directory),
            "Photos": len(scanner.list_photos(directory)),
            "Subdirs": len(scanner.list_subdirectories(directory)),
            "Username": credentials.username,
            "Mode": mode.label,
            "Template": config.template_label,
        },
        dry_run=mode.dry_run,
    )

    try:
        results = asyncio.run(_run_albums(directory, credentials, mode, config))
    except KeyboardInterrupt:
        print("Cancelled.", file=sys.stderr)
        return 130

    render_results(results, dry_run=mode.dry_run)
    return 0 if all(result.success for result in results) else 1


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()
