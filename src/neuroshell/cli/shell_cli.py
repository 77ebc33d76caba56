#!/usr/bin/env python3
"""
CLI entry point for neuroshell (neuro command).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from neuroshell import __version__
from neuroshell.cli.commands import command_registry, load_all_commands
from neuroshell.config import DEFAULTS, get_config_manager
from neuroshell.config.config import coerce_value
from neuroshell.core.datamodels import RunResult
from neuroshell.core.exceptions import ScriptLoadError
from neuroshell.engine.shell import Shell

logger = logging.getLogger(__name__)

RC_FILE_NAME = ".neurorc"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str, log_file: str | None = None) -> None:
    """Configure the root logger once for the process."""
    numeric = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric, int):
        numeric = logging.WARNING
    logging.basicConfig(
        level=numeric,
        format=LOG_FORMAT,
        filename=log_file,
        force=True,
    )


def find_rc_file(explicit: str | None = None) -> Path | None:
    """Locate the startup script: explicit path, then ./.neurorc, then ~/.neurorc."""
    if explicit:
        path = Path(explicit).expanduser()
        return path if path.is_file() else None
    for candidate in (Path.cwd() / RC_FILE_NAME, Path.home() / RC_FILE_NAME):
        if candidate.is_file():
            return candidate
    return None


def expand_command_string(text: str) -> str:
    """Turn literal `\\n` separators from -c into line breaks.

    An escaped `\\\\n` stays as a literal `\\n` for directives such as \\echo.
    """
    placeholder = "\x00NEWLINE\x00"
    text = text.replace("\\\\n", placeholder)
    text = text.replace("\\n", "\n")
    return text.replace(placeholder, "\\n")


def exit_status(shell: Shell, result: RunResult) -> int:
    if result.exited:
        return shell.exit_code
    return 0 if result.success else 1


def print_config():
    """Print current configuration."""
    cfg_mgr = get_config_manager()
    settings = cfg_mgr.list_settings()

    print(f"Config file: {cfg_mgr.CONFIG_FILE}")

    if settings:
        print("\nCustom settings:")
        for key, value in settings.items():
            print(f"  {key}: {value}")

    print("\nDefaults (used when not set):")
    for key, value in DEFAULTS.items():
        if key not in settings:
            print(f"  {key}: {value}")

    print("\nSet with: neuro --set-config key=value")
    print("Available keys: max_stack_depth, interpolation_max_passes, default_command,")
    print("                echo_commands, simple, log_level, test_mode, rc_file,")
    print("                no_rc, history_file")
    print()


def build_parser(cfg) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="neuro",
        description="Shell for backslash-directive scripts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Config file: {get_config_manager().CONFIG_FILE}

Examples:
    neuro                                  # Interactive shell
    neuro script.neuro                     # Run a script
    neuro -c '\\set[name=World]\\n\\echo Hello ${{name}}'
    neuro --test-mode script.neuro         # Reproducible dates and session id
    neuro --set-config max_stack_depth=500
        """,
    )
    parser.add_argument("script", nargs="?", help="Script file to run in batch mode")
    parser.add_argument("-c", "--command", metavar="COMMANDS",
                        help="Run directives (separate lines with a literal \\n) and exit")
    parser.add_argument("--test-mode", action="store_true", default=cfg.get("test_mode"),
                        help="Freeze time-based variables for reproducible output")
    parser.add_argument("--no-rc", action="store_true", default=cfg.get("no_rc"),
                        help=f"Do not run {RC_FILE_NAME} at startup")
    parser.add_argument("--rc-file", metavar="FILE", default=cfg.get("rc_file"),
                        help=f"Startup script (default: ./{RC_FILE_NAME} or ~/{RC_FILE_NAME})")
    parser.add_argument("--simple", action="store_true", default=cfg.get("simple"),
                        help="Use simple REPL (no prompt_toolkit features)")
    parser.add_argument("--log-level", default=cfg.get("log_level"),
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        type=str.upper,
                        help=f"Logging level (default: {cfg.get('log_level')})")
    parser.add_argument("--log-file", metavar="FILE",
                        help="Write logs to a file instead of stderr")
    parser.add_argument("--version", action="version", version=f"neuroshell {__version__}")

    # Config management
    parser.add_argument("--config", action="store_true",
                        help="Show current configuration")
    parser.add_argument("--set-config", metavar="KEY=VALUE",
                        help="Set a config value")
    parser.add_argument("--unset-config", metavar="KEY",
                        help="Unset a config value (reset to default)")
    return parser


def main(argv: list[str] | None = None):
    """Main entry point for the neuro CLI."""
    cfg_mgr = get_config_manager()
    cfg = cfg_mgr.config

    parser = build_parser(cfg)
    args = parser.parse_args(argv)

    if args.config:
        print_config()
        return

    if args.set_config:
        try:
            key, value = args.set_config.split("=", 1)
            key = key.strip()
            cfg_mgr.set(key, coerce_value(key, value))
            print(f"Set {key} = {cfg_mgr.get(key)}")
            print(f"Saved to {cfg_mgr.CONFIG_FILE}")
        except ValueError as e:
            print(f"Error: {e}")
            sys.exit(1)
        return

    if args.unset_config:
        try:
            cfg_mgr.unset(args.unset_config)
            print(f"Unset {args.unset_config}")
            print(f"Saved to {cfg_mgr.CONFIG_FILE}")
        except ValueError as e:
            print(f"Error: {e}")
            sys.exit(1)
        return

    setup_logging(args.log_level, args.log_file)
    load_all_commands()

    shell = Shell(command_registry, config=cfg, test_mode=args.test_mode)

    # Batch modes
    if args.command is not None:
        result = shell.execute(expand_command_string(args.command))
        sys.exit(exit_status(shell, result))

    if args.script:
        try:
            result = shell.run_script(args.script)
        except ScriptLoadError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        sys.exit(exit_status(shell, result))

    # Interactive mode
    if not args.no_rc:
        rc_file = find_rc_file(args.rc_file)
        if rc_file is not None:
            logger.info(f"Running startup script {rc_file}")
            try:
                result = shell.run_script(rc_file)
            except ScriptLoadError as e:
                print(f"Warning: {e}", file=sys.stderr)
            else:
                if result.exited:
                    sys.exit(shell.exit_code)

    if args.simple or not sys.stdin.isatty():
        from neuroshell.cli._simple_repl import repl
    else:
        from neuroshell.cli._repl import repl

    sys.exit(repl(shell, cfg_mgr.history_file))


if __name__ == "__main__":
    main()
