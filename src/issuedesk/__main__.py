"""CLI entry point for issuedesk."""

import argparse
from pathlib import Path

from . import __version__
from .config import Settings
from .logging import setup_logging


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="issuedesk",
        description="Browse GitHub issues with private notes and status tracking",
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Directory containing config.yml (default: ~/.config/issuedesk)",
    )
    parser.add_argument(
        "--init-config",
        action="store_true",
        help="Write a default config.yml and exit",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="With --init-config, overwrite an existing config.yml",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args()


def main() -> None:
    """Main entry point."""
    args = parse_args()

    # Build settings from CLI args
    settings_kwargs: dict = {}
    if args.config_dir:
        settings_kwargs["config_dir"] = args.config_dir
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file

    settings = Settings(**settings_kwargs)

    setup_logging(settings.verbose, settings.log_file)

    if args.init_config:
        from .cli.init_config import run_init_config
        from .services import ConfigService

        exit_code = run_init_config(ConfigService(settings.config_dir), force=args.force)
        raise SystemExit(exit_code)

    # Import here to keep --help and --init-config fast
    from .app import run

    run(settings)


if __name__ == "__main__":
    main()
