from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from .config import RunConfig, load_manifest
from .errors import SetupError
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import StepContext, run_pipeline
from .steps import (
    ApplyHomeConfigStep,
    CheckConnectionStep,
    CheckDependenciesStep,
    CloneWallpapersStep,
    ConfigureRepositoryStep,
    DeployDotfilesStep,
    InitHomeManagerStep,
    InstallAurHelperStep,
    InstallPackagesStep,
    SetupNixStep,
)

logger = logging.getLogger(__name__)

PROG = "arch-setup"

EPILOG = """\
examples:
  arch-setup                    # Run the setup
  arch-setup --dry-run          # Test without making changes
  arch-setup --verbose          # Run with detailed output
"""


def build_steps():
    # Order is the dependency order: checks, AUR helper, repositories,
    # packages, user config, nix, home-manager, then user overrides.
    return [
        CheckDependenciesStep(),
        CheckConnectionStep(),
        InstallAurHelperStep(),
        ConfigureRepositoryStep(),
        InstallPackagesStep(),
        DeployDotfilesStep(),
        CloneWallpapersStep(),
        SetupNixStep(),
        InitHomeManagerStep(),
        ApplyHomeConfigStep(),
    ]


class UsageError(Exception):
    """Bad command line. `arg` is the offending option when one is known."""

    def __init__(self, message: str, arg: Optional[str] = None) -> None:
        super().__init__(message)
        self.arg = arg


class _Parser(argparse.ArgumentParser):
    def error(self, message: str):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    p = _Parser(
        prog=PROG,
        description="Automated System Setup for Arch Linux",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    p.add_argument("--dry-run", action="store_true", help="Show what would be done without executing")
    p.add_argument("-v", "--verbose", action="store_true", help="Show detailed output")
    p.add_argument("--manifest", default=None, help="Alternate action tables (YAML)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to the setup log")
    return p


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse flags. --help exits 0 from inside argparse; anything else bad raises UsageError."""

    argv = sys.argv[1:] if argv is None else list(argv)
    try:
        args, unknown = build_parser().parse_known_args(argv)
    except UsageError as e:
        # A known flag given a value it does not take, e.g. --dry-run=yes.
        e.arg = next((a for a in argv if a.startswith("-") and "=" in a), None)
        raise
    if unknown:
        raise UsageError("unrecognized arguments", arg=unknown[0])
    return args


def run(config: RunConfig, *, manifest_path: Optional[str] = None, ctx: Optional[StepContext] = None) -> int:
    """Run every step once and map the result to an exit code."""

    if config.dry_run:
        logger.info("=== DRY RUN MODE ===")
        logger.info("No actual changes will be made\n")

    logger.info("A.S.S. - Arch Setup Script")

    if ctx is None:
        try:
            manifest = load_manifest(manifest_path)
        except SetupError as e:
            logger.error("%s", e)
            return 1
        ctx = StepContext(config=config, manifest=manifest)

    result = run_pipeline(steps=build_steps(), ctx=ctx)
    logger.debug("ran=%s skipped=%s", result.ran_steps, result.skipped_steps)

    if result.overall == "declined":
        logger.info("Aborted.")
        return 0
    if result.overall == "aborted":
        logger.error("Setup aborted at %s", result.aborted_at)
        return 1

    if config.dry_run:
        logger.info("\n=== DRY RUN COMPLETE ===")
    else:
        logger.info("\nSetup complete!")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    try:
        args = parse_args(argv)
    except UsageError as e:
        if e.arg:
            print(f"Unknown option: {e.arg}", file=sys.stderr)
        else:
            print(f"Invalid arguments: {e}", file=sys.stderr)
        print("Use --help for usage information", file=sys.stderr)
        return 1

    config = RunConfig(dry_run=bool(args.dry_run), verbose=bool(args.verbose))
    configure_logging(log_path=args.log, verbose=config.verbose)
    return run(config, manifest_path=args.manifest)


if __name__ == "__main__":
    raise SystemExit(main())
