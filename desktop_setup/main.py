from __future__ import annotations

import argparse
import dataclasses
import logging
from typing import List, Mapping, Optional

from .catalog import Catalog, load_catalog
from .config import resolve_config
from .lib.system import PreflightError, detect_debian_version
from .logging_utils import configure_logging, log_success
from .pipeline import PipelineResult, RunContext, StepFailed, run_pipeline

logger = logging.getLogger(__name__)


def _log_reminders(reminders: List[str]) -> None:
    if not reminders:
        return
    logger.info("REMEMBER:")
    for n, text in enumerate(reminders, start=1):
        logger.info("%d. %s", n, text)


def run(
    *,
    log_path: Optional[str] = None,
    dry_run: bool = False,
    environ: Optional[Mapping[str, str]] = None,
    catalog: Optional[Catalog] = None,
) -> int:
    """Provision this machine; returns the process exit status."""

    actual_log_path = configure_logging(log_path=log_path)
    logger.info("Starting Debian system setup")
    logger.info("Log file: %s", actual_log_path)

    config = resolve_config(environ, dry_run=dry_run)

    try:
        version = detect_debian_version(dry_run=dry_run)
    except PreflightError as e:
        logger.error("%s", e)
        return 1
    logger.info("Detected Debian version: %s", version)
    config = dataclasses.replace(config, debian_version=version)

    if catalog is None:
        catalog = load_catalog()
    ctx = RunContext(config=config)

    try:
        result: PipelineResult = run_pipeline(ctx=ctx, steps=catalog.steps)
    except StepFailed as e:
        logger.error(
            "Setup failed at step %d (%s): %s. Check %s for details.",
            e.index,
            e.step_id,
            e.cause,
            actual_log_path,
        )
        # Steps that finished before the failure stay applied.
        _log_reminders(ctx.notices)
        return 1

    if result.best_effort_failures:
        logger.warning(
            "Debian system setup completed with failed steps: %s",
            ", ".join(result.best_effort_failures),
        )
    else:
        log_success(logger, "Debian system setup completed successfully!")

    _log_reminders([*ctx.notices, *catalog.reminders])
    logger.info("Setup log saved to: %s", actual_log_path)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="debian-desktop-setup")
    p.add_argument("--log", default=None, help="Path to run log (default /tmp/debian_setup_<timestamp>.log)")
    p.add_argument("--dry-run", action="store_true", help="Log commands without executing them")

    args = p.parse_args(argv)

    return run(log_path=args.log, dry_run=bool(args.dry_run))
