"""
CLI entry point for the migrate and info commands.

migrate:
  Pre-flight - expiry gate, endpoint parsing
  Probe      - print source and target identity, validate the target
  Mirror     - create or update every source function on the target

info:
  Pre-flight and probe only; nothing is listed or deployed.

Every failure is fatal: the error is logged and the process exits 1.
In --dry-run mode the target is probed but never written to.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .client import GatewayClient, GatewayError
from .config import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_NAMESPACE,
    DEFAULT_SOURCE_URL,
    DEFAULT_TARGET_URL,
    DEFAULT_TIMEOUT,
    ConfigError,
    load_config,
    parse_endpoint,
    parse_expiry,
    validate_name,
)
from .gate import ToolExpiredError, check_expiry
from .logging_setup import LOG_DIR, setup_logging
from .mirror import mirror
from .probe import IncompatibleTargetError, format_cluster_info, probe, validate_target

__all__ = ["main"]

logger = logging.getLogger(__name__)

BANNER = "fn-migrate. Copyright OpenFaaS Ltd."


# ------------------------------------------------------------------
# Argument parsing
# ------------------------------------------------------------------

def _parse_args(argv: list[str] | None, command: str) -> argparse.Namespace:
    if command == "info":
        description = "Show source and target gateway details and check the target."
    else:
        description = (
            "Copy every function in the working namespace from the source "
            "gateway to the target gateway, creating or updating each one."
        )
    parser = argparse.ArgumentParser(prog=f"fn-migrate {command}", description=description)
    parser.add_argument(
        "-source", "--source",
        dest="source",
        default=None,
        help=f"Originating gateway address (default: {DEFAULT_SOURCE_URL})",
    )
    parser.add_argument(
        "-target", "--target",
        dest="target",
        default=None,
        help=f"Target gateway address (default: {DEFAULT_TARGET_URL})",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML config file (default: config/config.yaml if present)",
    )
    parser.add_argument(
        "--expires",
        default=None,
        help="Refuse to run after this date (YYYY-MM-DD)",
    )
    if command == "migrate":
        parser.add_argument(
            "-dry-run", "--dry-run",
            dest="dry_run",
            action="store_true",
            help="Print the functions that would be deployed without touching the target",
        )
        parser.add_argument(
            "--namespace", "-n",
            default=None,
            help=f"Namespace to copy functions from (default: {DEFAULT_NAMESPACE})",
        )
    parser.add_argument(
        "--log-dir",
        default=LOG_DIR,
        help="Directory for log files (default: logs/)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (debug) logging",
    )
    return parser.parse_args(argv)


# ------------------------------------------------------------------
# Main
# ------------------------------------------------------------------

def _run(args: argparse.Namespace, command: str) -> None:
    if args.config:
        cfg = load_config(args.config)
    else:
        cfg = load_config(DEFAULT_CONFIG_PATH, required=False)

    expires = parse_expiry(args.expires) if args.expires else cfg.get("expires")
    check_expiry(expires)

    source_url = args.source or (cfg.get("source") or {}).get("url") or DEFAULT_SOURCE_URL
    target_url = args.target or (cfg.get("target") or {}).get("url") or DEFAULT_TARGET_URL
    source_ep = parse_endpoint(source_url, "source")
    target_ep = parse_endpoint(target_url, "target")

    namespace = getattr(args, "namespace", None) or cfg.get("namespace") or DEFAULT_NAMESPACE
    validate_name(namespace, "namespace")

    timeout = cfg.get("timeout") or DEFAULT_TIMEOUT
    source = GatewayClient(source_ep, timeout=timeout)
    target = GatewayClient(target_ep, timeout=timeout)
    logger.debug("Source: %r", source_ep)
    logger.debug("Target: %r", target_ep)

    print(format_cluster_info("Source", probe(source)))
    target_info = probe(target)
    print(format_cluster_info("Target", target_info))
    validate_target(target_info)

    if command == "info":
        print("Target cluster is compatible.")
        return

    dry_run = args.dry_run

    if dry_run:
        print("Mode: DRY RUN (no changes will be made)")
        print()

    results = mirror(source, target, namespace=namespace, dry_run=dry_run)

    print()
    if dry_run:
        print(f"Dry run: {len(results)} function(s) would be deployed")
    else:
        created = sum(1 for r in results if r.action == "create")
        updated = sum(1 for r in results if r.action == "update")
        print(f"Done: {len(results)} function(s) - {created} created, {updated} updated")


def main(argv: list[str] | None = None, command: str = "migrate") -> None:
    args = _parse_args(argv, command)

    try:
        log_path = setup_logging(verbose=args.verbose, log_prefix=command, log_dir=args.log_dir)
    except OSError as exc:
        # Logging is not available yet
        print(f"Error: cannot write log file in {args.log_dir}: {exc}", file=sys.stderr)
        sys.exit(1)
    logger.debug("Logging to %s", log_path)

    print(BANNER)
    print()

    try:
        _run(args, command)
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        sys.exit(1)
    except ToolExpiredError as exc:
        logger.error("%s", exc)
        sys.exit(1)
    except IncompatibleTargetError as exc:
        logger.error("%s", exc)
        sys.exit(1)
    except GatewayError as exc:
        logger.error("Gateway request failed: %s", exc)
        sys.exit(1)
