"""Command-line entrypoint for Ingress Redirect Checker."""

import argparse
import asyncio
import logging
import sys
from typing import Optional

import structlog

from . import __version__
from .auditor import RedirectAuditor
from .config import settings
from .k8s_client import ClusterAccessError, get_k8s_client
from .reachability import ReachabilityChecker

logger = structlog.get_logger(__name__)


def configure_logging(level: str) -> None:
    """Send structlog output to stderr so stdout carries only the report."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ingress-redirect-checker",
        description="Report unreachable NGINX redirect targets declared on Ingresses",
    )
    parser.add_argument(
        "--kubeconfig",
        default=None,
        help=(
            "(optional) absolute path to the kubeconfig file "
            f"(default: {settings.kubeconfig_path or 'in-cluster config'})"
        ),
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


async def run(kubeconfig: Optional[str] = None) -> int:
    """Connect, audit once, return the process exit code."""
    try:
        k8s = get_k8s_client(kubeconfig_path=kubeconfig)
        async with ReachabilityChecker() as checker:
            await RedirectAuditor(k8s, checker).run()
    except ClusterAccessError as exc:
        logger.error("Redirect audit aborted", error=str(exc))
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(settings.log_level)
    return asyncio.run(run(args.kubeconfig))


if __name__ == "__main__":
    sys.exit(main())
