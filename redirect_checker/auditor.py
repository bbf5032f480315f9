"""
Redirect audit pipeline.

Snapshot the cluster's Ingresses, extract redirect rules, probe every
target and print a block for each one that is unreachable.
"""

import asyncio
import sys
from typing import Optional, TextIO

import structlog

from .config import settings
from .reachability import CheckResult, ReachabilityChecker
from .redirect_extractor import extract_redirects

logger = structlog.get_logger(__name__)


def format_failure(result: CheckResult) -> str:
    """Human-readable report block for an unreachable redirect."""
    rule = result.rule
    return (
        f"🔴 Source: {result.source_url} \n"
        f"😔 Target: {result.target_url}\n"
        f"Resource: {rule.backend_service}\n"
        f"Namespace: {rule.namespace}\n"
        f"Ingress: {rule.ingress}\n"
    )


class RedirectAuditor:
    """Runs the list -> extract -> check pipeline once."""

    def __init__(
        self,
        k8s,
        checker: ReachabilityChecker,
        out: Optional[TextIO] = None,
    ):
        self._k8s = k8s
        self._checker = checker
        self._out = out

    async def run(self) -> list[CheckResult]:
        """Check every redirect; cluster errors propagate, HTTP errors do not."""
        ingresses = await self._k8s.list_ingresses()
        rules = extract_redirects(ingresses)
        sem = asyncio.Semaphore(max(1, settings.max_concurrency))

        async def _check_with_limit(rule):
            async with sem:
                result = await self._checker.check(rule)
                if not result.reachable:
                    self.report(result)
                    if settings.failure_pause_seconds > 0:
                        await asyncio.sleep(settings.failure_pause_seconds)
                return result

        results = await asyncio.gather(*[_check_with_limit(r) for r in rules])

        failed = sum(1 for r in results if not r.reachable)
        logger.info(
            "Redirect audit complete",
            ingresses=len(ingresses),
            checked=len(results),
            failed=failed,
        )
        return list(results)

    def report(self, result: CheckResult) -> None:
        out = self._out or sys.stdout
        print(format_failure(result), file=out)
        logger.debug(
            "Redirect target unreachable",
            source=result.source_url,
            target=result.target_url,
            namespace=result.rule.namespace,
            status_code=result.status_code,
            error=result.error,
        )
