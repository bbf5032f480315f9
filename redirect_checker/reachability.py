"""
Reachability checks for extracted redirect targets.

All requests go through one dedicated ``httpx.AsyncClient``; certificate
verification is disabled on that client only.
"""

from dataclasses import dataclass
from typing import Optional

import httpx
import structlog

from .config import settings
from .redirect_extractor import RedirectRule

logger = structlog.get_logger(__name__)


@dataclass
class CheckResult:
    """Outcome of probing one redirect target."""

    rule: RedirectRule
    source_url: str
    target_url: str
    reachable: bool
    status_code: Optional[int] = None
    error: Optional[str] = None


def build_source_url(rule: RedirectRule) -> str:
    """Full source URL, without the regex end anchor."""
    source = "http://" + rule.host + rule.source
    if source.endswith("$"):
        source = source[: -len("$")]
    return source


def build_target_url(rule: RedirectRule) -> str:
    """Absolute targets are kept, relative ones resolve against the rule host."""
    if rule.target.startswith(("http", "www")):
        return rule.target
    return "http://" + rule.host + "/" + rule.target.removeprefix("/")


class ReachabilityChecker:
    """Probes redirect targets with HTTP GET."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        require_ok_status: Optional[bool] = None,
    ):
        if client is None:
            client = httpx.AsyncClient(
                timeout=httpx.Timeout(settings.request_timeout_seconds),
                verify=settings.verify_tls,
                follow_redirects=settings.follow_redirects,
            )
        self._client = client
        if require_ok_status is None:
            require_ok_status = settings.require_ok_status
        self._require_ok_status = require_ok_status

    async def check(self, rule: RedirectRule) -> CheckResult:
        """GET the rule's target; any request error counts as unreachable."""
        source_url = build_source_url(rule)
        target_url = build_target_url(rule)
        result = CheckResult(
            rule=rule,
            source_url=source_url,
            target_url=target_url,
            reachable=False,
        )

        try:
            resp = await self._client.get(target_url)
        except Exception as exc:
            result.error = str(exc) or type(exc).__name__
            logger.debug("Target request failed", target=target_url, error=result.error)
            return result

        result.status_code = resp.status_code
        if self._require_ok_status:
            result.reachable = resp.status_code == 200
        else:
            result.reachable = True
        logger.debug(
            "Target checked",
            target=target_url,
            status_code=resp.status_code,
            reachable=result.reachable,
        )
        return result

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ReachabilityChecker":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
