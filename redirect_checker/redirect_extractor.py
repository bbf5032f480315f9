"""
Extraction of NGINX redirect directives from Ingress annotations.

Only the ``rewrite ^<source> <target> redirect;`` form is recognised.
Each match is attributed to every rule of the Ingress that declares it,
with that rule's own host and backend service.
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional

import structlog

from .config import settings

logger = structlog.get_logger(__name__)

REWRITE_PATTERN = re.compile(r"\brewrite \^(.*?)\s+redirect;")


@dataclass
class RedirectRule:
    """A redirect declared in an Ingress configuration snippet."""

    source: str
    target: str
    host: str
    backend_service: str
    namespace: str
    ingress: str = ""


def parse_rewrites(snippet: str) -> list[tuple[str, str]]:
    """Return (source, target) pairs for every redirect rewrite in ``snippet``."""
    pairs = []
    for match in REWRITE_PATTERN.finditer(snippet):
        fields = match.group(1).split(" ")
        pairs.append((fields[0], fields[-1]))
    return pairs


def _backend_service(rule) -> str:
    """Name of the service behind the rule's first HTTP path, or ''."""
    http = rule.http
    if not http or not http.paths:
        return ""
    backend = http.paths[0].backend
    if not backend or not backend.service:
        return ""
    return backend.service.name or ""


def extract_redirects(
    ingresses: Iterable, annotation: Optional[str] = None
) -> List[RedirectRule]:
    """Build the ordered list of redirect rules declared across ``ingresses``."""
    annotation = annotation or settings.snippet_annotation
    redirects: List[RedirectRule] = []

    for ing in ingresses:
        meta = ing.metadata
        snippet = (meta.annotations or {}).get(annotation)
        if not snippet:
            continue

        pairs = parse_rewrites(snippet)
        if not pairs:
            logger.debug(
                "No redirect rewrites in snippet",
                ingress=meta.name,
                namespace=meta.namespace,
            )
            continue

        for rule in (ing.spec.rules if ing.spec else None) or []:
            if not rule.host:
                logger.debug(
                    "Skipping host-less rule",
                    ingress=meta.name,
                    namespace=meta.namespace,
                )
                continue
            backend = _backend_service(rule)
            for source, target in pairs:
                redirects.append(
                    RedirectRule(
                        source=source,
                        target=target,
                        host=rule.host,
                        backend_service=backend,
                        namespace=meta.namespace or "",
                        ingress=meta.name or "",
                    )
                )

    logger.info("Extracted redirects", count=len(redirects))
    return redirects
