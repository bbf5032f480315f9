"""
Configuration for Ingress Redirect Checker.
"""

import os
from typing import Optional

from pydantic_settings import BaseSettings


def _default_kubeconfig() -> Optional[str]:
    home = os.path.expanduser("~")
    if not home or home == "~":
        return None
    return os.path.join(home, ".kube", "config")


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Kubernetes
    # Falls back to in-cluster config when the file is missing
    kubeconfig_path: Optional[str] = _default_kubeconfig()

    # Annotation scanned for rewrite directives
    snippet_annotation: str = "nginx.ingress.kubernetes.io/configuration-snippet"

    # Reachability
    # False: any response without a transport error counts as reachable
    require_ok_status: bool = True
    verify_tls: bool = False
    follow_redirects: bool = True
    request_timeout_seconds: float = 10.0

    # Pause after each failed check
    failure_pause_seconds: float = 5.0

    # 1 keeps checks sequential and in extraction order
    max_concurrency: int = 1

    log_level: str = "info"

    class Config:
        env_prefix = "REDIRECT_CHECKER_"


settings = Settings()
