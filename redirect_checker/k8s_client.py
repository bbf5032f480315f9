"""
Kubernetes client wrapper for Ingress Redirect Checker.

Read-only access: the checker only ever lists Ingress objects.
"""

import asyncio
import os
from typing import List, Optional

import structlog
from kubernetes import client, config
from kubernetes.client.rest import ApiException

from .config import settings

logger = structlog.get_logger(__name__)


class ClusterAccessError(RuntimeError):
    """Cluster configuration could not be loaded or the API call failed."""


class K8sClient:
    """
    Kubernetes client used to snapshot Ingress objects.

    An explicit ``kubeconfig_path`` must load. Without one, the configured
    default path is used when present, otherwise in-cluster config.
    """

    def __init__(self, kubeconfig_path: Optional[str] = None):
        try:
            if kubeconfig_path:
                config.load_kube_config(config_file=kubeconfig_path)
            elif settings.kubeconfig_path and os.path.exists(
                settings.kubeconfig_path
            ):
                config.load_kube_config(config_file=settings.kubeconfig_path)
            else:
                logger.warning(
                    "Kubeconfig not found, trying in-cluster config",
                    path=settings.kubeconfig_path,
                )
                config.load_incluster_config()
        except Exception as exc:
            raise ClusterAccessError(
                f"Failed to load cluster configuration: {exc}"
            ) from exc

        self.kubeconfig_path = kubeconfig_path
        self.networking_v1 = client.NetworkingV1Api()

    async def list_ingresses(self) -> List[client.V1Ingress]:
        """List Ingress objects across all namespaces in one call."""
        try:
            resp = await asyncio.to_thread(
                self.networking_v1.list_ingress_for_all_namespaces
            )
        except ApiException as e:
            logger.error("Failed to list ingresses", status=e.status, error=str(e))
            raise ClusterAccessError(
                f"Failed to list ingresses: {e.status} {e.reason}"
            ) from e
        except Exception as e:
            logger.error("Failed to list ingresses", error=str(e))
            raise ClusterAccessError(f"Failed to list ingresses: {e}") from e

        items = resp.items or []
        logger.info("Listed ingresses", count=len(items))
        return items


# ---------------------------------------------------------------------------
# Singleton
# ---------------------------------------------------------------------------

_k8s_client: Optional[K8sClient] = None


def get_k8s_client(kubeconfig_path: Optional[str] = None) -> K8sClient:
    """Get or create K8sClient singleton.

    A kubeconfig path that differs from the one the singleton was built
    with is rejected.
    """
    global _k8s_client
    if _k8s_client is None:
        _k8s_client = K8sClient(kubeconfig_path=kubeconfig_path)
    elif kubeconfig_path and kubeconfig_path != _k8s_client.kubeconfig_path:
        raise ValueError(
            f"K8sClient already configured with {_k8s_client.kubeconfig_path!r}"
        )
    return _k8s_client
