"""Shared test fixtures for ingress-redirect-checker."""

import sys

import pytest
import structlog
from kubernetes import client as k8s

from redirect_checker.config import settings

SNIPPET = "nginx.ingress.kubernetes.io/configuration-snippet"


# ---------------------------------------------------------------------------
# Environment / settings fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings_env(monkeypatch):
    """Set minimal environment for Settings to load."""
    monkeypatch.setenv("REDIRECT_CHECKER_LOG_LEVEL", "debug")
    monkeypatch.setenv("REDIRECT_CHECKER_FAILURE_PAUSE_SECONDS", "0")


@pytest.fixture
def no_pause(monkeypatch):
    """Disable the pause after failed checks on the live settings object."""
    monkeypatch.setattr(settings, "failure_pause_seconds", 0.0)


# ---------------------------------------------------------------------------
# Singleton reset fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Reset module-level singletons and logging config between tests."""
    yield
    structlog.reset_defaults()
    mod = sys.modules.get("redirect_checker.k8s_client")
    if mod is not None:
        mod._k8s_client = None


# ---------------------------------------------------------------------------
# Ingress builders
# ---------------------------------------------------------------------------


def _rule(host, service):
    if service is None:
        return k8s.V1IngressRule(host=host)
    backend = k8s.V1IngressBackend(
        service=k8s.V1IngressServiceBackend(
            name=service, port=k8s.V1ServiceBackendPort(number=80)
        )
    )
    return k8s.V1IngressRule(
        host=host,
        http=k8s.V1HTTPIngressRuleValue(
            paths=[
                k8s.V1HTTPIngressPath(path="/", path_type="Prefix", backend=backend)
            ]
        ),
    )


@pytest.fixture
def make_ingress():
    """Factory for V1Ingress objects.

    ``rules`` is a list of (host, backend service) pairs.
    """

    def _make(
        name="web",
        namespace="default",
        rules=(("example.com", "web-svc"),),
        snippet=None,
        annotations=None,
    ):
        ann = dict(annotations or {})
        if snippet is not None:
            ann[SNIPPET] = snippet
        return k8s.V1Ingress(
            metadata=k8s.V1ObjectMeta(
                name=name, namespace=namespace, annotations=ann or None
            ),
            spec=k8s.V1IngressSpec(rules=[_rule(h, s) for h, s in rules]),
        )

    return _make
