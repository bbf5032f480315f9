"""Tests for ingress-redirect-checker configuration."""

from redirect_checker.config import Settings


class TestSettings:
    """Test Settings loads from environment."""

    def test_defaults(self):
        s = Settings()
        assert s.snippet_annotation == (
            "nginx.ingress.kubernetes.io/configuration-snippet"
        )
        assert s.require_ok_status is True
        assert s.verify_tls is False
        assert s.max_concurrency == 1

    def test_default_kubeconfig_in_home(self, monkeypatch, tmp_path):
        monkeypatch.delenv("REDIRECT_CHECKER_KUBECONFIG_PATH", raising=False)
        s = Settings()
        assert s.kubeconfig_path is None or s.kubeconfig_path.endswith(
            "/.kube/config"
        )

    def test_env_prefix(self, settings_env, monkeypatch):
        monkeypatch.setenv("REDIRECT_CHECKER_MAX_CONCURRENCY", "8")
        monkeypatch.setenv("REDIRECT_CHECKER_REQUIRE_OK_STATUS", "false")
        s = Settings()
        assert s.max_concurrency == 8
        assert s.require_ok_status is False
        assert s.failure_pause_seconds == 0.0

    def test_kubeconfig_override(self, monkeypatch):
        monkeypatch.setenv("REDIRECT_CHECKER_KUBECONFIG_PATH", "/tmp/kc")
        s = Settings()
        assert s.kubeconfig_path == "/tmp/kc"
