"""Tests for CLI commands."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

import headeraudit.cli as cli
from headeraudit.errors import NetworkError
from headeraudit.modules.audit import AuditOutcome
from headeraudit.modules.report import build
from headeraudit.modules.rules import FAIL, WARN, Finding

runner = CliRunner()


def clean_outcome(url: str) -> AuditOutcome:
    findings = [Finding(check="referrer-policy", severity=WARN, message="Referrer-Policy header is missing")]
    return AuditOutcome(url=url, report=build(url, findings))


def failing_outcome(url: str) -> AuditOutcome:
    findings = [
        Finding(
            check="csp-presence",
            severity=FAIL,
            message="Content-Security-Policy header is missing",
            remediation="Send a Content-Security-Policy header.",
        )
    ]
    return AuditOutcome(url=url, report=build(url, findings))


@pytest.fixture
def fake_audit(monkeypatch):
    """Replace the network pipeline with canned outcomes keyed by URL."""
    calls = {}
    outcomes = {}

    async def fake_audit_many(urls, settings, progress=None):
        calls["urls"] = list(urls)
        calls["settings"] = settings
        return [outcomes[url](url) for url in urls]

    monkeypatch.setattr(cli, "audit_many", fake_audit_many)
    return outcomes, calls


class TestAuditCommand:
    def test_clean_target_exits_zero(self, fake_audit):
        outcomes, _ = fake_audit
        outcomes["https://good.test/"] = clean_outcome

        result = runner.invoke(cli.app, ["audit", "https://good.test/"])

        assert result.exit_code == 0
        assert "Security header audit: https://good.test/" in result.stdout
        assert "WARN (1)" in result.stdout

    def test_failing_target_exits_one(self, fake_audit):
        outcomes, _ = fake_audit
        outcomes["https://bad.test/"] = failing_outcome

        result = runner.invoke(cli.app, ["audit", "https://bad.test/"])

        assert result.exit_code == 1
        assert "[csp-presence]" in result.stdout

    def test_fetch_error_exits_two(self, fake_audit):
        outcomes, _ = fake_audit
        outcomes["https://down.test/"] = lambda url: AuditOutcome(
            url=url, error=NetworkError(url, "connection refused")
        )

        result = runner.invoke(cli.app, ["audit", "https://down.test/"])

        assert result.exit_code == 2
        assert "Audit failed" in result.output
        assert "connection refused" in result.output

    def test_json_output_is_one_document(self, fake_audit):
        outcomes, _ = fake_audit
        outcomes["https://bad.test/"] = failing_outcome

        result = runner.invoke(cli.app, ["audit", "https://bad.test/", "--format", "json"])

        data = json.loads(result.stdout)
        assert data["url"] == "https://bad.test/"
        assert data["summary"] == {"fail": 1, "warn": 0, "info": 0}

    def test_json_batch_is_an_array(self, fake_audit):
        outcomes, _ = fake_audit
        outcomes["https://a.test/"] = clean_outcome
        outcomes["https://b.test/"] = failing_outcome

        result = runner.invoke(cli.app, ["audit", "https://a.test/", "https://b.test/", "-f", "json"])

        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert [item["url"] for item in data] == ["https://a.test/", "https://b.test/"]

    def test_options_reach_settings(self, fake_audit):
        outcomes, calls = fake_audit
        outcomes["https://good.test/"] = clean_outcome

        runner.invoke(
            cli.app,
            [
                "audit",
                "https://good.test/",
                "--timeout",
                "3",
                "--max-redirects",
                "2",
                "-c",
                "theme",
                "-c",
                "lang",
                "--insecure",
            ],
        )

        settings = calls["settings"]
        assert settings.timeout == 3.0
        assert settings.max_redirects == 2
        assert settings.non_session_cookies == frozenset({"theme", "lang"})
        assert settings.verify_tls is False

    def test_output_file(self, fake_audit, temp_dir: Path):
        outcomes, _ = fake_audit
        outcomes["https://good.test/"] = clean_outcome
        target = temp_dir / "report.json"

        result = runner.invoke(
            cli.app, ["audit", "https://good.test/", "-f", "json", "-o", str(target)]
        )

        assert result.exit_code == 0
        assert json.loads(target.read_text())["url"] == "https://good.test/"

    def test_invalid_configuration_exits_two(self, fake_audit, monkeypatch):
        monkeypatch.setenv("HEADERAUDIT_TIMEOUT", "later")

        result = runner.invoke(cli.app, ["audit", "https://good.test/"])

        assert result.exit_code == 2
        assert "Configuration error" in result.output
        assert "urls" not in fake_audit[1]

    def test_invalid_format_option_exits_two(self, fake_audit):
        result = runner.invoke(cli.app, ["audit", "https://good.test/", "--format", "xml"])

        assert result.exit_code == 2


class TestOtherCommands:
    def test_checks_lists_catalog(self):
        result = runner.invoke(cli.app, ["checks"])

        assert result.exit_code == 0
        for check_id in ("csp-presence", "hsts", "cookie-attributes", "tls-certificate"):
            assert check_id in result.stdout

    def test_config_path(self):
        result = runner.invoke(cli.app, ["config", "path"])

        assert result.exit_code == 0
        assert "config.yml" in result.stdout

    def test_config_show(self, monkeypatch):
        monkeypatch.setenv("HEADERAUDIT_FORMAT", "json")

        result = runner.invoke(cli.app, ["config"])

        assert result.exit_code == 0
        assert "HEADERAUDIT_FORMAT" in result.stdout
        assert "environment" in result.stdout

    def test_config_unknown_action(self):
        result = runner.invoke(cli.app, ["config", "reset"])

        assert result.exit_code == 2

    def test_version(self):
        result = runner.invoke(cli.app, ["version"])

        assert result.exit_code == 0
        assert result.stdout.startswith("headeraudit ")
