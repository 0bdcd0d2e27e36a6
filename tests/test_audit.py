"""Tests for the audit pipeline."""

import asyncio

import httpx
import pytest
import respx
from httpx import Response

from headeraudit.config import AuditSettings
from headeraudit.errors import InvalidTargetError, NetworkError
from headeraudit.modules.audit import (
    EXIT_FAIL_FINDINGS,
    EXIT_FATAL,
    EXIT_OK,
    AuditOutcome,
    audit_many,
    audit_url,
    overall_exit_code,
)
from headeraudit.modules.audit import runner
from headeraudit.modules.report import build

HARDENED_HEADERS = [
    ("Content-Security-Policy", "default-src 'self'"),
    ("X-Content-Type-Options", "nosniff"),
    ("Strict-Transport-Security", "max-age=31536000; includeSubDomains"),
]


class TestAuditURL:
    @respx.mock
    async def test_hardened_site_is_clean(self):
        respx.get("https://good.test/").mock(return_value=Response(200, headers=HARDENED_HEADERS))

        report = await audit_url("https://good.test/")

        assert report.url == "https://good.test/"
        assert report.summary["fail"] == 0
        assert report.exit_code == EXIT_OK

    @respx.mock
    async def test_bare_site_fails(self):
        respx.get("https://bare.test/").mock(return_value=Response(200))

        report = await audit_url("https://bare.test/")

        failed = {f.check for f in report.findings if f.severity == "fail"}
        assert {"csp-presence", "content-type-options", "hsts"} <= failed
        assert report.exit_code == EXIT_FAIL_FINDINGS

    @respx.mock
    async def test_downgrading_redirect_chain(self):
        respx.get("http://chain.test/").mock(
            return_value=Response(301, headers={"Location": "https://chain.test/"})
        )
        respx.get("https://chain.test/").mock(
            return_value=Response(302, headers={"Location": "http://chain.test/landing"})
        )
        respx.get("http://chain.test/landing").mock(return_value=Response(200, headers=HARDENED_HEADERS))

        report = await audit_url("http://chain.test/")

        mixed = [f for f in report.findings if f.check == "mixed-content"]
        assert len(mixed) == 1
        assert mixed[0].severity == "fail"

    @respx.mock
    async def test_report_url_is_the_audited_url(self):
        respx.get("https://good.test/").mock(return_value=Response(200, headers=HARDENED_HEADERS))

        report = await audit_url("  https://good.test/ \n")

        assert report.url == "https://good.test/"

    async def test_fetch_errors_propagate(self):
        with pytest.raises(InvalidTargetError):
            await audit_url("not a url")


class TestAuditMany:
    @respx.mock
    async def test_outcomes_keep_input_order(self):
        respx.get("https://good.test/").mock(return_value=Response(200, headers=HARDENED_HEADERS))
        respx.get("https://down.test/").mock(side_effect=httpx.ConnectError("refused"))
        respx.get("https://bare.test/").mock(return_value=Response(200))
        messages = []

        outcomes = await audit_many(
            ["https://good.test/", "https://down.test/", "https://bare.test/"],
            AuditSettings(concurrency=2),
            progress=messages.append,
        )

        assert [o.url for o in outcomes] == [
            "https://good.test/",
            "https://down.test/",
            "https://bare.test/",
        ]
        assert [o.exit_code for o in outcomes] == [EXIT_OK, EXIT_FATAL, EXIT_FAIL_FINDINGS]
        assert isinstance(outcomes[1].error, NetworkError)
        assert overall_exit_code(outcomes) == EXIT_FATAL
        assert any(message.startswith("! [https://down.test/] failed") for message in messages)
        assert sum(message.startswith("✓") for message in messages) == 2

    @respx.mock
    async def test_undecodable_target_does_not_sink_the_batch(self):
        respx.get("https://ok.test/").mock(return_value=Response(200, headers=HARDENED_HEADERS))
        respx.get("https://gz.test/").mock(
            return_value=Response(
                200, headers={"Content-Encoding": "gzip"}, content=b"not gzip at all"
            )
        )

        outcomes = await audit_many(["https://ok.test/", "https://gz.test/"])

        assert outcomes[0].report is not None
        assert outcomes[0].exit_code == EXIT_OK
        assert isinstance(outcomes[1].error, NetworkError)
        assert overall_exit_code(outcomes) == EXIT_FATAL

    async def test_concurrency_is_bounded(self, monkeypatch):
        running = 0
        peak = 0

        async def fake_audit_url(url, settings):
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0.01)
            running -= 1
            return build(url, [])

        monkeypatch.setattr(runner, "audit_url", fake_audit_url)

        outcomes = await audit_many([f"https://{i}.test/" for i in range(6)], AuditSettings(concurrency=2))

        assert len(outcomes) == 6
        assert peak == 2

    async def test_empty_batch(self):
        assert await audit_many([]) == []


class TestExitCodes:
    def test_overall_exit_code(self):
        clean = AuditOutcome(url="a", report=build("a", []))

        assert overall_exit_code([]) == EXIT_OK
        assert overall_exit_code([clean]) == EXIT_OK
        assert overall_exit_code([clean, AuditOutcome(url="b", error=NetworkError("b", "down"))]) == (
            EXIT_FATAL
        )
