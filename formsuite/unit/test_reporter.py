import json

from formsuite.ui_testing.framework import reporter
from formsuite.ui_testing.framework.reporter import (
    UNAVAILABLE,
    VerificationReport,
    attach_report,
    build_verification_report,
)
from formsuite.unit.fake_browser import INPUTS_URL


def test_report_carries_page_context(session):
    session.url = INPUTS_URL
    session.page.title = "The Internet"

    report = build_verification_report("value should match", "456", "123", session)

    assert report.to_dict() == {
        "message": "value should match",
        "expected": "456",
        "actual": "123",
        "url": INPUTS_URL,
        "title": "The Internet",
    }


def test_unreadable_page_context_does_not_mask_failure(session, monkeypatch):
    def broken():
        raise RuntimeError("page crashed")

    monkeypatch.setattr(session, "current_url", broken)
    monkeypatch.setattr(session, "current_title", broken)

    report = build_verification_report("field should be empty", "", "5", session)

    assert report.url == UNAVAILABLE
    assert report.title == UNAVAILABLE
    assert report.actual == "5"


def test_attach_report_sends_json(monkeypatch):
    calls = []
    monkeypatch.setattr(
        reporter.allure, "attach", lambda body, name, attachment_type: calls.append((body, name))
    )
    report = VerificationReport("m", "a", "b", "https://forms.test", "T")

    attach_report(report)

    body, name = calls[0]
    assert name == "Verification Failure"
    assert json.loads(body)["url"] == "https://forms.test"
