"""Tests for structured log output."""

import logging

import pytest

from eventcare.core.logging import StructuredFormatter, audit_logger, record_context


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="eventcare.services.access",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Access denied",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_structured_line_carries_care_record_context() -> None:
    line = StructuredFormatter().format(
        make_record(user_id="u-1", action="access_denied", patient_id="p-1")
    )

    assert "level=INFO" in line
    assert "message=Access denied" in line
    assert "user_id=u-1" in line
    assert "patient_id=p-1" in line
    assert "event_id" not in line


def test_record_context_ignores_other_details() -> None:
    details = {"event_id": "e-1", "patient_id": None, "fields": ["first_name"]}

    assert record_context(details) == {"event_id": "e-1"}
    assert record_context(None) == {}


def test_audit_mirror_lifts_event_and_patient(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="audit"):
        audit_logger.log(
            "UPDATE",
            "ASSESSMENT",
            "u-1",
            "a-1",
            {"patient_id": "p-1", "version": 2},
        )

    record = caplog.records[-1]
    assert record.name == "audit"
    assert record.resource_id == "a-1"
    assert record.patient_id == "p-1"
    assert not hasattr(record, "event_id")
