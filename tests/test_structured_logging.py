"""Tests for the structured logging baseline and event taxonomy."""

import logging

import pytest
from backend.app.core.logging import (
    _HANDLER_ATTR,
    EVENT_API_ERROR,
    EVENT_POST_CREATED,
    EVENT_POST_DELETED,
    EVENT_POST_UPDATED,
    EVENT_VALIDATION_FAILED,
    log_event,
    setup_logging,
)


class TestLogEventFormat:
    def test_log_event_emits_event_name_and_kwargs(
        self, caplog: pytest.LogCaptureFixture,
    ) -> None:
        test_logger = logging.getLogger("test.component")
        with caplog.at_level(logging.INFO):
            log_event(test_logger, "info", "my_event", foo="bar", count=42)
        assert "my_event: foo=bar count=42" in caplog.text

    def test_log_event_without_kwargs(
        self, caplog: pytest.LogCaptureFixture,
    ) -> None:
        test_logger = logging.getLogger("test.component")
        with caplog.at_level(logging.INFO):
            log_event(test_logger, "info", "bare_event")
        assert caplog.records[-1].getMessage() == "bare_event"

    def test_log_event_component_in_record(
        self, caplog: pytest.LogCaptureFixture,
    ) -> None:
        test_logger = logging.getLogger("backend.app.controllers.post_controller")
        with caplog.at_level(logging.INFO):
            log_event(test_logger, "info", "test_event")
        assert any(
            r.name == "backend.app.controllers.post_controller" for r in caplog.records
        )

    def test_log_event_warning_level(
        self, caplog: pytest.LogCaptureFixture,
    ) -> None:
        test_logger = logging.getLogger("test.warn")
        with caplog.at_level(logging.WARNING):
            log_event(test_logger, "warning", "warn_event", detail="x")
        assert caplog.records[0].levelname == "WARNING"

    def test_unknown_level_falls_back_to_info(
        self, caplog: pytest.LogCaptureFixture,
    ) -> None:
        test_logger = logging.getLogger("test.fallback")
        with caplog.at_level(logging.INFO):
            log_event(test_logger, "not_a_level", "fallback_event")
        assert caplog.records[0].levelname == "INFO"


class TestEventTaxonomy:
    def test_post_events_are_distinct(self) -> None:
        names = {
            EVENT_POST_CREATED,
            EVENT_POST_UPDATED,
            EVENT_POST_DELETED,
            EVENT_VALIDATION_FAILED,
            EVENT_API_ERROR,
        }
        assert len(names) == 5

    def test_event_names_are_snake_case(self) -> None:
        for name in (EVENT_POST_CREATED, EVENT_VALIDATION_FAILED, EVENT_API_ERROR):
            assert name == name.lower()
            assert " " not in name


class TestSetupLogging:
    def test_handler_added_once(self) -> None:
        root = logging.getLogger()
        setup_logging()
        setup_logging()
        ours = [h for h in root.handlers if getattr(h, _HANDLER_ATTR, False)]
        assert len(ours) == 1

    def test_sets_root_level(self) -> None:
        root = logging.getLogger()
        previous = root.level
        try:
            setup_logging(level=logging.DEBUG)
            assert root.level == logging.DEBUG
        finally:
            root.setLevel(previous)
