"""Tests for post body validation (title/content rules)."""

import logging

import pytest
from backend.app.core.errors import ValidationFailedError
from backend.app.services.validation import (
    CONTENT_REQUIRED,
    TITLE_REQUIRED,
    TITLE_TOO_LONG,
    collect_post_errors,
    validate_post_data,
)

# ---------------------------------------------------------------------------
# Title rules
# ---------------------------------------------------------------------------


class TestTitle:
    @pytest.mark.parametrize("title", [None, "", "   ", "\n\t"])
    def test_empty_title_rejected(self, title: str | None) -> None:
        errors = collect_post_errors({"title": title, "content": "Body"})
        assert errors == {"title": TITLE_REQUIRED}

    def test_missing_title_rejected(self) -> None:
        errors = collect_post_errors({"content": "Body"})
        assert errors == {"title": TITLE_REQUIRED}

    def test_non_string_title_rejected(self) -> None:
        errors = collect_post_errors({"title": 123, "content": "Body"})
        assert errors["title"] == TITLE_REQUIRED

    def test_title_at_limit_accepted(self) -> None:
        assert collect_post_errors({"title": "a" * 255, "content": "Body"}) == {}

    def test_title_over_limit_rejected_without_content_error(self) -> None:
        errors = collect_post_errors({"title": "a" * 256, "content": "Body"})
        assert errors == {"title": TITLE_TOO_LONG}
        assert "content" not in errors

    def test_length_counts_characters_not_bytes(self) -> None:
        # 255 multi-byte characters is still within the limit
        assert collect_post_errors({"title": "é" * 255, "content": "Body"}) == {}

    def test_too_long_message_mentions_limit(self) -> None:
        assert "255" in TITLE_TOO_LONG


# ---------------------------------------------------------------------------
# Content rules
# ---------------------------------------------------------------------------


class TestContent:
    @pytest.mark.parametrize("content", [None, "", "  "])
    def test_empty_content_rejected(self, content: str | None) -> None:
        errors = collect_post_errors({"title": "Hello", "content": content})
        assert errors == {"content": CONTENT_REQUIRED}

    def test_missing_content_rejected(self) -> None:
        assert collect_post_errors({"title": "Hello"}) == {"content": CONTENT_REQUIRED}


# ---------------------------------------------------------------------------
# Accumulate-then-report
# ---------------------------------------------------------------------------


class TestAccumulation:
    def test_missing_both_yields_both_entries(self) -> None:
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_post_data({})
        assert exc_info.value.errors == {
            "title": TITLE_REQUIRED,
            "content": CONTENT_REQUIRED,
        }

    def test_long_title_and_empty_content_both_reported(self) -> None:
        errors = collect_post_errors({"title": "x" * 300, "content": ""})
        assert errors == {"title": TITLE_TOO_LONG, "content": CONTENT_REQUIRED}

    def test_valid_body_passes(self) -> None:
        validate_post_data({"title": "Hello", "content": "World"})

    def test_failure_is_422_with_details(self) -> None:
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_post_data({"title": "", "content": "x"})
        err = exc_info.value
        assert err.status_code == 422
        assert err.message == "Validation failed"
        assert err.details == {"title": TITLE_REQUIRED}

    def test_failure_logs_field_names_only(
        self, caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.INFO), pytest.raises(ValidationFailedError):
            validate_post_data({"title": "", "content": ""})
        assert "validation_failed" in caplog.text
        assert "fields=content,title" in caplog.text
