"""Tests for text redaction."""

from src.utils.redaction import REDACTED, sanitize_text


def test_production_always_redacts():
    assert sanitize_text("nothing sensitive", "production") == REDACTED
    assert sanitize_text("", "production") == REDACTED


def test_masks_email_phone_and_secret():
    out = sanitize_text("contact a@b.com or 123-456-7890, apikey ABC", "development")
    assert "[EMAIL]" in out
    assert "[PHONE]" in out
    assert "apikey [SECRET]" in out
    assert "a@b.com" not in out


def test_bearer_token_masked():
    out = sanitize_text("Authorization: Bearer eyJhbGciOi.abc-def", "test")
    assert out == "Authorization: Bearer [SECRET]"


def test_truncates_to_512():
    assert len(sanitize_text("x" * 2000, "development")) == 512


def test_empty_input():
    assert sanitize_text("", "development") == ""
    assert sanitize_text(None, "development") == ""


def test_phone_needs_word_boundaries():
    assert sanitize_text("order 98765432101234", "development") == "order 98765432101234"
    assert sanitize_text("call 555.123.4567", "development") == "call [PHONE]"
