"""Unit tests for the exception hierarchy and diagnostics."""

import json

from scribebot.lib import messages
from scribebot.lib.exceptions import (
    PersistenceError,
    RecordNotFoundError,
    ScribeBotError,
    TranscriptionError,
    ValidationError,
    serialize_error,
)


class TestHierarchy:
    def test_record_not_found_is_persistence_error(self):
        error = RecordNotFoundError("whitelist", "5@user.telegram", operation="delete")

        assert isinstance(error, PersistenceError)
        assert isinstance(error, ScribeBotError)
        assert "5@user.telegram" in error.message

    def test_transcription_error_carries_provider(self):
        error = TranscriptionError("API error: bad audio", provider="groq")

        assert error.provider == "groq"
        assert str(error) == "[groq] API error: bad audio"


class TestSerializeError:
    def test_domain_error_fields(self):
        payload = json.loads(serialize_error(
            RecordNotFoundError("whitelist", "5@user.telegram", operation="delete")
        ))

        assert payload["type"] == "RecordNotFoundError"
        assert payload["key"] == "5@user.telegram"
        assert payload["operation"] == "delete"

    def test_plain_exception(self):
        payload = json.loads(serialize_error(ValueError("nope")))

        assert payload == {"type": "ValueError", "message": "nope"}


def test_with_banner():
    assert messages.with_banner("[BOT]", "hello") == "[BOT]\n\nhello"


class TestRender:
    """Tests for HTML-safe template filling."""

    def test_values_are_escaped(self):
        text = messages.render(messages.LANGUAGE_UPDATED, language="<i>pt</i> & en")

        assert "&lt;i&gt;pt&lt;/i&gt; &amp; en" in text
        assert text.startswith("🌐 <b>Language updated:</b>")

    def test_json_details_stay_parseable(self):
        details = serialize_error(ValidationError('bad "value" <x>', field="temperature"))

        text = messages.render(messages.COMMAND_ERROR, details=details)
        embedded = text.split("<code>", 1)[1].removesuffix("</code>")

        assert "&lt;x&gt;" in embedded
        assert json.loads(embedded.replace("&lt;", "<").replace("&gt;", ">"))["message"] == 'bad "value" <x>'
