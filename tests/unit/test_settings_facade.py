"""Unit tests for the chat settings facade."""

from scribebot.models.settings import ChatSettingKey
from scribebot.services.settings import DEFAULT_TEMPERATURE, ChatSettingsFacade

CHAT = "-777@group.telegram"


class TestDefaults:
    """Getters on an empty store."""

    def test_temperature_defaults_to_zero(self, settings):
        assert settings.get_temperature(CHAT) == DEFAULT_TEMPERATURE == 0.0

    def test_optional_values_absent(self, settings):
        assert settings.get_language(CHAT) is None
        assert settings.get_transcription_prompt(CHAT) is None

    def test_chat_disabled_by_default(self, settings):
        assert settings.is_chat_enabled(CHAT) is False

    def test_prefix_falls_back_to_default(self, store):
        assert ChatSettingsFacade(store, default_prefix="!").get_command_prefix() == "!"


class TestRoundTrips:
    """Setters followed by getters."""

    def test_temperature(self, settings, store):
        settings.set_temperature(CHAT, 0.5)

        assert settings.get_temperature(CHAT) == 0.5
        assert store.get_chat_setting(CHAT, ChatSettingKey.TEMPERATURE).value == "0.5"

    def test_enabled_flag(self, settings):
        settings.set_chat_enabled(CHAT, True)
        assert settings.is_chat_enabled(CHAT) is True

        settings.set_chat_enabled(CHAT, False)
        assert settings.is_chat_enabled(CHAT) is False

    def test_settings_are_per_chat(self, settings):
        settings.set_language(CHAT, "pt")

        assert settings.get_language("42@user.telegram") is None

    def test_bare_chat_id_is_normalized(self, settings):
        settings.set_language("42", "en")

        assert settings.get_language("42@user.telegram") == "en"

    def test_prefix_is_global(self, settings):
        settings.set_command_prefix("!")

        assert settings.get_command_prefix() == "!"


class TestClear:
    """Clearing language and prompt."""

    def test_clear_existing_language(self, settings):
        settings.set_language(CHAT, "pt")

        assert settings.clear_language(CHAT) is True
        assert settings.get_language(CHAT) is None

    def test_clear_unset_language_is_a_noop(self, settings, settings_path):
        assert settings.clear_language(CHAT) is False
        assert not settings_path.exists()

    def test_clear_prompt(self, settings):
        settings.set_transcription_prompt(CHAT, "Ana, Bruno")

        assert settings.clear_transcription_prompt(CHAT) is True
        assert settings.clear_transcription_prompt(CHAT) is False


def test_unparsable_temperature_falls_back(settings, store):
    store.upsert_chat_setting(CHAT, ChatSettingKey.TEMPERATURE, "warm")

    assert settings.get_temperature(CHAT) == DEFAULT_TEMPERATURE
