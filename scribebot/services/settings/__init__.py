"""Settings facade package."""

from scribebot.services.settings.facade import ChatSettingsFacade, DEFAULT_TEMPERATURE

__all__ = ["ChatSettingsFacade", "DEFAULT_TEMPERATURE"]
