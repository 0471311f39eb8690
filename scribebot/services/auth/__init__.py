"""Authorization service package."""

from scribebot.services.auth.service import AuthorizationService

__all__ = ["AuthorizationService"]
