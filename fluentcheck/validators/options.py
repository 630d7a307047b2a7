"""Process-wide validator options.

Set these before constructing validators that depend on them. Swapping the
language manager later only changes future default-template lookups; explicit
`with_message` overrides are never affected.
"""

from typing import Callable

import structlog

from fluentcheck.config import get_settings
from fluentcheck.validators.messages import LanguageManager, split_property_name
from fluentcheck.validators.models import CascadeMode

logger = structlog.get_logger()


class ValidatorOptions:
    """Global configuration shared by every validator in the process."""

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        """Restore defaults from settings."""
        settings = get_settings()
        self.language_manager: LanguageManager = LanguageManager(culture=settings.DEFAULT_CULTURE)
        self.default_rule_level_cascade_mode: CascadeMode = CascadeMode(settings.CASCADE_MODE.lower())
        self.display_name_resolver: Callable[[str], str] = split_property_name

    def set_language_manager(self, language_manager: LanguageManager) -> None:
        logger.debug(
            "language_manager_changed",
            manager=type(language_manager).__name__,
            culture=language_manager.culture,
        )
        self.language_manager = language_manager


# Module-level singleton
global_options = ValidatorOptions()
