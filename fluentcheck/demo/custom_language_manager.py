"""A message catalog overriding the default NotNull message."""

from fluentcheck.validators import LanguageManager


class CustomLanguageManager(LanguageManager):
    """Replaces "'X' must not be empty." with "'X' is required." for English cultures."""

    def __init__(self, culture: str = "en"):
        super().__init__(culture)
        for english in ("en", "en-US", "en-GB"):
            self.add_translation(english, "NotNullValidator", "'{PropertyName}' is required.")
