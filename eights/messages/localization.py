"""Localization system using Mozilla Fluent."""

from pathlib import Path

from fluent_compiler.bundle import FluentBundle
from babel.lists import format_list


DEFAULT_LOCALES_DIR = Path(__file__).resolve().parent.parent / "locales"


class Localization:
    """
    Localization system using Mozilla Fluent via fluent-compiler.

    Loads .ftl files from the locales directory and provides message
    rendering with variable substitution. Until init() is called the
    bundled ``eights/locales`` directory is used.
    """

    _bundles: dict[str, FluentBundle] = {}
    _locales_dir: Path | None = None

    @classmethod
    def init(cls, locales_dir: Path | str) -> None:
        """Initialize the localization system with a locales directory."""
        cls._locales_dir = Path(locales_dir)
        cls._bundles = {}

    @classmethod
    def locales_dir(cls) -> Path:
        return cls._locales_dir if cls._locales_dir is not None else DEFAULT_LOCALES_DIR

    @classmethod
    def _get_bundle(cls, locale: str) -> FluentBundle:
        """Get or create a bundle for a locale."""
        if locale in cls._bundles:
            return cls._bundles[locale]

        locales_dir = cls.locales_dir()
        locale_dir = locales_dir / locale
        actual_locale = locale
        if not locale_dir.exists():
            # Fall back to English
            locale_dir = locales_dir / "en"
            actual_locale = "en"
            if not locale_dir.exists():
                raise RuntimeError(f"No locale files found for {locale} or en")

        ftl_content = [
            ftl_file.read_text(encoding="utf-8")
            for ftl_file in sorted(locale_dir.glob("*.ftl"))
        ]
        if not ftl_content:
            raise RuntimeError(f"No .ftl files found in {locale_dir}")

        bundle = FluentBundle.from_string(actual_locale, "\n".join(ftl_content))
        cls._bundles[locale] = bundle
        return bundle

    # Unicode bidi isolation characters that Fluent adds around variables
    _BIDI_CHARS = "\u2068\u2069"  # FIRST STRONG ISOLATE, POP DIRECTIONAL ISOLATE

    @classmethod
    def get(cls, locale: str, message_id: str, **kwargs) -> str:
        """
        Get a localized message.

        Args:
            locale: The locale code (e.g., 'en').
            message_id: The message ID from the .ftl file.
            **kwargs: Variables to substitute into the message.

        Returns:
            The formatted message string, or the message ID if it
            cannot be rendered.
        """
        try:
            bundle = cls._get_bundle(locale)
            result, errors = bundle.format(message_id, kwargs)
            for char in cls._BIDI_CHARS:
                result = result.replace(char, "")
            return result
        except Exception:
            return message_id

    @classmethod
    def format_list_or(cls, locale: str, items: list[str]) -> str:
        """
        Format a list with 'or' conjunction using Babel.

        Returns:
            Formatted list string (e.g., "A, B, or C").
        """
        return format_list(items, style="or", locale=locale)


def get_message(locale: str, message_id: str, **kwargs) -> str:
    """Convenience function to get a localized message."""
    return Localization.get(locale, message_id, **kwargs)
