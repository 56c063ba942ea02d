"""
Declarative options for games.

Options are declared as dataclass fields carrying metadata that knows how to
label, validate and convert the value:

    @dataclass
    class MyGameOptions(GameOptions):
        computer_delay_ms: int = option_field(
            IntOption(default=1500, min_val=0, max_val=10000,
                      value_key="ms",
                      label="crazyeights-option-computer-delay"))
"""

from dataclasses import dataclass, field, fields
from typing import Any

from mashumaro.mixins.json import DataClassJSONMixin

from ..messages.localization import Localization


@dataclass
class OptionMeta:
    """Metadata for a game option."""

    default: Any
    label: str  # Localization key for the option label

    def get_label_kwargs(self, value: Any) -> dict[str, Any]:
        """Get kwargs for label localization."""
        raise NotImplementedError

    def get_label(self, locale: str, value: Any) -> str:
        """Get the localized label with current value interpolated."""
        return Localization.get(locale, self.label, **self.get_label_kwargs(value))

    def validate_and_convert(self, value: str) -> tuple[bool, Any]:
        """Validate and convert input string to the option's type.

        Returns (success, converted_value). If success is False, converted_value
        is the original string.
        """
        raise NotImplementedError


@dataclass
class IntOption(OptionMeta):
    """Integer option with min/max validation."""

    min_val: int = 0
    max_val: int = 100
    value_key: str = "value"  # Key used in localization

    def get_label_kwargs(self, value: Any) -> dict[str, Any]:
        return {self.value_key: value}

    def validate_and_convert(self, value: str) -> tuple[bool, Any]:
        try:
            int_val = int(value)
        except ValueError:
            return False, value
        return True, max(self.min_val, min(self.max_val, int_val))


def option_field(meta: OptionMeta) -> Any:
    """Create a dataclass field with option metadata attached.

    Usage:
        seed: int = option_field(IntOption(default=0, ...))
    """
    return field(default=meta.default, metadata={"option_meta": meta})


def get_option_meta(options_class: type, field_name: str) -> OptionMeta | None:
    """Get the OptionMeta for a field, if it has one."""
    for f in fields(options_class):
        if f.name == field_name:
            return f.metadata.get("option_meta")
    return None


def get_all_option_metas(options_class: type) -> dict[str, OptionMeta]:
    """Get all OptionMeta instances from an options class."""
    result = {}
    for f in fields(options_class):
        meta = f.metadata.get("option_meta")
        if meta is not None:
            result[f.name] = meta
    return result


@dataclass
class GameOptions(DataClassJSONMixin):
    """Base class for game options with declarative option support."""

    def get_option_metas(self) -> dict[str, OptionMeta]:
        """Get all option metadata for this options instance."""
        return get_all_option_metas(type(self))

    def set_option(self, name: str, value: str) -> bool:
        """Validate ``value`` through the option's metadata and apply it.

        Returns False for unknown options or values that fail validation.
        """
        meta = get_option_meta(type(self), name)
        if not meta:
            return False
        success, converted = meta.validate_and_convert(value)
        if not success:
            return False
        setattr(self, name, converted)
        return True

    def describe(self, locale: str = "en") -> list[str]:
        """Localized labels for every declared option with its current value."""
        return [
            meta.get_label(locale, getattr(self, name))
            for name, meta in self.get_option_metas().items()
        ]
