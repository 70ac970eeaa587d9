"""Tokenizer configuration and per-call option merging."""

from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from collections.abc import Mapping
from typing import Any, Final, Self
import logging

from .errors import ConfigError

log = logging.getLogger(__name__)


class UnknownHandling(str, Enum):
    """Named modes for text that no vocabulary token covers."""

    # one <unk> per unmatched code point
    CHAR = "char"

    @classmethod
    def get(cls, name: "str | UnknownHandling") -> "UnknownHandling":
        """Get unknown handling mode by name (case-insensitive)."""
        if isinstance(name, cls):
            return name
        try:
            return cls[str(name).upper()]
        except KeyError:
            raise ConfigError(
                "unknown handling mode",
                invalid_name=str(name),
                available=list_unknown_modes(),
            )


def list_unknown_modes() -> list[str]:
    """Return available unknown handling mode names."""
    return [mode.value for mode in UnknownHandling]


# snake_case field -> camelCase name used by serialized vocabularies
_WIRE_NAMES: Final[dict[str, str]] = {
    "vocab_size": "vocabSize",
    "normalize_numbers": "normalizeNumbers",
    "normalize_urls": "normalizeUrls",
    "emoji_as_single_token": "emojiAsSingleToken",
    "preserve_case_markers": "preserveCaseMarkers",
    "unknown_handling": "unknownHandling",
}
_FIELD_NAMES: Final[dict[str, str]] = {wire: fld for fld, wire in _WIRE_NAMES.items()}


@dataclass(frozen=True)
class TokenizerConfig:
    """
    Options attached to a tokenizer instance.

    ``vocab_size`` is only read by training. The remaining flags drive
    encoding and decoding and can be overridden per call with :meth:`merged`.
    """

    vocab_size: int = 1200
    normalize_numbers: bool = True
    normalize_urls: bool = True
    emoji_as_single_token: bool = True
    preserve_case_markers: bool = True
    unknown_handling: UnknownHandling = UnknownHandling.CHAR

    def __post_init__(self) -> None:
        if (
            isinstance(self.vocab_size, bool)
            or not isinstance(self.vocab_size, int)
            or self.vocab_size <= 0
        ):
            raise ConfigError(
                "vocab_size must be a positive integer",
                invalid_name=repr(self.vocab_size),
            )
        for fld in fields(self):
            if fld.type is bool and not isinstance(getattr(self, fld.name), bool):
                raise ConfigError(
                    f"{fld.name} must be a boolean",
                    invalid_name=repr(getattr(self, fld.name)),
                )
        # frozen: normalize through object.__setattr__
        object.__setattr__(
            self, "unknown_handling", UnknownHandling.get(self.unknown_handling)
        )

    def merged(self, **overrides: Any) -> Self:
        """
        Return a copy with ``overrides`` applied on top of this config.

        :raises ConfigError: If an option name is not recognized or a value is invalid.
        """
        if not overrides:
            return self
        unknown = [name for name in overrides if name not in _WIRE_NAMES]
        if unknown:
            raise ConfigError(
                "unknown option",
                invalid_name=", ".join(sorted(unknown)),
                available=list(_WIRE_NAMES),
            )
        return replace(self, **overrides)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase mapping used by vocabulary payloads."""
        out = {}
        for name, value in asdict(self).items():
            if isinstance(value, UnknownHandling):
                value = value.value
            out[_WIRE_NAMES[name]] = value
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """
        Build a config from a camelCase mapping.

        Missing options keep their defaults; unrecognized keys are skipped with
        a warning.

        :raises ConfigError: If a recognized option carries an invalid value.
        """
        kwargs = {}
        for wire, value in data.items():
            if wire not in _FIELD_NAMES:
                log.warning(f"ignoring unrecognized config option {wire!r}")
                continue
            kwargs[_FIELD_NAMES[wire]] = value
        return cls(**kwargs)


__all__ = [
    "TokenizerConfig",
    "UnknownHandling",
    "list_unknown_modes",
]
