"""Rule configuration: normalize declarative range/regex options before use.

Configs arrive as plain mappings (usually parsed from the form's rules JSON).
Normalization checks them once, at attach time, and produces frozen
dataclasses the validators can trust.
"""
import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from field_rules.exceptions import RANGE, REGEX, ConfigError

logger = logging.getLogger(__name__)

# Keys used by the original markup bindings, mapped to their snake_case names.
LEGACY_KEYS = {
    "type": "mode",
    "minRange": "min_range",
    "maxRange": "max_range",
    "messageID": "message_id",
    "messageId": "message_id",
    "groupID": "group_id",
    "groupId": "group_id",
}


class Mode(str, Enum):
    TEXT = "text"
    NUMBER = "number"


@dataclass(frozen=True)
class RangeConfig:
    mode: Mode = Mode.TEXT
    min_range: int | None = None
    max_range: int | None = None
    message_id: str | None = None
    group_id: str | None = None


@dataclass(frozen=True)
class RegexConfig:
    patterns: tuple[re.Pattern, ...]
    message_id: str | None = None
    group_id: str | None = None


def _canonical(config: Mapping) -> dict[str, Any]:
    out = {}
    for key, value in config.items():
        out[LEGACY_KEYS.get(key, key)] = value
    return out


def _fail(message: str, fn_name: str) -> ConfigError:
    logger.error("%s: %s", fn_name, message)
    return ConfigError(message, fn_name)


def _as_int(value: Any) -> int | None:
    """Return value as an int if it is an integral number, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _parse_mode(raw: Any) -> Mode:
    if raw is None:
        return Mode.TEXT
    if isinstance(raw, Mode):
        return raw
    if isinstance(raw, str):
        try:
            return Mode(raw.strip().lower())
        except ValueError:
            pass
    raise _fail(f"Invalid mode {raw!r}. Possible values are 'text' or 'number'.", RANGE)


def _message_targets(config: dict, fn_name: str) -> tuple[str | None, str | None]:
    message_id = config.get("message_id")
    group_id = config.get("group_id")
    for name, value in (("message_id", message_id), ("group_id", group_id)):
        if value is not None and (not isinstance(value, str) or not value.strip()):
            raise _fail(f"'{name}' must be a non-empty string, got {value!r}.", fn_name)
    if group_id is not None and message_id is None:
        raise _fail("'group_id' requires 'message_id' to be defined.", fn_name)
    return message_id, group_id


def normalize_range(config: Mapping | RangeConfig) -> RangeConfig:
    """Validate a range rule. Raises ConfigError when it cannot be used."""
    if isinstance(config, RangeConfig):
        return config
    if not isinstance(config, Mapping):
        raise _fail(f"Range options must be a mapping, got {type(config).__name__}.", RANGE)

    config = _canonical(config)
    mode = _parse_mode(config.get("mode"))

    bounds = {}
    for name in ("min_range", "max_range"):
        raw = config.get(name)
        bounds[name] = _as_int(raw)
        if raw is not None and bounds[name] is None:
            logger.warning("%s: ignoring non-integer %s %r", RANGE, name, raw)

    if bounds["min_range"] is None and bounds["max_range"] is None:
        raise _fail("Either 'min_range' or 'max_range' should be a valid integer value.", RANGE)

    message_id, group_id = _message_targets(config, RANGE)
    return RangeConfig(
        mode=mode,
        min_range=bounds["min_range"],
        max_range=bounds["max_range"],
        message_id=message_id,
        group_id=group_id,
    )


def _compile(pattern: Any, index: int, flags: int) -> re.Pattern:
    if isinstance(pattern, re.Pattern):
        # Field values are text; a bytes pattern could never be applied to them.
        if not isinstance(pattern.pattern, str):
            raise _fail(f"Pattern {index} must be a text pattern, got a bytes pattern.", REGEX)
        return pattern
    if not isinstance(pattern, str):
        raise _fail(f"Pattern {index} must be a string or compiled regex, got {type(pattern).__name__}.", REGEX)
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise _fail(f"Pattern {index} ({pattern!r}) is not a valid regular expression: {e}", REGEX) from e


def normalize_regex(config: Mapping | Sequence | str | re.Pattern | RegexConfig) -> RegexConfig:
    """Validate a regex rule.

    Accepts a full options mapping, a bare pattern, or a list of patterns.
    A single pattern becomes a one-element sequence; order is preserved.
    """
    if isinstance(config, RegexConfig):
        return config
    if isinstance(config, (str, re.Pattern)) or (
        isinstance(config, Sequence) and not isinstance(config, Mapping)
    ):
        config = {"patterns": config}
    if not isinstance(config, Mapping):
        raise _fail(f"Regex options must be a pattern, list or mapping, got {type(config).__name__}.", REGEX)

    config = _canonical(config)
    raw = config.get("patterns")
    if isinstance(raw, (str, re.Pattern)):
        raw = [raw]
    if not isinstance(raw, Sequence) or not raw:
        raise _fail("At least one pattern is required.", REGEX)

    flags = re.IGNORECASE if config.get("ignore_case") else 0
    patterns = tuple(_compile(p, i, flags) for i, p in enumerate(raw))

    message_id, group_id = _message_targets(config, REGEX)
    return RegexConfig(patterns=patterns, message_id=message_id, group_id=group_id)
