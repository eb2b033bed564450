import logging
import math
from typing import Any

from field_rules.config import Mode, RangeConfig
from field_rules.exceptions import RANGE, TypeMismatchError
from field_rules.result import ValidationResult

logger = logging.getLogger(__name__)


def parse_number(value: Any) -> int | float:
    """Strictly parse value as an int or a finite float.

    Numbers pass through; text must be a complete integer or decimal literal
    (surrounding whitespace allowed). Anything else raises TypeMismatchError.
    """
    if isinstance(value, bool):
        raise TypeMismatchError("Value should be a number, got a boolean.", RANGE)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise TypeMismatchError(f"Value should be a finite number, got {value!r}.", RANGE)
        return value
    if isinstance(value, str):
        text = value.strip()
        # int() and float() accept digit separators; a typed value may not.
        if "_" in text:
            raise TypeMismatchError(f"Value should be a number, got {value!r}.", RANGE)
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            raise TypeMismatchError(f"Value should be a number, got {value!r}.", RANGE) from None
        if not math.isfinite(number):
            raise TypeMismatchError(f"Value should be a finite number, got {value!r}.", RANGE)
        return number
    raise TypeMismatchError(f"Value should be a number, got {type(value).__name__}.", RANGE)


class RangeValidator:
    """Inclusive min/max check on a text length or a numeric value."""

    kind = RANGE

    def measure(self, value: Any, mode: Mode) -> int | float:
        if mode is Mode.TEXT:
            if not isinstance(value, str):
                raise TypeMismatchError(f"Value should be a string, got {type(value).__name__}.", RANGE)
            return len(value)
        return parse_number(value)

    def evaluate(self, value: Any, config: RangeConfig) -> ValidationResult:
        quantity = self.measure(value, config.mode)

        valid = True
        reason = None
        if config.min_range is not None and quantity < config.min_range:
            valid = False
            reason = f"{quantity} is below the minimum of {config.min_range}"
        elif config.max_range is not None and quantity > config.max_range:
            valid = False
            reason = f"{quantity} is above the maximum of {config.max_range}"

        logger.debug("%s: %r (%s) -> %s", RANGE, value, config.mode.value, valid)
        return ValidationResult(
            valid=valid,
            message_id=config.message_id,
            group_id=config.group_id,
            reason=reason,
        )
