import logging
from typing import Any

from field_rules.config import RegexConfig
from field_rules.exceptions import REGEX, TypeMismatchError
from field_rules.result import ValidationResult

logger = logging.getLogger(__name__)


class RegexValidator:
    """All-of regex check. Patterns run in declared order; the first miss wins."""

    kind = REGEX

    def evaluate(self, value: Any, config: RegexConfig) -> ValidationResult:
        if not isinstance(value, str):
            raise TypeMismatchError(f"Value should be a string, got {type(value).__name__}.", REGEX)

        for index, pattern in enumerate(config.patterns):
            if pattern.search(value) is None:
                logger.debug("%s: %r failed pattern %d (%s)", REGEX, value, index, pattern.pattern)
                return ValidationResult(
                    valid=False,
                    message_id=config.message_id,
                    group_id=config.group_id,
                    failed_index=index,
                    reason=f"does not match pattern {pattern.pattern!r}",
                )

        return ValidationResult(valid=True, message_id=config.message_id, group_id=config.group_id)
