"""Form-level validations: config-driven range/regex rules per field."""
import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from field_rules.config import normalize_range, normalize_regex
from field_rules.exceptions import RANGE, REGEX, ConfigError, TypeMismatchError
from field_rules.range_validator import RangeValidator
from field_rules.regex_validator import RegexValidator
from field_rules.result import ValidationResult

logger = logging.getLogger(__name__)


# kind -> (normalizer, validator). Rules of a field run in the order they are declared.
VALIDATOR_REGISTRY: dict[str, tuple[Callable[[Any], Any], Any]] = {
    RANGE: (normalize_range, RangeValidator()),
    REGEX: (normalize_regex, RegexValidator()),
}


def load_field_rules(path: str | Path) -> dict:
    """Read a form's rules JSON. Raises ConfigError if it cannot be parsed."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error("Invalid rules file %s: %s", path, e)
        raise ConfigError(f"Rules file {path} is not valid UTF-8 JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Rules file {path} must contain a JSON object.")
    logger.info("Loaded field rules from %s", path)
    return data


class FieldValidations:
    """Validation service for one form. Created once when the form is set up.

    Every rule is normalized here, so a malformed config fails loudly before
    any value is checked.
    """

    def __init__(self, form_config: dict):
        self.form_config = form_config
        messages = form_config.get("messages") or {}
        if not isinstance(messages, dict):
            raise ConfigError("'messages' must map message ids to their text.")
        self.messages: dict[str, str] = dict(messages)
        self._rules: dict[str, list[tuple[str, Any]]] = {}

        fields = form_config.get("fields", {})
        if not isinstance(fields, dict):
            raise ConfigError("'fields' must map field names to their rules.")

        for field_name, rules in fields.items():
            if not isinstance(rules, dict):
                raise ConfigError(f"Rules for field {field_name!r} must be a mapping of validator kind to options.")
            normalized = []
            for kind, options in rules.items():
                entry = VALIDATOR_REGISTRY.get(kind)
                if entry is None:
                    logger.error("Unknown validator %s for field %s", kind, field_name)
                    raise ConfigError(f"Unknown validator {kind!r} for field {field_name!r}.")
                normalize, _ = entry
                try:
                    normalized.append((kind, normalize(options)))
                except ConfigError as e:
                    raise ConfigError(f"Field {field_name!r}: {e.message}", e.fn_name) from e
            self._rules[field_name] = normalized

        # A message slot is toggled per rule, a group slot per form; one id cannot be both.
        message_ids = {c.message_id for rules in self._rules.values() for _, c in rules if c.message_id}
        group_ids = {c.group_id for rules in self._rules.values() for _, c in rules if c.group_id}
        overlap = message_ids & group_ids
        if overlap:
            logger.error("Ids used as both message and group: %s", sorted(overlap))
            raise ConfigError(f"Ids {sorted(overlap)} are used as both a message id and a group id.")

        logger.info("Loaded rules for %d field(s)", len(self._rules))

    @classmethod
    def from_file(cls, path: str | Path) -> "FieldValidations":
        return cls(load_field_rules(path))

    @property
    def field_names(self) -> list[str]:
        return list(self._rules)

    def rules_for(self, field_name: str) -> list[tuple[str, Any]]:
        return list(self._rules.get(field_name, []))

    def message_ids(self) -> set[str]:
        """Every message and group id the rules refer to."""
        ids = set()
        for rules in self._rules.values():
            for _, config in rules:
                ids.update(i for i in (config.message_id, config.group_id) if i)
        return ids

    def message_text(self, message_id: str) -> str:
        return self.messages.get(message_id, "")

    def validate(self, field_name: str, value: Any) -> list[ValidationResult]:
        """Run all rules for one field.

        A value of the wrong shape counts as a failed rule rather than an error.
        """
        results: list[ValidationResult] = []
        for kind, config in self._rules.get(field_name, []):
            _, validator = VALIDATOR_REGISTRY[kind]
            try:
                results.append(validator.evaluate(value, config))
            except TypeMismatchError as e:
                logger.warning("Field %s: %s", field_name, e)
                results.append(
                    ValidationResult(
                        valid=False,
                        message_id=config.message_id,
                        group_id=config.group_id,
                        reason=e.message,
                    )
                )
        return results

    def is_valid(self, field_name: str, value: Any) -> bool:
        return all(self.validate(field_name, value))
