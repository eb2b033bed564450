"""Exception taxonomy shared by the range and regex validators."""

RANGE = "validate_range"
REGEX = "validate_regex"


class FieldRulesError(Exception):
    """Base class. ``fn_name`` is the validator kind that raised."""

    def __init__(self, message: str, fn_name: str | None = None):
        self.message = message
        self.fn_name = fn_name
        super().__init__(message)

    def __str__(self):
        if self.fn_name:
            return f"{self.fn_name}: {self.message}"
        return self.message


class ConfigError(FieldRulesError):
    """Malformed rule configuration. Raised at attach time; fatal for that field."""


class TypeMismatchError(FieldRulesError):
    """The value's shape does not fit the rule (e.g. text in a number field)."""


class TargetNotFoundError(FieldRulesError):
    """A declared message or group id has no matching UI target on the host."""

    def __init__(self, target_id: str, fn_name: str | None = None):
        self.target_id = target_id
        super().__init__(f"The message target {target_id!r} does not exist.", fn_name)
