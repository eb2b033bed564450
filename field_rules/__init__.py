"""Field rules: declarative range and regex validation for form fields."""

from .config import Mode, RangeConfig, RegexConfig, normalize_range, normalize_regex
from .exceptions import ConfigError, FieldRulesError, TargetNotFoundError, TypeMismatchError
from .field_validations import VALIDATOR_REGISTRY, FieldValidations, load_field_rules
from .range_validator import RangeValidator
from .regex_validator import RegexValidator
from .result import ValidationResult

__all__ = [
    "Mode",
    "RangeConfig",
    "RegexConfig",
    "normalize_range",
    "normalize_regex",
    "FieldRulesError",
    "ConfigError",
    "TypeMismatchError",
    "TargetNotFoundError",
    "ValidationResult",
    "RangeValidator",
    "RegexValidator",
    "FieldValidations",
    "VALIDATOR_REGISTRY",
    "load_field_rules",
]
