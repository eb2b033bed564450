from .validation_binding import FormValidationBinder, VALID_BORDER, INVALID_BORDER

__all__ = [
    "FormValidationBinder",
    "VALID_BORDER",
    "INVALID_BORDER",
]
