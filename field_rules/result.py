from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationResult:
    """Verdict of one rule against one value. Built fresh per evaluation."""

    valid: bool
    message_id: str | None = None
    group_id: str | None = None
    # Regex rules only: index of the first pattern that did not match.
    failed_index: int | None = None
    reason: str | None = None

    def __bool__(self):
        return self.valid
