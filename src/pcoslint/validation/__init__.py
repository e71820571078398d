from pcoslint.validation.conformance import check_conformance
from pcoslint.validation.selector import SelectorViolation, check_selector, is_valid_selector
from pcoslint.validation.validator import ValidationError, validate, validate_or_raise

__all__ = [
    "SelectorViolation",
    "ValidationError",
    "check_conformance",
    "check_selector",
    "is_valid_selector",
    "validate",
    "validate_or_raise",
]
