"""
CEP (Brazilian postal code) validation
"""

import re
from typing import Any

from .errors import InvalidPostalCodeError

CEP_LENGTH = 8
_CEP_PATTERN = re.compile(r"[0-9]{8}")


def is_valid_cep(value: Any) -> bool:
    """True when value is a string of exactly 8 ASCII digits"""
    return isinstance(value, str) and _CEP_PATTERN.fullmatch(value) is not None


def validate_cep(value: Any) -> str:
    """
    Validate a CEP.

    Args:
        value: Candidate postal code

    Returns:
        The CEP unchanged

    Raises:
        InvalidPostalCodeError: If it is not exactly 8 ASCII digits
    """
    if not is_valid_cep(value):
        raise InvalidPostalCodeError(value)
    return value


__all__ = ["CEP_LENGTH", "is_valid_cep", "validate_cep"]
