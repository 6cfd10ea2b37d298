"""Input predicates shared by domain models and the device identity."""

import re

from src.core.config import constants


_MOBILE_PATTERN = re.compile(rf"[0-9]{{{constants.MOBILE_NUMBER_DIGITS}}}")


def is_valid_mobile(value: object) -> bool:
    """Return True iff value is exactly 10 ASCII digits (no country code, spaces or '+')."""
    return isinstance(value, str) and _MOBILE_PATTERN.fullmatch(value) is not None
