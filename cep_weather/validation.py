"""
Zipcode (CEP) format validation shared by both pipelines.
"""

import re

_ZIPCODE_PATTERN = re.compile(r"[0-9]{8}")


def is_valid_zipcode(zipcode: str) -> bool:
    """Return True iff zipcode is exactly 8 ASCII digits."""
    return _ZIPCODE_PATTERN.fullmatch(zipcode) is not None
