"""Plate and phone normalization applied to every inbound request"""

import re

_PLATE_NOISE = re.compile(r"[\s-]")
_NON_DIGITS = re.compile(r"\D")


def normalize_plate(plate: str) -> str:
    """'abc-1d23 ' -> 'ABC1D23'"""
    return _PLATE_NOISE.sub("", plate).upper()


def normalize_phone(phone: str) -> str:
    """'+55 (11) 98888-7777' -> '5511988887777'"""
    return _NON_DIGITS.sub("", phone)
