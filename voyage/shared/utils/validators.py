"""Field validators for Indian tax and identity numbers."""

import re

GSTIN_REGEX = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][A-Z0-9]Z[A-Z0-9]$")
PAN_REGEX = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$")
IFSC_REGEX = re.compile(r"^[A-Z]{4}0[A-Z0-9]{6}$")


def validate_gstin(v: str | None) -> str | None:
    if not v:
        return None
    v = v.strip().upper()
    if not GSTIN_REGEX.match(v):
        raise ValueError("GSTIN must be in the format 07ABCDE1234F2Z5")
    return v


def validate_pan(v: str | None) -> str | None:
    if not v:
        return None
    v = v.strip().upper()
    if not PAN_REGEX.match(v):
        raise ValueError("PAN must be in the format ABCDE1234F")
    return v


def validate_ifsc(v: str | None) -> str | None:
    if not v:
        return None
    v = v.strip().upper()
    if not IFSC_REGEX.match(v):
        raise ValueError("IFSC must be in the format ABCD0123456")
    return v


def validate_aadhar(v: str | None) -> str | None:
    if not v:
        return None
    v = v.replace(" ", "")
    if len(v) != 12 or not v.isdigit():
        raise ValueError("Aadhar number must have 12 digits")
    return v
