# FILE: medmemic/services/common.py

import math

SEVERITY_HIGH = "high"
SEVERITY_MEDIUM = "medium"
SEVERITY_LOW = "low"
SEVERITY_NONE = "none"


def round_half_up(value) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3)."""
    return int(math.floor(float(value or 0) + 0.5))


def difficulty_severity(difficulty) -> str:
    """Colour bucket for a difficulty label, matched on substrings of its lower-cased text."""
    if not difficulty:
        return SEVERITY_NONE
    d = str(difficulty).lower()
    if "adv" in d or "exp" in d:
        return SEVERITY_HIGH
    if "int" in d or "moy" in d:
        return SEVERITY_MEDIUM
    return SEVERITY_LOW
