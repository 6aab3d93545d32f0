"""
Text and number utility functions.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional


def normalize_answer(answer: Optional[str]) -> str:
    """
    Normalize a submitted or stored answer for comparison.

    Collapses internal whitespace, trims the ends and case-folds, so
    "  Pull   Request " and "pull request" compare equal. Punctuation is kept.

    Args:
        answer: The answer text (None is treated as empty)

    Returns:
        Normalized answer
    """
    if not answer:
        return ""
    return " ".join(answer.split()).casefold()


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with halves going up (2.5 -> 3).

    Python's built-in round() uses banker's rounding, which would report
    a 62.5% course as 62%.
    """
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def round_half_up_to(value: float, digits: int) -> float:
    """Round half up to a fixed number of decimal places."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))
