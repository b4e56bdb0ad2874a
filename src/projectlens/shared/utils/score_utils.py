"""Score helpers shared by all profiles."""

MIN_SCORE = 0.0
MAX_SCORE = 100.0


def clamp_score(value: float) -> float:
    """
    Clamp a score or confidence into [0, 100], rounded to 2 decimals.

    Examples:
        >>> clamp_score(120)
        100.0
        >>> clamp_score(-3)
        0.0
    """
    return round(max(MIN_SCORE, min(MAX_SCORE, float(value))), 2)


def percentage(part: int | float, whole: int | float) -> float:
    """Percentage of part in whole, 0.0 for an empty whole."""
    if not whole:
        return 0.0
    return clamp_score(part / whole * 100)
