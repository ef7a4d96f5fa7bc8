"""
Rep target parsing.

Template rep targets are free text: a single count ("10") or a range
("8-12"). Planned volume needs a single representative integer, so ranges
collapse to the truncated mean of their bounds. Anything unparseable degrades
to DEFAULT_REPS instead of failing.
"""
from typing import Optional

DEFAULT_REPS = 10
RANGE_SEPARATOR = "-"


def _to_int(text: str) -> Optional[int]:
    text = text.strip()
    if not text or not (text.isdigit() or (text[0] in "+-" and text[1:].isdigit())):
        return None
    return int(text)


def parse_reps(reps_text: Optional[str]) -> int:
    """
    Convert a rep target to a positive representative count.

    Examples:
        >>> parse_reps("8-12")
        10
        >>> parse_reps(" 10 ")
        10
        >>> parse_reps("AMRAP")
        10

    Args:
        reps_text: Free-text rep target

    Returns:
        The mean of a range (integer division), the integer itself, or
        DEFAULT_REPS when the text is malformed or not positive
    """
    if not reps_text:
        return DEFAULT_REPS

    if RANGE_SEPARATOR in reps_text:
        parts = reps_text.split(RANGE_SEPARATOR)
        if len(parts) == 2:
            low, high = _to_int(parts[0]), _to_int(parts[1])
            if low is not None and high is not None:
                mean = (low + high) // 2
                return mean if mean > 0 else DEFAULT_REPS

    value = _to_int(reps_text)
    if value is not None and value > 0:
        return value

    return DEFAULT_REPS
