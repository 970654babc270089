"""Normalizers for free-text years-of-experience and salary fields.

Both parsers are total: malformed input yields ``None`` ("unknown"), never an
exception and never the source string. ``None`` must not be read as zero.
"""

import logging
import math
import re
from collections.abc import Sequence

logger = logging.getLogger(__name__)

MIN_YEARS = 0
MAX_YEARS = 50

_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?")
# "$80k", "120K" -> thousands
_SALARY_NUMBER_RE = re.compile(r"(\d+(?:\.\d+)?)\s*([kKmM])?\b")
_CURRENCY_RE = re.compile(r"[$€£¥₹]|\b(?:usd|eur|gbp|cad|aud)\b", re.IGNORECASE)
_THOUSANDS_SEP_RE = re.compile(r"(?<=\d)[,_'](?=\d{3}\b)")

YearsRange = tuple[int, int]
SalaryRange = tuple[int, int]


def _ordered(low: int, high: int) -> tuple[int, int]:
    return (low, high) if low <= high else (high, low)


def _clamp_years(value: float) -> int | None:
    if not math.isfinite(value):
        return None
    return min(MAX_YEARS, max(MIN_YEARS, int(value)))


def _numbers_from_pair(value: Sequence) -> list[float] | None:
    """Accept an already-normalized [min, max] pair (or a single-item list)."""
    if not 1 <= len(value) <= 2:
        return None
    numbers: list[float] = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, (int, float)):
            return None
        numbers.append(float(item))
    return numbers


def parse_years_experience(value) -> YearsRange | None:
    """Normalize text such as "5-7 years" or "10+ years" to a (min, max) pair.

    The first one or two numbers are used, floored to whole years and clamped
    to [0, 50]. Text without digits ("Entry level") returns None.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        numbers = [float(value)]
    elif isinstance(value, (list, tuple)):
        numbers = _numbers_from_pair(value)
    elif isinstance(value, str):
        numbers = [float(m) for m in _NUMBER_RE.findall(value)[:2]]
    else:
        return None

    if not numbers:
        return None

    clamped = [_clamp_years(n) for n in numbers]
    if any(c is None for c in clamped):
        return None
    if len(clamped) == 1:
        return (clamped[0], clamped[0])
    return _ordered(clamped[0], clamped[1])


def _salary_amount(number: str, suffix: str | None) -> int | None:
    try:
        amount = float(number)
    except ValueError:
        return None
    if suffix in ("k", "K"):
        amount *= 1_000
    elif suffix in ("m", "M"):
        amount *= 1_000_000
    if not math.isfinite(amount) or amount < 0:
        return None
    return int(amount)


def parse_salary(value) -> SalaryRange | None:
    """Normalize text such as "$80,000 - $100,000" to a (min, max) pair.

    Currency symbols and thousands separators are stripped; a single amount
    becomes (n, n). Anything else ("Not specified", "Competitive") is None.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        amounts = [_salary_amount(str(value), None)]
    elif isinstance(value, (list, tuple)):
        numbers = _numbers_from_pair(value)
        if numbers is None:
            return None
        amounts = [_salary_amount(str(n), None) for n in numbers]
    elif isinstance(value, str):
        cleaned = _CURRENCY_RE.sub(" ", value)
        cleaned = _THOUSANDS_SEP_RE.sub("", cleaned)
        found = _SALARY_NUMBER_RE.findall(cleaned)[:2]
        # "$80-100k": the suffix on the upper bound applies to both
        if len(found) == 2 and not found[0][1] and found[1][1] and float(found[0][0]) < 1_000:
            found[0] = (found[0][0], found[1][1])
        amounts = [_salary_amount(number, suffix) for number, suffix in found]
    else:
        return None

    if not amounts or any(a is None for a in amounts):
        return None
    if len(amounts) == 1:
        return (amounts[0], amounts[0])
    return _ordered(amounts[0], amounts[1])
