"""
Date parsing for resume ordering.

Resume dates are free-form strings typed by users ("September 2021",
"Sep 2021", "2021-09", "2021", "Present"). They are only ever compared,
never displayed after parsing, so they map to a single sortable number:
months since year 0.
"""

import math
import re
from typing import Optional

MONTH_NAMES = [
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
]
MONTH_ABBREVIATIONS = [name[:3] for name in MONTH_NAMES]

PRESENT = math.inf
UNPARSEABLE = 0.0

_MONTH_YEAR_RE = re.compile(r"(\w+)\s+(\d{4})")
_YEAR_MONTH_RE = re.compile(r"(\d{4})-(\d{1,2})")
_YEAR_RE = re.compile(r"(\d{4})")


def _month_index(token: str) -> Optional[int]:
    token = token.lower()
    if token in MONTH_NAMES:
        return MONTH_NAMES.index(token)
    if token in MONTH_ABBREVIATIONS:
        return MONTH_ABBREVIATIONS.index(token)
    return None


def parse_resume_date(value: Optional[str]) -> float:
    """
    Convert a resume date string to a sort key.

    Formats are tried in order: "Month Year" (full or three-letter month,
    any case), "YYYY-MM", then a bare "YYYY" anywhere in the string.

    Args:
        value: Raw date text, possibly None or empty

    Returns:
        inf for empty/"Present" (ongoing, newest), year*12 + month for
        parseable dates, 0 for anything else (sorts as oldest)
    """
    if value is None:
        return PRESENT
    text = str(value).strip()
    if not text or text.lower() == "present":
        return PRESENT

    match = _MONTH_YEAR_RE.search(text)
    if match:
        month = _month_index(match.group(1))
        if month is not None:
            return float(int(match.group(2)) * 12 + month)

    match = _YEAR_MONTH_RE.search(text)
    if match:
        return float(int(match.group(1)) * 12 + int(match.group(2)) - 1)

    match = _YEAR_RE.search(text)
    if match:
        return float(int(match.group(1)) * 12)

    return UNPARSEABLE
