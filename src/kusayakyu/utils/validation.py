"""Validation utilities for Kusayakyu.

This module provides reusable input checks with consistent error handling.
Every check either returns the cleaned value or raises a
:class:`~kusayakyu.exceptions.ValidationError` subclass.
"""

import datetime
import re
from typing import Iterable, Optional

from dateutil import parser as date_parser

from kusayakyu.exceptions import (
    BlankNameError,
    DuplicateTeamNameError,
    InvalidDateError,
    InvalidScoreError,
)
from kusayakyu.type_hints import ScoreInput

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")


# ========== Name Validation ==========


def clean_name(name: Optional[str], label: str = "Name") -> str:
    """Trim a name and reject it when nothing is left.

    Args:
        name: Raw name as typed by the user
        label: What the name is for, used in the error message

    Returns:
        The trimmed name

    Raises:
        BlankNameError: If the name is missing or only whitespace
    """
    if name is None or not str(name).strip():
        raise BlankNameError(f"{label} must not be blank")
    return str(name).strip()


def validate_team_name(name: Optional[str], existing: Iterable[str]) -> str:
    """Clean a team name and check it is unique among ``existing``.

    The comparison is case-sensitive and exact, after trimming.

    Example:
        >>> validate_team_name("  Tigers ", ["Giants"])
        'Tigers'
    """
    cleaned = clean_name(name, "Team name")
    if cleaned in set(existing):
        raise DuplicateTeamNameError(f"Team name '{cleaned}' is already registered")
    return cleaned


# ========== Score Validation ==========


def parse_score(value: ScoreInput) -> int:
    """Parse a run count entered for one side of a match.

    Accepts ints and integer strings (surrounding whitespace allowed). Anything
    else, including negative numbers, floats and booleans, is rejected rather
    than coerced.

    Raises:
        InvalidScoreError: If the value is not a non-negative integer
    """
    if isinstance(value, bool):
        raise InvalidScoreError(f"Invalid score: {value!r}")

    if isinstance(value, int):
        score = value
    elif isinstance(value, str) and _INTEGER_PATTERN.match(value.strip()):
        try:
            score = int(value.strip())
        except ValueError as e:
            # Digit strings past the int conversion limit
            raise InvalidScoreError("Invalid score: too many digits") from e
    else:
        raise InvalidScoreError(f"Invalid score: {value!r} (must be an integer)")

    if score < 0:
        raise InvalidScoreError(f"Invalid score: {score} (must not be negative)")
    return score


# ========== Date Validation ==========


def normalize_date(value: Optional[object]) -> str:
    """Normalize a tournament date to ISO ``YYYY-MM-DD``.

    An empty value means "no date yet" and is returned as an empty string.

    Raises:
        InvalidDateError: If the value cannot be understood as a date
    """
    if value is None:
        return ""
    if isinstance(value, datetime.datetime):
        return value.date().isoformat()
    if isinstance(value, datetime.date):
        return value.isoformat()

    text = str(value).strip()
    if not text:
        return ""
    try:
        return date_parser.parse(text, yearfirst=True).date().isoformat()
    except (ValueError, OverflowError) as e:
        raise InvalidDateError(f"Invalid tournament date: {text!r}") from e
