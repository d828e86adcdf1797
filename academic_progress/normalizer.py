# -*- coding: utf-8 -*-
"""Conversion of raw decrypted grade values into canonical letter grades."""
from __future__ import annotations

import math
import typing as t

from .config import DEFAULT_CONFIG, FAILING_LETTER, MAX_PERCENTAGE, GradingConfig
from .models import CanonicalGrade


def _parse_number(value: str) -> t.Optional[float]:
    if "_" in value:
        return None  # float() would accept "9_5"
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def is_unavailable(raw_value: t.Optional[str], config: GradingConfig = DEFAULT_CONFIG) -> bool:
    """Return True for the placeholders upstream uses when a grade could not be produced."""
    if raw_value is None:
        return True
    stripped = raw_value.strip()
    return not stripped or stripped in config.unavailable_values


def numeric_to_letter(value: float, config: GradingConfig = DEFAULT_CONFIG) -> str:
    """Map a percentage onto the letter whose breakpoint it reaches."""
    for threshold, letter in config.grade_breakpoints:
        if value >= threshold:
            return letter
    return FAILING_LETTER


def normalize(
        raw_value: t.Optional[str],
        config: t.Optional[GradingConfig] = None,
) -> t.Optional[CanonicalGrade]:
    """Resolve a raw grade value.

    Numeric values are capped at 100 and mapped through the percentage
    breakpoints; letter grades are matched case-insensitively and given the
    midpoint estimate of their band.

    :param raw_value: Decrypted grade text, e.g. "87", "b+" or "N/A".
    :param config: Grading rules; defaults to DEFAULT_CONFIG.
    :return: The CanonicalGrade, or None when the value cannot be resolved.
    """
    config = config or DEFAULT_CONFIG
    if raw_value is not None and not isinstance(raw_value, str):
        raw_value = str(raw_value)
    if is_unavailable(raw_value, config):
        return None

    text = raw_value.strip()
    number = _parse_number(text)
    if number is not None:
        clamped = min(number, MAX_PERCENTAGE)
        return CanonicalGrade(
            letter=numeric_to_letter(clamped, config),
            numeric_estimate=clamped,
            is_numeric=True,
        )

    letter = text.upper()
    if letter in config.letter_midpoints:
        return CanonicalGrade(letter=letter, numeric_estimate=float(config.letter_midpoints[letter]))
    return None
