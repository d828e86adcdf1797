# -*- coding: utf-8 -*-
"""4.0-scale grade point average."""
from __future__ import annotations

import typing as t

from .config import DEFAULT_CONFIG, GradingConfig


def point_value(letter: str, config: GradingConfig = DEFAULT_CONFIG) -> float:
    """Return the 4.0-scale points for one letter grade.

    :raises ValueError: If the letter is not on the scale.
    """
    key = letter.strip().upper()
    try:
        return float(config.gpa_scale[key])
    except KeyError:
        raise ValueError(
            f"Unknown letter grade {letter!r}. Expected one of: {', '.join(config.gpa_scale)}"
        ) from None


def calculate_gpa(letters: t.Iterable[str], config: t.Optional[GradingConfig] = None) -> float:
    """Unweighted mean of the point values of ``letters``.

    Course credit weight is not taken into account. An empty input yields 0.0,
    so callers must check the course count to tell "no grades" from "failing".
    """
    config = config or DEFAULT_CONFIG
    points = [point_value(letter, config) for letter in letters]
    if not points:
        return 0.0
    return sum(points) / len(points)
