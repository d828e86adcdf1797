# -*- coding: utf-8 -*-
"""Exceptions raised by the academic progress core."""


class ProgressError(Exception):
    """Base class for academic progress errors."""


class MalformedRecordError(ProgressError, ValueError):
    """Raised when a grade record is missing a field needed for grouping."""

    def __init__(self, record_id: object, field_name: str, detail: str = "") -> None:
        self.record_id = record_id
        self.field_name = field_name
        message = f"Grade record {record_id!r} is missing required field '{field_name}'"
        if detail:
            message = f"Grade record {record_id!r} has invalid field '{field_name}': {detail}"
        super().__init__(message)
