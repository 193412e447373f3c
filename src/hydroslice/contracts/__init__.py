"""Slicing contracts and failure types.

Key principle:
- Pydantic validates config correctness
- Contracts validate slicing correctness
- TimeSliceError subclasses describe expected operational conditions
"""

from hydroslice.contracts.failure import (
    ContractViolation,
    TimeSliceError,
    MissingDirectory,
    NoMatchingFiles,
    MalformedTimestamp,
)
from hydroslice.contracts.base import require
from hydroslice.contracts.timeslice import assert_selection, assert_time_slice

__all__ = [
    "ContractViolation",
    "TimeSliceError",
    "MissingDirectory",
    "NoMatchingFiles",
    "MalformedTimestamp",
    "require",
    "assert_selection",
    "assert_time_slice",
]
