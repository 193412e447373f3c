"""Failure types for the time-slice tool.

Contracts fail fast, loud, and once. Run-level conditions (missing
directories, nothing to process, bad filenames) have their own types so
callers can tell an operator problem from a programming error.
"""


class ContractViolation(RuntimeError):
    """Raised when a slicing invariant is violated.

    This indicates a bug in slicing logic, not bad user input.

    Key distinction:
    - ValueError: User/config error (handled by Pydantic)
    - ContractViolation: Slicing bug (programmer error)
    - TimeSliceError: Expected operational condition, reported in the result
    """
    pass


class TimeSliceError(Exception):
    """Base class for conditions reported through a SliceResult."""
    pass


class MissingDirectory(TimeSliceError):
    """An input or output directory does not exist."""

    def __init__(self, path, role: str):
        self.path = path
        self.role = role
        super().__init__(f"{role} directory does not exist: {path}")


class NoMatchingFiles(TimeSliceError):
    """The query label matched no file in the input directory."""

    def __init__(self, query: str, directory):
        self.query = query
        self.directory = directory
        super().__init__(f"No files to process for query '{query}' in {directory}")


class MalformedTimestamp(TimeSliceError, ValueError):
    """A filename does not carry a parseable timestamp."""
    pass
