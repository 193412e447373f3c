"""`hydroslice` - USGS real-time observation time slices.

Subpackages:
- slicing: Timestamp parsing, file selection, slice writing
- schemas: Layered pydantic configuration
- contracts: Invariant checks on slice output
- cli: Command-line entry point
"""

__version__ = "0.1.0"
