"""Command-line interface modules for hydroslice.

This package contains the execution logic; scripts/ are thin wrappers.
"""

from hydroslice.cli.make_time_slice import run_time_slice, main

__all__ = ['run_time_slice', 'main']
