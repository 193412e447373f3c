"""Pydantic configuration schemas for hydroslice.

Exports
-------
resolve_config : function
    Single entrypoint for configuration resolution
InternalConfig : class
    Fully validated, authoritative runtime configuration
ParamConfig : class
    Expert defaults (complete)
UserConfig : class
    User-facing configuration (forgiving, minimal)
CLIConfig : class
    Command-line operational overrides
"""

from hydroslice.schemas.resolve import resolve_config
from hydroslice.schemas.internal import InternalConfig
from hydroslice.schemas.param import ParamConfig
from hydroslice.schemas.user import UserConfig
from hydroslice.schemas.cli import CLIConfig

__all__ = [
    'resolve_config',
    'InternalConfig',
    'ParamConfig',
    'UserConfig',
    'CLIConfig',
]
