"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully validated,
normalized, and frozen. Runtime code reads fields directly - no .get() calls,
no fallback defaults.
"""

from datetime import datetime
from typing import Literal
from pydantic import ConfigDict, Field, field_validator
from hydroslice.schemas.base import SliceBaseModel
from hydroslice.schemas.param import parse_utc


class InternalSlicerConfig(SliceBaseModel):
    """Runtime slicer configuration."""
    oldest_time: datetime
    nearest_minutes: int = Field(ge=1, le=1440)
    n_workers: int = Field(ge=1)

    @field_validator("oldest_time", mode="before")
    @classmethod
    def coerce_oldest_time(cls, v):
        return parse_utc(v)


class InternalWriterConfig(SliceBaseModel):
    """Runtime writer configuration."""
    file_suffix: str = Field(min_length=1)
    missing_value: float
    netcdf_format: Literal["NETCDF4", "NETCDF4_CLASSIC", "NETCDF3_64BIT"]


class InternalLoggingConfig(SliceBaseModel):
    """Runtime logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class InternalConfig(SliceBaseModel):
    """Authoritative runtime configuration.

    Usage
    -----
        def __init__(self, config: InternalConfig):
            self.interval = config.slicer.nearest_minutes  # NOT .get()
    """

    slicer: InternalSlicerConfig
    writer: InternalWriterConfig
    logging: InternalLoggingConfig

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )
