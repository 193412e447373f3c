"""ParamConfig: Expert defaults for the time-slice tool.

ALL tunable parameters have their defaults here. Runtime code never reads
ParamConfig directly - it only receives InternalConfig.
"""

from datetime import datetime, timezone
from typing import Literal
from pydantic import Field, field_validator
from hydroslice.schemas.base import SliceBaseModel


DEFAULT_OLDEST_TIME = "2015-04-15T00:00:00Z"


def parse_utc(value) -> datetime:
    """Parse an ISO timestamp (``Z`` suffix allowed) into an aware UTC datetime.

    Naive values are taken to be UTC.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if not isinstance(value, datetime):
        raise ValueError(f"Expected ISO timestamp, got {value!r}")
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# =============================================================================
# Nested Configuration Models
# =============================================================================

class SlicerConfig(SliceBaseModel):
    """File selection and snapping configuration."""
    oldest_time: datetime = Field(
        default_factory=lambda: parse_utc(DEFAULT_OLDEST_TIME),
        description="Files stamped before this UTC time are excluded",
    )
    nearest_minutes: int = Field(1, ge=1, le=1440, description="Snapping interval in minutes")
    n_workers: int = Field(16, ge=1, description="Thread pool size for per-file work")

    @field_validator("oldest_time", mode="before")
    @classmethod
    def coerce_oldest_time(cls, v):
        """Accept ISO strings and normalize to aware UTC."""
        return parse_utc(v)


class WriterConfig(SliceBaseModel):
    """Time-slice NetCDF writer configuration."""
    file_suffix: str = "usgsTimeSlice.ncdf"
    missing_value: float = -999999.0
    netcdf_format: Literal["NETCDF4", "NETCDF4_CLASSIC", "NETCDF3_64BIT"] = "NETCDF4"


class LoggingConfig(SliceBaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(SliceBaseModel):
    """Complete expert configuration with all defaults.

    Serves as the base layer in config resolution:

        internal_cfg = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    slicer: SlicerConfig = Field(default_factory=SlicerConfig)
    writer: WriterConfig = Field(default_factory=WriterConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
