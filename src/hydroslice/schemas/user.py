"""UserConfig: Forgiving, minimal user-facing configuration.

Accepts user inputs with aliases for common naming patterns
(e.g., NEAREST_MIN → nearest_minutes, OLDEST_TIME → oldest_time).

Users only specify what they want to override from the expert defaults.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from hydroslice.schemas.base import SliceBaseModel


class UserSlicerConfig(SliceBaseModel):
    """User-facing slicer config."""
    oldest_time: Optional[str] = None
    nearest_minutes: Optional[int] = None
    n_workers: Optional[int] = None


class UserWriterConfig(SliceBaseModel):
    """User-facing writer config."""
    file_suffix: Optional[str] = None
    missing_value: Optional[float] = None
    netcdf_format: Optional[str] = None


class UserConfig(SliceBaseModel):
    """User-facing configuration schema.

    Usage
    -----
        user_cfg = UserConfig(
            NEAREST_MIN=15,
            OLDEST_TIME="2016-01-01T00:00:00Z",
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    # Flat aliases
    oldest_time: Optional[str] = Field(None, alias="OLDEST_TIME")
    nearest_minutes: Optional[int] = Field(None, alias="NEAREST_MIN")
    n_workers: Optional[int] = Field(None, alias="N_WORKERS")
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = Field(
        None, alias="LOG_LEVEL"
    )

    # Nested overrides (advanced users)
    slicer: Optional[UserSlicerConfig] = None
    writer: Optional[UserWriterConfig] = None

    model_config = SliceBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown legacy keys)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("oldest_time", mode="before")
    @classmethod
    def coerce_oldest_time(cls, v):
        """Accept datetime objects as well as strings."""
        if v is not None and not isinstance(v, str):
            return v.isoformat()
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept lowercase level names."""
        if isinstance(v, str):
            return v.upper().strip()
        return v

    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        slicer = {}
        if self.oldest_time is not None:
            slicer["oldest_time"] = self.oldest_time
        if self.nearest_minutes is not None:
            slicer["nearest_minutes"] = self.nearest_minutes
        if self.n_workers is not None:
            slicer["n_workers"] = self.n_workers

        # Merge with explicit slicer config
        if self.slicer is not None:
            slicer.update(self.slicer.model_dump(exclude_none=True))

        if slicer:
            overrides["slicer"] = slicer

        if self.writer is not None:
            writer = self.writer.model_dump(exclude_none=True)
            if writer:
                overrides["writer"] = writer

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
