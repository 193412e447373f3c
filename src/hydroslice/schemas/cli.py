"""CLIConfig: Command-line operational overrides.

Minimal configuration for the parameters that commonly change between runs:
snapping interval, retention boundary, worker count, verbosity.
"""

from typing import Literal, Optional
from hydroslice.schemas.base import SliceBaseModel


class CLIConfig(SliceBaseModel):
    """Command-line configuration overrides.

    Highest priority in config resolution.

    Usage
    -----
        cli_cfg = CLIConfig(nearest_minutes=15, log_level="DEBUG")
        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    nearest_minutes: Optional[int] = None
    oldest_time: Optional[str] = None
    n_workers: Optional[int] = None
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None

    def to_internal_overrides(self) -> dict:
        """Convert CLI config to internal config structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        slicer_overrides = {}
        if self.nearest_minutes is not None:
            slicer_overrides["nearest_minutes"] = self.nearest_minutes
        if self.oldest_time is not None:
            slicer_overrides["oldest_time"] = self.oldest_time
        if self.n_workers is not None:
            slicer_overrides["n_workers"] = self.n_workers

        if slicer_overrides:
            overrides["slicer"] = slicer_overrides

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
