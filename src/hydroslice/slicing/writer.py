"""Write one USGS time slice to NetCDF.

Each slice file holds every station observed in the member files of one
snapped time, on a single ``stationIdInd`` dimension:

- ``stationId``: station number (string)
- ``discharge``: m^3/s
- ``discharge_quality``: 0-100
- ``queryTime``: seconds since 1970-01-01 UTC of the member file the
  record came from

When a station appears in more than one member file, the record from the
file with the latest query time wins.
"""

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Optional

import numpy as np
import pandas as pd
import xarray as xr

from hydroslice.contracts import assert_time_slice
from hydroslice.slicing.timestamps import EPOCH

if TYPE_CHECKING:
    from hydroslice.schemas import InternalConfig

__all__ = ['TimeSliceWriter', 'slice_filename']

logger = logging.getLogger(__name__)


def slice_filename(slice_time: datetime, nearest_minutes: int,
                   suffix: str = "usgsTimeSlice.ncdf") -> str:
    """Name of the slice file for a snapped time.

    Examples
    --------
    >>> slice_filename(datetime(2015, 4, 15, 12, 4, tzinfo=timezone.utc), 1)
    '2015-04-15_12:04:00.01min.usgsTimeSlice.ncdf'
    """
    return f"{slice_time:%Y-%m-%d_%H:%M:%S}.{nearest_minutes:02d}min.{suffix}"


class TimeSliceWriter:
    """Combine member-file records into one slice dataset and persist it.

    Parameters
    ----------
    config : InternalConfig
        Uses ``slicer.nearest_minutes``, ``slicer.oldest_time`` and the
        ``writer`` section.
    clock : callable, optional
        Returns the current UTC datetime (stamped into the file). Injectable
        for tests.
    """

    def __init__(self, config: "InternalConfig", clock=None):
        self.config = config
        self.nearest_minutes = config.slicer.nearest_minutes
        self.oldest_time = config.slicer.oldest_time
        self.suffix = config.writer.file_suffix
        self.missing_value = config.writer.missing_value
        self.netcdf_format = config.writer.netcdf_format
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def combine(self, frames: list[tuple[datetime, pd.DataFrame]]) -> pd.DataFrame:
        """Merge member records, one row per station.

        Parameters
        ----------
        frames : list of (datetime, DataFrame)
            Query time of each member file and its records, in file-name
            order. Later entries win ties on query time.

        Returns
        -------
        pd.DataFrame
            Columns site_no, discharge, quality, queryTime, sorted by site_no.
        """
        tagged = []
        for order, (query_time, records) in enumerate(frames):
            if records.empty:
                continue
            df = records.copy()
            df["queryTime"] = (query_time - EPOCH) // timedelta(seconds=1)
            df["_order"] = order
            tagged.append(df)

        if not tagged:
            return pd.DataFrame(columns=["site_no", "discharge", "quality", "queryTime"])

        combined = pd.concat(tagged, ignore_index=True)
        combined["_row"] = np.arange(len(combined))
        combined = (
            combined.sort_values(["queryTime", "_order", "_row"], kind="mergesort")
            .drop_duplicates(subset="site_no", keep="last")
            .sort_values("site_no", kind="mergesort")
            .drop(columns=["_order", "_row"])
            .reset_index(drop=True)
        )
        return combined

    def build_dataset(self, slice_time: datetime, records: pd.DataFrame) -> xr.Dataset:
        """Build the slice dataset from combined records."""
        n = len(records)
        ds = xr.Dataset(
            {
                "stationId": (
                    "stationIdInd",
                    records["site_no"].astype(str).to_numpy(dtype=object),
                    {"long_name": "USGS station identifier"},
                ),
                "discharge": (
                    "stationIdInd",
                    records["discharge"].to_numpy(dtype=np.float64),
                    {"units": "m^3/s", "long_name": "Discharge.cubic_meters_per_second"},
                ),
                "discharge_quality": (
                    "stationIdInd",
                    records["quality"].to_numpy(dtype=np.int16),
                    {"units": "-", "long_name": "Discharge quality 0 to 100 to be scaled by 100.",
                     "valid_range": np.array([0, 100], dtype=np.int16)},
                ),
                "queryTime": (
                    "stationIdInd",
                    records["queryTime"].to_numpy(dtype=np.int64),
                    {"units": "seconds since 1970-01-01 00:00:00 UTC",
                     "long_name": "Time of the observation file the record was read from"},
                ),
            },
            coords={"stationIdInd": np.arange(n, dtype=np.int32)},
            attrs={
                "fileUpdateTimeUTC": f"{self._clock():%Y-%m-%d_%H:%M:%S}",
                "sliceCenterTimeUTC": f"{slice_time:%Y-%m-%d_%H:%M:%S}",
                "sliceTimeResolutionMinutes": f"{self.nearest_minutes:02d}",
            },
        )
        return ds

    def write(self, slice_time: datetime, frames: list[tuple[datetime, pd.DataFrame]],
              out_dir: Path) -> Optional[Path]:
        """Write one slice file.

        The dataset goes to a hidden temporary file that is renamed into
        place only after a complete write.

        Returns
        -------
        Path or None
            Path of the written file, or None if no member had usable records.
        """
        records = self.combine(frames)
        if records.empty:
            logger.warning("No usable records for slice %s, not written", slice_time)
            return None

        ds = self.build_dataset(slice_time, records)
        assert_time_slice(ds, self.oldest_time)

        out_path = Path(out_dir) / slice_filename(slice_time, self.nearest_minutes, self.suffix)
        tmp_path = out_path.with_name(f".{out_path.name}.tmp")
        encoding = {
            "discharge": {"_FillValue": self.missing_value},
            "discharge_quality": {"_FillValue": None},
            "queryTime": {"_FillValue": None},
        }
        if self.netcdf_format.startswith("NETCDF4"):
            encoding["discharge"].update({"zlib": True, "complevel": 4})
        if self.netcdf_format != "NETCDF4":
            # classic data model has no int64
            encoding["queryTime"]["dtype"] = "int32"

        try:
            ds.to_netcdf(tmp_path, mode='w', engine='netcdf4',
                         format=self.netcdf_format, encoding=encoding)
            tmp_path.replace(out_path)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise

        logger.info("✓ Wrote slice %s (%d stations)", out_path.name, len(records))
        return out_path
