"""Time-slice stage contracts.

Enforce the guarantees a selection and a written slice make to whoever
consumes them downstream.
"""

from datetime import datetime, timedelta, timezone

import numpy as np
import xarray as xr

from hydroslice.contracts.base import require

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def assert_selection(members, oldest_time: datetime, interval: timedelta) -> None:
    """Enforce the selection contract.

    Every member must sit at or after the oldest boundary, and its slice time
    must be an interval boundary no more than half an interval away.

    Parameters
    ----------
    members : iterable of SliceMember
    oldest_time : datetime
    interval : timedelta

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    for member in members:
        stamp = member.file.timestamp
        require(
            stamp >= oldest_time,
            f"Selection contract violated: {member.file.name} ({stamp}) is before {oldest_time}"
        )
        require(
            (member.slice_time - EPOCH) % interval == timedelta(0),
            f"Selection contract violated: {member.slice_time} is not a {interval} boundary"
        )
        require(
            abs(member.slice_time - stamp) * 2 <= interval,
            f"Selection contract violated: {member.file.name} snapped too far to {member.slice_time}"
        )


def assert_time_slice(ds: xr.Dataset, oldest_time: datetime) -> None:
    """Enforce the slice-file contract.

    Called on the dataset just before it is written.

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    for var in ("stationId", "discharge", "discharge_quality", "queryTime"):
        require(
            var in ds.variables,
            f"Slice contract violated: missing '{var}' variable"
        )

    station_ids = ds["stationId"].values
    require(
        station_ids.size > 0,
        "Slice contract violated: no stations in slice"
    )
    require(
        len(set(station_ids.tolist())) == station_ids.size,
        "Slice contract violated: duplicate stationId"
    )

    quality = ds["discharge_quality"].values
    require(
        bool(np.all((quality >= 0) & (quality <= 100))),
        "Slice contract violated: discharge_quality outside 0-100"
    )

    oldest_seconds = (oldest_time - EPOCH) // timedelta(seconds=1)
    require(
        bool(np.all(ds["queryTime"].values >= oldest_seconds)),
        "Slice contract violated: queryTime before oldest boundary"
    )
