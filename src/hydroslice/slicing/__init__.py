"""Time-slice selection, reading and writing."""

from hydroslice.slicing.result import (
    SliceStatus,
    ObservationFile,
    SliceMember,
    SkippedFile,
    SliceResult,
)
from hydroslice.slicing.timestamps import parse_file_timestamp, snap_time
from hydroslice.slicing.reader import read_observation_file
from hydroslice.slicing.writer import TimeSliceWriter, slice_filename
from hydroslice.slicing.selector import TimeSliceSelector

__all__ = [
    'SliceStatus',
    'ObservationFile',
    'SliceMember',
    'SkippedFile',
    'SliceResult',
    'parse_file_timestamp',
    'snap_time',
    'read_observation_file',
    'TimeSliceWriter',
    'slice_filename',
    'TimeSliceSelector',
]
