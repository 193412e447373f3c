"""Result types for a time-slice run.

A run ends in exactly one of three states, carried by ``SliceResult.status``
instead of by whatever happened to be printed along the way.
"""

from datetime import datetime
from enum import Enum
from pathlib import Path

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

__all__ = ['SliceStatus', 'ObservationFile', 'SliceMember', 'SkippedFile', 'SliceResult']


class SliceStatus(str, Enum):
    """Outcome of one time-slice run.

    SUCCESS: at least one file selected (slices may still be empty of records)
    EMPTY: nothing to process, not an error
    FAILED: a precondition failed, nothing was written
    """
    SUCCESS = "success"
    EMPTY = "empty"
    FAILED = "failed"


class _ResultModel(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class ObservationFile(_ResultModel):
    """One observation file discovered in the input directory."""
    path: Path
    timestamp: datetime
    size_bytes: int

    @property
    def name(self) -> str:
        return self.path.name


class SliceMember(_ResultModel):
    """An observation file assigned to a snapped slice time."""
    file: ObservationFile
    slice_time: datetime


class SkippedFile(_ResultModel):
    """A matched file left out of the output, with the reason."""
    path: Path
    reason: str


class SliceResult(_ResultModel):
    """Everything a run produced.

    Attributes
    ----------
    status : SliceStatus
        success, empty or failed.
    query : str
        The query label the run was started with.
    members : list of SliceMember
        Selected files and their snapped times, sorted by file name.
    slice_paths : dict
        Snapped time -> written slice file.
    skipped : list of SkippedFile
        Matched files omitted from the output.
    messages : list of str
        Diagnostics (warnings for failures, the no-match notice for empty runs).
    """
    status: SliceStatus
    query: str
    members: list[SliceMember] = Field(default_factory=list)
    slice_paths: dict[datetime, Path] = Field(default_factory=dict)
    skipped: list[SkippedFile] = Field(default_factory=list)
    messages: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True unless a precondition failed."""
        return self.status != SliceStatus.FAILED

    @property
    def written(self) -> list[Path]:
        return [self.slice_paths[t] for t in sorted(self.slice_paths)]

    def summary(self) -> pd.DataFrame:
        """Tabulate selected files against the slices they landed in.

        Returns
        -------
        pd.DataFrame
            Columns: file, file_time, slice_time, slice_path. ``slice_path``
            is None for slices that were not written.
        """
        paths = [self.slice_paths.get(m.slice_time) for m in self.members]
        return pd.DataFrame({
            "file": [m.file.name for m in self.members],
            "file_time": [m.file.timestamp for m in self.members],
            "slice_time": [m.slice_time for m in self.members],
            # object dtype keeps None for unwritten slices
            "slice_path": pd.Series([str(p) if p else None for p in paths], dtype=object),
        }, columns=["file", "file_time", "slice_time", "slice_path"])

    def __str__(self) -> str:
        if self.status != SliceStatus.SUCCESS:
            return "\n".join([f"Time slice run '{self.query}': {self.status.value}"] + self.messages)

        table = self.summary()
        table["slice_path"] = table["slice_path"].where(table["slice_path"].notna(), "(not written)")
        lines = [
            f"Time slice run '{self.query}': {len(self.members)} files -> "
            f"{len(self.slice_paths)} slices ({len(self.skipped)} skipped)",
            table.to_string(index=False),
        ]
        return "\n".join(lines)
