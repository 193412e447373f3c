"""Select real-time observation files and write them out as time slices.

Given a query label, an input directory and an output directory, the
selector:

1. Checks both directories exist (fail fast, nothing written otherwise)
2. Matches every file whose name contains the query label
3. Parses the UTC timestamp embedded in each filename
4. Drops files stamped before the oldest boundary
5. Snaps each remaining timestamp to the nearest interval boundary
6. Groups files by snapped time and writes one NetCDF slice per group

Per-file work (steps 3 and the record reads in 6) runs on a thread pool;
results are re-ordered by file name before grouping so the output does not
depend on scheduling.
"""

import logging
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Iterable, Union

import pandas as pd

from hydroslice.contracts import (
    MalformedTimestamp,
    MissingDirectory,
    NoMatchingFiles,
    assert_selection,
)
from hydroslice.slicing.reader import read_observation_file
from hydroslice.slicing.result import (
    ObservationFile,
    SkippedFile,
    SliceMember,
    SliceResult,
    SliceStatus,
)
from hydroslice.slicing.timestamps import parse_file_timestamp, snap_time
from hydroslice.slicing.writer import TimeSliceWriter

if TYPE_CHECKING:
    from hydroslice.schemas import InternalConfig

__all__ = ['TimeSliceSelector']

logger = logging.getLogger(__name__)


class TimeSliceSelector:
    """Turns a directory of timestamped observation files into time slices.

    Example usage::

        config = resolve_config(ParamConfig(), None, CLIConfig(nearest_minutes=15))
        selector = TimeSliceSelector(config)
        result = selector.run("20150415", "/data/usgs/realtime", "/data/usgs/slices")
        if result.status == SliceStatus.SUCCESS:
            print(result.summary())

    Parameters
    ----------
    config : InternalConfig
        Fully validated runtime configuration. ``slicer.oldest_time``,
        ``slicer.nearest_minutes`` and ``slicer.n_workers`` fix the query
        window for every run of this selector.
    writer : TimeSliceWriter, optional
        Slice writer. Created from ``config`` if None.
    reader : callable, optional
        ``reader(path) -> DataFrame`` for member records. Defaults to
        ``read_observation_file``. Injectable for tests.
    """

    def __init__(self, config: "InternalConfig", writer: TimeSliceWriter = None,
                 reader: Callable[[Path], pd.DataFrame] = None):
        self.config = config
        self.oldest_time = config.slicer.oldest_time
        self.interval = timedelta(minutes=config.slicer.nearest_minutes)
        self.n_workers = config.slicer.n_workers
        self.writer = writer or TimeSliceWriter(config)
        self._read = reader or read_observation_file

    # ========================================================================
    # Parallel map
    # ========================================================================

    def _map(self, fn, items: list) -> list:
        """Apply ``fn`` to every item, keeping input order."""
        if self.n_workers <= 1 or len(items) <= 1:
            return [fn(item) for item in items]
        workers = min(self.n_workers, len(items))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="slicer") as pool:
            return list(pool.map(fn, items))

    # ========================================================================
    # Stages
    # ========================================================================

    def check_directories(self, in_dir: Path, out_dir: Path) -> list[MissingDirectory]:
        """Return one MissingDirectory per absent directory, logging each once."""
        missing = []
        for path, role in ((in_dir, "Input"), (out_dir, "Output")):
            if not path.is_dir():
                problem = MissingDirectory(path, role)
                logger.warning("%s", problem)
                missing.append(problem)
        return missing

    def find_matching(self, query: str, in_dir: Path) -> list[Path]:
        """Files in ``in_dir`` whose name contains ``query``, sorted by name.

        Raises
        ------
        NoMatchingFiles
            If nothing matches.
        """
        matches = sorted(
            (p for p in in_dir.iterdir() if query in p.name and p.is_file()),
            key=lambda p: p.name,
        )
        if not matches:
            raise NoMatchingFiles(query, in_dir)
        logger.debug("Matched %d file(s) for '%s'", len(matches), query)
        return matches

    def describe(self, path: Path) -> Union[ObservationFile, SkippedFile]:
        """Parse one file's timestamp; malformed names come back as SkippedFile."""
        try:
            stamp = parse_file_timestamp(path.name)
            size = path.stat().st_size
        except (MalformedTimestamp, OSError) as e:
            logger.warning("Skipping %s: %s", path.name, e)
            return SkippedFile(path=path, reason=str(e))
        return ObservationFile(path=path, timestamp=stamp, size_bytes=size)

    def select(self, paths: Iterable[Path]) -> tuple[list[SliceMember], list[SkippedFile]]:
        """Parse, filter and snap candidate files.

        Returns
        -------
        members : list of SliceMember
            Retained files with their snapped times, in file-name order.
        skipped : list of SkippedFile
            Malformed files and files older than the boundary.
        """
        members, skipped = [], []
        for item in self._map(self.describe, list(paths)):
            if isinstance(item, SkippedFile):
                skipped.append(item)
            elif item.timestamp < self.oldest_time:
                logger.debug("Excluding %s: %s is before %s",
                             item.name, item.timestamp, self.oldest_time)
                skipped.append(SkippedFile(
                    path=item.path, reason=f"before oldest boundary {self.oldest_time}"
                ))
            else:
                members.append(SliceMember(
                    file=item, slice_time=snap_time(item.timestamp, self.interval)
                ))

        assert_selection(members, self.oldest_time, self.interval)
        return members, skipped

    def group(self, members: list[SliceMember]) -> dict:
        """Snapped time -> members, both in ascending order."""
        groups = defaultdict(list)
        for member in members:
            groups[member.slice_time].append(member)
        return dict(sorted(groups.items()))

    def _load(self, member: SliceMember):
        try:
            return self._read(member.file.path)
        except (OSError, ValueError) as e:
            logger.warning("Skipping %s: unreadable records (%s)", member.file.name, e)
            return SkippedFile(path=member.file.path, reason=f"unreadable records: {e}")

    # ========================================================================
    # Entry point
    # ========================================================================

    def run(self, query: str, in_dir: Path | str, out_dir: Path | str) -> SliceResult:
        """Run one time-slice batch.

        Parameters
        ----------
        query : str
            Label matched as a substring against input filenames.
        in_dir, out_dir : Path or str
            Existing input and output directories.

        Returns
        -------
        SliceResult
            ``failed`` if a directory is missing (nothing written),
            ``empty`` if no file matched or none survived filtering,
            ``success`` otherwise.
        """
        in_dir, out_dir = Path(in_dir), Path(out_dir)

        missing = self.check_directories(in_dir, out_dir)
        if missing:
            return SliceResult(status=SliceStatus.FAILED, query=query,
                               messages=[str(m) for m in missing])

        try:
            paths = self.find_matching(query, in_dir)
        except NoMatchingFiles as e:
            logger.info("%s", e)
            return SliceResult(status=SliceStatus.EMPTY, query=query, messages=[str(e)])

        members, skipped = self.select(paths)
        if not members:
            message = (f"No files to process for query '{query}': "
                       f"all {len(paths)} matched file(s) were skipped")
            logger.info("%s", message)
            return SliceResult(status=SliceStatus.EMPTY, query=query,
                               skipped=skipped, messages=[message])

        loaded = dict(zip((m.file.path for m in members), self._map(self._load, members)))
        slice_paths = {}
        for slice_time, group in self.group(members).items():
            frames = []
            for member in group:
                records = loaded[member.file.path]
                if isinstance(records, SkippedFile):
                    skipped.append(records)
                    continue
                frames.append((member.file.timestamp, records))

            written = self.writer.write(slice_time, frames, out_dir) if frames else None
            if written is not None:
                slice_paths[slice_time] = written

        logger.info("Query '%s': %d file(s) -> %d slice(s), %d skipped",
                    query, len(members), len(slice_paths), len(skipped))
        return SliceResult(status=SliceStatus.SUCCESS, query=query, members=members,
                           slice_paths=slice_paths, skipped=skipped)
