import pytest
from datetime import datetime, timezone
from pathlib import Path

from hydroslice.slicing import (
    ObservationFile,
    SkippedFile,
    SliceMember,
    SliceResult,
    SliceStatus,
)

pytestmark = pytest.mark.unit

UTC = timezone.utc


def _member(name, stamp, slice_time):
    return SliceMember(
        file=ObservationFile(path=Path("/in") / name, timestamp=stamp, size_bytes=10),
        slice_time=slice_time,
    )


@pytest.fixture
def success_result():
    t0 = datetime(2015, 4, 15, 12, 0, tzinfo=UTC)
    t1 = datetime(2015, 4, 15, 12, 1, tzinfo=UTC)
    return SliceResult(
        status=SliceStatus.SUCCESS,
        query="20150415",
        members=[
            _member("20150415_120010.csv", datetime(2015, 4, 15, 12, 0, 10, tzinfo=UTC), t0),
            _member("20150415_120050.csv", datetime(2015, 4, 15, 12, 0, 50, tzinfo=UTC), t1),
        ],
        slice_paths={t0: Path("/out/2015-04-15_12:00:00.01min.usgsTimeSlice.ncdf")},
        skipped=[SkippedFile(path=Path("/in/20150415_bad.csv"), reason="No timestamp")],
    )


def test_summary_columns_and_rows(success_result):
    df = success_result.summary()
    assert list(df.columns) == ["file", "file_time", "slice_time", "slice_path"]
    assert df["file"].tolist() == ["20150415_120010.csv", "20150415_120050.csv"]
    assert df["slice_path"].tolist()[0].endswith("12:00:00.01min.usgsTimeSlice.ncdf")
    assert df["slice_path"].dtype == object
    assert df["slice_path"].tolist()[1] is None
    assert df["slice_path"].isna().tolist() == [False, True]


def test_str_of_success_reports_counts(success_result):
    text = str(success_result)
    assert "2 files -> 1 slices (1 skipped)" in text
    assert "20150415_120050.csv" in text


def test_str_marks_unwritten_slices(success_result):
    lines = str(success_result).splitlines()
    unwritten = [line for line in lines if "20150415_120050.csv" in line]
    assert len(unwritten) == 1
    assert "(not written)" in unwritten[0]
    assert "(not written)" not in "\n".join(line for line in lines if "20150415_120010.csv" in line)


def test_written_is_sorted_by_slice_time():
    t0 = datetime(2015, 4, 15, 12, 0, tzinfo=UTC)
    t1 = datetime(2015, 4, 15, 12, 1, tzinfo=UTC)
    result = SliceResult(status=SliceStatus.SUCCESS, query="q",
                         slice_paths={t1: Path("b"), t0: Path("a")})
    assert result.written == [Path("a"), Path("b")]


@pytest.mark.parametrize("status, ok", [
    (SliceStatus.SUCCESS, True),
    (SliceStatus.EMPTY, True),
    (SliceStatus.FAILED, False),
])
def test_ok_only_false_when_failed(status, ok):
    assert SliceResult(status=status, query="q").ok is ok


def test_str_of_empty_includes_message():
    result = SliceResult(status=SliceStatus.EMPTY, query="q",
                         messages=["No files to process for query 'q' in /in"])
    assert str(result).splitlines() == [
        "Time slice run 'q': empty",
        "No files to process for query 'q' in /in",
    ]


def test_result_is_immutable():
    result = SliceResult(status=SliceStatus.EMPTY, query="q")
    with pytest.raises(Exception):
        result.query = "other"
