"""Directory preconditions and empty queries."""

import logging
import pytest

from hydroslice.slicing import TimeSliceSelector, SliceStatus

pytestmark = [pytest.mark.unit, pytest.mark.slicing]


def _warnings_naming(caplog, path):
    return [r for r in caplog.records
            if r.levelno == logging.WARNING and str(path) in r.getMessage()]


def test_missing_input_dir_fails_with_one_warning(internal_config, tmp_path, out_dir, caplog):
    missing = tmp_path / "nope"
    selector = TimeSliceSelector(internal_config)

    with caplog.at_level(logging.WARNING):
        result = selector.run("20150415", missing, out_dir)

    assert result.status == SliceStatus.FAILED
    assert not result.ok
    assert len(_warnings_naming(caplog, missing)) == 1
    assert list(out_dir.iterdir()) == []


def test_missing_output_dir_fails_without_reading_input(internal_config, tmp_path,
                                                       write_obs, caplog):
    write_obs("20150415_1200.csv")
    missing = tmp_path / "no_out"
    selector = TimeSliceSelector(internal_config)

    with caplog.at_level(logging.WARNING):
        result = selector.run("20150415", tmp_path / "realtime", missing)

    assert result.status == SliceStatus.FAILED
    assert len(_warnings_naming(caplog, missing)) == 1
    assert result.members == []
    assert not missing.exists()


def test_both_dirs_missing_warns_once_for_each(internal_config, tmp_path, caplog):
    a, b = tmp_path / "a", tmp_path / "b"
    selector = TimeSliceSelector(internal_config)

    with caplog.at_level(logging.WARNING):
        result = selector.run("x", a, b)

    assert result.status == SliceStatus.FAILED
    assert len(_warnings_naming(caplog, a)) == 1
    assert len(_warnings_naming(caplog, b)) == 1
    assert len(result.messages) == 2


def test_input_path_that_is_a_file_counts_as_missing(internal_config, tmp_path, out_dir):
    f = tmp_path / "file.txt"
    f.write_text("x")
    result = TimeSliceSelector(internal_config).run("x", f, out_dir)
    assert result.status == SliceStatus.FAILED


def test_no_matching_files_is_empty_not_error(internal_config, in_dir, out_dir,
                                             write_obs, caplog):
    write_obs("20150415_1200.csv")
    selector = TimeSliceSelector(internal_config)

    with caplog.at_level(logging.DEBUG):
        result = selector.run("20160101", in_dir, out_dir)

    assert result.status == SliceStatus.EMPTY
    assert result.ok
    diagnostics = [r for r in caplog.records if "No files to process" in r.getMessage()]
    assert len(diagnostics) == 1
    assert list(out_dir.iterdir()) == []
    assert result.summary().empty


def test_empty_input_dir_is_empty_result(internal_config, in_dir, out_dir):
    result = TimeSliceSelector(internal_config).run("2015", in_dir, out_dir)
    assert result.status == SliceStatus.EMPTY
    assert "No files to process" in result.messages[0]


def test_subdirectories_are_not_matched(internal_config, in_dir, out_dir):
    (in_dir / "20150415_1200.d").mkdir()
    result = TimeSliceSelector(internal_config).run("20150415", in_dir, out_dir)
    assert result.status == SliceStatus.EMPTY


def test_all_matches_filtered_is_empty(internal_config, in_dir, out_dir, write_obs, caplog):
    write_obs("20150414_2359.csv")
    write_obs("junk_20150414.csv")

    with caplog.at_level(logging.INFO):
        result = TimeSliceSelector(internal_config).run("2015041", in_dir, out_dir)

    assert result.status == SliceStatus.EMPTY
    assert len(result.skipped) == 2
    assert list(out_dir.iterdir()) == []
