"""hydroslice user configuration.

Pass with --config to override the expert defaults in
src/hydroslice/schemas/param.py.

Usage:
    python scripts/make_usgs_time_slice.py 20150415 ./realtime ./slices --config scripts/user_config.py
"""

CONFIG = {
    # ========================================================================
    # QUERY WINDOW
    # ========================================================================
    "OLDEST_TIME": "2015-04-15T00:00:00Z",  # Files stamped earlier are dropped
    "NEAREST_MIN": 1,         # Snap file times to this many minutes

    # ========================================================================
    # EXECUTION
    # ========================================================================
    "N_WORKERS": 16,          # Threads for per-file parsing and reading
    "LOG_LEVEL": "INFO",

    # ========================================================================
    # OUTPUT (advanced)
    # ========================================================================
    "writer": {
        "file_suffix": "usgsTimeSlice.ncdf",
        "missing_value": -999999.0,
    },
}
