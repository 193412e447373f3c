"""Core time-slice execution logic.

Usage::

    hydroslice <queryTime> <inPath> <outPath> [--nearest-min N] [--oldest-time ISO]
               [--workers N] [--config user_config.py] [--log-file PATH] [-v]

The run prints its summary to stdout on success. A missing directory is
reported as a warning on stderr and the process exits with status 1 without
writing anything; a query that matches nothing is not an error.
"""

import sys
import argparse
import logging
import importlib.util
from pathlib import Path
from typing import Optional, Dict, Any

from hydroslice.schemas import resolve_config, ParamConfig, UserConfig, CLIConfig, InternalConfig
from hydroslice.slicing import TimeSliceSelector, SliceResult, SliceStatus

__all__ = ['run_time_slice', 'main']

logger = logging.getLogger(__name__)


def load_user_config_dict(config_path: str) -> dict:
    """Load user config dict from Python file.

    Returns the raw dict before Pydantic validation.

    Raises
    ------
    FileNotFoundError
        If config file does not exist.
    ValueError
        If no CONFIG dict found in file.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    spec = importlib.util.spec_from_file_location("config_module", path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Could not load config module from {path}")

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    # Find CONFIG dict
    for name in dir(module):
        if name.startswith('CONFIG'):
            obj = getattr(module, name)
            if isinstance(obj, dict):
                return obj

    raise ValueError(f"No CONFIG dict found in {path}")


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    """Configure the root logger: console (stderr) and optional file handler."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Clear existing handlers and add new ones
    root = logging.getLogger()
    root.setLevel(log_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    root.addHandler(ch)

    if log_file is not None:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        root.addHandler(fh)


def build_config(cli_args: Optional[Dict[str, Any]] = None,
                 user_config_path: Optional[str] = None) -> InternalConfig:
    """Resolve runtime configuration (Param < User < CLI)."""
    param_cfg = ParamConfig()

    user_cfg = None
    if user_config_path:
        user_cfg = UserConfig.model_validate(load_user_config_dict(user_config_path))

    cli_dict = {k: v for k, v in (cli_args or {}).items() if v is not None}
    cli_cfg = CLIConfig.model_validate(cli_dict) if cli_dict else CLIConfig()

    return resolve_config(param_cfg, user_cfg, cli_cfg)


def run_time_slice(
    query: str,
    in_path: str,
    out_path: str,
    cli_args: Optional[Dict[str, Any]] = None,
    user_config_path: Optional[str] = None,
) -> SliceResult:
    """Make USGS time slices for one query label.

    Parameters
    ----------
    query : str
        Label matched as a substring against observation filenames.
    in_path : str
        Directory of real-time observation files.
    out_path : str
        Directory receiving the slice files.
    cli_args : dict, optional
        Overrides. Keys: nearest_minutes, oldest_time, n_workers, log_level.
    user_config_path : str, optional
        Python file with a CONFIG dict.

    Returns
    -------
    SliceResult

    Examples
    --------
    ::

        result = run_time_slice("20150415_12", "/data/realtime", "/data/slices",
                                cli_args={"nearest_minutes": 15})
        print(result)
    """
    config = build_config(cli_args, user_config_path)
    logger.debug("Resolved configuration: %s", config.model_dump_json())
    return TimeSliceSelector(config).run(query, in_path, out_path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hydroslice",
        description="Make USGS real-time observation time slices",
    )
    parser.add_argument("query_time", help="Label matched against observation filenames")
    parser.add_argument("in_path", help="Directory of observation files")
    parser.add_argument("out_path", help="Directory for time-slice files")
    parser.add_argument("--nearest-min", type=int, help="Snapping interval in minutes")
    parser.add_argument("--oldest-time", help="Oldest file time kept (ISO, UTC)")
    parser.add_argument("--workers", type=int, help="Worker threads")
    parser.add_argument("--config", help="Path to user config file")
    parser.add_argument("--log-file", help="Also log to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    cli_args = {
        "nearest_minutes": args.nearest_min,
        "oldest_time": args.oldest_time,
        "n_workers": args.workers,
        "log_level": "DEBUG" if args.verbose else None,
    }
    config = build_config(cli_args, args.config)
    setup_logging(config.logging.level, Path(args.log_file) if args.log_file else None)

    result = TimeSliceSelector(config).run(args.query_time, args.in_path, args.out_path)

    if result.status == SliceStatus.SUCCESS:
        print(result)
    elif result.status == SliceStatus.FAILED and not logger.isEnabledFor(logging.WARNING):
        # the per-directory warnings were filtered out by the configured level
        for message in result.messages:
            logger.error("%s", message)
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
