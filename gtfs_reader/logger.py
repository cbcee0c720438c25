"""Logging utilities for the GTFS reader."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

GtfsLogger = logging.getLogger("GtfsLogger")


def setup_logging(
    info_log_filename: Optional[Path] = None,
    debug_log_filename: Optional[Path] = None,
    std_out_level: str = "info",
):
    """Sets up the GtfsLogger w.r.t. the debug file location and if logging to console.

    Called by the test_logging fixture in conftest.py and can be called by the user to setup
    logging for their session. If called multiple times, the logger will be reset.

    Args:
        info_log_filename: the location of the log file that will get created to add the INFO log.
            The INFO Log is terse, just which files were read and how many rows failed.
            Defaults to file in cwd() `gtfs_reader_[datetime].info.log`.
        debug_log_filename: the location of the log file that will get created to add the DEBUG
            log. The DEBUG log is very noisy, for debugging. Defaults to file in cwd()
            `gtfs_reader_[datetime].debug.log`.
        std_out_level: the level of logging to the console. One of "info", "warning", "debug".
            Defaults to "info" but will be set to ERROR if nothing provided matches.
    """
    # add function variable so that we know if logging has been called
    setup_logging.called = True

    timestamp = datetime.now().strftime("%Y_%m_%d__%H_%M_%S")
    debug_log_filename = debug_log_filename or Path.cwd() / f"gtfs_reader_{timestamp}.debug.log"
    info_log_filename = info_log_filename or Path.cwd() / f"gtfs_reader_{timestamp}.info.log"

    # Clear handles if any exist already
    GtfsLogger.handlers = []

    GtfsLogger.setLevel(logging.DEBUG)

    FORMAT = logging.Formatter(
        "%(asctime)-15s %(levelname)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S,"
    )

    info_file_handler = logging.FileHandler(Path(info_log_filename))
    info_file_handler.setLevel(logging.INFO)
    info_file_handler.setFormatter(FORMAT)
    GtfsLogger.addHandler(info_file_handler)

    debug_log_handler = logging.FileHandler(Path(debug_log_filename))
    debug_log_handler.setLevel(logging.DEBUG)
    debug_log_handler.setFormatter(FORMAT)
    GtfsLogger.addHandler(debug_log_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(FORMAT)
    if std_out_level in ("debug", "info"):
        console_handler.setLevel(logging.DEBUG)
    elif std_out_level == "warning":
        console_handler.setLevel(logging.WARNING)
    else:
        console_handler.setLevel(logging.ERROR)
    GtfsLogger.addHandler(console_handler)
