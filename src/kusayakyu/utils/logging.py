"""Logging utilities."""

# Kusayakyu
# Copyright (C) 2025  Kusayakyu developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.


import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from kusayakyu.config import AppConfig
from kusayakyu.constants import LOG_FILE_NAME

# the logger format used
LOG_FMT = "LVL: %(levelname)s | MODULE: %(name)s | FUN: %(funcName)s | msg: %(message)s | ln#:%(lineno)d"


# --- Logging Setup ---
def setup_logger(logger_name: str) -> logging.Logger:
    """Set up logger for a python module.

    Sets up file handler and console handler

    Parameters
    ----------
    logger_name : str
        The name for the logger, __name__ is idiomatic

    Returns
    -------
    logging.Logger
        the created logger
    """
    config = AppConfig.from_env()
    level = logging.getLevelName(config.log_level)
    if not isinstance(level, int):
        level = logging.INFO

    lgr = logging.getLogger(name=logger_name)
    lgr.setLevel(level)
    # Remove any existing handlers on this logger to avoid duplicates
    for _h in list(lgr.handlers):
        lgr.removeHandler(_h)
    log_formatter = logging.Formatter(LOG_FMT)

    # File Handler, in <data dir>/logs
    file_handler = None
    try:
        log_folder = str(config.log_dir)
        os.makedirs(log_folder, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_folder, LOG_FILE_NAME),
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(log_formatter)
    except OSError:
        # If the folder is not writable, continue without file logging
        file_handler = None

    # Console Handler; only warnings reach the terminal the console shell runs in
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(max(level, logging.WARNING))
    # add handlers
    lgr.addHandler(console_handler)
    if file_handler:
        lgr.addHandler(file_handler)
    lgr.debug("logger %s initialized", logger_name)
    return lgr
