# File: src/parkinglot/infrastructure/logging_setup.py
"""Logging configuration. Logs go to stderr; stdout carries protocol responses."""

import logging
import os
import sys

from .config import ParkingLotSettings


def setup_logging(settings: ParkingLotSettings) -> logging.Logger:
    """Setup application logging configuration"""
    handlers = [logging.StreamHandler(sys.stderr)]

    if settings.log_file:
        log_dir = os.path.dirname(settings.log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        handlers.append(logging.FileHandler(settings.log_file))

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format=settings.log_format,
        handlers=handlers,
        force=True
    )
    return logging.getLogger("parkinglot")
