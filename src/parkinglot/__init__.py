"""
Parking Lot Command Processor

A fixed-capacity parking lot driven by a line-oriented text protocol.
"""

from .domain.models import Car, LotResult, ResultStatus
from .domain.aggregates import ParkingLot
from .application.manager import ParkingLotManager

__version__ = "1.0.0"

__all__ = ["Car", "LotResult", "ResultStatus", "ParkingLot", "ParkingLotManager"]
