# File: src/parkinglot/domain/models.py
"""
Domain Models for the Parking Lot Command Processor

This module contains:
1. Value Objects: Car, LotResult
2. Enums: ResultStatus for the outcome of lot operations
3. Domain Events: CarParkedEvent, CarLeftEvent
4. Domain Exceptions: ParkingLotError hierarchy

Lot operations never raise for expected outcomes (full lot, bad slot index,
empty slot). They return a LotResult tagged with a ResultStatus and the
application layer turns it into a response line.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict
import uuid


# ============================================================================
# DOMAIN EXCEPTIONS
# ============================================================================

class ParkingLotError(Exception):
    """Base exception for parking lot errors"""
    pass


class ParkingLotInvariantError(ParkingLotError):
    """Raised when the lot's internal bookkeeping no longer matches its slots"""
    pass


class InvalidCommandError(ParkingLotError):
    """Raised when a command line cannot be turned into a valid request"""
    pass


# ============================================================================
# VALUE OBJECTS
# ============================================================================

@dataclass(frozen=True)  # Value objects are immutable
class Car:
    """
    Value Object: a parked car
    The plate identifies the car, the color is free text shared by many cars
    """
    plate: str
    color: str

    def __post_init__(self):
        """Validate car attributes after initialization"""
        if not self.plate or not self.plate.strip():
            raise ValueError("Car plate cannot be empty")
        if not self.color or not self.color.strip():
            raise ValueError("Car color cannot be empty")

    def __str__(self) -> str:
        return f"{self.plate} ({self.color})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {"plate": self.plate, "color": self.color}


class ResultStatus(Enum):
    """Outcome of a lot operation"""
    OK = "ok"
    FULL = "full"
    OUT_OF_RANGE = "out_of_range"
    ALREADY_EMPTY = "already_empty"


@dataclass(frozen=True)
class LotResult:
    """
    Value Object: tagged result of a lot operation

    ``value`` depends on the operation: the 0-based slot index for park,
    the removed Car for leave, a bool for is_slot_empty.
    """
    status: ResultStatus
    value: Any = None

    @property
    def is_ok(self) -> bool:
        return self.status is ResultStatus.OK

    @classmethod
    def ok(cls, value: Any = None) -> 'LotResult':
        return cls(ResultStatus.OK, value)

    @classmethod
    def full(cls) -> 'LotResult':
        return cls(ResultStatus.FULL)

    @classmethod
    def out_of_range(cls, index: int) -> 'LotResult':
        return cls(ResultStatus.OUT_OF_RANGE, index)

    @classmethod
    def already_empty(cls) -> 'LotResult':
        return cls(ResultStatus.ALREADY_EMPTY)


# ============================================================================
# DOMAIN EVENTS
# ============================================================================

class DomainEvent(ABC):
    """
    Base class for all domain events
    Events represent something that happened in the lot
    """

    def __init__(self):
        self.event_id = str(uuid.uuid4())
        self.timestamp = datetime.now()

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization"""
        pass


class CarParkedEvent(DomainEvent):
    """Event raised when a car is parked"""

    def __init__(self, slot_index: int, car: Car):
        super().__init__()
        self.slot_index = slot_index
        self.car = car

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": "car.parked",
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "data": {
                "slot_number": self.slot_index + 1,
                **self.car.to_dict()
            }
        }


class CarLeftEvent(DomainEvent):
    """Event raised when a car leaves its slot"""

    def __init__(self, slot_index: int, car: Car):
        super().__init__()
        self.slot_index = slot_index
        self.car = car

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": "car.left",
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "data": {
                "slot_number": self.slot_index + 1,
                **self.car.to_dict()
            }
        }


def format_slot_number(index: int) -> str:
    """Convert an internal 0-based slot index to its external 1-based label"""
    return str(index + 1)
