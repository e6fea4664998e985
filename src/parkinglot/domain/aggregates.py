# File: src/parkinglot/domain/aggregates.py
"""
Aggregate Root for the Parking Lot Command Processor

ParkingLot owns a fixed number of slots and all allocation bookkeeping.

Key Concepts:
- Slots are a fixed-size list of optional Car values, indexed from 0
- The lowest index wins, both when allocating a free slot and when searching
- Expected failures are returned as LotResult values, not raised
- Domain events are collected for every park and leave
"""

from typing import Any, Dict, List, Optional
import logging

from .models import (
    Car, LotResult, DomainEvent, CarParkedEvent, CarLeftEvent,
    ParkingLotInvariantError
)


STATUS_HEADER = "Slot No.\tID\t\tColor"
EMPTY_SLOT_MARKER = "(empty)"

# Upper bound on slots per lot; the slot list is allocated eagerly
MAX_CAPACITY = 10000


# ============================================================================
# BASE AGGREGATE ROOT
# ============================================================================

class AggregateRoot:
    """Tracks a mutation counter and the events raised since the last drain"""

    def __init__(self):
        self._version: int = 1
        self._pending: List[DomainEvent] = []
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def version(self) -> int:
        return self._version

    @property
    def has_changes(self) -> bool:
        return bool(self._pending)

    def _record(self, event: DomainEvent) -> None:
        """Bump the version and queue the event for the mutation just applied"""
        self._version += 1
        self._pending.append(event)
        self._logger.debug(f"Recorded {event.__class__.__name__} (version {self._version})")

    def clear_events(self) -> List[DomainEvent]:
        """Return queued events in raise order and forget them"""
        events, self._pending = self._pending, []
        return events


# ============================================================================
# PARKING LOT AGGREGATE
# ============================================================================

class ParkingLot(AggregateRoot):
    """
    Aggregate Root: fixed-capacity parking lot
    Enforces the slot bookkeeping invariants for park and leave
    """

    def __init__(self, capacity: int):
        super().__init__()
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise TypeError(f"Capacity must be an integer, got: {capacity!r}")
        if capacity <= 0:
            raise ValueError(f"Capacity must be positive, got: {capacity}")
        if capacity > MAX_CAPACITY:
            raise ValueError(f"Capacity must be at most {MAX_CAPACITY}, got: {capacity}")

        self._capacity = capacity
        self._slots: List[Optional[Car]] = [None] * capacity
        self._occupied_count: int = 0

        self._validate_invariants()
        self._logger.info(f"Created parking lot with {capacity} slots")

    def _validate_invariants(self) -> None:
        """Validate aggregate invariants"""
        # Invariant 1: slot list length matches capacity
        if len(self._slots) != self._capacity:
            raise ParkingLotInvariantError(
                f"Slot count mismatch: {len(self._slots)} slots, "
                f"expected {self._capacity}"
            )

        # Invariant 2: occupied count matches the non-empty slots
        actual = sum(1 for car in self._slots if car is not None)
        if actual != self._occupied_count:
            raise ParkingLotInvariantError(
                f"Occupied count {self._occupied_count} does not match "
                f"{actual} occupied slots"
            )

        # Invariant 3: occupied count within bounds
        if not 0 <= self._occupied_count <= self._capacity:
            raise ParkingLotInvariantError(
                f"Occupied count {self._occupied_count} outside 0..{self._capacity}"
            )

    def _in_range(self, index: int) -> bool:
        return 0 <= index < self._capacity

    # ========================================================================
    # PUBLIC BUSINESS METHODS
    # ========================================================================

    def park(self, plate: str, color: str) -> LotResult:
        """
        Create a Car and park it in the lowest-numbered free slot
        Returns: LotResult OK with the 0-based slot index, or FULL
        """
        return self.park_car(Car(plate, color))

    def park_car(self, car: Car) -> LotResult:
        """
        Park an existing Car in the lowest-numbered free slot
        Returns: LotResult OK with the 0-based slot index, or FULL
        """
        index = self._find_empty_slot()
        if index is None:
            self._logger.warning(f"Lot is full, cannot park {car.plate}")
            return LotResult.full()

        self._slots[index] = car
        self._occupied_count += 1
        self._validate_invariants()
        self._record(CarParkedEvent(index, car))
        self._logger.info(f"Parked {car} in slot {index + 1}")
        return LotResult.ok(index)

    def leave(self, index: int) -> LotResult:
        """
        Remove the car from a slot
        Returns: OK with the removed Car, ALREADY_EMPTY, or OUT_OF_RANGE
        """
        if not self._in_range(index):
            self._logger.warning(f"Slot index {index} outside 0..{self._capacity - 1}")
            return LotResult.out_of_range(index)

        car = self._slots[index]
        if car is None:
            self._logger.debug(f"Slot {index + 1} is already empty")
            return LotResult.already_empty()

        self._slots[index] = None
        self._occupied_count -= 1
        self._validate_invariants()
        self._record(CarLeftEvent(index, car))
        self._logger.info(f"{car} left slot {index + 1}")
        return LotResult.ok(car)

    def is_slot_empty(self, index: int) -> LotResult:
        """
        Check whether a slot is free
        Returns: OK with a bool, or OUT_OF_RANGE
        """
        if not self._in_range(index):
            return LotResult.out_of_range(index)
        return LotResult.ok(self._slots[index] is None)

    def cars_by_color(self, color: str) -> List[Car]:
        """Get all parked cars of a color, in slot order"""
        return [car for car in self._slots if car is not None and car.color == color]

    def slot_indices_by_color(self, color: str) -> List[int]:
        """Get 0-based indices of slots holding a car of the color"""
        return [
            index for index, car in enumerate(self._slots)
            if car is not None and car.color == color
        ]

    def slot_index_for_plate(self, plate: str) -> Optional[int]:
        """Find the lowest slot index holding the plate"""
        for index, car in enumerate(self._slots):
            if car is not None and car.plate == plate:
                return index
        return None

    def render_status(self, include_empty: bool = False) -> str:
        """
        Get a tab-separated status table:

            Slot No.    ID      Color
            1           EUS687  White
            3           (empty)

        Empty slots are omitted unless ``include_empty`` is set.
        """
        lines = [STATUS_HEADER]
        for index, car in enumerate(self._slots):
            if car is not None:
                lines.append(f"{index + 1}\t\t{car.plate}\t\t{car.color}")
            elif include_empty:
                lines.append(f"{index + 1}\t\t{EMPTY_SLOT_MARKER}")
        return "\n".join(lines)

    def _find_empty_slot(self) -> Optional[int]:
        if self._occupied_count == self._capacity:
            return None
        for index, car in enumerate(self._slots):
            if car is None:
                return index
        return None

    # ========================================================================
    # QUERY METHODS
    # ========================================================================

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def occupied_count(self) -> int:
        return self._occupied_count

    @property
    def available_count(self) -> int:
        return self._capacity - self._occupied_count

    @property
    def is_full(self) -> bool:
        return self._occupied_count == self._capacity

    @property
    def is_empty(self) -> bool:
        return self._occupied_count == 0

    @property
    def slots(self) -> List[Optional[Car]]:
        """Get a copy of the slot list"""
        return list(self._slots)

    def get_occupancy_rate(self) -> float:
        """Calculate occupancy rate (0-100)"""
        return (self._occupied_count / self._capacity) * 100.0

    def get_status_report(self) -> Dict[str, Any]:
        """Get structured status report"""
        return {
            "capacity": self._capacity,
            "occupied_slots": self._occupied_count,
            "available_slots": self.available_count,
            "occupancy_rate": self.get_occupancy_rate(),
            "slots": [
                {
                    "slot_number": index + 1,
                    "car": car.to_dict() if car is not None else None
                }
                for index, car in enumerate(self._slots)
            ],
            "version": self.version
        }

    def __str__(self) -> str:
        return f"ParkingLot({self._occupied_count}/{self._capacity} occupied)"
