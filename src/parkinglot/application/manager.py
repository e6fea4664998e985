# File: src/parkinglot/application/manager.py
"""
Parking Lot Manager

Application service wrapping at most one ParkingLot. It exposes one typed
method per protocol command plus ``give_command``, the textual entry point
used by the command loop.

State machine:
    Uninitialized --create_parking_lot--> Active
    Active --create_parking_lot--> Active (fresh lot, old state discarded)
    every other command is a self-loop

Every method returns the protocol response line. Bad input never raises
across this boundary.
"""

from dataclasses import dataclass
from typing import Optional, Union
import logging

from ..domain.aggregates import ParkingLot
from ..domain.models import (
    InvalidCommandError, ResultStatus, format_slot_number
)
from .commands import CommandParser


# ============================================================================
# RESPONSE MESSAGES
# ============================================================================

MSG_CREATED = "Created a parking lot with {capacity} slots"
MSG_ALLOCATED = "Allocated slot number: {slot_number}"
MSG_FULL = "Sorry, parking lot is full"
MSG_SLOT_FREE = "Slot number {slot_number} is free"
MSG_INVALID_SLOT = "Invalid slot number"
MSG_NONE_FOUND = "None found"
MSG_NOT_FOUND = "Not found"
MSG_INVALID_COMMAND = "Invalid command"
MSG_CREATE_LOT_FIRST = "Please create a parking lot first"

LIST_SEPARATOR = ", "


# ============================================================================
# LOT STATE
# ============================================================================

@dataclass(frozen=True)
class Uninitialized:
    """No lot has been created yet"""
    pass


@dataclass(frozen=True)
class Active:
    """A lot exists and accepts commands"""
    lot: ParkingLot


LotState = Union[Uninitialized, Active]


# ============================================================================
# MANAGER
# ============================================================================

class ParkingLotManager:
    """
    Command-dispatch layer around a single ParkingLot

    Not safe for concurrent use; callers must serialize access.
    """

    def __init__(
        self,
        capacity: Optional[int] = None,
        include_empty_in_status: bool = False,
        parser: Optional[CommandParser] = None
    ):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.include_empty_in_status = include_empty_in_status
        self._parser = parser or CommandParser()
        self._state: LotState = Uninitialized()

        if capacity is not None:
            self._state = Active(ParkingLot(capacity))

    @property
    def state(self) -> LotState:
        return self._state

    @property
    def lot(self) -> Optional[ParkingLot]:
        """Get the active lot, or None before one is created"""
        if isinstance(self._state, Active):
            return self._state.lot
        return None

    # ========================================================================
    # TEXT ENTRY POINT
    # ========================================================================

    def give_command(self, line: str) -> str:
        """Handle one protocol line and return its response"""
        try:
            command = self._parser.parse(line)
        except InvalidCommandError as e:
            self.logger.warning(f"Rejected command {line!r}: {e}")
            return MSG_INVALID_COMMAND

        self.logger.debug(f"Dispatching {command.get_description()}")
        try:
            return command.execute(self)
        except Exception as e:
            self.logger.error(f"Error executing {command.get_description()}: {e}", exc_info=True)
            return MSG_INVALID_COMMAND

    # ========================================================================
    # COMMAND OPERATIONS
    # ========================================================================

    def create_parking_lot(self, capacity: int) -> str:
        try:
            lot = ParkingLot(capacity)
        except (TypeError, ValueError) as e:
            self.logger.warning(f"Cannot create parking lot: {e}")
            return MSG_INVALID_COMMAND

        if isinstance(self._state, Active):
            self.logger.info("Replacing existing parking lot")
        self._state = Active(lot)
        return MSG_CREATED.format(capacity=capacity)

    def park(self, plate: str, color: str) -> str:
        lot = self.lot
        if lot is None:
            return MSG_CREATE_LOT_FIRST

        try:
            result = lot.park(plate, color)
        except ValueError as e:
            self.logger.warning(f"Cannot park car: {e}")
            return MSG_INVALID_COMMAND

        if result.status is ResultStatus.FULL:
            return MSG_FULL
        return MSG_ALLOCATED.format(slot_number=format_slot_number(result.value))

    def leave(self, slot_number: int) -> str:
        """Free a slot; freeing an already empty slot still reports it free"""
        lot = self.lot
        if lot is None:
            return MSG_CREATE_LOT_FIRST

        result = lot.leave(slot_number - 1)
        if result.status is ResultStatus.OUT_OF_RANGE:
            return MSG_INVALID_SLOT
        return MSG_SLOT_FREE.format(slot_number=slot_number)

    def status(self) -> str:
        lot = self.lot
        if lot is None:
            return MSG_CREATE_LOT_FIRST
        return lot.render_status(self.include_empty_in_status)

    def ids_for_cars_with_color(self, color: str) -> str:
        lot = self.lot
        if lot is None:
            return MSG_CREATE_LOT_FIRST

        plates = [car.plate for car in lot.cars_by_color(color)]
        return LIST_SEPARATOR.join(plates) if plates else MSG_NONE_FOUND

    def slots_for_cars_with_color(self, color: str) -> str:
        lot = self.lot
        if lot is None:
            return MSG_CREATE_LOT_FIRST

        slot_numbers = [format_slot_number(i) for i in lot.slot_indices_by_color(color)]
        return LIST_SEPARATOR.join(slot_numbers) if slot_numbers else MSG_NONE_FOUND

    def slot_for_id(self, plate: str) -> str:
        lot = self.lot
        if lot is None:
            return MSG_CREATE_LOT_FIRST

        index = lot.slot_index_for_plate(plate)
        return format_slot_number(index) if index is not None else MSG_NOT_FOUND
