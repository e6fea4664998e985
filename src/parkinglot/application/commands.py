# File: src/parkinglot/application/commands.py
"""
Command Pattern Implementation for the Parking Lot Command Processor

Each line of the text protocol is parsed into a Command object. A command
knows its protocol token, the request DTO that validates its arguments,
and which manager operation it runs.

Command Types:
1. Lifecycle  - create_parking_lot
2. Mutations  - park, leave
3. Queries    - status, ids_for_cars_with_color,
                slot_numbers_for_cars_with_color, slot_number_for_id
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Type, TYPE_CHECKING
import logging

from pydantic import ValidationError

from ..domain.models import InvalidCommandError
from .dtos import (
    BaseDTO, CreateParkingLotRequestDTO, ParkRequestDTO, LeaveRequestDTO,
    EmptyRequestDTO, ColorQueryDTO, PlateQueryDTO
)

if TYPE_CHECKING:
    from .manager import ParkingLotManager


# ============================================================================
# COMMAND BASE CLASS
# ============================================================================

class Command(ABC):
    """
    Abstract base class for all commands

    Subclasses set ``name`` (the protocol token) and ``request_type``.
    """

    name: str = ""
    request_type: Type[BaseDTO] = EmptyRequestDTO

    def __init__(self, request: BaseDTO):
        self.request = request
        self.logger = logging.getLogger(self.__class__.__name__)

    @classmethod
    def from_args(cls, args: List[str]) -> 'Command':
        """
        Build the command from its argument tokens
        Raises: InvalidCommandError on wrong argument count or bad values
        """
        try:
            request = cls.request_type.from_tokens(args)
        except (ValueError, ValidationError) as e:
            raise InvalidCommandError(f"{cls.name}: {e}") from e
        return cls(request)

    @abstractmethod
    def execute(self, manager: 'ParkingLotManager') -> str:
        """Run the command and return its response line"""
        pass

    def get_description(self) -> str:
        """Get human-readable command description"""
        args = " ".join(str(v) for v in self.request.to_dict().values())
        return f"{self.name} {args}".strip()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.request!r})"


# ============================================================================
# CONCRETE COMMANDS
# ============================================================================

class CreateParkingLotCommand(Command):
    """Command: create (or replace) the lot"""
    name = "create_parking_lot"
    request_type = CreateParkingLotRequestDTO

    def execute(self, manager: 'ParkingLotManager') -> str:
        return manager.create_parking_lot(self.request.capacity)


class ParkCommand(Command):
    """Command: park a car in the first free slot"""
    name = "park"
    request_type = ParkRequestDTO

    def execute(self, manager: 'ParkingLotManager') -> str:
        return manager.park(self.request.plate, self.request.color)


class LeaveCommand(Command):
    """Command: free a slot by its 1-based number"""
    name = "leave"
    request_type = LeaveRequestDTO

    def execute(self, manager: 'ParkingLotManager') -> str:
        return manager.leave(self.request.slot_number)


class StatusCommand(Command):
    name = "status"
    request_type = EmptyRequestDTO

    def execute(self, manager: 'ParkingLotManager') -> str:
        return manager.status()


class IdsForCarsWithColorCommand(Command):
    name = "ids_for_cars_with_color"
    request_type = ColorQueryDTO

    def execute(self, manager: 'ParkingLotManager') -> str:
        return manager.ids_for_cars_with_color(self.request.color)


class SlotNumbersForCarsWithColorCommand(Command):
    name = "slot_numbers_for_cars_with_color"
    request_type = ColorQueryDTO

    def execute(self, manager: 'ParkingLotManager') -> str:
        return manager.slots_for_cars_with_color(self.request.color)


class SlotNumberForIdCommand(Command):
    name = "slot_number_for_id"
    request_type = PlateQueryDTO

    def execute(self, manager: 'ParkingLotManager') -> str:
        return manager.slot_for_id(self.request.plate)


DEFAULT_COMMANDS: List[Type[Command]] = [
    CreateParkingLotCommand,
    ParkCommand,
    LeaveCommand,
    StatusCommand,
    IdsForCarsWithColorCommand,
    SlotNumbersForCarsWithColorCommand,
    SlotNumberForIdCommand,
]


# ============================================================================
# COMMAND PARSER
# ============================================================================

class CommandParser:
    """
    Registry of protocol tokens to Command classes

    Splits a raw line on whitespace, looks up the first token and builds
    the command from the remaining tokens.
    """

    def __init__(self, commands: Optional[List[Type[Command]]] = None):
        self.logger = logging.getLogger(self.__class__.__name__)
        self._registry: Dict[str, Type[Command]] = {}
        for command_class in commands or DEFAULT_COMMANDS:
            self.register(command_class)

    def register(self, command_class: Type[Command]) -> None:
        """Register a command class under its protocol token"""
        if not command_class.name:
            raise ValueError(f"{command_class.__name__} has no command name")
        self._registry[command_class.name] = command_class
        self.logger.debug(f"Registered command: {command_class.name}")

    @property
    def command_names(self) -> List[str]:
        return sorted(self._registry)

    def parse(self, line: str) -> Command:
        """
        Parse one protocol line
        Raises: InvalidCommandError for blank lines, unknown tokens or bad arguments
        """
        tokens = line.split()
        if not tokens:
            raise InvalidCommandError("Empty command line")

        token, args = tokens[0], tokens[1:]
        command_class = self._registry.get(token)
        if command_class is None:
            raise InvalidCommandError(f"Unknown command: {token}")

        return command_class.from_args(args)
