#!/usr/bin/env python3
"""
Application Layer Unit Tests: request DTOs and command parsing
"""

import unittest
from unittest.mock import Mock
import sys
from pathlib import Path

# Add the src directory to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from pydantic import ValidationError

from parkinglot.application.dtos import (
    CreateParkingLotRequestDTO, ParkRequestDTO, LeaveRequestDTO,
    EmptyRequestDTO, ColorQueryDTO, parse_int_token
)
from parkinglot.application.commands import (
    Command, CommandParser, CreateParkingLotCommand, ParkCommand,
    LeaveCommand, StatusCommand, IdsForCarsWithColorCommand,
    SlotNumbersForCarsWithColorCommand, SlotNumberForIdCommand
)
from parkinglot.domain.models import InvalidCommandError
from parkinglot.domain.aggregates import MAX_CAPACITY


class TestRequestDTOs(unittest.TestCase):
    """Unit tests for argument validation"""

    def test_parse_int_token(self):
        self.assertEqual(parse_int_token("6"), 6)
        self.assertEqual(parse_int_token("-1"), -1)
        self.assertEqual(parse_int_token(4), 4)
        for bad in ("6.0", "six", "", "0x10", True):
            with self.assertRaises(ValueError):
                parse_int_token(bad)

    def test_create_request(self):
        dto = CreateParkingLotRequestDTO.from_tokens(["6"])
        self.assertEqual(dto.capacity, 6)
        self.assertEqual(dto.to_dict(), {"capacity": 6})

    def test_create_request_rejects_non_positive_capacity(self):
        for token in ("0", "-3"):
            with self.assertRaises(ValidationError):
                CreateParkingLotRequestDTO.from_tokens([token])

    def test_create_request_rejects_capacity_above_limit(self):
        self.assertEqual(
            CreateParkingLotRequestDTO.from_tokens([str(MAX_CAPACITY)]).capacity,
            MAX_CAPACITY
        )
        for token in (str(MAX_CAPACITY + 1), "1000000000"):
            with self.assertRaises(ValidationError):
                CreateParkingLotRequestDTO.from_tokens([token])

    def test_create_request_rejects_non_integer(self):
        with self.assertRaises(ValidationError):
            CreateParkingLotRequestDTO.from_tokens(["lots"])

    def test_argument_count_mismatch(self):
        with self.assertRaises(ValueError):
            ParkRequestDTO.from_tokens(["EUS687"])
        with self.assertRaises(ValueError):
            ParkRequestDTO.from_tokens(["EUS687", "White", "Extra"])
        with self.assertRaises(ValueError):
            EmptyRequestDTO.from_tokens(["now"])

    def test_field_order_matches_protocol(self):
        self.assertEqual(ParkRequestDTO.field_names(), ["plate", "color"])
        dto = ParkRequestDTO.from_tokens(["EUS687", "White"])
        self.assertEqual((dto.plate, dto.color), ("EUS687", "White"))

    def test_leave_request_allows_any_integer(self):
        self.assertEqual(LeaveRequestDTO.from_tokens(["0"]).slot_number, 0)
        self.assertEqual(LeaveRequestDTO.from_tokens(["99"]).slot_number, 99)

    def test_dtos_are_frozen(self):
        dto = ColorQueryDTO(color="White")
        with self.assertRaises(ValidationError):
            dto.color = "Black"


class TestCommands(unittest.TestCase):
    """Unit tests for command objects delegating to the manager"""

    def setUp(self):
        self.manager = Mock()
        self.manager.create_parking_lot.return_value = "created"
        self.manager.park.return_value = "parked"
        self.manager.leave.return_value = "left"
        self.manager.status.return_value = "status"
        self.manager.ids_for_cars_with_color.return_value = "ids"
        self.manager.slots_for_cars_with_color.return_value = "slots"
        self.manager.slot_for_id.return_value = "slot"

    def test_each_command_calls_its_operation(self):
        cases = [
            (CreateParkingLotCommand, ["6"], "create_parking_lot", (6,), "created"),
            (ParkCommand, ["EUS687", "White"], "park", ("EUS687", "White"), "parked"),
            (LeaveCommand, ["4"], "leave", (4,), "left"),
            (StatusCommand, [], "status", (), "status"),
            (IdsForCarsWithColorCommand, ["White"], "ids_for_cars_with_color", ("White",), "ids"),
            (SlotNumbersForCarsWithColorCommand, ["White"], "slots_for_cars_with_color", ("White",), "slots"),
            (SlotNumberForIdCommand, ["MNG728"], "slot_for_id", ("MNG728",), "slot"),
        ]
        for command_class, args, method, expected_args, response in cases:
            with self.subTest(command=command_class.name):
                command = command_class.from_args(args)
                self.assertEqual(command.execute(self.manager), response)
                getattr(self.manager, method).assert_called_with(*expected_args)

    def test_from_args_wraps_validation_errors(self):
        with self.assertRaises(InvalidCommandError):
            LeaveCommand.from_args(["four"])
        with self.assertRaises(InvalidCommandError):
            StatusCommand.from_args(["extra"])

    def test_description(self):
        self.assertEqual(ParkCommand.from_args(["A1", "Red"]).get_description(), "park A1 Red")
        self.assertEqual(StatusCommand.from_args([]).get_description(), "status")


class TestCommandParser(unittest.TestCase):

    def setUp(self):
        self.parser = CommandParser()

    def test_known_commands_registered(self):
        self.assertEqual(self.parser.command_names, sorted([
            "create_parking_lot", "park", "leave", "status",
            "ids_for_cars_with_color", "slot_numbers_for_cars_with_color",
            "slot_number_for_id",
        ]))

    def test_parse_splits_on_whitespace(self):
        command = self.parser.parse("  park \tEUS687   White ")
        self.assertIsInstance(command, ParkCommand)
        self.assertEqual(command.request.plate, "EUS687")
        self.assertEqual(command.request.color, "White")

    def test_parse_rejects_blank_and_unknown(self):
        for line in ("", "   ", "invalid", "Park A1 Red", "exit"):
            with self.subTest(line=line):
                with self.assertRaises(InvalidCommandError):
                    self.parser.parse(line)

    def test_register_custom_command(self):
        class PingCommand(Command):
            name = "ping"

            def execute(self, manager):
                return "pong"

        parser = CommandParser([PingCommand])
        self.assertEqual(parser.command_names, ["ping"])
        self.assertEqual(parser.parse("ping").execute(None), "pong")

    def test_register_requires_name(self):
        class NamelessCommand(Command):
            def execute(self, manager):
                return ""

        with self.assertRaises(ValueError):
            self.parser.register(NamelessCommand)


if __name__ == '__main__':
    unittest.main()
