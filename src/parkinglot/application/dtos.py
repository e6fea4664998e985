# File: src/parkinglot/application/dtos.py
"""
Data Transfer Objects (DTOs) for the Parking Lot Command Processor

Each protocol command has a request DTO. Command arguments arrive as raw
string tokens and are validated here before they reach the domain layer.

DTO Principles:
- Immutable (frozen models)
- Validation at creation
- No business logic, only data
"""

from typing import Any, Dict, List, Type
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..domain.aggregates import MAX_CAPACITY


_INTEGER_TOKEN = re.compile(r"^[+-]?\d+$")


def parse_int_token(value: Any) -> Any:
    """Accept ints and plain integer tokens only ("6", "-1"), not "6.0" or "six" """
    if isinstance(value, bool):
        raise ValueError("Expected an integer")
    if isinstance(value, str):
        if not _INTEGER_TOKEN.match(value.strip()):
            raise ValueError(f"Not an integer: {value!r}")
        return int(value)
    return value


# ============================================================================
# BASE DTO CLASSES
# ============================================================================

class BaseDTO(BaseModel):
    """Base DTO with common functionality"""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        str_strip_whitespace=True,
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert DTO to dictionary"""
        return self.model_dump()

    @classmethod
    def field_names(cls) -> List[str]:
        """Positional argument order of the command this DTO serves"""
        return list(cls.model_fields.keys())

    @classmethod
    def from_tokens(cls: Type['BaseDTO'], tokens: List[str]) -> 'BaseDTO':
        """
        Build the DTO from positional command tokens
        Raises: ValueError on argument count mismatch, ValidationError on bad values
        """
        names = cls.field_names()
        if len(tokens) != len(names):
            raise ValueError(
                f"{cls.__name__} expects {len(names)} argument(s), got {len(tokens)}"
            )
        return cls(**dict(zip(names, tokens)))


# ============================================================================
# REQUEST DTOs
# ============================================================================

class CreateParkingLotRequestDTO(BaseDTO):
    """Input DTO for create_parking_lot"""
    capacity: int = Field(gt=0, le=MAX_CAPACITY, description="Number of slots in the new lot")

    @field_validator('capacity', mode='before')
    @classmethod
    def validate_capacity(cls, v):
        return parse_int_token(v)


class ParkRequestDTO(BaseDTO):
    """Input DTO for park"""
    plate: str = Field(min_length=1, description="License plate of the car")
    color: str = Field(min_length=1, description="Color of the car")


class LeaveRequestDTO(BaseDTO):
    """Input DTO for leave; range is checked by the lot"""
    slot_number: int = Field(description="1-based slot number")

    @field_validator('slot_number', mode='before')
    @classmethod
    def validate_slot_number(cls, v):
        return parse_int_token(v)


class EmptyRequestDTO(BaseDTO):
    """Input DTO for commands without arguments"""
    pass


class ColorQueryDTO(BaseDTO):
    """Input DTO for color lookups"""
    color: str = Field(min_length=1)


class PlateQueryDTO(BaseDTO):
    """Input DTO for plate lookups"""
    plate: str = Field(min_length=1)
