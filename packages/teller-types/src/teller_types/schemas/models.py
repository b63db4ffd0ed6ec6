"""
Pydantic models for teller data contracts.

This module defines the authoritative data models shared by the register core,
the session runner, the report writer and the CLI. They provide validation at
the boundary so the register itself only ever sees well-formed integers.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, validator

# --------------------------------------------------------------------------- #
# Schema Version and Base Types                                              #
# --------------------------------------------------------------------------- #

SchemaVersion = Literal["1.0"]

DEFAULT_DENOMINATIONS: List[int] = [1, 5, 10, 20]


class StrictBase(BaseModel):
    """Base class for strict models that forbid extra fields."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class FailureReason(str, Enum):
    """Why a deposit was rejected or a withdrawal could not be fulfilled."""

    ODD_LENGTH = "odd_length"
    UNSUPPORTED_DENOMINATION = "unsupported_denomination"
    NEGATIVE_QUANTITY = "negative_quantity"
    NOT_AN_INTEGER = "not_an_integer"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INSUFFICIENT_NOTES = "insufficient_notes"


# --------------------------------------------------------------------------- #
# Note Types                                                                  #
# --------------------------------------------------------------------------- #


class NotePair(StrictBase):
    """A (denomination, quantity) pair as passed to deposit and withdraw.

    Only integer-ness is enforced here. Whether the denomination is supported
    and the quantity non-negative depends on the register and on the
    operation, so those checks live in the register.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    denomination: StrictInt = Field(..., description="Face value of the note")
    quantity: StrictInt = Field(..., description="Number of notes")

    def value(self) -> int:
        return self.denomination * self.quantity


# --------------------------------------------------------------------------- #
# Configuration Models                                                        #
# --------------------------------------------------------------------------- #


class RegisterConfig(StrictBase):
    """Denomination set and optional starting inventory for a register."""

    denominations: List[StrictInt] = Field(
        default_factory=lambda: list(DEFAULT_DENOMINATIONS),
        description="Supported denominations in ascending order",
    )
    initial_counts: Dict[int, StrictInt] = Field(
        default_factory=dict, description="Starting note counts per denomination"
    )

    @validator("denominations")
    def validate_denominations(cls, v: List[int]) -> List[int]:
        """Denominations must form an ascending, evenly dividing chain."""
        if not v:
            raise ValueError("At least one denomination is required")
        for d in v:
            if d <= 0:
                raise ValueError(f"Denominations must be positive, got {d}")
        for smaller, bigger in zip(v, v[1:]):
            if bigger <= smaller:
                raise ValueError("Denominations must be unique and strictly ascending")
            if bigger % smaller != 0:
                raise ValueError(
                    f"Denomination {bigger} is not a multiple of {smaller}"
                )
        return v

    @validator("initial_counts")
    def validate_initial_counts(cls, v: Dict[int, int], values) -> Dict[int, int]:
        """Starting counts must reference supported denominations only."""
        supported = set(values.get("denominations") or [])
        for denom, count in v.items():
            if supported and denom not in supported:
                raise ValueError(f"Unsupported denomination in initial_counts: {denom}")
            if count < 0:
                raise ValueError(f"Initial count for {denom} cannot be negative")
        return v


class TellerSettings(StrictBase):
    """Main configuration for the teller package."""

    register_config: RegisterConfig = Field(default_factory=RegisterConfig)

    # Logging configuration
    log_level: str = Field(default="INFO", description="Logging level")
    json_logs: bool = Field(default=False, description="Emit logs as JSON lines")


# --------------------------------------------------------------------------- #
# Result Models                                                               #
# --------------------------------------------------------------------------- #


class RegisterSnapshot(StrictBase):
    """Point-in-time view of a register's inventory."""

    denominations: List[int]
    counts: Dict[int, int]
    total_value: int
    taken_at: datetime = Field(default_factory=datetime.now)


class WithdrawalOutcome(StrictBase):
    """Detailed result of a withdrawal attempt."""

    success: bool
    reason: Optional[FailureReason] = Field(
        None, description="Why the withdrawal failed, None on success"
    )
    requested: Dict[int, int] = Field(
        default_factory=dict, description="Summed quantity per denomination"
    )
    requested_value: int = Field(default=0, description="Total value requested")
    breaks: int = Field(
        default=0, description="Single-note breaks used by a successful plan"
    )

    def __bool__(self) -> bool:
        return self.success


# --------------------------------------------------------------------------- #
# Session Models                                                              #
# --------------------------------------------------------------------------- #


class SessionStep(StrictBase):
    """One scripted register operation."""

    op: Literal["deposit", "withdraw", "quantity"]
    pairs: List[NotePair] = Field(default_factory=list)
    denomination: Optional[StrictInt] = Field(
        None, description="Denomination to query for op=quantity"
    )


class SessionScript(StrictBase):
    """An ordered list of operations to replay against a fresh register."""

    schema_version: SchemaVersion = "1.0"
    name: str = Field(default="session", description="Script name for reports")
    setup: Optional[RegisterConfig] = Field(
        None, description="Register to replay against, configured default when None"
    )
    steps: List[SessionStep] = Field(default_factory=list)


class StepResult(StrictBase):
    """Outcome of a single replayed step."""

    index: int
    op: str
    success: bool
    reason: Optional[FailureReason] = None
    message: Optional[str] = None
    quantity: Optional[int] = None
    counts: Dict[int, int] = Field(default_factory=dict)


class SessionResult(StrictBase):
    """Result of replaying a whole session script."""

    name: str
    started_at: datetime = Field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None
    steps: List[StepResult] = Field(default_factory=list)
    final: Optional[RegisterSnapshot] = None
    aborted: bool = Field(default=False, description="Stopped early on failure")

    @property
    def failures(self) -> List[StepResult]:
        return [s for s in self.steps if not s.success]

    def mark_completed(self):
        """Mark the session as completed."""
        self.completed_at = datetime.now()
