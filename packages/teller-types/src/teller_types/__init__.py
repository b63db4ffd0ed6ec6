"""
teller_types: Authoritative schemas and validators for the teller register.

This module provides:
- Pydantic models for data contracts (NotePair, RegisterConfig, results)
- JSON Schema export for external validation
"""

from .schemas.models import (
    DEFAULT_DENOMINATIONS,
    FailureReason,
    NotePair,
    RegisterConfig,
    RegisterSnapshot,
    SchemaVersion,
    SessionResult,
    SessionScript,
    SessionStep,
    StepResult,
    TellerSettings,
    WithdrawalOutcome,
)

__version__ = "0.1.0"
__all__ = [
    # Core models
    "NotePair",
    "RegisterConfig",
    "RegisterSnapshot",
    "WithdrawalOutcome",
    "FailureReason",
    "TellerSettings",
    # Session models
    "SessionStep",
    "SessionScript",
    "StepResult",
    "SessionResult",
    # Constants
    "DEFAULT_DENOMINATIONS",
    "SchemaVersion",
]
