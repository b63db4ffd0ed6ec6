"""
Teller Types Schema Package

This package provides the authoritative data contracts (schemas) for the teller
register. Callers exchange note requests, configuration and results through
these Pydantic models.

Schema Governance:
- All schemas carry a schema version
- Breaking changes require a version bump
- JSON schemas can be exported for external validation
"""

from .models import (
    # Base types
    StrictBase,
    SchemaVersion,
    DEFAULT_DENOMINATIONS,
    FailureReason,

    # Note types
    NotePair,

    # Configuration types
    RegisterConfig,
    TellerSettings,

    # Result types
    RegisterSnapshot,
    WithdrawalOutcome,

    # Session types
    SessionStep,
    SessionScript,
    StepResult,
    SessionResult,
)

__all__ = [
    "StrictBase",
    "SchemaVersion",
    "DEFAULT_DENOMINATIONS",
    "FailureReason",
    "NotePair",
    "RegisterConfig",
    "TellerSettings",
    "RegisterSnapshot",
    "WithdrawalOutcome",
    "SessionStep",
    "SessionScript",
    "StepResult",
    "SessionResult",
]
