"""
teller: note register with denomination substitution.

The system is organized as:
- register.py: the Register and its note-breaking algorithm
- pairs.py: normalization of (denomination, quantity) requests
- session.py: scripted replay of register operations
- writer.py: JSON session reports
- config.py / logging_utils.py: configuration and logging setup
- cli/: typer command-line interface

Note: Data models are defined in teller-types.
"""

from .errors import ConfigurationError, InvalidArgument, TellerError
from .pairs import coerce_pairs, parse_pair_string, sum_by_denomination
from .register import Register, break_one_from_next_bigger, produce
from .session import SessionRunner, load_script, parse_script, run_script
from .writer import report_payload, write_report

# Models (from teller-types)
from teller_types.schemas.models import NotePair, RegisterConfig, WithdrawalOutcome

__version__ = "0.1.0"
__all__ = [
    # Core
    "Register",
    "produce",
    "break_one_from_next_bigger",
    # Errors
    "TellerError",
    "InvalidArgument",
    "ConfigurationError",
    # Utilities
    "coerce_pairs",
    "parse_pair_string",
    "sum_by_denomination",
    "SessionRunner",
    "load_script",
    "parse_script",
    "run_script",
    "report_payload",
    "write_report",
    # Models (from teller-types)
    "NotePair",
    "RegisterConfig",
    "WithdrawalOutcome",
]
