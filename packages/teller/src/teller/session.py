"""
Session Replay Use Case

This module replays a scripted list of register operations and collects a
per-step record of what happened. It is what the CLI and end-to-end tests use
to drive a register without writing Python.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from loguru import logger
from pydantic import ValidationError

from teller_types.schemas.models import (
    FailureReason,
    RegisterConfig,
    SessionResult,
    SessionScript,
    SessionStep,
    StepResult,
)

from .errors import ConfigurationError, InvalidArgument
from .pairs import coerce_pairs
from .register import Register


class SessionRunner:
    """
    Use case for replaying a session script against a register.

    Each step is applied in order:
    1. deposit: InvalidArgument is recorded as a failed step
    2. withdraw: a False result is recorded with its failure reason
    3. quantity: the count is recorded on the step
    """

    def __init__(self, register: Optional[Register] = None, fail_fast: bool = False):
        """
        Initialize the runner.

        Args:
            register: Register to drive; built from the script setup when None,
                or from the default configuration when the script has none
            fail_fast: Stop at the first failed step
        """
        self.register = register
        self.fail_fast = fail_fast

    def run(self, script: SessionScript) -> SessionResult:
        """Replay every step of the script and return the collected results."""
        register = self.register or Register.from_config(script.setup or RegisterConfig())
        result = SessionResult(name=script.name)

        logger.info(f"Replaying session '{script.name}' ({len(script.steps)} steps)")

        for index, step in enumerate(script.steps):
            step_result = self._apply(register, index, step)
            result.steps.append(step_result)

            if not step_result.success and self.fail_fast:
                logger.warning(f"Stopping session at step {index}: {step_result.message}")
                result.aborted = True
                break

        result.final = register.snapshot()
        result.mark_completed()

        logger.info(
            f"Session '{script.name}' finished: {len(result.steps)} steps, "
            f"{len(result.failures)} failed"
        )
        return result

    def _apply(self, register: Register, index: int, step: SessionStep) -> StepResult:
        if step.op == "deposit":
            try:
                register.deposit(step.pairs)
            except InvalidArgument as e:
                return StepResult(
                    index=index,
                    op=step.op,
                    success=False,
                    reason=e.reason,
                    message=e.message,
                    counts=register.counts(),
                )
            return StepResult(index=index, op=step.op, success=True, counts=register.counts())

        if step.op == "withdraw":
            outcome = register.attempt_withdrawal(step.pairs)
            return StepResult(
                index=index,
                op=step.op,
                success=outcome.success,
                reason=outcome.reason,
                message=None if outcome.success else outcome.reason.value,
                counts=register.counts(),
            )

        # quantity
        if step.denomination is None:
            return StepResult(
                index=index,
                op=step.op,
                success=False,
                reason=FailureReason.UNSUPPORTED_DENOMINATION,
                message="quantity steps require a denomination",
                counts=register.counts(),
            )
        return StepResult(
            index=index,
            op=step.op,
            success=True,
            quantity=register.get_quantity(step.denomination),
            counts=register.counts(),
        )


def _normalize_step(raw: Any) -> Any:
    """Accept flat or tuple-style pairs in script files."""
    if isinstance(raw, dict) and isinstance(raw.get("pairs"), list):
        raw = dict(raw)
        try:
            raw["pairs"] = [p.model_dump() for p in coerce_pairs(raw["pairs"])]
        except InvalidArgument as e:
            raise ConfigurationError(f"Invalid pairs in step {raw}: {e.message}") from e
    return raw


def parse_script(data: Dict[str, Any]) -> SessionScript:
    """
    Validate a decoded script mapping into a SessionScript.

    Raises:
        ConfigurationError: If the mapping does not describe a valid script
    """
    if not isinstance(data, dict):
        raise ConfigurationError("A session script must be a mapping")

    data = dict(data)
    data["steps"] = [_normalize_step(step) for step in data.get("steps") or []]
    try:
        return SessionScript(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid session script: {e}") from e


def load_script(path: Union[str, Path]) -> SessionScript:
    """Load a session script from a YAML or JSON file."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read session script {path}: {e}") from e

    script = parse_script(data)
    logger.debug(f"Loaded session script '{script.name}' from {path}")
    return script


def run_script(
    script: SessionScript, fail_fast: bool = False, register: Optional[Register] = None
) -> SessionResult:
    """Convenience function for replaying a single script."""
    return SessionRunner(register=register, fail_fast=fail_fast).run(script)
