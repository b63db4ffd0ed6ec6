"""
Note Register

The register holds notes of a fixed, ascending chain of denominations and
answers withdrawal requests from its own inventory. When a requested
denomination runs short, larger notes are broken one at a time into the next
smaller denomination until the shortfall is covered.

Both deposit and withdraw are all-or-nothing: a rejected call leaves the
counts exactly as they were.
"""

from typing import Dict, List, Mapping, MutableMapping, Optional, Sequence

from loguru import logger
from pydantic import ValidationError

from teller_types.schemas.models import (
    FailureReason,
    NotePair,
    RegisterConfig,
    RegisterSnapshot,
    WithdrawalOutcome,
)

from .errors import ConfigurationError, InvalidArgument
from .pairs import PairsInput, coerce_pairs, sum_by_denomination


def build_successors(denominations: Sequence[int]) -> Dict[int, int]:
    """Map each denomination to the next larger one in the chain."""
    return {smaller: bigger for smaller, bigger in zip(denominations, denominations[1:])}


def break_one_from_next_bigger(
    counts: MutableMapping[int, int], successors: Mapping[int, int], denom: int
) -> int:
    """
    Break one note of the next larger denomination into notes of ``denom``.

    When no note of the next larger denomination is on hand, one is first
    sourced from the denomination above it, and so on up the chain. Each level
    is broken in turn on the way back down, so a 20 becomes two 10s before a
    10 becomes two 5s. Levels are never skipped.

    Args:
        counts: Note counts, mutated in place
        successors: Next-larger denomination for each denomination
        denom: Denomination that needs one more break's worth of notes

    Returns:
        Number of single-note breaks performed, 0 if nothing could be broken
    """
    chain = [denom]
    current = denom
    while True:
        bigger = successors.get(current)
        if bigger is None:
            return 0
        chain.append(bigger)
        if counts[bigger] > 0:
            break
        current = bigger

    for idx in range(len(chain) - 1, 0, -1):
        bigger, smaller = chain[idx], chain[idx - 1]
        factor = bigger // smaller
        counts[bigger] -= 1
        counts[smaller] += factor
        logger.debug(f"Broke one {bigger} into {factor} x {smaller}")

    return len(chain) - 1


def produce(
    counts: MutableMapping[int, int],
    successors: Mapping[int, int],
    denom: int,
    target_count: int,
) -> Optional[int]:
    """
    Break larger notes until at least ``target_count`` notes of ``denom`` exist.

    Returns:
        Number of single-note breaks used, or None if the target is unreachable.
        ``counts`` may be partially modified when None is returned.
    """
    breaks = 0
    while counts[denom] < target_count:
        broken = break_one_from_next_bigger(counts, successors, denom)
        if not broken:
            return None
        breaks += broken
    return breaks


class Register:
    """
    Cash register holding notes of a fixed set of denominations.

    Args:
        denominations: Ascending denominations, each a multiple of the one
            before it (default 1, 5, 10, 20)
        initial_counts: Optional starting inventory

    Raises:
        ConfigurationError: If the denomination chain or initial counts are invalid
    """

    def __init__(
        self,
        denominations: Optional[Sequence[int]] = None,
        initial_counts: Optional[Mapping[int, int]] = None,
    ):
        settings = {}
        if denominations is not None:
            settings["denominations"] = list(denominations)
        if initial_counts is not None:
            settings["initial_counts"] = dict(initial_counts)
        try:
            config = RegisterConfig(**settings)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid register configuration: {e}") from e

        self._denominations = tuple(config.denominations)
        self._successors = build_successors(self._denominations)
        self._counts: Dict[int, int] = {d: 0 for d in self._denominations}
        for denom, count in config.initial_counts.items():
            self._counts[denom] = count

    @classmethod
    def from_config(cls, config: RegisterConfig) -> "Register":
        """Create a register from a validated RegisterConfig."""
        return cls(config.denominations, config.initial_counts)

    # --- Queries --- #

    @property
    def denominations(self) -> tuple:
        return self._denominations

    def supports(self, denomination: int) -> bool:
        return denomination in self._counts

    def get_quantity(self, denomination: int) -> int:
        """Return the count for a denomination, 0 if it is not supported."""
        return self._counts.get(denomination, 0)

    def total_value(self) -> int:
        return sum(d * c for d, c in self._counts.items())

    def counts(self) -> Dict[int, int]:
        """Return a copy of the current counts."""
        return dict(self._counts)

    def snapshot(self) -> RegisterSnapshot:
        return RegisterSnapshot(
            denominations=list(self._denominations),
            counts=self.counts(),
            total_value=self.total_value(),
        )

    # --- Mutators --- #

    def deposit(self, pairs: PairsInput = None) -> None:
        """
        Add notes to the register.

        Every pair is validated before any count changes, so a rejected
        deposit leaves the register untouched. None or an empty request does
        nothing.

        Args:
            pairs: Note request (see teller.pairs.coerce_pairs)

        Raises:
            InvalidArgument: On odd-length input, non-integer values, an
                unsupported denomination or a negative quantity
        """
        notes = coerce_pairs(pairs)
        if not notes:
            return

        for pair in notes:
            reason = self._reject_reason(pair)
            if reason is FailureReason.UNSUPPORTED_DENOMINATION:
                raise InvalidArgument(
                    f"Unsupported denomination: {pair.denomination}",
                    reason,
                    pair.denomination,
                )
            if reason is FailureReason.NEGATIVE_QUANTITY:
                raise InvalidArgument(
                    f"Cannot deposit a negative quantity: {pair.quantity}",
                    reason,
                    pair.quantity,
                )

        for pair in notes:
            self._counts[pair.denomination] += pair.quantity

        logger.info(
            f"Deposited {sum(p.value() for p in notes)} in {len(notes)} pair(s); "
            f"total now {self.total_value()}"
        )

    def withdraw(self, pairs: PairsInput = None) -> bool:
        """
        Withdraw notes, breaking larger notes to cover shortages.

        Returns:
            True if the whole request was dispensed, False otherwise. A False
            result leaves the counts unchanged.
        """
        return self.attempt_withdrawal(pairs).success

    def can_withdraw(self, pairs: PairsInput = None) -> bool:
        """Report whether withdraw would succeed, without changing anything."""
        return self.attempt_withdrawal(pairs, commit=False).success

    def attempt_withdrawal(
        self, pairs: PairsInput = None, commit: bool = True
    ) -> WithdrawalOutcome:
        """
        Withdraw notes and report why a request could not be met.

        Denominations are fulfilled largest first, so a large note asked for
        directly is taken before any breaking happens for smaller ones. The
        plan runs on a copy of the counts and is committed only when every
        denomination is covered.

        Args:
            pairs: Note request (see teller.pairs.coerce_pairs)
            commit: Apply the plan on success; False makes this a dry run

        Returns:
            WithdrawalOutcome with success flag, failure reason and break count
        """
        try:
            notes = coerce_pairs(pairs)
        except InvalidArgument as e:
            logger.warning(f"Withdrawal rejected: {e.message}")
            return WithdrawalOutcome(success=False, reason=e.reason)

        if not notes:
            return WithdrawalOutcome(success=True)

        for pair in notes:
            reason = self._reject_reason(pair)
            if reason is not None:
                logger.warning(
                    f"Withdrawal rejected: {reason.value} "
                    f"({pair.denomination}, {pair.quantity})"
                )
                return WithdrawalOutcome(success=False, reason=reason)

        requested = sum_by_denomination(notes)
        requested_value = sum(d * q for d, q in requested.items())

        if requested_value > self.total_value():
            logger.warning(
                f"Withdrawal rejected: requested {requested_value}, "
                f"held {self.total_value()}"
            )
            return WithdrawalOutcome(
                success=False,
                reason=FailureReason.INSUFFICIENT_FUNDS,
                requested=requested,
                requested_value=requested_value,
            )

        working = dict(self._counts)
        breaks = 0
        for denom in sorted(requested, reverse=True):
            needed = requested[denom]
            if needed == 0:
                continue

            if working[denom] < needed:
                used = produce(working, self._successors, denom, needed)
                if used is None:
                    logger.warning(
                        f"Withdrawal rejected: cannot make {needed} x {denom} "
                        f"from available notes"
                    )
                    return WithdrawalOutcome(
                        success=False,
                        reason=FailureReason.INSUFFICIENT_NOTES,
                        requested=requested,
                        requested_value=requested_value,
                    )
                breaks += used

            working[denom] -= needed

        if commit:
            self._counts = working
            logger.info(
                f"Withdrew {requested_value} using {breaks} break(s); "
                f"total now {self.total_value()}"
            )

        return WithdrawalOutcome(
            success=True,
            requested=requested,
            requested_value=requested_value,
            breaks=breaks,
        )

    # --- Helpers --- #

    def _reject_reason(self, pair: NotePair) -> Optional[FailureReason]:
        if not self.supports(pair.denomination):
            return FailureReason.UNSUPPORTED_DENOMINATION
        if pair.quantity < 0:
            return FailureReason.NEGATIVE_QUANTITY
        return None

    def __repr__(self) -> str:
        inventory = ", ".join(f"{d}x{c}" for d, c in self._counts.items())
        return f"Register({inventory})"


def describe_chain(denominations: Sequence[int]) -> List[str]:
    """Human-readable break steps, e.g. ``["20 -> 2 x 10", ...]``."""
    return [
        f"{bigger} -> {bigger // smaller} x {smaller}"
        for smaller, bigger in reversed(list(zip(denominations, denominations[1:])))
    ]
