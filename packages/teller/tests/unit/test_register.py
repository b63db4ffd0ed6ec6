"""
Unit tests for the Register

Tests cover:
- Deposits and their validation
- Withdrawals with and without note breaking
- Atomicity of rejected calls
- Queries and custom denomination chains
"""

import pytest

from teller.errors import ConfigurationError, InvalidArgument
from teller.register import Register, describe_chain
from teller_types.schemas.models import FailureReason, NotePair, RegisterConfig


def quantities(register):
    return [register.get_quantity(d) for d in (1, 5, 10, 20)]


class TestInitialState:
    """Test a freshly created register."""

    def test_initial_quantities_are_zero(self, register):
        assert quantities(register) == [0, 0, 0, 0]
        assert register.total_value() == 0

    def test_denominations(self, register):
        assert register.denominations == (1, 5, 10, 20)

    def test_unsupported_denomination_quantity_is_zero(self, register):
        register.deposit([1, 10])
        assert register.get_quantity(2) == 0
        assert register.get_quantity(100) == 0
        assert register.get_quantity(-1) == 0

    def test_initial_counts(self):
        register = Register(initial_counts={20: 2, 1: 3})
        assert quantities(register) == [3, 0, 0, 2]
        assert register.total_value() == 43

    def test_from_config(self):
        register = Register.from_config(
            RegisterConfig(denominations=[1, 2, 10], initial_counts={10: 1})
        )
        assert register.denominations == (1, 2, 10)
        assert register.get_quantity(10) == 1

    def test_invalid_chain_raises_configuration_error(self):
        with pytest.raises(ConfigurationError, match="Invalid register configuration"):
            Register(denominations=[1, 5, 10, 25])


class TestDeposit:
    """Test deposit bookkeeping and validation."""

    def test_deposit_flat_pairs(self, register):
        register.deposit([1, 3, 5, 0, 10, 1, 20, 2])
        assert quantities(register) == [3, 0, 1, 2]

    def test_deposit_tuple_pairs(self, register):
        register.deposit([(20, 1), (5, 2)])
        assert quantities(register) == [0, 2, 0, 1]

    def test_deposit_note_pairs(self, register):
        register.deposit([NotePair(denomination=10, quantity=4)])
        assert register.get_quantity(10) == 4

    def test_deposit_mapping(self, register):
        register.deposit({1: 2, 20: 1})
        assert quantities(register) == [2, 0, 0, 1]

    def test_repeated_denominations_accumulate(self, register):
        register.deposit([5, 1, 5, 2, 5, 3])
        assert register.get_quantity(5) == 6

    def test_deposit_twice_accumulates(self, register):
        register.deposit([1, 3, 20, 15])
        register.deposit([1, 3, 20, 15])
        assert register.get_quantity(1) == 6
        assert register.get_quantity(20) == 30

    @pytest.mark.parametrize("empty", [None, [], (), {}])
    def test_empty_deposit_is_noop(self, register, empty):
        register.deposit([1, 1])
        register.deposit(empty)
        assert quantities(register) == [1, 0, 0, 0]

    def test_deposit_without_arguments(self, register):
        register.deposit()
        assert register.total_value() == 0

    def test_unsupported_denomination(self, register):
        with pytest.raises(InvalidArgument, match="Unsupported denomination") as exc_info:
            register.deposit([2, 5])
        assert exc_info.value.reason is FailureReason.UNSUPPORTED_DENOMINATION
        assert exc_info.value.value == 2

    def test_negative_quantity(self, register):
        with pytest.raises(InvalidArgument, match="negative quantity") as exc_info:
            register.deposit([1, -5, 5, 3])
        assert exc_info.value.reason is FailureReason.NEGATIVE_QUANTITY

    def test_odd_number_of_arguments(self, register):
        with pytest.raises(InvalidArgument, match="pairs") as exc_info:
            register.deposit([1, 10, 5])
        assert exc_info.value.reason is FailureReason.ODD_LENGTH

    def test_non_integer_value(self, register):
        with pytest.raises(InvalidArgument) as exc_info:
            register.deposit([1, 2.5])
        assert exc_info.value.reason is FailureReason.NOT_AN_INTEGER

    def test_invalid_argument_is_value_error(self, register):
        with pytest.raises(ValueError):
            register.deposit([3, 1])

    def test_rejected_deposit_applies_nothing(self, register):
        register.deposit([10, 1])
        with pytest.raises(InvalidArgument):
            register.deposit([1, 5, 5, 2, 2, 1])
        assert quantities(register) == [0, 0, 1, 0]

    def test_negative_after_valid_pairs_applies_nothing(self, register):
        with pytest.raises(InvalidArgument):
            register.deposit([1, 5, 20, 1, 5, -1])
        assert register.total_value() == 0


class TestWithdraw:
    """Test withdrawals, including note breaking."""

    def test_withdraw_with_change(self, register):
        register.deposit([1, 3, 5, 0, 10, 1, 20, 2])

        assert register.withdraw([1, 5, 10, 1]) is True
        assert quantities(register) == [3, 1, 1, 1]

    def test_withdraw_exact_match(self, register):
        register.deposit([1, 5, 5, 1, 10, 1, 20, 1])

        assert register.withdraw([1, 5, 5, 1, 10, 1, 20, 1]) is True
        assert quantities(register) == [0, 0, 0, 0]

    def test_withdraw_all_available_money(self, register):
        register.deposit([1, 10, 5, 5, 10, 2, 20, 1])

        assert register.withdraw([1, 10, 5, 5, 10, 2, 20, 1]) is True
        assert quantities(register) == [0, 0, 0, 0]

    def test_non_sequential_deposit_and_withdraw(self, register):
        register.deposit([10, 2, 1, 10, 5, 3, 20, 1])

        assert register.withdraw([5, 3, 1, 10, 10, 1, 20, 1]) is True
        assert quantities(register) == [0, 0, 1, 0]

    def test_deposit_withdraw_deposit(self, register):
        register.deposit([1, 3, 5, 0, 10, 1, 20, 15])
        assert register.withdraw([1, 43, 10, 3]) is True
        assert quantities(register) == [0, 0, 0, 12]

        register.deposit([1, 3, 5, 0, 10, 1, 20, 15])
        assert quantities(register) == [3, 0, 1, 27]

    def test_insufficient_funds(self, register):
        register.deposit([1, 5, 5, 5, 10, 1, 20, 0])

        outcome = register.attempt_withdrawal([1, 10, 5, 5, 10, 2])

        assert outcome.success is False
        assert outcome.reason is FailureReason.INSUFFICIENT_FUNDS
        assert outcome.requested_value == 55
        assert quantities(register) == [5, 5, 1, 0]

    def test_insufficient_notes_when_value_is_enough(self, register):
        # Value is there but only as small notes; nothing breaks upward
        register.deposit([1, 20])

        outcome = register.attempt_withdrawal([5, 1])

        assert outcome.success is False
        assert outcome.reason is FailureReason.INSUFFICIENT_NOTES
        assert quantities(register) == [20, 0, 0, 0]

    def test_failed_withdrawal_rolls_back_earlier_denominations(self, register):
        # The 20 is taken first, then the 5 cannot be made from the 1s
        register.deposit([1, 10, 20, 1])

        assert register.withdraw([20, 1, 5, 1]) is False
        assert quantities(register) == [10, 0, 0, 1]

    def test_failed_withdrawal_rolls_back_breaks(self, register):
        # Breaking the 20 gives four 5s, still short of six
        register.deposit([1, 30, 20, 1])

        assert register.withdraw([5, 6]) is False
        assert quantities(register) == [30, 0, 0, 1]

    def test_stepwise_breaking_from_largest(self, register):
        register.deposit([20, 1])

        outcome = register.attempt_withdrawal([1, 1])

        assert outcome.success is True
        assert outcome.breaks == 3
        assert quantities(register) == [4, 1, 1, 0]

    def test_larger_denominations_served_first(self, register):
        # If the 1s were served first the only 10 would be broken and the
        # direct request for a 10 would fail.
        register.deposit([10, 1, 5, 1])

        assert register.withdraw([1, 5, 10, 1]) is True
        assert quantities(register) == [0, 0, 0, 0]

    def test_repeated_request_denominations_are_summed(self, register):
        register.deposit([5, 4])

        outcome = register.attempt_withdrawal([5, 1, 5, 2])

        assert outcome.success is True
        assert outcome.requested == {5: 3}
        assert register.get_quantity(5) == 1

    def test_zero_quantity_request(self, register):
        register.deposit([20, 1])

        assert register.withdraw([1, 0]) is True
        assert quantities(register) == [0, 0, 0, 1]

    @pytest.mark.parametrize("empty", [None, [], ()])
    def test_empty_withdraw_succeeds(self, register, empty):
        register.deposit([1, 10, 5, 5, 10, 2, 20, 1])

        assert register.withdraw(empty) is True
        assert quantities(register) == [10, 5, 2, 1]

    @pytest.mark.parametrize(
        "request_pairs,reason",
        [
            ([1, 1, 5], FailureReason.ODD_LENGTH),
            ([2, 1], FailureReason.UNSUPPORTED_DENOMINATION),
            ([1, -1], FailureReason.NEGATIVE_QUANTITY),
            ([1, 1.0], FailureReason.NOT_AN_INTEGER),
        ],
    )
    def test_malformed_requests_return_false(self, register, request_pairs, reason):
        register.deposit([1, 10])

        outcome = register.attempt_withdrawal(request_pairs)

        assert outcome.success is False
        assert outcome.reason is reason
        assert register.withdraw(request_pairs) is False
        assert register.get_quantity(1) == 10

    def test_withdraw_never_raises_for_bad_input(self, register):
        assert register.withdraw("1:5") is False
        assert register.withdraw(5) is False
        assert register.attempt_withdrawal(5).reason is FailureReason.NOT_AN_INTEGER


class TestDryRun:
    """Test can_withdraw and commit=False."""

    def test_can_withdraw_does_not_mutate(self, register):
        register.deposit([20, 1])

        assert register.can_withdraw([1, 1]) is True
        assert quantities(register) == [0, 0, 0, 1]

    def test_can_withdraw_reports_failure(self, register):
        register.deposit([1, 3])
        assert register.can_withdraw([1, 4]) is False

    def test_dry_run_outcome_matches_real_run(self, register):
        register.deposit([1, 3, 10, 1, 20, 2])

        planned = register.attempt_withdrawal([1, 5, 10, 1], commit=False)
        actual = register.attempt_withdrawal([1, 5, 10, 1])

        assert planned == actual


class TestCustomChains:
    """Test registers with non-default denominations."""

    def test_two_level_chain(self):
        register = Register(denominations=[2, 10])
        register.deposit([10, 1])

        assert register.withdraw([2, 3]) is True
        assert register.get_quantity(2) == 2
        assert register.get_quantity(10) == 0

    def test_deep_chain_breaks_through_every_level(self):
        chain = [1, 2, 4, 8, 16, 32, 64, 128]
        register = Register(denominations=chain, initial_counts={128: 1})

        outcome = register.attempt_withdrawal([1, 1])

        assert outcome.success is True
        assert outcome.breaks == len(chain) - 1
        assert register.get_quantity(128) == 0
        assert register.get_quantity(1) == 1
        for d in chain[1:-1]:
            assert register.get_quantity(d) == 1
        assert register.total_value() == 127

    def test_single_denomination_cannot_break(self):
        register = Register(denominations=[5])
        register.deposit([5, 2])

        assert register.withdraw([5, 3]) is False
        assert register.withdraw([5, 2]) is True


class TestSnapshotAndRepr:
    """Test inspection helpers."""

    def test_snapshot(self, register):
        register.deposit([5, 2, 20, 1])

        snapshot = register.snapshot()

        assert snapshot.denominations == [1, 5, 10, 20]
        assert snapshot.counts == {1: 0, 5: 2, 10: 0, 20: 1}
        assert snapshot.total_value == 30

    def test_counts_is_a_copy(self, register):
        counts = register.counts()
        counts[1] = 99
        assert register.get_quantity(1) == 0

    def test_repr(self, register):
        register.deposit([20, 2])
        assert repr(register) == "Register(1x0, 5x0, 10x0, 20x2)"

    def test_describe_chain(self):
        assert describe_chain([1, 5, 10, 20]) == [
            "20 -> 2 x 10",
            "10 -> 2 x 5",
            "5 -> 5 x 1",
        ]


class TestLogging:
    """Test that register activity is logged."""

    def test_deposit_logged(self, register, log_messages):
        register.deposit([20, 1])
        assert any("Deposited 20" in m for m in log_messages)

    def test_breaks_logged(self, register, log_messages):
        register.deposit([10, 1])
        register.withdraw([5, 1])
        assert "Broke one 10 into 2 x 5" in log_messages

    def test_rejection_logged(self, register, log_messages):
        register.withdraw([1, 1])
        assert any("insufficient" in m.lower() or "requested 1" in m for m in log_messages)
