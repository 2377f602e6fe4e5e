"""Unit tests for the pure transfer and deposit rules."""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from freelance_market.core.enums import ProfileType
from freelance_market.domain.results import ErrorKind
from freelance_market.domain.rules import (
    deposit_limit,
    evaluate_deposit,
    evaluate_transfer,
    parse_amount,
    to_decimal,
)


def make_profile(profile_id, profile_type, balance="0"):
    return SimpleNamespace(id=profile_id, type=profile_type, balance=Decimal(balance))


@pytest.mark.unit
class TestParseAmount:
    """Normalization of caller-supplied amounts."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (200, Decimal("200.00")),
            ("12.5", Decimal("12.50")),
            (Decimal("0.01"), Decimal("0.01")),
            (0.1, Decimal("0.10")),
        ],
    )
    def test_accepts_positive_amounts(self, raw, expected):
        result = parse_amount(raw)

        assert result.ok
        assert result.value == expected

    @pytest.mark.parametrize(
        "raw",
        [0, -5, "-0.01", "abc", None, True, float("nan"), float("inf"), "Infinity", [1], "1e400"],
    )
    def test_rejects_invalid_amounts(self, raw):
        result = parse_amount(raw)

        assert not result.ok
        assert result.kind == ErrorKind.INVALID_AMOUNT

    def test_rejects_sub_cent_precision(self):
        result = parse_amount("10.005")

        assert result.kind == ErrorKind.INVALID_AMOUNT
        assert "two decimal places" in result.detail

    def test_to_decimal_keeps_float_text(self):
        assert to_decimal(0.1) == Decimal("0.1")
        assert to_decimal(None) == Decimal("0")


@pytest.mark.unit
class TestEvaluateTransfer:
    """Who may pay whom, in which order the checks run."""

    def setup_method(self):
        self.client = make_profile(1, ProfileType.CLIENT, "1000")
        self.contractor = make_profile(5, ProfileType.CONTRACTOR, "64")

    def test_accepted_transfer(self):
        result = evaluate_transfer(self.client, self.contractor, 200)

        assert result.ok
        assert result.value.client_id == 1
        assert result.value.contractor_id == 5
        assert result.value.amount == Decimal("200.00")

    def test_whole_balance_can_be_spent(self):
        assert evaluate_transfer(self.client, self.contractor, "1000").ok

    def test_paying_profile_must_be_a_client(self):
        other_contractor = make_profile(6, ProfileType.CONTRACTOR, "5000")

        result = evaluate_transfer(other_contractor, self.contractor, 10)

        assert result.kind == ErrorKind.INVALID_PARTY
        assert result.detail == "The paying profile must be a client"

    def test_receiving_profile_must_be_a_contractor(self):
        other_client = make_profile(2, ProfileType.CLIENT)

        result = evaluate_transfer(self.client, other_client, 10)

        assert result.kind == ErrorKind.INVALID_PARTY
        assert result.detail == "The receiving profile must be a contractor"

    def test_missing_profiles_are_invalid_parties(self):
        assert evaluate_transfer(None, self.contractor, 10).kind == ErrorKind.INVALID_PARTY
        assert evaluate_transfer(self.client, None, 10).kind == ErrorKind.INVALID_PARTY

    def test_party_check_runs_before_amount_check(self):
        result = evaluate_transfer(None, self.contractor, -1)

        assert result.kind == ErrorKind.INVALID_PARTY

    def test_invalid_amount(self):
        result = evaluate_transfer(self.client, self.contractor, 0)

        assert result.kind == ErrorKind.INVALID_AMOUNT

    def test_insufficient_funds(self):
        result = evaluate_transfer(self.client, self.contractor, "1000.01")

        assert result.kind == ErrorKind.INSUFFICIENT_FUNDS
        assert result.summary == "Your balance is not enough for paying this job"
        assert result.detail == "Balance 1000.00 does not cover 1000.01"

    def test_profile_can_not_pay_itself(self):
        # Only reachable with inconsistent data: same id, two types
        impostor = make_profile(1, ProfileType.CONTRACTOR)

        result = evaluate_transfer(self.client, impostor, 10)

        assert result.kind == ErrorKind.INVALID_PARTY
        assert result.detail == "A profile can not pay itself"


@pytest.mark.unit
class TestEvaluateDeposit:
    """The 25% deposit limit."""

    def setup_method(self):
        self.client = make_profile(1, ProfileType.CLIENT, "1150")

    @pytest.mark.parametrize(
        "owed,limit",
        [
            ("201", Decimal("50.25")),
            ("0", Decimal("0.00")),
            ("0.03", Decimal("0.00")),
            ("0.07", Decimal("0.01")),
            ("402", Decimal("100.50")),
        ],
    )
    def test_limit_is_a_quarter_rounded_down(self, owed, limit):
        assert deposit_limit(Decimal(owed)) == limit

    def test_deposit_at_the_limit_is_accepted(self):
        result = evaluate_deposit(self.client, "50.25", Decimal("201"))

        assert result.ok
        assert result.value.amount == Decimal("50.25")
        assert result.value.limit == Decimal("50.25")

    def test_deposit_over_the_limit_is_rejected(self):
        result = evaluate_deposit(self.client, 99999999999, Decimal("201"))

        assert result.kind == ErrorKind.DEPOSIT_LIMIT_EXCEEDED
        assert result.summary == "It is not possible to deposit this amount on this profile balance"
        assert "limit 50.25" in result.detail

    def test_nothing_owed_means_no_deposit(self):
        result = evaluate_deposit(self.client, "0.01", Decimal("0"))

        assert result.kind == ErrorKind.DEPOSIT_LIMIT_EXCEEDED

    def test_contractor_can_not_receive_deposits(self):
        contractor = make_profile(5, ProfileType.CONTRACTOR)

        result = evaluate_deposit(contractor, 10, Decimal("1000"))

        assert result.kind == ErrorKind.INVALID_PARTY
        assert result.detail == "The client profile is not valid for this operation"

    def test_unknown_profile(self):
        assert evaluate_deposit(None, 10, Decimal("1000")).kind == ErrorKind.INVALID_PARTY

    def test_invalid_amount(self):
        result = evaluate_deposit(self.client, "-10", Decimal("1000"))

        assert result.kind == ErrorKind.INVALID_AMOUNT
