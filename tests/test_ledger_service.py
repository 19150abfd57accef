"""Tests for the balance writer."""

import uuid

import pytest

from loyalty_ledger.core.errors import InsufficientBalance, InvalidAmount, Unauthorized, UpdateFailed
from loyalty_ledger.services import ledger_service


class TestApplyDelta:
    """Counter arithmetic of apply_delta."""

    def test_earn_then_redeem_scenario(self, db_session, make_profile):
        """+120 then -15 then a rejected -1000."""
        profile = make_profile("Ana")

        change = ledger_service.apply_delta(db_session, profile.id, 120, authorized=True)
        assert (change.new_points, change.new_monthly, change.new_accumulated) == (120, 120, 120)

        change = ledger_service.apply_delta(db_session, profile.id, -15, authorized=True)
        assert (change.new_points, change.new_monthly, change.new_accumulated) == (105, 120, 120)

        with pytest.raises(InsufficientBalance):
            ledger_service.apply_delta(db_session, profile.id, -1000, authorized=True)

        db_session.refresh(profile)
        assert profile.points == 105
        assert profile.monthly_points == 120
        assert profile.total_points_accumulated == 120

    def test_lifetime_counter_is_sum_of_positive_deltas(self, db_session, make_profile):
        profile = make_profile()
        deltas = [5, 10, -3, 7, -9, 1]

        for delta in deltas:
            ledger_service.apply_delta(db_session, profile.id, delta, authorized=True)

        db_session.refresh(profile)
        assert profile.total_points_accumulated == sum(d for d in deltas if d > 0)
        assert profile.monthly_points == sum(d for d in deltas if d > 0)
        assert profile.points == sum(deltas)

    def test_redemption_leaves_monthly_and_lifetime_untouched(self, db_session, make_profile):
        profile = make_profile(points=40, monthly_points=12, total_points_accumulated=90)

        change = ledger_service.apply_delta(db_session, profile.id, -40, authorized=True)

        assert change.new_points == 0
        assert change.new_monthly == 12
        assert change.new_accumulated == 90

    def test_id_is_whitespace_trimmed(self, db_session, make_profile):
        profile = make_profile()

        change = ledger_service.apply_delta(db_session, f"  {profile.id}\n", 3, authorized=True)

        assert change.user_id == profile.id
        assert change.new_points == 3

    def test_string_and_integral_float_amounts_accepted(self, db_session, make_profile):
        profile = make_profile()

        ledger_service.apply_delta(db_session, profile.id, "4", authorized=True)
        change = ledger_service.apply_delta(db_session, profile.id, 2.0, authorized=True)

        assert change.new_points == 6

    def test_unauthorized_caller_rejected(self, db_session, make_profile):
        profile = make_profile()

        with pytest.raises(Unauthorized):
            ledger_service.apply_delta(db_session, profile.id, 10, authorized=False)

        db_session.refresh(profile)
        assert profile.points == 0

    @pytest.mark.parametrize("amount", [0, float("nan"), float("inf"), 1.5, "ten", None, True, [3]])
    def test_invalid_amounts_rejected(self, db_session, make_profile, amount):
        profile = make_profile()

        with pytest.raises(InvalidAmount):
            ledger_service.apply_delta(db_session, profile.id, amount, authorized=True)

    def test_unknown_profile_reports_update_failed(self, db_session):
        with pytest.raises(UpdateFailed) as exc_info:
            ledger_service.apply_delta(db_session, uuid.uuid4(), 10, authorized=True)

        assert exc_info.value.code == "UPDATE_FAILED"
        assert exc_info.value.status_code == 409

    def test_malformed_id_reports_update_failed(self, db_session):
        with pytest.raises(UpdateFailed):
            ledger_service.apply_delta(db_session, "not-a-uuid", 10, authorized=True)

    @pytest.mark.parametrize("amount", [10**20, -(10**20), ledger_service.MAX_POINTS + 1, "99999999999"])
    def test_amounts_beyond_column_range_rejected(self, db_session, make_profile, amount):
        profile = make_profile(points=5, monthly_points=5, total_points_accumulated=5)

        with pytest.raises(InvalidAmount):
            ledger_service.apply_delta(db_session, profile.id, amount, authorized=True)

        db_session.refresh(profile)
        assert profile.points == 5

    def test_credit_that_would_overflow_balance_rejected(self, db_session, make_profile):
        near_max = ledger_service.MAX_POINTS - 10
        profile = make_profile(points=near_max, monthly_points=3, total_points_accumulated=near_max)

        with pytest.raises(InvalidAmount):
            ledger_service.apply_delta(db_session, profile.id, 11, authorized=True)

        change = ledger_service.apply_delta(db_session, profile.id, 10, authorized=True)
        assert change.new_points == ledger_service.MAX_POINTS

    def test_write_guard_rejects_overdraw_without_precheck(self, db_session, make_profile):
        """The store-side condition refuses a negative balance on its own."""
        profile = make_profile(points=10, monthly_points=10, total_points_accumulated=10)

        with pytest.raises(InsufficientBalance):
            ledger_service.apply_delta(db_session, profile.id, -11, authorized=True)

        db_session.refresh(profile)
        assert profile.points == 10


class TestEnsureSufficientBalance:
    def test_returns_balance_when_covered(self, db_session, make_profile):
        profile = make_profile(points=30)

        assert ledger_service.ensure_sufficient_balance(db_session, profile.id, 30) == 30

    def test_negative_amount_checked_by_magnitude(self, db_session, make_profile):
        profile = make_profile(points=5)

        with pytest.raises(InsufficientBalance) as exc_info:
            ledger_service.ensure_sufficient_balance(db_session, profile.id, -6)

        assert "balance is 5" in exc_info.value.detail

    def test_unknown_profile_reports_update_failed(self, db_session):
        with pytest.raises(UpdateFailed):
            ledger_service.ensure_sufficient_balance(db_session, uuid.uuid4(), 1)

    def test_malformed_id_reports_update_failed(self, db_session):
        with pytest.raises(UpdateFailed):
            ledger_service.ensure_sufficient_balance(db_session, "nope", 1)
