"""Tests for profile registration."""

import pytest
from sqlalchemy import func, select

from loyalty_ledger.core.errors import LedgerError
from loyalty_ledger.models import Profile, ProfileRole
from loyalty_ledger.services import profile_service


class _EmptyResult:
    def scalar_one_or_none(self):
        return None


class TestCreateProfile:
    def test_new_profile_starts_at_zero(self, db_session):
        profile = profile_service.create_profile(db_session, full_name="  Ana  ", whatsapp="+54 11 5555-0000")

        assert profile.full_name == "Ana"
        assert profile.whatsapp == "541155550000"
        assert profile.role == ProfileRole.CLIENT
        assert (profile.points, profile.monthly_points, profile.total_points_accumulated) == (0, 0, 0)

    def test_blank_name_rejected(self, db_session):
        with pytest.raises(LedgerError):
            profile_service.create_profile(db_session, full_name="   ")

    def test_duplicate_number_rejected_before_insert(self, db_session, make_profile):
        make_profile("First", whatsapp="1155550101")

        with pytest.raises(LedgerError) as exc_info:
            profile_service.create_profile(db_session, full_name="Second", whatsapp="11 5555 0101")

        assert exc_info.value.status_code == 409

    def test_duplicate_number_lost_race_maps_to_conflict(self, db_session, make_profile, monkeypatch):
        make_profile("First", whatsapp="1155550101")
        execute = db_session.execute

        # The lookup misses the row, as it would when the other insert lands after it.
        def stale_lookup(statement, *args, **kwargs):
            if "whatsapp" in str(statement):
                return _EmptyResult()
            return execute(statement, *args, **kwargs)

        monkeypatch.setattr(db_session, "execute", stale_lookup)

        with pytest.raises(LedgerError) as exc_info:
            profile_service.create_profile(db_session, full_name="Second", whatsapp="1155550101")
        monkeypatch.undo()

        assert exc_info.value.status_code == 409
        count = db_session.execute(
            select(func.count(Profile.id)).where(Profile.whatsapp == "1155550101")
        ).scalar_one()
        assert count == 1

    def test_parse_profile_id_rejects_garbage(self):
        assert profile_service.parse_profile_id("not-a-uuid") is None
        assert profile_service.parse_profile_id(None) is None
