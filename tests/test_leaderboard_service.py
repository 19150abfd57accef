"""Tests for monthly leaderboard ordering and rank."""

import uuid

import pytest

from loyalty_ledger.core.errors import ProfileNotFound
from loyalty_ledger.models import ProfileRole
from loyalty_ledger.services import leaderboard_service


class TestTopN:
    def test_orders_by_monthly_then_lifetime(self, db_session, make_profile):
        b = make_profile("B", monthly_points=50, total_points_accumulated=100)
        a = make_profile("A", monthly_points=50, total_points_accumulated=200)
        c = make_profile("C", monthly_points=70, total_points_accumulated=70)

        entries = leaderboard_service.top_n(db_session, limit=5)

        assert [entry.id for entry in entries] == [c.id, a.id, b.id]

    def test_excludes_admins_and_zero_point_profiles(self, db_session, make_profile):
        make_profile("Admin", role=ProfileRole.ADMIN, monthly_points=999, total_points_accumulated=999)
        make_profile("Idle", monthly_points=0, total_points_accumulated=300)
        active = make_profile("Active", monthly_points=3, total_points_accumulated=3)

        entries = leaderboard_service.top_n(db_session)

        assert [entry.id for entry in entries] == [active.id]

    def test_user_role_is_a_competitor(self, db_session, make_profile):
        user = make_profile("Legacy", role=ProfileRole.USER, monthly_points=4)

        assert [entry.id for entry in leaderboard_service.top_n(db_session)] == [user.id]

    def test_limit_and_points_are_monthly(self, db_session, make_profile):
        for i in range(7):
            make_profile(f"P{i}", points=1000, monthly_points=i + 1, total_points_accumulated=i + 1)

        entries = leaderboard_service.top_n(db_session, limit=5)

        assert len(entries) == 5
        assert [entry.points for entry in entries] == [7, 6, 5, 4, 3]


class TestRank:
    def test_leader_is_rank_one(self, db_session, make_profile):
        leader = make_profile("Leader", monthly_points=90)
        make_profile("Other", monthly_points=10)
        make_profile("Admin", role=ProfileRole.ADMIN, monthly_points=500)

        assert leaderboard_service.rank_of(db_session, leader.id) == 1

    def test_rank_ignores_lifetime_tie_break(self, db_session, make_profile):
        first = make_profile("First", monthly_points=50, total_points_accumulated=200)
        second = make_profile("Second", monthly_points=50, total_points_accumulated=100)
        make_profile("Top", monthly_points=60)

        assert leaderboard_service.rank_of(db_session, first.id) == 2
        assert leaderboard_service.rank_of(db_session, second.id) == 2

    def test_zero_point_user_ranks_after_everyone_scoring(self, db_session, make_profile):
        make_profile("A", monthly_points=5)
        make_profile("B", monthly_points=1)
        idle = make_profile("Idle")

        assert leaderboard_service.rank_of(db_session, idle.id) == 3

    def test_unknown_user(self, db_session):
        with pytest.raises(ProfileNotFound):
            leaderboard_service.rank_of(db_session, uuid.uuid4())


class TestTopLoyaltyRanking:
    def test_combines_top_and_rank(self, db_session, make_profile):
        make_profile("A", monthly_points=30)
        me = make_profile("Me", monthly_points=20)

        ranking = leaderboard_service.get_top_loyalty_ranking(db_session, str(me.id))

        assert [entry.full_name for entry in ranking.top] == ["A", "Me"]
        assert ranking.user_rank == 2

    def test_unknown_user_gets_rank_zero(self, db_session, make_profile):
        make_profile("A", monthly_points=30)

        ranking = leaderboard_service.get_top_loyalty_ranking(db_session, "missing")

        assert ranking.user_rank == 0
        assert len(ranking.top) == 1
