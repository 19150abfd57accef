"""Public schema exports."""

from .analytics import AdminStats, AtRiskCount, ChurnClassification, ClientStatus
from .leaderboard import LeaderboardEntry, LoyaltyRanking
from .points import (
	BalanceChange,
	PointsAdjustment,
	PointsOperationResult,
	RedemptionCreate,
	TransactionRead,
	VisitCreate,
)
from .profile import ProfileCreate, ProfileRead
from .winners import MonthlyWinnerRead, RolloverSummary

__all__ = [
	"AdminStats",
	"AtRiskCount",
	"BalanceChange",
	"ChurnClassification",
	"ClientStatus",
	"LeaderboardEntry",
	"LoyaltyRanking",
	"MonthlyWinnerRead",
	"PointsAdjustment",
	"PointsOperationResult",
	"ProfileCreate",
	"ProfileRead",
	"RedemptionCreate",
	"RolloverSummary",
	"TransactionRead",
	"VisitCreate",
]
