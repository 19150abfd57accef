"""Service layer exports."""

from . import (
	churn_service,
	leaderboard_service,
	ledger_service,
	points_service,
	profile_service,
	rollover_service,
	stats_service,
	transaction_service,
)

__all__ = [
	"churn_service",
	"leaderboard_service",
	"ledger_service",
	"points_service",
	"profile_service",
	"rollover_service",
	"stats_service",
	"transaction_service",
]
