"""Scheduled background jobs."""

from .monthly_rollover import register_scheduler, run_rollover_once

__all__ = ["register_scheduler", "run_rollover_once"]
