"""Loyalty points ledger and monthly ranking service."""
