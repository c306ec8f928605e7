"""Transactions page controllers."""
