"""Contracts, errors and configuration shared across gateway and ledger."""
