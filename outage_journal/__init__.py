"""Outage journal backend."""
