"""Shared domain types for the Flight Capacity service."""
