"""Shared helpers for calendar-day reasoning and rounding."""
