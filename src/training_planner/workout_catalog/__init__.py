"""Workout templates and substitution lookups."""
