"""Adaptive feedback: progress analysis, recovery, fatigue, risk, and rule-driven plan changes."""
