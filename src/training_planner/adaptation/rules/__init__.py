"""Adaptation rules, discovered by AdaptationRuleRegistry."""
