"""Personalized endurance training plans: periodization, methodology customization, adaptive feedback."""
