"""Training methodology variants and intensity-distribution enforcement."""
