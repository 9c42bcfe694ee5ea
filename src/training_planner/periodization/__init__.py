"""Phase allocation, plan generation, and plan-level operations."""
