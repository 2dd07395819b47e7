"""Stable building blocks shared by every launch step (errors and types)."""
