"""Strength-training tracker backend with a triple-progression engine."""
