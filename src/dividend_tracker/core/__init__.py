"""Core utilities shared across layers."""
