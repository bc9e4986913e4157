"""Utility helpers: prompts, flags, logging and dotted-key access."""
