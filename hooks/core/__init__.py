"""Shared building blocks for the agent loop stop hooks."""
