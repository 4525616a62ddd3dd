"""Produce commands: generate, batch."""
