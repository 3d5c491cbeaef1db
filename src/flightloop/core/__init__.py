"""Core services: input handling, clocks and logging."""
