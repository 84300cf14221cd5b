"""Runtime toggles."""
