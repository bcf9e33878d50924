"""Shared pytest configuration."""

import os

# Render plots off-screen
os.environ.setdefault("MPLBACKEND", "Agg")
