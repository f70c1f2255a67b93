"""Cycle detection, false-positive filtering, and analysis results."""
