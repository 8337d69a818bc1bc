"""Vortex reward calculation over Root Network distribution data."""
