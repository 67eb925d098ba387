"""This is the processing submodule.

This module contains the building blocks of the rhythm analysis: extracting
per-indicator series from daily samples, scoring and searching candidate periods,
deciding when to recompute, and generating synthetic histories.
"""
