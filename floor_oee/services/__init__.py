"""
Floor OEE - Services Package

Interval parsing, source reconciliation, day splitting, downtime aggregation
and OEE calculation.
"""

from .engine import IngestionReport, MetricsEngine

__all__ = ["IngestionReport", "MetricsEngine"]
