"""
Floor OEE

Equipment status reconciliation, downtime attribution and OEE analytics.
"""

__version__ = "1.0.0"
