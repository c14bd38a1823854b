"""
Floor OEE - API Dependencies
"""

from fastapi import Request

from floor_oee.services.engine import MetricsEngine
from floor_oee.utils.exceptions import EngineNotReadyError


def get_engine(request: Request) -> MetricsEngine:
    """The engine snapshot built at startup."""
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        raise EngineNotReadyError()
    return engine
