"""
Points services module.
"""
from .points_service import PointsService
from .points_calculator import PointsCalculator
from .results import PointsResult

__all__ = [
    'PointsService',
    'PointsCalculator',
    'PointsResult',
]
