"""
Points arithmetic driven by settings.LOYALTY_CONFIG.
"""
from decimal import Decimal, ROUND_FLOOR

from django.conf import settings


class PointsCalculator:
    """Convert between currency amounts and points"""

    DEFAULT_UNITS_PER_POINT = 100

    @classmethod
    def units_per_point(cls):
        return int(settings.LOYALTY_CONFIG.get('CURRENCY_UNITS_PER_POINT', cls.DEFAULT_UNITS_PER_POINT))

    @classmethod
    def points_for_amount(cls, amount):
        """Points earned on `amount`: one per full `units_per_point` spent"""
        if amount is None:
            return 0
        points = (Decimal(str(amount)) / cls.units_per_point()).to_integral_value(rounding=ROUND_FLOOR)
        return max(int(points), 0)

    @staticmethod
    def value_of_points(points):
        """Currency value of redeeming `points`"""
        return Decimal(points) * Decimal(str(settings.LOYALTY_CONFIG.get('POINT_VALUE', 1)))
