"""
Typed outcomes of points operations.
"""
from dataclasses import dataclass
from typing import Optional

from apps.common.ledger import Rejection


INVALID_POINTS = 'invalid_points'
INSUFFICIENT_BALANCE = 'insufficient_balance'


@dataclass(frozen=True)
class PointsResult:
    success: bool
    points: int = 0
    balance: int = 0
    transaction: object = None
    rejection: Optional[Rejection] = None

    @property
    def reason(self):
        return self.rejection.reason if self.rejection else None

    @classmethod
    def invalid_points(cls, points):
        return cls(success=False, rejection=Rejection(
            INVALID_POINTS, 'Points must be a positive whole number', {'requested': points}
        ))

    @classmethod
    def insufficient_balance(cls, requested, available):
        return cls(success=False, balance=available, rejection=Rejection(
            INSUFFICIENT_BALANCE, 'Not enough points',
            {'requested': requested, 'available': available}
        ))
