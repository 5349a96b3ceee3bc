"""
Points service for handling points operations.

The PointsTransaction rows are the source of truth; PointsAccount caches
their sum and is only written in the same transaction that inserts a row,
while holding a lock on the account.
"""
import logging

from django.db import transaction
from django.db.models import Sum

from apps.common.ledger import audit, insert_once, invariant_violation, lock
from ..models import PointsAccount, PointsTransaction
from .points_calculator import PointsCalculator
from .results import PointsResult

logger = logging.getLogger(__name__)
alert_logger = logging.getLogger('ledger.alerts')


class PointsService:
    """Service for handling points operations"""

    @staticmethod
    def get_or_create_account(user_id):
        """Get or create points account for user"""
        account, created = PointsAccount.objects.get_or_create(user_id=user_id)
        if created:
            logger.info(f"Created points account for user {user_id}")
        return account

    @staticmethod
    def _locked_account(user_id):
        PointsService.get_or_create_account(user_id)
        return lock(PointsAccount.objects, user_id=user_id)

    @staticmethod
    def _append(account, points_change, transaction_type, order_id=None, reason='', award_order_id=None):
        """Insert one ledger row and move the cached balance with it."""
        balance_after = account.points_balance + points_change
        if balance_after < 0:
            invariant_violation(
                'points balance would go negative',
                user=account.user_id, balance=account.points_balance, change=points_change
            )

        entry = PointsTransaction.objects.create(
            user_id=account.user_id,
            order_id=order_id,
            transaction_type=transaction_type,
            points_change=points_change,
            balance_after=balance_after,
            reason=reason,
            award_order_id=award_order_id,
        )
        PointsService._move_account(account, points_change, transaction_type)
        return entry

    @staticmethod
    def _move_account(account, points_change, transaction_type):
        account.points_balance += points_change
        if points_change > 0 and transaction_type == PointsTransaction.TYPE_EARNING:
            account.lifetime_earned += points_change
        elif points_change < 0 and transaction_type == PointsTransaction.TYPE_REDEMPTION:
            account.lifetime_redeemed += -points_change
        account.save(update_fields=['points_balance', 'lifetime_earned', 'lifetime_redeemed', 'updated_at'])

    @staticmethod
    @transaction.atomic
    def award_points(user_id, order_id, total_amount) -> int:
        """
        Credit points earned on a paid order. Returns the points awarded,
        0 when nothing is earned or the order was already credited.
        """
        points = PointsCalculator.points_for_amount(total_amount)
        if points <= 0:
            return 0

        order_id = str(order_id)
        account = PointsService._locked_account(user_id)

        already_awarded = PointsTransaction.objects.filter(
            order_id=order_id, points_change__gt=0
        ).exists()
        if already_awarded:
            logger.info(f"Points for order {order_id} already awarded")
            return 0

        balance_after = account.points_balance + points
        entry, created = insert_once(
            PointsTransaction,
            {'award_order_id': order_id},
            {
                'user_id': user_id,
                'order_id': order_id,
                'transaction_type': PointsTransaction.TYPE_EARNING,
                'points_change': points,
                'balance_after': balance_after,
                'reason': f'Order {order_id}',
            },
        )
        if not created:
            return 0

        PointsService._move_account(account, points, PointsTransaction.TYPE_EARNING)
        audit('points.awarded', user=user_id, order=order_id, points=points, balance=balance_after)
        return points

    @staticmethod
    @transaction.atomic
    def redeem_points(user_id, order_id, points) -> PointsResult:
        """Spend points against an order."""
        if isinstance(points, bool) or not isinstance(points, int) or points <= 0:
            return PointsResult.invalid_points(points)

        account = PointsService._locked_account(user_id)
        if account.points_balance < points:
            return PointsResult.insufficient_balance(points, account.points_balance)

        entry = PointsService._append(
            account, -points, PointsTransaction.TYPE_REDEMPTION,
            order_id=str(order_id) if order_id is not None else None,
            reason=f'Redeemed on order {order_id}' if order_id is not None else 'Redeemed',
        )
        audit('points.redeemed', user=user_id, order=order_id, points=points, balance=entry.balance_after)
        return PointsResult(success=True, points=points, balance=entry.balance_after, transaction=entry)

    @staticmethod
    @transaction.atomic
    def adjust_points(user_id, points_change, reason) -> PointsResult:
        """Operator correction, positive or negative."""
        if isinstance(points_change, bool) or not isinstance(points_change, int) or points_change == 0:
            return PointsResult.invalid_points(points_change)

        account = PointsService._locked_account(user_id)
        if account.points_balance + points_change < 0:
            return PointsResult.insufficient_balance(-points_change, account.points_balance)

        entry = PointsService._append(
            account, points_change, PointsTransaction.TYPE_ADJUSTMENT, reason=reason or 'Manual adjustment'
        )
        audit('points.adjusted', user=user_id, points=points_change, balance=entry.balance_after, reason=reason)
        return PointsResult(success=True, points=points_change, balance=entry.balance_after, transaction=entry)

    @staticmethod
    def get_balance(user_id) -> int:
        balance = PointsAccount.objects.filter(user_id=user_id).values_list('points_balance', flat=True).first()
        return balance or 0

    @staticmethod
    def get_transactions(user_id, transaction_type=None):
        queryset = PointsTransaction.objects.filter(user_id=user_id)
        if transaction_type:
            queryset = queryset.filter(transaction_type=transaction_type)
        return queryset

    @staticmethod
    def get_summary(user_id, recent=10):
        """Get comprehensive points summary for user"""
        account = PointsAccount.objects.filter(user_id=user_id).first()
        return {
            'points_balance': account.points_balance if account else 0,
            'lifetime_earned': account.lifetime_earned if account else 0,
            'lifetime_redeemed': account.lifetime_redeemed if account else 0,
            'points_value': PointsCalculator.value_of_points(account.points_balance if account else 0),
            'currency_units_per_point': PointsCalculator.units_per_point(),
            'recent_transactions': list(PointsTransaction.objects.filter(user_id=user_id)[:recent]),
        }

    @staticmethod
    def replay_balance(user_id) -> int:
        """Balance recomputed from the ledger rows alone."""
        total = PointsTransaction.objects.filter(user_id=user_id).aggregate(total=Sum('points_change'))['total']
        return total or 0

    @staticmethod
    def reconcile_balances(fix=False):
        """
        Compare every cached balance with its ledger replay.

        Returns a list of (user_id, cached, replayed) for each drifted user.
        With fix=True the cached balance is rewritten from the ledger.
        """
        user_ids = set(PointsAccount.objects.values_list('user_id', flat=True))
        user_ids.update(PointsTransaction.objects.values_list('user_id', flat=True).distinct())

        drifted = []
        for user_id in sorted(user_ids):
            cached = PointsService.get_balance(user_id)
            replayed = PointsService.replay_balance(user_id)
            if cached == replayed:
                continue
            alert_logger.critical(
                f'Points balance drift for user {user_id}: cached={cached} ledger={replayed}'
            )
            drifted.append((user_id, cached, replayed))
            if fix:
                PointsService._rewrite_account(user_id)
        return drifted

    @staticmethod
    @transaction.atomic
    def _rewrite_account(user_id):
        account = PointsService._locked_account(user_id)
        rows = PointsTransaction.objects.filter(user_id=user_id)
        account.points_balance = PointsService.replay_balance(user_id)
        account.lifetime_earned = rows.filter(
            transaction_type=PointsTransaction.TYPE_EARNING
        ).aggregate(total=Sum('points_change'))['total'] or 0
        account.lifetime_redeemed = -(rows.filter(
            transaction_type=PointsTransaction.TYPE_REDEMPTION
        ).aggregate(total=Sum('points_change'))['total'] or 0)
        account.save(update_fields=['points_balance', 'lifetime_earned', 'lifetime_redeemed', 'updated_at'])
        audit('points.reconciled', user=user_id, balance=account.points_balance)
