"""
Concurrent callers against the ledger engines.

Each worker runs on its own thread and database connection. A storage error
(lock contention, deadlock) is what the API reports as a retryable 503, so
workers retry on DatabaseError the way a client would; every other outcome
must be a typed result.
"""
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest
from django.db import DatabaseError, connection
from django.db.models import Sum

from apps.crm.models import Movement, MovementPayment
from apps.crm.services import PaymentTracker, Reasons as PaymentReasons
from apps.discounts.models import DiscountRedemption
from apps.discounts.services import DiscountService, Reasons as DiscountReasons
from apps.points.models import PointsTransaction
from apps.points.services import PointsService
from apps.points.services.results import INSUFFICIENT_BALANCE
from tests.factories import DiscountCodeFactory, MovementFactory, UserFactory

WORKERS = 8


def run_concurrently(calls, attempts=50):
    """Start every call at the same moment and return their results in order."""
    barrier = threading.Barrier(len(calls), timeout=10)

    def worker(call):
        try:
            barrier.wait()
            for attempt in range(attempts):
                try:
                    return call()
                except DatabaseError:
                    time.sleep(0.005 * (attempt + 1))
            raise AssertionError(f"still failing after {attempts} attempts")
        finally:
            connection.close()

    with ThreadPoolExecutor(max_workers=len(calls)) as pool:
        futures = [pool.submit(worker, call) for call in calls]
        return [future.result() for future in futures]


@pytest.mark.django_db(transaction=True)
class TestConcurrentPointsRedemption:

    def test_balance_never_goes_negative(self):
        user = UserFactory()
        PointsService.award_points(user.id, 'seed-order', Decimal('10000'))

        results = run_concurrently([
            lambda i=i: PointsService.redeem_points(user.id, f'checkout-{i}', 30)
            for i in range(WORKERS)
        ])

        accepted = [r for r in results if r.success]
        refused = [r for r in results if not r.success]
        assert len(accepted) == 3
        assert {r.reason for r in refused} == {INSUFFICIENT_BALANCE}

        balance = PointsService.get_balance(user.id)
        assert balance == 10
        assert PointsService.replay_balance(user.id) == balance
        assert PointsTransaction.objects.filter(user=user).aggregate(
            total=Sum('points_change'))['total'] == balance

    def test_duplicate_awards_for_one_order_earn_once(self):
        user = UserFactory()

        results = run_concurrently([
            lambda: PointsService.award_points(user.id, 'order-1', Decimal('25000'))
            for _ in range(WORKERS)
        ])

        assert sorted(results) == [0] * (WORKERS - 1) + [250]
        assert PointsService.get_balance(user.id) == 250
        assert PointsTransaction.objects.filter(user=user).count() == 1


@pytest.mark.django_db(transaction=True)
class TestConcurrentDiscountRedemption:

    def test_duplicate_redeem_counts_one_use(self):
        code = DiscountCodeFactory(usage_limit=None)
        user = UserFactory()

        results = run_concurrently([
            lambda: DiscountService.redeem(code.id, 'order-1', user_id=user.id, amount_applied=Decimal('100'))
            for _ in range(WORKERS)
        ])

        assert all(r.success for r in results)
        assert sum(1 for r in results if not r.already_applied) == 1
        code.refresh_from_db()
        assert code.usage_count == 1
        assert DiscountRedemption.objects.filter(discount_code=code).count() == 1

    def test_usage_limit_holds_across_orders(self):
        code = DiscountCodeFactory(usage_limit=3)

        results = run_concurrently([
            lambda i=i: DiscountService.redeem(code.id, f'order-{i}', amount_applied=Decimal('100'))
            for i in range(WORKERS)
        ])

        assert sum(1 for r in results if r.success) == 3
        assert {r.reason for r in results if not r.success} == {DiscountReasons.USAGE_EXHAUSTED}
        code.refresh_from_db()
        assert code.usage_count == 3
        assert DiscountRedemption.objects.filter(discount_code=code).count() == 3


@pytest.mark.django_db(transaction=True)
class TestConcurrentPayments:

    def test_payments_never_exceed_the_total(self):
        movement = MovementFactory(total_amount=Decimal('10000'))

        results = run_concurrently([
            lambda: PaymentTracker.record_payment(movement.id, Decimal('3000'))
            for _ in range(WORKERS)
        ])

        assert sum(1 for r in results if r.success) == 3
        assert {r.reason for r in results if not r.success} == {PaymentReasons.AMOUNT_EXCEEDS_BALANCE}
        movement.refresh_from_db()
        assert movement.amount_paid == Decimal('9000')
        assert movement.status == Movement.STATUS_PARTIAL_PAID
        assert MovementPayment.objects.filter(movement=movement).aggregate(
            total=Sum('amount'))['total'] == Decimal('9000')
