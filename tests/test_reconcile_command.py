"""
reconcile_points management command.
"""
from decimal import Decimal
from io import StringIO

import pytest
from django.core.management import call_command

from apps.points.models import PointsAccount
from apps.points.services import PointsService
from tests.factories import UserFactory


@pytest.mark.django_db
class TestReconcilePointsCommand:

    def test_reports_clean_ledger(self):
        user = UserFactory()
        PointsService.award_points(user.id, 'order-1', Decimal('5000'))

        out = StringIO()
        call_command('reconcile_points', stdout=out)

        assert 'All balances match the ledger' in out.getvalue()

    def test_reports_then_fixes_drift(self):
        user = UserFactory()
        PointsService.award_points(user.id, 'order-1', Decimal('5000'))
        PointsAccount.objects.filter(user=user).update(points_balance=7)

        out = StringIO()
        call_command('reconcile_points', stdout=out)
        assert f'User {user.id}: cached=7 ledger=50' in out.getvalue()
        assert PointsService.get_balance(user.id) == 7

        out = StringIO()
        call_command('reconcile_points', '--fix', stdout=out)
        assert 'Rewrote 1 balance(s)' in out.getvalue()
        assert PointsService.get_balance(user.id) == 50
