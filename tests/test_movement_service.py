"""
Movement lifecycle, debt listing and dashboard stats.
"""
from datetime import timedelta
from decimal import Decimal

import pytest
from django.test import override_settings
from django.utils import timezone

from apps.crm.models import Movement
from apps.crm.services import MovementService, PaymentTracker, Reasons
from tests.factories import ConsignmentFactory, MovementFactory, UserFactory


@pytest.mark.django_db
class TestMovementLifecycle:

    def test_create_numbers_movement_and_computes_total(self):
        operator = UserFactory(is_staff=True)
        movement = MovementService.create_movement({
            'movement_type': Movement.TYPE_CONSIGNMENT,
            'counterparty_name': 'Corner Shop',
            'items': [
                {'product_id': 'sku-1', 'quantity': 2, 'unit_price': '1500'},
                {'product_id': 'sku-2', 'quantity': 1, 'unit_price': '2000'},
            ],
        }, created_by=operator)

        assert movement.movement_number == f'MOV-{movement.pk:06d}'
        assert movement.status == Movement.STATUS_PENDING
        assert movement.total_amount == Decimal('5000')
        assert movement.created_by == operator

    @override_settings(MOVEMENT_CONFIG={'NUMBER_PREFIX': 'CNS'})
    def test_number_prefix_is_configurable(self):
        movement = MovementService.create_movement({
            'movement_type': Movement.TYPE_SAMPLE, 'total_amount': Decimal('0')
        })
        assert movement.movement_number.startswith('CNS-')

    @pytest.mark.parametrize('status', [Movement.STATUS_PAID, Movement.STATUS_PARTIAL_PAID, Movement.STATUS_OVERDUE])
    def test_derived_statuses_cannot_be_set(self, status):
        movement = MovementFactory()
        result = MovementService.update_status(movement.id, status)
        assert result.reason == Reasons.DERIVED_STATUS
        movement.refresh_from_db()
        assert movement.status == Movement.STATUS_DELIVERED

    def test_update_status_with_delivery_date(self):
        movement = MovementFactory(status=Movement.STATUS_PENDING)
        delivered_on = timezone.localdate()

        result = MovementService.update_status(movement.id, Movement.STATUS_DELIVERED, delivered_on)

        assert result.success
        movement.refresh_from_db()
        assert movement.status == Movement.STATUS_DELIVERED
        assert movement.delivery_date == delivered_on

    def test_unknown_status(self):
        movement = MovementFactory()
        assert MovementService.update_status(movement.id, 'lost').reason == Reasons.INVALID_STATUS

    def test_convert_consignment_to_sale(self):
        consignment = ConsignmentFactory()
        result = MovementService.convert_consignment_to_sale(consignment.id)
        assert result.success
        assert result.movement.status == Movement.STATUS_SOLD

        sale = MovementFactory()
        assert MovementService.convert_consignment_to_sale(sale.id).reason == Reasons.INVALID_TRANSITION

    def test_return_consignment_replaces_items(self):
        consignment = ConsignmentFactory()
        returned = [{'product_id': 'p1', 'quantity': 1, 'unit_price': '10000'}]

        result = MovementService.return_consignment(consignment.id, returned)

        assert result.success
        consignment.refresh_from_db()
        assert consignment.status == Movement.STATUS_RETURNED
        assert consignment.items == returned

    def test_return_with_payments_is_rejected(self):
        consignment = ConsignmentFactory(status=Movement.STATUS_DELIVERED)
        PaymentTracker.record_payment(consignment.id, Decimal('100'), 'cash')
        assert MovementService.return_consignment(consignment.id).reason == Reasons.HAS_PAYMENTS


@pytest.mark.django_db
class TestDebts:

    def setup_method(self):
        self.today = timezone.localdate()

    def test_list_movements_overdue_only(self):
        late = MovementFactory(due_date=self.today - timedelta(days=2))
        MovementFactory(due_date=self.today + timedelta(days=2))
        settled = MovementFactory(total_amount=Decimal('100'), due_date=self.today - timedelta(days=2))
        PaymentTracker.record_payment(settled.id, Decimal('100'), 'cash')

        assert [m.id for m in MovementService.list_movements(overdue_only=True)] == [late.id]

    def test_debts_cover_open_credit_and_consignment(self):
        credit = MovementFactory(total_amount=Decimal('10000'))
        PaymentTracker.record_payment(credit.id, Decimal('4000'), 'cash')
        consignment = ConsignmentFactory(status=Movement.STATUS_DELIVERED)
        ConsignmentFactory(status=Movement.STATUS_PENDING)
        MovementFactory(movement_type=Movement.TYPE_SALE_INVOICE)
        MovementFactory(movement_type=Movement.TYPE_SAMPLE, total_amount=Decimal('0'))

        debts = {m.id: m for m in MovementService.get_debts()}

        assert set(debts) == {credit.id, consignment.id}
        assert debts[credit.id].total_paid == Decimal('4000')
        assert debts[credit.id].remaining == Decimal('6000')

    def test_debt_stats(self):
        late = MovementFactory(total_amount=Decimal('8000'), due_date=self.today - timedelta(days=1))
        PaymentTracker.record_payment(late.id, Decimal('3000'), 'cash')
        MovementFactory(total_amount=Decimal('2000'), due_date=self.today + timedelta(days=10))
        ConsignmentFactory(total_amount=Decimal('1000'), status=Movement.STATUS_RETURNED)
        MovementFactory(movement_type=Movement.TYPE_SAMPLE, total_amount=Decimal('0'))

        stats = MovementService.get_debt_stats()

        assert stats['debts']['total_pending'] == Decimal('7000')
        assert stats['debts']['overdue_amount'] == Decimal('5000')
        assert stats['debts']['overdue_count'] == 1
        assert stats['movements'] == {'samples': 1, 'consignments': 1, 'sales': 2}
