"""
HTTP surface: envelopes, permissions and status codes.
"""
from decimal import Decimal
from unittest import mock

import pytest
from django.db import OperationalError

from apps.crm.models import Movement
from apps.discounts.models import DiscountCode
from apps.points.services import PointsService
from tests.factories import DiscountCodeFactory, MovementFactory, OrderFactory


@pytest.mark.django_db
class TestDiscountEndpoints:

    def test_validate_anonymous(self, api_client):
        DiscountCodeFactory(code='TEN', discount_value=Decimal('10'))

        response = api_client.post('/api/discounts/validate/', {'code': 'ten', 'cart_total': '1000.00'}, format='json')

        assert response.status_code == 200
        assert response.data['success'] is True
        assert response.data['data']['valid'] is True
        assert response.data['data']['discount_amount'] == Decimal('100')

    def test_validate_rejection_carries_reason(self, api_client):
        response = api_client.post('/api/discounts/validate/', {'code': 'MISSING', 'cart_total': '10'}, format='json')
        assert response.status_code == 400
        assert response.data['success'] is False
        assert response.data['reason'] == 'not_found'
        assert response.data['message'] == 'Invalid discount code'

    def test_validate_rejection_includes_details(self, api_client):
        DiscountCodeFactory(code='BIG', min_purchase_amount=Decimal('5000'))
        response = api_client.post('/api/discounts/validate/', {'code': 'BIG', 'cart_total': '10'}, format='json')
        assert response.status_code == 400
        assert response.data['reason'] == 'below_minimum'
        assert Decimal(response.data['details']['min_purchase_amount']) == Decimal('5000')

    def test_validate_bad_input(self, api_client):
        response = api_client.post('/api/discounts/validate/', {'code': 'X'}, format='json')
        assert response.status_code == 400
        assert response.data['success'] is False
        assert 'cart_total' in response.data['errors']

    def test_codes_require_operator(self, customer_client):
        assert customer_client.get('/api/discounts/codes/').status_code == 403

    def test_create_and_list_codes(self, operator_client):
        response = operator_client.post('/api/discounts/codes/', {
            'code': 'summer',
            'name': 'Summer',
            'discount_type': 'percentage',
            'discount_value': '15',
            'max_discount_amount': '500',
            'product_ids': ['sku-1'],
        }, format='json')
        assert response.status_code == 201, response.data
        assert response.data['data']['code'] == 'SUMMER'
        assert response.data['data']['product_ids'] == ['sku-1']

        listing = operator_client.get('/api/discounts/codes/')
        assert listing.data['data']['pagination']['total'] == 1

    def test_create_rejects_percentage_above_100(self, operator_client):
        response = operator_client.post('/api/discounts/codes/', {
            'code': 'TOOMUCH', 'name': 'Too much', 'discount_type': 'percentage', 'discount_value': '150',
        }, format='json')
        assert response.status_code == 400
        assert not DiscountCode.objects.exists()

    def test_delete_used_code_disables(self, operator_client):
        code = DiscountCodeFactory()
        OrderFactory(discount_code=code)

        response = operator_client.delete(f'/api/discounts/codes/{code.id}/')

        assert response.data['data']['result'] == 'disabled'
        code.refresh_from_db()
        assert not code.is_active


@pytest.mark.django_db
class TestPointsEndpoints:

    def test_balance_requires_login(self, api_client):
        assert api_client.get('/api/points/balance/').status_code == 401

    def test_balance_and_transactions(self, customer, customer_client):
        PointsService.award_points(customer.id, 'order-1', Decimal('30000'))

        balance = customer_client.get('/api/points/balance/')
        assert balance.data['data']['points_balance'] == 300

        history = customer_client.get('/api/points/transactions/')
        assert history.data['data']['transactions'][0]['points_change'] == 300
        assert history.data['data']['pagination']['total'] == 1

    def test_redeem_insufficient_balance(self, customer_client):
        response = customer_client.post('/api/points/redeem/', {'order_id': 'o-1', 'points': 10}, format='json')
        assert response.status_code == 400
        assert response.data['reason'] == 'insufficient_balance'

    def test_redeem(self, customer, customer_client):
        PointsService.award_points(customer.id, 'order-1', Decimal('30000'))
        response = customer_client.post('/api/points/redeem/', {'order_id': 'o-2', 'points': 100}, format='json')
        assert response.status_code == 200
        assert response.data['data']['points_balance'] == 200
        assert response.data['data']['discount_amount'] == '100'

    def test_internal_award_is_idempotent(self, customer, operator_client):
        payload = {'user_id': customer.id, 'order_id': 'o-9', 'total_amount': '1000.00'}
        first = operator_client.post('/api/points/internal/award/', payload, format='json')
        second = operator_client.post('/api/points/internal/award/', payload, format='json')

        assert first.data['data']['points_awarded'] == 10
        assert second.data['data']['points_awarded'] == 0
        assert second.data['data']['points_balance'] == 10

    def test_internal_award_forbidden_for_customers(self, customer, customer_client):
        payload = {'user_id': customer.id, 'order_id': 'o-9', 'total_amount': '1000.00'}
        assert customer_client.post('/api/points/internal/award/', payload, format='json').status_code == 403


@pytest.mark.django_db
class TestCrmEndpoints:

    def test_create_movement(self, operator_client):
        response = operator_client.post('/api/crm/movements/', {
            'movement_type': 'sale_credit',
            'counterparty_name': 'Cafe Norte',
            'items': [{'product_id': 'sku-1', 'quantity': 3, 'unit_price': '1000.00'}],
            'due_date': '2030-01-31',
        }, format='json')

        assert response.status_code == 201, response.data
        assert response.data['data']['movement_number'].startswith('MOV-')
        assert response.data['data']['status'] == 'pending'
        assert Movement.objects.get().total_amount == Decimal('3000')

    def test_record_payment_and_overpayment(self, operator_client):
        movement = MovementFactory(total_amount=Decimal('10000'))
        url = f'/api/crm/movements/{movement.id}/payments/'

        created = operator_client.post(url, {'amount': '5000', 'payment_method': 'transfer',
                                             'payment_reference': 'T-1'}, format='json')
        assert created.status_code == 201
        assert created.data['data']['status'] == 'partial_paid'

        replay = operator_client.post(url, {'amount': '5000', 'payment_method': 'transfer',
                                            'payment_reference': 'T-1'}, format='json')
        assert replay.status_code == 200
        assert replay.data['data']['already_recorded'] is True

        over = operator_client.post(url, {'amount': '6000', 'payment_method': 'cash'}, format='json')
        assert over.status_code == 400
        assert over.data['reason'] == 'amount_exceeds_balance'

    def test_status_endpoint_refuses_paid(self, operator_client):
        movement = MovementFactory()
        response = operator_client.post(f'/api/crm/movements/{movement.id}/status/', {'status': 'paid'}, format='json')
        assert response.status_code == 400
        assert response.data['reason'] == 'derived_status'

    def test_missing_movement(self, operator_client):
        assert operator_client.get('/api/crm/movements/999999/').status_code == 404

    def test_stats(self, operator_client):
        MovementFactory(total_amount=Decimal('1200'))
        response = operator_client.get('/api/crm/stats/')
        assert response.data['data']['debts']['total_pending'] == '1200.00'
        assert response.data['data']['movements']['sales'] == 1


@pytest.mark.django_db
class TestOrderAndHealthEndpoints:

    def test_mark_order_paid(self, operator_client):
        order = OrderFactory(total_amount=Decimal('1000'))
        response = operator_client.post(f'/api/order/{order.order_number}/paid/')
        assert response.status_code == 200
        assert response.data['data']['points_earned'] == 10

    def test_mark_unknown_order_paid(self, operator_client):
        assert operator_client.post('/api/order/NOPE/paid/').status_code == 404

    def test_health(self, api_client):
        response = api_client.get('/api/health/')
        assert response.status_code == 200
        body = response.json()
        assert body['status'] == 'healthy'
        assert body['ledger'] == {'status': 'healthy', 'tables': 6, 'missing': []}

    def test_health_reports_missing_ledger_tables(self, api_client):
        from django.db import connection

        tables = [name for name in connection.introspection.table_names() if name != 'points_transactions']
        with mock.patch.object(type(connection.introspection), 'table_names', return_value=tables):
            response = api_client.get('/api/health/')
        assert response.status_code == 503
        assert response.json()['ledger']['missing'] == ['points_transactions']

    def test_storage_failure_is_retryable_503(self, customer_client):
        with mock.patch.object(PointsService, 'get_or_create_account', side_effect=OperationalError('db down')):
            response = customer_client.get('/api/points/balance/')
        assert response.status_code == 503
        assert response.data['retryable'] is True
