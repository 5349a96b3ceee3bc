"""
Discount redemption bookkeeping and operator management.
"""
from decimal import Decimal

import pytest

from apps.discounts.models import DiscountCode, DiscountRedemption
from apps.discounts.services import DiscountService, Reasons
from tests.factories import DiscountCodeFactory, OrderFactory, UserFactory


@pytest.mark.django_db
class TestDiscountRedemption:

    def test_redeem_records_and_counts_one_use(self):
        code = DiscountCodeFactory(usage_limit=5)
        user = UserFactory()

        result = DiscountService.redeem(code.id, 'order-1', user_id=user.id, amount_applied=Decimal('250'))

        assert result.success and not result.already_applied
        code.refresh_from_db()
        assert code.usage_count == 1
        redemption = DiscountRedemption.objects.get(discount_code=code, order_id='order-1')
        assert redemption.amount_applied == Decimal('250')
        assert redemption.user == user

    def test_redeem_is_idempotent_per_order(self):
        code = DiscountCodeFactory()

        first = DiscountService.redeem(code.id, 'order-1', amount_applied=Decimal('100'))
        second = DiscountService.redeem(code.id, 'order-1', amount_applied=Decimal('100'))

        assert first.success
        assert second.success and second.already_applied
        assert second.redemption.pk == first.redemption.pk
        code.refresh_from_db()
        assert code.usage_count == 1
        assert DiscountRedemption.objects.filter(discount_code=code).count() == 1

    def test_same_order_may_use_different_codes(self):
        first_code = DiscountCodeFactory()
        second_code = DiscountCodeFactory()
        assert DiscountService.redeem(first_code.id, 'order-1').success
        assert not DiscountService.redeem(second_code.id, 'order-1').already_applied

    def test_redeem_exhausted_code_writes_nothing(self):
        code = DiscountCodeFactory(usage_limit=1)
        assert DiscountService.redeem(code.id, 'order-1').success

        result = DiscountService.redeem(code.id, 'order-2')

        assert not result.success
        assert result.reason == Reasons.USAGE_EXHAUSTED
        code.refresh_from_db()
        assert code.usage_count == 1
        assert not DiscountRedemption.objects.filter(order_id='order-2').exists()

    def test_redeem_unknown_code(self):
        assert DiscountService.redeem(999999, 'order-1').reason == Reasons.NOT_FOUND

    def test_redeem_rejects_negative_amount(self):
        code = DiscountCodeFactory()
        assert DiscountService.redeem(code.id, 'order-1', amount_applied=Decimal('-1')).reason == Reasons.INVALID_AMOUNT


@pytest.mark.django_db
class TestDiscountCodeManagement:

    def test_save_code_uppercases_and_sets_allow_lists(self):
        user = UserFactory()
        code = DiscountService.save_code({
            'code': ' spring ',
            'name': 'Spring sale',
            'discount_type': DiscountCode.TYPE_PERCENTAGE,
            'discount_value': Decimal('20'),
            'product_ids': ['sku-1', 'sku-2', 'sku-1'],
            'user_ids': [user.id],
        })

        assert code.code == 'SPRING'
        assert sorted(code.product_restrictions.values_list('product_id', flat=True)) == ['sku-1', 'sku-2']
        assert list(code.user_restrictions.values_list('user_id', flat=True)) == [user.id]

    def test_update_without_lists_keeps_them(self):
        code = DiscountService.save_code({
            'code': 'KEEP', 'name': 'Keep', 'discount_type': 'percentage',
            'discount_value': Decimal('5'), 'product_ids': ['sku-1'],
        })
        DiscountService.save_code({'name': 'Renamed'}, instance=code)
        assert code.product_restrictions.count() == 1

        DiscountService.save_code({'product_ids': []}, instance=code)
        assert code.product_restrictions.count() == 0

    def test_delete_unused_code(self):
        code = DiscountCodeFactory()
        assert DiscountService.delete_code(code) == 'deleted'
        assert not DiscountCode.objects.filter(pk=code.pk).exists()

    def test_delete_used_code_disables_it(self):
        code = DiscountCodeFactory()
        DiscountService.redeem(code.id, 'order-1')

        assert DiscountService.delete_code(code) == 'disabled'
        code.refresh_from_db()
        assert code.is_active is False

    def test_delete_code_attached_to_order_disables_it(self):
        code = DiscountCodeFactory()
        OrderFactory(discount_code=code)
        assert DiscountService.delete_code(code) == 'disabled'

    def test_list_codes_filters(self):
        DiscountCodeFactory(code='ALPHA')
        DiscountCodeFactory(code='BETA', is_active=False)

        assert [c.code for c in DiscountService.list_codes(is_active=True)] == ['ALPHA']
        assert [c.code for c in DiscountService.list_codes(search='bet')] == ['BETA']
