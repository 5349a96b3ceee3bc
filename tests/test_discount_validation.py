"""
Discount code validation: check order, reasons and amounts.
"""
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone
from hypothesis import given, settings, strategies as st
from hypothesis.extra.django import TestCase

from apps.discounts.models import DiscountCodeProduct, DiscountCodeUser
from apps.discounts.services import Cart, CartItem, DiscountService, Reasons, Requester
from tests.factories import (
    DiscountCodeFactory, FixedAmountCodeFactory, PaidOrderFactory, OrderFactory, UserFactory
)


def cart(total, *items):
    return Cart(
        total=Decimal(total),
        items=[CartItem(product_id=product_id, subtotal=Decimal(subtotal)) for product_id, subtotal in items],
    )


@pytest.mark.django_db
class TestDiscountValidation:

    def test_unknown_and_empty_codes_are_not_found(self):
        assert DiscountService.validate('NOPE', cart=cart('1000')).reason == Reasons.NOT_FOUND
        assert DiscountService.validate('   ', cart=cart('1000')).reason == Reasons.NOT_FOUND
        assert DiscountService.validate(None, cart=cart('1000')).reason == Reasons.NOT_FOUND

    def test_code_is_matched_trimmed_and_case_insensitively(self):
        DiscountCodeFactory(code='WELCOME10')
        result = DiscountService.validate('  welcome10 ', cart=cart('1000'))
        assert result.valid
        assert result.discount_amount == Decimal('100')

    def test_inactive_is_reported_before_expiry(self):
        DiscountCodeFactory(code='OLD', is_active=False, expires_at=timezone.now() - timedelta(days=1))
        assert DiscountService.validate('OLD', cart=cart('1000')).reason == Reasons.INACTIVE

    def test_schedule_window(self):
        now = timezone.now()
        DiscountCodeFactory(code='SOON', starts_at=now + timedelta(hours=1))
        DiscountCodeFactory(code='GONE', expires_at=now - timedelta(seconds=1))
        assert DiscountService.validate('SOON', cart=cart('1000'), now=now).reason == Reasons.NOT_YET_ACTIVE
        assert DiscountService.validate('GONE', cart=cart('1000'), now=now).reason == Reasons.EXPIRED

    def test_usage_exhausted(self):
        DiscountCodeFactory(code='ONCE', usage_limit=1, usage_count=1)
        assert DiscountService.validate('ONCE', cart=cart('1000')).reason == Reasons.USAGE_EXHAUSTED

    def test_below_minimum_purchase(self):
        DiscountCodeFactory(code='BIG', min_purchase_amount=Decimal('5000'))
        result = DiscountService.validate('BIG', cart=cart('4999.99'))
        assert result.reason == Reasons.BELOW_MINIMUM
        assert Decimal(result.rejection.details['min_purchase_amount']) == Decimal('5000')
        assert DiscountService.validate('BIG', cart=cart('5000')).valid

    def test_user_allow_list(self):
        listed = UserFactory()
        other = UserFactory()
        code = DiscountCodeFactory(code='VIP')
        DiscountCodeUser.objects.create(discount_code=code, user=listed)

        assert DiscountService.validate('VIP', Requester(), cart('1000')).reason == Reasons.REQUIRES_LOGIN
        assert DiscountService.validate('VIP', Requester(user_id=other.id), cart('1000')).reason == Reasons.NOT_ALLOWED
        assert DiscountService.validate('VIP', Requester(user_id=listed.id), cart('1000')).valid

    def test_first_purchase_for_authenticated_user(self):
        DiscountCodeFactory(code='FIRST', first_purchase_only=True)
        user = UserFactory()
        requester = Requester(user_id=user.id, email=user.email)

        OrderFactory(user=user)  # Pending orders do not count
        assert DiscountService.validate('FIRST', requester, cart('1000')).valid

        PaidOrderFactory(user=user)
        assert DiscountService.validate('FIRST', requester, cart('1000')).reason == Reasons.NOT_FIRST_PURCHASE

    def test_first_purchase_for_guest_matches_email(self):
        DiscountCodeFactory(code='FIRST', first_purchase_only=True)
        PaidOrderFactory(user=None, email='Guest@Example.com')

        result = DiscountService.validate('FIRST', Requester(email='guest@example.com'), cart('1000'))
        assert result.reason == Reasons.NOT_FIRST_PURCHASE
        assert DiscountService.validate('FIRST', Requester(email='new@example.com'), cart('1000')).valid

    def test_first_purchase_without_identity_fails(self):
        DiscountCodeFactory(code='FIRST', first_purchase_only=True)
        assert DiscountService.validate('FIRST', Requester(), cart('1000')).reason == Reasons.NOT_FIRST_PURCHASE

    def test_per_user_limit(self):
        code = DiscountCodeFactory(code='TWICE', per_user_limit=1)
        user = UserFactory()

        assert DiscountService.validate('TWICE', Requester(), cart('1000')).reason == Reasons.REQUIRES_LOGIN
        assert DiscountService.validate('TWICE', Requester(user_id=user.id), cart('1000')).valid

        DiscountService.redeem(code.id, 'order-1', user_id=user.id, amount_applied=Decimal('100'))
        result = DiscountService.validate('TWICE', Requester(user_id=user.id), cart('1000'))
        assert result.reason == Reasons.LIMIT_REACHED

    def test_percentage_is_capped(self):
        DiscountCodeFactory(code='TEN', discount_value=Decimal('10'), max_discount_amount=Decimal('5000'))
        result = DiscountService.validate('TEN', cart=cart('100000'))
        assert result.valid
        assert result.discount_amount == Decimal('5000')

    def test_fixed_amount_never_exceeds_cart(self):
        FixedAmountCodeFactory(code='FLAT', discount_value=Decimal('3000'))
        result = DiscountService.validate('FLAT', cart=cart('2000'))
        assert result.valid
        assert result.discount_amount == Decimal('2000')

    def test_percentage_is_floored(self):
        DiscountCodeFactory(code='FIFTEEN', discount_value=Decimal('15'))
        assert DiscountService.validate('FIFTEEN', cart=cart('999')).discount_amount == Decimal('149')

    def test_product_allow_list_discounts_only_listed_items(self):
        code = DiscountCodeFactory(code='HALF', discount_value=Decimal('50'))
        DiscountCodeProduct.objects.create(discount_code=code, product_id='sku-1')

        result = DiscountService.validate('HALF', cart=cart('3000', ('sku-1', '1000'), ('sku-2', '2000')))
        assert result.valid
        assert result.eligible_subtotal == Decimal('1000')
        assert result.discount_amount == Decimal('500')

        result = DiscountService.validate('HALF', cart=cart('2000', ('sku-2', '2000')))
        assert result.reason == Reasons.NO_ELIGIBLE_ITEMS

    def test_zero_amount_is_invalid(self):
        DiscountCodeFactory(code='TINY', discount_value=Decimal('1'))
        assert DiscountService.validate('TINY', cart=cart('50')).reason == Reasons.INVALID_AMOUNT

    def test_validate_does_not_consume_uses(self):
        code = DiscountCodeFactory(code='READONLY', usage_limit=1)
        for _ in range(3):
            assert DiscountService.validate('READONLY', cart=cart('1000')).valid
        code.refresh_from_db()
        assert code.usage_count == 0


@pytest.mark.django_db(transaction=True)
class TestDiscountAmountProperties(TestCase):
    """Property tests for discount amounts"""

    @given(
        cart_total=st.decimals(min_value=Decimal('0.01'), max_value=Decimal('1000000'), places=2),
        value=st.decimals(min_value=Decimal('0.01'), max_value=Decimal('100'), places=2),
        fixed=st.booleans(),
    )
    @settings(max_examples=50, deadline=None)
    def test_discount_never_exceeds_eligible_subtotal(self, cart_total, value, fixed):
        if fixed:
            FixedAmountCodeFactory(code='PROP', discount_value=value * 100)
        else:
            DiscountCodeFactory(code='PROP', discount_value=value)

        result = DiscountService.validate('PROP', cart=cart(cart_total))
        if result.valid:
            assert Decimal('0') < result.discount_amount <= cart_total
        else:
            assert result.reason == Reasons.INVALID_AMOUNT
