"""
Discount code validation, redemption and operator management.
"""
import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from apps.common.ledger import audit, insert_once, lock
from apps.orders.models import Order
from ..models import DiscountCode, DiscountCodeProduct, DiscountCodeUser, DiscountRedemption
from .discount_calculator import DiscountCalculator
from .results import Cart, DiscountValidation, Reasons, RedemptionResult, Requester, reject

logger = logging.getLogger(__name__)


class DiscountService:
    """Service for discount code operations"""

    @staticmethod
    def validate(code, requester=None, cart=None, now=None):
        """
        Check a code against a cart and the requesting identity.

        Read-only: safe to call on every cart change. Checks run in a fixed
        order and stop at the first failure so the caller gets one precise
        reason.
        """
        requester = requester or Requester()
        cart = cart or Cart(total=Decimal('0'))
        now = now or timezone.now()

        normalized = DiscountCode.normalize(code)
        if not normalized:
            return DiscountValidation.failed(Reasons.NOT_FOUND)

        discount_code = DiscountCode.objects.filter(code=normalized).first()
        if discount_code is None:
            return DiscountValidation.failed(Reasons.NOT_FOUND)

        if not discount_code.is_active:
            return DiscountValidation.failed(Reasons.INACTIVE, discount_code)

        if discount_code.starts_at and now < discount_code.starts_at:
            return DiscountValidation.failed(Reasons.NOT_YET_ACTIVE, discount_code)
        if discount_code.expires_at and now > discount_code.expires_at:
            return DiscountValidation.failed(Reasons.EXPIRED, discount_code)

        if not discount_code.has_usage_left:
            return DiscountValidation.failed(Reasons.USAGE_EXHAUSTED, discount_code)

        cart_total = Decimal(cart.total)
        if discount_code.min_purchase_amount is not None and cart_total < discount_code.min_purchase_amount:
            return DiscountValidation.failed(
                Reasons.BELOW_MINIMUM, discount_code,
                min_purchase_amount=str(discount_code.min_purchase_amount)
            )

        allowed_users = set(discount_code.user_restrictions.values_list('user_id', flat=True))
        if allowed_users:
            if not requester.is_authenticated:
                return DiscountValidation.failed(Reasons.REQUIRES_LOGIN, discount_code)
            if int(requester.user_id) not in allowed_users:
                return DiscountValidation.failed(Reasons.NOT_ALLOWED, discount_code)

        if discount_code.first_purchase_only:
            if not (requester.is_authenticated or requester.email):
                # Nothing to match prior orders against
                return DiscountValidation.failed(Reasons.NOT_FIRST_PURCHASE, discount_code)
            prior_orders = Order.objects.completed().for_requester(requester.user_id, requester.email)
            if prior_orders.exists():
                return DiscountValidation.failed(Reasons.NOT_FIRST_PURCHASE, discount_code)

        if discount_code.per_user_limit:
            if not requester.is_authenticated:
                return DiscountValidation.failed(Reasons.REQUIRES_LOGIN, discount_code)
            used = DiscountRedemption.objects.filter(
                discount_code=discount_code, user_id=requester.user_id
            ).count()
            if used >= discount_code.per_user_limit:
                return DiscountValidation.failed(Reasons.LIMIT_REACHED, discount_code)

        allowed_products = list(discount_code.product_restrictions.values_list('product_id', flat=True))
        eligible_subtotal = DiscountCalculator.eligible_subtotal(cart, allowed_products)
        if allowed_products and eligible_subtotal <= 0:
            return DiscountValidation.failed(Reasons.NO_ELIGIBLE_ITEMS, discount_code)

        discount_amount = DiscountCalculator.calculate(discount_code, eligible_subtotal)
        if discount_amount <= 0:
            return DiscountValidation.failed(Reasons.INVALID_AMOUNT, discount_code)

        return DiscountValidation(
            valid=True,
            discount_amount=discount_amount,
            eligible_subtotal=eligible_subtotal,
            discount_code=discount_code,
        )

    @staticmethod
    @transaction.atomic
    def redeem(discount_code_id, order_id, user_id=None, amount_applied=Decimal('0')):
        """
        Record that a code was applied to a confirmed order and consume one use.

        Idempotent on (discount_code_id, order_id): a repeat call returns
        success with `already_applied` and writes nothing.
        """
        amount_applied = Decimal(amount_applied)
        if amount_applied < 0:
            return RedemptionResult(success=False, rejection=reject(Reasons.INVALID_AMOUNT))

        try:
            discount_code = lock(DiscountCode.objects, pk=discount_code_id)
        except DiscountCode.DoesNotExist:
            return RedemptionResult(success=False, rejection=reject(Reasons.NOT_FOUND))

        order_id = str(order_id)
        existing = DiscountRedemption.objects.filter(discount_code=discount_code, order_id=order_id).first()
        if existing:
            logger.info(f"Discount {discount_code.code} already applied to order {order_id}")
            return RedemptionResult(success=True, already_applied=True, redemption=existing)

        if not discount_code.has_usage_left:
            return RedemptionResult(success=False, rejection=reject(Reasons.USAGE_EXHAUSTED))

        redemption, created = insert_once(
            DiscountRedemption,
            {'discount_code': discount_code, 'order_id': order_id},
            {'user_id': user_id, 'amount_applied': amount_applied},
        )
        if not created:
            return RedemptionResult(success=True, already_applied=True, redemption=redemption)

        DiscountCode.objects.filter(pk=discount_code.pk).update(usage_count=F('usage_count') + 1)

        audit('discount.redeemed', code=discount_code.code, order=order_id,
              user=user_id, amount=amount_applied)
        return RedemptionResult(success=True, redemption=redemption)

    @staticmethod
    def list_codes(is_active=None, search=None):
        queryset = DiscountCode.objects.all()
        if is_active is not None:
            queryset = queryset.filter(is_active=is_active)
        if search:
            queryset = queryset.filter(code__icontains=search.strip())
        return queryset

    @staticmethod
    def get_code(discount_code_id):
        return DiscountCode.objects.filter(pk=discount_code_id).first()

    @staticmethod
    @transaction.atomic
    def save_code(data, instance=None):
        """
        Create or update a code. `product_ids` / `user_ids` in `data` replace
        the allow-lists; leaving them out keeps the current lists.
        """
        data = dict(data)
        product_ids = data.pop('product_ids', None)
        user_ids = data.pop('user_ids', None)

        discount_code = instance or DiscountCode()
        for attr, value in data.items():
            setattr(discount_code, attr, value)
        discount_code.save()

        if product_ids is not None:
            discount_code.product_restrictions.all().delete()
            DiscountCodeProduct.objects.bulk_create([
                DiscountCodeProduct(discount_code=discount_code, product_id=str(product_id))
                for product_id in dict.fromkeys(product_ids)
            ])
        if user_ids is not None:
            discount_code.user_restrictions.all().delete()
            DiscountCodeUser.objects.bulk_create([
                DiscountCodeUser(discount_code=discount_code, user_id=user_id)
                for user_id in dict.fromkeys(user_ids)
            ])

        audit('discount.saved', code=discount_code.code, created=instance is None)
        return discount_code

    @staticmethod
    @transaction.atomic
    def delete_code(discount_code):
        """
        Delete a code with no history; soft-disable one that has been used.
        Returns 'deleted' or 'disabled'.
        """
        if discount_code.redemptions.exists() or discount_code.orders.exists():
            discount_code.is_active = False
            discount_code.save(update_fields=['is_active', 'updated_at'])
            audit('discount.disabled', code=discount_code.code)
            return 'disabled'

        code = discount_code.code
        discount_code.delete()
        audit('discount.deleted', code=code)
        return 'deleted'

    @staticmethod
    def get_redemptions(discount_code):
        return discount_code.redemptions.select_related('user').all()
