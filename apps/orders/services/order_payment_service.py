"""
Order payment processing service.
"""
import logging
from typing import Tuple

from django.db import transaction
from django.utils import timezone

from apps.common.ledger import audit, lock
from apps.discounts.services import DiscountService
from apps.points.services import PointsService
from ..models import Order

logger = logging.getLogger(__name__)
alert_logger = logging.getLogger('ledger.alerts')


class OrderPaymentService:
    """Service for handling the order-paid transition"""

    @staticmethod
    @transaction.atomic
    def process_payment_success(order_number: str) -> Tuple[bool, str]:
        """
        Mark an order paid, consume its discount code and award points.

        Safe to call again for the same order (duplicate payment webhooks):
        the discount and points calls are idempotent on the order id.

        The payment already happened, so a code that can no longer be
        redeemed does not fail the transition. The order keeps its
        discount_amount and is flagged with the rejection reason instead.
        """
        try:
            order = lock(Order.objects, order_number=order_number)
        except Order.DoesNotExist:
            return False, "Order not found"

        already_paid = order.status == Order.STATUS_PAID
        if not already_paid and order.status != Order.STATUS_PENDING:
            return False, "Order is not in pending payment status"

        if not already_paid:
            order.status = Order.STATUS_PAID
            order.paid_at = timezone.now()

        order_id = str(order.pk)

        if order.discount_code_id:
            redemption = DiscountService.redeem(
                discount_code_id=order.discount_code_id,
                order_id=order_id,
                user_id=order.user_id,
                amount_applied=order.discount_amount,
            )
            if redemption.success:
                order.discount_rejection = ''
            else:
                order.discount_rejection = redemption.reason
                alert_logger.warning(
                    f"Discount code {order.discount_code_id} not redeemed for paid order "
                    f"{order_number}: {redemption.reason} (discount {order.discount_amount})"
                )

        if order.user_id and not order.is_business:
            awarded = PointsService.award_points(order.user_id, order_id, order.total_amount)
            if awarded:
                order.points_earned = awarded

        order.save(update_fields=['status', 'paid_at', 'points_earned', 'discount_rejection'])

        if already_paid:
            logger.info(f"Order {order_number} already processed")
            return True, "Order already processed"

        audit('order.paid', order=order_number, total=order.total_amount)
        if order.discount_rejection:
            return True, f"Payment processed; discount not redeemed: {order.discount_rejection}"
        return True, "Payment processed successfully"
