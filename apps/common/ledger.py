"""
Transactional helpers shared by the discount, points and movement engines.

Every mutating ledger operation follows the same discipline:

* run inside a single ``transaction.atomic()`` block,
* lock the row holding the cached aggregate (``select_for_update``) before
  reading it, so the read and the write happen in the same transaction,
* insert immutable records through :func:`insert_once`, which turns a
  uniqueness violation on the idempotency key into an "already done" signal.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from django.db import IntegrityError, transaction

from .exceptions import LedgerInvariantError

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger('ledger.audit')
alert_logger = logging.getLogger('ledger.alerts')


@dataclass(frozen=True)
class Rejection:
    """Expected, user-facing refusal of a ledger operation."""
    reason: str
    message: str = ''
    details: dict = field(default_factory=dict)


def insert_once(model, lookup: dict, defaults: Optional[dict] = None):
    """
    Insert a row keyed by ``lookup`` unless one already exists.

    Returns ``(instance, created)``. The insert runs in a savepoint so a
    concurrent duplicate that trips the unique constraint leaves the outer
    transaction usable; the existing row is returned with ``created=False``.
    """
    values = dict(lookup)
    values.update(defaults or {})
    try:
        with transaction.atomic():
            return model.objects.create(**values), True
    except IntegrityError:
        existing = model.objects.filter(**lookup).first()
        if existing is None:
            # Constraint other than the idempotency key
            raise
        logger.info(f"Duplicate {model.__name__} ignored (idempotency): {lookup}")
        return existing, False


def lock(queryset, **lookup) -> Any:
    """Fetch a single row with a write lock held until the transaction ends."""
    return queryset.select_for_update().get(**lookup)


def audit(event: str, **fields):
    """Write one line to the ledger audit trail."""
    payload = ' '.join(f'{key}={value}' for key, value in fields.items())
    audit_logger.info(f'{event} {payload}')


def invariant_violation(message: str, **context):
    """Log at CRITICAL and raise; the surrounding transaction rolls back."""
    alert_logger.critical(f'Ledger invariant violated: {message} {context}')
    raise LedgerInvariantError(message, context)
