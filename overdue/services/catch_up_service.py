"""
Recording a catch-up payment against a member's overdue obligations.

One payment may carry three legs: a savings deposit, contributions to one or
more share types, and money for pending service charges. Each leg is its own
function so it can be exercised alone; ``record_overdue_payment`` runs them
together inside a single transaction.

Two concurrent payments for the same member can both read the same pending
charges before either marks them paid. Nothing here locks against that.
"""
import datetime
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional

from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone

from charges.services.charge_service import ChargeSettlement, settle_pending_charges
from savings.models import Saving, month_label
from shares.models import Share, ShareType

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


class CatchUpPaymentError(Exception):
    """The payment could not be recorded; nothing was written."""


@dataclass
class CatchUpPayment:
    member_id: int
    member_name: str
    savings_amount: Decimal = ZERO
    share_amounts: Dict[int, Decimal] = field(default_factory=dict)
    service_charge_amount: Decimal = ZERO
    payment_date: Optional[datetime.date] = None
    deposit_mode: str = "Cash"
    source_name: Optional[str] = None
    transaction_reference: Optional[str] = None
    evidence_url: Optional[str] = None

    def __post_init__(self):
        if self.payment_date is None:
            self.payment_date = timezone.localdate()

    def channel_fields(self):
        return {
            "deposit_mode": self.deposit_mode,
            "source_name": self.source_name,
            "transaction_reference": self.transaction_reference,
            "evidence_url": self.evidence_url,
        }


@dataclass
class CatchUpResult:
    saving: Optional[Saving] = None
    shares: List[Share] = field(default_factory=list)
    settlement: ChargeSettlement = field(default_factory=ChargeSettlement)

    def as_dict(self):
        return {
            "saving_id": self.saving.pk if self.saving else None,
            "share_ids": [s.pk for s in self.shares],
            "paid_charge_ids": [c.pk for c in self.settlement.paid_charges],
            "service_charge_amount_applied": self.settlement.amount_applied,
            "service_charge_amount_unallocated": self.settlement.unallocated,
        }


# ----------------------------------------------
# LEGS
# ----------------------------------------------

def post_savings_leg(payment: CatchUpPayment, note=None) -> Optional[Saving]:
    """
    A pending deposit for the savings part. It still has to go through
    approval before the member's balance moves.
    """
    if not payment.savings_amount or payment.savings_amount <= 0:
        return None

    saving = Saving.objects.create(
        member_id=payment.member_id,
        member_name=payment.member_name,
        amount=payment.savings_amount,
        date=payment.payment_date,
        month=month_label(payment.payment_date),
        transaction_type="deposit",
        status="pending",
        notes=note or settings.SACCO_CATCH_UP_NOTE,
        **payment.channel_fields(),
    )
    logger.info(
        "Catch-up savings deposit #%s of %s for member %s",
        saving.pk, payment.savings_amount, payment.member_id,
    )
    return saving


def post_share_legs(payment: CatchUpPayment, note=None) -> List[Share]:
    """
    One pending allocation per share type, rounded down to whole shares.

    ``contribution_amount`` keeps what was handed over while
    ``total_value_for_allocation`` holds only the whole shares, so the
    remainder still shows as overdue on the next report.
    """
    amounts = {
        int(share_type_id): amount
        for share_type_id, amount in (payment.share_amounts or {}).items()
        if amount and amount > 0
    }
    if not amounts:
        return []

    share_types = ShareType.objects.in_bulk(list(amounts.keys()))
    created = []
    for share_type_id, amount in amounts.items():
        share_type = share_types.get(share_type_id)
        if share_type is None or share_type.value_per_share <= 0:
            logger.warning(
                "Skipping catch-up contribution of %s for member %s: share type %s cannot be allocated",
                amount, payment.member_id, share_type_id,
            )
            continue

        count = int(amount // share_type.value_per_share)
        if count <= 0:
            logger.info(
                "Catch-up contribution of %s to %s buys no whole share for member %s",
                amount, share_type.name, payment.member_id,
            )
            continue

        share = Share.objects.create(
            member_id=payment.member_id,
            member_name=payment.member_name,
            share_type=share_type,
            share_type_name=share_type.name,
            count=count,
            value_per_share=share_type.value_per_share,
            allocation_date=payment.payment_date,
            status="pending",
            contribution_amount=amount,
            total_value_for_allocation=count * share_type.value_per_share,
            notes=note or settings.SACCO_CATCH_UP_NOTE,
            **payment.channel_fields(),
        )
        logger.info(
            "Catch-up share allocation #%s: %s x %s for member %s",
            share.pk, count, share_type.name, payment.member_id,
        )
        created.append(share)
    return created


def post_service_charge_leg(payment: CatchUpPayment) -> ChargeSettlement:
    if not payment.service_charge_amount or payment.service_charge_amount <= 0:
        return ChargeSettlement()
    return settle_pending_charges(
        payment.member_id,
        payment.service_charge_amount,
        note=f"Paid on {payment.payment_date.isoformat()}",
    )


# ----------------------------------------------
# UNIT OF WORK
# ----------------------------------------------

def record_overdue_payment(payment: CatchUpPayment) -> CatchUpResult:
    """
    Post every leg of the payment or none of them.
    Raises ``CatchUpPaymentError`` if anything fails to write.
    """
    note = settings.SACCO_CATCH_UP_NOTE
    try:
        with transaction.atomic():
            result = CatchUpResult(
                saving=post_savings_leg(payment, note),
                shares=post_share_legs(payment, note),
                settlement=post_service_charge_leg(payment),
            )
    except DatabaseError as exc:
        logger.exception("Failed to record overdue payment for member %s", payment.member_id)
        raise CatchUpPaymentError("Failed to record overdue payment.") from exc

    logger.info(
        "Recorded overdue payment for member %s: saving=%s shares=%s charges_paid=%s",
        payment.member_id,
        result.saving.pk if result.saving else None,
        len(result.shares),
        len(result.settlement.paid_charges),
    )
    return result
