import io
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

from django.db import transaction
from django.http import HttpResponse
from openpyxl import Workbook

from accounts.models import Member
from charges.models import AppliedServiceCharge, ServiceChargeType

logger = logging.getLogger(__name__)


@dataclass
class ChargeSettlement:
    paid_charges: List[AppliedServiceCharge] = field(default_factory=list)
    amount_applied: Decimal = Decimal("0.00")
    unallocated: Decimal = Decimal("0.00")


@dataclass
class MemberChargeSummary:
    member_id: int
    full_name: str
    school_id: int
    school_name: str
    total_applied: Decimal
    total_paid: Decimal
    total_pending: Decimal
    fulfillment_percentage: Decimal

    def as_dict(self):
        return {
            "member_id": self.member_id,
            "full_name": self.full_name,
            "school_id": self.school_id,
            "school_name": self.school_name,
            "total_applied": str(self.total_applied),
            "total_paid": str(self.total_paid),
            "total_pending": str(self.total_pending),
            "fulfillment_percentage": str(self.fulfillment_percentage),
        }


# -----------------------------
# Applying charges
# -----------------------------
def apply_service_charge(member, service_charge_type, date_applied, amount_charged=None, notes=None):
    """
    Charge a member. The type name is snapshotted so later renames do not
    rewrite history; the amount defaults to the type's current amount.
    """
    if amount_charged is None:
        amount_charged = service_charge_type.amount

    charge = AppliedServiceCharge.objects.create(
        member=member,
        member_name=member.full_name,
        service_charge_type=service_charge_type,
        service_charge_type_name=service_charge_type.name,
        amount_charged=amount_charged,
        date_applied=date_applied,
        status="pending",
        notes=notes,
    )
    logger.info(
        "Applied %s charge of %s to member %s", service_charge_type.name, amount_charged, member.pk
    )
    return charge


# -----------------------------
# FIFO settlement
# -----------------------------
def settle_pending_charges(member_id, amount, note):
    """
    Pay a member's pending charges oldest first.

    A charge is only ever paid in full. The walk stops at the first charge
    the remaining amount cannot cover, and whatever is left over stays in
    ``ChargeSettlement.unallocated``. Must run inside a transaction.
    """
    settlement = ChargeSettlement()
    remaining = Decimal(str(amount))
    if remaining <= 0:
        return settlement

    pending = AppliedServiceCharge.objects.filter(
        member_id=member_id, status="pending"
    ).order_by("date_applied", "id")

    for charge in pending:
        if remaining <= 0:
            break
        if remaining < charge.amount_charged:
            # Partial payment of a single charge is never applied.
            break

        charge.mark_paid(note)

        remaining -= charge.amount_charged
        settlement.amount_applied += charge.amount_charged
        settlement.paid_charges.append(charge)

    # TODO: the leftover is dropped, with no credit and no carry-forward.
    # Decide with the treasurer whether it should become a credit note.
    settlement.unallocated = remaining
    if remaining > 0:
        logger.warning(
            "Service charge payment for member %s left %s unallocated", member_id, remaining
        )
    return settlement


def record_charge_payment(member_id, amount, payment_date, deposit_mode):
    """
    Stand-alone payment against pending service charges.
    """
    if not AppliedServiceCharge.objects.filter(member_id=member_id, status="pending").exists():
        raise ValueError("No pending charges found for this member.")

    note = f"Paid on {payment_date.isoformat()} via {deposit_mode}"
    with transaction.atomic():
        settlement = settle_pending_charges(member_id, amount, note)

    logger.info(
        "Recorded service charge payment of %s for member %s: %s charge(s) paid",
        amount, member_id, len(settlement.paid_charges),
    )
    return settlement


# -----------------------------
# Summaries
# -----------------------------
def member_charge_summaries(school_id=None):
    members = Member.objects.filter(status="active").select_related("school")
    if school_id:
        members = members.filter(school_id=school_id)

    charges_by_member = {}
    for charge in AppliedServiceCharge.objects.filter(member__in=members):
        charges_by_member.setdefault(charge.member_id, []).append(charge)

    summaries = []
    for member in members:
        member_charges = charges_by_member.get(member.pk, [])
        total_applied = sum((c.amount_charged for c in member_charges), Decimal("0.00"))
        total_paid = sum(
            (c.amount_charged for c in member_charges if c.status == "paid"), Decimal("0.00")
        )
        total_pending = total_applied - total_paid
        if total_applied > 0:
            fulfillment = (total_paid / total_applied * 100).quantize(Decimal("0.01"))
        else:
            fulfillment = Decimal("100.00")

        summaries.append(MemberChargeSummary(
            member_id=member.pk,
            full_name=member.full_name,
            school_id=member.school_id,
            school_name=member.school.name if member.school else "N/A",
            total_applied=total_applied,
            total_paid=total_paid,
            total_pending=total_pending,
            fulfillment_percentage=fulfillment,
        ))
    return summaries


def can_delete_service_charge_type(service_charge_type: ServiceChargeType):
    return not service_charge_type.applied_charges.exists()


# -----------------------------
# XLSX Export
# -----------------------------
def export_charge_summaries_xlsx(summaries):
    output = io.BytesIO()
    wb = Workbook()
    ws = wb.active
    ws.title = "Service Charges"

    ws.append([
        "Member", "School", "Total Applied", "Total Paid", "Total Pending", "Fulfillment %"
    ])
    for s in summaries:
        ws.append([
            s.full_name,
            s.school_name,
            float(s.total_applied),
            float(s.total_paid),
            float(s.total_pending),
            float(s.fulfillment_percentage),
        ])

    wb.save(output)
    output.seek(0)

    response = HttpResponse(
        output,
        content_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    response['Content-Disposition'] = 'attachment; filename="service_charges.xlsx"'
    return response
