"""
Overdue contributions per member.

A member owes, for every month since joining (the current month included),
their expected monthly saving plus the monthly amount committed to each share
type. Whatever approved savings and approved share allocations do not cover
is overdue, together with every service charge still pending.

Everything here is read-only. ``compute_member_overdue`` works on snapshots
it is handed and runs no queries; ``get_overdue_report`` loads those
snapshots in bulk and keeps only members who owe something.
"""
import calendar
import datetime
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional

from django.utils import timezone

from accounts.models import Member, School
from charges.models import AppliedServiceCharge
from shares.models import Share, ShareType

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


@dataclass
class OverdueShareDetail:
    share_type_id: int
    share_type_name: str
    monthly_committed_amount: Decimal
    total_expected_contribution: Decimal
    total_allocated_value: Decimal
    overdue_amount: Decimal

    def as_dict(self):
        return {
            "share_type_id": self.share_type_id,
            "share_type_name": self.share_type_name,
            "monthly_committed_amount": self.monthly_committed_amount,
            "total_expected_contribution": self.total_expected_contribution,
            "total_allocated_value": self.total_allocated_value,
            "overdue_amount": self.overdue_amount,
        }


@dataclass
class OverdueMemberInfo:
    member_id: int
    full_name: str
    school_id: Optional[int]
    school_name: str
    join_date: Optional[datetime.date]
    contribution_periods: int
    expected_monthly_saving: Decimal
    savings_balance: Decimal
    overdue_savings_amount: Decimal
    overdue_shares_details: List[OverdueShareDetail] = field(default_factory=list)
    pending_service_charges: List[AppliedServiceCharge] = field(default_factory=list)
    total_overdue_service_charges: Decimal = ZERO
    has_any_overdue: bool = False

    @property
    def total_overdue_shares(self):
        return sum((d.overdue_amount for d in self.overdue_shares_details), ZERO)

    @property
    def total_overdue(self):
        return self.overdue_savings_amount + self.total_overdue_shares + self.total_overdue_service_charges

    def as_dict(self):
        return {
            "member_id": self.member_id,
            "full_name": self.full_name,
            "school_id": self.school_id,
            "school_name": self.school_name,
            "join_date": self.join_date,
            "contribution_periods": self.contribution_periods,
            "expected_monthly_saving": self.expected_monthly_saving,
            "savings_balance": self.savings_balance,
            "overdue_savings_amount": self.overdue_savings_amount,
            "overdue_shares_details": [d.as_dict() for d in self.overdue_shares_details],
            "pending_service_charges": [
                {
                    "id": c.pk,
                    "service_charge_type_id": c.service_charge_type_id,
                    "service_charge_type_name": c.service_charge_type_name,
                    "amount_charged": c.amount_charged,
                    "date_applied": c.date_applied,
                    "notes": c.notes,
                }
                for c in self.pending_service_charges
            ],
            "total_overdue_service_charges": self.total_overdue_service_charges,
            "total_overdue": self.total_overdue,
            "has_any_overdue": self.has_any_overdue,
        }


@dataclass
class OverdueReport:
    overdue_members: List[OverdueMemberInfo]
    schools: List[dict]
    share_types: List[dict]
    as_at: datetime.date

    def as_dict(self):
        return {
            "as_at": self.as_at,
            "overdue_members": [m.as_dict() for m in self.overdue_members],
            "schools": self.schools,
            "share_types": self.share_types,
        }


# ----------------------------------------------
# CONTRIBUTION PERIODS
# ----------------------------------------------

def _as_date(value):
    if isinstance(value, datetime.datetime):
        return value.date()
    return value


def elapsed_months(start, end):
    """
    Whole calendar months from ``start`` to ``end``. A month only counts once
    its day-of-month is reached again, except that the last day of a short
    month completes a month started on a later day (Jan 31 -> Feb 28).
    """
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day:
        last_day = calendar.monthrange(end.year, end.month)[1]
        if end.day != last_day:
            months -= 1
    return months


def contribution_periods(join_date, today):
    join_date = _as_date(join_date)
    today = _as_date(today)
    if join_date is None or join_date > today:
        return 0
    return elapsed_months(join_date, today) + 1


# ----------------------------------------------
# PER-MEMBER COMPUTATION
# ----------------------------------------------

def compute_member_overdue(
    member: Member,
    commitments,
    approved_shares,
    share_types: Dict[int, ShareType],
    pending_charges,
    today: datetime.date,
) -> OverdueMemberInfo:
    periods = contribution_periods(member.join_date, today)

    # Savings
    expected_monthly_saving = member.expected_monthly_saving
    if expected_monthly_saving is None:
        logger.debug("Member %s has no expected monthly saving; using 0", member.pk)
        expected_monthly_saving = ZERO
    savings_balance = member.savings_balance if member.savings_balance is not None else ZERO
    total_expected_savings = expected_monthly_saving * periods
    overdue_savings_amount = max(ZERO, total_expected_savings - savings_balance)

    # Shares
    allocated_by_type = {}
    for share in approved_shares:
        if share.status != "approved":
            continue
        allocated_by_type[share.share_type_id] = (
            allocated_by_type.get(share.share_type_id, ZERO) + share.allocated_value
        )

    overdue_shares_details = []
    for commitment in commitments:
        share_type = share_types.get(commitment.share_type_id)
        if share_type is None:
            logger.warning(
                "Skipping commitment of member %s: share type %s does not exist",
                member.pk, commitment.share_type_id,
            )
            continue

        monthly_committed = commitment.monthly_committed_amount
        if monthly_committed is None:
            logger.debug(
                "Commitment of member %s to %s has no monthly amount; using 0",
                member.pk, share_type.name,
            )
            monthly_committed = ZERO
        if monthly_committed == 0:
            continue

        total_expected = monthly_committed * periods
        total_allocated = allocated_by_type.get(commitment.share_type_id, ZERO)
        overdue_amount = max(ZERO, total_expected - total_allocated)
        if overdue_amount > 0:
            overdue_shares_details.append(OverdueShareDetail(
                share_type_id=share_type.pk,
                share_type_name=share_type.name,
                monthly_committed_amount=monthly_committed,
                total_expected_contribution=total_expected,
                total_allocated_value=total_allocated,
                overdue_amount=overdue_amount,
            ))

    # Service charges
    pending_service_charges = list(pending_charges)
    total_overdue_service_charges = sum(
        (c.amount_charged for c in pending_service_charges), ZERO
    )

    has_any_overdue = (
        overdue_savings_amount > 0
        or len(overdue_shares_details) > 0
        or total_overdue_service_charges > 0
    )

    school = member.school if member.school_id else None
    return OverdueMemberInfo(
        member_id=member.pk,
        full_name=member.full_name,
        school_id=member.school_id,
        school_name=school.name if school else "N/A",
        join_date=member.join_date,
        contribution_periods=periods,
        expected_monthly_saving=expected_monthly_saving,
        savings_balance=savings_balance,
        overdue_savings_amount=overdue_savings_amount,
        overdue_shares_details=overdue_shares_details,
        pending_service_charges=pending_service_charges,
        total_overdue_service_charges=total_overdue_service_charges,
        has_any_overdue=has_any_overdue,
    )


# ----------------------------------------------
# REPORT
# ----------------------------------------------

def _group_by_member(rows):
    grouped = {}
    for row in rows:
        grouped.setdefault(row.member_id, []).append(row)
    return grouped


def compute_overdue_for_members(members, today):
    member_ids = [m.pk for m in members]
    share_types = {st.pk: st for st in ShareType.objects.all()}
    shares = _group_by_member(Share.objects.filter(status="approved", member_id__in=member_ids))
    charges = _group_by_member(
        AppliedServiceCharge.objects.filter(status="pending", member_id__in=member_ids)
        .order_by("date_applied", "id")
    )

    return [
        compute_member_overdue(
            member,
            commitments=member.share_commitments.all(),
            approved_shares=shares.get(member.pk, []),
            share_types=share_types,
            pending_charges=charges.get(member.pk, []),
            today=today,
        )
        for member in members
    ]


def get_overdue_report(today=None, school_id=None) -> OverdueReport:
    """
    Overdue position of every active member who owes something, plus the
    school and share type lists the report is filtered and labelled by.
    """
    today = _as_date(today) or timezone.localdate()

    members = (
        Member.objects.filter(status="active")
        .select_related("school")
        .prefetch_related("share_commitments")
    )
    if school_id:
        members = members.filter(school_id=school_id)
    members = list(members)

    overdue_members = [
        info for info in compute_overdue_for_members(members, today) if info.has_any_overdue
    ]
    logger.info(
        "Overdue report as at %s: %s of %s active member(s) overdue",
        today, len(overdue_members), len(members),
    )

    return OverdueReport(
        overdue_members=overdue_members,
        schools=list(School.objects.order_by("name").values("id", "name")),
        share_types=list(ShareType.objects.order_by("name").values("id", "name")),
        as_at=today,
    )


def get_member_overdue(member_id, today=None) -> OverdueMemberInfo:
    """
    Overdue position of a single member, whether or not anything is owed.
    Raises ``Member.DoesNotExist`` for an unknown id.
    """
    today = _as_date(today) or timezone.localdate()
    member = (
        Member.objects.select_related("school")
        .prefetch_related("share_commitments")
        .get(pk=member_id)
    )
    return compute_overdue_for_members([member], today)[0]
