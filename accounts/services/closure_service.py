"""
Closing a member's account.

The member is paid out their whole savings balance as an approved
withdrawal, their share commitments end, and they become inactive with a
closure date. All of it happens in one transaction.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from accounts.models import Member
from savings.models import Saving, month_label
from shares.models import Share

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


@dataclass
class FinalPayout:
    member_id: int
    savings_balance: Decimal
    total_shares_value: Decimal

    @property
    def total_payout(self):
        return self.savings_balance + self.total_shares_value

    def as_dict(self):
        return {
            "member_id": self.member_id,
            "savings_balance": self.savings_balance,
            "total_shares_value": self.total_shares_value,
            "total_payout": self.total_payout,
        }


@dataclass
class ClosureResult:
    member: Member
    payout: FinalPayout
    withdrawal: Optional[Saving] = None

    def as_dict(self):
        return {
            "member_id": self.member.pk,
            "status": self.member.status,
            "closure_date": self.member.closure_date,
            "withdrawal_id": self.withdrawal.pk if self.withdrawal else None,
            **{k: v for k, v in self.payout.as_dict().items() if k != "member_id"},
        }


def calculate_final_payout(member: Member) -> FinalPayout:
    shares = Share.objects.filter(member=member, status="approved")
    return FinalPayout(
        member_id=member.pk,
        savings_balance=member.savings_balance or ZERO,
        total_shares_value=sum((s.allocated_value for s in shares), ZERO),
    )


def close_member_account(member_id, deposit_mode="Cash", source_name=None,
                         transaction_reference=None, evidence_url=None, closure_date=None):
    """
    Pay out and deactivate a member. Raises ``ValueError`` when the member
    does not exist or is already inactive.
    """
    closure_date = closure_date or timezone.localdate()

    with transaction.atomic():
        member = Member.objects.select_for_update().filter(pk=member_id).first()
        if member is None:
            raise ValueError("Member not found.")
        if not member.is_active:
            raise ValueError("Member account is already closed.")

        payout = calculate_final_payout(member)

        withdrawal = None
        if payout.savings_balance > 0:
            withdrawal = Saving.objects.create(
                member=member,
                member_name=member.full_name,
                amount=payout.savings_balance,
                date=closure_date,
                month=month_label(closure_date),
                transaction_type="withdrawal",
                status="approved",
                notes=f"Savings payout on account closure via {deposit_mode}.",
                deposit_mode=deposit_mode,
                source_name=source_name,
                transaction_reference=transaction_reference,
                evidence_url=evidence_url,
            )
            Member.objects.filter(pk=member.pk).update(
                savings_balance=F("savings_balance") - payout.savings_balance
            )

        member.share_commitments.all().delete()
        Member.objects.filter(pk=member.pk).update(status="inactive", closure_date=closure_date)
        member.refresh_from_db()

    logger.info(
        "Closed account of member %s on %s: savings payout %s, shares %s",
        member.pk, closure_date, payout.savings_balance, payout.total_shares_value,
    )
    return ClosureResult(member=member, payout=payout, withdrawal=withdrawal)
