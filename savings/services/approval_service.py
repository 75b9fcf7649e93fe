import logging

from django.db import transaction

from savings.models import Saving
from shares.models import Share

logger = logging.getLogger(__name__)

SAVINGS_DEPOSIT = "Savings Deposit"
SAVINGS_WITHDRAWAL = "Savings Withdrawal"
SHARE_ALLOCATION = "Share Allocation"

TRANSACTION_KINDS = {
    "saving": Saving,
    "share": Share,
}


def get_pending_transactions():
    """
    All pending savings and share allocations, oldest first, in one list
    shaped for the approvals queue.
    """
    rows = []

    for s in Saving.objects.filter(status="pending").select_related("member"):
        rows.append({
            "id": s.pk,
            "kind": "saving",
            "label": SAVINGS_DEPOSIT if s.transaction_type == "deposit" else SAVINGS_WITHDRAWAL,
            "member_id": s.member_id,
            "member_name": s.member.full_name,
            "amount": s.amount,
            "date": s.date,
            "deposit_mode": s.deposit_mode,
            "notes": s.notes,
        })

    for sh in Share.objects.filter(status="pending").select_related("member"):
        rows.append({
            "id": sh.pk,
            "kind": "share",
            "label": SHARE_ALLOCATION,
            "member_id": sh.member_id,
            "member_name": sh.member.full_name,
            "amount": sh.allocated_value,
            "date": sh.allocation_date,
            "deposit_mode": sh.deposit_mode,
            "notes": sh.notes,
        })

    return sorted(rows, key=lambda r: (r["date"], r["kind"], r["id"]))


def _get_transaction(kind, pk):
    model = TRANSACTION_KINDS.get(kind)
    if model is None:
        raise ValueError(f"Unknown transaction kind '{kind}'")
    tx = model.objects.filter(pk=pk).first()
    if tx is None:
        raise ValueError("Transaction not found or not pending.")
    return tx


@transaction.atomic
def approve_transaction(kind, pk):
    tx = _get_transaction(kind, pk)
    tx.approve()
    logger.info("Approved %s #%s", kind, pk)
    return tx


@transaction.atomic
def reject_transaction(kind, pk, reason):
    tx = _get_transaction(kind, pk)
    tx.reject(reason)
    logger.info("Rejected %s #%s: %s", kind, pk, reason)
    return tx
