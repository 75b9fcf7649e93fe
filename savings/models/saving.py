from decimal import Decimal

from django.conf import settings
from django.db import models, transaction
from django.db.models import F
from django.utils import timezone

from .channel import PaymentChannel

TRANSACTION_TYPES = [
    ("deposit", "Deposit"),
    ("withdrawal", "Withdrawal"),
]

SAVING_STATUS = [
    ("pending", "Pending"),
    ("approved", "Approved"),
    ("rejected", "Rejected"),
]


def month_label(value):
    """e.g. 'January 2024'"""
    return value.strftime("%B %Y")


class Saving(PaymentChannel):
    member = models.ForeignKey("accounts.Member", on_delete=models.CASCADE, related_name="savings")
    member_name = models.CharField(max_length=200, blank=True)

    amount = models.DecimalField(max_digits=20, decimal_places=2)
    date = models.DateField(default=timezone.localdate)
    month = models.CharField(max_length=20, blank=True)
    transaction_type = models.CharField(max_length=20, choices=TRANSACTION_TYPES, default="deposit")
    status = models.CharField(max_length=20, choices=SAVING_STATUS, default="pending")
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("-date", "-id")

    def save(self, *args, **kwargs):
        if not self.month and self.date:
            self.month = month_label(self.date)
        super().save(*args, **kwargs)

    @property
    def signed_amount(self):
        if self.transaction_type == "withdrawal":
            return -abs(self.amount)
        return abs(self.amount)

    @transaction.atomic
    def approve(self):
        """
        Approve a pending saving and move the member's balance with it.
        """
        from accounts.models import Member

        if self.status != "pending":
            raise ValueError("Transaction not found or not pending.")

        self.status = "approved"
        self.save(update_fields=["status"])
        Member.objects.filter(pk=self.member_id).update(
            savings_balance=F("savings_balance") + self.signed_amount
        )

    def reject(self, reason):
        if self.status != "pending":
            raise ValueError("Transaction not found or not pending.")
        self.status = "rejected"
        self.notes = reason
        self.save(update_fields=["status", "notes"])

    def __str__(self):
        return (
            f"{self.transaction_type} - {settings.SACCO_CURRENCY_SYMBOL}{self.amount:,.2f} "
            f"({self.member_name or self.member_id}, {self.status})"
        )
