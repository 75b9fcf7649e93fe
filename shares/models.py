from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from savings.models.channel import PaymentChannel

SHARE_STATUS = [
    ("pending", "Pending"),
    ("approved", "Approved"),
    ("rejected", "Rejected"),
]


class ShareType(models.Model):
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True, null=True)
    value_per_share = models.DecimalField(max_digits=20, decimal_places=2)
    expected_monthly_contribution = models.DecimalField(max_digits=20, decimal_places=2, null=True, blank=True)

    class Meta:
        ordering = ("name",)

    def clean(self):
        if self.value_per_share is not None and self.value_per_share <= 0:
            raise ValidationError({"value_per_share": "Value per share must be greater than zero."})

    def __str__(self):
        return f"{self.name} ({settings.SACCO_CURRENCY_SYMBOL}{self.value_per_share:,.2f}/share)"


class MemberShareCommitment(models.Model):
    member = models.ForeignKey("accounts.Member", on_delete=models.CASCADE, related_name="share_commitments")
    share_type = models.ForeignKey(ShareType, on_delete=models.PROTECT, related_name="commitments")
    monthly_committed_amount = models.DecimalField(max_digits=20, decimal_places=2, null=True, blank=True)

    class Meta:
        unique_together = ("member", "share_type")

    def __str__(self):
        return f"{self.member} – {self.share_type.name}: {self.monthly_committed_amount or 0}/month"


class Share(PaymentChannel):
    member = models.ForeignKey("accounts.Member", on_delete=models.CASCADE, related_name="shares")
    member_name = models.CharField(max_length=200, blank=True)
    share_type = models.ForeignKey(ShareType, on_delete=models.PROTECT, related_name="allocations")
    share_type_name = models.CharField(max_length=100, blank=True)

    count = models.PositiveIntegerField()
    value_per_share = models.DecimalField(max_digits=20, decimal_places=2)
    allocation_date = models.DateField(default=timezone.localdate)
    status = models.CharField(max_length=20, choices=SHARE_STATUS, default="pending")

    # Amount the member handed over; may exceed count * value_per_share
    contribution_amount = models.DecimalField(max_digits=20, decimal_places=2, null=True, blank=True)
    total_value_for_allocation = models.DecimalField(max_digits=20, decimal_places=2, null=True, blank=True)

    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("-allocation_date", "-id")

    @property
    def allocated_value(self):
        if self.total_value_for_allocation is not None:
            return self.total_value_for_allocation
        return Decimal(self.count or 0) * (self.value_per_share or Decimal("0"))

    def approve(self):
        if self.status != "pending":
            raise ValueError("Transaction not found or not pending.")
        self.status = "approved"
        self.save(update_fields=["status"])

    def reject(self, reason):
        if self.status != "pending":
            raise ValueError("Transaction not found or not pending.")
        self.status = "rejected"
        self.notes = reason
        self.save(update_fields=["status", "notes"])

    def __str__(self):
        return f"Share #{self.pk} - {self.member_name or self.member_id} - {self.count} x {self.share_type_name} ({self.status})"
