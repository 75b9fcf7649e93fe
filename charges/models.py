from django.conf import settings
from django.db import models
from django.utils import timezone

FREQUENCIES = [
    ("once", "Once"),
    ("monthly", "Monthly"),
    ("yearly", "Yearly"),
]

CHARGE_STATUS = [
    ("pending", "Pending"),
    ("paid", "Paid"),
    ("waived", "Waived"),
]


class ServiceChargeType(models.Model):
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True, null=True)
    amount = models.DecimalField(max_digits=20, decimal_places=2)
    # Informational only; charges are applied by hand
    frequency = models.CharField(max_length=10, choices=FREQUENCIES, default="once")

    class Meta:
        ordering = ("name",)

    def __str__(self):
        return f"{self.name} - {settings.SACCO_CURRENCY_SYMBOL}{self.amount:,.2f} ({self.frequency})"


class AppliedServiceCharge(models.Model):
    member = models.ForeignKey("accounts.Member", on_delete=models.CASCADE, related_name="service_charges")
    member_name = models.CharField(max_length=200, blank=True)
    service_charge_type = models.ForeignKey(ServiceChargeType, on_delete=models.PROTECT, related_name="applied_charges")
    service_charge_type_name = models.CharField(max_length=100, blank=True)

    amount_charged = models.DecimalField(max_digits=20, decimal_places=2)
    date_applied = models.DateField(default=timezone.localdate)
    status = models.CharField(max_length=10, choices=CHARGE_STATUS, default="pending")
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("date_applied", "id")

    def mark_paid(self, note):
        if self.status != "pending":
            raise ValueError("Only pending charges can be paid.")
        self.status = "paid"
        self.notes = note
        self.save(update_fields=["status", "notes"])

    def __str__(self):
        return (
            f"{self.service_charge_type_name} - {settings.SACCO_CURRENCY_SYMBOL}{self.amount_charged:,.2f} "
            f"({self.member_name or self.member_id}, {self.status})"
        )
