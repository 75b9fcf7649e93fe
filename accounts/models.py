from django.db import models
from django.utils import timezone
from decimal import Decimal


class School(models.Model):
    name = models.CharField(max_length=150, unique=True)
    address = models.CharField(max_length=255, null=True, blank=True)
    contact_person = models.CharField(max_length=150, null=True, blank=True)

    class Meta:
        ordering = ("name",)

    def __str__(self):
        return self.name


class Member(models.Model):
    STATUS_CHOICES = [
        ('active', 'Active'),
        ('inactive', 'Inactive'),
    ]

    SEX_CHOICES = [
        ('Male', 'Male'),
        ('Female', 'Female'),
        ('Other', 'Other'),
    ]

    full_name = models.CharField(max_length=200)
    email = models.EmailField(unique=True, null=True, blank=True)
    sex = models.CharField(max_length=10, choices=SEX_CHOICES, null=True, blank=True)
    phone_number = models.CharField(max_length=30, null=True, blank=True)

    school = models.ForeignKey(School, on_delete=models.PROTECT, related_name="members")
    savings_account_number = models.CharField(max_length=30, unique=True, null=True, blank=True)

    join_date = models.DateField(default=timezone.localdate)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='active')
    closure_date = models.DateField(null=True, blank=True)

    # Sum of approved deposits minus approved withdrawals
    savings_balance = models.DecimalField(max_digits=20, decimal_places=2, default=Decimal('0'))
    expected_monthly_saving = models.DecimalField(max_digits=20, decimal_places=2, null=True, blank=True)

    # Address (all optional)
    address_city = models.CharField(max_length=100, null=True, blank=True)
    address_sub_city = models.CharField(max_length=100, null=True, blank=True)
    address_wereda = models.CharField(max_length=100, null=True, blank=True)

    # Emergency contact (all optional)
    emergency_contact_name = models.CharField(max_length=150, null=True, blank=True)
    emergency_contact_phone = models.CharField(max_length=30, null=True, blank=True)

    class Meta:
        ordering = ("full_name",)

    def __str__(self):
        if self.savings_account_number:
            return f"{self.savings_account_number} – {self.full_name}"
        return self.full_name

    @property
    def is_active(self):
        return self.status == "active"

    # --------------------------------------------------------------
    # OPTIONAL STRUCTURED FIELDS
    # --------------------------------------------------------------
    def has_address(self):
        return any([self.address_city, self.address_sub_city, self.address_wereda])

    def has_emergency_contact(self):
        return any([self.emergency_contact_name, self.emergency_contact_phone])

    def address(self):
        """
        Returns the address as a dict, or None when no part of it was given.
        """
        if not self.has_address():
            return None
        return {
            "city": self.address_city,
            "sub_city": self.address_sub_city,
            "wereda": self.address_wereda,
        }

    def emergency_contact(self):
        if not self.has_emergency_contact():
            return None
        return {
            "name": self.emergency_contact_name,
            "phone": self.emergency_contact_phone,
        }
