from decimal import Decimal

from django.utils import timezone
from rest_framework import serializers

from accounts.models import Member
from savings.models import DEPOSIT_MODES
from .services.catch_up_service import CatchUpPayment

EXPORT_FORMATS = ["csv", "xlsx", "pdf"]


class OverdueQuerySerializer(serializers.Serializer):
    """Query string of the overdue report endpoints."""
    school = serializers.IntegerField(required=False, min_value=1)
    as_at = serializers.DateField(required=False)
    export = serializers.ChoiceField(choices=EXPORT_FORMATS, required=False)


class CatchUpPaymentSerializer(serializers.Serializer):
    member = serializers.PrimaryKeyRelatedField(queryset=Member.objects.all())
    member_name = serializers.CharField(required=False, allow_blank=True)
    savings_amount = serializers.DecimalField(max_digits=20, decimal_places=2, min_value=Decimal("0"), default=Decimal("0"))
    share_amounts = serializers.DictField(
        child=serializers.DecimalField(max_digits=20, decimal_places=2, min_value=Decimal("0")),
        default=dict,
    )
    service_charge_amount = serializers.DecimalField(max_digits=20, decimal_places=2, min_value=Decimal("0"), default=Decimal("0"))
    payment_date = serializers.DateField(default=timezone.localdate)
    deposit_mode = serializers.ChoiceField(choices=DEPOSIT_MODES, default="Cash")
    source_name = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    transaction_reference = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    evidence_url = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_share_amounts(self, value):
        cleaned = {}
        for key, amount in value.items():
            try:
                cleaned[int(key)] = amount
            except (TypeError, ValueError):
                raise serializers.ValidationError(f"'{key}' is not a valid share type id.")
        return cleaned

    def validate(self, attrs):
        total = (
            attrs["savings_amount"]
            + sum(attrs["share_amounts"].values(), Decimal("0"))
            + attrs["service_charge_amount"]
        )
        if total <= 0:
            raise serializers.ValidationError("Enter an amount for at least one of savings, shares or service charges.")
        return attrs

    def to_payment(self):
        data = self.validated_data
        member = data["member"]
        return CatchUpPayment(
            member_id=member.pk,
            member_name=data.get("member_name") or member.full_name,
            savings_amount=data["savings_amount"],
            share_amounts=data["share_amounts"],
            service_charge_amount=data["service_charge_amount"],
            payment_date=data["payment_date"],
            deposit_mode=data["deposit_mode"],
            source_name=data.get("source_name") or None,
            transaction_reference=data.get("transaction_reference") or None,
            evidence_url=data.get("evidence_url") or None,
        )
