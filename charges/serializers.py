from django.utils import timezone
from rest_framework import serializers

from savings.models import DEPOSIT_MODES
from .models import AppliedServiceCharge, ServiceChargeType


class ServiceChargeTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = ServiceChargeType
        fields = ["id", "name", "description", "amount", "frequency"]

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Amount must be greater than zero.")
        return value


class AppliedServiceChargeSerializer(serializers.ModelSerializer):
    amount_charged = serializers.DecimalField(max_digits=20, decimal_places=2, required=False)

    class Meta:
        model = AppliedServiceCharge
        fields = [
            "id",
            "member",
            "member_name",
            "service_charge_type",
            "service_charge_type_name",
            "amount_charged",
            "date_applied",
            "status",
            "notes",
        ]
        read_only_fields = ["member_name", "service_charge_type_name", "status"]


class ChargePaymentSerializer(serializers.Serializer):
    member = serializers.IntegerField()
    amount = serializers.DecimalField(max_digits=20, decimal_places=2, min_value=0)
    payment_date = serializers.DateField(default=timezone.localdate)
    deposit_mode = serializers.ChoiceField(choices=DEPOSIT_MODES, default="Cash")

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Amount must be greater than zero.")
        return value


class ChargeSummaryQuerySerializer(serializers.Serializer):
    school = serializers.IntegerField(required=False, min_value=1)
    export = serializers.ChoiceField(choices=["xlsx"], required=False)
