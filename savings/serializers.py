from rest_framework import serializers

from .models import Saving
from .services.approval_service import TRANSACTION_KINDS


class SavingSerializer(serializers.ModelSerializer):
    class Meta:
        model = Saving
        fields = [
            "id",
            "member",
            "member_name",
            "amount",
            "date",
            "month",
            "transaction_type",
            "status",
            "deposit_mode",
            "source_name",
            "transaction_reference",
            "evidence_url",
            "notes",
            "created_at",
        ]
        read_only_fields = ["member_name", "month", "status", "created_at"]

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Amount must be greater than zero.")
        return value

    def create(self, validated_data):
        validated_data["member_name"] = validated_data["member"].full_name
        validated_data["status"] = "pending"
        return super().create(validated_data)


class PendingTransactionSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    kind = serializers.CharField()
    label = serializers.CharField()
    member_id = serializers.IntegerField()
    member_name = serializers.CharField()
    amount = serializers.DecimalField(max_digits=20, decimal_places=2)
    date = serializers.DateField()
    deposit_mode = serializers.CharField(allow_null=True)
    notes = serializers.CharField(allow_null=True)


class ReviewSerializer(serializers.Serializer):
    kind = serializers.ChoiceField(choices=list(TRANSACTION_KINDS.keys()))
    id = serializers.IntegerField()
    reason = serializers.CharField(required=False, allow_blank=True)
