from rest_framework import serializers

from .models import Share, ShareType


class ShareTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = ShareType
        fields = ["id", "name", "description", "value_per_share", "expected_monthly_contribution"]

    def validate_value_per_share(self, value):
        if value <= 0:
            raise serializers.ValidationError("Value per share must be greater than zero.")
        return value


class ShareSerializer(serializers.ModelSerializer):
    allocated_value = serializers.DecimalField(max_digits=20, decimal_places=2, read_only=True)

    class Meta:
        model = Share
        fields = [
            "id",
            "member",
            "member_name",
            "share_type",
            "share_type_name",
            "count",
            "value_per_share",
            "allocation_date",
            "status",
            "contribution_amount",
            "total_value_for_allocation",
            "allocated_value",
            "deposit_mode",
            "source_name",
            "transaction_reference",
            "evidence_url",
            "notes",
        ]
        read_only_fields = [
            "member_name", "share_type_name", "value_per_share", "status", "total_value_for_allocation",
        ]

    def create(self, validated_data):
        member = validated_data["member"]
        share_type = validated_data["share_type"]
        count = validated_data["count"]
        validated_data.update({
            "member_name": member.full_name,
            "share_type_name": share_type.name,
            "value_per_share": share_type.value_per_share,
            "total_value_for_allocation": count * share_type.value_per_share,
            "status": "pending",
        })
        return super().create(validated_data)
