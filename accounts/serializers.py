from django.db import transaction
from django.utils import timezone
from rest_framework import serializers

from savings.models import DEPOSIT_MODES
from shares.models import MemberShareCommitment
from .models import Member, School


class SchoolSerializer(serializers.ModelSerializer):
    member_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = School
        fields = ["id", "name", "address", "contact_person", "member_count"]


class ShareCommitmentSerializer(serializers.ModelSerializer):
    share_type_name = serializers.CharField(source="share_type.name", read_only=True)

    class Meta:
        model = MemberShareCommitment
        fields = ["share_type", "share_type_name", "monthly_committed_amount"]


class MemberSerializer(serializers.ModelSerializer):
    school_name = serializers.CharField(source="school.name", read_only=True)
    share_commitments = ShareCommitmentSerializer(many=True, required=False)
    address = serializers.SerializerMethodField()
    emergency_contact = serializers.SerializerMethodField()

    class Meta:
        model = Member
        fields = [
            "id",
            "full_name",
            "email",
            "sex",
            "phone_number",
            "school",
            "school_name",
            "savings_account_number",
            "join_date",
            "status",
            "closure_date",
            "savings_balance",
            "expected_monthly_saving",
            "address_city",
            "address_sub_city",
            "address_wereda",
            "emergency_contact_name",
            "emergency_contact_phone",
            "address",
            "emergency_contact",
            "share_commitments",
        ]
        read_only_fields = ["savings_balance", "closure_date"]
        extra_kwargs = {
            "address_city": {"write_only": True},
            "address_sub_city": {"write_only": True},
            "address_wereda": {"write_only": True},
            "emergency_contact_name": {"write_only": True},
            "emergency_contact_phone": {"write_only": True},
        }

    def get_address(self, obj):
        return obj.address()

    def get_emergency_contact(self, obj):
        return obj.emergency_contact()

    def validate_share_commitments(self, value):
        seen = set()
        for item in value:
            share_type = item["share_type"]
            if share_type.pk in seen:
                raise serializers.ValidationError(
                    f"Duplicate commitment for share type '{share_type.name}'."
                )
            seen.add(share_type.pk)
        return value

    @transaction.atomic
    def create(self, validated_data):
        commitments = validated_data.pop("share_commitments", [])
        member = Member.objects.create(**validated_data)
        self._replace_commitments(member, commitments)
        return member

    @transaction.atomic
    def update(self, instance, validated_data):
        commitments = validated_data.pop("share_commitments", None)
        instance = super().update(instance, validated_data)
        if commitments is not None:
            self._replace_commitments(instance, commitments)
        return instance

    def _replace_commitments(self, member, commitments):
        member.share_commitments.all().delete()
        MemberShareCommitment.objects.bulk_create([
            MemberShareCommitment(member=member, **item) for item in commitments
        ])


class AccountClosureSerializer(serializers.Serializer):
    deposit_mode = serializers.ChoiceField(choices=DEPOSIT_MODES, default="Cash")
    source_name = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    transaction_reference = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    evidence_url = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    closure_date = serializers.DateField(default=timezone.localdate)
