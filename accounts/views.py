from django.db.models import Count
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response

from users.permissions import IsAdminRole
from .models import Member, School
from .serializers import AccountClosureSerializer, MemberSerializer, SchoolSerializer
from .services.closure_service import calculate_final_payout, close_member_account


class SchoolViewSet(viewsets.ModelViewSet):
    queryset = School.objects.annotate(member_count=Count("members")).order_by("name")
    serializer_class = SchoolSerializer
    search_fields = ["name", "contact_person"]

    def destroy(self, request, *args, **kwargs):
        school = self.get_object()
        if school.members.exists():
            return Response(
                {"error": "Cannot delete school with active members. Please reassign or remove members first."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        school.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


class MemberViewSet(viewsets.ModelViewSet):
    queryset = (
        Member.objects.select_related("school")
        .prefetch_related("share_commitments__share_type")
        .all()
    )
    serializer_class = MemberSerializer
    filterset_fields = ["school", "status"]
    search_fields = ["full_name", "savings_account_number", "email"]
    ordering_fields = ["full_name", "join_date", "savings_balance"]

    @action(detail=True, methods=["get"], url_path="final-payout")
    def final_payout(self, request, pk=None):
        """
        GET /members/<id>/final-payout/
        What the member would be paid if their account were closed today.
        """
        return Response(calculate_final_payout(self.get_object()).as_dict())

    @action(detail=True, methods=["post"], permission_classes=[IsAdminRole])
    def close(self, request, pk=None):
        """
        POST /members/<id>/close/
        { "deposit_mode": "Bank", "transaction_reference": "FT24001", "closure_date": "2024-06-30" }
        """
        member = self.get_object()
        serializer = AccountClosureSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            result = close_member_account(
                member.pk,
                deposit_mode=data["deposit_mode"],
                source_name=data.get("source_name") or None,
                transaction_reference=data.get("transaction_reference") or None,
                evidence_url=data.get("evidence_url") or None,
                closure_date=data["closure_date"],
            )
        except ValueError as e:
            return Response({"success": False, "message": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response({"success": True, **result.as_dict()})
