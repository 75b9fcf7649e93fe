from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.models import Member
from users.permissions import IsAdminRole
from .serializers import CatchUpPaymentSerializer, OverdueQuerySerializer
from .services.catch_up_service import CatchUpPaymentError, record_overdue_payment
from .services.overdue_export import handle_export
from .services.overdue_service import get_member_overdue, get_overdue_report


def _query(request):
    """Validated query string; a bad value answers 400."""
    serializer = OverdueQuerySerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data


class OverduePaymentsView(APIView):
    """
    GET /api/overdue/?school=<id>&as_at=2024-12-31&export=csv|xlsx|pdf
    Active members with overdue savings, shares or service charges.
    """

    def get(self, request):
        query = _query(request)
        report = get_overdue_report(
            today=query.get("as_at") or timezone.localdate(),
            school_id=query.get("school"),
        )

        export_response = handle_export(query.get("export"), report)
        if export_response:
            return export_response

        return Response(report.as_dict())


class MemberOverdueView(APIView):
    """
    GET /api/overdue/members/<member_id>/
    One member's overdue position, used to pre-fill the payment form.
    """

    def get(self, request, member_id):
        query = _query(request)
        get_object_or_404(Member, pk=member_id)
        info = get_member_overdue(member_id, today=query.get("as_at") or timezone.localdate())
        return Response(info.as_dict())


class RecordOverduePaymentView(APIView):
    """
    POST /api/overdue/payments/
    {
      "member": 1,
      "savings_amount": "150.00",
      "share_amounts": {"2": "47.00"},
      "service_charge_amount": "55.00",
      "payment_date": "2024-04-20",
      "deposit_mode": "Bank",
      "source_name": "CBE",
      "transaction_reference": "FT2411",
      "evidence_url": "https://..."
    }
    """
    permission_classes = [IsAdminRole]

    def post(self, request):
        serializer = CatchUpPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            result = record_overdue_payment(serializer.to_payment())
        except CatchUpPaymentError:
            return Response(
                {"success": False, "message": "Failed to record overdue payment."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(
            {"success": True, **result.as_dict()},
            status=status.HTTP_201_CREATED,
        )
