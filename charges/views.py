from django.utils import timezone
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response

from .models import AppliedServiceCharge, ServiceChargeType
from .serializers import (
    AppliedServiceChargeSerializer,
    ChargePaymentSerializer,
    ChargeSummaryQuerySerializer,
    ServiceChargeTypeSerializer,
)
from .services.charge_service import (
    apply_service_charge,
    can_delete_service_charge_type,
    export_charge_summaries_xlsx,
    member_charge_summaries,
    record_charge_payment,
)


class ServiceChargeTypeViewSet(viewsets.ModelViewSet):
    queryset = ServiceChargeType.objects.all()
    serializer_class = ServiceChargeTypeSerializer

    def destroy(self, request, *args, **kwargs):
        charge_type = self.get_object()
        if not can_delete_service_charge_type(charge_type):
            return Response(
                {"error": "Cannot delete service charge type. It has been applied to members."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        charge_type.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


class AppliedServiceChargeViewSet(viewsets.ModelViewSet):
    queryset = AppliedServiceCharge.objects.select_related("member", "service_charge_type").all()
    serializer_class = AppliedServiceChargeSerializer
    filterset_fields = ["member", "status", "service_charge_type"]
    http_method_names = ["get", "post", "head", "options"]

    def perform_create(self, serializer):
        data = serializer.validated_data
        serializer.instance = apply_service_charge(
            member=data["member"],
            service_charge_type=data["service_charge_type"],
            date_applied=data.get("date_applied") or timezone.localdate(),
            amount_charged=data.get("amount_charged"),
            notes=data.get("notes"),
        )

    @action(detail=False, methods=["get"])
    def summary(self, request):
        """
        GET /charges/applied/summary/?school=<id>&export=xlsx
        Applied, paid and pending totals per active member.
        """
        query = ChargeSummaryQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        summaries = member_charge_summaries(school_id=query.validated_data.get("school"))
        if query.validated_data.get("export") == "xlsx":
            return export_charge_summaries_xlsx(summaries)
        return Response([s.as_dict() for s in summaries])

    @action(detail=False, methods=["post"], url_path="record-payment")
    def record_payment(self, request):
        """
        POST /charges/applied/record-payment/
        { "member": 1, "amount": "50.00", "payment_date": "2024-03-01", "deposit_mode": "Cash" }
        """
        serializer = ChargePaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            settlement = record_charge_payment(
                member_id=data["member"],
                amount=data["amount"],
                payment_date=data["payment_date"],
                deposit_mode=data["deposit_mode"],
            )
        except ValueError as e:
            return Response({"success": False, "message": str(e)}, status=400)

        return Response({
            "success": True,
            "message": f"Payment of {data['amount']:.2f} applied successfully.",
            "paid_charges": [c.pk for c in settlement.paid_charges],
            "amount_applied": str(settlement.amount_applied),
            "unallocated": str(settlement.unallocated),
        })
