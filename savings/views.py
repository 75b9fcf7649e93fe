from rest_framework import generics, viewsets
from rest_framework.views import APIView
from rest_framework.response import Response

from users.permissions import IsAdminRole
from .models import Saving
from .serializers import PendingTransactionSerializer, ReviewSerializer, SavingSerializer
from .services.approval_service import (
    approve_transaction,
    get_pending_transactions,
    reject_transaction,
)


class SavingViewSet(viewsets.ModelViewSet):
    queryset = Saving.objects.select_related("member").all()
    serializer_class = SavingSerializer
    filterset_fields = ["member", "status", "transaction_type", "deposit_mode"]
    ordering_fields = ["date", "amount"]
    http_method_names = ["get", "post", "head", "options"]


class PendingTransactionListView(generics.GenericAPIView):
    """
    GET /approvals/
    Pending savings and share allocations, oldest first.
    """
    serializer_class = PendingTransactionSerializer
    pagination_class = None

    def get(self, request):
        rows = get_pending_transactions()
        return Response(self.get_serializer(rows, many=True).data)


class ApproveTransactionView(APIView):
    """
    POST /approvals/approve/
    { "kind": "saving"|"share", "id": 12 }
    """
    permission_classes = [IsAdminRole]

    def post(self, request):
        serializer = ReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            approve_transaction(data["kind"], data["id"])
        except ValueError as e:
            return Response({"success": False, "message": str(e)}, status=400)
        return Response({"success": True, "message": "Transaction approved successfully."})


class RejectTransactionView(APIView):
    """
    POST /approvals/reject/
    { "kind": "saving"|"share", "id": 12, "reason": "..." }
    """
    permission_classes = [IsAdminRole]

    def post(self, request):
        serializer = ReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            reject_transaction(data["kind"], data["id"], data.get("reason", ""))
        except ValueError as e:
            return Response({"success": False, "message": str(e)}, status=400)
        return Response({"success": True, "message": "Transaction rejected."})
