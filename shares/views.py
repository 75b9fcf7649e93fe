from rest_framework import viewsets, status
from rest_framework.response import Response

from .models import Share, ShareType
from .serializers import ShareSerializer, ShareTypeSerializer


class ShareTypeViewSet(viewsets.ModelViewSet):
    queryset = ShareType.objects.all()
    serializer_class = ShareTypeSerializer
    search_fields = ["name"]

    def destroy(self, request, *args, **kwargs):
        share_type = self.get_object()
        if share_type.commitments.exists():
            return Response(
                {"error": "Cannot delete share type. It is currently in use by member commitments."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        share_type.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


class ShareViewSet(viewsets.ModelViewSet):
    queryset = Share.objects.select_related("member", "share_type").all()
    serializer_class = ShareSerializer
    filterset_fields = ["member", "share_type", "status"]
    http_method_names = ["get", "post", "head", "options"]
