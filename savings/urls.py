from django.urls import path
from rest_framework.routers import SimpleRouter
from . import views

app_name = "savings"

router = SimpleRouter()
router.register("savings", views.SavingViewSet, basename="saving")

urlpatterns = [
    path("approvals/", views.PendingTransactionListView.as_view(), name="approvals"),
    path("approvals/approve/", views.ApproveTransactionView.as_view(), name="approve"),
    path("approvals/reject/", views.RejectTransactionView.as_view(), name="reject"),
] + router.urls
