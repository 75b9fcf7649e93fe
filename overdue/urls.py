from django.urls import path
from . import views

app_name = "overdue"

urlpatterns = [
    path("", views.OverduePaymentsView.as_view(), name="report"),
    path("members/<int:member_id>/", views.MemberOverdueView.as_view(), name="member"),
    path("payments/", views.RecordOverduePaymentView.as_view(), name="record-payment"),
]
