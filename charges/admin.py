from django.contrib import admin
from django.utils.html import format_html

from .models import AppliedServiceCharge, ServiceChargeType


@admin.register(ServiceChargeType)
class ServiceChargeTypeAdmin(admin.ModelAdmin):
    list_display = ("name", "amount", "frequency")
    search_fields = ("name",)
    list_filter = ("frequency",)


@admin.register(AppliedServiceCharge)
class AppliedServiceChargeAdmin(admin.ModelAdmin):
    list_display = ("member_name", "service_charge_type_name", "amount_charged", "date_applied", "status_display")
    list_filter = ("status", "service_charge_type", "date_applied")
    search_fields = ("member_name", "member__full_name", "service_charge_type_name")
    ordering = ("date_applied",)
    actions = ["waive_charges"]

    def status_display(self, obj):
        color = {
            "pending": "orange",
            "paid": "green",
            "waived": "gray",
        }.get(obj.status, "black")
        return format_html('<span style="color:{}; font-weight:600;">{}</span>', color, obj.get_status_display())
    status_display.short_description = "Status"

    def waive_charges(self, request, queryset):
        count = queryset.filter(status="pending").update(status="waived")
        self.message_user(request, f"Waived {count} pending charge(s).")
    waive_charges.short_description = "Waive selected pending charges"
