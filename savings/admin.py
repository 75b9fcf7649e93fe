from django.contrib import admin
from django.utils.html import format_html
from django.http import HttpResponse
from django.conf import settings
import csv

from savings.models import Saving

# ============================================================
#  SAVING ADMIN
# ============================================================

@admin.register(Saving)
class SavingAdmin(admin.ModelAdmin):
    list_display = ("member_name", "transaction_type", "amount_display", "date", "month", "status", "deposit_mode")
    list_filter = ("status", "transaction_type", "deposit_mode", "date")
    search_fields = ("member_name", "member__full_name", "transaction_reference", "notes")
    readonly_fields = ("month", "status", "created_at")
    ordering = ("-date",)
    actions = ["approve_savings", "reject_savings", "export_to_csv"]

    def amount_display(self, obj):
        color = "green" if obj.transaction_type == "deposit" else "red"
        return format_html(
            '<span style="color:{}; font-weight:600;">{}{}</span>',
            color, settings.SACCO_CURRENCY_SYMBOL, f"{obj.amount:,.2f}",
        )
    amount_display.short_description = "Amount"

    def get_readonly_fields(self, request, obj=None):
        # status changes only through the approve/reject actions
        fields = list(super().get_readonly_fields(request, obj))
        if obj is not None and obj.status != "pending":
            fields += ["member", "amount", "transaction_type", "date"]
        return fields

    # ----------------------------
    # Role-based permissions
    # ----------------------------
    def has_change_permission(self, request, obj=None):
        if getattr(request.user, "is_viewer", lambda: False)():
            return False
        return super().has_change_permission(request, obj)

    def has_delete_permission(self, request, obj=None):
        if getattr(request.user, "is_viewer", lambda: False)():
            return False
        return super().has_delete_permission(request, obj)

    def has_add_permission(self, request):
        if getattr(request.user, "is_viewer", lambda: False)():
            return False
        return super().has_add_permission(request)

    # ----------------------------
    # Admin actions
    # ----------------------------
    def approve_savings(self, request, queryset):
        count = 0
        for saving in queryset.filter(status="pending"):
            saving.approve()
            count += 1
        self.message_user(request, f"Approved {count} saving transaction(s).")
    approve_savings.short_description = "Approve selected pending savings"

    def reject_savings(self, request, queryset):
        count = 0
        for saving in queryset.filter(status="pending"):
            saving.reject("Rejected from admin")
            count += 1
        self.message_user(request, f"Rejected {count} saving transaction(s).")
    reject_savings.short_description = "Reject selected pending savings"

    def export_to_csv(self, request, queryset):
        response = HttpResponse(content_type="text/csv")
        response["Content-Disposition"] = "attachment; filename=savings.csv"
        writer = csv.writer(response)
        writer.writerow(["ID", "Member", "Type", "Amount", "Date", "Status", "Mode", "Reference", "Notes"])
        for obj in queryset:
            writer.writerow([
                obj.id,
                obj.member_name,
                obj.transaction_type,
                float(obj.amount),
                obj.date,
                obj.status,
                obj.deposit_mode or "",
                obj.transaction_reference or "",
                obj.notes or "",
            ])
        return response
    export_to_csv.short_description = "Export Selected to CSV"
