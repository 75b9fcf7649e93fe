from django.contrib import admin

from .models import Share, ShareType


@admin.register(ShareType)
class ShareTypeAdmin(admin.ModelAdmin):
    list_display = ("name", "value_per_share", "expected_monthly_contribution")
    search_fields = ("name",)


@admin.register(Share)
class ShareAdmin(admin.ModelAdmin):
    list_display = (
        "member_name", "share_type_name", "count", "value_per_share",
        "total_value_for_allocation", "contribution_amount", "status", "allocation_date",
    )
    list_filter = ("status", "share_type", "deposit_mode", "allocation_date")
    search_fields = ("member_name", "member__full_name", "transaction_reference")
    ordering = ("-allocation_date",)
    actions = ["approve_shares", "reject_shares"]

    def get_readonly_fields(self, request, obj=None):
        fields = ["status", "created_at"]
        if obj is not None and obj.status != "pending":
            fields += [
                "member", "share_type", "count", "value_per_share",
                "total_value_for_allocation", "contribution_amount", "allocation_date",
            ]
        return fields

    def approve_shares(self, request, queryset):
        count = 0
        for share in queryset.filter(status="pending"):
            share.approve()
            count += 1
        self.message_user(request, f"Approved {count} share allocation(s).")
    approve_shares.short_description = "Approve selected pending allocations"

    def reject_shares(self, request, queryset):
        count = 0
        for share in queryset.filter(status="pending"):
            share.reject("Rejected from admin")
            count += 1
        self.message_user(request, f"Rejected {count} share allocation(s).")
    reject_shares.short_description = "Reject selected pending allocations"
