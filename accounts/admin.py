from django.contrib import admin
from django.utils import timezone
from django.utils.html import format_html

from shares.models import MemberShareCommitment
from .models import Member, School


class ShareCommitmentInline(admin.TabularInline):
    model = MemberShareCommitment
    extra = 0
    fields = ("share_type", "monthly_committed_amount")


@admin.register(School)
class SchoolAdmin(admin.ModelAdmin):
    list_display = ("name", "contact_person", "address")
    search_fields = ("name", "contact_person")


@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    inlines = [ShareCommitmentInline]
    list_display = (
        "savings_account_number",
        "colored_name",
        "school",
        "status",
        "join_date",
        "savings_balance",
        "expected_monthly_saving",
    )

    search_fields = ("savings_account_number", "full_name", "email")
    list_filter = ("status", "school")
    readonly_fields = ("savings_balance", "closure_date")

    def colored_name(self, obj):
        color = {
            'active': "green",
            'inactive': "gray",
        }.get(obj.status, "black")

        return format_html("<b style='color:{};'>{}</b>", color, obj.full_name)

    colored_name.short_description = "Member Name"

    actions = ["export_overdue_csv", "close_accounts"]

    def export_overdue_csv(self, request, queryset):
        from overdue.services.overdue_export import export_overdue_csv
        from overdue.services.overdue_service import OverdueReport, compute_overdue_for_members

        today = timezone.localdate()
        members = list(queryset.select_related("school").prefetch_related("share_commitments"))
        overdue = [m for m in compute_overdue_for_members(members, today) if m.has_any_overdue]
        report = OverdueReport(overdue_members=overdue, schools=[], share_types=[], as_at=today)
        return export_overdue_csv(report)
    export_overdue_csv.short_description = "Export overdue position of selected members (CSV)"

    def close_accounts(self, request, queryset):
        from .services.closure_service import close_member_account

        closed = 0
        for member in queryset.filter(status="active"):
            close_member_account(member.pk)
            closed += 1
        self.message_user(request, f"Closed {closed} account(s); savings paid out in cash.")
    close_accounts.short_description = "Close selected accounts (cash payout)"
