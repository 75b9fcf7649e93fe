import logging
from datetime import datetime

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from overdue.services.overdue_service import get_overdue_report

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Print members with overdue savings, share contributions or service charges."

    def add_arguments(self, parser):
        parser.add_argument("--school", type=int, help="Only members of this school id")
        parser.add_argument("--date", help="Evaluate as at YYYY-MM-DD (default: today)")

    def handle(self, *args, **options):
        today = timezone.localdate()
        if options.get("date"):
            try:
                today = datetime.strptime(options["date"], "%Y-%m-%d").date()
            except ValueError:
                raise CommandError("--date must be in YYYY-MM-DD format")

        report = get_overdue_report(today=today, school_id=options.get("school"))
        symbol = settings.SACCO_CURRENCY_SYMBOL

        grand_total = sum(m.total_overdue for m in report.overdue_members)
        for info in report.overdue_members:
            self.stdout.write(
                f"{info.full_name} ({info.school_name}) "
                f"savings={symbol}{info.overdue_savings_amount:,.2f} "
                f"shares={symbol}{info.total_overdue_shares:,.2f} "
                f"charges={symbol}{info.total_overdue_service_charges:,.2f}"
            )

        logger.info("Overdue report as at %s: %s member(s)", today, len(report.overdue_members))
        self.stdout.write(self.style.SUCCESS(
            f"{len(report.overdue_members)} member(s) overdue as at {today}. "
            f"Total overdue: {symbol}{grand_total:,.2f}"
        ))
