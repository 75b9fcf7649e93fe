import datetime
from decimal import Decimal

from django.test import SimpleTestCase

from accounts.models import Member, School
from charges.models import AppliedServiceCharge
from overdue.services.overdue_service import (
    compute_member_overdue,
    contribution_periods,
    elapsed_months,
)
from shares.models import MemberShareCommitment, Share, ShareType

TODAY = datetime.date(2023, 4, 20)


def member(join_date=datetime.date(2023, 1, 15), expected="100.00", balance="250.00"):
    return Member(
        id=7,
        full_name="Abebe Kebede",
        school=School(id=1, name="Bole Primary"),
        join_date=join_date,
        expected_monthly_saving=Decimal(expected) if expected is not None else None,
        savings_balance=Decimal(balance),
    )


def share_types():
    return {
        1: ShareType(id=1, name="Ordinary", value_per_share=Decimal("15.00")),
        2: ShareType(id=2, name="Premium", value_per_share=Decimal("100.00")),
    }


def approved(share_type_id, count, value="15.00", total=None, status="approved"):
    return Share(
        member_id=7,
        share_type_id=share_type_id,
        count=count,
        value_per_share=Decimal(value),
        total_value_for_allocation=Decimal(total) if total is not None else None,
        status=status,
    )


class ContributionPeriodsTest(SimpleTestCase):
    def test_counts_current_partial_month(self):
        self.assertEqual(contribution_periods(datetime.date(2023, 1, 15), TODAY), 4)

    def test_join_date_in_future_gives_zero(self):
        self.assertEqual(contribution_periods(datetime.date(2023, 5, 1), TODAY), 0)
        self.assertEqual(contribution_periods(datetime.date(2023, 4, 21), TODAY), 0)

    def test_joined_today_is_one_period(self):
        self.assertEqual(contribution_periods(TODAY, TODAY), 1)

    def test_month_not_complete_until_day_reached(self):
        self.assertEqual(elapsed_months(datetime.date(2023, 1, 21), TODAY), 2)
        self.assertEqual(elapsed_months(datetime.date(2023, 1, 20), TODAY), 3)

    def test_end_of_short_month_completes_month(self):
        self.assertEqual(elapsed_months(datetime.date(2023, 1, 31), datetime.date(2023, 2, 28)), 1)

    def test_accepts_datetimes(self):
        self.assertEqual(
            contribution_periods(datetime.datetime(2023, 1, 15, 9, 30), datetime.datetime(2023, 4, 20, 8, 0)),
            4,
        )


class ComputeMemberOverdueTest(SimpleTestCase):
    def compute(self, m=None, commitments=(), shares=(), charges=(), today=TODAY):
        return compute_member_overdue(
            m or member(),
            commitments=list(commitments),
            approved_shares=list(shares),
            share_types=share_types(),
            pending_charges=list(charges),
            today=today,
        )

    def test_savings_overdue_scenario(self):
        info = self.compute()
        self.assertEqual(info.contribution_periods, 4)
        self.assertEqual(info.overdue_savings_amount, Decimal("150.00"))
        self.assertTrue(info.has_any_overdue)
        self.assertEqual(info.school_name, "Bole Primary")

    def test_savings_overdue_is_never_negative(self):
        info = self.compute(member(balance="1000.00"))
        self.assertEqual(info.overdue_savings_amount, Decimal("0.00"))
        self.assertFalse(info.has_any_overdue)

    def test_future_member_owes_nothing(self):
        info = self.compute(member(join_date=datetime.date(2024, 1, 1), balance="0.00"))
        self.assertEqual(info.contribution_periods, 0)
        self.assertEqual(info.overdue_savings_amount, Decimal("0.00"))

    def test_missing_expected_saving_defaults_to_zero(self):
        info = self.compute(member(expected=None, balance="0.00"))
        self.assertEqual(info.expected_monthly_saving, Decimal("0.00"))
        self.assertEqual(info.overdue_savings_amount, Decimal("0.00"))

    def test_share_overdue_detail(self):
        commitment = MemberShareCommitment(share_type_id=1, monthly_committed_amount=Decimal("30.00"))
        info = self.compute(
            member(balance="400.00"),
            commitments=[commitment],
            shares=[approved(1, 2), approved(1, 1, total="20.00")],
        )
        self.assertEqual(len(info.overdue_shares_details), 1)
        detail = info.overdue_shares_details[0]
        self.assertEqual(detail.share_type_name, "Ordinary")
        self.assertEqual(detail.total_expected_contribution, Decimal("120.00"))
        self.assertEqual(detail.total_allocated_value, Decimal("50.00"))
        self.assertEqual(detail.overdue_amount, Decimal("70.00"))
        self.assertTrue(info.has_any_overdue)

    def test_pending_shares_do_not_count(self):
        commitment = MemberShareCommitment(share_type_id=1, monthly_committed_amount=Decimal("15.00"))
        info = self.compute(
            member(balance="400.00"),
            commitments=[commitment],
            shares=[approved(1, 4, status="pending")],
        )
        self.assertEqual(info.overdue_shares_details[0].overdue_amount, Decimal("60.00"))

    def test_fully_covered_commitment_is_dropped(self):
        commitment = MemberShareCommitment(share_type_id=2, monthly_committed_amount=Decimal("100.00"))
        info = self.compute(
            member(balance="400.00"),
            commitments=[commitment],
            shares=[approved(2, 5, value="100.00")],
        )
        self.assertEqual(info.overdue_shares_details, [])
        self.assertFalse(info.has_any_overdue)

    def test_zero_commitment_never_reported(self):
        commitment = MemberShareCommitment(share_type_id=1, monthly_committed_amount=Decimal("0.00"))
        for shares in ([], [approved(1, 3)]):
            info = self.compute(member(balance="400.00"), commitments=[commitment], shares=shares)
            self.assertEqual(info.overdue_shares_details, [])

    def test_null_commitment_treated_as_zero(self):
        commitment = MemberShareCommitment(share_type_id=1, monthly_committed_amount=None)
        info = self.compute(member(balance="400.00"), commitments=[commitment])
        self.assertEqual(info.overdue_shares_details, [])

    def test_unknown_share_type_skipped(self):
        commitment = MemberShareCommitment(share_type_id=99, monthly_committed_amount=Decimal("50.00"))
        with self.assertLogs("overdue.services.overdue_service", level="WARNING"):
            info = self.compute(member(balance="400.00"), commitments=[commitment])
        self.assertEqual(info.overdue_shares_details, [])
        self.assertFalse(info.has_any_overdue)

    def test_pending_service_charges_are_totalled(self):
        charges = [
            AppliedServiceCharge(id=1, amount_charged=Decimal("30.00"), date_applied=datetime.date(2023, 1, 1)),
            AppliedServiceCharge(id=2, amount_charged=Decimal("20.00"), date_applied=datetime.date(2023, 2, 1)),
        ]
        info = self.compute(member(balance="400.00"), charges=charges)
        self.assertEqual(info.total_overdue_service_charges, Decimal("50.00"))
        self.assertEqual(len(info.pending_service_charges), 2)
        self.assertTrue(info.has_any_overdue)

    def test_total_overdue_adds_all_parts(self):
        commitment = MemberShareCommitment(share_type_id=1, monthly_committed_amount=Decimal("15.00"))
        charges = [AppliedServiceCharge(id=1, amount_charged=Decimal("30.00"), date_applied=datetime.date(2023, 1, 1))]
        info = self.compute(commitments=[commitment], charges=charges)
        self.assertEqual(info.total_overdue_shares, Decimal("60.00"))
        self.assertEqual(info.total_overdue, Decimal("240.00"))

    def test_same_snapshot_gives_same_result(self):
        commitment = MemberShareCommitment(share_type_id=1, monthly_committed_amount=Decimal("30.00"))
        shares = [approved(1, 2)]
        first = self.compute(commitments=[commitment], shares=shares)
        second = self.compute(commitments=[commitment], shares=shares)
        self.assertEqual(first.as_dict(), second.as_dict())
