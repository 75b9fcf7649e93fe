import datetime
from decimal import Decimal

from django.test import TestCase
from rest_framework.test import APIClient

from accounts.services.closure_service import calculate_final_payout, close_member_account
from overdue.services.overdue_service import get_overdue_report
from savings.models import Saving
from tests.helpers import allocate, commit, make_member, make_school, make_share_type, make_user

CLOSED_ON = datetime.date(2023, 6, 30)


class AccountClosureTest(TestCase):
    def setUp(self):
        self.member = make_member(make_school(), savings_balance=Decimal("250.00"))
        self.ordinary = make_share_type()
        commit(self.member, self.ordinary, Decimal("30.00"))
        allocate(self.member, self.ordinary, 4)
        allocate(self.member, self.ordinary, 10, status="pending")

    def test_final_payout(self):
        payout = calculate_final_payout(self.member)
        self.assertEqual(payout.savings_balance, Decimal("250.00"))
        self.assertEqual(payout.total_shares_value, Decimal("60.00"))
        self.assertEqual(payout.total_payout, Decimal("310.00"))

    def test_close_pays_out_and_deactivates(self):
        result = close_member_account(
            self.member.pk, deposit_mode="Bank", transaction_reference="FT23181", closure_date=CLOSED_ON
        )

        self.member.refresh_from_db()
        self.assertEqual(self.member.status, "inactive")
        self.assertEqual(self.member.closure_date, CLOSED_ON)
        self.assertEqual(self.member.savings_balance, Decimal("0.00"))
        self.assertFalse(self.member.share_commitments.exists())

        withdrawal = result.withdrawal
        self.assertEqual(withdrawal.transaction_type, "withdrawal")
        self.assertEqual(withdrawal.status, "approved")
        self.assertEqual(withdrawal.amount, Decimal("250.00"))
        self.assertEqual(withdrawal.notes, "Savings payout on account closure via Bank.")
        self.assertEqual(withdrawal.transaction_reference, "FT23181")
        self.assertEqual(withdrawal.month, "June 2023")
        self.assertEqual(result.payout.total_payout, Decimal("310.00"))

    def test_zero_balance_posts_no_withdrawal(self):
        empty = make_member(self.member.school, "Almaz Tesfaye")
        result = close_member_account(empty.pk, closure_date=CLOSED_ON)
        self.assertIsNone(result.withdrawal)
        self.assertEqual(Saving.objects.filter(member=empty).count(), 0)

    def test_closed_member_leaves_overdue_report(self):
        close_member_account(self.member.pk, closure_date=CLOSED_ON)
        report = get_overdue_report(today=CLOSED_ON)
        self.assertEqual(report.overdue_members, [])

    def test_cannot_close_twice(self):
        close_member_account(self.member.pk, closure_date=CLOSED_ON)
        with self.assertRaisesMessage(ValueError, "Member account is already closed."):
            close_member_account(self.member.pk, closure_date=CLOSED_ON)
        self.assertEqual(Saving.objects.filter(member=self.member).count(), 1)

    def test_unknown_member(self):
        with self.assertRaisesMessage(ValueError, "Member not found."):
            close_member_account(9999)


class AccountClosureApiTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(make_user("treasurer", role="admin"))
        self.member = make_member(make_school(), savings_balance=Decimal("120.00"))

    def test_final_payout_endpoint(self):
        response = self.client.get(f"/api/members/{self.member.pk}/final-payout/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(Decimal(str(response.json()["total_payout"])), Decimal("120"))

    def test_close_endpoint(self):
        response = self.client.post(f"/api/members/{self.member.pk}/close/", {
            "deposit_mode": "Wallet",
            "closure_date": "2023-06-30",
        }, format="json")

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data["success"])
        self.assertEqual(data["status"], "inactive")
        self.assertEqual(data["closure_date"], "2023-06-30")

        again = self.client.post(f"/api/members/{self.member.pk}/close/", {}, format="json")
        self.assertEqual(again.status_code, 400)
        self.assertEqual(again.json()["message"], "Member account is already closed.")

    def test_viewer_cannot_close(self):
        self.client.force_authenticate(make_user("auditor", role="viewer"))
        response = self.client.post(f"/api/members/{self.member.pk}/close/", {}, format="json")
        self.assertEqual(response.status_code, 403)
        self.member.refresh_from_db()
        self.assertEqual(self.member.status, "active")
