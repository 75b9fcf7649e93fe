import datetime
from decimal import Decimal
from unittest import mock

from django.test import TestCase
from rest_framework.test import APIClient

from accounts.models import Member
from overdue.services.catch_up_service import CatchUpPaymentError
from savings.models import Saving
from shares.models import Share
from tests.helpers import (
    charge,
    commit,
    make_charge_type,
    make_member,
    make_school,
    make_share_type,
    make_user,
)


class ApiTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = make_user("treasurer", role="admin")
        self.viewer = make_user("auditor", role="viewer")
        self.client.force_authenticate(self.admin)

        self.school = make_school()
        self.member = make_member(self.school, savings_balance=Decimal("250.00"))
        self.ordinary = make_share_type()
        self.charge_type = make_charge_type()


class OverdueApiTest(ApiTestCase):
    def test_report(self):
        response = self.client.get("/api/overdue/", {"as_at": "2023-04-20"})
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["as_at"], "2023-04-20")
        self.assertEqual([m["member_id"] for m in data["overdue_members"]], [self.member.pk])
        self.assertEqual(Decimal(str(data["overdue_members"][0]["overdue_savings_amount"])), Decimal("150"))
        self.assertEqual(data["schools"], [{"id": self.school.pk, "name": "Bole Primary"}])

    def test_report_readable_by_viewer(self):
        self.client.force_authenticate(self.viewer)
        response = self.client.get("/api/overdue/", {"as_at": "2023-04-20"})
        self.assertEqual(response.status_code, 200)

    def test_csv_export(self):
        response = self.client.get("/api/overdue/", {"as_at": "2023-04-20", "export": "csv"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response["Content-Type"], "text/csv")
        self.assertIn("overdue_report_2023-04-20.csv", response["Content-Disposition"])
        self.assertIn("Abebe Kebede", response.content.decode())

    def test_xlsx_export(self):
        response = self.client.get("/api/overdue/", {"as_at": "2023-04-20", "export": "xlsx"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response["Content-Type"],
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )

    def test_pdf_export(self):
        response = self.client.get("/api/overdue/", {"as_at": "2023-04-20", "export": "pdf"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response["Content-Type"], "application/pdf")
        self.assertTrue(response.content.startswith(b"%PDF"))
        self.assertIn(b"/Count 1", response.content)

    def test_pdf_export_runs_onto_a_second_page(self):
        for i in range(40):
            make_member(self.school, f"Member {i:02d}")
        response = self.client.get("/api/overdue/", {"as_at": "2023-04-20", "export": "pdf"})
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.content.startswith(b"%PDF"))
        self.assertIn(b"/Count 2", response.content)

    def test_malformed_query_string_is_rejected(self):
        for params in ({"school": "abc"}, {"as_at": "20/04/2023"}, {"export": "docx"}):
            response = self.client.get("/api/overdue/", params)
            self.assertEqual(response.status_code, 400, params)
        self.assertIn("school", self.client.get("/api/overdue/", {"school": "abc"}).json())

    def test_member_overdue_rejects_malformed_date(self):
        response = self.client.get(f"/api/overdue/members/{self.member.pk}/", {"as_at": "yesterday"})
        self.assertEqual(response.status_code, 400)

    def test_member_overdue(self):
        response = self.client.get(f"/api/overdue/members/{self.member.pk}/", {"as_at": "2023-04-20"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["contribution_periods"], 4)

    def test_member_overdue_unknown_member(self):
        response = self.client.get("/api/overdue/members/9999/")
        self.assertEqual(response.status_code, 404)


class RecordOverduePaymentApiTest(ApiTestCase):
    url = "/api/overdue/payments/"

    def payload(self, **kwargs):
        data = {
            "member": self.member.pk,
            "savings_amount": "150.00",
            "share_amounts": {str(self.ordinary.pk): "47.00"},
            "service_charge_amount": "30.00",
            "payment_date": "2023-04-20",
            "deposit_mode": "Bank",
            "transaction_reference": "FT23110",
        }
        data.update(kwargs)
        return data

    def test_records_payment(self):
        charge(self.member, self.charge_type, Decimal("30.00"), datetime.date(2023, 1, 1))
        response = self.client.post(self.url, self.payload(), format="json")

        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertTrue(data["success"])
        self.assertEqual(len(data["share_ids"]), 1)
        self.assertEqual(len(data["paid_charge_ids"]), 1)

        saving = Saving.objects.get(pk=data["saving_id"])
        self.assertEqual(saving.member_name, "Abebe Kebede")
        self.assertEqual(saving.transaction_reference, "FT23110")
        self.assertEqual(Share.objects.get(pk=data["share_ids"][0]).count, 3)

    def test_all_zero_amounts_rejected(self):
        response = self.client.post(self.url, self.payload(
            savings_amount="0", share_amounts={}, service_charge_amount="0",
        ), format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(Saving.objects.count(), 0)

    def test_negative_amount_rejected(self):
        response = self.client.post(self.url, self.payload(savings_amount="-5.00"), format="json")
        self.assertEqual(response.status_code, 400)

    def test_viewer_cannot_record(self):
        self.client.force_authenticate(self.viewer)
        response = self.client.post(self.url, self.payload(), format="json")
        self.assertEqual(response.status_code, 403)

    def test_failure_returns_generic_error(self):
        with mock.patch(
            "overdue.views.record_overdue_payment",
            side_effect=CatchUpPaymentError("Failed to record overdue payment."),
        ):
            response = self.client.post(self.url, self.payload(), format="json")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"success": False, "message": "Failed to record overdue payment."})


class ChargeApiTest(ApiTestCase):
    def test_record_payment(self):
        charge(self.member, self.charge_type, Decimal("30.00"), datetime.date(2023, 1, 1))
        response = self.client.post("/api/charges/applied/record-payment/", {
            "member": self.member.pk,
            "amount": "30.00",
            "payment_date": "2023-03-05",
            "deposit_mode": "Cash",
        }, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()["paid_charges"]), 1)

    def test_record_payment_without_pending_charges(self):
        response = self.client.post("/api/charges/applied/record-payment/", {
            "member": self.member.pk,
            "amount": "30.00",
        }, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "No pending charges found for this member.")

    def test_summary_rejects_malformed_school(self):
        response = self.client.get("/api/charges/applied/summary/", {"school": "abc"})
        self.assertEqual(response.status_code, 400)

    def test_summary_filtered_by_school(self):
        other = make_member(make_school("Kazanchis Secondary"), "Hana Girma")
        response = self.client.get("/api/charges/applied/summary/", {"school": other.school_id})
        self.assertEqual(response.status_code, 200)
        self.assertEqual([s["member_id"] for s in response.json()], [other.pk])

    def test_charge_type_in_use_not_deleted(self):
        charge(self.member, self.charge_type, Decimal("30.00"), datetime.date(2023, 1, 1))
        response = self.client.delete(f"/api/charges/types/{self.charge_type.pk}/")
        self.assertEqual(response.status_code, 400)


class DeletionGuardApiTest(ApiTestCase):
    def test_school_with_members_not_deleted(self):
        response = self.client.delete(f"/api/schools/{self.school.pk}/")
        self.assertEqual(response.status_code, 400)
        self.assertIn("Cannot delete school", response.json()["error"])

    def test_empty_school_deleted(self):
        empty = make_school("Kazanchis Secondary")
        response = self.client.delete(f"/api/schools/{empty.pk}/")
        self.assertEqual(response.status_code, 204)

    def test_share_type_with_commitments_not_deleted(self):
        commit(self.member, self.ordinary, Decimal("30.00"))
        response = self.client.delete(f"/api/share-types/{self.ordinary.pk}/")
        self.assertEqual(response.status_code, 400)


class MemberApiTest(ApiTestCase):
    def test_create_with_commitments(self):
        response = self.client.post("/api/members/", {
            "full_name": "Almaz Tesfaye",
            "school": self.school.pk,
            "join_date": "2023-02-01",
            "expected_monthly_saving": "100.00",
            "address_city": "Addis Ababa",
            "share_commitments": [
                {"share_type": self.ordinary.pk, "monthly_committed_amount": "30.00"},
            ],
        }, format="json")

        self.assertEqual(response.status_code, 201)
        member = Member.objects.get(pk=response.json()["id"])
        self.assertEqual(member.share_commitments.get().monthly_committed_amount, Decimal("30.00"))
        self.assertEqual(response.json()["address"]["city"], "Addis Ababa")

    def test_duplicate_commitments_rejected(self):
        response = self.client.post("/api/members/", {
            "full_name": "Almaz Tesfaye",
            "school": self.school.pk,
            "share_commitments": [
                {"share_type": self.ordinary.pk, "monthly_committed_amount": "30.00"},
                {"share_type": self.ordinary.pk, "monthly_committed_amount": "10.00"},
            ],
        }, format="json")
        self.assertEqual(response.status_code, 400)
