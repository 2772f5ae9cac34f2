import uuid

from buspass.models import Ticket
from tests.base import AppTestCase


class TestBookTicket(AppTestCase):
    def setUp(self):
        super().setUp()
        self.applicant_id = self.apply(name="A", phone="111")["id"]

    def book(self, **body):
        payload = {
            "applicantId": self.applicant_id,
            "source": "Secunderabad",
            "destination": "Warangal",
        }
        payload.update(body)
        return self.client.post("/bookTicket", json={k: v for k, v in payload.items() if v is not None})

    def ticket_count(self):
        return self.session().query(Ticket).count()

    def test_paid_booking_keeps_amount(self):
        resp = self.book(paymentType="PAID", amount="500")

        self.assertEqual(resp.status_code, 200)
        ticket = resp.json()["ticket"]
        self.assertTrue(resp.json()["success"])
        self.assertEqual(ticket["amount"], 500)
        self.assertEqual(ticket["applicantId"], self.applicant_id)
        self.assertEqual(ticket["source"], "Secunderabad")
        self.assertEqual(ticket["destination"], "Warangal")
        self.assertEqual(ticket["paymentType"], "PAID")
        uuid.UUID(ticket["_id"])
        self.assertIsNotNone(ticket["bookedAt"])

    def test_free_booking_forces_zero_amount(self):
        resp = self.book(paymentType="FREE", amount="500")

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["ticket"]["amount"], 0)

    def test_numeric_amount_is_accepted(self):
        resp = self.book(paymentType="PAID", amount=120.5)

        self.assertEqual(resp.json()["ticket"]["amount"], 120.5)

    def test_missing_destination_is_rejected_without_write(self):
        resp = self.book(destination=None, paymentType="PAID", amount="500")

        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"success": False, "msg": "Missing fields: destination"})
        self.assertEqual(self.ticket_count(), 0)

    def test_all_missing_fields_are_reported(self):
        resp = self.client.post("/bookTicket", json={})

        self.assertEqual(resp.status_code, 400)
        self.assertEqual(
            resp.json()["msg"],
            "Missing fields: applicantId, source, destination, paymentType",
        )

    def test_paid_booking_needs_numeric_amount(self):
        resp = self.book(paymentType="PAID", amount="five hundred")

        self.assertEqual(resp.status_code, 400)
        self.assertFalse(resp.json()["success"])
        self.assertEqual(self.ticket_count(), 0)

    def test_unknown_applicant_is_rejected(self):
        resp = self.book(applicantId=str(uuid.uuid4()), paymentType="FREE")

        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"success": False, "msg": "Applicant not found"})
        self.assertEqual(self.ticket_count(), 0)

    def test_malformed_applicant_id(self):
        resp = self.book(applicantId="123", paymentType="FREE")

        self.assertEqual(resp.status_code, 400)
        self.assertIn("Invalid id format", resp.json()["error"])

    def test_paid_amount_is_recorded_unvalidated(self):
        negative = self.book(paymentType="PAID", amount=-5)
        blank = self.book(paymentType="PAID", amount="")
        absent = self.book(paymentType="PAID")

        self.assertEqual(negative.status_code, 200)
        self.assertEqual(negative.json()["ticket"]["amount"], -5)
        self.assertEqual(blank.status_code, 200)
        self.assertEqual(blank.json()["ticket"]["amount"], 0)
        self.assertEqual(absent.status_code, 200)
        self.assertEqual(absent.json()["ticket"]["amount"], 0)
        self.assertEqual(self.ticket_count(), 3)

    def test_amount_keeps_precision_and_magnitude(self):
        small = self.book(paymentType="PAID", amount="10.125")
        large = self.book(paymentType="PAID", amount="123456789.5")

        self.assertEqual(small.json()["ticket"]["amount"], 10.125)
        self.assertEqual(large.json()["ticket"]["amount"], 123456789.5)


class TestMalformedBookingBodies(AppTestCase):
    def assert_error_body(self, resp):
        self.assertEqual(resp.status_code, 400)
        body = resp.json()
        self.assertFalse(body["success"])
        self.assertTrue(body["error"].startswith("Invalid request"))
        self.assertNotIn("detail", body)

    def test_wrongly_typed_field(self):
        applicant_id = self.apply(name="A", phone="111")["id"]
        resp = self.client.post("/bookTicket", json={
            "applicantId": applicant_id,
            "source": 12,
            "destination": "Warangal",
            "paymentType": "FREE",
        })

        self.assert_error_body(resp)
        self.assertIn("source", resp.json()["error"])

    def test_non_object_body(self):
        self.assert_error_body(self.client.post("/bookTicket", json=["Secunderabad", "Warangal"]))

    def test_malformed_json(self):
        resp = self.client.post(
            "/bookTicket",
            content=b'{"applicantId": ',
            headers={"Content-Type": "application/json"},
        )

        self.assert_error_body(resp)
