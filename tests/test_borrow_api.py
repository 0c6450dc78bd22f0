import unittest

from fabtrack.models.audit_log import AuditLog

from tests.base import FabTrackTestCase


class BorrowApiTests(FabTrackTestCase):
    def setUp(self):
        super().setUp()
        self.admin = self.make_admin()
        self.student = self.make_user("Ama Mensah")
        self.other = self.make_user("Kofi Boateng")
        self.equipment = self.make_equipment("Oscilloscope")

    def _request(self, user=None, quantity=2):
        return self.client.post(
            "/borrow/request",
            json={
                "items": [{"equipmentID": self.equipment.id, "quantity": quantity}],
                "collectionDateTime": "2026-01-01T10:00:00Z",
            },
            headers=self.auth_headers(user or self.student),
        )

    def test_full_lifecycle(self):
        res = self._request()
        self.assertEqual(res.status_code, 201)
        created = res.get_json()["borrowRequest"]
        self.assertEqual(created["Status"], "Pending")
        self.assertEqual(created["CollectionDateTime"], "2026-01-01T10:00:00.000Z")
        self.assertEqual(len(created["items"]), 1)
        self.assertEqual(created["items"][0]["Quantity"], 2)
        request_id = created["RequestID"]
        item_id = created["items"][0]["BorrowedItemID"]

        admin = self.auth_headers(self.admin)
        res = self.client.put(
            f"/borrow/approve/{request_id}",
            json={
                "returnDate": "2026-02-01T00:00:00Z",
                "items": [{"borrowedItemID": item_id, "allow": True, "serialNumber": "SN1"}],
            },
            headers=admin,
        )
        self.assertEqual(res.status_code, 200)
        approved = res.get_json()["approvedRequest"]
        self.assertEqual(approved["Status"], "Approved")
        self.assertEqual(approved["ReturnDate"], "2026-02-01T00:00:00.000Z")
        self.assertEqual(approved["items"][0]["SerialNumber"], "SN1")

        res = self.client.put(f"/borrow/return/{request_id}", headers=admin)
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.get_json()["returnedRequest"]["Status"], "Returned")

        res = self.client.put(f"/borrow/return/{request_id}", headers=admin)
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.get_json()["message"], "Invalid return request")

        logs = self.client.get("/borrow/logs", headers=admin).get_json()["logs"]
        self.assertEqual([x["Action"] for x in logs], ["Return", "Approve", "Borrow"])
        self.assertEqual(logs[-1]["User"]["Name"], "Ama Mensah")

    def test_admin_cannot_submit(self):
        res = self._request(user=self.admin)
        self.assertEqual(res.status_code, 403)
        self.assertEqual(res.get_json()["message"], "Requires role: Student")

    def test_non_object_bodies_are_rejected(self):
        student = self.auth_headers(self.student)
        admin = self.auth_headers(self.admin)
        request_id = self._request().get_json()["borrowRequest"]["RequestID"]

        for body in ([], [1, 2], "x", 3):
            res = self.client.post("/borrow/request", json=body, headers=student)
            self.assertEqual(res.status_code, 400, body)
            self.assertEqual(res.get_json()["message"], "Request body must be a JSON object")

            res = self.client.put(f"/borrow/approve/{request_id}", json=body, headers=admin)
            self.assertEqual(res.status_code, 400, body)

        self.assertEqual(AuditLog.query.filter_by(action="Approve").count(), 0)

    def test_submit_validation(self):
        headers = self.auth_headers(self.student)
        cases = [
            {"items": [], "collectionDateTime": "2026-01-01T10:00:00Z"},
            {"items": [{"equipmentID": self.equipment.id, "quantity": 1}]},
            {"items": [{"equipmentID": self.equipment.id, "quantity": 0}], "collectionDateTime": "2026-01-01"},
            {"items": [{"equipmentID": 999, "quantity": 1}], "collectionDateTime": "2026-01-01"},
            {"items": [{"quantity": 1}], "collectionDateTime": "2026-01-01"},
            {"items": [{"equipmentID": self.equipment.id, "quantity": 1}], "collectionDateTime": "someday"},
        ]
        for body in cases:
            res = self.client.post("/borrow/request", json=body, headers=headers)
            self.assertEqual(res.status_code, 400, body)
        self.assertEqual(AuditLog.query.count(), 0)

    def test_student_cannot_approve_return_or_read_logs(self):
        request_id = self._request().get_json()["borrowRequest"]["RequestID"]
        headers = self.auth_headers(self.student)

        res = self.client.put(
            f"/borrow/approve/{request_id}",
            json={"returnDate": "2026-02-01", "items": [{"borrowedItemID": 1, "allow": True}]},
            headers=headers,
        )
        self.assertEqual(res.status_code, 403)
        self.assertEqual(self.client.put(f"/borrow/return/{request_id}", headers=headers).status_code, 403)
        self.assertEqual(self.client.get("/borrow/logs", headers=headers).status_code, 403)
        self.assertEqual(self.client.post("/borrow/send-reminder", headers=headers).status_code, 403)

    def test_approve_unknown_request_is_404(self):
        res = self.client.put(
            "/borrow/approve/777",
            json={"returnDate": "2026-02-01", "items": [{"borrowedItemID": 1, "allow": True}]},
            headers=self.auth_headers(self.admin),
        )
        self.assertEqual(res.status_code, 404)

    def test_approve_requires_boolean_allow(self):
        created = self._request().get_json()["borrowRequest"]
        res = self.client.put(
            f"/borrow/approve/{created['RequestID']}",
            json={
                "returnDate": "2026-02-01",
                "items": [{"borrowedItemID": created["items"][0]["BorrowedItemID"], "allow": "yes"}],
            },
            headers=self.auth_headers(self.admin),
        )
        self.assertEqual(res.status_code, 400)

    def test_role_scoped_listing(self):
        self._request()
        self._request(user=self.other)

        mine = self.client.get("/borrow/all-requests", headers=self.auth_headers(self.student)).get_json()["requests"]
        self.assertEqual({r["UserID"] for r in mine}, {self.student.id})
        self.assertNotIn("password_hash", mine[0]["User"])

        everyone = self.client.get("/borrow/all-requests", headers=self.auth_headers(self.admin)).get_json()["requests"]
        self.assertEqual({r["UserID"] for r in everyone}, {self.student.id, self.other.id})
        self.assertGreater(everyone[0]["RequestID"], everyone[1]["RequestID"])

        pending = self.client.get("/borrow/pending-requests", headers=self.auth_headers(self.other)).get_json()["requests"]
        self.assertEqual(len(pending), 1)
        self.assertEqual(pending[0]["UserID"], self.other.id)

    def test_items_endpoint_access(self):
        request_id = self._request().get_json()["borrowRequest"]["RequestID"]

        res = self.client.get(f"/borrow/{request_id}/items", headers=self.auth_headers(self.student))
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.get_json()["items"][0]["Equipment"]["Name"], "Oscilloscope")

        res = self.client.get(f"/borrow/{request_id}/items", headers=self.auth_headers(self.other))
        self.assertEqual(res.status_code, 403)

        res = self.client.get("/borrow/9999/items", headers=self.auth_headers(self.admin))
        self.assertEqual(res.status_code, 404)

    def test_send_reminder_endpoint(self):
        res = self.client.post("/borrow/send-reminder", headers=self.auth_headers(self.admin))
        self.assertEqual(res.status_code, 200)
        body = res.get_json()
        self.assertEqual(body["message"], "No due requests found to remind")
        self.assertEqual(body["remindersSent"], 0)
        self.assertTrue(body["cutoffDate"].endswith("23:59:59.999Z"))


if __name__ == "__main__":
    unittest.main()
