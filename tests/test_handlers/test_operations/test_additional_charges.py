import importlib
import json
import os
import unittest
from unittest.mock import MagicMock, patch

from common.models.charges import AdditionalCharge, ChargeType
from common.utils.custom_exceptions import NotFoundException


class AdditionalChargeHandlerTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.env = patch.dict(os.environ, {"TABLE_NAME": "test-table"}, clear=False)
        cls.env.start()
        cls.resource = patch("handlers.charges.additional_charges.resource")
        mock_res = cls.resource.start()
        mock_res.return_value.Table.return_value = MagicMock()
        import handlers.charges.additional_charges as mod
        cls.mod = importlib.reload(mod)

    @classmethod
    def tearDownClass(cls):
        cls.resource.stop()
        cls.env.stop()

    def setUp(self):
        self.repo = MagicMock()
        self.p_repo = patch.object(self.mod.charge_service, "charge_repo", self.repo)
        self.p_repo.start()

    def tearDown(self):
        self.p_repo.stop()

    def _event(self, body=None, role="ADMIN", charge_id=None):
        event = {"requestContext": {"authorizer": {"user_id": "u1", "role": role}}}
        if body is not None:
            event["body"] = json.dumps(body)
        if charge_id:
            event["pathParameters"] = {"id": charge_id}
        return event

    def test_staff_can_list(self):
        self.repo.list_charges.return_value = [
            AdditionalCharge("c1", "Breakfast", 15, ChargeType.PER_PERSON)
        ]
        resp = self.mod.list_charges(self._event(role="STAFF"), None)
        self.assertEqual(200, resp["statusCode"])
        body = json.loads(resp["body"])
        self.assertEqual(body[0]["chargeType"], "per_person")
        self.assertTrue(body[0]["isActive"])

    def test_create_reads_back_with_request_field_names(self):
        request = {"name": "Spa Access", "price": 25.0, "chargeType": "per_stay", "isActive": True}
        created = self.mod.create_charge(self._event(request), None)
        self.assertEqual(201, created["statusCode"])

        (stored,), _ = self.repo.put_charge.call_args
        self.repo.list_charges.return_value = [stored]
        listed = self.mod.list_charges(self._event(role="STAFF"), None)

        for body in (json.loads(created["body"]), json.loads(listed["body"])[0]):
            for field, value in request.items():
                self.assertEqual(body[field], value)

    def test_unknown_charge_type_returns_400(self):
        resp = self.mod.create_charge(
            self._event({"name": "Spa", "price": 25, "chargeType": "per_hour"}), None
        )
        self.assertEqual(400, resp["statusCode"])
        self.repo.put_charge.assert_not_called()

    def test_staff_cannot_create(self):
        resp = self.mod.create_charge(
            self._event({"name": "Spa", "price": 25, "chargeType": "per_stay"}, role="STAFF"), None
        )
        self.assertEqual(403, resp["statusCode"])

    def test_update_deactivates_charge(self):
        self.repo.get_charge.return_value = AdditionalCharge("c1", "Breakfast", 15, ChargeType.PER_PERSON)
        resp = self.mod.update_charge(self._event({"isActive": False}, charge_id="c1"), None)
        self.assertEqual(200, resp["statusCode"])
        self.assertFalse(json.loads(resp["body"])["isActive"])

    def test_update_unknown_charge_returns_404(self):
        self.repo.get_charge.return_value = None
        resp = self.mod.update_charge(self._event({"price": 20}, charge_id="nope"), None)
        self.assertEqual(404, resp["statusCode"])

    def test_delete_unknown_charge_returns_404(self):
        self.repo.delete_charge.side_effect = NotFoundException("additional charge", "c9", 404)
        resp = self.mod.delete_charge(self._event(charge_id="c9"), None)
        self.assertEqual(404, resp["statusCode"])


if __name__ == "__main__":
    unittest.main()
