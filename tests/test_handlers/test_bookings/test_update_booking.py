import importlib
import json
import os
import unittest
from unittest.mock import MagicMock, patch

from common.models.bookings import BookingStatus
from common.utils.custom_exceptions import InvalidTransition, NotFoundException


class UpdateBookingTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.env = patch.dict(os.environ, {"TABLE_NAME": "test-table"}, clear=False)
        cls.env.start()
        cls.resource = patch("handlers.bookings.update_booking.resource")
        mock_res = cls.resource.start()
        mock_res.return_value.Table.return_value = MagicMock()
        import handlers.bookings.update_booking as mod
        cls.mod = importlib.reload(mod)

    @classmethod
    def tearDownClass(cls):
        cls.resource.stop()
        cls.env.stop()

    def setUp(self):
        self.p_update = patch.object(self.mod.booking_service, "update_status")
        self.mock_update = self.p_update.start()
        self.mock_update.return_value = {"booking_id": "b1", "status": "cancelled"}

    def tearDown(self):
        self.p_update.stop()

    def _event(self, status="cancelled", booking_id="b1"):
        return {
            "body": json.dumps({"status": status}),
            "pathParameters": {"id": booking_id} if booking_id else None,
            "requestContext": {"authorizer": {"user_id": "u1", "role": "STAFF"}},
        }

    def test_cancel_success(self):
        resp = self.mod.update_booking(self._event(), None)
        self.assertEqual(200, resp["statusCode"])
        self.assertEqual(json.loads(resp["body"])["bookingId"], "b1")
        self.mock_update.assert_called_once_with("b1", BookingStatus.CANCELLED)

    def test_unknown_status_returns_400(self):
        resp = self.mod.update_booking(self._event(status="paid"), None)
        self.assertEqual(400, resp["statusCode"])
        self.mock_update.assert_not_called()

    def test_missing_id_returns_400(self):
        resp = self.mod.update_booking(self._event(booking_id=None), None)
        self.assertEqual(400, resp["statusCode"])

    def test_missing_booking_returns_404(self):
        self.mock_update.side_effect = NotFoundException("booking", "b1", 404)
        resp = self.mod.update_booking(self._event(), None)
        self.assertEqual(404, resp["statusCode"])
        self.assertEqual(json.loads(resp["body"]), {"error": "booking 'b1' not found"})

    def test_invalid_transition_returns_409(self):
        self.mock_update.side_effect = InvalidTransition("Cannot change booking")
        resp = self.mod.update_booking(self._event(status="completed"), None)
        self.assertEqual(409, resp["statusCode"])


if __name__ == "__main__":
    unittest.main()
