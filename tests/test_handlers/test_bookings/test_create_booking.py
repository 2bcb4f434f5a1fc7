import importlib
import json
import os
import unittest
from unittest.mock import MagicMock, patch

from common.utils.custom_exceptions import (
    BookingConflict,
    InvalidDates,
    NotFoundException,
    TransactionContended,
)


class CreateBookingTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.env = patch.dict(os.environ, {"TABLE_NAME": "test-table"}, clear=False)
        cls.env.start()
        cls.resource = patch("handlers.bookings.create_booking.resource")
        mock_res = cls.resource.start()
        mock_res.return_value.Table.return_value = MagicMock()
        import handlers.bookings.create_booking as mod
        cls.mod = importlib.reload(mod)

    @classmethod
    def tearDownClass(cls):
        cls.resource.stop()
        cls.env.stop()

    def setUp(self):
        self.p_send = patch(
            "handlers.bookings.create_booking.send_custom_response",
            side_effect=lambda status_code, message=None, data=None: {
                "statusCode": status_code,
                "body": json.dumps({"message": message}),
            },
        )
        self.p_create = patch.object(self.mod.booking_service, "create_booking")
        self.mock_send = self.p_send.start()
        self.mock_create = self.p_create.start()

    def tearDown(self):
        self.p_send.stop()
        self.p_create.stop()

    def _event(self, body=None, user_id="u1"):
        if body is None:
            body = {
                "guestName": "Ada Lovelace",
                "guestEmail": "ada@example.com",
                "guestPhone": "123",
                "roomId": "r1",
                "checkInDate": "2030-01-10",
                "checkOutDate": "2030-01-12",
                "adults": 2,
            }
        return {
            "body": json.dumps(body),
            "requestContext": {"authorizer": {"user_id": user_id} if user_id else {}},
        }

    def test_missing_body_returns_400(self):
        resp = self.mod.create_booking({"requestContext": {"authorizer": {"user_id": "u1"}}}, None)
        self.assertEqual(400, resp["statusCode"])
        self.mock_create.assert_not_called()

    def test_validation_error_returns_400(self):
        resp = self.mod.create_booking(self._event(body={"guestName": "Ada"}), None)
        self.assertEqual(400, resp["statusCode"])
        self.mock_create.assert_not_called()

    def test_missing_user_in_authorizer_returns_401(self):
        resp = self.mod.create_booking(self._event(user_id=None), None)
        self.assertEqual(401, resp["statusCode"])

    def test_invalid_dates_returns_400(self):
        self.mock_create.side_effect = InvalidDates("Check-in date cannot be in the past")
        resp = self.mod.create_booking(self._event(), None)
        self.assertEqual(400, resp["statusCode"])
        self.assertIn("past", json.loads(resp["body"])["message"])

    def test_unknown_room_returns_404(self):
        self.mock_create.side_effect = NotFoundException("room", "r1", 404)
        resp = self.mod.create_booking(self._event(), None)
        self.assertEqual(404, resp["statusCode"])

    def test_conflict_returns_409(self):
        self.mock_create.side_effect = BookingConflict("Room is not available for the selected dates")
        resp = self.mod.create_booking(self._event(), None)
        self.assertEqual(409, resp["statusCode"])

    def test_contended_room_returns_409(self):
        self.mock_create.side_effect = TransactionContended("please retry")
        resp = self.mod.create_booking(self._event(), None)
        self.assertEqual(409, resp["statusCode"])

    def test_generic_error_returns_500(self):
        self.mock_create.side_effect = RuntimeError("boom")
        resp = self.mod.create_booking(self._event(), None)
        self.assertEqual(500, resp["statusCode"])

    def test_success_returns_201(self):
        resp = self.mod.create_booking(self._event(), None)
        self.assertEqual(201, resp["statusCode"])
        self.mock_create.assert_called_once()
        req = self.mock_create.call_args.args[0]
        self.assertEqual(req.room_id, "r1")
        self.assertEqual(req.adults, 2)


if __name__ == "__main__":
    unittest.main()
