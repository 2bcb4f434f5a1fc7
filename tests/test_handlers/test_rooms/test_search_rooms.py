import importlib
import json
import os
import unittest
from datetime import date
from unittest.mock import MagicMock, patch

from common.models.rooms import Room, RoomType


class SearchRoomsTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.env = patch.dict(os.environ, {"TABLE_NAME": "test-table"}, clear=False)
        cls.env.start()
        cls.resource = patch("handlers.rooms.search_rooms.resource")
        mock_res = cls.resource.start()
        mock_res.return_value.Table.return_value = MagicMock()
        import handlers.rooms.search_rooms as mod
        cls.mod = importlib.reload(mod)

    @classmethod
    def tearDownClass(cls):
        cls.resource.stop()
        cls.env.stop()

    def setUp(self):
        self.p_search = patch.object(self.mod.room_service, "search_available_rooms")
        self.mock_search = self.p_search.start()

    def tearDown(self):
        self.p_search.stop()

    def _event(self, params, user_id="u1"):
        return {
            "queryStringParameters": params,
            "requestContext": {"authorizer": {"user_id": user_id} if user_id else {}},
        }

    def test_search_returns_rooms(self):
        room_type = RoomType(room_type_id="t1", name="Standard Room", price=100, capacity=2)
        self.mock_search.return_value = [
            Room(room_id="r1", room_number="101", room_type_id="t1", room_type=room_type)
        ]

        resp = self.mod.search_rooms(
            self._event({"checkIn": "2030-01-10", "checkOut": "2030-01-12", "adults": "2", "children": "1"}),
            None,
        )

        self.assertEqual(200, resp["statusCode"])
        body = json.loads(resp["body"])
        self.assertEqual(body[0]["roomNumber"], "101")
        self.assertEqual(body[0]["roomType"]["capacity"], 2)
        self.mock_search.assert_called_once_with(
            check_in=date(2030, 1, 10),
            check_out=date(2030, 1, 12),
            guests=3,
            room_type_id=None,
        )

    def test_no_guest_counts_skips_capacity(self):
        self.mock_search.return_value = []
        resp = self.mod.search_rooms(
            self._event({"checkIn": "2030-01-10", "checkOut": "2030-01-12"}), None
        )
        self.assertEqual(200, resp["statusCode"])
        self.assertEqual(json.loads(resp["body"]), [])
        self.assertIsNone(self.mock_search.call_args.kwargs["guests"])

    def test_missing_dates_returns_400(self):
        resp = self.mod.search_rooms(self._event({"checkIn": "2030-01-10"}), None)
        self.assertEqual(400, resp["statusCode"])
        self.mock_search.assert_not_called()

    def test_bad_date_returns_400(self):
        resp = self.mod.search_rooms(
            self._event({"checkIn": "tomorrow", "checkOut": "2030-01-12"}), None
        )
        self.assertEqual(400, resp["statusCode"])

    def test_unauthenticated_returns_401(self):
        resp = self.mod.search_rooms(
            self._event({"checkIn": "2030-01-10", "checkOut": "2030-01-12"}, user_id=None), None
        )
        self.assertEqual(401, resp["statusCode"])


if __name__ == "__main__":
    unittest.main()
