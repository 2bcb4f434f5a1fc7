import importlib
import json
import os
import unittest
from unittest.mock import MagicMock, patch

from common.models.rooms import Room, RoomStatus, RoomType
from common.utils.custom_exceptions import NotFoundException


class UpdateRoomTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.env = patch.dict(os.environ, {"TABLE_NAME": "test-table"}, clear=False)
        cls.env.start()
        cls.resource = patch("handlers.rooms.update_room.resource")
        mock_res = cls.resource.start()
        mock_res.return_value.Table.return_value = MagicMock()
        import handlers.rooms.update_room as mod
        cls.mod = importlib.reload(mod)

    @classmethod
    def tearDownClass(cls):
        cls.resource.stop()
        cls.env.stop()

    def setUp(self):
        self.repo = MagicMock()
        self.p_repo = patch.object(self.mod.room_service, "room_repo", self.repo)
        self.p_repo.start()
        self.repo.get_room_type.return_value = RoomType("t1", "Standard Room", 100, 2)

    def tearDown(self):
        self.p_repo.stop()

    def _event(self, status, room_id="r1"):
        return {
            "body": json.dumps({"status": status}),
            "pathParameters": {"id": room_id},
            "requestContext": {"authorizer": {"user_id": "u1", "role": "STAFF"}},
        }

    def test_status_is_set_and_room_returned(self):
        self.repo.get_room_by_id.return_value = Room(
            "r1", "101", "t1", status=RoomStatus.OCCUPIED
        )

        resp = self.mod.update_room(self._event("Occupied"), None)

        self.assertEqual(200, resp["statusCode"])
        self.repo.update_room_status.assert_called_once_with("r1", RoomStatus.OCCUPIED)
        self.assertEqual(json.loads(resp["body"])["status"], "occupied")

    def test_unknown_status_returns_400(self):
        resp = self.mod.update_room(self._event("flooded"), None)
        self.assertEqual(400, resp["statusCode"])
        self.repo.update_room_status.assert_not_called()

    def test_missing_room_returns_404(self):
        self.repo.update_room_status.side_effect = NotFoundException("room", "r9", 404)
        resp = self.mod.update_room(self._event("available", room_id="r9"), None)
        self.assertEqual(404, resp["statusCode"])


if __name__ == "__main__":
    unittest.main()
