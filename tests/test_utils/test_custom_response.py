import json
import unittest
from datetime import date

from common.models.rooms import Room, RoomStatus
from common.utils.custom_response import send_custom_response


class TestCustomResponse(unittest.TestCase):
    def test_error_body_carries_message(self):
        resp = send_custom_response(409, "Room is not available for the selected dates")
        self.assertEqual(resp["statusCode"], 409)
        self.assertEqual(
            json.loads(resp["body"]), {"error": "Room is not available for the selected dates"}
        )

    def test_dataclass_payload_is_camel_cased(self):
        room = Room(room_id="r1", room_number="101", room_type_id="t1", floor=1)
        resp = send_custom_response(200, data=room)
        body = json.loads(resp["body"])
        self.assertEqual(body["roomNumber"], "101")
        self.assertEqual(body["status"], RoomStatus.AVAILABLE.value)
        self.assertIsNone(body["roomType"])

    def test_dates_serialise_as_iso_strings(self):
        resp = send_custom_response(200, data={"start_date": date(2026, 1, 2)})
        self.assertEqual(json.loads(resp["body"]), {"startDate": "2026-01-02"})

    def test_message_only_success(self):
        resp = send_custom_response(200, "Deleted")
        self.assertEqual(json.loads(resp["body"]), {"message": "Deleted"})
        self.assertEqual(resp["headers"]["Content-Type"], "application/json")


if __name__ == "__main__":
    unittest.main()
