import json
import unittest
from datetime import date

from common.schemas.bookings import BookingRequest, RoomSearchQuery
from common.utils.custom_exceptions import InvalidRequest
from common.utils.request_parser import parse_body, parse_query, path_param


class TestRequestParser(unittest.TestCase):
    def _booking_body(self, **overrides):
        body = {
            "guestName": "Ada Lovelace",
            "guestEmail": "ada@example.com",
            "guestPhone": "+44 20 0000 0000",
            "roomId": "r1",
            "checkInDate": "2030-01-10",
            "checkOutDate": "2030-01-12T00:00:00Z",
            "adults": 2,
        }
        body.update(overrides)
        return {"body": json.dumps(body)}

    def test_missing_body(self):
        with self.assertRaises(InvalidRequest) as ctx:
            parse_body({}, BookingRequest)
        self.assertEqual(str(ctx.exception), "Request body is required")

    def test_booking_body_parses_camel_case_and_dates(self):
        req = parse_body(self._booking_body(), BookingRequest)
        self.assertEqual(req.check_in_date, date(2030, 1, 10))
        self.assertEqual(req.check_out_date, date(2030, 1, 12))
        self.assertEqual(req.children, 0)
        self.assertEqual(req.additional_charges, [])

    def test_adults_must_be_an_integer_of_at_least_one(self):
        for adults in (0, "2", 1.5):
            with self.assertRaises(InvalidRequest):
                parse_body(self._booking_body(adults=adults), BookingRequest)

    def test_missing_guest_field_is_rejected(self):
        event = self._booking_body()
        body = json.loads(event["body"])
        del body["guestPhone"]
        with self.assertRaises(InvalidRequest) as ctx:
            parse_body({"body": json.dumps(body)}, BookingRequest)
        self.assertIn("guestPhone", str(ctx.exception))

    def test_search_query_guests(self):
        query = parse_query(
            {"queryStringParameters": {"checkIn": "2030-01-10", "checkOut": "2030-01-11", "adults": "2"}},
            RoomSearchQuery,
        )
        self.assertEqual(query.guests, 2)

        query = parse_query(
            {"queryStringParameters": {"checkIn": "2030-01-10", "checkOut": "2030-01-11"}},
            RoomSearchQuery,
        )
        self.assertIsNone(query.guests)

    def test_search_query_requires_ordered_dates(self):
        with self.assertRaises(InvalidRequest):
            parse_query(
                {"queryStringParameters": {"checkIn": "2030-01-11", "checkOut": "2030-01-11"}},
                RoomSearchQuery,
            )
        with self.assertRaises(InvalidRequest):
            parse_query({"queryStringParameters": None}, RoomSearchQuery)

    def test_path_param(self):
        self.assertEqual(path_param({"pathParameters": {"id": "b1"}}, "id"), "b1")
        with self.assertRaises(InvalidRequest):
            path_param({"pathParameters": None}, "id")


if __name__ == "__main__":
    unittest.main()
