import unittest
from rest_framework import status
from apps.api.utils import error_response, status_for_code


class ErrorResponseTests(unittest.TestCase):
    def test_default_status_mapping_and_details(self):
        resp = error_response("NOT_FOUND", "missing", {"id": 1})
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"]["code"], "NOT_FOUND")
        self.assertEqual(resp.data["error"]["status"], status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"]["details"], {"id": 1})

    def test_bad_request_code(self):
        self.assertEqual(status_for_code("bad_request"), status.HTTP_400_BAD_REQUEST)
        self.assertEqual(status_for_code("whatever"), status.HTTP_400_BAD_REQUEST)

    def test_custom_status_override(self):
        resp = error_response("UNKNOWN", "oops", http_status=status.HTTP_202_ACCEPTED)
        self.assertEqual(resp.status_code, status.HTTP_202_ACCEPTED)
        self.assertEqual(resp.data["error"]["message"], "oops")

    def test_hint_is_included(self):
        resp = error_response("BAD_REQUEST", "Address not set", hint="PUT /api/users/1/")
        self.assertEqual(resp.data["error"]["hint"], "PUT /api/users/1/")
        self.assertNotIn("details", resp.data["error"])

    def test_blank_message_rejected(self):
        with self.assertRaises(ValueError):
            error_response("NOT_FOUND", "  ")
