import unittest
from rest_framework import status
from apps.api.utils import error_response


class ErrorResponseTests(unittest.TestCase):
    def test_default_status_mapping_and_details(self):
        resp = error_response("NOT_FOUND", "No products found", {"value": "xyz"})
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(resp.data["success"])
        self.assertEqual(resp.data["code"], "NOT_FOUND")
        self.assertEqual(resp.data["details"], {"value": "xyz"})

    def test_invalid_token_defaults_to_bad_request(self):
        resp = error_response("invalid_token", "Token Invalid, Please Login Again")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data["code"], "INVALID_TOKEN")

    def test_custom_status_override(self):
        resp = error_response("UNKNOWN", "oops", http_status=status.HTTP_202_ACCEPTED)
        self.assertEqual(resp.status_code, status.HTTP_202_ACCEPTED)
        self.assertEqual(resp.data["message"], "oops")
        self.assertNotIn("details", resp.data)

    def test_blank_message_is_rejected(self):
        with self.assertRaises(ValueError):
            error_response("NOT_FOUND", "   ")
