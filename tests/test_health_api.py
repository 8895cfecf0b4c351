import unittest

from skillsphere.core.errors import validation_message

from fakes import ApiTestMixin


class HealthApiTests(ApiTestMixin, unittest.TestCase):
    def test_root_banner(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.text, "SkillSphere Backend is Running!")

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "healthy"})

    def test_unknown_route_uses_error_envelope(self):
        response = self.client.get("/no-such-route")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "Not Found"})

    def test_cors_exposes_source_headers(self):
        response = self.client.get("/health", headers={"Origin": "https://app.example"})
        self.assertEqual(response.headers.get("access-control-allow-origin"), "*")
        self.assertIn("X-Response-Source", response.headers.get("access-control-expose-headers", ""))


class ValidationMessageTests(unittest.TestCase):
    def test_missing_field(self):
        errors = [{"type": "missing", "loc": ("body", "targetRole"), "msg": "Field required"}]
        self.assertEqual(validation_message(errors), "Missing required field: targetRole")

    def test_missing_body(self):
        self.assertEqual(validation_message([{"type": "missing", "loc": ("body",)}]), "Request body is required.")

    def test_invalid_value(self):
        errors = [{"type": "int_parsing", "loc": ("body", "count"), "msg": "Input should be a valid integer"}]
        self.assertEqual(validation_message(errors), "Invalid value for count: Input should be a valid integer")

    def test_no_errors(self):
        self.assertEqual(validation_message([]), "Invalid request.")


if __name__ == "__main__":
    unittest.main()
