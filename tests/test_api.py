import unittest

from fastapi.testclient import TestClient

from post_summarizer.api import create_app
from post_summarizer.service import SummaryGenerationError, SummaryService
from post_summarizer.transformer import ModelSummarizer

POST = ("Neighborhood cleanup happening this Saturday at the riverside park. "
        "Bring gloves and bags. Coffee and snacks will be provided for volunteers.")


class BrokenService(SummaryService):
    def summarize_description(self, text, options=None):
        raise SummaryGenerationError("Failed to generate summary.", details="model exploded")


def _client(service=None):
    service = service or SummaryService(model=ModelSummarizer(transformers_disabled=True))
    return TestClient(create_app(service))


class TestSummariesEndpoint(unittest.TestCase):
    def test_health(self):
        resp = _client().get("/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"status": "ok"})

    def test_fallback_summary(self):
        resp = _client().post("/summaries", json={"text": POST, "options": {"lengthPreference": "concise"}})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["summary"])
        self.assertEqual(body["model"], "extractive-fallback")
        self.assertTrue(body["fallback"])
        self.assertEqual(body["fallback_reason"], "transformer-disabled")
        self.assertEqual(body["quality"], "fast")
        self.assertEqual(body["options"]["length_preference"], "concise")
        self.assertLessEqual(len(body["summary"]), body["options"]["max_length"])

    def test_missing_text(self):
        resp = _client().post("/summaries", json={"text": "   "})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Description text is required."})

    def test_non_string_text(self):
        resp = _client().post("/summaries", json={"text": 12})
        self.assertEqual(resp.status_code, 400)

    def test_malformed_options(self):
        resp = _client().post("/summaries", json={"text": POST, "options": "fast"})
        self.assertEqual(resp.status_code, 400)

    def test_input_too_long(self):
        resp = _client().post("/summaries", json={"text": "a" * 4001})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("4000", resp.json()["error"])

    def test_generation_failure(self):
        broken = BrokenService(model=ModelSummarizer(transformers_disabled=True))
        resp = _client(broken).post("/summaries", json={"text": POST})
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "Failed to generate summary.", "details": "model exploded"})

    def test_error_bodies_documented_in_openapi(self):
        responses = _client().get("/openapi.json").json()["paths"]["/summaries"]["post"]["responses"]
        for status in ("400", "500"):
            schema = responses[status]["content"]["application/json"]["schema"]
            self.assertEqual(schema["$ref"], "#/components/schemas/ErrorOut")


if __name__ == "__main__":
    unittest.main(verbosity=2)
