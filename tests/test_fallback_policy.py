import dataclasses
import unittest
from unittest.mock import patch

from pydantic import BaseModel, Field

from skillsphere.ai.types import CompletionError, CompletionUnavailable
from skillsphere.api import responses
from skillsphere.core.config import FALLBACK_DEGRADE, FALLBACK_FAIL, settings
from skillsphere.services.completion import run_json_completion
from skillsphere.services.outcome import Outcome

from fakes import ApiTestMixin, FakeCompletionClient


class _Answer(BaseModel):
    score: int = Field(ge=0)


class RunJsonCompletionTests(unittest.TestCase):
    def _run(self, client, response_model=_Answer, fallback=None):
        return run_json_completion(
            client,
            endpoint="career-recommend",
            system_prompt="You are a test. Respond only with valid JSON.",
            user_prompt="Score this.",
            fallback={"score": 0} if fallback is None else fallback,
            response_model=response_model,
        )

    def test_ok(self):
        outcome = self._run(FakeCompletionClient(reply={"score": 4}))
        self.assertEqual(outcome, Outcome.ok({"score": 4}))
        self.assertTrue(outcome.is_ok)

    def test_unavailable(self):
        outcome = self._run(FakeCompletionClient(error=CompletionUnavailable("no key")))
        self.assertEqual(outcome.status, "degraded")
        self.assertEqual(outcome.reason, "llm_unavailable")
        self.assertEqual(outcome.data, {"score": 0})
        self.assertFalse(outcome.is_ok)

    def test_upstream_error(self):
        outcome = self._run(FakeCompletionClient(error=CompletionError("500")))
        self.assertEqual(outcome.reason, "upstream_error")

    def test_unparseable(self):
        fallback = {"score": 0}
        outcome = self._run(FakeCompletionClient(reply="no json here"), fallback=fallback)
        self.assertEqual(outcome.reason, "unparseable_response")
        self.assertIs(outcome.data, fallback)

    def test_invalid_schema(self):
        outcome = self._run(FakeCompletionClient(reply={"score": -3}))
        self.assertEqual(outcome.reason, "invalid_schema")
        self.assertEqual(outcome.data, {"score": 0})

    def test_without_response_model_any_object_passes(self):
        outcome = self._run(FakeCompletionClient(reply={"anything": True}), response_model=None)
        self.assertEqual(outcome, Outcome.ok({"anything": True}))

    def test_default_temperature_and_messages(self):
        client = FakeCompletionClient(reply={"score": 1})
        self._run(client)
        messages, temperature = client.calls[0]
        self.assertEqual(temperature, settings.default_temperature)
        self.assertEqual([m.role for m in messages], ["system", "user"])
        self.assertEqual(messages[1].content, "Score this.")


class SettingsPolicyTests(unittest.TestCase):
    def test_model_backed_endpoints_degrade_by_default(self):
        relaxed = dataclasses.replace(settings, strict_endpoints=())
        self.assertEqual(relaxed.fallback_policy("career-recommend"), FALLBACK_DEGRADE)
        self.assertEqual(relaxed.fallback_policy("resume-analysis"), FALLBACK_DEGRADE)

    def test_unknown_endpoint_fails(self):
        self.assertEqual(settings.fallback_policy("not-an-endpoint"), FALLBACK_FAIL)

    def test_strict_endpoint_fails(self):
        strict = dataclasses.replace(settings, strict_endpoints=("generate-quiz",))
        self.assertEqual(strict.fallback_policy("generate-quiz"), FALLBACK_FAIL)
        self.assertEqual(strict.fallback_policy("learning-guide"), FALLBACK_DEGRADE)


class FallbackPolicyApiTests(ApiTestMixin, unittest.TestCase):
    def test_strict_endpoint_returns_500(self):
        self.use_error(CompletionError("upstream down"))
        strict = dataclasses.replace(settings, strict_endpoints=("career-recommend",))
        with patch.object(responses, "settings", strict):
            response = self.client.post("/career-recommend", json={"skills": "Python"})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "Failed to generate career recommendations"})
        self.assertNotIn("X-Response-Source", response.headers)

    def test_strict_endpoint_still_serves_model_answers(self):
        self.use_reply({"careers": [{"title": "ML Engineer", "matchScore": 88}]})
        strict = dataclasses.replace(settings, strict_endpoints=("career-recommend",))
        with patch.object(responses, "settings", strict):
            response = self.client.post("/career-recommend", json={"skills": "Python"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["X-Response-Source"], "model")

    def test_strict_persona_is_not_returned(self):
        self.use_error(CompletionError("upstream down"))
        strict = dataclasses.replace(settings, strict_endpoints=("generate-persona",))
        with patch.object(responses, "settings", strict):
            response = self.client.post(
                "/generate-persona",
                json={"userId": "u1", "name": "Ana", "currentRole": "Analyst"},
            )
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "Failed to generate persona"})


if __name__ == "__main__":
    unittest.main()
