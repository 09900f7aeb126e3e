import dataclasses
import os
import sys
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

# Keep API tests independent of the per-route request budget.
os.environ.setdefault("RATE_LIMIT_ENABLED", "0")

from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from skillmap.ai.types import ClassificationResult, ClassifierError, DialogueTurn  # noqa: E402
from skillmap.api.deps import get_classifier, get_dialogue_mapper  # noqa: E402
from skillmap.core.config import settings  # noqa: E402
from skillmap.main import app  # noqa: E402
from skillmap.taxonomy import SkillMatcher, Taxonomy  # noqa: E402


class FakeClassifier:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def classify(self, text):
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.result


class FakeMapper:
    def __init__(self, turn=None, error=None):
        self.turn = turn
        self.error = error
        self.calls = []

    async def map_answer(self, question, answer, history=(), mapped=()):
        self.calls.append((question, answer, list(history), list(mapped)))
        if self.error is not None:
            raise self.error
        return self.turn


class SkillsApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def _use_classifier(self, classifier):
        app.dependency_overrides[get_classifier] = lambda: classifier

    def test_health(self):
        response = self.client.get("/v1/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "healthy", "categories": 8, "skills": 68})

    def test_match_contract_shape(self):
        response = self.client.post("/v1/skills/match", json={"text": "coding"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {"skill": "Technical Skills", "category": "Maker & Builder", "confidence": 1.0, "tier": "high"},
        )

    def test_match_empty_text(self):
        body = self.client.post("/v1/skills/match", json={"text": ""}).json()
        self.assertEqual(body["confidence"], 0.0)
        self.assertEqual(body["tier"], "low")

    def test_match_batch_dedupes(self):
        response = self.client.post(
            "/v1/skills/match-batch",
            json={"texts": ["teamwork", "Collaboration", "coding"]},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual([item["skill"] for item in body], ["Collaboration", "Technical Skills"])

    def test_normalize(self):
        response = self.client.post("/v1/skills/normalize", json={"texts": ["teamwork", "qqq zzz"]})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"skills": ["Collaboration"]})

    def test_batch_size_is_capped(self):
        texts = ["coding"] * (settings.max_batch_size + 1)
        response = self.client.post("/v1/skills/normalize", json={"texts": texts})
        self.assertEqual(response.status_code, 422)

    def test_suggest(self):
        body = self.client.get("/v1/skills/suggest", params={"q": "teamwork"}).json()
        self.assertEqual(body["skill"], "Collaboration")

        response = self.client.get("/v1/skills/suggest", params={"q": "co"})
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json())

    def test_list_and_search_skills(self):
        self.assertEqual(len(self.client.get("/v1/skills").json()), 68)

        body = self.client.get("/v1/skills", params={"q": "skill", "limit": 2}).json()
        self.assertEqual(body, ["Research Skills", "Technical Skills"])

    def test_categories_and_lookup(self):
        categories = self.client.get("/v1/skills/categories").json()
        self.assertEqual(len(categories), 8)
        self.assertEqual(categories["Future Self"][0], "Goal Setting")

        response = self.client.get("/v1/skills/categories/Civic Impact")
        self.assertEqual(response.status_code, 200)
        self.assertIn("Volunteer Work", response.json())

        self.assertEqual(self.client.get("/v1/skills/categories/Astronomy").status_code, 404)

        self.assertEqual(
            self.client.get("/v1/skills/lookup/Empathy").json(),
            {"skill": "Empathy", "category": "Human Skills"},
        )
        self.assertIsNone(self.client.get("/v1/skills/lookup/Juggling").json()["category"])

    def test_classify(self):
        classifier = FakeClassifier(
            ClassificationResult(
                skills=["teamwork", "coding", "qqq zzz"],
                category="problem-solving",
                justification="Fixed the robot with the team.",
            )
        )
        self._use_classifier(classifier)

        response = self.client.post("/v1/skills/classify", json={"text": "We fixed the robot", "source": "voice"})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(classifier.calls, ["We fixed the robot"])
        self.assertEqual(body["raw_skills"], ["teamwork", "coding", "qqq zzz"])
        self.assertEqual(body["skills"], ["Collaboration", "Technical Skills"])
        self.assertEqual(body["category"], "Problem-Solving & Systems Thinking")
        self.assertFalse(body["weak_fit"])
        self.assertEqual({record["source"] for record in body["records"]}, {"voice"})

    def test_classify_failures(self):
        self._use_classifier(FakeClassifier(error=ClassifierError("bad", code="invalid_response")))
        response = self.client.post("/v1/skills/classify", json={"text": "something"})
        self.assertEqual(response.status_code, 502)

        self._use_classifier(FakeClassifier(error=ClassifierError("no key", code="not_configured")))
        response = self.client.post("/v1/skills/classify", json={"text": "something"})
        self.assertEqual(response.status_code, 503)

        self.assertEqual(self.client.post("/v1/skills/classify", json={"text": "   "}).status_code, 422)

    def test_api_key_is_enforced_when_configured(self):
        with patch("skillmap.core.security.settings", dataclasses.replace(settings, api_key="secret")):
            denied = self.client.post("/v1/skills/match", json={"text": "coding"})
            allowed = self.client.post(
                "/v1/skills/match",
                json={"text": "coding"},
                headers={"X-API-Key": "secret"},
            )
            health = self.client.get("/v1/health")
        self.assertEqual(denied.status_code, 401)
        self.assertEqual(allowed.status_code, 200)
        self.assertEqual(health.status_code, 200)


class CategoriesApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_list_categories(self):
        body = self.client.get("/v1/categories").json()
        self.assertEqual(body["initial_prompt"], "Tell me what you are typically doing when you lose track of time")
        self.assertEqual(len(body["categories"]), 8)
        self.assertEqual(body["categories"][0]["icon"], "people")

    def test_resolve_category(self):
        body = self.client.post("/v1/categories/resolve", json={"name": "civic"}).json()
        self.assertEqual(body["category"]["category"], "Civic & Community Impact")
        self.assertFalse(body["weak_fit"])

        body = self.client.post("/v1/categories/resolve", json={"name": "NO_MAP_WEAK_FIT"}).json()
        self.assertTrue(body["weak_fit"])

        body = self.client.post("/v1/categories/resolve", json={"name": "astronomy"}).json()
        self.assertIsNone(body["category"])

    def test_progress(self):
        body = self.client.post(
            "/v1/categories/progress",
            json={"mapped": ["Human Skills (Durable)", "Civic & Community Impact", "Human Skills (Durable)"]},
        ).json()
        self.assertEqual(body["mapped_count"], 2)
        self.assertEqual(body["total"], 8)
        self.assertEqual(body["completion_percentage"], 25)
        self.assertEqual(len(body["unmapped"]), 6)
        self.assertFalse(body["complete"])

    def test_map_answer(self):
        mapper = FakeMapper(
            DialogueTurn(
                next_question="Who did you volunteer with?",
                category="civic & community",
                justification="Helping at the food bank.",
            )
        )
        app.dependency_overrides[get_dialogue_mapper] = lambda: mapper

        response = self.client.post(
            "/v1/categories/map-answer",
            json={
                "question": "What do you do on weekends?",
                "answer": "I help at the food bank",
                "history": [
                    {"question": "Q1", "answer": "I fix bikes", "mapped_category": "Maker & Builder Skills"}
                ],
                "mapped": ["Maker & Builder Skills"],
            },
        )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["category"]["category"], "Civic & Community Impact")
        self.assertTrue(body["newly_mapped"])
        self.assertEqual(body["mapped"], ["Maker & Builder Skills", "Civic & Community Impact"])
        self.assertEqual(body["completion_percentage"], 25)
        self.assertEqual(body["next_question"], "Who did you volunteer with?")
        self.assertEqual(mapper.calls[0][3], ["Maker & Builder Skills"])
        self.assertEqual(mapper.calls[0][2][0].mapped_category, "Maker & Builder Skills")

    def test_map_answer_weak_fit_and_unknown(self):
        for category, weak_fit in (("NO_MAP_WEAK_FIT", True), ("astronomy", False)):
            with self.subTest(category=category):
                mapper = FakeMapper(DialogueTurn(next_question="Tell me more?", category=category))
                app.dependency_overrides[get_dialogue_mapper] = lambda mapper=mapper: mapper
                body = self.client.post(
                    "/v1/categories/map-answer",
                    json={"question": "Q?", "answer": "not sure", "mapped": ["Human Skills (Durable)"]},
                ).json()
                self.assertEqual(body["weak_fit"], weak_fit)
                self.assertFalse(body["newly_mapped"])
                self.assertEqual(body["mapped"], ["Human Skills (Durable)"])
                self.assertEqual(body["completion_percentage"], 13)
        self.assertIsNone(body["category"])

    def test_map_answer_failures(self):
        failing = FakeMapper(error=ClassifierError("bad", code="invalid_response"))
        app.dependency_overrides[get_dialogue_mapper] = lambda: failing
        response = self.client.post("/v1/categories/map-answer", json={"question": "Q?", "answer": "A"})
        self.assertEqual(response.status_code, 502)

        response = self.client.post("/v1/categories/map-answer", json={"question": "Q?", "answer": "  "})
        self.assertEqual(response.status_code, 422)


class SkillRecordsApiTests(unittest.TestCase):
    RECORDS = [
        {"skill": "Empathy", "category": "Human Skills", "date_identified": "2026-01-01T00:00:00+00:00", "source": "voice"},
        {"skill": "Music", "category": "Creative Expression", "date_identified": "2026-02-01T00:00:00+00:00", "source": "text"},
    ]

    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def test_stats(self):
        response = self.client.post("/v1/skills/stats", json={"records": self.RECORDS})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["total_skills"], 2)
        self.assertEqual(body["skills_by_source"], {"voice": 1, "text": 1})
        self.assertEqual([item["skill"] for item in body["recent_skills"]], ["Music", "Empathy"])

    def test_status(self):
        body = self.client.post("/v1/skills/status", json={"records": self.RECORDS}).json()
        self.assertEqual(len(body), 8)
        human = body[0]
        self.assertEqual(human["category"], "Human Skills")
        empathy = next(item for item in human["skills"] if item["name"] == "Empathy")
        self.assertEqual(empathy, {"name": "Empathy", "identified": True, "date_identified": "2026-01-01T00:00:00+00:00"})
        self.assertFalse(human["skills"][0]["identified"])

    def test_invalid_source_is_rejected(self):
        record = dict(self.RECORDS[0], source="telepathy")
        self.assertEqual(self.client.post("/v1/skills/stats", json={"records": [record]}).status_code, 422)


class ServedTaxonomyTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def test_classifier_is_prompted_with_the_served_taxonomy(self):
        previous = getattr(app.state, "matcher", None)
        self.addCleanup(setattr, app.state, "matcher", previous)
        self.addCleanup(setattr, app.state, "classifier", None)
        app.state.matcher = SkillMatcher(Taxonomy(categories={"Sports": ["Running", "Swimming"]}))
        app.state.classifier = None

        message = SimpleNamespace(content='{"skills": ["running"], "category": "NO_MAP_WEAK_FIT"}')
        create = AsyncMock(return_value=SimpleNamespace(choices=[SimpleNamespace(message=message)]))
        sdk_client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))

        with patch.dict(os.environ, {"AI_PROVIDER": "openai", "OPENAI_API_KEY": "sk-test"}), patch(
            "skillmap.ai.providers.openai_provider.AsyncOpenAI", return_value=sdk_client
        ):
            response = self.client.post("/v1/skills/classify", json={"text": "I run every morning"})

        self.assertEqual(response.status_code, 200)
        system = create.await_args.kwargs["messages"][0]["content"]
        self.assertIn("Sports: Running, Swimming", system)
        self.assertNotIn("Communication", system)
        body = response.json()
        self.assertEqual(body["skills"], ["Running"])
        self.assertEqual(body["matches"][0]["category"], "Sports")
        self.assertTrue(body["weak_fit"])


if __name__ == "__main__":
    unittest.main()
