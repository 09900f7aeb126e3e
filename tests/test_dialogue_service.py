import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from skillmap.ai.types import DialogueTurn  # noqa: E402
from skillmap.services.dialogue_service import resolve_turn  # noqa: E402


class ResolveTurnTests(unittest.TestCase):
    def test_new_category_is_appended(self):
        turn = DialogueTurn(next_question="Next?", category="meta-learning", justification="Learned from failure.")
        resolved = resolve_turn(turn, ["Human Skills (Durable)"])
        self.assertEqual(resolved.category.category, "Meta-Learning & Self-Awareness")
        self.assertTrue(resolved.newly_mapped)
        self.assertEqual(resolved.mapped, ["Human Skills (Durable)", "Meta-Learning & Self-Awareness"])
        self.assertEqual(resolved.justification, "Learned from failure.")
        self.assertEqual(resolved.next_question, "Next?")

    def test_already_mapped_category_is_not_repeated(self):
        mapped = ["Human Skills (Durable)"]
        resolved = resolve_turn(DialogueTurn(next_question="Next?", category="Human Skills"), mapped)
        self.assertFalse(resolved.newly_mapped)
        self.assertEqual(resolved.mapped, mapped)
        self.assertIsNot(resolved.mapped, mapped)

    def test_weak_fit_never_counts_as_mapped(self):
        resolved = resolve_turn(DialogueTurn(next_question="Next?", category="NO_MAP_WEAK_FIT"), [])
        self.assertTrue(resolved.weak_fit)
        self.assertFalse(resolved.newly_mapped)
        self.assertEqual(resolved.mapped, [])

    def test_unknown_or_missing_category(self):
        with self.assertLogs("skillmap.services.dialogue_service", level="INFO"):
            unknown = resolve_turn(DialogueTurn(next_question="Next?", category="astronomy"), [])
        self.assertIsNone(unknown.category)
        self.assertFalse(unknown.weak_fit)

        missing = resolve_turn(DialogueTurn(next_question="Next?"), ["Future Self & Directionality"])
        self.assertIsNone(missing.category)
        self.assertEqual(missing.mapped, ["Future Self & Directionality"])


if __name__ == "__main__":
    unittest.main()
