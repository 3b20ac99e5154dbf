import unittest

from post_summarizer.budget import (
    MAX_SUMMARY_LENGTH,
    MIN_SUMMARY_LENGTH,
    build_summary_budget,
    infer_length_preference,
    resolve_length_preference,
    sentence_range,
)


class TestResolvePreference(unittest.TestCase):
    def test_known_values_normalized(self):
        self.assertEqual(resolve_length_preference(" Concise "), "concise")
        self.assertEqual(resolve_length_preference("detailed"), "detailed")

    def test_unknown_or_missing_falls_back_to_balanced(self):
        self.assertEqual(resolve_length_preference("verbose"), "balanced")
        self.assertEqual(resolve_length_preference(None), "balanced")
        self.assertEqual(resolve_length_preference(""), "balanced")

    def test_sentence_ranges(self):
        self.assertEqual(sentence_range("concise"), (2, 4))
        self.assertEqual(sentence_range("balanced"), (3, 5))
        self.assertEqual(sentence_range("detailed"), (4, 6))
        self.assertEqual(sentence_range("bogus"), (3, 5))

    def test_infer_from_input_length(self):
        self.assertEqual(infer_length_preference(500), "detailed")
        self.assertEqual(infer_length_preference(1000), "balanced")
        self.assertEqual(infer_length_preference(2000), "concise")
        self.assertEqual(infer_length_preference(2000, "detailed"), "detailed")
        self.assertEqual(infer_length_preference(2000, "nonsense"), "balanced")


class TestBuildBudget(unittest.TestCase):
    def test_balanced_ratios(self):
        budget = build_summary_budget(1000, "balanced")
        self.assertEqual(budget.max_length, 350)
        self.assertEqual(budget.min_length, 228)  # 227.5 rounds half up
        self.assertEqual((budget.sentence_count_min, budget.sentence_count_max), (3, 5))
        self.assertEqual(budget.preference, "balanced")

    def test_short_input_hits_floor(self):
        budget = build_summary_budget(74, "concise")
        self.assertEqual(budget.min_length, 30)
        self.assertEqual(budget.max_length, 35)

    def test_long_input_hits_ceiling(self):
        budget = build_summary_budget(4000, "detailed")
        self.assertEqual(budget.max_length, MAX_SUMMARY_LENGTH)
        self.assertEqual(budget.min_length, 448)

    def test_overrides_are_clamped(self):
        budget = build_summary_budget(100, "balanced", min_length=5, max_length=1000)
        self.assertEqual(budget.max_length, 560)
        self.assertEqual(budget.min_length, 30)

    def test_min_override_above_max_is_pulled_down(self):
        budget = build_summary_budget(100, "balanced", min_length=600, max_length=100)
        self.assertEqual(budget.min_length, 90)
        self.assertEqual(budget.max_length, 100)

    def test_small_max_override_widened(self):
        budget = build_summary_budget(1000, "balanced", max_length=30)
        self.assertEqual(budget.min_length, 30)
        self.assertEqual(budget.max_length, 35)

    def test_non_numeric_override(self):
        budget = build_summary_budget(1000, "balanced", max_length="abc")
        self.assertGreaterEqual(budget.max_length, budget.min_length + 5)

    def test_invariants_hold_everywhere(self):
        for pref in ("concise", "balanced", "detailed", "unknown", None):
            for n in (0, 1, 50, 120, 400, 999, 1600, 4000, 100000):
                for lo, hi in ((None, None), (10, None), (None, 40), (500, 45), (700, 900)):
                    b = build_summary_budget(n, pref, min_length=lo, max_length=hi)
                    self.assertGreaterEqual(b.max_length, b.min_length + 5)
                    self.assertGreaterEqual(b.min_length, MIN_SUMMARY_LENGTH)
                    self.assertLessEqual(b.max_length, MAX_SUMMARY_LENGTH)


if __name__ == "__main__":
    unittest.main(verbosity=2)
