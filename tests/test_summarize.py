import unittest

from post_summarizer.budget import build_summary_budget
from post_summarizer.datatypes import ScoredSentence, SummaryBudget
from post_summarizer.preprocessing import split_paragraph_sentences
from post_summarizer.summarize import (
    generate_summary,
    summarize,
    summarize_text,
    truncate_at_word_boundary,
    truncate_summary,
)

ARTICLE = "\n\n".join([
    "The city council met on Monday evening downtown. "
    "Members debated the new parking rules for hours. "
    "Several residents spoke during the public comment.",
    "The library will extend its weekend opening hours. "
    "Volunteers are needed to shelve returned books now. "
    "Children can join the summer reading club soon.",
    "Road crews will repave Elm Street starting in June. "
    "Detours will be posted along the northern avenues. "
    "Drivers should expect delays during morning rush.",
    "The farmers market returns to the plaza on Sunday. "
    "Local bakers will sell fresh bread and warm pastry. "
    "Live music is planned for the afternoon crowd too.",
])

SAMPLES = [
    "The park is closed. Bring your dog on weekends. Parking is free after 6pm.",
    "Buy milk",
    "x",
    "?!?",
    "a" * 1000,
    ("word " * 400).strip(),
    "1. Wake up. 2. Eat breakfast. 3. Go to work.",
    "the and. is it. to be.",
    ARTICLE,
]


def _long_text():
    topics = ["gardens", "traffic", "schools", "taxes", "weather", "sports", "music", "housing",
              "transit", "parks", "libraries", "markets", "bridges", "festivals", "recycling",
              "clinics", "museums", "trails", "bakeries", "theaters"]
    return " ".join(f"The report on {t} lists {i} notable changes this year." for i, t in enumerate(topics))


class TestTruncation(unittest.TestCase):
    def test_truncate_summary_adds_ellipsis_within_limit(self):
        out = truncate_summary("abcdef ghijkl", 8)
        self.assertEqual(out, "abcdef\u2026")
        self.assertLessEqual(len(out), 8)

    def test_truncate_summary_short_text_unchanged(self):
        self.assertEqual(truncate_summary("short", 10), "short")

    def test_word_boundary(self):
        self.assertEqual(truncate_at_word_boundary("Parking is free after 6pm.", 12), "Parking is")
        self.assertEqual(truncate_at_word_boundary("Parking is free after 6pm.", 7), "Parking")


class TestSummarize(unittest.TestCase):
    def test_empty_input(self):
        budget = build_summary_budget(0, "balanced")
        self.assertEqual(summarize("", budget), "")
        self.assertEqual(summarize("   \n\t ", budget), "")

    def test_short_post_concise(self):
        text = SAMPLES[0]
        budget = build_summary_budget(len(text), "concise")
        out = summarize(text, budget)
        self.assertLessEqual(len(out), budget.max_length)
        self.assertTrue(out.startswith("Bring your dog on weekends."))

    def test_two_words_returned_whole(self):
        text = "Buy milk"
        self.assertEqual(summarize(text, build_summary_budget(len(text), "detailed")), "Buy milk")

    def test_stopword_only_text(self):
        text = "the and. is it. to be."
        self.assertEqual(summarize(text, build_summary_budget(len(text), "balanced")), text)

    def test_multi_paragraph_article(self):
        budget = build_summary_budget(len(ARTICLE), "balanced", min_length=130, max_length=200)
        out = summarize(ARTICLE, budget)
        self.assertGreaterEqual(len(out), 130)
        self.assertLessEqual(len(out), 200)
        paragraphs = {p for s, p in split_paragraph_sentences(ARTICLE) if s in out}
        self.assertGreaterEqual(len(paragraphs), 3)

    def test_output_keeps_reading_order(self):
        text = _long_text()
        out = summarize(text, build_summary_budget(len(text), "detailed"))
        sentences = [s for s, _ in split_paragraph_sentences(text)]
        positions = [out.find(s) for s in sentences if s in out]
        self.assertGreaterEqual(len(positions), 2)
        self.assertEqual(positions, sorted(positions))

    def test_length_bound_and_non_empty(self):
        for text in SAMPLES:
            for pref in ("concise", "balanced", "detailed"):
                budget = build_summary_budget(len(text), pref)
                out = summarize(text, budget)
                self.assertLessEqual(len(out), budget.max_length, (text[:30], pref))
                self.assertTrue(out, (text[:30], pref))

    def test_deterministic(self):
        budget = build_summary_budget(len(ARTICLE), "balanced")
        self.assertEqual(summarize(ARTICLE, budget), summarize(ARTICLE, budget))

    def test_detailed_not_shorter_than_concise(self):
        text = _long_text()
        concise = summarize_text(text, length_preference="concise")
        detailed = summarize_text(text, length_preference="detailed")
        self.assertGreaterEqual(len(detailed), len(concise))

    def test_explicit_overrides(self):
        out = summarize_text(ARTICLE, min_length=40, max_length=60)
        self.assertLessEqual(len(out), 60)
        self.assertGreaterEqual(len(out), 40)

    def test_clipped_sentence_is_not_reused_by_length_backfill(self):
        text = ("Alpha beta gamma ok. Delta supercalifragilisticexpialidociousnessxyz wordy end. "
                "Eps zeta.")
        out = summarize_text(text, min_length=50, max_length=60, length_preference="concise")
        self.assertLessEqual(len(out), 60)
        self.assertTrue(out.startswith("Alpha beta gamma ok. Delta Eps zeta."), out)


class TestGenerateSummary(unittest.TestCase):
    def test_backfilled_sentence_lands_before_clipped_one(self):
        early = ScoredSentence(sentence="Early one.", index=0, paragraph=0, score=0.5)
        middle = ScoredSentence(sentence="Middle sentence fits here.", index=1, paragraph=0, score=2.0)
        tail = ScoredSentence(sentence="Trailing supercalifragilisticexpialidocious end.",
                              index=2, paragraph=0, score=1.0)
        budget = SummaryBudget(min_length=45, max_length=60, sentence_count_min=2, sentence_count_max=4)
        source = " ".join(e.sentence for e in (early, middle, tail))
        out = generate_summary([middle, tail], [middle, tail, early], budget, source)
        self.assertEqual(out, "Early one. Middle sentence fits here. Trailing")


if __name__ == "__main__":
    unittest.main(verbosity=2)
