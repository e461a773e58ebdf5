import os
import sys
import tempfile
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_tailor.core.config.heuristics import get_heuristic_value, get_heuristics_config, reset_heuristics_cache
from resume_tailor.scoring import (
    build_ats_feedback,
    build_tailoring_feedback,
    clamp_score,
    keyword_coverage_severity,
    normalize_severity,
    tailoring_score,
    truncated_list,
)


class HeuristicsConfigTests(unittest.TestCase):
    def tearDown(self):
        os.environ.pop("HEURISTICS_CONFIG_PATH", None)
        reset_heuristics_cache()

    def test_shipped_values(self):
        reset_heuristics_cache()
        self.assertIsInstance(get_heuristics_config(), dict)
        self.assertEqual(get_heuristic_value("tailoring.base_score"), 60)
        self.assertEqual(get_heuristic_value("feedback.missing_keywords_limit"), 5)
        self.assertEqual(get_heuristic_value("tailoring.nope", "fallback"), "fallback")

    def test_override_path(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "heuristics.yaml"
            path.write_text("tailoring:\n  base_score: 50\n", encoding="utf-8")
            os.environ["HEURISTICS_CONFIG_PATH"] = str(path)
            reset_heuristics_cache()
            self.assertEqual(tailoring_score(0, 0), 50)

    def test_missing_file_uses_defaults(self):
        os.environ["HEURISTICS_CONFIG_PATH"] = "/nonexistent/heuristics.yaml"
        reset_heuristics_cache()
        self.assertEqual(get_heuristics_config(), {})
        self.assertEqual(tailoring_score(6, 2), 66)


class ScoreTests(unittest.TestCase):
    def setUp(self):
        reset_heuristics_cache()

    def test_clamp(self):
        self.assertEqual(clamp_score(140), 100)
        self.assertEqual(clamp_score(-10), 0)
        self.assertEqual(clamp_score(69.5), 70)
        self.assertEqual(clamp_score(72.4), 72)
        self.assertEqual(clamp_score(float("inf")), 100)
        self.assertEqual(clamp_score(float("nan")), 0)

    def test_tailoring_score(self):
        self.assertEqual(tailoring_score(6, 2), 66)
        self.assertEqual(tailoring_score(30, 0), 100)
        self.assertEqual(tailoring_score(0, 25), 0)

    def test_keyword_coverage_severity(self):
        self.assertEqual(keyword_coverage_severity(11), "low")
        self.assertEqual(keyword_coverage_severity(10), "medium")
        self.assertEqual(keyword_coverage_severity(6), "medium")
        self.assertEqual(keyword_coverage_severity(5), "high")

    def test_normalize_severity(self):
        self.assertEqual(normalize_severity("High"), "high")
        self.assertEqual(normalize_severity("very high impact"), "high")
        self.assertEqual(normalize_severity("lowish"), "low")
        self.assertEqual(normalize_severity("moderate"), "medium")
        self.assertEqual(normalize_severity(None), "medium")

    def test_truncated_list(self):
        items = [f"k{i}" for i in range(8)]
        self.assertEqual(truncated_list(items, 5), "k0, k1, k2, k3, k4…")
        self.assertEqual(truncated_list(items[:3], 5), "k0, k1, k2")


class FeedbackTests(unittest.TestCase):
    def setUp(self):
        reset_heuristics_cache()

    def test_ats_feedback_order_and_severity(self):
        payload = {
            "formatAnalysis": {"issues": ["Tables detected", "Header images", "Odd fonts"]},
            "keywordAnalysis": {
                "missingKeywords": [f"kw{i}" for i in range(8)],
                "keywordSuggestions": "Mention Kubernetes in the summary",
            },
            "qualificationAnalysis": {"missingQualifications": ["BSc", "AWS cert"]},
            "sectionFeedback": {"experience": "Quantify results", "skills": ""},
            "improvementPriorities": [
                {"issue": "No metrics", "solution": "Add numbers", "impact": "High impact"},
                {"issue": "Missing solution"},
            ],
            "overallAssessment": "Decent",
        }
        feedback = build_ats_feedback(payload, 55)
        self.assertEqual([item.severity for item in feedback[:3]], ["high", "high", "medium"])
        self.assertEqual(feedback[3].message, "Missing important keywords: kw0, kw1, kw2, kw3, kw4…")
        self.assertEqual(feedback[4].message, "Mention Kubernetes in the summary")
        self.assertEqual(feedback[5].message, "Missing qualifications: BSc, AWS cert")
        self.assertEqual(feedback[6].category, "Section: Experience")
        self.assertEqual(feedback[7].category, "Priority Improvement")
        self.assertEqual(feedback[7].message, "No metrics: Add numbers")
        self.assertEqual(feedback[7].severity, "high")
        self.assertEqual(len(feedback), 8)

    def test_overall_only_when_nothing_else(self):
        feedback = build_ats_feedback({"overallAssessment": "Weak match"}, 60)
        self.assertEqual(len(feedback), 1)
        self.assertEqual(feedback[0].category, "Overall")
        self.assertEqual(feedback[0].severity, "high")
        feedback = build_ats_feedback({"overallAssessment": "Good match"}, 85)
        self.assertEqual(feedback[0].severity, "medium")

    def test_malformed_optional_parts_are_ignored(self):
        payload = {"formatAnalysis": "bad", "keywordAnalysis": [], "improvementPriorities": {"x": 1}}
        self.assertEqual(build_ats_feedback(payload, 50), [])

    def test_tailoring_feedback(self):
        feedback = build_tailoring_feedback(
            6,
            [{"suggestion": "Add metrics", "reasoning": "Recruiters scan for numbers"}, {"suggestion": "Trim"}],
        )
        self.assertEqual(feedback[0].category, "Keyword Optimization")
        self.assertEqual(feedback[0].severity, "medium")
        self.assertEqual([item.severity for item in feedback[1:]], ["high", "medium"])


if __name__ == "__main__":
    unittest.main()
