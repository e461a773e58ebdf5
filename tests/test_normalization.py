import sys
import unittest
from datetime import datetime, timezone
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_tailor.core.errors import ValidationError
from resume_tailor.normalize import (
    keywords_from_analysis,
    normalize_ats_score,
    normalize_bullet_enhancement,
    normalize_job_analysis,
    normalize_job_match,
    normalize_keyword_extraction,
    normalize_professional_summary,
    normalize_tailoring,
)
from resume_tailor.normalize.normalize_content import DEFAULT_BULLET_EXPLANATION, DEFAULT_RECOMMENDATION_REASON
from resume_tailor.schemas.domain import JobAnalysis, JobKeyword, PersonalInfo, Resume, WorkExperience

FIXED_NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def _resume() -> Resume:
    return Resume(
        id="resume-1",
        user_id="user-1",
        title="Backend",
        created_at="2024-01-01T00:00:00+00:00",
        updated_at="2024-01-02T00:00:00+00:00",
        personal_info=PersonalInfo(full_name="Jane Doe", email="jane@example.com"),
        work_experiences=[
            WorkExperience(id="w1", company="Acme", position="Engineer", start_date="2020-01", highlights=["Built APIs"])
        ],
    )


class JobAnalysisNormalizationTests(unittest.TestCase):
    def test_flattens_requirements_in_order(self):
        payload = {
            "hardSkills": [{"skill": "Python", "importance": "must_have"}, {"skill": ""}],
            "softSkills": ["Communication"],
            "qualifications": {
                "experience": [{"description": "5+ years backend", "importance": "preferred"}],
                "education": [{"type": "BSc", "field": "Computer Science", "importance": "bogus"}],
                "certifications": [{"name": "CKA"}],
            },
            "keywords": [{"text": "FastAPI", "frequency": 3, "context": "stack"}, {"text": "Docker", "frequency": 0}],
            "companyCulture": [{"trait": "Remote-first"}, "Ownership"],
            "experienceLevel": {"level": "senior"},
            "responsibilities": ["Design services", "  "],
            "remoteWork": "remote",
        }
        analysis = normalize_job_analysis(payload, job_description_id="jd-1", now=FIXED_NOW)

        self.assertEqual(
            [(req.type, req.content, req.importance) for req in analysis.requirements],
            [
                ("hard_skill", "Python", "must_have"),
                ("soft_skill", "Communication", "nice_to_have"),
                ("experience", "5+ years backend", "preferred"),
                ("education", "BSc in Computer Science", "nice_to_have"),
                ("certification", "CKA", "nice_to_have"),
            ],
        )
        self.assertEqual([(kw.text, kw.frequency) for kw in analysis.keywords], [("FastAPI", 3), ("Docker", 1)])
        self.assertEqual(analysis.company_culture, ["Remote-first", "Ownership"])
        self.assertEqual(analysis.experience_level, "senior")
        self.assertEqual(analysis.responsibilities, ["Design services"])
        self.assertEqual(analysis.remote_work, "remote")
        self.assertIsNone(analysis.industry)
        self.assertEqual(analysis.job_description_id, "jd-1")
        self.assertEqual(analysis.created_at, FIXED_NOW.isoformat())
        ids = [req.id for req in analysis.requirements] + [kw.id for kw in analysis.keywords]
        self.assertEqual(len(set(ids)), len(ids))

    def test_empty_payload_gets_defaults(self):
        analysis = normalize_job_analysis({})
        self.assertEqual(analysis.requirements, [])
        self.assertEqual(analysis.experience_level, "mid")

    def test_non_mapping_rejected(self):
        with self.assertRaises(ValidationError):
            normalize_job_analysis(["not", "a", "mapping"])


class TailoringNormalizationTests(unittest.TestCase):
    def test_identity_is_preserved_and_score_computed(self):
        original = _resume()
        payload = {
            "tailoredResume": {
                "id": "model-made-up",
                "userId": "someone-else",
                "createdAt": "1999-01-01",
                "title": "Backend (tailored)",
                "personalInfo": None,
                "professionalSummary": {"content": "Python engineer focused on APIs."},
            },
            "tailoringNotes": {
                "summary": "Emphasized API work",
                "keywordMatches": [
                    {"keyword": "Python", "source": "original", "importance": "high"},
                    {"keyword": "FastAPI", "source": "added"},
                    {"keyword": ""},
                ],
                "majorChanges": [{"section": "summary", "description": "Rewrote summary"}],
                "improvementSuggestions": [{"suggestion": "Add metrics", "reasoning": "Numbers stand out"}],
            },
        }
        result = normalize_tailoring(payload, original, now=FIXED_NOW)

        tailored = result.tailored_resume
        self.assertEqual(tailored.id, "resume-1")
        self.assertEqual(tailored.user_id, "user-1")
        self.assertEqual(tailored.created_at, "2024-01-01T00:00:00+00:00")
        self.assertEqual(tailored.updated_at, FIXED_NOW.isoformat())
        self.assertEqual(tailored.title, "Backend (tailored)")
        self.assertEqual(tailored.personal_info.full_name, "Jane Doe")
        self.assertEqual(tailored.work_experiences[0].company, "Acme")
        self.assertEqual(tailored.professional_summary.content, "Python engineer focused on APIs.")

        self.assertEqual([(m.keyword, m.found, m.importance) for m in result.keyword_matches],
                         [("Python", True, "high"), ("FastAPI", False, "medium")])
        self.assertEqual(result.ats_score.score, 60 + 2 * 2 - 3 * 1)
        self.assertEqual(result.ats_score.feedback[0].severity, "high")
        self.assertEqual(result.ats_score.feedback[1].message, "Add metrics")
        self.assertEqual(result.changes[0].description, "Rewrote summary")
        self.assertEqual(result.summary, "Emphasized API work")

    def test_nested_nulls_fall_back_to_defaults(self):
        payload = {
            "tailoredResume": {
                "personalInfo": {"fullName": "Jane", "phone": None},
                "workExperiences": [
                    {"company": "Acme", "location": None, "startDate": "2020-01", "highlights": None},
                    None,
                ],
                "skills": [{"name": "Python", "category": None}],
            },
            "tailoringNotes": {"keywordMatches": None},
        }
        result = normalize_tailoring(payload, _resume(), now=FIXED_NOW)

        tailored = result.tailored_resume
        self.assertEqual(tailored.personal_info.full_name, "Jane")
        self.assertEqual(tailored.personal_info.phone, "")
        self.assertEqual(len(tailored.work_experiences), 1)
        self.assertEqual(tailored.work_experiences[0].location, "")
        self.assertEqual(tailored.work_experiences[0].highlights, [])
        self.assertIsNone(tailored.skills[0].category)
        self.assertEqual(result.keyword_matches, [])

    def test_unknown_resume_fields_survive(self):
        payload = {"tailoredResume": {"customTheme": {"color": "teal"}}, "tailoringNotes": {}}
        result = normalize_tailoring(payload, _resume(), now=FIXED_NOW)
        self.assertEqual(result.tailored_resume.to_wire()["customTheme"], {"color": "teal"})
        self.assertEqual(result.ats_score.score, 60)

    def test_missing_parts_rejected(self):
        for payload in ({"tailoredResume": {}}, {"tailoringNotes": {}}, {"tailoredResume": [], "tailoringNotes": {}}):
            with self.assertRaises(ValidationError) as ctx:
                normalize_tailoring(payload, _resume())
            self.assertEqual(str(ctx.exception), "invalid tailoring response structure")


class ATSNormalizationTests(unittest.TestCase):
    def test_clamps_and_builds_feedback(self):
        result = normalize_ats_score({"atsScore": 140, "formatAnalysis": {"issues": ["Columns"]}})
        self.assertEqual(result.score, 100)
        self.assertEqual(result.feedback[0].category, "Format")

    def test_overall_severity_uses_unrounded_score(self):
        result = normalize_ats_score({"atsScore": 69.6, "overallAssessment": "Close to the bar"})
        self.assertEqual(result.score, 70)
        self.assertEqual(result.feedback[0].category, "Overall")
        self.assertEqual(result.feedback[0].severity, "high")

    def test_numeric_string_accepted(self):
        self.assertEqual(normalize_ats_score({"atsScore": "-10"}).score, 0)

    def test_score_required(self):
        for payload in ({}, {"atsScore": "high"}, {"atsScore": True}, "78"):
            with self.assertRaises(ValidationError):
                normalize_ats_score(payload)


class ContentNormalizationTests(unittest.TestCase):
    def test_keywords_from_analysis(self):
        analysis = JobAnalysis(
            id="a1",
            created_at="2025-01-01",
            keywords=[
                JobKeyword(id="k1", text="Python", frequency=3),
                JobKeyword(id="k2", text="SQL", frequency=2),
                JobKeyword(id="k3", text="Go", frequency=1),
            ],
        )
        self.assertEqual(
            [(item.keyword, item.importance) for item in keywords_from_analysis(analysis)],
            [("Python", "high"), ("SQL", "medium"), ("Go", "low")],
        )

    def test_keyword_extraction_drops_low_confidence(self):
        payload = {
            "extractedSkills": [
                {"skill": "Python", "confidence": "high"},
                {"skill": "Teamwork", "confidence": "medium"},
                {"skill": "Excel", "confidence": "low"},
            ]
        }
        self.assertEqual(
            [(item.keyword, item.importance) for item in normalize_keyword_extraction(payload)],
            [("Python", "high"), ("Teamwork", "medium")],
        )
        with self.assertRaises(ValidationError):
            normalize_keyword_extraction({"extractedSkills": "Python"})

    def test_bullet_enhancement_defaults(self):
        result = normalize_bullet_enhancement({"enhancedBullet": "Built 12 REST APIs serving 2M requests/day"})
        self.assertEqual(result.explanation, DEFAULT_BULLET_EXPLANATION)
        self.assertEqual(result.keywords_incorporated, [])
        with self.assertRaises(ValidationError):
            normalize_bullet_enhancement({"explanation": "no bullet"})

    def test_professional_summary(self):
        result = normalize_professional_summary(
            {"summaries": [{"text": "Seasoned engineer shipping APIs", "focus": "impact"}, "Second option"],
             "recommendedOption": 7}
        )
        self.assertEqual(len(result.summaries), 2)
        self.assertEqual(result.summaries[0].word_count, 4)
        self.assertEqual(result.recommended_option, 1)
        self.assertEqual(result.recommendation_reason, DEFAULT_RECOMMENDATION_REASON)
        with self.assertRaises(ValidationError):
            normalize_professional_summary({"summaries": []})

    def test_job_match(self):
        result = normalize_job_match(
            {
                "overallMatch": {"score": 81.6, "assessment": "Strong", "recommendation": "Apply"},
                "dimensionScores": {"skills": 85, "experience": "70", "culture": "n/a"},
                "keyStrengths": [{"strength": "Python", "evidence": "5 years"}],
                "keyGaps": ["Kubernetes"],
                "keywordAnalysis": {"presentKeywords": ["Python"], "missingKeywords": [{"keyword": "Helm"}]},
                "tailoringRecommendations": ["Mention CI/CD"],
            }
        )
        self.assertEqual(result.overall_match.score, 82)
        self.assertEqual(result.dimension_scores, {"skills": 85.0, "experience": 70.0})
        self.assertEqual(result.key_gaps[0].gap, "Kubernetes")
        self.assertEqual(result.keyword_analysis.missing_keywords[0].keyword, "Helm")
        with self.assertRaises(ValidationError):
            normalize_job_match({"overallMatch": {"score": None}})


if __name__ == "__main__":
    unittest.main()
