import dataclasses
import os
import unittest
from unittest.mock import patch

from skillsphere.ai.types import CompletionError, CompletionUnavailable
from skillsphere.api import uploads
from skillsphere.core.config import settings
from skillsphere.services.resume_service import heuristic_resume_analysis

from fakes import ApiTestMixin

RESUME_TEXT = (
    "Jordan Lee\n"
    "Email jordan.lee@example.com | Phone +1 555 222 1111\n"
    "Education\n"
    "B.Tech in Computer Science, State University\n"
    "Experience\n"
    "- Built a Python API on AWS serving 2M requests per day.\n"
    "- Migrated SQL reporting jobs to Docker based pipelines.\n"
    "Skills\n"
    "Python, SQL, React, Docker, AWS\n"
    "Certifications\n"
    "AWS Certified Developer\n"
)


class ResumeHeuristicTests(unittest.TestCase):
    def test_complete_resume_scores_higher_than_sparse_text(self):
        strong = heuristic_resume_analysis(RESUME_TEXT, "Software Engineer")
        weak = heuristic_resume_analysis("hello world", "Software Engineer")
        self.assertGreater(strong["atsScore"], weak["atsScore"])
        self.assertEqual(weak["atsScore"], 5)
        self.assertEqual(weak["strengths"], [])
        self.assertEqual(len(weak["improvements"]), 6)
        self.assertLessEqual(strong["atsScore"], 100)

    def test_missing_keywords_follow_target_role(self):
        result = heuristic_resume_analysis("SQL and Excel reports. Python scripts.", "Senior Data Analyst")
        self.assertIn("Tableau", result["missingKeywords"])
        self.assertNotIn("SQL", result["missingKeywords"])
        self.assertNotIn("Python", result["missingKeywords"])

    def test_passive_phrasing_flagged(self):
        text = " ".join(["Responsible for reports."] * 4)
        result = heuristic_resume_analysis(text)
        self.assertTrue(any("action verbs" in tip for tip in result["improvements"]))


class ResumeAnalysisApiTests(ApiTestMixin, unittest.TestCase):
    def test_analysis_from_model(self):
        self.use_reply(
            {
                "atsScore": 78,
                "summary": "Strong backend profile; light on testing keywords.",
                "missingKeywords": ["CI/CD", {"keyword": "Kubernetes"}],
                "strengths": ["Quantified impact"],
                "improvements": ["Add a testing section"],
            }
        )
        response = self.client.post(
            "/resume-analysis",
            json={"resumeText": RESUME_TEXT, "targetJob": "Backend Engineer"},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertIsInstance(body["atsScore"], int)
        self.assertTrue(0 <= body["atsScore"] <= 100)
        self.assertIsInstance(body["summary"], str)
        self.assertEqual(body["missingKeywords"], ["CI/CD", "Kubernetes"])

    def test_analysis_falls_back_to_heuristic(self):
        self.use_error(CompletionUnavailable("GROQ_API_KEY is missing"))
        response = self.client.post("/resume-analysis", json={"resumeText": RESUME_TEXT, "targetJob": "Data Analyst"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["X-Response-Source"], "fallback")
        self.assertEqual(response.headers["X-Degraded-Reason"], "llm_unavailable")
        self.assertEqual(response.json(), heuristic_resume_analysis(RESUME_TEXT, "Data Analyst"))

    def test_oversized_number_in_reply_falls_back(self):
        self.use_reply('{"atsScore": ' + "9" * 5000 + ', "summary": "ok"}')
        response = self.client.post("/resume-analysis", json={"resumeText": RESUME_TEXT, "targetJob": "Data Analyst"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["X-Response-Source"], "fallback")
        self.assertEqual(response.headers["X-Degraded-Reason"], "unparseable_response")
        self.assertEqual(response.json(), heuristic_resume_analysis(RESUME_TEXT, "Data Analyst"))

    def test_non_finite_number_in_reply_falls_back(self):
        for token in ("NaN", "Infinity", "1e999"):
            with self.subTest(token=token):
                self.use_reply('{"atsScore": 70, "summary": "ok", "missingKeywords": [], "extra": %s}' % token)
                response = self.client.post("/resume-analysis", json={"resumeText": RESUME_TEXT})
                self.assertEqual(response.status_code, 200)
                self.assertEqual(response.headers["X-Response-Source"], "fallback")
                self.assertEqual(response.json()["atsScore"], heuristic_resume_analysis(RESUME_TEXT)["atsScore"])

    def test_missing_resume_text(self):
        response = self.client.post("/resume-analysis", json={"targetJob": "Data Analyst"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Missing required field: resumeText"})

    def test_malformed_json(self):
        response = self.client.post(
            "/resume-analysis",
            content=b'{"resumeText": ',
            headers={"Content-Type": "application/json"},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Request body must be valid JSON."})


class ResumeUploadApiTests(ApiTestMixin, unittest.TestCase):
    def test_upload_text_resume(self):
        self.use_error(CompletionError("boom"))
        response = self.client.post(
            "/resume-analysis/upload",
            files={"file": ("resume.txt", RESUME_TEXT.encode("utf-8"), "text/plain")},
            data={"targetJob": "Software Engineer"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["X-Extracted-Characters"], str(len(RESUME_TEXT.strip())))
        self.assertEqual(response.json(), heuristic_resume_analysis(RESUME_TEXT, "Software Engineer"))

    def test_upload_passes_text_to_model(self):
        fake = self.use_reply({"atsScore": 64, "summary": "Fine."})
        response = self.client.post(
            "/resume-analysis/upload",
            files={"file": ("resume.txt", RESUME_TEXT.encode("utf-8"), "text/plain")},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["atsScore"], 64)
        self.assertIn("Built a Python API on AWS", fake.calls[0][0][1].content)

    def test_too_little_text(self):
        response = self.client.post(
            "/resume-analysis/upload",
            files={"file": ("resume.txt", b"Jordan Lee", "text/plain")},
        )
        self.assertEqual(response.status_code, 422)
        self.assertTrue(response.json()["error"].startswith("Could not extract enough text"))

    def test_empty_upload(self):
        response = self.client.post("/resume/extract-text", files={"file": ("resume.txt", b"", "text/plain")})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Uploaded file is empty."})

    def test_image_upload_rejected(self):
        response = self.client.post(
            "/resume/extract-text",
            files={"file": ("scan.png", b"\x89PNG\r\n\x1a\n" + b"\x00" * 64, "image/png")},
        )
        self.assertEqual(response.status_code, 415)
        self.assertIn("Unsupported file type", response.json()["error"])

    def test_oversized_upload(self):
        small = dataclasses.replace(settings, max_upload_mb=1)
        with patch.object(uploads, "settings", small):
            response = self.client.post(
                "/resume/extract-text",
                files={"file": ("resume.txt", b"a" * (1024 * 1024 + 1), "text/plain")},
            )
        self.assertEqual(response.status_code, 413)
        self.assertTrue(response.json()["error"].startswith("File too large"))

    def test_temp_file_removed(self):
        with patch.object(uploads, "remove_temp_file", wraps=uploads.remove_temp_file) as remove:
            response = self.client.post(
                "/resume/extract-text",
                files={"file": ("resume.txt", RESUME_TEXT.encode("utf-8"), "text/plain")},
            )
        self.assertEqual(response.status_code, 200)
        remove.assert_called_once()
        self.assertFalse(os.path.exists(remove.call_args.args[0]))

    def test_temp_file_removed_after_failure(self):
        with patch.object(uploads, "remove_temp_file", wraps=uploads.remove_temp_file) as remove:
            response = self.client.post(
                "/resume/extract-text",
                files={"file": ("resume.pdf", b"%PDF-1.4\nbroken", "application/pdf")},
            )
        self.assertEqual(response.status_code, 422)
        remove.assert_called_once()
        self.assertFalse(os.path.exists(remove.call_args.args[0]))

    def test_extract_text_contract(self):
        response = self.client.post(
            "/resume/extract-text",
            files={"file": ("resume.txt", RESUME_TEXT.encode("utf-8"), "text/plain")},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["text"], RESUME_TEXT)
        self.assertEqual(body["characters"], len(RESUME_TEXT.strip()))
        self.assertEqual(body["sourceType"], "txt")


class ResumeGenerateApiTests(ApiTestMixin, unittest.TestCase):
    request = {
        "fullName": "Jordan Lee",
        "email": "jordan.lee@example.com",
        "targetRole": "Backend Engineer",
        "education": "B.Tech Computer Science\nState University, 2023",
        "skills": "Python, SQL, Docker",
        "experience": "Intern at Acme building APIs",
    }

    def test_fallback_resume_built_from_inputs(self):
        self.use_error(CompletionError("boom"))
        response = self.client.post("/resume/generate", json=self.request)
        self.assertEqual(response.status_code, 200)
        resume = response.json()["resume"]
        self.assertEqual(resume["header"]["name"], "Jordan Lee")
        self.assertEqual(resume["skills"], ["Python", "SQL", "Docker"])
        self.assertEqual(resume["education"]["degree"], "B.Tech Computer Science")
        self.assertEqual(len(resume["experience"]), 1)
        self.assertEqual(resume["projects"], [])
        self.assertIn("analysis", response.json())

    def test_resume_from_model(self):
        self.use_reply(
            {
                "resume": {
                    "header": {"name": "Jordan Lee", "role": "Backend Engineer", "contact": "jordan.lee@example.com"},
                    "summary": "Backend engineer who ships reliable APIs.",
                    "skills": ["Python", "SQL"],
                },
                "analysis": {"overallScore": 81, "atsScore": "77", "strengths": ["Clear impact"]},
            }
        )
        response = self.client.post("/resume/generate", json={**self.request, "skills": ["Python", "SQL"]})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["analysis"]["atsScore"], 77)
        self.assertEqual(body["resume"]["summary"], "Backend engineer who ships reliable APIs.")

    def test_requires_skills(self):
        response = self.client.post("/resume/generate", json={**self.request, "skills": " , "})
        self.assertEqual(response.status_code, 400)
        self.assertTrue(response.json()["error"].startswith("Invalid value for skills"))

    def test_requires_full_name(self):
        request = dict(self.request)
        del request["fullName"]
        response = self.client.post("/resume/generate", json=request)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Missing required field: fullName"})


if __name__ == "__main__":
    unittest.main()
