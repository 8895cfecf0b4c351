from __future__ import annotations

import re
from typing import Any

from skillsphere.ai.types import CompletionClient
from skillsphere.schemas.resume import (
    GeneratedResume,
    ResumeAnalysis,
    ResumeAnalysisRequest,
    ResumeGenerateRequest,
)
from skillsphere.services.completion import run_json_completion
from skillsphere.services.outcome import Outcome

MAX_PROMPT_RESUME_CHARS = 12000
LONG_RESUME_CHARS = 8000

# (pattern, strength when found, tip when missing, penalty when missing)
SECTION_CHECKS: list[tuple[re.Pattern[str], str, str, int]] = [
    (re.compile(r"email|@", re.I), "Contact email present", "Add a professional email.", 5),
    (re.compile(r"\bphone\b|\+?\d[\d\s().-]{6,}\d", re.I), "Phone number present", "Include a reachable phone number.", 5),
    (
        re.compile(r"\b(education|b\.tech|btech|m\.tech|degree|bachelor|master|university)\b", re.I),
        "Education section found",
        "Add an Education section.",
        10,
    ),
    (
        re.compile(r"\b(experience|internship|project|projects)\b", re.I),
        "Experience or projects highlighted",
        "Highlight experience, internships, or projects.",
        10,
    ),
    (re.compile(r"\b(skills|technologies|tools)\b", re.I), "Skills listed", "List key skills and tools.", 10),
    (
        re.compile(r"\b(achievements|awards|certifications?)\b", re.I),
        "Achievements or certifications listed",
        "Add achievements or certifications.",
        5,
    ),
]
PASSIVE_PHRASE_RE = re.compile(r"\b(responsible for|worked on)\b", re.I)
TECH_KEYWORD_RE = re.compile(r"\b(project|react|node|ml|api|sql|aws|python|docker)\b", re.I)

ROLE_KEYWORDS: dict[str, list[str]] = {
    "data analyst": ["SQL", "Excel", "Tableau", "Power BI", "Python", "Statistics", "Data Visualization"],
    "data scientist": ["Python", "Machine Learning", "Statistics", "SQL", "Pandas", "Deep Learning"],
    "software engineer": ["Data Structures", "Algorithms", "Git", "REST API", "Testing", "CI/CD"],
    "product manager": ["Roadmap", "Stakeholder", "Agile", "User Research", "KPIs", "A/B Testing"],
    "devops engineer": ["Docker", "Kubernetes", "CI/CD", "Terraform", "AWS", "Monitoring"],
    "ux designer": ["Figma", "Wireframes", "Prototyping", "User Research", "Usability Testing"],
    "machine learning engineer": ["Python", "PyTorch", "TensorFlow", "MLOps", "Model Deployment"],
}
GENERIC_KEYWORDS = ["Agile", "CI/CD", "REST API", "Communication", "Leadership"]


def _contains_keyword(text: str, keyword: str) -> bool:
    return re.search(rf"(?<!\w){re.escape(keyword)}(?!\w)", text, re.I) is not None


def role_keywords(target_job: str) -> list[str]:
    target = (target_job or "").strip().lower()
    for role, keywords in ROLE_KEYWORDS.items():
        if role in target or (target and target in role):
            return keywords
    return GENERIC_KEYWORDS


def heuristic_resume_analysis(resume_text: str, target_job: str = "") -> dict[str, Any]:
    """Score a resume locally from section coverage and keyword density."""
    text = resume_text or ""
    score = 50
    strengths: list[str] = []
    improvements: list[str] = []

    for pattern, found, tip, penalty in SECTION_CHECKS:
        if pattern.search(text):
            strengths.append(found)
        else:
            improvements.append(tip)
            score -= penalty

    if len(PASSIVE_PHRASE_RE.findall(text)) > 3:
        improvements.append("Use action verbs (built, led, delivered) over passive phrasing.")
    if len(text) > LONG_RESUME_CHARS:
        improvements.append("Try to keep the resume concise (1-2 pages).")
        score -= 5

    score += min(20, len(TECH_KEYWORD_RE.findall(text)) * 2)
    score = max(0, min(100, score))

    missing = [kw for kw in role_keywords(target_job) if not _contains_keyword(text, kw)]
    if not improvements:
        improvements.append("Looks good! Consider tailoring to each job's keywords.")

    target = target_job.strip() or "general roles"
    return {
        "atsScore": score,
        "summary": (
            f"Automated ATS check for {target}: {score}/100 based on section coverage "
            f"and keyword density. {len(missing)} role keywords were not found."
        ),
        "missingKeywords": missing,
        "strengths": strengths,
        "improvements": improvements,
    }


def analyze_resume(client: CompletionClient, payload: ResumeAnalysisRequest) -> Outcome:
    resume_text = payload.resume_text[:MAX_PROMPT_RESUME_CHARS]
    user_prompt = f"""Review this resume for applicant tracking system (ATS) compatibility.
Target job: {payload.target_job or "Not specified"}

Resume:
{resume_text}

Provide JSON with:
1. atsScore: Number 0-100
2. summary: 2-3 sentence assessment
3. missingKeywords: Array of keywords for the target job that the resume lacks
4. strengths: Array of 2-4 strengths
5. improvements: Array of 3-5 actionable improvements

Format as valid JSON only."""
    return run_json_completion(
        client,
        endpoint="resume-analysis",
        system_prompt="You are an ATS resume reviewer. Respond only with valid JSON.",
        user_prompt=user_prompt,
        fallback=heuristic_resume_analysis(payload.resume_text, payload.target_job),
        response_model=ResumeAnalysis,
    )


RESUME_BUILDER_SYSTEM_PROMPT = """You are an expert resume writer and ATS optimization specialist.
Your task is to generate a professional, ATS-friendly resume AND provide detailed analysis.

IMPORTANT: Respond ONLY with valid JSON in this exact format:
{
  "resume": {
    "header": {"name": "Full Name", "role": "Target Role Title", "contact": "email@email.com | +1234567890"},
    "summary": "2-3 sentence professional summary highlighting key strengths for the target role...",
    "skills": ["Skill 1", "Skill 2"],
    "experience": [
      {"title": "Job Title", "company": "Company Name", "duration": "Date Range",
       "achievements": ["Achievement 1 with quantifiable impact"]}
    ],
    "projects": [
      {"name": "Project Name", "description": "Brief description with technologies used and impact",
       "technologies": ["Tech1", "Tech2"]}
    ],
    "education": {"degree": "Degree Name", "institution": "Institution Name", "year": "Year or Date Range"}
  },
  "analysis": {
    "overallScore": 75,
    "atsScore": 80,
    "missingKeywords": [{"keyword": "Keyword", "importance": "High/Medium/Low", "reason": "Why this keyword matters"}],
    "skillGaps": [{"skill": "Missing Skill", "priority": "High/Medium/Low", "reason": "Why this skill is important"}],
    "suggestions": [{"category": "Content/Format/Keywords", "suggestion": "Specific improvement", "impact": "Expected effect"}],
    "strengths": ["Strength 1", "Strength 2"]
  }
}"""


def resume_builder_fallback(payload: ResumeGenerateRequest) -> dict[str, Any]:
    top_skills = payload.skills[:3]
    education_line = payload.education.splitlines()[0].strip() if payload.education.strip() else ""
    return {
        "resume": {
            "header": {
                "name": payload.full_name,
                "role": payload.target_role,
                "contact": f"{payload.email or 'email@example.com'} | {payload.phone or '+1 (555) 000-0000'}",
            },
            "summary": (
                f"Results-driven {payload.target_role} with expertise in {', '.join(top_skills)}. "
                "Passionate about delivering innovative solutions and driving business impact through technology."
            ),
            "skills": list(payload.skills),
            "experience": [
                {
                    "title": payload.target_role,
                    "company": "Previous Company",
                    "duration": "2022 - Present",
                    "achievements": [
                        "Led development of key features resulting in 30% improvement in user engagement",
                        "Collaborated with cross-functional teams to deliver projects on time",
                        "Implemented best practices reducing bug reports by 25%",
                    ],
                }
            ]
            if payload.experience
            else [],
            "projects": [
                {
                    "name": "Portfolio Project",
                    "description": "Built a full-stack application demonstrating expertise in modern technologies",
                    "technologies": top_skills,
                }
            ]
            if payload.projects
            else [],
            "education": {
                "degree": education_line or "Bachelor's Degree",
                "institution": "University",
                "year": "2023",
            },
        },
        "analysis": {
            "overallScore": 72,
            "atsScore": 68,
            "missingKeywords": [
                {"keyword": "Agile", "importance": "High", "reason": "Most companies use Agile methodologies"},
                {"keyword": "CI/CD", "importance": "Medium", "reason": "Shows understanding of modern development practices"},
                {"keyword": "REST API", "importance": "High", "reason": "Essential for backend development roles"},
            ],
            "skillGaps": [
                {"skill": "Cloud Platforms (AWS/GCP)", "priority": "High", "reason": "Cloud skills are in high demand"},
                {"skill": "Testing/TDD", "priority": "Medium", "reason": "Shows code quality awareness"},
            ],
            "suggestions": [
                {
                    "category": "Content",
                    "suggestion": "Add quantifiable metrics to achievements",
                    "impact": "Increases credibility and ATS score by 15%",
                },
                {
                    "category": "Keywords",
                    "suggestion": "Include more industry-specific terminology",
                    "impact": "Improves ATS matching by 20%",
                },
                {
                    "category": "Format",
                    "suggestion": "Use consistent bullet point formatting",
                    "impact": "Better ATS parsing and readability",
                },
            ],
            "strengths": ["Strong technical skill set", "Clear education background", "Relevant project experience"],
        },
    }


def generate_resume(client: CompletionClient, payload: ResumeGenerateRequest) -> Outcome:
    user_prompt = f"""Create an ATS-optimized resume and analysis for:

Full Name: {payload.full_name}
Email: {payload.email or "Not provided"}
Phone: {payload.phone or "Not provided"}
Target Role: {payload.target_role}

Education:
{payload.education}

Skills:
{", ".join(payload.skills)}

Experience:
{payload.experience or "No experience provided - create entry-level focused resume"}

Projects:
{payload.projects or "No projects provided"}

Requirements:
1. Make the resume ATS-friendly with relevant keywords for {payload.target_role}
2. Use action verbs and quantifiable achievements
3. Score should reflect: keyword optimization, format cleanliness, content relevance
4. Identify 3-5 missing keywords critical for this role
5. Identify 2-4 skill gaps
6. Provide 3-5 actionable improvement suggestions"""
    return run_json_completion(
        client,
        endpoint="resume-generate",
        system_prompt=RESUME_BUILDER_SYSTEM_PROMPT,
        user_prompt=user_prompt,
        fallback=resume_builder_fallback(payload),
        response_model=GeneratedResume,
    )
