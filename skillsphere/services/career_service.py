from __future__ import annotations

import logging
from typing import Any

from skillsphere.ai.types import CompletionClient
from skillsphere.schemas.career import (
    CareerRecommendation,
    CareerRecommendRequest,
    JobTrendInsights,
    JobTrendSearchRequest,
    Persona,
    PersonaRequest,
)
from skillsphere.schemas.common import as_text
from skillsphere.services.completion import run_json_completion
from skillsphere.services.outcome import Outcome
from skillsphere.store.base import KeyValueStore
from skillsphere.store.records import save_persona, split_csv

logger = logging.getLogger(__name__)

POPULAR_ROLES = [
    "Software Engineer",
    "Data Scientist",
    "Product Manager",
    "UX Designer",
    "DevOps Engineer",
    "AI/ML Engineer",
]


def _years(value: Any) -> str:
    text = as_text(value)
    return f"{text} years" if text else "Not specified"


def career_fallback() -> dict[str, Any]:
    return {
        "careers": [
            {"title": "Software Engineer", "description": "Build applications and systems", "matchScore": 85},
            {"title": "Data Analyst", "description": "Analyze data for insights", "matchScore": 75},
            {"title": "Product Manager", "description": "Lead product development", "matchScore": 70},
        ],
        "trendingIndustries": ["AI/ML", "Cloud Computing", "Cybersecurity", "Green Tech"],
        "nextSteps": [
            "Build a portfolio of projects",
            "Network with professionals in your field",
            "Take online courses to fill skill gaps",
        ],
    }


def recommend_careers(client: CompletionClient, payload: CareerRecommendRequest) -> Outcome:
    user_prompt = f"""As a career counselor, analyze this profile and provide career recommendations:
Skills: {payload.skills}
Education: {payload.education or "Not specified"}
Interests: {payload.interests or "Not specified"}
Experience: {_years(payload.experience)}

Provide a JSON response with:
1. careers: Array of 3-5 career paths with title, description, and matchScore (0-100)
2. trendingIndustries: Array of 3-5 fast-growing industries
3. nextSteps: Array of 3-5 actionable next steps

Format as valid JSON only."""
    return run_json_completion(
        client,
        endpoint="career-recommend",
        system_prompt="You are a career counselor. Respond only with valid JSON.",
        user_prompt=user_prompt,
        fallback=career_fallback(),
        response_model=CareerRecommendation,
    )


def persona_fallback(payload: PersonaRequest) -> dict[str, Any]:
    highlights = [part.strip() for part in payload.achievements.split(".") if part.strip()]
    years = as_text(payload.experience)
    if years:
        summary = f"Experienced {payload.current_role} with {years} years of expertise."
    else:
        summary = f"Experienced {payload.current_role}."
    return {
        "name": payload.name,
        "title": payload.current_role,
        "summary": summary,
        "competencies": split_csv(payload.skills)[:7],
        "highlights": highlights[:5],
        "trajectory": payload.goals,
    }


def generate_persona(client: CompletionClient, store: KeyValueStore, payload: PersonaRequest) -> Outcome:
    """Build a career persona and remember it for the user.

    The canned persona is stored as well when the model cannot be used.
    """
    user_prompt = f"""Create a professional career persona for:
Name: {payload.name}
Role: {payload.current_role}
Experience: {_years(payload.experience)}
Skills: {payload.skills or "Not specified"}
Achievements: {payload.achievements or "Not specified"}
Goals: {payload.goals or "Not specified"}

Provide JSON with:
1. name: Full name
2. title: Professional title
3. summary: 2-3 sentence professional summary
4. competencies: Array of 5-7 core skills
5. highlights: Array of 3-5 career highlights
6. trajectory: One sentence about career direction

Format as valid JSON only."""
    outcome = run_json_completion(
        client,
        endpoint="generate-persona",
        system_prompt="You are a career branding expert. Respond only with valid JSON.",
        user_prompt=user_prompt,
        fallback=persona_fallback(payload),
        response_model=Persona,
    )
    if outcome.data is not None:
        save_persona(store, payload.user_id, outcome.data)
        logger.info("persona_saved user=%s status=%s", payload.user_id, outcome.status)
    return outcome


def job_trends_fallback() -> dict[str, Any]:
    return {
        "demandScore": 85,
        "demandTrend": "increasing",
        "avgSalary": "$120,000",
        "salaryRange": "$90k - $150k",
        "openPositions": 15420,
        "topSkills": [
            {"name": "JavaScript", "percentage": 85},
            {"name": "React", "percentage": 75},
            {"name": "Node.js", "percentage": 65},
            {"name": "TypeScript", "percentage": 60},
            {"name": "AWS", "percentage": 55},
        ],
        "topCompanies": [
            {"name": "Google", "openings": 234, "logo": "🔍"},
            {"name": "Amazon", "openings": 189, "logo": "📦"},
            {"name": "Microsoft", "openings": 156, "logo": "💻"},
            {"name": "Meta", "openings": 98, "logo": "👥"},
        ],
        "shortTermOutlook": "Strong demand expected to continue with 15% growth in next 6 months.",
        "longTermOutlook": "Excellent long-term prospects with AI integration creating new opportunities.",
        "relatedRoles": ["Frontend Developer", "Full Stack Engineer", "Technical Lead", "Solutions Architect"],
    }


def search_job_trends(client: CompletionClient, payload: JobTrendSearchRequest) -> Outcome:
    where = f" in {payload.location}" if payload.location else ""
    user_prompt = f"""Provide job market insights for {payload.role}{where}:

Provide JSON with:
1. demandScore: Number 0-100
2. demandTrend: "increasing" or "stable"
3. avgSalary: String like "$120,000"
4. salaryRange: String like "$90k - $150k"
5. openPositions: Number
6. topSkills: Array of 5 skills with name and percentage
7. topCompanies: Array of 4 companies with name, openings, logo emoji
8. shortTermOutlook: One sentence
9. longTermOutlook: One sentence
10. relatedRoles: Array of 4 related job titles

Format as valid JSON only."""
    return run_json_completion(
        client,
        endpoint="job-trends",
        system_prompt="You are a job market analyst. Respond only with valid JSON.",
        user_prompt=user_prompt,
        fallback=job_trends_fallback(),
        temperature=0.5,
        response_model=JobTrendInsights,
    )
