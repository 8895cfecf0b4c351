from fastapi import APIRouter, Depends, Request

from skillsphere.ai.types import CompletionClient
from skillsphere.api.deps import get_completion_client, get_store
from skillsphere.api.responses import outcome_response
from skillsphere.core.rate_limit import rate_limit
from skillsphere.schemas.career import CareerRecommendRequest, JobTrendSearchRequest, PersonaRequest
from skillsphere.services.career_service import (
    POPULAR_ROLES,
    generate_persona,
    recommend_careers,
    search_job_trends,
)
from skillsphere.store.base import KeyValueStore
from skillsphere.store.records import get_persona

router = APIRouter()


@router.post("/career-recommend")
@rate_limit()
def career_recommend(
    request: Request,
    payload: CareerRecommendRequest,
    client: CompletionClient = Depends(get_completion_client),
):
    outcome = recommend_careers(client, payload)
    return outcome_response(
        outcome,
        endpoint="career-recommend",
        error_message="Failed to generate career recommendations",
    )


@router.get("/career-persona/{user_id}")
@rate_limit()
def career_persona(request: Request, user_id: str, store: KeyValueStore = Depends(get_store)):
    return {"persona": get_persona(store, user_id)}


@router.post("/generate-persona")
@rate_limit()
def create_persona(
    request: Request,
    payload: PersonaRequest,
    client: CompletionClient = Depends(get_completion_client),
    store: KeyValueStore = Depends(get_store),
):
    outcome = generate_persona(client, store, payload)
    return outcome_response(
        outcome,
        endpoint="generate-persona",
        error_message="Failed to generate persona",
        wrap="persona",
    )


@router.get("/job-trends/popular")
@rate_limit()
def popular_roles(request: Request):
    return {"roles": list(POPULAR_ROLES)}


@router.post("/job-trends/search")
@rate_limit()
def job_trends_search(
    request: Request,
    payload: JobTrendSearchRequest,
    client: CompletionClient = Depends(get_completion_client),
):
    outcome = search_job_trends(client, payload)
    return outcome_response(outcome, endpoint="job-trends", error_message="Failed to fetch job trends")
