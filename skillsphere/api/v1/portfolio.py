from fastapi import APIRouter, Depends, Request

from skillsphere.ai.types import CompletionClient
from skillsphere.api.deps import get_completion_client, get_store
from skillsphere.api.responses import outcome_response
from skillsphere.core.rate_limit import rate_limit
from skillsphere.schemas.common import SuccessResponse
from skillsphere.schemas.community import PortfolioSiteRequest, ProjectCreateRequest, ProjectUpdateRequest
from skillsphere.services.portfolio_service import generate_portfolio_site
from skillsphere.store.base import KeyValueStore
from skillsphere.store.records import add_project, delete_project, list_projects, update_project

router = APIRouter()


@router.get("/portfolio/{user_id}")
@rate_limit()
def get_portfolio(request: Request, user_id: str, store: KeyValueStore = Depends(get_store)):
    return {"projects": list_projects(store, user_id)}


@router.post("/portfolio/{user_id}")
@rate_limit()
def create_project(request: Request, user_id: str, payload: ProjectCreateRequest, store: KeyValueStore = Depends(get_store)):
    project = add_project(store, user_id, payload.model_dump(by_alias=True))
    return {"success": True, "project": project}


@router.put("/portfolio/{user_id}/{project_id}", response_model=SuccessResponse)
@rate_limit()
def edit_project(
    request: Request,
    user_id: str,
    project_id: str,
    payload: ProjectUpdateRequest,
    store: KeyValueStore = Depends(get_store),
):
    update_project(store, user_id, project_id, payload.model_dump(by_alias=True, exclude_none=True))
    return SuccessResponse()


@router.delete("/portfolio/{user_id}/{project_id}", response_model=SuccessResponse)
@rate_limit()
def remove_project(request: Request, user_id: str, project_id: str, store: KeyValueStore = Depends(get_store)):
    delete_project(store, user_id, project_id)
    return SuccessResponse()


@router.post("/portfolio/{user_id}/site")
@rate_limit()
def portfolio_site(
    request: Request,
    user_id: str,
    payload: PortfolioSiteRequest | None = None,
    client: CompletionClient = Depends(get_completion_client),
    store: KeyValueStore = Depends(get_store),
):
    outcome = generate_portfolio_site(client, store, user_id, payload or PortfolioSiteRequest())
    return outcome_response(outcome, endpoint="portfolio-site", error_message="Failed to generate portfolio site")
