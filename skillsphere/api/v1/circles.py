import logging

from fastapi import APIRouter, Depends, Request

from skillsphere.api.deps import get_store
from skillsphere.core.rate_limit import rate_limit
from skillsphere.schemas.common import SuccessResponse
from skillsphere.schemas.community import CircleCreateRequest, CircleJoinRequest
from skillsphere.store.base import KeyValueStore
from skillsphere.store.records import create_circle, join_circle, list_circles

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/peer-circles")
@rate_limit()
def get_circles(request: Request, store: KeyValueStore = Depends(get_store)):
    return {"circles": list_circles(store)}


@router.post("/peer-circles")
@rate_limit()
def new_circle(request: Request, payload: CircleCreateRequest, store: KeyValueStore = Depends(get_store)):
    circle = create_circle(store, payload.model_dump(by_alias=True))
    logger.info("peer_circle_created id=%s creator=%s", circle["id"], payload.creator_id)
    return {"success": True, "circle": circle}


@router.post("/peer-circles/{circle_id}/join", response_model=SuccessResponse)
@rate_limit()
def join(request: Request, circle_id: str, payload: CircleJoinRequest, store: KeyValueStore = Depends(get_store)):
    join_circle(store, circle_id, payload.user_id)
    return SuccessResponse()
