import logging

from fastapi import APIRouter, Depends, Request

from skillsphere.ai.types import CompletionClient
from skillsphere.api.deps import get_completion_client, get_store
from skillsphere.api.responses import outcome_response
from skillsphere.core.rate_limit import rate_limit
from skillsphere.schemas.common import SuccessResponse
from skillsphere.schemas.learning import (
    InterviewFeedbackRequest,
    InterviewQuestionRequest,
    LearningGuideRequest,
    LearningProgressResponse,
    MarkCompleteRequest,
    QuizRequest,
)
from skillsphere.services.learning_service import (
    build_learning_guide,
    evaluate_interview_answer,
    generate_quiz,
    pick_interview_question,
)
from skillsphere.store.base import KeyValueStore
from skillsphere.store.records import get_completed_courses, mark_course_complete

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/learning-guide")
@rate_limit()
def learning_guide(
    request: Request,
    payload: LearningGuideRequest,
    client: CompletionClient = Depends(get_completion_client),
):
    outcome = build_learning_guide(client, payload)
    return outcome_response(outcome, endpoint="learning-guide", error_message="Failed to build learning guide")


@router.get("/learning-progress/{user_id}", response_model=LearningProgressResponse)
@rate_limit()
def learning_progress(request: Request, user_id: str, store: KeyValueStore = Depends(get_store)):
    return LearningProgressResponse(completed=get_completed_courses(store, user_id))


@router.post("/mark-complete", response_model=SuccessResponse)
@rate_limit()
def mark_complete(request: Request, payload: MarkCompleteRequest, store: KeyValueStore = Depends(get_store)):
    completed = mark_course_complete(store, payload.user_id, payload.course_id)
    logger.info("course_marked_complete user=%s course=%s total=%s", payload.user_id, payload.course_id, len(completed))
    return SuccessResponse()


@router.post("/interview-question")
@rate_limit()
def interview_question(request: Request, payload: InterviewQuestionRequest | None = None):
    return {"question": pick_interview_question(payload.type if payload else None)}


@router.post("/interview-feedback")
@rate_limit()
def interview_feedback(
    request: Request,
    payload: InterviewFeedbackRequest,
    client: CompletionClient = Depends(get_completion_client),
):
    outcome = evaluate_interview_answer(client, payload)
    return outcome_response(outcome, endpoint="interview-feedback", error_message="Failed to evaluate answer")


@router.post("/generate-quiz")
@rate_limit()
def quiz(
    request: Request,
    payload: QuizRequest,
    client: CompletionClient = Depends(get_completion_client),
):
    outcome = generate_quiz(client, payload)
    return outcome_response(outcome, endpoint="generate-quiz", error_message="Failed to generate quiz")
