from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.concurrency import run_in_threadpool

from skillsphere.ai.types import CompletionClient
from skillsphere.api.deps import get_completion_client
from skillsphere.api.responses import outcome_response
from skillsphere.api.uploads import extract_upload
from skillsphere.core.rate_limit import rate_limit
from skillsphere.schemas.resume import ExtractTextResponse, ResumeAnalysisRequest, ResumeGenerateRequest
from skillsphere.services.resume_service import analyze_resume, generate_resume

router = APIRouter()


@router.post("/resume-analysis")
@rate_limit()
def resume_analysis(
    request: Request,
    payload: ResumeAnalysisRequest,
    client: CompletionClient = Depends(get_completion_client),
):
    outcome = analyze_resume(client, payload)
    return outcome_response(outcome, endpoint="resume-analysis", error_message="Failed to analyze resume")


@router.post("/resume-analysis/upload")
@rate_limit()
async def resume_analysis_upload(
    request: Request,
    file: UploadFile = File(...),
    target_job: str = Form(default="", alias="targetJob", max_length=200),
    client: CompletionClient = Depends(get_completion_client),
):
    document = await extract_upload(file)
    payload = ResumeAnalysisRequest(resume_text=document.text[:50000], target_job=target_job)
    outcome = await run_in_threadpool(analyze_resume, client, payload)
    response = outcome_response(outcome, endpoint="resume-analysis", error_message="Failed to analyze resume")
    response.headers["X-Extracted-Characters"] = str(document.characters)
    return response


@router.post("/resume/extract-text", response_model=ExtractTextResponse)
@rate_limit()
async def resume_extract_text(request: Request, file: UploadFile = File(...)):
    document = await extract_upload(file)
    return ExtractTextResponse(text=document.text, characters=document.characters, source_type=document.source_type)


@router.post("/resume/generate")
@rate_limit()
def resume_generate(
    request: Request,
    payload: ResumeGenerateRequest,
    client: CompletionClient = Depends(get_completion_client),
):
    outcome = generate_resume(client, payload)
    return outcome_response(outcome, endpoint="resume-generate", error_message="Failed to generate resume")
