from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, Response, UploadFile
from fastapi.responses import PlainTextResponse
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_gateway, get_store
from config import settings
from models.requests import AnalyzeRequest, RewriteRequest
from models.responses import HealthResponse, RewriteResponse, SessionView
from models.schemas.resume import ResumeData
from services.errors import PhaseConflictError
from services.gemini_client import GeminiGateway
from services.resume_renderer import render_plain_text
from services.session_store import SessionStore

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health", response_model=HealthResponse)
async def health(gateway: GeminiGateway = Depends(get_gateway)):
    return HealthResponse(status="ok", gemini_configured=gateway.is_configured)


@router.post("/sessions", response_model=SessionView, status_code=201)
@limiter.limit(settings.session_rate_limit)
async def create_session(
    request: Request,
    store: SessionStore = Depends(get_store),
    gateway: GeminiGateway = Depends(get_gateway),
):
    return store.create(gateway).view()


@router.get("/sessions/{session_id}", response_model=SessionView)
async def get_session(session_id: str, store: SessionStore = Depends(get_store)):
    return store.get(session_id).view()


@router.delete("/sessions/{session_id}", status_code=204)
async def delete_session(session_id: str, store: SessionStore = Depends(get_store)):
    store.delete(session_id)
    return Response(status_code=204)


@router.post("/sessions/{session_id}/resume", response_model=SessionView)
@limiter.limit(settings.rate_limit)
async def upload_resume(
    request: Request,
    session_id: str,
    resume_file: UploadFile = File(...),
    job_description: str | None = Form(None),
    store: SessionStore = Depends(get_store),
):
    session = store.get(session_id)

    # Read and validate size
    content = await resume_file.read()
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Max size: {settings.max_upload_size_mb}MB",
        )

    if job_description and len(job_description) > settings.max_job_description_chars:
        raise HTTPException(
            status_code=400,
            detail=f"Job description too long (max {settings.max_job_description_chars} chars)",
        )

    await session.upload(content, resume_file.content_type or "", job_description)
    return session.view()


@router.put("/sessions/{session_id}/resume", response_model=SessionView)
async def update_resume(session_id: str, body: ResumeData, store: SessionStore = Depends(get_store)):
    session = store.get(session_id)
    session.update_resume(body)
    return session.view()


@router.post("/sessions/{session_id}/analysis", response_model=SessionView)
@limiter.limit(settings.rate_limit)
async def analyze(
    request: Request,
    session_id: str,
    body: AnalyzeRequest,
    store: SessionStore = Depends(get_store),
):
    session = store.get(session_id)
    await session.analyze(body.job_description)
    return session.view()


@router.post(
    "/sessions/{session_id}/experience/{experience_id}/bullets/{bullet_index}/rewrite",
    response_model=RewriteResponse,
)
@limiter.limit(settings.rate_limit)
async def rewrite_bullet(
    request: Request,
    session_id: str,
    experience_id: str,
    bullet_index: int,
    body: RewriteRequest | None = None,
    store: SessionStore = Depends(get_store),
):
    session = store.get(session_id)
    return await session.rewrite_bullet(experience_id, bullet_index, body.current_text if body else None)


@router.post("/sessions/{session_id}/reset", response_model=SessionView)
async def reset_session(session_id: str, store: SessionStore = Depends(get_store)):
    session = store.get(session_id)
    session.reset()
    return session.view()


@router.get("/sessions/{session_id}/export", response_class=PlainTextResponse)
async def export_resume(session_id: str, store: SessionStore = Depends(get_store)):
    session = store.get(session_id)
    if session.resume is None:
        raise PhaseConflictError("No resume to export")
    return PlainTextResponse(render_plain_text(session.resume))
