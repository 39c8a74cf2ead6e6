"""Shared dependencies for API routes."""

from fastapi import Request

from services.gemini_client import GeminiGateway
from services.session_store import SessionStore


def get_gateway(request: Request) -> GeminiGateway:
    return request.app.state.gateway


def get_store(request: Request) -> SessionStore:
    return request.app.state.store
