"""
FastAPI dependency providers.

All injectable dependencies are defined here as plain functions used with
FastAPI's Depends() system. Everything lives on app.state, built in the
lifespan of create_app().
"""

from __future__ import annotations

from fastapi import Request

from infrastructure.storage.verified_store import VerifiedStore
from services.verification_service import VerificationService


def get_verification_service(request: Request) -> VerificationService:
    return request.app.state.verification_service


def get_verified_store(request: Request) -> VerifiedStore:
    return request.app.state.verified_store
