from fastapi import APIRouter

from app.api.email import router as email_router

api_router = APIRouter()

# API routes at /api/*
api_router.include_router(email_router, prefix="/api", tags=["email"])
