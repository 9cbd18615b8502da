"""Health check endpoint."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
@router.get("/health", response_class=PlainTextResponse)
async def health_check():
    return "OK"
