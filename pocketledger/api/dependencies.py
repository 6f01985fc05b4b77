"""Dependency injection for FastAPI endpoints"""

from datetime import datetime, timezone
from fastapi import Request


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_now() -> datetime:
    """Current moment used for interest accrual and current-month reports"""
    return datetime.now(timezone.utc)
