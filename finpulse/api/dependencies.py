"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from finpulse.infrastructure.database.session import SessionFactory, get_session_factory
from finpulse.services.dashboard import DashboardLoader


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_dashboard_loader(
    session_factory: SessionFactory = Depends(get_session_factory),
) -> DashboardLoader:
    """Provide a dashboard loader bound to the session factory"""
    return DashboardLoader(session_factory)
