"""
FastAPI Dependencies
Shared dependencies resolving components from the application container.
"""
from typing import Annotated

from fastapi import Depends, Request

from agents.delivery.orchestrator import NotificationOrchestrator
from agents.matching.matcher import MatchOrchestrator
from backend.container import Container
from backend.core.config import Settings


def get_container(request: Request) -> Container:
    """Container built by create_app."""
    return request.app.state.container


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_matcher(container: Annotated[Container, Depends(get_container)]) -> MatchOrchestrator:
    return container.matcher


def get_notifications(
    container: Annotated[Container, Depends(get_container)],
) -> NotificationOrchestrator:
    return container.notifications


AppSettings = Annotated[Settings, Depends(get_app_settings)]
Matcher = Annotated[MatchOrchestrator, Depends(get_matcher)]
Notifications = Annotated[NotificationOrchestrator, Depends(get_notifications)]
