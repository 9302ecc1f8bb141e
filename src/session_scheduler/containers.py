"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from session_scheduler.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from session_scheduler.adapters.supabase_user_repository import SupabaseUserRepository
from session_scheduler.config import Settings
from session_scheduler.services.feedback import FeedbackService
from session_scheduler.services.sessions import SessionService
from session_scheduler.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session_service: SessionService
    feedback_service: FeedbackService
    user_service: UserService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    session_repository = SupabaseSessionRepository(
        supabase_client,
        table=resolved_settings.sessions_table,
        append_participant_function=resolved_settings.append_participant_function,
    )
    user_repository = SupabaseUserRepository(
        supabase_client, table=resolved_settings.users_table
    )

    return AppContainer(
        settings=resolved_settings,
        session_service=SessionService(session_repository),
        feedback_service=FeedbackService(session_repository),
        user_service=UserService(user_repository),
    )
