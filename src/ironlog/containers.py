"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from ironlog.adapters.openai_client import OpenAIClientPool, OpenAIKeyValidator
from ironlog.adapters.supabase_daily_log_repository import (
    SupabaseDailyLogRepository,
)
from ironlog.adapters.supabase_profile_repository import SupabaseProfileRepository
from ironlog.config import Settings, resolve_api_key
from ironlog.services.estimation import EstimationService
from ironlog.services.logs import LogService
from ironlog.services.profiles import ProfileService
from ironlog.services.scoring import ProgressScoreService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    progress_score_service: ProgressScoreService
    estimation_service: EstimationService
    log_service: LogService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseProfileRepository(supabase_client)
    daily_log_repository = SupabaseDailyLogRepository(supabase_client)
    default_api_key = resolve_api_key(resolved_settings.openai_api_key)
    ai_clients = OpenAIClientPool(
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        timeout_seconds=resolved_settings.openai_timeout_seconds,
    )
    profile_service = ProfileService(
        repository=profile_repository,
        key_validator=OpenAIKeyValidator(),
    )
    progress_score_service = ProgressScoreService(
        profile_repository=profile_repository,
        daily_log_repository=daily_log_repository,
        ai_client_factory=ai_clients,
        default_api_key=default_api_key,
    )
    estimation_service = EstimationService(
        client_factory=ai_clients,
        default_api_key=default_api_key,
    )
    log_service = LogService(
        repository=daily_log_repository,
        profile_repository=profile_repository,
    )

    async def close_resources() -> None:
        await ai_clients.close()

    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        progress_score_service=progress_score_service,
        estimation_service=estimation_service,
        log_service=log_service,
        close_resources=close_resources,
    )
