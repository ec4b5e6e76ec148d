"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from zoneinfo import ZoneInfo

from supabase import create_client

from sehat_sense.adapters.json_file_state_storage import JsonFileStateStorage
from sehat_sense.adapters.openai_generative_client import OpenAIGenerativeClient
from sehat_sense.adapters.supabase_state_storage import SupabaseStateStorage
from sehat_sense.config import Settings
from sehat_sense.services.chat import ChatSession
from sehat_sense.services.gateway import HealthGateway
from sehat_sense.services.meal_logging import MealLoggingService
from sehat_sense.services.planner import PlannerService
from sehat_sense.services.reports import ReportService
from sehat_sense.services.store import StateStorage, StateStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: StateStore
    gateway: HealthGateway
    meal_logging_service: MealLoggingService
    report_service: ReportService
    planner_service: PlannerService
    close_resources: Callable[[], Awaitable[None]]

    def new_chat_session(self) -> ChatSession:
        """Start a fresh, unpersisted chat session."""
        return ChatSession(gateway=self.gateway, store=self.store)


def build_storage(settings: Settings) -> StateStorage:
    """Pick the durable storage backend from settings."""
    if settings.uses_supabase:
        client = create_client(
            str(settings.supabase_url), str(settings.supabase_service_key)
        )
        return SupabaseStateStorage(client, namespace=settings.state_namespace)
    return JsonFileStateStorage(
        data_dir=settings.data_dir, namespace=settings.state_namespace
    )


def build_container(
    settings: Settings | None = None, storage: StateStorage | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    timezone = (
        ZoneInfo(resolved_settings.timezone) if resolved_settings.timezone else None
    )
    store = StateStore.open(storage or build_storage(resolved_settings), timezone)
    openai_client = OpenAIGenerativeClient.create(
        resolved_settings.openai_api_key, store=resolved_settings.openai_store
    )
    gateway = HealthGateway(
        client=openai_client,
        model=resolved_settings.openai_model,
        vision_model=resolved_settings.openai_vision_model,
        image_search_url=resolved_settings.image_search_url_template,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        store=store,
        gateway=gateway,
        meal_logging_service=MealLoggingService(gateway=gateway, store=store),
        report_service=ReportService(gateway=gateway, store=store),
        planner_service=PlannerService(gateway=gateway, store=store),
        close_resources=close_resources,
    )
