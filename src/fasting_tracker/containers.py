"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from fasting_tracker.adapters.supabase_kv_store import SupabaseKeyValueStore
from fasting_tracker.config import Settings
from fasting_tracker.services.auth import AuthGate
from fasting_tracker.services.clock import Clock, utc_now
from fasting_tracker.services.fasting import FastingService
from fasting_tracker.services.meals import MealPlanService
from fasting_tracker.services.profiles import ProfileService
from fasting_tracker.services.repository import RecordRepository
from fasting_tracker.services.store import InMemoryKeyValueStore, KeyValueStore
from fasting_tracker.services.workouts import WorkoutService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: KeyValueStore
    repository: RecordRepository
    auth_gate: AuthGate
    fasting_service: FastingService
    profile_service: ProfileService
    meal_plan_service: MealPlanService
    workout_service: WorkoutService
    clock: Clock


def build_store(settings: Settings) -> KeyValueStore:
    """Create the key-value store selected by the settings."""
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase storage needs SUPABASE_URL and SUPABASE_SERVICE_KEY")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStore(client, table=settings.supabase_table)
    if settings.storage_backend == "memory":
        return InMemoryKeyValueStore()
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")


def build_container(
    settings: Settings | None = None,
    store: KeyValueStore | None = None,
    clock: Clock = utc_now,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_store = store if store is not None else build_store(resolved_settings)
    repository = RecordRepository(resolved_store, prefix=resolved_settings.key_prefix)
    return AppContainer(
        settings=resolved_settings,
        store=resolved_store,
        repository=repository,
        auth_gate=AuthGate(repository, clock=clock),
        fasting_service=FastingService(repository, clock=clock),
        profile_service=ProfileService(repository, clock=clock),
        meal_plan_service=MealPlanService(repository, clock=clock),
        workout_service=WorkoutService(repository, clock=clock),
        clock=clock,
    )
