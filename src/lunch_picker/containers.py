"""Dependency container wiring for the application."""

import random
from dataclasses import dataclass

from supabase import create_client

from lunch_picker.adapters.csv_user_directory import CsvUserDirectory
from lunch_picker.adapters.supabase_session_store import SupabaseSessionStore
from lunch_picker.app_logging import configure_logging
from lunch_picker.config import Settings, parse_pick_policy
from lunch_picker.services.identifiers import IdentifierGenerator, UuidIdentifierGenerator
from lunch_picker.services.lunch import LunchSessionService
from lunch_picker.services.queries import SessionQueryService
from lunch_picker.services.selection import RandomSelector
from lunch_picker.services.store import InMemorySessionStore, SessionStore
from lunch_picker.services.submissions import SubmissionCoordinator
from lunch_picker.services.users import UserDirectory


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    identifiers: IdentifierGenerator
    store: SessionStore
    user_directory: UserDirectory | None
    query_service: SessionQueryService
    submission_coordinator: SubmissionCoordinator
    random_selector: RandomSelector
    lunch_service: LunchSessionService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level)
    identifiers = UuidIdentifierGenerator()
    store = _build_store(resolved_settings, identifiers)
    user_directory = (
        CsvUserDirectory.from_path(resolved_settings.users_csv_path)
        if resolved_settings.users_csv_path
        else None
    )
    query_service = SessionQueryService(store)
    submission_coordinator = SubmissionCoordinator(store, identifiers)
    random_selector = RandomSelector(
        store=store,
        rng=random.Random(resolved_settings.random_seed),
        policy=parse_pick_policy(resolved_settings.pick_policy),
    )
    lunch_service = LunchSessionService(
        store=store,
        queries=query_service,
        submissions=submission_coordinator,
        selector=random_selector,
        user_directory=user_directory,
    )
    return AppContainer(
        settings=resolved_settings,
        identifiers=identifiers,
        store=store,
        user_directory=user_directory,
        query_service=query_service,
        submission_coordinator=submission_coordinator,
        random_selector=random_selector,
        lunch_service=lunch_service,
    )


def _build_store(settings: Settings, identifiers: IdentifierGenerator) -> SessionStore:
    if settings.store_backend == "memory":
        return InMemorySessionStore(identifiers=identifiers)
    if not settings.supabase_url or not settings.supabase_service_key:
        raise ValueError("Supabase store requires supabase_url and supabase_service_key")
    client = create_client(settings.supabase_url, settings.supabase_service_key)
    return SupabaseSessionStore(
        client=client,
        table=settings.supabase_sessions_table,
        max_attempts=settings.store_max_attempts,
        identifiers=identifiers,
    )
