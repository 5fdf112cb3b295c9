"""
Application wiring.
Builds repositories and services once, from settings, at startup.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from supabase import create_client

from app.config import Settings
from app.domain.repositories.entry_repository import EntryRepository
from app.domain.repositories.user_repository import UserRepository
from app.domain.services.auth_service import AuthService
from app.domain.services.entry_aggregator import EntryAggregator
from app.domain.services.file_storage import FileStorage
from app.domain.services.moderation_service import ModerationService
from app.infrastructure.auth.auth_service import JWTAuthService
from app.infrastructure.auth.jwt_handler import JWTHandler
from app.infrastructure.db.database import create_all_tables, create_db_engine, create_session_factory
from app.infrastructure.repositories.entry_repository import SQLAlchemyEntryRepository
from app.infrastructure.repositories.memory import (
    InMemoryEntryRepository,
    InMemoryStore,
    InMemoryUserRepository,
)
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from app.infrastructure.storage.storage_service import LocalFileStorage, SupabaseFileStorage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    settings: Settings

    user_repository: UserRepository
    entry_repository: EntryRepository

    jwt_handler: JWTHandler
    auth_service: AuthService
    file_storage: FileStorage
    aggregator: EntryAggregator
    moderation_service: ModerationService

    engine: Optional[Engine] = None
    session_factory: Optional[sessionmaker] = None
    store: Optional[InMemoryStore] = None

    def create_tables(self) -> None:
        """Create missing tables when running on a database backend."""
        if self.engine is not None:
            create_all_tables(self.engine)

    def dispose(self) -> None:
        if self.engine is not None:
            self.engine.dispose()


def build_file_storage(settings: Settings) -> FileStorage:
    if settings.file_storage_backend == "supabase":
        if not (settings.supabase_url and settings.supabase_service_key):
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_KEY are required for supabase file storage")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseFileStorage(client, bucket=settings.receipts_bucket)

    if settings.file_storage_backend == "local":
        return LocalFileStorage(settings.upload_dir, base_url=settings.upload_base_url)

    raise ValueError(f"Unknown file storage backend: {settings.file_storage_backend}")


def build_container(settings: Settings) -> Container:
    """
    Select the store and file storage backends and wire the services.
    The backend choice is made here once; nothing downstream reads it again.
    """
    engine = None
    session_factory = None
    store = None

    if settings.storage_backend == "memory":
        store = InMemoryStore()
        user_repository = InMemoryUserRepository(store)
        entry_repository = InMemoryEntryRepository(store)
    elif settings.storage_backend == "sqlalchemy":
        engine = create_db_engine(settings.database_url, echo=settings.database_echo)
        session_factory = create_session_factory(engine)
        user_repository = SQLAlchemyUserRepository(session_factory)
        entry_repository = SQLAlchemyEntryRepository(session_factory)
    else:
        raise ValueError(f"Unknown storage backend: {settings.storage_backend}")

    file_storage = build_file_storage(settings)

    jwt_handler = JWTHandler(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.jwt_access_token_expire_minutes,
    )

    logger.info(
        f"Using {settings.storage_backend} entry store and "
        f"{settings.file_storage_backend} file storage"
    )

    return Container(
        settings=settings,
        user_repository=user_repository,
        entry_repository=entry_repository,
        jwt_handler=jwt_handler,
        auth_service=JWTAuthService(jwt_handler),
        file_storage=file_storage,
        aggregator=EntryAggregator(),
        moderation_service=ModerationService(),
        engine=engine,
        session_factory=session_factory,
        store=store,
    )
