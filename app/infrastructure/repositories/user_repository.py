"""
User repository implementation using SQLAlchemy.
"""

import uuid
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker
from starlette.concurrency import run_in_threadpool

from app.domain.models.base import DuplicateEntityError, EntityNotFoundError
from app.domain.models.user import User, UserRole
from app.domain.repositories.user_repository import UserRepository
from app.infrastructure.db.database import session_scope
from app.infrastructure.db.models import EntryModel, UserModel
from app.infrastructure.mappers.user_mapper import UserMapper


class SQLAlchemyUserRepository(UserRepository):
    """SQLAlchemy implementation of user repository."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory
        self.mapper = UserMapper()

    async def save(self, user: User) -> User:
        return await run_in_threadpool(self._save, user)

    async def find_by_id(self, user_id: str) -> Optional[User]:
        return await run_in_threadpool(self._find_by_id, user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        return await run_in_threadpool(self._find_by_email, email)

    async def find_all(self, role: Optional[UserRole] = None) -> List[User]:
        return await run_in_threadpool(self._find_all, role)

    async def count_by_role(self) -> Dict[UserRole, int]:
        return await run_in_threadpool(self._count_by_role)

    async def delete(self, user_id: str) -> None:
        await run_in_threadpool(self._delete, user_id)

    # Synchronous implementations

    def _save(self, user: User) -> User:
        email = str(user.email)
        try:
            with session_scope(self.session_factory) as session:
                # Check for duplicate email
                existing = session.query(UserModel).filter_by(email=email).first()
                if existing:
                    raise DuplicateEntityError("User", "email", email)

                model = self.mapper.domain_to_model(user)
                if model.id is None:
                    model.id = str(uuid.uuid4())
                if model.created_at is None:
                    model.created_at = datetime.utcnow()

                session.add(model)
                session.flush()
                return self.mapper.model_to_domain(model)
        except IntegrityError:
            # Lost a race with a concurrent registration of the same email
            raise DuplicateEntityError("User", "email", email)

    def _find_by_id(self, user_id: str) -> Optional[User]:
        with session_scope(self.session_factory) as session:
            model = session.query(UserModel).filter_by(id=user_id).first()

            if not model:
                return None

            return self.mapper.model_to_domain(model)

    def _find_by_email(self, email: str) -> Optional[User]:
        with session_scope(self.session_factory) as session:
            model = session.query(UserModel).filter_by(email=email.strip().lower()).first()

            if not model:
                return None

            return self.mapper.model_to_domain(model)

    def _find_all(self, role: Optional[UserRole]) -> List[User]:
        with session_scope(self.session_factory) as session:
            query = (
                session.query(UserModel, func.count(EntryModel.id))
                .outerjoin(EntryModel, EntryModel.owner_id == UserModel.id)
                .group_by(UserModel.id)
            )

            if role is not None:
                query = query.filter(UserModel.role == role)

            query = query.order_by(UserModel.created_at.desc())

            return [
                self.mapper.model_to_domain(model, entry_count=entry_count)
                for model, entry_count in query.all()
            ]

    def _count_by_role(self) -> Dict[UserRole, int]:
        with session_scope(self.session_factory) as session:
            rows = (
                session.query(UserModel.role, func.count(UserModel.id))
                .group_by(UserModel.role)
                .all()
            )

            counts = {role: 0 for role in UserRole}
            for role, total in rows:
                counts[UserRole(role)] = total
            return counts

    def _delete(self, user_id: str) -> None:
        with session_scope(self.session_factory) as session:
            model = session.query(UserModel).filter_by(id=user_id).first()

            if not model:
                raise EntityNotFoundError("User", user_id)

            # Cascade to the user's entries
            session.query(EntryModel).filter(EntryModel.owner_id == user_id).delete(synchronize_session=False)
            session.delete(model)
