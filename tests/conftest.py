"""
Pytest configuration and fixtures
"""
import os
import tempfile
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import pytest

# Settings are read at import time, so the environment must be ready first
_TEST_DB_DIR = Path(tempfile.mkdtemp(prefix="promptnote-tests-"))
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-pytest-only")
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_DB_DIR / 'test.db'}"
os.environ["ENVIRONMENT"] = "test"

import app.models  # noqa: E402,F401
from app.core.database import SessionLocal, engine  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.models.base import Base  # noqa: E402
from app.models.prompt import Prompt, PromptCategory  # noqa: E402
from app.models.user_profile import UserRole  # noqa: E402
from app.roles.crud import UserProfileCRUD  # noqa: E402


FIXED_NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def db():
    """Create a database session on a fresh schema"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db):
    """Test client whose server clock is pinned to FIXED_NOW"""
    from fastapi.testclient import TestClient

    from app.api.dependencies import get_now
    from main import app

    app.dependency_overrides[get_now] = lambda: FIXED_NOW
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Create an identity with a profile holding ``role``"""

    def _make_user(
        role: UserRole = UserRole.NORMAL,
        expires_at: Optional[datetime] = None,
    ) -> uuid.UUID:
        user_id = uuid.uuid4()
        UserProfileCRUD.ensure_user(db, user_id, f"{user_id.hex[:8]}@example.com")
        profile = UserProfileCRUD.ensure_profile(db, user_id)
        UserProfileCRUD.set_role(db, profile, role, expires_at)
        db.commit()
        return user_id

    return _make_user


@pytest.fixture
def make_prompt(db):
    def _make_prompt(**overrides) -> Prompt:
        fields = {
            "title": "Refactor helper",
            "description": "Ask the model to refactor a function",
            "content": "Refactor the following code...",
            "tags": ["python", "refactoring"],
            "author": "PromptNote",
            "category": PromptCategory.CODING.value,
            "likes": 0,
        }
        fields.update(overrides)
        prompt = Prompt(**fields)
        db.add(prompt)
        db.commit()
        db.refresh(prompt)
        return prompt

    return _make_prompt


def auth_headers(user_id: uuid.UUID) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}
