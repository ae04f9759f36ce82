"""
Tests for the atomic like counter
"""
import threading
import uuid

import pytest

from app.core.database import SessionLocal
from app.core.errors import NotFoundError
from app.models.prompt import Prompt
from app.services.like_service import increment_likes


class TestIncrementLikes:

    def test_increment_returns_new_count(self, db, make_prompt):
        prompt = make_prompt(likes=41)

        assert increment_likes(db, prompt.id) == 42
        db.expire_all()
        assert db.get(Prompt, prompt.id).likes == 42

    def test_missing_prompt(self, db):
        with pytest.raises(NotFoundError):
            increment_likes(db, uuid.uuid4())

    def test_concurrent_likes_are_not_lost(self, db, make_prompt):
        prompt = make_prompt(likes=0)
        callers = 16
        barrier = threading.Barrier(callers)
        errors = []

        def like_once():
            session = SessionLocal()
            try:
                barrier.wait()
                increment_likes(session, prompt.id)
            except Exception as exc:  # surfaced through the assertion below
                errors.append(exc)
            finally:
                session.close()

        threads = [threading.Thread(target=like_once) for _ in range(callers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        db.expire_all()
        assert db.get(Prompt, prompt.id).likes == callers
