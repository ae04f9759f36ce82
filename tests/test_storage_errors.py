"""
Tests for translating database failures into domain errors
"""
import pytest
from sqlalchemy.exc import (
    DataError,
    DBAPIError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    ProgrammingError,
)

from app.core.database import storage_call
from app.core.errors import DomainValidationError, StorageUnavailableError


class RecordingSession:
    def __init__(self):
        self.rollbacks = 0

    def rollback(self):
        self.rollbacks += 1


def _raise(exc):
    session = RecordingSession()
    with storage_call(session, "test operation"):
        raise exc


class TestStorageCall:

    @pytest.mark.parametrize(
        "exc",
        [
            OperationalError("SELECT 1", {}, Exception("connection refused")),
            InterfaceError("SELECT 1", {}, Exception("connection already closed")),
            DBAPIError("SELECT 1", {}, Exception("server closed"), connection_invalidated=True),
        ],
    )
    def test_connection_failures_are_retryable(self, exc):
        with pytest.raises(StorageUnavailableError) as info:
            _raise(exc)

        assert info.value.retryable is True
        assert info.value.status_code == 503

    @pytest.mark.parametrize(
        "exc",
        [
            ProgrammingError("SELEC 1", {}, Exception("syntax error")),
            DataError("INSERT", {}, Exception("value too long")),
        ],
    )
    def test_programming_errors_are_not_reported_as_outages(self, exc):
        with pytest.raises(type(exc)):
            _raise(exc)

    def test_rolls_back_before_propagating(self):
        session = RecordingSession()

        with pytest.raises(ProgrammingError):
            with storage_call(session, "test operation"):
                raise ProgrammingError("SELEC 1", {}, Exception("syntax error"))

        assert session.rollbacks == 1

    def test_constraint_violation_is_a_validation_error(self):
        with pytest.raises(DomainValidationError) as info:
            _raise(IntegrityError("INSERT", {}, Exception("unique violation")))

        assert info.value.status_code == 422


def test_readiness_maps_programming_error_to_server_error(client):
    from app.core.database import get_db
    from main import app

    class BrokenSession(RecordingSession):
        def execute(self, *args, **kwargs):
            raise ProgrammingError("SELECT 1", {}, Exception("relation missing"))

    app.dependency_overrides[get_db] = lambda: BrokenSession()

    with pytest.raises(ProgrammingError):
        client.get("/health/ready")
