"""Unit tests for the feedback, audit and request log services."""

from __future__ import annotations

import pytest
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import sessionmaker
from sqlalchemy.schema import CreateTable

from feedback_backend.core.exceptions import ResourceNotFoundError
from feedback_backend.core.middleware import serialize_request_body
from feedback_backend.db.seeds.seed_feedbacks import SAMPLE_FEEDBACKS, seed_feedbacks
from feedback_backend.models.activity_log import ActivityLog
from feedback_backend.models.api_request import ApiRequest
from feedback_backend.models.feedback import Feedback
from feedback_backend.schemas.schemas import FeedbackInput
from feedback_backend.services.audit_service import audit_service
from feedback_backend.services.feedback_service import MAX_ID, feedback_service, parse_feedback_id
from feedback_backend.services.request_log_service import request_log_service


@pytest.fixture
def session(engine):
    db = sessionmaker(bind=engine)()
    yield db
    db.close()


def _input(**overrides) -> FeedbackInput:
    data = {
        "title": "Login Issue",
        "platform": "Web",
        "module": "Authentication",
        "description": "x",
    }
    data.update(overrides)
    return FeedbackInput(**data)


class TestFeedbackService:
    def test_create_records_activity_after_insert(self, session):
        feedback = feedback_service.create(session, _input())

        assert feedback.id is not None
        log = session.query(ActivityLog).one()
        assert (log.action, log.table_name, log.record_id) == ("CREATE", "feedbacks", feedback.id)
        assert log.details == "Created feedback: Login Issue"

    def test_update_uses_new_title(self, session):
        feedback = feedback_service.create(session, _input())

        updated = feedback_service.update(session, feedback.id, _input(title="New title", tags="ui"))

        assert updated.title == "New title"
        assert updated.tags == "ui"
        assert updated.updated_at is not None
        latest = audit_service.recent(session)[0]
        assert latest.details == "Updated feedback: New title"

    def test_delete_uses_stored_title(self, session):
        feedback = feedback_service.create(session, _input(title="Old title"))

        feedback_service.delete(session, feedback.id)

        assert session.query(Feedback).count() == 0
        latest = audit_service.recent(session)[0]
        assert (latest.action, latest.details) == ("DELETE", "Deleted feedback: Old title")

    @pytest.mark.parametrize("call", [
        lambda db: feedback_service.get(db, 404),
        lambda db: feedback_service.update(db, 404, _input()),
        lambda db: feedback_service.delete(db, 404),
    ])
    def test_missing_raises_not_found(self, session, call):
        with pytest.raises(ResourceNotFoundError) as exc_info:
            call(session)

        assert exc_info.value.message == "Feedback not found"
        assert session.query(ActivityLog).count() == 0


class TestParseFeedbackId:
    @pytest.mark.parametrize("raw, expected", [("1", 1), ("0042", 42), (7, 7), (str(MAX_ID), MAX_ID)])
    def test_valid(self, raw, expected):
        assert parse_feedback_id(raw) == expected

    @pytest.mark.parametrize("raw", ["", "abc", "1e3", " 1", "-1", "0", "\u0661", str(MAX_ID + 1), 0, -5])
    def test_unusable_is_not_found(self, raw):
        with pytest.raises(ResourceNotFoundError) as exc_info:
            parse_feedback_id(raw)

        assert exc_info.value.message == "Feedback not found"

    def test_service_accepts_path_strings(self, session):
        feedback = feedback_service.create(session, _input())

        assert feedback_service.get(session, str(feedback.id)).id == feedback.id
        feedback_service.delete(session, str(feedback.id))

        latest = audit_service.recent(session)[0]
        assert (latest.action, latest.record_id) == ("DELETE", feedback.id)


class TestMysqlSchema:
    @pytest.mark.parametrize("model, column", [
        (Feedback, "description"),
        (ApiRequest, "request_body"),
        (ApiRequest, "response_body"),
    ])
    def test_unbounded_columns_are_longtext(self, model, column):
        ddl = str(CreateTable(model.__table__).compile(dialect=mysql.dialect()))

        line = next(row for row in ddl.splitlines() if row.strip().startswith(column + " "))
        assert "LONGTEXT" in line


class TestAuditService:
    def test_record_returns_entry(self, session):
        entry = audit_service.record(session, "CREATE", "feedbacks", 1, "Created feedback: a")

        assert entry.id is not None

    def test_record_swallows_failures(self, session, monkeypatch):
        def broken_commit():
            raise RuntimeError("disk full")

        monkeypatch.setattr(session, "commit", broken_commit)

        assert audit_service.record(session, "CREATE", "feedbacks", 1, "x") is None


class TestRequestLogService:
    def test_record_and_recent(self, engine):
        factory = sessionmaker(bind=engine)

        assert request_log_service.record(factory, "GET", "/api/feedbacks", "{}", "[]", 200, 3)
        assert request_log_service.record(factory, "POST", "/api/feedbacks", "{}", "{}", 400, 1)

        db = factory()
        try:
            rows = request_log_service.recent(db)
        finally:
            db.close()
        assert [r.method for r in rows] == ["POST", "GET"]

    def test_long_endpoint_is_truncated(self, engine):
        factory = sessionmaker(bind=engine)

        request_log_service.record(factory, "GET", "/api/feedbacks?search=" + "x" * 600, "{}", "", 200, 0)

        db = factory()
        try:
            assert len(db.query(ApiRequest).one().endpoint) == 500
        finally:
            db.close()


class TestSerializeRequestBody:
    def test_empty(self):
        assert serialize_request_body(b"") == "{}"

    def test_json_is_compacted(self):
        assert serialize_request_body(b'{ "title": "a",  "tags": "" }') == '{"title":"a","tags":""}'

    def test_non_json_kept_as_text(self):
        assert serialize_request_body(b"title=a") == "title=a"


class TestSeedFeedbacks:
    def test_seed_is_idempotent(self, session):
        assert seed_feedbacks(session) == len(SAMPLE_FEEDBACKS)
        assert seed_feedbacks(session) == 0

        assert session.query(Feedback).count() == len(SAMPLE_FEEDBACKS)
        assert session.query(ActivityLog).count() == len(SAMPLE_FEEDBACKS)
