"""
StackIt Backend - Question Service Tests
=========================================

What we test:
    ✅ Question creation (tags default to an empty list)
    ✅ List view: newest first, author username, answer ids
    ✅ Detail view: nested answers with votes and comments
    ✅ Missing or malformed id returns None, never raises
    ✅ Unexpected storage failures surface as DatabaseError
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from stackit.exceptions import AuthenticationError, DatabaseError
from stackit.models import Comment, Question, Vote
from stackit.models.enums import VoteType
from stackit.schemas.question import QuestionCreate
from stackit.services.question_service import QuestionService


class TestCreateQuestion:

    def setup_method(self):
        self.service = QuestionService()

    @pytest.mark.asyncio
    async def test_create_returns_id_and_title(self, db_session, make_user):
        alice = await make_user("alice")

        created = await self.service.create_question(
            db_session,
            alice.id,
            QuestionCreate(
                title="What is a metaclass?",
                description="I keep reading about them but never used one.",
                tags=["python", "oop"],
            ),
        )

        stored = await db_session.get(Question, created.id)
        assert created.title == "What is a metaclass?"
        assert stored.user_id == alice.id
        assert stored.tags == ["python", "oop"]

    @pytest.mark.asyncio
    async def test_tags_are_optional(self, db_session, make_user):
        alice = await make_user("alice")

        created = await self.service.create_question(
            db_session,
            alice.id,
            QuestionCreate(title="Untagged question", description="Nothing to tag here."),
        )

        stored = await db_session.get(Question, created.id)
        assert stored.tags == []

    @pytest.mark.asyncio
    async def test_unknown_author_is_unauthorized(self, db_session):
        with pytest.raises(AuthenticationError):
            await self.service.create_question(
                db_session,
                uuid.uuid4(),
                QuestionCreate(title="Ghost question", description="Asked by nobody at all."),
            )


class TestGetQuestions:

    def setup_method(self):
        self.service = QuestionService()

    @pytest.mark.asyncio
    async def test_empty(self, db_session):
        assert await self.service.get_questions(db_session) == []

    @pytest.mark.asyncio
    async def test_newest_first_with_author_and_answer_ids(
        self, db_session, make_user, make_question, make_answer
    ):
        alice = await make_user("alice")
        bob = await make_user("bob")
        older = await make_question(alice, title="Older question")
        newer = await make_question(bob, title="Newer question")
        older.created_at = datetime.now(timezone.utc) - timedelta(hours=1)
        answer = await make_answer(bob, older)

        questions = await self.service.get_questions(db_session)

        assert [q.title for q in questions] == ["Newer question", "Older question"]
        assert questions[0].id == newer.id
        assert questions[0].user.username == "bob"
        assert questions[0].answers == []
        assert [a.id for a in questions[1].answers] == [answer.id]

    @pytest.mark.asyncio
    async def test_storage_failure_raises_database_error(self, mock_db_session):
        mock_db_session.execute.side_effect = RuntimeError("connection reset")

        with pytest.raises(DatabaseError):
            await self.service.get_questions(mock_db_session)


class TestGetQuestion:

    def setup_method(self):
        self.service = QuestionService()

    @pytest.mark.asyncio
    async def test_detail_nests_answers_votes_and_comments(
        self, db_session, make_user, make_question, make_answer
    ):
        alice = await make_user("alice")
        bob = await make_user("bob")
        question = await make_question(alice, tags=["python", "lists"])
        answer = await make_answer(bob, question)
        db_session.add_all([
            Vote(type=VoteType.UPVOTE, user_id=alice.id, answer_id=answer.id),
            Comment(content="Slicing copies the list.", user_id=alice.id, answer_id=answer.id),
        ])
        await db_session.flush()

        detail = await self.service.get_question(db_session, str(question.id))

        assert detail.id == question.id
        assert detail.tags == ["python", "lists"]
        assert detail.user.username == "alice"
        assert len(detail.answers) == 1
        nested = detail.answers[0]
        assert nested.user.username == "bob"
        assert [v.type for v in nested.votes] == [VoteType.UPVOTE]
        assert [c.content for c in nested.comments] == ["Slicing copies the list."]
        assert nested.comments[0].user.username == "alice"

    @pytest.mark.asyncio
    async def test_missing_id_returns_none(self, db_session):
        assert await self.service.get_question(db_session, "missing-id") is None
        assert await self.service.get_question(db_session, str(uuid.uuid4())) is None

    @pytest.mark.asyncio
    async def test_detail_serializes_camel_case(self, db_session, make_user, make_question):
        alice = await make_user("alice")
        question = await make_question(alice)

        detail = await self.service.get_question(db_session, str(question.id))
        body = detail.model_dump(by_alias=True, mode="json")

        assert body["userId"] == str(alice.id)
        assert "createdAt" in body
        assert body["answers"] == []
