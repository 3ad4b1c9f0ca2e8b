"""
StackIt Backend - Answer Service Tests
=======================================

What:  AnswerService against a real in-memory database.

What we test:
    ✅ Answer creation notifies the question owner (ANSWER) and mentions
    ✅ Unknown or malformed question id raises NotFoundError, writes nothing
    ✅ Vote toggle: add, remove on repeat, switch in place
    ✅ One vote row per user per answer, including the insert race
    ✅ Comment creation notifies the answer author (COMMENT) and mentions
"""

import uuid

import pytest
from sqlalchemy import func, select

from stackit.exceptions import AuthenticationError, NotFoundError, ValidationError
from stackit.models import Answer, Comment, Notification, Vote
from stackit.models.enums import NotificationType, VoteType
from stackit.schemas.answer import AnswerCreate
from stackit.services.answer_service import AnswerService


async def _notifications_for(db, user_id):
    result = await db.execute(
        select(Notification)
        .where(Notification.user_id == user_id)
        .order_by(Notification.created_at)
    )
    return result.scalars().all()


async def _count(db, model):
    return (await db.execute(select(func.count()).select_from(model))).scalar_one()


class TestCreateAnswer:

    def setup_method(self):
        self.service = AnswerService()

    @pytest.mark.asyncio
    async def test_notifies_question_owner(self, db_session, make_user, make_question):
        """One ANSWER notification to the owner, pointing at the new answer."""
        alice = await make_user("alice")
        bob = await make_user("bob")
        question = await make_question(alice, title="Sorting dicts by value")

        answer = await self.service.create_answer(
            db_session,
            bob.id,
            AnswerCreate(content="Use sorted() with a key function.", question_id=str(question.id)),
        )

        assert answer.question_id == question.id
        assert answer.user.username == "bob"
        notifications = await _notifications_for(db_session, alice.id)
        assert len(notifications) == 1
        assert notifications[0].type == NotificationType.ANSWER
        assert notifications[0].related_id == answer.id
        assert notifications[0].content == "New answer to your question: Sorting dicts by value"
        assert await _notifications_for(db_session, bob.id) == []

    @pytest.mark.asyncio
    async def test_owner_answering_own_question_is_notified(
        self, db_session, make_user, make_question
    ):
        alice = await make_user("alice")
        question = await make_question(alice)

        await self.service.create_answer(
            db_session,
            alice.id,
            AnswerCreate(content="Answering myself after all.", question_id=str(question.id)),
        )

        notifications = await _notifications_for(db_session, alice.id)
        assert [n.type for n in notifications] == [NotificationType.ANSWER]

    @pytest.mark.asyncio
    async def test_mentions_in_answer(self, db_session, make_user, make_question):
        """ANSWER to the owner plus one MENTION per resolvable handle."""
        alice = await make_user("alice")
        bob = await make_user("bob")
        carol = await make_user("carol")
        question = await make_question(alice)

        await self.service.create_answer(
            db_session,
            bob.id,
            AnswerCreate(
                content="@carol showed me this, @nobody knows it",
                question_id=str(question.id),
            ),
        )

        carol_notes = await _notifications_for(db_session, carol.id)
        assert len(carol_notes) == 1
        assert carol_notes[0].type == NotificationType.MENTION
        assert carol_notes[0].content == "You were mentioned in an answer by bob"
        assert len(await _notifications_for(db_session, alice.id)) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("question_id", ["missing-id", str(uuid.uuid4())])
    async def test_unknown_question_raises_not_found(self, db_session, make_user, question_id):
        bob = await make_user("bob")

        with pytest.raises(NotFoundError):
            await self.service.create_answer(
                db_session,
                bob.id,
                AnswerCreate(content="An answer to nothing at all.", question_id=question_id),
            )

        assert await _count(db_session, Answer) == 0
        assert await _count(db_session, Notification) == 0

    @pytest.mark.asyncio
    async def test_deleted_author_is_unauthorized(self, db_session, make_user, make_question):
        """A token for a user id that has no row cannot post."""
        alice = await make_user("alice")
        question = await make_question(alice)

        with pytest.raises(AuthenticationError):
            await self.service.create_answer(
                db_session,
                uuid.uuid4(),
                AnswerCreate(content="Ghost answer content", question_id=str(question.id)),
            )


class TestVoteAnswer:

    def setup_method(self):
        self.service = AnswerService()

    async def _vote_rows(self, db, answer_id):
        result = await db.execute(select(Vote).where(Vote.answer_id == answer_id))
        return result.scalars().all()

    @pytest.mark.asyncio
    async def test_first_vote_is_counted(self, db_session, make_user, make_question, make_answer):
        alice = await make_user("alice")
        bob = await make_user("bob")
        answer = await make_answer(alice, await make_question(alice))

        tally = await self.service.vote_answer(db_session, bob.id, str(answer.id), VoteType.UPVOTE)

        assert (tally.upvotes, tally.downvotes) == (1, 0)

    @pytest.mark.asyncio
    async def test_repeating_vote_toggles_it_off(
        self, db_session, make_user, make_question, make_answer
    ):
        alice = await make_user("alice")
        bob = await make_user("bob")
        answer = await make_answer(alice, await make_question(alice))

        await self.service.vote_answer(db_session, bob.id, str(answer.id), VoteType.UPVOTE)
        tally = await self.service.vote_answer(db_session, bob.id, str(answer.id), VoteType.UPVOTE)

        assert (tally.upvotes, tally.downvotes) == (0, 0)
        assert await self._vote_rows(db_session, answer.id) == []

    @pytest.mark.asyncio
    async def test_switching_keeps_one_row(self, db_session, make_user, make_question, make_answer):
        """UPVOTE then DOWNVOTE leaves exactly one DOWNVOTE row."""
        alice = await make_user("alice")
        bob = await make_user("bob")
        answer = await make_answer(alice, await make_question(alice))

        await self.service.vote_answer(db_session, bob.id, str(answer.id), VoteType.UPVOTE)
        tally = await self.service.vote_answer(
            db_session, bob.id, str(answer.id), VoteType.DOWNVOTE
        )

        assert (tally.upvotes, tally.downvotes) == (0, 1)
        rows = await self._vote_rows(db_session, answer.id)
        assert len(rows) == 1
        assert rows[0].type == VoteType.DOWNVOTE

    @pytest.mark.asyncio
    async def test_votes_from_different_users_add_up(
        self, db_session, make_user, make_question, make_answer
    ):
        alice = await make_user("alice")
        answer = await make_answer(alice, await make_question(alice))
        for name in ("bob", "carol"):
            voter = await make_user(name)
            tally = await self.service.vote_answer(
                db_session, voter.id, str(answer.id), VoteType.UPVOTE
            )

        dave = await make_user("dave")
        tally = await self.service.vote_answer(db_session, dave.id, str(answer.id), VoteType.DOWNVOTE)

        assert (tally.upvotes, tally.downvotes) == (2, 1)

    @pytest.mark.asyncio
    async def test_voting_sends_no_notification(
        self, db_session, make_user, make_question, make_answer
    ):
        alice = await make_user("alice")
        bob = await make_user("bob")
        answer = await make_answer(alice, await make_question(alice))

        await self.service.vote_answer(db_session, bob.id, str(answer.id), VoteType.UPVOTE)

        assert await _count(db_session, Notification) == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("answer_id", ["missing-id", str(uuid.uuid4())])
    async def test_unknown_answer_raises_not_found(self, db_session, make_user, answer_id):
        bob = await make_user("bob")

        with pytest.raises(NotFoundError):
            await self.service.vote_answer(db_session, bob.id, answer_id, VoteType.UPVOTE)

    @pytest.mark.asyncio
    async def test_concurrent_insert_falls_back_to_update(
        self, db_session, make_user, make_question, make_answer
    ):
        """
        Simulates a second request that saw no vote (stale read) while the
        first one already inserted it: the unique constraint rejects the
        insert and the vote is applied as an update instead.
        """
        alice = await make_user("alice")
        bob = await make_user("bob")
        answer = await make_answer(alice, await make_question(alice))
        await self.service.vote_answer(db_session, bob.id, str(answer.id), VoteType.UPVOTE)

        real_find_vote = self.service._find_vote
        lookups = []

        async def stale_first_lookup(db, user_id, answer_id):
            lookups.append(answer_id)
            if len(lookups) == 1:
                return None
            return await real_find_vote(db, user_id, answer_id)

        self.service._find_vote = stale_first_lookup
        tally = await self.service.vote_answer(
            db_session, bob.id, str(answer.id), VoteType.DOWNVOTE
        )

        assert len(lookups) == 2
        assert (tally.upvotes, tally.downvotes) == (0, 1)
        rows = await self._vote_rows(db_session, answer.id)
        assert len(rows) == 1
        assert rows[0].type == VoteType.DOWNVOTE


class TestCommentOnAnswer:

    def setup_method(self):
        self.service = AnswerService()

    @pytest.mark.asyncio
    async def test_notifies_answer_author(self, db_session, make_user, make_question, make_answer):
        alice = await make_user("alice")
        bob = await make_user("bob")
        carol = await make_user("carol")
        answer = await make_answer(bob, await make_question(alice))

        comment = await self.service.comment_on_answer(
            db_session, carol.id, str(answer.id), "Nice one, thanks!"
        )

        assert comment.answer_id == answer.id
        assert comment.user.username == "carol"
        bob_notes = await _notifications_for(db_session, bob.id)
        assert len(bob_notes) == 1
        assert bob_notes[0].type == NotificationType.COMMENT
        assert bob_notes[0].related_id == comment.id
        assert bob_notes[0].content == "New comment on your answer by carol"
        assert await _notifications_for(db_session, alice.id) == []

    @pytest.mark.asyncio
    async def test_comment_mentions(self, db_session, make_user, make_question, make_answer):
        alice = await make_user("alice")
        bob = await make_user("bob")
        answer = await make_answer(bob, await make_question(alice))

        await self.service.comment_on_answer(
            db_session, bob.id, str(answer.id), "@alice does this work for you? @bob"
        )

        alice_notes = await _notifications_for(db_session, alice.id)
        assert [n.type for n in alice_notes] == [NotificationType.MENTION]
        assert alice_notes[0].content == "You were mentioned in a comment by bob"
        # The author commenting on their own answer still gets the COMMENT
        # notification but never a MENTION for "@bob"
        bob_notes = await _notifications_for(db_session, bob.id)
        assert [n.type for n in bob_notes] == [NotificationType.COMMENT]

    @pytest.mark.asyncio
    async def test_unknown_answer_raises_not_found(self, db_session, make_user):
        bob = await make_user("bob")

        with pytest.raises(NotFoundError):
            await self.service.comment_on_answer(db_session, bob.id, "missing-id", "hello there")

        assert await _count(db_session, Comment) == 0

    @pytest.mark.asyncio
    async def test_blank_comment_is_rejected(self, db_session, make_user, make_question, make_answer):
        alice = await make_user("alice")
        answer = await make_answer(alice, await make_question(alice))

        with pytest.raises(ValidationError) as exc_info:
            await self.service.comment_on_answer(db_session, alice.id, str(answer.id), "   ")

        assert exc_info.value.field == "content"
        assert await _count(db_session, Comment) == 0
