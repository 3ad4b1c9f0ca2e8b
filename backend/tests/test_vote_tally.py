"""
StackIt Backend - Vote Tally Unit Tests
========================================

What we test:
    ✅ Per-type counts, zero for a type with no rows
    ✅ Net votes
    ✅ Optimistic delta for add / remove / switch
"""

import pytest

from stackit.models import Vote
from stackit.models.enums import VoteType
from stackit.schemas.answer import VoteTally
from stackit.services.vote_tally import net_votes, optimistic_vote_delta, tally_votes


class TestTallyVotes:

    @pytest.mark.asyncio
    async def test_no_votes_counts_zero(self, db_session, make_user, make_question, make_answer):
        """An answer nobody voted on tallies 0/0."""
        alice = await make_user("alice")
        answer = await make_answer(alice, await make_question(alice))

        tally = await tally_votes(db_session, answer.id)

        assert tally == VoteTally(upvotes=0, downvotes=0)

    @pytest.mark.asyncio
    async def test_counts_by_type(self, db_session, make_user, make_question, make_answer):
        """Votes are counted per type and only for the given answer."""
        alice = await make_user("alice")
        question = await make_question(alice)
        answer = await make_answer(alice, question)
        other = await make_answer(alice, question)
        voters = [await make_user(name) for name in ("bob", "carol", "dave")]

        db_session.add_all([
            Vote(type=VoteType.UPVOTE, user_id=voters[0].id, answer_id=answer.id),
            Vote(type=VoteType.UPVOTE, user_id=voters[1].id, answer_id=answer.id),
            Vote(type=VoteType.DOWNVOTE, user_id=voters[2].id, answer_id=answer.id),
            Vote(type=VoteType.DOWNVOTE, user_id=voters[0].id, answer_id=other.id),
        ])
        await db_session.flush()

        tally = await tally_votes(db_session, answer.id)

        assert tally.upvotes == 2
        assert tally.downvotes == 1


class TestNetVotes:

    def test_net_is_upvotes_minus_downvotes(self):
        assert net_votes(VoteTally(upvotes=5, downvotes=2)) == 3
        assert net_votes(VoteTally(upvotes=0, downvotes=4)) == -4


class TestOptimisticVoteDelta:
    """Client-side prediction of the net count after a click."""

    def test_first_vote_adds_one(self):
        assert optimistic_vote_delta(None, VoteType.UPVOTE) == (1, VoteType.UPVOTE)
        assert optimistic_vote_delta(None, VoteType.DOWNVOTE) == (-1, VoteType.DOWNVOTE)

    def test_same_vote_is_removed(self):
        assert optimistic_vote_delta(VoteType.UPVOTE, VoteType.UPVOTE) == (-1, None)
        assert optimistic_vote_delta(VoteType.DOWNVOTE, VoteType.DOWNVOTE) == (1, None)

    def test_switching_moves_two(self):
        assert optimistic_vote_delta(VoteType.UPVOTE, VoteType.DOWNVOTE) == (-2, VoteType.DOWNVOTE)
        assert optimistic_vote_delta(VoteType.DOWNVOTE, VoteType.UPVOTE) == (2, VoteType.UPVOTE)
