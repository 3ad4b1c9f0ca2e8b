"""
StackIt Backend - Vote Tally
=============================

What:  Counts an answer's votes by type, plus the net-vote and optimistic
       delta rules clients use to render counts before the server answers.
Who:   tally_votes backs the vote endpoint; net_votes and
       optimistic_vote_delta are client-facing helpers with no server caller.

Optimistic rule (current user vote → requested vote):
    same as current   → vote removed,  delta ∓1
    opposite current  → vote switched, delta ±2
    no current vote   → vote added,    delta ±1
    (UPVOTE counts positive, DOWNVOTE negative)
"""

import uuid
from typing import Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.models.enums import VoteType
from stackit.models.vote import Vote
from stackit.schemas.answer import VoteTally


async def tally_votes(db: AsyncSession, answer_id: uuid.UUID) -> VoteTally:
    """
    SELECT type, COUNT(*) FROM votes WHERE answer_id = :id GROUP BY type

    A type with no rows is reported as 0.
    """
    result = await db.execute(
        select(Vote.type, func.count(Vote.id))
        .where(Vote.answer_id == answer_id)
        .group_by(Vote.type)
    )
    counts = {vote_type: count for vote_type, count in result.all()}
    return VoteTally(
        upvotes=counts.get(VoteType.UPVOTE, 0),
        downvotes=counts.get(VoteType.DOWNVOTE, 0),
    )


def net_votes(tally: VoteTally) -> int:
    return tally.upvotes - tally.downvotes


def _sign(vote_type: VoteType) -> int:
    return 1 if vote_type == VoteType.UPVOTE else -1


def optimistic_vote_delta(
    current: Optional[VoteType], requested: VoteType
) -> Tuple[int, Optional[VoteType]]:
    """
    Net-count change and the user's resulting vote for a click on `requested`.

    >>> optimistic_vote_delta(None, VoteType.UPVOTE)
    (1, <VoteType.UPVOTE: 'UPVOTE'>)
    >>> optimistic_vote_delta(VoteType.UPVOTE, VoteType.UPVOTE)
    (-1, None)
    >>> optimistic_vote_delta(VoteType.UPVOTE, VoteType.DOWNVOTE)
    (-2, <VoteType.DOWNVOTE: 'DOWNVOTE'>)
    """
    if current == requested:
        return -_sign(requested), None
    if current is None:
        return _sign(requested), requested
    return 2 * _sign(requested), requested
