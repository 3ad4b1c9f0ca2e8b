"""
Schemas for answers, votes and comments (POST /api/answers and friends).
"""

import uuid
from typing import List

from pydantic import Field

from stackit.models.enums import VoteType
from stackit.schemas.common import CamelModel, UTCDatetime, UserRef


class AnswerCreate(CamelModel):
    content: str = Field(min_length=10)
    # Kept as a string: an id that does not parse as a UUID simply refers
    # to no question and yields 404, the same as an unknown UUID.
    question_id: str = Field(min_length=1)


class VoteRequest(CamelModel):
    vote_type: VoteType


class CommentCreate(CamelModel):
    content: str = Field(min_length=1)


class VoteTally(CamelModel):
    """Vote counts for one answer after a vote was applied."""
    upvotes: int = 0
    downvotes: int = 0


class VoteResponse(CamelModel):
    id: uuid.UUID
    type: VoteType
    user_id: uuid.UUID
    answer_id: uuid.UUID


class CommentResponse(CamelModel):
    id: uuid.UUID
    content: str
    user_id: uuid.UUID
    answer_id: uuid.UUID
    created_at: UTCDatetime
    user: UserRef


class AnswerResponse(CamelModel):
    id: uuid.UUID
    content: str
    question_id: uuid.UUID
    user_id: uuid.UUID
    created_at: UTCDatetime
    user: UserRef


class AnswerDetail(AnswerResponse):
    """An answer as nested in the question detail view."""
    votes: List[VoteResponse]
    comments: List[CommentResponse]
