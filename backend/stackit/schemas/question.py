"""
Schemas for the question endpoints.

Two read shapes exist:
    - QuestionListItem: author username + answer ids only (GET /api/questions)
    - QuestionDetail:   nested answers with votes and comments (GET /api/questions/{id})
"""

import uuid
from typing import List, Optional

from pydantic import Field

from stackit.schemas.answer import AnswerDetail
from stackit.schemas.common import CamelModel, UTCDatetime, UserRef


class QuestionCreate(CamelModel):
    title: str = Field(min_length=5, max_length=100)
    description: str = Field(min_length=10)
    tags: Optional[List[str]] = None


class QuestionCreated(CamelModel):
    id: uuid.UUID
    title: str


class AnswerIdRef(CamelModel):
    id: uuid.UUID


class QuestionBase(CamelModel):
    id: uuid.UUID
    title: str
    description: str
    tags: List[str]
    user_id: uuid.UUID
    created_at: UTCDatetime
    user: UserRef


class QuestionListItem(QuestionBase):
    answers: List[AnswerIdRef]


class QuestionDetail(QuestionBase):
    answers: List[AnswerDetail]
