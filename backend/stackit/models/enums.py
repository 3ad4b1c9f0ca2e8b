"""Enumerations shared by models and schemas."""

import enum


class VoteType(str, enum.Enum):
    UPVOTE = "UPVOTE"
    DOWNVOTE = "DOWNVOTE"


class NotificationType(str, enum.Enum):
    ANSWER = "ANSWER"
    COMMENT = "COMMENT"
    MENTION = "MENTION"
