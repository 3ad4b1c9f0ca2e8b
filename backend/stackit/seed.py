"""
StackIt Backend - Demo Data Seeder
===================================

What:  Wipes the database and fills it with a small demo community: five
       users, five questions, answers, votes and comments.
How:   Goes through the same services the API uses, so passwords are
       hashed and answers/comments/mentions produce their notifications.
Who:   Developers, via `python -m stackit.seed` or the `stackit-seed` script.

All demo users share the password "password123".
"""

import asyncio
import logging
import uuid
from typing import Dict, List

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.config import settings
from stackit.database import (
    create_engine,
    create_session_factory,
    create_tables,
    dispose_engine,
    session_scope,
)
from stackit.models import Answer, Comment, Notification, Question, User, Vote
from stackit.models.enums import VoteType
from stackit.schemas.answer import AnswerCreate
from stackit.schemas.auth import SignupRequest
from stackit.schemas.question import QuestionCreate
from stackit.services.answer_service import answer_service
from stackit.services.question_service import question_service
from stackit.services.user_service import user_service

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"

DEMO_USERS = [
    ("john_doe", "john@stackit.dev"),
    ("jane_smith", "jane@stackit.dev"),
    ("alex_dev", "alex@stackit.dev"),
    ("sarah_tech", "sarah@stackit.dev"),
    ("mike_coder", "mike@stackit.dev"),
]

# (author index, title, description, tags)
DEMO_QUESTIONS = [
    (
        0,
        "How to implement authentication in Node.js?",
        "I am building a REST API with Express and need to add user "
        "authentication. What is the recommended way to implement JWT "
        "based authentication securely?",
        ["nodejs", "authentication", "jwt", "express", "security"],
    ),
    (
        1,
        "React vs Vue.js: Which should I choose for my project?",
        "I am starting a new e-commerce project and cannot decide between "
        "React and Vue.js. What are the pros and cons of each?",
        ["react", "vuejs", "javascript", "frontend", "comparison"],
    ),
    (
        2,
        "Database design best practices for scalability",
        "I am designing a database for a social media application that "
        "expects high traffic. What are the key principles I should follow "
        "to ensure scalability and performance?",
        ["database", "scalability", "design", "performance", "sql"],
    ),
    (
        3,
        "How to deploy a Docker container to AWS?",
        "I have a Node.js application containerized with Docker. What are "
        "the options for deploying it to AWS, and which one is the most "
        "cost-effective for a small application?",
        ["docker", "aws", "deployment", "nodejs", "cloud"],
    ),
    (
        4,
        "Understanding asynchronous programming in JavaScript",
        "I am confused about promises, async/await, and callbacks in "
        "JavaScript. Can someone explain the differences and when to use "
        "each approach?",
        ["javascript", "async", "promises", "callbacks", "programming"],
    ),
]

# (author index, question index, content)
DEMO_ANSWERS = [
    (
        1,
        0,
        "Use the jsonwebtoken library: hash passwords with bcrypt before "
        "storing them, issue a signed token on login, and verify it in a "
        "middleware. Keep the signing secret in an environment variable.",
    ),
    (
        2,
        0,
        "I'd add refresh tokens on top of what @jane_smith said. Short-lived "
        "access tokens with longer-lived refresh tokens balance security "
        "and user experience.",
    ),
    (
        0,
        1,
        "For e-commerce I'd pick React: larger ecosystem, more third-party "
        "libraries and strong TypeScript support, at the cost of a steeper "
        "learning curve.",
    ),
    (
        3,
        1,
        "Vue.js is excellent for e-commerce too. Simpler syntax, great "
        "documentation and Nuxt for server-side rendering.",
    ),
    (
        4,
        2,
        "Normalize first, index the columns you filter on, add read "
        "replicas and a cache, and use connection pooling. Partition large "
        "tables only once you need to.",
    ),
    (
        1,
        3,
        "AWS App Runner is the simplest option for a small containerized "
        "web app. ECS and EKS give you more control for more effort.",
    ),
    (
        2,
        4,
        "Callbacks are functions passed as arguments, promises represent "
        "an eventual result, and async/await is syntax over promises. "
        "Prefer async/await for readable code.",
    ),
    (
        0,
        4,
        "Great explanation @alex_dev! Don't forget error handling: use "
        ".catch() with promises and try/catch blocks with async/await.",
    ),
]

# (voter index, answer index, vote type)
DEMO_VOTES = [
    (0, 0, VoteType.UPVOTE),
    (2, 0, VoteType.UPVOTE),
    (3, 0, VoteType.UPVOTE),
    (0, 1, VoteType.UPVOTE),
    (4, 1, VoteType.UPVOTE),
    (1, 2, VoteType.UPVOTE),
    (2, 2, VoteType.DOWNVOTE),
    (1, 3, VoteType.UPVOTE),
    (4, 3, VoteType.UPVOTE),
    (0, 4, VoteType.UPVOTE),
    (1, 4, VoteType.UPVOTE),
    (2, 4, VoteType.UPVOTE),
]

# (author index, answer index, content)
DEMO_COMMENTS = [
    (3, 0, "Great explanation! Any recommendations for JWT libraries other than jsonwebtoken?"),
    (1, 0, "You could also use jose, which is more modern and has better TypeScript support."),
    (4, 1, "What about token storage? Should I use localStorage or httpOnly cookies?"),
    (2, 1, "HttpOnly cookies are safer since scripts cannot read them."),
    (4, 2, "Have you considered Svelte for performance-critical applications?"),
    (0, 4, "What about sharding? Should that be considered early in the design?"),
    (4, 4, "Sharding can wait until you actually need it, @john_doe."),
    (0, 5, "AWS Fargate might also be a good option for serverless containers."),
]


async def clear_database(db: AsyncSession) -> None:
    """Delete every row, children before parents."""
    for model in (Notification, Comment, Vote, Answer, Question, User):
        await db.execute(delete(model))
    await db.flush()


async def seed_database(db: AsyncSession) -> Dict[str, int]:
    """
    Replace all data with the demo data set.

    Returns:
        Row counts per table, for logging.
    """
    await clear_database(db)

    user_ids: List[uuid.UUID] = []
    for username, email in DEMO_USERS:
        auth = await user_service.signup(
            db, SignupRequest(username=username, email=email, password=DEMO_PASSWORD)
        )
        user_ids.append(auth.user.id)
    logger.info("Created %d users", len(user_ids))

    question_ids: List[uuid.UUID] = []
    for author, title, description, tags in DEMO_QUESTIONS:
        created = await question_service.create_question(
            db,
            user_ids[author],
            QuestionCreate(title=title, description=description, tags=tags),
        )
        question_ids.append(created.id)
    logger.info("Created %d questions", len(question_ids))

    answer_ids: List[uuid.UUID] = []
    for author, question, content in DEMO_ANSWERS:
        answer = await answer_service.create_answer(
            db,
            user_ids[author],
            AnswerCreate(content=content, question_id=str(question_ids[question])),
        )
        answer_ids.append(answer.id)
    logger.info("Created %d answers", len(answer_ids))

    for voter, answer, vote_type in DEMO_VOTES:
        await answer_service.vote_answer(db, user_ids[voter], str(answer_ids[answer]), vote_type)
    logger.info("Created %d votes", len(DEMO_VOTES))

    for author, answer, content in DEMO_COMMENTS:
        await answer_service.comment_on_answer(
            db, user_ids[author], str(answer_ids[answer]), content
        )
    logger.info("Created %d comments", len(DEMO_COMMENTS))

    return {
        "users": len(user_ids),
        "questions": len(question_ids),
        "answers": len(answer_ids),
        "votes": len(DEMO_VOTES),
        "comments": len(DEMO_COMMENTS),
    }


async def run_seed() -> None:
    engine = create_engine()
    try:
        if settings.is_sqlite:
            # Local SQLite databases are not migrated with Alembic
            await create_tables(engine)
        async with session_scope(create_session_factory(engine)) as db:
            counts = await seed_database(db)
        logger.info("Seeding complete: %s", counts)
    finally:
        await dispose_engine(engine)


def main() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    asyncio.run(run_seed())


if __name__ == "__main__":
    main()
