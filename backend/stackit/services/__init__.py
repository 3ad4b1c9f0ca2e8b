# Services package init
"""
StackIt Backend - Services Layer
=================================

What:  Business logic between routes (HTTP) and the database.
How:   Services are stateless singletons; every call receives the
       request's AsyncSession, so one request is one unit of work.

Service Inventory:
    - UserService:          signup / login
    - QuestionService:      create, list view, detail view
    - AnswerService:        create answer, vote toggle, comment
    - NotificationService:  inbox listing, mark as read; notify() emitter
    - mention_service:      @username scan → MENTION notifications
    - vote_tally:           vote counts, net votes, optimistic delta rule
"""
