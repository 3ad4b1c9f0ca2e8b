# Routes package init
"""
StackIt Backend - API Routes Package
=====================================

Route Inventory:
    - auth.py:           POST  /api/auth/signup
                         POST  /api/auth/login
    - questions.py:      GET   /api/questions
                         POST  /api/questions
                         GET   /api/questions/{id}
    - answers.py:        POST  /api/answers
                         POST  /api/answers/{id}/vote
                         POST  /api/answers/{id}/comment
    - notifications.py:  GET   /api/notifications
                         PATCH /api/notifications/{id}/read
    - health.py:         GET   /health

Routes stay thin: pull data out of the request, call a service, return its
result. Errors raised by services are formatted by the global handlers in
main.py.
"""
