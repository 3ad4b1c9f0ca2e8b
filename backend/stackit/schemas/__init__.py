"""
StackIt Backend - Pydantic Request/Response Schemas
====================================================

What:  The API contract between the client and the backend.
How:   FastAPI validates request bodies against these models and serializes
       responses through them. Field names are snake_case in Python and
       camelCase on the wire (`question_id` ↔ `questionId`).
"""
