"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer. Services validate input against
account state and ownership, call repositories, and return response
schemas or mail events; routers own the commit.
"""
