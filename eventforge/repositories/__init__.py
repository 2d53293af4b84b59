"""레포지토리 패키지 — 데이터베이스 쿼리 계층.

Repository package — Database query layer for users, tokens, organisations,
events and images. Public event and organisation queries apply the legal
user condition defined in organisation_repository.
"""
