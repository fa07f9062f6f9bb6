"""레포지토리 패키지 — 데이터베이스 쿼리 계층.

Repository package — Database query layer.
Repositories hold pure database operations; "no row" is returned as None.
"""
