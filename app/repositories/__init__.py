"""레포지토리 패키지 — 데이터베이스 쿼리 계층.

Repository package — Database query layer.
Holds the member/team search queries and the generic BaseRepository they extend.
"""
