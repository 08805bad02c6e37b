"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations.

Modules:
    member: 팀 및 회원 (Team and Member)
"""

from app.models.member import Member, Team

__all__ = ["Member", "Team"]
