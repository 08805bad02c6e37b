"""회원 및 팀 SQLAlchemy ORM 모델 정의.

Member and Team SQLAlchemy ORM model definitions.
A member belongs to at most one team; the team reference is optional
so that ungrouped members can exist.

Tables:
    - teams: 팀 (Teams)
    - members: 회원 (Members, optional FK to teams)
"""

import uuid
from sqlalchemy import String, Integer, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Team(Base):
    """팀 모델.

    Team model — Groups members under a display name.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 팀 이름 (Team name)
    """

    __tablename__ = "teams"

    # 팀 고유 식별자 — Team unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 팀 이름 — Team display name (검색 조건 teamName 대상, indexed)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"Team(id={self.id}, name={self.name!r})"


class Member(Base):
    """회원 모델.

    Member model — A person with an age and an optional team.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 회원 이름, 없을 수 있음 (Member name, nullable for legacy records)
        age: 나이 (Age)
        team_id: 소속 팀 FK, 없을 수 있음 (Team foreign key, nullable)
    """

    __tablename__ = "members"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 이름이 없는 레거시 회원 허용 — Nullable name; sorts last when ascending
    name: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    age: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    # 소속 팀 FK — 팀 삭제 시 회원은 팀 없음 상태로 남음 (SET NULL on team delete)
    team_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True, index=True
    )

    def __repr__(self) -> str:
        return f"Member(id={self.id}, name={self.name!r}, age={self.age})"
