"""Relational store on SQLAlchemy."""

import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, Float, String, Text, create_engine, select
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from ..schemas import ActivityRecord, CarbonEntryCreate, Category, Goal, GoalCreate
from .base import ActivityStore


def generate_uuid() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    pass


class CarbonEntryRow(Base):
    __tablename__ = "carbon_entries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False, comment="kg CO2e")
    description: Mapped[Optional[str]] = mapped_column(Text)
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now, index=True)

    def to_record(self) -> ActivityRecord:
        return ActivityRecord(
            id=self.id,
            userId=self.user_id,
            category=Category(self.category),
            amount=self.amount,
            description=self.description,
            date=self.date,
        )


class GoalRow(Base):
    __tablename__ = "goals"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    category: Mapped[Optional[str]] = mapped_column(String(32))
    target_amount: Mapped[float] = mapped_column(Float, nullable=False)
    period: Mapped[str] = mapped_column(String(16), nullable=False, default="monthly")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now)

    def to_goal(self) -> Goal:
        return Goal(
            id=self.id,
            userId=self.user_id,
            category=Category(self.category) if self.category else None,
            targetAmount=self.target_amount,
            period=self.period,
            createdAt=self.created_at,
        )


class SqlActivityStore(ActivityStore):
    def __init__(self, database_url: str):
        connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
        self.engine = create_engine(database_url, connect_args=connect_args)
        self.session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)
        Base.metadata.create_all(self.engine)

    def _session(self) -> Session:
        return self.session_factory()

    def create_entry(self, user_id: str, entry: CarbonEntryCreate) -> ActivityRecord:
        row = CarbonEntryRow(
            id=generate_uuid(),
            user_id=user_id,
            category=entry.category.value,
            amount=entry.amount,
            description=entry.description,
            date=entry.date or datetime.now(),
        )
        with self._session() as session, session.begin():
            session.add(row)
        return row.to_record()

    def list_by_user(self, user_id: str) -> List[ActivityRecord]:
        stmt = (
            select(CarbonEntryRow)
            .where(CarbonEntryRow.user_id == user_id)
            .order_by(CarbonEntryRow.date.desc())
        )
        with self._session() as session:
            return [row.to_record() for row in session.scalars(stmt)]

    def list_by_user_in_range(self, user_id: str, start: datetime, end: datetime) -> List[ActivityRecord]:
        stmt = (
            select(CarbonEntryRow)
            .where(
                CarbonEntryRow.user_id == user_id,
                CarbonEntryRow.date >= start,
                CarbonEntryRow.date <= end,
            )
            .order_by(CarbonEntryRow.date.desc())
        )
        with self._session() as session:
            return [row.to_record() for row in session.scalars(stmt)]

    def create_goal(self, user_id: str, goal: GoalCreate) -> Goal:
        row = GoalRow(
            id=generate_uuid(),
            user_id=user_id,
            category=goal.category.value if goal.category else None,
            target_amount=goal.targetAmount,
            period=goal.period,
            created_at=datetime.now(),
        )
        with self._session() as session, session.begin():
            session.add(row)
        return row.to_goal()

    def list_goals(self, user_id: str) -> List[Goal]:
        stmt = select(GoalRow).where(GoalRow.user_id == user_id).order_by(GoalRow.created_at.desc())
        with self._session() as session:
            return [row.to_goal() for row in session.scalars(stmt)]

    def get_active_goal(self, user_id: str) -> Optional[Goal]:
        stmt = (
            select(GoalRow)
            .where(GoalRow.user_id == user_id)
            .order_by(GoalRow.created_at.desc())
            .limit(1)
        )
        with self._session() as session:
            row = session.scalars(stmt).first()
            return row.to_goal() if row else None
