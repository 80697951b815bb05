"""SQLAlchemy ORM models for the local task cache."""

from __future__ import annotations

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class CacheBase(DeclarativeBase):
    """Base class for cache ORM models."""

    pass


class CachedTask(CacheBase):
    """Cached copy of a single task record."""

    __tablename__ = "tasks"

    task_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    store_id: Mapped[str | None] = mapped_column(String(64))
    position: Mapped[int] = mapped_column(Integer, default=0)
    title: Mapped[str] = mapped_column(Text, default="")
    description: Mapped[str] = mapped_column(Text, default="")
    due_date: Mapped[str | None] = mapped_column(String(32))
    priority: Mapped[str] = mapped_column(String(32), default="Normal")
    status: Mapped[str] = mapped_column(String(32), default="Pending")
    created_at: Mapped[str | None] = mapped_column(String(32))
    updated_at: Mapped[str | None] = mapped_column(String(32))

    __table_args__ = (
        Index("ix_tasks_position", "position"),
        Index("ix_tasks_status", "status"),
    )

    def __repr__(self) -> str:
        return f"<CachedTask(task_id='{self.task_id}', title='{self.title}')>"


class TaskTag(CacheBase):
    """Tag membership for a cached task, in the task's own tag order."""

    __tablename__ = "task_tags"

    task_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    tag: Mapped[str] = mapped_column(String(256), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, default=0)

    __table_args__ = (Index("ix_task_tags_tag", "tag"),)

    def __repr__(self) -> str:
        return f"<TaskTag(task_id='{self.task_id}', tag='{self.tag}')>"


class CacheState(CacheBase):
    """Singleton row tracking cache freshness."""

    __tablename__ = "cache_state"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=1)
    api_url: Mapped[str | None] = mapped_column(Text)
    last_synced: Mapped[str | None] = mapped_column(String(32))
    task_count: Mapped[int | None] = mapped_column(Integer)

    def __repr__(self) -> str:
        return f"<CacheState(last_synced='{self.last_synced}', tasks={self.task_count})>"
