from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from task_api.database import Base, UTCDateTime, utcnow
from task_api.models.enums import TaskStatus, TaskType
from task_api.models.user import User


def _in_clause(column: str, enum_cls) -> str:
    values = ", ".join(f"'{member.value}'" for member in enum_cls)
    return f"{column} IN ({values})"


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint(_in_clause("task_status", TaskStatus), name="ck_tasks_status"),
        CheckConstraint(_in_clause("task_type", TaskType), name="ck_tasks_type"),
    )

    task_id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), index=True, nullable=False)
    task_title = Column(String(25), nullable=False)
    task_description = Column(String(100), nullable=True)
    task_status = Column(String(20), default=TaskStatus.PENDING.value, nullable=False)
    task_type = Column(String(20), nullable=False)
    task_deadline = Column(UTCDateTime, nullable=True, index=True)
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False)

    owner = relationship("User", back_populates="tasks")
