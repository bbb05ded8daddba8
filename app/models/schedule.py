from sqlalchemy import Column, Integer, String, Boolean, DateTime, Index, func, true
from sqlalchemy.orm import relationship
from app.database import Base

class Schedule(Base):
    __tablename__ = "user_schedules"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    term_code = Column(String(20), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    is_active = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=False), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=False), server_default=func.now(), onupdate=func.now(), nullable=False)

    blocks = relationship(
        "ScheduleBlock",
        back_populates="schedule",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

# 每個 (user, term) 最多一個 active schedule
Index(
    "uq_user_schedules_active_per_term",
    Schedule.user_id,
    Schedule.term_code,
    unique=True,
    postgresql_where=Schedule.is_active.is_(true()),
    sqlite_where=Schedule.is_active.is_(true()),
)
