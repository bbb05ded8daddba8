from sqlalchemy import Column, Integer, String, Time, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship, validates
from app.database import Base
from app.utils.timeslots import MAX_DAY, MIN_DAY, validate_day

class ScheduleBlock(Base):
    __tablename__ = "schedule_blocks"
    __table_args__ = (
        CheckConstraint(f"day_of_week BETWEEN {MIN_DAY} AND {MAX_DAY}", name="ck_schedule_blocks_day"),
        CheckConstraint("start_time < end_time", name="ck_schedule_blocks_interval"),
    )

    id = Column(Integer, primary_key=True, index=True)
    schedule_id = Column(Integer, ForeignKey("user_schedules.id", ondelete="CASCADE"), nullable=False, index=True)

    course_code = Column(String(32), nullable=False, index=True)
    course_title = Column(String(255))
    section = Column(String(20))
    room = Column(String(50))

    day_of_week = Column(Integer, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    color = Column(String(50), nullable=False)
    font_color = Column(String(20), nullable=False, default="#000000")
    font_size = Column(String(20), nullable=False, default="text-xs")

    schedule = relationship("Schedule", back_populates="blocks")

    @validates("day_of_week")
    def _check_day(self, key, value):
        return validate_day(value)
