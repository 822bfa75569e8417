"""
答疑（Doubt）模型
系统中唯一持久化的实体：学生匿名提交的问题及教师的回答
"""
import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime

from .base import Base


def utcnow_with_tz():
    """获取带 UTC 时区的当前时间"""
    return datetime.now(timezone.utc)


class DoubtStatus(str, enum.Enum):
    """答疑状态：只允许 Pending -> Answered 一次"""
    PENDING = "Pending"
    ANSWERED = "Answered"


class Doubt(Base):
    """
    答疑记录

    字段说明：
    - id, created_at: 插入时由存储层分配，之后不可变
    - answer, answered_at: 回答前为空，回答时与 status 一起原子写入
    """
    __tablename__ = "doubts"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    subject = Column(String(200), nullable=False)
    course_code = Column(String(50), nullable=False)
    teacher = Column(String(200), nullable=False, index=True)
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=DoubtStatus.PENDING.value, index=True)  # Pending | Answered
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow_with_tz, index=True)
    answered_at = Column(DateTime(timezone=True), nullable=True)

    @property
    def is_answered(self) -> bool:
        return self.status == DoubtStatus.ANSWERED.value

    def __repr__(self):
        return f"<Doubt(id='{self.id}' teacher='{self.teacher}' status='{self.status}' question='{(self.question or '')[:30]}...')>"
