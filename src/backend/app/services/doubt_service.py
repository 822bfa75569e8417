"""
答疑服务
问题的提交、查询、回答与统计，存储会话由调用方注入
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError, StoreError
from app.models import Doubt, DoubtStatus, utcnow_with_tz

logger = logging.getLogger(__name__)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """
    时间戳转 ISO-8601 字符串（UTC，毫秒精度，Z 结尾）

    SQLite 读回的时间不带时区，按 UTC 处理。
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def serialize_doubt(doubt: Doubt) -> Dict[str, Any]:
    """转换为 API 响应中的记录格式"""
    return {
        "id": doubt.id,
        "subject": doubt.subject,
        "courseCode": doubt.course_code,
        "teacher": doubt.teacher,
        "question": doubt.question,
        "answer": doubt.answer,
        "status": doubt.status,
        "createdAt": format_timestamp(doubt.created_at),
        "answeredAt": format_timestamp(doubt.answered_at),
    }


class DoubtService:
    """答疑服务"""

    @staticmethod
    def create_doubt(
        db: Session,
        subject: str,
        course_code: str,
        teacher: str,
        question: str
    ) -> Doubt:
        """
        创建问题（学生匿名提交）

        调用前应已通过 validate_doubt_submission 校验。

        Args:
            db: 数据库会话
            subject: 学科
            course_code: 课程代码（存储为大写）
            teacher: 教师姓名
            question: 问题内容

        Returns:
            Doubt: 新建的记录（含 id 与 created_at）

        Raises:
            StoreError: 写入失败
        """
        doubt = Doubt(
            subject=subject.strip(),
            course_code=course_code.strip().upper(),
            teacher=teacher.strip(),
            question=question.strip(),
            answer=None,
            status=DoubtStatus.PENDING.value,
            answered_at=None,
        )

        try:
            db.add(doubt)
            db.commit()
            db.refresh(doubt)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"提交问题失败: {e}")
            raise StoreError("Failed to submit doubt", cause=e) from e

        logger.info(f"新问题已提交: id={doubt.id}, teacher={doubt.teacher}, course={doubt.course_code}")
        return doubt

    @staticmethod
    def list_doubts(db: Session, teacher: Optional[str] = None) -> List[Doubt]:
        """
        获取问题列表（最新的在前）

        Args:
            db: 数据库会话
            teacher: 教师姓名（可选，去空格后精确匹配；空字符串视为不过滤）

        Returns:
            List[Doubt]: 问题列表，不分页
        """
        teacher_name = teacher.strip() if teacher else ""

        try:
            query = db.query(Doubt)
            if teacher_name:
                query = query.filter(Doubt.teacher == teacher_name)
            # 时间相同的记录按 id 排序，保证顺序确定
            return query.order_by(Doubt.created_at.desc(), Doubt.id.desc()).all()
        except SQLAlchemyError as e:
            logger.error(f"查询问题列表失败: teacher={teacher_name or '*'}, error={e}")
            raise StoreError("Failed to fetch doubts", cause=e) from e

    @staticmethod
    def get_doubt(db: Session, doubt_id: str) -> Doubt:
        """
        根据ID获取问题

        Raises:
            NotFoundError: 记录不存在
            StoreError: 查询失败
        """
        try:
            doubt = db.query(Doubt).filter(Doubt.id == doubt_id).first()
        except SQLAlchemyError as e:
            logger.error(f"查询问题失败: id={doubt_id}, error={e}")
            raise StoreError("Failed to fetch doubt", cause=e) from e

        if not doubt:
            raise NotFoundError(doubt_id)
        return doubt

    @staticmethod
    def answer_doubt(db: Session, doubt_id: str, answer: str) -> Doubt:
        """
        提交回答（教师）

        状态只能 Pending -> Answered 一次。写入使用带 status 条件的 UPDATE，
        并发请求中只有一个能命中，其余按重复回答处理。

        Args:
            db: 数据库会话
            doubt_id: 问题ID
            answer: 回答内容（调用前应已通过 validate_answer_submission 校验）

        Returns:
            Doubt: 更新后的记录

        Raises:
            NotFoundError: 记录不存在
            ConflictError: 已经回答过，记录保持不变
            StoreError: 读写失败
        """
        try:
            doubt = db.query(Doubt).filter(Doubt.id == doubt_id).first()
            if not doubt:
                raise NotFoundError(doubt_id)

            if doubt.is_answered:
                logger.info(f"重复回答被拒绝: id={doubt_id}")
                raise ConflictError(serialize_doubt(doubt))

            updated = db.query(Doubt).filter(
                Doubt.id == doubt_id,
                Doubt.status == DoubtStatus.PENDING.value
            ).update(
                {
                    Doubt.answer: answer.strip(),
                    Doubt.status: DoubtStatus.ANSWERED.value,
                    Doubt.answered_at: utcnow_with_tz(),
                },
                synchronize_session=False
            )
            db.commit()

            current = db.query(Doubt).filter(Doubt.id == doubt_id).first()
            if current is None:
                raise NotFoundError(doubt_id)

            if updated == 0:
                # 读取与写入之间已被其他请求回答
                logger.warning(f"并发回答冲突: id={doubt_id}")
                raise ConflictError(serialize_doubt(current))
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"提交回答失败: id={doubt_id}, error={e}")
            raise StoreError("Failed to submit answer", cause=e) from e

        logger.info(f"问题已回答: id={doubt_id}")
        return current

    @staticmethod
    def get_stats(db: Session) -> Dict[str, int]:
        """
        统计问题数量

        每次全量扫描后计数，不做缓存。状态不可识别的记录只计入 total。

        Returns:
            Dict: {"total": int, "pending": int, "answered": int}
        """
        try:
            statuses = [row[0] for row in db.query(Doubt.status).all()]
        except SQLAlchemyError as e:
            logger.error(f"统计问题失败: {e}")
            raise StoreError("Failed to fetch statistics", cause=e) from e

        stats = {"total": len(statuses), "pending": 0, "answered": 0}
        for status in statuses:
            if status == DoubtStatus.PENDING.value:
                stats["pending"] += 1
            elif status == DoubtStatus.ANSWERED.value:
                stats["answered"] += 1

        return stats
