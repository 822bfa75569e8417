"""
答疑管理API

功能说明：
- 学生匿名提交问题
- 按教师筛选问题列表（最新的在前）
- 教师回答问题（每个问题只能回答一次）
- 状态统计
"""
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import ValidationError
from app.services import (
    DoubtService,
    serialize_doubt,
    validate_answer_submission,
    validate_doubt_submission,
)

router = APIRouter(prefix="/doubts", tags=["答疑管理"])


# Schemas
class DoubtCreateRequest(BaseModel):
    """提交问题请求（同时接受 courseCode 与 course_code）"""
    subject: Optional[str] = None
    course_code: Optional[str] = Field(default=None, alias="courseCode")
    teacher: Optional[str] = None
    question: Optional[str] = None

    class Config:
        populate_by_name = True


class AnswerRequest(BaseModel):
    """提交回答请求"""
    answer: Optional[str] = None


# Endpoints
@router.post("", status_code=status.HTTP_201_CREATED)
def submit_doubt(request: Optional[DoubtCreateRequest] = None, db: Session = Depends(get_db)):
    """提交问题（学生匿名），缺少请求体时按全部字段为空校验"""
    request = request or DoubtCreateRequest()
    result = validate_doubt_submission(
        request.subject, request.course_code, request.teacher, request.question
    )
    if not result.valid:
        raise ValidationError(result.errors)

    doubt = DoubtService.create_doubt(
        db,
        subject=request.subject,
        course_code=request.course_code,
        teacher=request.teacher,
        question=request.question,
    )
    return {
        "success": True,
        "message": "Doubt submitted successfully",
        "data": serialize_doubt(doubt),
    }


@router.get("")
def list_doubts(teacher: Optional[str] = None, db: Session = Depends(get_db)):
    """
    获取问题列表

    Args:
        teacher: 教师姓名（可选，精确匹配）
        db: 数据库会话
    """
    teacher_name = teacher.strip() if teacher else ""
    doubts = DoubtService.list_doubts(db, teacher_name or None)

    if not doubts:
        message = f"No doubts found for teacher: {teacher_name}" if teacher_name else "No doubts found"
    else:
        message = f"Retrieved doubts for teacher: {teacher_name}" if teacher_name else "Retrieved all doubts"

    return {
        "success": True,
        "message": message,
        "data": [serialize_doubt(d) for d in doubts],
        "count": len(doubts),
    }


@router.get("/stats/summary")
def get_stats_summary(db: Session = Depends(get_db)):
    """获取统计（total / pending / answered）"""
    return {
        "success": True,
        "message": "Statistics retrieved successfully",
        "data": DoubtService.get_stats(db),
    }


@router.get("/{doubt_id}")
def get_doubt(doubt_id: str, db: Session = Depends(get_db)):
    """获取单个问题"""
    doubt = DoubtService.get_doubt(db, doubt_id)
    return {
        "success": True,
        "message": "Doubt retrieved successfully",
        "data": serialize_doubt(doubt),
    }


@router.post("/{doubt_id}/answer")
def submit_answer(doubt_id: str, request: Optional[AnswerRequest] = None, db: Session = Depends(get_db)):
    """
    提交回答（教师）

    已回答的问题返回 400，并附带原记录
    """
    request = request or AnswerRequest()
    result = validate_answer_submission(request.answer)
    if not result.valid:
        raise ValidationError(result.errors)

    doubt = DoubtService.answer_doubt(db, doubt_id, request.answer)
    return {
        "success": True,
        "message": "Answer submitted successfully",
        "data": serialize_doubt(doubt),
    }
