"""
输入校验

提交问题与提交回答各有一个校验器。所有规则都会执行（不提前返回），
一次调用即可报告全部问题。
"""
from dataclasses import dataclass, field
from typing import List, Optional


QUESTION_MIN_LENGTH = 10
QUESTION_MAX_LENGTH = 5000
ANSWER_MIN_LENGTH = 10
ANSWER_MAX_LENGTH = 10000


@dataclass
class ValidationResult:
    """
    校验结果

    Attributes:
        valid: 是否全部通过
        errors: 违反的规则（按检查顺序）
    """
    valid: bool
    errors: List[str] = field(default_factory=list)


def _clean(value: Optional[str]) -> str:
    return value.strip() if value else ""


def _check_length(errors: List[str], label: str, text: str, min_length: int, max_length: int) -> None:
    # 空值只报 required，长度规则针对非空内容
    if not text:
        return
    if len(text) < min_length:
        errors.append(f"{label} must be at least {min_length} characters long")
    if len(text) > max_length:
        errors.append(f"{label} must not exceed {max_length} characters")


def validate_doubt_submission(
    subject: Optional[str],
    course_code: Optional[str],
    teacher: Optional[str],
    question: Optional[str]
) -> ValidationResult:
    """
    校验学生提交的问题

    Args:
        subject: 学科
        course_code: 课程代码
        teacher: 教师姓名
        question: 问题内容

    Returns:
        ValidationResult: 校验结果
    """
    errors: List[str] = []

    if not _clean(subject):
        errors.append("Subject is required")

    if not _clean(course_code):
        errors.append("Course code is required")

    if not _clean(teacher):
        errors.append("Teacher name is required")

    question_text = _clean(question)
    if not question_text:
        errors.append("Question is required")

    _check_length(errors, "Question", question_text, QUESTION_MIN_LENGTH, QUESTION_MAX_LENGTH)

    return ValidationResult(valid=not errors, errors=errors)


def validate_answer_submission(answer: Optional[str]) -> ValidationResult:
    """校验教师提交的回答"""
    errors: List[str] = []

    answer_text = _clean(answer)
    if not answer_text:
        errors.append("Answer is required")

    _check_length(errors, "Answer", answer_text, ANSWER_MIN_LENGTH, ANSWER_MAX_LENGTH)

    return ValidationResult(valid=not errors, errors=errors)
