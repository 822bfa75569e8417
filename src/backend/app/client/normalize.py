"""
客户端响应归一化

服务端的规范格式见 app.services.doubt_service.serialize_doubt。客户端对以下情况保持兼容：
- 响应为数组、单个对象，或 {"data": ...} 包装
- 字段名为 camelCase 或 snake_case（courseCode / course_code 等）
- 缺少 status 时根据 answer 推导

兼容逻辑只存在于本模块，不向服务端核心扩散。
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from app.models import DoubtStatus

ALL = "all"


@dataclass
class DoubtView:
    """客户端展示用的答疑记录"""
    id: Optional[str]
    subject: Optional[str]
    course_code: Optional[str]
    teacher: Optional[str]
    question: Optional[str]
    answer: Optional[str]
    status: str
    created_at: Optional[datetime] = None
    answered_at: Optional[datetime] = None

    @property
    def is_answered(self) -> bool:
        return self.status == DoubtStatus.ANSWERED.value


def extract_records(payload: Any) -> List[Dict[str, Any]]:
    """
    从任意响应格式中取出记录列表

    Args:
        payload: 解析后的 JSON（数组 / 对象 / {"data": ...}）

    Returns:
        List[Dict]: 原始记录（可能为空）
    """
    if isinstance(payload, list):
        return [item for item in payload if isinstance(item, dict)]

    if not isinstance(payload, dict):
        return []

    if "data" in payload:
        data = payload["data"]
        if isinstance(data, list):
            return [item for item in data if isinstance(item, dict)]
        if isinstance(data, dict):
            return [data]
        return []

    if "subject" in payload:
        return [payload]

    return []


def extract_latest(payload: Any) -> Optional[Dict[str, Any]]:
    """取最新一条记录（列表按时间倒序，第一条即最新）"""
    records = extract_records(payload)
    if records and records[0].get("subject"):
        return records[0]
    return None


def _first(raw: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """解析 ISO-8601 时间（兼容 Z 结尾），无法解析时返回 None"""
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def derive_status(raw: Dict[str, Any]) -> str:
    """
    规范化状态

    - 有 status：大小写不敏感地映射到 Pending / Answered，未知值原样保留
    - 无 status：有回答即 Answered，否则 Pending
    """
    status = raw.get("status")
    if isinstance(status, str) and status.strip():
        lowered = status.strip().lower()
        for known in DoubtStatus:
            if known.value.lower() == lowered:
                return known.value
        return status.strip()

    return DoubtStatus.ANSWERED.value if raw.get("answer") else DoubtStatus.PENDING.value


def normalize_doubt(raw: Dict[str, Any]) -> DoubtView:
    """把服务端（或其他后端）返回的记录转换为 DoubtView"""
    record_id = raw.get("id")
    return DoubtView(
        id=str(record_id) if record_id is not None else None,
        subject=raw.get("subject"),
        course_code=_first(raw, "courseCode", "course_code"),
        teacher=raw.get("teacher"),
        question=raw.get("question"),
        answer=raw.get("answer"),
        status=derive_status(raw),
        created_at=parse_timestamp(_first(raw, "createdAt", "created_at", "timestamp")),
        answered_at=parse_timestamp(_first(raw, "answeredAt", "answered_at")),
    )


def normalize_payload(payload: Any) -> List[DoubtView]:
    """extract_records + normalize_doubt"""
    return [normalize_doubt(record) for record in extract_records(payload)]


def filter_for_student(
    doubts: Iterable[DoubtView],
    subject: str = ALL,
    status: str = ALL
) -> List[DoubtView]:
    """
    学生视图筛选（按学科、状态）

    Args:
        doubts: 记录
        subject: 学科，"all" 表示不过滤
        status: 状态（大小写不敏感），"all" 表示不过滤
    """
    result = list(doubts)
    if subject and subject != ALL:
        result = [d for d in result if d.subject == subject]
    if status and status.lower() != ALL:
        wanted = status.lower()
        result = [d for d in result if d.status.lower() == wanted]
    return result


def filter_for_teacher(doubts: Iterable[DoubtView], teacher_name: str) -> List[DoubtView]:
    # 服务端已按 teacher 过滤，这里再过滤一次
    return [d for d in doubts if d.teacher == teacher_name]
