"""
答疑箱客户端

使用示例:
    from app.client import DoubtBoxClient, TeacherSession

    client = DoubtBoxClient()
    session = TeacherSession()
    session.login("teacher", "teacher123", teacher_name="Dr. Lee")
    for doubt in client.load_teacher_doubts(session):
        print(doubt.status, doubt.question)
"""

from .api_client import DoubtBoxClient, DoubtBoxClientError
from .normalize import (
    DoubtView,
    extract_records,
    extract_latest,
    normalize_doubt,
    normalize_payload,
    filter_for_student,
    filter_for_teacher,
)
from .session import TeacherSession, SessionExpiredError

__all__ = [
    "DoubtBoxClient",
    "DoubtBoxClientError",
    "DoubtView",
    "extract_records",
    "extract_latest",
    "normalize_doubt",
    "normalize_payload",
    "filter_for_student",
    "filter_for_teacher",
    "TeacherSession",
    "SessionExpiredError",
]
