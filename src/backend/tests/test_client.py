"""
客户端测试

测试覆盖：
1. 响应归一化：三种响应格式、camelCase / snake_case、状态推导
2. 学生 / 教师视图的客户端筛选
3. TeacherSession 本地登录检查
4. DoubtBoxClient 通过 TestClient 调用真实路由
"""
import pytest
import sys
import os
from datetime import datetime, timezone

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from app.client import (
    DoubtBoxClientError,
    DoubtView,
    SessionExpiredError,
    TeacherSession,
    extract_latest,
    extract_records,
    filter_for_student,
    filter_for_teacher,
    normalize_doubt,
)
from app.core.exceptions import AuthError

from conftest import SKY_ANSWER  # noqa: E402


RECORD = {"id": "1", "subject": "Physics", "question": "Why is the sky blue exactly?"}


class TestExtractRecords:
    """三种响应格式"""

    def test_bare_array(self):
        assert extract_records([RECORD, "junk"]) == [RECORD]

    def test_bare_object(self):
        assert extract_records(RECORD) == [RECORD]

    def test_wrapped_list(self):
        assert extract_records({"success": True, "data": [RECORD]}) == [RECORD]

    def test_wrapped_object(self):
        assert extract_records({"success": True, "data": RECORD}) == [RECORD]

    @pytest.mark.parametrize("payload", [None, "text", {"success": True}, {"data": None}, {"data": []}])
    def test_nothing_usable(self, payload):
        assert extract_records(payload) == []

    def test_latest(self):
        newer = dict(RECORD, id="2")
        assert extract_latest({"data": [newer, RECORD]}) == newer
        assert extract_latest({"data": []}) is None
        assert extract_latest([{"id": "3"}]) is None


class TestNormalizeDoubt:
    """字段名兼容与状态推导"""

    def test_camel_case(self):
        doubt = normalize_doubt({
            "id": "abc",
            "subject": "Physics",
            "courseCode": "PHY101",
            "teacher": "Dr. Lee",
            "question": "Why is the sky blue exactly?",
            "answer": None,
            "status": "Pending",
            "createdAt": "2025-11-29T10:30:00.000Z",
            "answeredAt": None,
        })
        assert doubt.course_code == "PHY101"
        assert doubt.status == "Pending"
        assert doubt.created_at == datetime(2025, 11, 29, 10, 30, tzinfo=timezone.utc)
        assert doubt.answered_at is None

    def test_snake_case(self):
        doubt = normalize_doubt({
            "id": 7,
            "subject": "Math",
            "course_code": "MTH200",
            "created_at": "2025-11-29T10:30:00+00:00",
            "answered_at": "2025-11-30T08:00:00+00:00",
            "answer": "Because eigenvectors keep their direction.",
        })
        assert doubt.id == "7"
        assert doubt.course_code == "MTH200"
        assert doubt.status == "Answered"
        assert doubt.is_answered is True
        assert doubt.answered_at.day == 30

    def test_timestamp_fallback_field(self):
        doubt = normalize_doubt({"subject": "Math", "timestamp": "2025-11-29T10:30:00Z"})
        assert doubt.created_at is not None

    def test_status_derived_when_missing(self):
        assert normalize_doubt({"subject": "Math"}).status == "Pending"
        assert normalize_doubt({"subject": "Math", "answer": "yes indeed"}).status == "Answered"

    def test_status_case_is_canonicalized(self):
        assert normalize_doubt({"status": "answered"}).status == "Answered"
        assert normalize_doubt({"status": "PENDING"}).status == "Pending"

    def test_unparseable_timestamp(self):
        assert normalize_doubt({"createdAt": "yesterday"}).created_at is None


class TestFilters:
    """客户端二次筛选"""

    @pytest.fixture
    def doubts(self):
        return [
            DoubtView("1", "Physics", "PHY101", "Dr. Lee", "q1", None, "Pending"),
            DoubtView("2", "Physics", "PHY101", "Dr. Sharma", "q2", "a2", "Answered"),
            DoubtView("3", "Math", "MTH200", "Dr. Lee", "q3", "a3", "Answered"),
        ]

    def test_student_all(self, doubts):
        assert len(filter_for_student(doubts)) == 3

    def test_student_subject(self, doubts):
        assert [d.id for d in filter_for_student(doubts, subject="Physics")] == ["1", "2"]

    def test_student_status_case_insensitive(self, doubts):
        assert [d.id for d in filter_for_student(doubts, status="answered")] == ["2", "3"]
        assert [d.id for d in filter_for_student(doubts, subject="Physics", status="Pending")] == ["1"]

    def test_teacher(self, doubts):
        assert [d.id for d in filter_for_teacher(doubts, "Dr. Lee")] == ["1", "3"]


class TestTeacherSession:
    """客户端演示登录检查"""

    def test_login_remembers_teacher(self):
        session = TeacherSession()
        assert session.login("teacher", "teacher123", "  Dr. Lee ") == "Dr. Lee"
        assert session.is_logged_in is True
        assert session.require_teacher() == "Dr. Lee"

    def test_wrong_credentials(self):
        session = TeacherSession()
        with pytest.raises(AuthError):
            session.login("teacher", "nope", "Dr. Lee")
        assert session.is_logged_in is False

    def test_teacher_name_required(self):
        with pytest.raises(AuthError):
            TeacherSession().login("teacher", "teacher123", "   ")

    def test_dashboard_requires_login(self):
        session = TeacherSession()
        with pytest.raises(SessionExpiredError):
            session.require_teacher()

        session.login("teacher", "teacher123", "Dr. Lee")
        session.logout()
        with pytest.raises(SessionExpiredError):
            session.require_teacher()


class TestDoubtBoxClient:
    """DoubtBoxClient 端到端（TestClient 作为 httpx.Client）"""

    def test_submit_and_answer_flow(self, api_client):
        doubt = api_client.submit_doubt("Physics", "phy101", "Dr. Lee", "Why is the sky blue exactly?")
        assert doubt.course_code == "PHY101"
        assert doubt.status == "Pending"

        answered = api_client.submit_answer(doubt.id, SKY_ANSWER)
        assert answered.status == "Answered"
        assert answered.answered_at is not None

        with pytest.raises(DoubtBoxClientError) as exc_info:
            api_client.submit_answer(doubt.id, SKY_ANSWER)
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "This doubt has already been answered"

    def test_local_precheck_sends_nothing(self, api_client):
        with pytest.raises(DoubtBoxClientError) as exc_info:
            api_client.submit_doubt("Physics", "", "Dr. Lee", "Why is the sky blue exactly?")
        assert exc_info.value.status_code is None
        assert api_client.get_stats()["total"] == 0

        with pytest.raises(DoubtBoxClientError):
            api_client.submit_answer("any", "   ")

    def test_server_validation_details(self, api_client):
        with pytest.raises(DoubtBoxClientError) as exc_info:
            api_client.submit_doubt("Physics", "phy101", "Dr. Lee", "short")
        assert exc_info.value.status_code == 400
        assert exc_info.value.details == ["Question must be at least 10 characters long"]

    def test_get_missing(self, api_client):
        with pytest.raises(DoubtBoxClientError) as exc_info:
            api_client.get_doubt("missing")
        assert exc_info.value.status_code == 404
        assert exc_info.value.payload["id"] == "missing"

    def test_latest_and_student_view(self, api_client):
        assert api_client.latest_doubt() is None

        first = api_client.submit_doubt("Physics", "phy101", "Dr. Lee", "Why is the sky blue exactly?")
        second = api_client.submit_doubt("Math", "mth200", "Dr. Sharma", "What is an eigenvalue, intuitively?")
        api_client.submit_answer(first.id, SKY_ANSWER)

        assert api_client.latest_doubt().id == second.id
        assert [d.id for d in api_client.load_student_doubts(status="answered")] == [first.id]
        assert [d.id for d in api_client.load_student_doubts(subject="Math")] == [second.id]

    def test_teacher_dashboard(self, api_client):
        api_client.submit_doubt("Physics", "phy101", "Dr. Lee", "Why is the sky blue exactly?")
        api_client.submit_doubt("Math", "mth200", "Dr. Sharma", "What is an eigenvalue, intuitively?")

        data = api_client.login("teacher", "teacher123")
        session = TeacherSession()
        session.login("teacher", "teacher123", "Dr. Lee", token=data["token"])

        doubts = api_client.load_teacher_doubts(session)
        assert [d.teacher for d in doubts] == ["Dr. Lee"]

    def test_dashboard_without_login(self, api_client):
        with pytest.raises(SessionExpiredError):
            api_client.load_teacher_doubts(TeacherSession())

    def test_login_failure_and_profile(self, api_client):
        with pytest.raises(DoubtBoxClientError) as exc_info:
            api_client.login("teacher", "wrong")
        assert exc_info.value.status_code == 401
        assert api_client.get_profile()["email"] == "teacher@whisperboard.com"

    def test_stats(self, api_client):
        api_client.submit_doubt("Physics", "phy101", "Dr. Lee", "Why is the sky blue exactly?")
        assert api_client.get_stats() == {"total": 1, "pending": 1, "answered": 0}
