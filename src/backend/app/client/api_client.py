"""
答疑箱 HTTP 客户端

封装对 /api/doubts 与 /api/teacher 的调用，响应统一经过 normalize 模块处理。
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from app.core.config import get_settings
from app.client.normalize import (
    ALL,
    DoubtView,
    extract_latest,
    filter_for_student,
    filter_for_teacher,
    normalize_doubt,
    normalize_payload,
)
from app.client.session import TeacherSession

logger = logging.getLogger(__name__)


class DoubtBoxClientError(Exception):
    """
    客户端调用异常

    Attributes:
        message: 错误描述
        status_code: HTTP 状态码（网络错误或本地校验失败时为 None）
        payload: 服务端返回的 JSON（可能为 None）
    """

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        self.message = message
        self.status_code = status_code
        self.payload = payload
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message

    @property
    def details(self) -> List[str]:
        """服务端返回的 details（校验失败时为消息列表）"""
        if isinstance(self.payload, dict):
            details = self.payload.get("details")
            if isinstance(details, list):
                return [str(d) for d in details]
            if details:
                return [str(details)]
        return []


class DoubtBoxClient:
    """
    答疑箱 API 客户端

    使用示例:
        client = DoubtBoxClient("http://localhost:8000")
        doubt = client.submit_doubt("Physics", "phy101", "Dr. Lee", "Why is the sky blue exactly?")
        client.submit_answer(doubt.id, "The sky is blue due to Rayleigh scattering of sunlight.")
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        http_client: Optional[httpx.Client] = None
    ):
        """
        Args:
            base_url: API 地址（默认读取 WHISPERBOARD_API_URL）
            timeout: 请求超时时间（秒）
            http_client: 外部传入的 httpx.Client（测试时可传入 TestClient）
        """
        self.base_url = (base_url or get_settings().api_url).rstrip("/")
        self.timeout = timeout
        self._http_client = http_client

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")

        try:
            if self._http_client is not None:
                response = self._http_client.request(method, url, **kwargs)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = client.request(method, url, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            payload = _safe_json(e.response)
            message = payload.get("error") if isinstance(payload, dict) and payload.get("error") else "Server error"
            raise DoubtBoxClientError(message, e.response.status_code, payload) from e
        except httpx.RequestError as e:
            logger.error(f"网络错误: {method} {url}, error={e}")
            raise DoubtBoxClientError("Network error! Please check your connection and try again.") from e
        except ValueError as e:
            raise DoubtBoxClientError("Invalid JSON response from server") from e

    # ==================== 学生 ====================

    def submit_doubt(self, subject: str, course_code: str, teacher: str, question: str) -> DoubtView:
        """提交问题，字段为空时不发送请求"""
        fields = [(value or "").strip() for value in (subject, course_code, teacher, question)]
        if not all(fields):
            raise DoubtBoxClientError("Please fill in all fields!")

        subject, course_code, teacher, question = fields
        payload = self._request("POST", "/api/doubts", json={
            "subject": subject,
            "courseCode": course_code,
            "teacher": teacher,
            "question": question,
        })
        return normalize_payload(payload)[0]

    def list_doubts(self, teacher: Optional[str] = None) -> List[DoubtView]:
        """获取问题列表（可按教师过滤）"""
        params = {"teacher": teacher} if teacher else None
        payload = self._request("GET", "/api/doubts", params=params)
        return normalize_payload(payload)

    def get_doubt(self, doubt_id: str) -> DoubtView:
        payload = self._request("GET", f"/api/doubts/{doubt_id}")
        return normalize_payload(payload)[0]

    def latest_doubt(self) -> Optional[DoubtView]:
        """最新的一条问题，没有问题时返回 None"""
        record = extract_latest(self._request("GET", "/api/doubts"))
        return normalize_doubt(record) if record else None

    def load_student_doubts(self, subject: str = ALL, status: str = ALL) -> List[DoubtView]:
        """学生视图：拉取全部问题后在客户端按学科、状态筛选"""
        return filter_for_student(self.list_doubts(), subject=subject, status=status)

    def get_stats(self) -> Dict[str, int]:
        payload = self._request("GET", "/api/doubts/stats/summary")
        data = payload.get("data", payload) if isinstance(payload, dict) else {}
        return {key: int(data.get(key, 0)) for key in ("total", "pending", "answered")}

    # ==================== 教师 ====================

    def submit_answer(self, doubt_id: str, answer: str) -> DoubtView:
        """提交回答，内容为空时不发送请求"""
        answer = (answer or "").strip()
        if not answer:
            raise DoubtBoxClientError("Please write an answer before submitting!")

        payload = self._request("POST", f"/api/doubts/{doubt_id}/answer", json={"answer": answer})
        return normalize_payload(payload)[0]

    def login(self, username: str, password: str) -> Dict[str, str]:
        """服务端演示登录，返回 {username, role, token}"""
        payload = self._request("POST", "/api/teacher/login", json={
            "username": username,
            "password": password,
        })
        return payload.get("data", {}) if isinstance(payload, dict) else {}

    def get_profile(self) -> Dict[str, str]:
        payload = self._request("GET", "/api/teacher/profile")
        return payload.get("data", {}) if isinstance(payload, dict) else {}

    def load_teacher_doubts(self, session: TeacherSession) -> List[DoubtView]:
        """
        教师面板：按登录教师拉取问题

        Raises:
            SessionExpiredError: 未登录
        """
        teacher_name = session.require_teacher()
        return filter_for_teacher(self.list_doubts(teacher=teacher_name), teacher_name)


def _safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
