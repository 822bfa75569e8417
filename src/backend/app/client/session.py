"""
客户端教师会话

进入教师面板前在客户端再做一次演示账号检查（与服务端登录相互独立），
并记住登录教师的姓名，用于筛选面板中的问题。
"""
from typing import Optional

from app.core.config import Settings
from app.core.exceptions import AuthError
from app.services.auth_service import TeacherAuthService


class SessionExpiredError(Exception):
    """未登录或会话已失效"""

    def __init__(self, message: str = "Session expired. Please login again."):
        self.message = message
        super().__init__(self.message)


class TeacherSession:
    """教师面板会话（仅保存在内存中）"""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings
        self.teacher_name: Optional[str] = None
        self.token: Optional[str] = None

    @property
    def is_logged_in(self) -> bool:
        return bool(self.teacher_name)

    def login(self, username: str, password: str, teacher_name: str, token: Optional[str] = None) -> str:
        """
        校验演示账号并记录教师姓名

        Args:
            username: 用户名
            password: 密码
            teacher_name: 面板使用的教师姓名（与问题中的 teacher 字段精确匹配）
            token: 服务端登录返回的 token（可选，仅保存）

        Returns:
            str: 去空格后的教师姓名

        Raises:
            AuthError: 账号或密码错误，或未填写教师姓名
        """
        if not TeacherAuthService.check_credentials(username, password, self._settings):
            raise AuthError()

        name = (teacher_name or "").strip()
        if not name:
            raise AuthError("Teacher name is required")

        self.teacher_name = name
        self.token = token
        return name

    def require_teacher(self) -> str:
        """获取当前教师姓名，未登录时抛出 SessionExpiredError"""
        if not self.teacher_name:
            raise SessionExpiredError()
        return self.teacher_name

    def logout(self) -> None:
        self.teacher_name = None
        self.token = None
