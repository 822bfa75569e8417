"""
演示教师认证
与固定的演示账号做字面比较，返回的 token 只是时间戳字符串，不做任何校验
"""
import logging
import time
from typing import Dict, Optional

from app.core.config import Settings, get_settings
from app.core.exceptions import AuthError, MissingCredentialsError

logger = logging.getLogger(__name__)

TEACHER_ROLE = "teacher"
TEACHER_EMAIL = "teacher@whisperboard.com"


def issue_demo_token() -> str:
    """生成演示 token（纳秒时间戳，连续两次调用结果不同）"""
    return f"demo-token-{time.time_ns()}"


class TeacherAuthService:
    """演示教师认证服务"""

    @staticmethod
    def check_credentials(username: Optional[str], password: Optional[str], settings: Optional[Settings] = None) -> bool:
        """字面比较用户名和密码"""
        settings = settings or get_settings()
        return username == settings.demo_teacher_username and password == settings.demo_teacher_password

    @staticmethod
    def login(username: Optional[str], password: Optional[str], settings: Optional[Settings] = None) -> Dict[str, str]:
        """
        教师登录

        Args:
            username: 用户名
            password: 密码
            settings: 配置（可选，默认读取全局配置）

        Returns:
            Dict: {"username", "role", "token"}

        Raises:
            MissingCredentialsError: 缺少用户名或密码
            AuthError: 账号或密码错误（不区分具体哪一项）
        """
        if not username or not password:
            raise MissingCredentialsError()

        if not TeacherAuthService.check_credentials(username, password, settings):
            logger.warning(f"教师登录失败: username={username}")
            raise AuthError()

        logger.info(f"教师登录成功: username={username}")
        return {
            "username": username,
            "role": TEACHER_ROLE,
            "token": issue_demo_token(),
        }

    @staticmethod
    def get_profile(settings: Optional[Settings] = None) -> Dict[str, str]:
        """获取演示教师资料（静态数据）"""
        settings = settings or get_settings()
        return {
            "username": settings.demo_teacher_username,
            "role": TEACHER_ROLE,
            "email": TEACHER_EMAIL,
        }
