"""
应用配置管理模块

统一管理服务端与客户端的配置，支持环境变量和 .env 文件。
配置优先级：环境变量 > 默认值
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List


# 演示教师账号（仅用于 Demo，生产环境需替换为真正的认证）
DEMO_TEACHER_USERNAME = "teacher"
DEFAULT_DEMO_TEACHER_PASSWORD = "teacher123"

DEFAULT_DATABASE_URL = "sqlite:///./data/app.db"
DEFAULT_API_URL = "http://localhost:8000"


@dataclass
class Settings:
    """
    应用配置

    Attributes:
        database_url: 数据库连接地址
        demo_teacher_username: 演示教师用户名（固定）
        demo_teacher_password: 演示教师密码（可被 DEMO_TEACHER_PASSWORD 覆盖）
        allowed_origins: CORS 允许的源
        dev_mode: 开发模式（放开本地端口的跨域）
        log_level: 日志级别
        api_url: 客户端访问的 API 基础地址
    """
    database_url: str = DEFAULT_DATABASE_URL
    demo_teacher_username: str = DEMO_TEACHER_USERNAME
    demo_teacher_password: str = DEFAULT_DEMO_TEACHER_PASSWORD
    allowed_origins: List[str] = field(default_factory=list)
    dev_mode: bool = False
    log_level: str = "INFO"
    api_url: str = DEFAULT_API_URL


def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


def load_settings() -> Settings:
    """
    从环境变量读取配置

    环境变量：
        DATABASE_URL: 数据库连接地址
        DEMO_TEACHER_PASSWORD: 演示教师密码
        ALLOWED_ORIGINS: 逗号分隔的 CORS 源
        DEV_MODE: 是否开发模式（true/false）
        LOG_LEVEL: 日志级别
        WHISPERBOARD_API_URL: 客户端使用的 API 地址

    Returns:
        Settings 配置对象
    """
    return Settings(
        database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
        demo_teacher_password=os.getenv("DEMO_TEACHER_PASSWORD") or DEFAULT_DEMO_TEACHER_PASSWORD,
        allowed_origins=_split_origins(os.getenv("ALLOWED_ORIGINS", "")),
        dev_mode=os.getenv("DEV_MODE", "false").lower() == "true",
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        api_url=os.getenv("WHISPERBOARD_API_URL", DEFAULT_API_URL).rstrip("/"),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """获取全局配置（首次调用时从环境变量加载，之后只读）"""
    return load_settings()
