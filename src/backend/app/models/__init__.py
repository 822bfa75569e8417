"""
Models package
Export all database models
"""

from .base import Base
from .doubt import Doubt, DoubtStatus, utcnow_with_tz

__all__ = [
    "Base",
    "Doubt",
    "DoubtStatus",
    "utcnow_with_tz",
]


def init_db():
    """初始化数据库"""
    from ..core.database import engine

    # 创建所有表
    Base.metadata.create_all(bind=engine)
    print("✅ Database tables created successfully")


def drop_all():
    """删除所有表（仅开发测试用）"""
    from ..core.database import engine

    # 删除所有表
    Base.metadata.drop_all(bind=engine)
    print("⚠️  All tables dropped")
