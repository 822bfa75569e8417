"""
Pytest 配置和通用 Fixtures

提供内存 SQLite 数据库、注入测试会话的 FastAPI TestClient，以及指向 TestClient 的 DoubtBoxClient
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import get_settings
from app.models import Base


# ==================== 数据库 ====================

@pytest.fixture
def engine():
    """内存 SQLite（StaticPool 保证所有会话共享同一连接）"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    """测试用数据库会话"""
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


# ==================== 配置 ====================

@pytest.fixture(autouse=True)
def reset_settings():
    """每个测试前后清空配置缓存，便于 monkeypatch 环境变量"""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ==================== API ====================

@pytest.fixture
def client(session_factory):
    """创建测试客户端（get_db 替换为内存数据库）"""
    from fastapi.testclient import TestClient
    from main import app
    from app.core.database import get_db

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def api_client(client):
    """DoubtBoxClient，请求经由 TestClient 发送到应用"""
    from app.client import DoubtBoxClient

    return DoubtBoxClient(base_url="http://testserver", http_client=client)


# ==================== 测试数据 ====================

@pytest.fixture
def sky_doubt():
    """示例问题"""
    return {
        "subject": "Physics",
        "courseCode": "phy101",
        "teacher": "Dr. Lee",
        "question": "Why is the sky blue exactly?",
    }


SKY_ANSWER = "The sky is blue due to Rayleigh scattering of sunlight."
