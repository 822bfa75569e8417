"""
FastAPI应用入口
"""
from dotenv import load_dotenv
from pathlib import Path
import logging

# 加载环境变量 - 优先从根目录加载，回退到当前目录
root_env = Path(__file__).parent.parent.parent / ".env"
if root_env.exists():
    load_dotenv(root_env)
else:
    load_dotenv()

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import doubts, teacher
from app.core.config import get_settings
from app.core.exceptions import DoubtBoxError

settings = get_settings()

# -------------------------------------------------
# Logger 设置
# -------------------------------------------------
app_logger = logging.getLogger("app")
if not app_logger.handlers:
    _h = logging.StreamHandler()
    _h.setFormatter(logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))
    app_logger.addHandler(_h)
app_logger.setLevel(settings.log_level)

logger = logging.getLogger(__name__)


def _get_cors_config() -> tuple[list[str], str | None]:
    """
    获取 CORS 配置

    Returns:
        (allow_origins, allow_origin_regex)
        - 生产环境：使用精确匹配的 origins 列表
        - 开发环境：使用正则匹配本地端口，方便本地开发
    """
    if settings.allowed_origins:
        return settings.allowed_origins, None

    # 开发环境：使用正则匹配所有本地端口
    if settings.dev_mode:
        return [], r"http://(localhost|127\.0\.0\.1)(:\d+)?"

    # 非开发环境且未配置 ALLOWED_ORIGINS：拒绝所有跨域
    logger.warning("未配置 ALLOWED_ORIGINS 且非开发模式，CORS 将拒绝所有跨域请求")
    return [], None


app = FastAPI(
    title="WhisperBoard API",
    description="Anonymous doubt box connecting students and teachers",
    version="0.1.0"
)

# CORS配置 - 从环境变量读取允许的源
allow_origins, allow_origin_regex = _get_cors_config()
logger.info(f"CORS 配置: origins={allow_origins}, regex={allow_origin_regex}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_origin_regex=allow_origin_regex,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DoubtBoxError)
async def doubtbox_error_handler(request: Request, exc: DoubtBoxError):
    """业务异常统一转换为响应信封"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} 失败: {exc}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """请求体无法解析（非 JSON、字段类型错误）时按校验失败处理"""
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        details.append(f"{location}: {message}" if location else message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": "Validation failed", "details": details},
    )


# 包含所有路由
app.include_router(doubts.router, prefix="/api", tags=["答疑管理"])
app.include_router(teacher.router, prefix="/api", tags=["教师"])


@app.get("/")
async def root():
    """根路径"""
    return {"message": "WhisperBoard API", "docs": "/docs"}


@app.get("/health")
async def health():
    """健康检查"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
