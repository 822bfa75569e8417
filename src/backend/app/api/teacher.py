"""
教师API
演示登录与资料查询（无会话、无 token 校验）
"""
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from app.services import TeacherAuthService

router = APIRouter(prefix="/teacher", tags=["教师"])


class LoginRequest(BaseModel):
    """登录请求"""
    username: Optional[str] = None
    password: Optional[str] = None


@router.post("/login")
async def login(request: Optional[LoginRequest] = None):
    """演示教师登录"""
    request = request or LoginRequest()
    data = TeacherAuthService.login(request.username, request.password)
    return {
        "success": True,
        "message": "Login successful",
        "data": data,
    }


@router.get("/profile")
async def get_profile():
    """获取教师资料（演示数据）"""
    return {
        "success": True,
        "data": TeacherAuthService.get_profile(),
    }
