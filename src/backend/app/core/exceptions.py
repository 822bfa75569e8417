"""
业务异常定义

所有异常都在服务层抛出，由 main.py 中注册的异常处理器统一转换为
{success: false, error, details?, data?, id?} 响应信封。
"""
from typing import Any, Dict, List, Optional


class DoubtBoxError(Exception):
    """答疑箱异常基类"""

    status_code: int = 500

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.message = message
        self.cause = cause
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message} (caused by: {self.cause})"
        return self.message

    def to_payload(self) -> Dict[str, Any]:
        """转换为响应信封"""
        return {"success": False, "error": self.message}


class ValidationError(DoubtBoxError):
    """输入校验失败（400），details 为全部违反的规则"""

    status_code = 400

    def __init__(self, details: List[str], message: str = "Validation failed"):
        super().__init__(message)
        self.details = list(details)

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        payload["details"] = self.details
        return payload


class NotFoundError(DoubtBoxError):
    """记录不存在（404），回显请求的 id"""

    status_code = 404

    def __init__(self, doubt_id: str, message: str = "Doubt not found"):
        super().__init__(message)
        self.doubt_id = doubt_id

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        payload["id"] = self.doubt_id
        return payload


class ConflictError(DoubtBoxError):
    """重复回答（400），附带未被修改的原记录"""

    status_code = 400

    def __init__(self, record: Dict[str, Any], message: str = "This doubt has already been answered"):
        super().__init__(message)
        self.record = record

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        payload["data"] = self.record
        return payload


class StoreError(DoubtBoxError):
    """底层存储调用失败（500）"""

    status_code = 500

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        payload["details"] = str(self.cause) if self.cause else self.message
        return payload


class AuthError(DoubtBoxError):
    """演示账号认证失败（401）"""

    status_code = 401

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message)


class MissingCredentialsError(DoubtBoxError):
    """登录缺少用户名或密码（400），不附带 details"""

    status_code = 400

    def __init__(self, message: str = "Username and password are required"):
        super().__init__(message)
