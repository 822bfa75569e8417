"""
WhisperBoard 后端包
匿名答疑箱（doubt box）的 API 服务与客户端
"""
