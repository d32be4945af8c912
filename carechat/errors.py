# carechat/errors.py
"""
业务错误类型。路由层统一渲染为 {"error": message}。

网关失败（GatewayFailure）不在这里：它被 llm.py 吸收为兜底回复。
"""


class CareChatError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Conflict(CareChatError):
    """用户名或邮箱已被注册"""
    status_code = 400


class InvalidCredentials(CareChatError):
    status_code = 400


class Unauthenticated(CareChatError):
    """缺少 token"""
    status_code = 401


class Forbidden(CareChatError):
    """token 签名无效或已过期"""
    status_code = 403


class BadRequest(CareChatError):
    status_code = 400


class PersistenceFailure(CareChatError):
    status_code = 500


class ServerError(CareChatError):
    status_code = 500
