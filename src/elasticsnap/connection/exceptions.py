"""ES 客户端工厂异常定义模块."""

from ..exceptions import ConfigurationError


class ConnectionConfigError(ConfigurationError):
    """连接配置校验异常.

    当连接配置参数不合法时抛出，例如 hosts 为空、request_timeout 小于 1、
    host 地址无法解析等。
    """

    pass
