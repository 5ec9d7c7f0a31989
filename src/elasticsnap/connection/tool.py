"""ES 客户端工厂工具模块.

提供 ESClientFactory 类，根据连接配置创建绑定节点地址、协议、
SSL 校验策略和 Basic Auth 凭据的 Elasticsearch 客户端。

使用示例:
    from elasticsnap.connection import ESClientFactory, ConnectionConfig

    with ESClientFactory(ConnectionConfig(hosts=["localhost:9200"])) as factory:
        client = factory.get_client()
"""

from __future__ import annotations

import logging
from typing import Any

from elasticsearch import Elasticsearch

from ..config import Scheme
from .exceptions import ConnectionConfigError
from .models import ConnectionConfig

logger = logging.getLogger(__name__)

DEFAULT_PORT = 9200


def parse_host(host: str, scheme: Scheme) -> str | dict[str, Any]:
    """将 host:port 形式的地址转换为节点配置.

    已包含协议的完整 URL 原样返回；缺少端口时使用 9200。

    Args:
        host: 节点地址，例如 "localhost:9200"、"[::1]:9200" 或 "https://node:9200"
        scheme: 连接协议

    Returns:
        完整 URL 字符串，或包含 scheme、host、port 的字典

    Raises:
        ConnectionConfigError: 地址为空或端口不合法时抛出
    """
    host = host.strip()
    if not host:
        raise ConnectionConfigError("#hosts must not contain empty entries")
    if "://" in host:
        return host

    name, port = host, DEFAULT_PORT
    if host.startswith("["):
        # IPv6 地址，例如 [::1]:9200
        bracket_end = host.find("]")
        if bracket_end == -1:
            raise ConnectionConfigError(f"invalid host '{host}'")
        name = host[1:bracket_end]
        rest = host[bracket_end + 1 :]
        if rest.startswith(":"):
            port = rest[1:]
    elif ":" in host:
        name, _, port = host.rpartition(":")

    try:
        port = int(port)
    except ValueError:
        raise ConnectionConfigError(f"invalid port in host '{host}'") from None

    return {"scheme": Scheme(scheme).value, "host": name, "port": port}


class ESClientFactory:
    """Elasticsearch 客户端工厂.

    根据连接配置惰性创建并缓存客户端。创建客户端时不会发起网络请求，
    连通性在第一次调用 API 时才会校验。

    Attributes:
        _config: 连接配置
        _client: 缓存的客户端实例

    Examples:
        >>> factory = ESClientFactory(ConnectionConfig(hosts=["localhost:9200"]))
        >>> client = factory.get_client()
    """

    def __init__(self, config: ConnectionConfig) -> None:
        self._config = config
        self._client: Elasticsearch | None = None

    @property
    def config(self) -> ConnectionConfig:
        return self._config

    def build_kwargs(self) -> dict[str, Any]:
        """构建 Elasticsearch 客户端的初始化参数.

        Returns:
            传给 Elasticsearch 构造函数的参数字典
        """
        config = self._config
        kwargs: dict[str, Any] = {
            "hosts": [parse_host(host, config.scheme) for host in config.hosts],
            "request_timeout": config.request_timeout,
            "sniff_on_node_failure": config.reload_on_failure,
        }

        # Basic Auth 认证
        if config.username:
            kwargs["basic_auth"] = (config.username, config.password or "")

        # SSL/TLS 配置，仅 https 生效
        if config.scheme is Scheme.HTTPS:
            kwargs["verify_certs"] = config.verify_certs
            if config.verify_certs and config.ca_certs:
                kwargs["ca_certs"] = config.ca_certs

        return kwargs

    def get_client(self) -> Elasticsearch:
        """获取客户端，首次调用时创建并缓存.

        Returns:
            Elasticsearch 客户端实例
        """
        if self._client is None:
            kwargs = self.build_kwargs()
            logger.debug(
                f"创建 Elasticsearch 客户端: hosts={self._config.hosts}, "
                f"scheme={self._config.scheme.value}, "
                f"verify_certs={kwargs.get('verify_certs', False)}"
            )
            self._client = Elasticsearch(**kwargs)
        return self._client

    # ============================================================
    # 生命周期管理
    # ============================================================

    def __enter__(self) -> ESClientFactory:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """上下文管理器退出，自动关闭客户端."""
        self.close()

    def close(self) -> None:
        """关闭已创建的客户端连接并清空缓存."""
        if self._client is not None:
            client, self._client = self._client, None
            client.close()
