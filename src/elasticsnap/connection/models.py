"""ES 客户端工厂数据模型定义模块."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..config import Scheme, SnapshotConfig
from .exceptions import ConnectionConfigError


@dataclass
class ConnectionConfig:
    """连接配置模型.

    定义 ES 集群的连接信息，包括地址、协议、认证方式、SSL 校验和请求超时。

    Attributes:
        hosts: ES 节点地址列表（host:port 或完整 URL，不可为空）
        scheme: 连接协议，默认 http
        username: Basic Auth 用户名
        password: Basic Auth 密码
        verify_certs: 是否验证 SSL 证书（仅 https 生效）
        ca_certs: CA 证书文件路径（仅在 verify_certs 为 True 时生效）
        request_timeout: 请求超时时间（秒），默认 600，必须 >= 1
        reload_on_failure: 连接失败后是否重新嗅探存活节点，默认 True

    Raises:
        ConnectionConfigError: 当参数不合法时抛出

    Examples:
        >>> config = ConnectionConfig(
        ...     hosts=["myhost:9200"],
        ...     scheme=Scheme.HTTPS,
        ...     username="elastic",
        ...     password="changeme",
        ... )
    """

    hosts: list[str] = field(default_factory=list)
    scheme: Scheme = Scheme.HTTP
    username: str | None = None
    password: str | None = field(default=None, repr=False)
    verify_certs: bool = False
    ca_certs: str | None = None
    request_timeout: int = 600
    reload_on_failure: bool = True

    def __post_init__(self) -> None:
        """校验连接配置参数合法性."""
        if not self.hosts:
            raise ConnectionConfigError("#hosts must contain at least one host")
        if self.request_timeout < 1:
            raise ConnectionConfigError(
                f"#request_timeout must be >= 1 (got {self.request_timeout})"
            )
        self.scheme = Scheme(self.scheme)

    @classmethod
    def from_snapshot_config(cls, config: SnapshotConfig) -> ConnectionConfig:
        """从已校验的快照配置构建连接配置.

        verify_certs 为 validate_ssl 的布尔值；仅当开启校验时才使用 cacert。
        """
        verify = bool(config.validate_ssl)
        return cls(
            hosts=list(config.hosts),
            scheme=Scheme(config.scheme),
            username=config.username,
            password=config.password,
            verify_certs=verify,
            ca_certs=config.cacert if verify else None,
            request_timeout=config.timeout,
        )
