"""ES 客户端工厂模块 - 根据连接配置创建 Elasticsearch 客户端.

主要组件:
    - ESClientFactory: 客户端工厂，负责客户端的创建和生命周期管理
    - ConnectionConfig: 连接配置模型
    - parse_host: 将 host:port 地址转换为节点配置

使用示例:
    from elasticsnap.connection import ESClientFactory, ConnectionConfig

    factory = ESClientFactory(ConnectionConfig(hosts=["localhost:9200"]))
    client = factory.get_client()
"""

from .exceptions import ConnectionConfigError
from .models import ConnectionConfig
from .tool import ESClientFactory, parse_host

__all__ = [
    # 工厂
    "ESClientFactory",
    "parse_host",
    # 模型
    "ConnectionConfig",
    # 异常
    "ConnectionConfigError",
]
