"""Elasticsnap - Elasticsearch 快照备份适配器.

通过集群的 HTTP 管理 API 对一个或多个索引创建快照。

主要功能:
    - SnapshotConfig: 快照配置与校验
    - TimeIndiceResolver: 按天、周、月滚动的索引名称解析
    - ESClientFactory: 创建带认证与 TLS 配置的 Elasticsearch 客户端
    - SnapshotOrchestrator: 仓库校验、flush、禁止写入、分段合并和快照创建
    - ElasticsearchDatabase: 备份框架使用的数据库适配器

使用示例:
    from elasticsnap import ElasticsearchDatabase

    db = ElasticsearchDatabase(model, configure=lambda es: setattr(es, "indice", "users"))
    db.perform()
"""

__version__ = "0.1.0"

from elasticsnap.config import (
    ALL,
    IndiceTarget,
    Scheme,
    SnapshotConfig,
    TimeRotation,
)
from elasticsnap.connection import ConnectionConfig, ESClientFactory
from elasticsnap.database import ElasticsearchDatabase
from elasticsnap.exceptions import ConfigurationError, ElasticsnapError
from elasticsnap.rotation import ResolvedIndices, TimeIndiceResolver
from elasticsnap.snapshot import (
    BackupError,
    ClusterClient,
    ElasticsearchClusterClient,
    MaintenanceError,
    PreconditionError,
    SnapshotError,
    SnapshotOrchestrator,
)

__all__ = [
    # 版本
    "__version__",
    # 适配器
    "ElasticsearchDatabase",
    # 配置
    "SnapshotConfig",
    "IndiceTarget",
    "ALL",
    "TimeRotation",
    "Scheme",
    # 时间滚动索引
    "TimeIndiceResolver",
    "ResolvedIndices",
    # 客户端
    "ESClientFactory",
    "ConnectionConfig",
    "ClusterClient",
    "ElasticsearchClusterClient",
    # 快照流程
    "SnapshotOrchestrator",
    # 异常
    "ElasticsnapError",
    "ConfigurationError",
    "BackupError",
    "PreconditionError",
    "MaintenanceError",
    "SnapshotError",
]
