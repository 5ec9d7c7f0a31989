"""快照流程模块.

该模块提供了快照备份流程的编排功能，包括：
- 快照仓库校验
- 目标索引与 strict 模式 plus-one 索引存在性校验
- 可选的 flush、禁止写入、分段合并
- 创建快照并校验结果

示例用法:
    >>> from elasticsnap.snapshot import SnapshotOrchestrator, ElasticsearchClusterClient
    >>> orchestrator = SnapshotOrchestrator(ElasticsearchClusterClient(es_client), config)
    >>> orchestrator.perform()
"""

from .client import ElasticsearchClusterClient
from .exceptions import (
    BackupError,
    MaintenanceError,
    PreconditionError,
    SnapshotError,
)
from .protocols import ClusterClient
from .tool import BLOCKS_WRITE_SETTINGS, SnapshotOrchestrator

__all__ = [
    # 核心类
    "SnapshotOrchestrator",
    "ElasticsearchClusterClient",
    # 协议
    "ClusterClient",
    # 常量
    "BLOCKS_WRITE_SETTINGS",
    # 异常类
    "BackupError",
    "PreconditionError",
    "MaintenanceError",
    "SnapshotError",
]
