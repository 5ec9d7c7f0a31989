"""Elasticsearch 快照备份适配器模块.

ElasticsearchDatabase 是备份框架中的一个数据库适配器：框架通过配置回调构造适配器，
随后在每次备份时调用一次 perform()。快照由集群直接写入其已注册的快照仓库，
不会产生本地转储文件。

使用示例:
    from elasticsnap import ElasticsearchDatabase

    def configure(es):
        es.hosts = ["node1:9200", "node2:9200"]
        es.indice = "logs-"
        es.time_based = "daily"
        es.strict = True
        es.blocks_write = True
        es.max_num_segments = 1

    db = ElasticsearchDatabase(model, "logs", configure)
    db.perform()
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from elasticsearch import Elasticsearch

from .config import SnapshotConfig
from .connection import ConnectionConfig, ESClientFactory
from .exceptions import ElasticsnapError
from .rotation import ResolvedIndices, TimeIndiceResolver
from .snapshot import ClusterClient, ElasticsearchClusterClient, SnapshotOrchestrator

logger = logging.getLogger(__name__)


class ElasticsearchDatabase:
    """Elasticsearch 快照备份适配器.

    构造时依次完成：执行配置回调、校验配置、解析时间滚动索引、创建客户端。
    配置不合法时在任何网络请求之前抛出 ConfigurationError。

    Args:
        model: 所属的备份模型（由备份框架提供）
        database_id: 数据库标识，同一模型中存在多个 Elasticsearch 适配器时用于区分
        configure: 配置回调，接收已填充默认值的 SnapshotConfig 并修改其选项
        now_func: 获取当前时间的函数，默认 datetime.now，主要用于测试
        cluster_client: 自定义集群客户端，提供时不再创建 Elasticsearch 客户端

    Attributes:
        config: 已校验的快照配置
        resolved: 时间滚动索引解析结果，未开启时间滚动时为 None
        es_client: Elasticsearch 客户端实例
    """

    def __init__(
        self,
        model: Any,
        database_id: str | None = None,
        configure: Callable[[SnapshotConfig], None] | None = None,
        *,
        now_func: Callable[[], datetime] | None = None,
        cluster_client: ClusterClient | None = None,
    ) -> None:
        self.model = model
        self.database_id = database_id
        self._now_func = now_func or datetime.now

        now = self._now_func()
        self.config = SnapshotConfig().configure(configure).validate(now=now)

        self.resolved: ResolvedIndices | None = None
        if self.config.is_time_based:
            self.resolved = self._resolve_time_indices(now)

        self._factory = ESClientFactory(
            ConnectionConfig.from_snapshot_config(self.config)
        )
        self.es_client: Elasticsearch | None = None
        if cluster_client is None:
            self.es_client = self._factory.get_client()
            cluster_client = ElasticsearchClusterClient(self.es_client)

        self.orchestrator = SnapshotOrchestrator(
            cluster_client, self.config, self.resolved
        )
        self._closed = False

    def _resolve_time_indices(self, now: datetime) -> ResolvedIndices:
        config = self.config
        resolver = TimeIndiceResolver(
            config.time_based,
            prefix=config.indice.prefix,
            date_splitter=config.date_splitter,
            ago=config.ago,
            strict=bool(config.strict),
        )
        return resolver.resolve(now)

    @property
    def name(self) -> str:
        if self.database_id:
            return f"{type(self).__name__} ({self.database_id})"
        return type(self).__name__

    @property
    def time_indice(self) -> str | None:
        return self.resolved.time_indice if self.resolved else None

    @property
    def time_indice_plus_one(self) -> str | None:
        return self.resolved.time_indice_plus_one if self.resolved else None

    def perform(self) -> dict[str, Any]:
        """执行一次快照备份.

        Returns:
            快照创建的响应体

        Raises:
            elasticsearch.ApiError: 仓库不存在或校验失败等非 2xx 响应（如 NotFoundError）
            elasticsearch.TransportError: 连接失败、超时或证书被拒绝
            ElasticsnapError: 适配器已关闭
            PreconditionError: 目标索引或 plus-one 索引不存在
            MaintenanceError: flush、禁止写入或分段合并失败
            SnapshotError: 快照状态不为 SUCCESS
        """
        if self._closed:
            raise ElasticsnapError(f"{self.name} is closed")
        logger.info(
            f"{self.name} 开始创建快照 '{self.config.snapshot}' "
            f"(仓库: '{self.config.repository}')"
        )
        response = self.orchestrator.perform()
        logger.info(f"{self.name} 快照备份完成")
        return response

    # ============================================================
    # 生命周期管理
    # ============================================================

    def __enter__(self) -> ElasticsearchDatabase:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """关闭 Elasticsearch 客户端连接，关闭后不能再调用 perform()."""
        self._closed = True
        self._factory.close()
        self.es_client = None
