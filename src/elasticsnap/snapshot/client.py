"""基于官方 elasticsearch 客户端的集群客户端实现."""

from __future__ import annotations

import logging
from typing import Any

from elasticsearch import Elasticsearch

logger = logging.getLogger(__name__)


def _body(response: Any) -> Any:
    """取出 API 响应体，兼容 ObjectApiResponse 与普通字典."""
    return getattr(response, "body", response)


class ElasticsearchClusterClient:
    """ClusterClient 协议的 Elasticsearch 实现.

    仅负责发起请求和提取响应体，响应内容的判断由 SnapshotOrchestrator 完成。
    非 2xx 响应由 elasticsearch 库抛出 ApiError（如 NotFoundError），原样向上传播。

    Args:
        es_client: Elasticsearch 客户端实例
    """

    def __init__(self, es_client: Elasticsearch):
        if es_client is None:
            raise ValueError("es_client must not be None")
        self.es_client = es_client

    def verify_repository(self, name: str) -> dict[str, Any]:
        return _body(self.es_client.snapshot.verify_repository(name=name))

    def indice_exists(self, name: str) -> bool:
        return bool(self.es_client.indices.exists(index=name))

    def flush(self, name: str) -> dict[str, Any]:
        # synced flush 已从集群中移除，普通 flush 返回同样的 _shards 统计
        return _body(self.es_client.indices.flush(index=name))

    def put_settings(self, name: str, settings: dict[str, Any]) -> dict[str, Any]:
        return _body(self.es_client.indices.put_settings(index=name, settings=settings))

    def force_merge(self, name: str, max_num_segments: int) -> dict[str, Any]:
        return _body(
            self.es_client.indices.forcemerge(
                index=name, max_num_segments=max_num_segments
            )
        )

    def create_snapshot(
        self,
        repository: str,
        snapshot: str,
        body: dict[str, Any],
        wait_for_completion: bool = True,
    ) -> dict[str, Any]:
        return _body(
            self.es_client.snapshot.create(
                repository=repository,
                snapshot=snapshot,
                wait_for_completion=wait_for_completion,
                **body,
            )
        )
