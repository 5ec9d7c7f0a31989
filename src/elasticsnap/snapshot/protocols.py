"""集群客户端协议定义模块."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ClusterClient(Protocol):
    """快照流程依赖的集群客户端能力.

    所有方法同步阻塞直到集群响应或超时；传输失败或非 2xx 响应时抛出异常。
    返回值均为解析后的 JSON 响应体字典。
    """

    def verify_repository(self, name: str) -> dict[str, Any]:
        """校验快照仓库，仓库不存在或校验失败时抛出异常."""
        ...

    def indice_exists(self, name: str) -> bool: ...

    def flush(self, name: str) -> dict[str, Any]: ...

    def put_settings(self, name: str, settings: dict[str, Any]) -> dict[str, Any]: ...

    def force_merge(self, name: str, max_num_segments: int) -> dict[str, Any]: ...

    def create_snapshot(
        self,
        repository: str,
        snapshot: str,
        body: dict[str, Any],
        wait_for_completion: bool = True,
    ) -> dict[str, Any]: ...
