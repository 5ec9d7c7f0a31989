"""快照流程编排核心工具类."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ..config import SnapshotConfig
from ..rotation import ResolvedIndices
from .exceptions import MaintenanceError, PreconditionError, SnapshotError
from .protocols import ClusterClient

logger = logging.getLogger(__name__)

# 禁止写入的索引设置
BLOCKS_WRITE_SETTINGS: dict[str, Any] = {"index": {"blocks": {"write": True}}}

SNAPSHOT_SUCCESS = "SUCCESS"


class SnapshotOrchestrator:
    """快照流程编排器.

    按固定顺序执行一次快照备份，任一步骤失败即终止：

    1. 校验快照仓库存在
    2. 可选：strict 模式下校验 plus-one 索引存在
    3. 校验目标索引存在
    4. 可选：flush 索引
    5. 可选：禁止索引写入
    6. 可选：合并索引分段
    7. 创建快照并等待完成

    已完成的维护步骤不会回滚，例如禁止写入后快照失败，写入仍保持禁止状态。

    Args:
        client: 集群客户端
        config: 已校验的快照配置
        resolved: 时间滚动索引解析结果，未开启时间滚动时为 None
    """

    def __init__(
        self,
        client: ClusterClient,
        config: SnapshotConfig,
        resolved: ResolvedIndices | None = None,
    ):
        if client is None:
            raise ValueError("client must not be None")
        if config.is_time_based and resolved is None:
            raise ValueError("resolved indices are required for time-based indices")
        self.client = client
        self.config = config
        self.resolved = resolved

    @property
    def snapshot_all(self) -> bool:
        """是否对全部索引创建快照（与是否开启时间滚动无关）."""
        return self.config.indice.is_all

    def target_indice(self) -> str:
        """需要备份的索引名称."""
        if self.config.is_time_based:
            return self.resolved.time_indice
        return self.config.indice.request_name

    def perform(self) -> dict[str, Any]:
        """执行完整的快照流程.

        Returns:
            快照创建的响应体

        Raises:
            elasticsearch.ApiError: 仓库不存在或校验失败
            PreconditionError: 目标索引或 plus-one 索引不存在
            MaintenanceError: 维护步骤失败
            SnapshotError: 快照状态不为 SUCCESS
        """
        self.verify_repository()

        if self.resolved is not None and self.resolved.time_indice_plus_one:
            plus_one = self.resolved.time_indice_plus_one
            self.check_indice_exists(
                plus_one, f"indice plus one '{plus_one}' does not exist"
            )

        indice = self.target_indice()
        self.check_indice_exists(indice, f"indice '{indice}' does not exist")

        return self.snapshot_indice(indice)

    def verify_repository(self) -> None:
        """校验快照仓库，非 2xx 响应由客户端抛出异常."""
        repository = self.config.repository
        self.client.verify_repository(repository)
        logger.info(f"快照仓库 '{repository}' 校验通过")

    def check_indice_exists(self, indice: str, failure_message: str) -> None:
        if not self.client.indice_exists(indice):
            logger.error(failure_message)
            raise PreconditionError(failure_message)

    def snapshot_indice(self, indice: str) -> dict[str, Any]:
        """依次执行维护步骤并创建快照."""
        self.do_flush(indice)
        self.do_blocks_write(indice)
        self.do_merge_segments(indice)
        return self.do_snapshot(indice)

    # ------------------------------------------------------------------
    # 维护步骤
    # ------------------------------------------------------------------

    def do_flush(self, indice: str) -> None:
        if not self.config.flush:
            logger.debug(f"跳过 flush 索引 '{indice}'")
            return
        self._expect_no_failure(
            f"failed to flush indice '{indice}'",
            lambda: self.client.flush(indice),
        )
        logger.info(f"索引 '{indice}' flush 完成")

    def do_blocks_write(self, indice: str) -> None:
        if not self.config.blocks_write:
            logger.debug(f"跳过禁止写入索引 '{indice}'")
            return
        self._expect_acknowledge(
            f"failed to update settings of indice '{indice}'",
            lambda: self.client.put_settings(indice, BLOCKS_WRITE_SETTINGS),
        )
        logger.info(f"索引 '{indice}' 已禁止写入")

    def do_merge_segments(self, indice: str) -> None:
        max_num_segments = self.config.max_num_segments
        if not max_num_segments:
            logger.debug(f"跳过合并索引 '{indice}' 分段")
            return
        self._expect_no_failure(
            f"failed to merge segments of indice '{indice}'",
            lambda: self.client.force_merge(indice, max_num_segments),
        )
        logger.info(f"索引 '{indice}' 已合并为每分片 {max_num_segments} 个分段")

    def do_snapshot(self, indice: str) -> dict[str, Any]:
        """创建快照并等待完成.

        请求体总是包含 ignore_unavailable；对全部索引创建快照时不包含 indices 字段。

        Raises:
            SnapshotError: 响应中缺少 snapshot 或 state 不为 SUCCESS
        """
        body: dict[str, Any] = {
            "ignore_unavailable": bool(self.config.ignore_unavailable)
        }
        if not self.snapshot_all:
            body["indices"] = indice

        response = self.client.create_snapshot(
            self.config.repository,
            self.config.snapshot,
            body,
            wait_for_completion=True,
        )

        snapshot = response.get("snapshot") if isinstance(response, dict) else None
        state = snapshot.get("state") if isinstance(snapshot, dict) else None
        if state != SNAPSHOT_SUCCESS:
            message = f"failed to create snapshot of indice '{indice}'"
            logger.error(f"{message} (state: {state})")
            raise SnapshotError(message)

        logger.info(
            f"快照 '{self.config.snapshot}' 创建成功 "
            f"(仓库: '{self.config.repository}', 索引: '{indice}')"
        )
        return response

    # ------------------------------------------------------------------
    # 响应检查
    # ------------------------------------------------------------------

    @staticmethod
    def _expect_acknowledge(
        failure_message: str, call: Callable[[], dict[str, Any]]
    ) -> None:
        """响应体必须恰好为 {"acknowledged": True}."""
        response = call()
        if response != {"acknowledged": True}:
            logger.error(f"{failure_message}: {response}")
            raise MaintenanceError(failure_message)

    @staticmethod
    def _expect_no_failure(
        failure_message: str, call: Callable[[], dict[str, Any]]
    ) -> None:
        """响应体必须包含 _shards 且失败分片数为 0."""
        response = call()
        shards = response.get("_shards") if isinstance(response, dict) else None
        if not isinstance(shards, dict) or shards.get("failed") != 0:
            logger.error(f"{failure_message}: {response}")
            raise MaintenanceError(failure_message)
