"""时间滚动索引数据模型定义模块."""

from __future__ import annotations

from dataclasses import dataclass

from ..config import TimeRotation

# 各滚动周期对应的日期格式（不含前缀），{sep} 为日期分隔符
ROTATION_FORMATS: dict[TimeRotation, str] = {
    TimeRotation.DAILY: "{year:04d}{sep}{month:02d}{sep}{day:02d}",
    TimeRotation.WEEKLY: "{iso_year:04d}{sep}{iso_week:02d}",
    TimeRotation.MONTHLY: "{year:04d}{sep}{month:02d}",
}


@dataclass(frozen=True)
class ResolvedIndices:
    """时间滚动索引解析结果.

    Attributes:
        time_indice: ago 个周期之前的索引名称
        time_indice_plus_one: 比 time_indice 新一个周期的索引名称，
            仅在 strict 模式下计算
    """

    time_indice: str
    time_indice_plus_one: str | None = None
