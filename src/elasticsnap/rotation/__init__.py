"""时间滚动索引模块.

根据滚动周期（按天、按 ISO 周、按月）和 ago 偏移量计算需要备份的索引名称，
strict 模式下额外计算下一个周期的索引名称，用于确认当前周期已经结束。

示例用法:
    >>> from datetime import datetime
    >>> from elasticsnap.rotation import TimeIndiceResolver
    >>> resolver = TimeIndiceResolver("weekly", prefix="all")
    >>> resolver.resolve(datetime(2016, 4, 20)).time_indice
    'all2016.15'
"""

from .models import ResolvedIndices
from .tool import TimeIndiceResolver, shift_months

__all__ = [
    "TimeIndiceResolver",
    "ResolvedIndices",
    "shift_months",
]
