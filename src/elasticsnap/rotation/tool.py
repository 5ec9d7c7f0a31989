"""时间滚动索引解析工具模块."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta

from ..config import TimeRotation
from .models import ROTATION_FORMATS, ResolvedIndices

logger = logging.getLogger(__name__)


def shift_months(day: date, months: int) -> date:
    """将日期向前（months 为负）或向后平移若干个月.

    日期超出目标月份天数时取该月最后一天，例如 3 月 31 日往前一个月为 2 月末。
    """
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    # 目标月份最后一天 = 下月1号 - 1天
    next_month = date(year + month // 12, month % 12 + 1, 1)
    last_day = (next_month - timedelta(days=1)).day
    return day.replace(year=year, month=month, day=min(day.day, last_day))


class TimeIndiceResolver:
    """时间滚动索引名称解析器.

    根据滚动周期、ago、日期分隔符和前缀，计算需要备份的索引名称。
    当前时间由调用方显式传入，解析过程不读取系统时间。

    Args:
        time_based: 滚动周期
        prefix: 索引名称前缀
        date_splitter: 日期分隔符，默认 "."
        ago: 备份多少个周期之前的索引，默认 1
        strict: 是否同时计算 plus-one 索引名称

    示例:
        >>> resolver = TimeIndiceResolver(TimeRotation.DAILY, prefix="logs-")
        >>> resolver.resolve(datetime(2016, 4, 20, 16, 20)).time_indice
        'logs-2016.04.19'
    """

    def __init__(
        self,
        time_based: TimeRotation,
        prefix: str = "",
        date_splitter: str = ".",
        ago: int = 1,
        strict: bool = False,
    ) -> None:
        self.time_based = TimeRotation(time_based)
        self.prefix = prefix or ""
        self.date_splitter = date_splitter
        self.ago = ago
        self.strict = bool(strict)

    def resolve(self, now: datetime) -> ResolvedIndices:
        """计算 time_indice 以及（strict 模式下的）time_indice_plus_one.

        Args:
            now: 参考时间

        Returns:
            ResolvedIndices 对象
        """
        time_indice = self.indice_name(now, self.ago)
        plus_one = None
        if self.strict:
            plus_one = self.indice_name(now, self.ago - 1)

        logger.debug(
            f"解析时间滚动索引: time_indice='{time_indice}', "
            f"time_indice_plus_one='{plus_one}'"
        )
        return ResolvedIndices(time_indice=time_indice, time_indice_plus_one=plus_one)

    def indice_name(self, now: datetime, periods_ago: int) -> str:
        """计算 periods_ago 个周期之前的索引名称."""
        day = self.shift(now.date(), periods_ago)
        iso_year, iso_week, _ = day.isocalendar()
        suffix = ROTATION_FORMATS[self.time_based].format(
            sep=self.date_splitter,
            year=day.year,
            month=day.month,
            day=day.day,
            iso_year=iso_year,
            iso_week=iso_week,
        )
        return f"{self.prefix}{suffix}"

    def shift(self, day: date, periods_ago: int) -> date:
        """将日期向前平移若干个滚动周期."""
        if self.time_based is TimeRotation.DAILY:
            return day - timedelta(days=periods_ago)
        if self.time_based is TimeRotation.WEEKLY:
            return day - timedelta(weeks=periods_ago)
        return shift_months(day, -periods_ago)
