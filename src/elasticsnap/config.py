"""快照配置模型定义模块.

提供快照适配器的配置相关模型，包括：
- IndiceTarget: 目标索引（全部索引 / 指定索引）
- TimeRotation: 时间滚动周期枚举
- Scheme: 连接协议枚举
- SnapshotConfig: 快照配置

配置通过回调函数在默认值之上修改，然后统一调用 validate() 校验一次。
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from .exceptions import ConfigurationError

# 默认值常量
DEFAULT_HOSTS: tuple[str, ...] = ("localhost:9200",)
DEFAULT_REPOSITORY = "mybackup"
DEFAULT_TIMEOUT = 60 * 10
DEFAULT_AGO = 1
DEFAULT_DATE_SPLITTER = "."
SNAPSHOT_NAME_FORMAT = "snapshot%Y.%m.%d.%Hh%Mm%Ss"

# 必须为 >= 1 的整数选项
_UNSIGNED_OPTIONS = ("max_num_segments", "timeout", "ago")


class TimeRotation(str, Enum):
    """时间滚动周期.

    Attributes:
        DAILY: 按天滚动
        WEEKLY: 按 ISO 周滚动
        MONTHLY: 按月滚动
    """

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Scheme(str, Enum):
    """连接协议."""

    HTTP = "http"
    HTTPS = "https"


class IndiceKind(str, Enum):
    """目标索引类型."""

    ALL = "all"
    SPECIFIC = "specific"


@dataclass(frozen=True)
class IndiceTarget:
    """目标索引.

    区分 "全部索引" 与 "指定名称的索引"，名为 "all" 的索引
    与全部索引不会混淆。

    Attributes:
        kind: 目标类型
        name: 指定索引名称（kind 为 ALL 时为 None）

    Examples:
        >>> IndiceTarget.all().request_name
        '_all'
        >>> IndiceTarget.specific("logs-").prefix
        'logs-'
    """

    kind: IndiceKind
    name: str | None = None

    @classmethod
    def all(cls) -> IndiceTarget:
        return cls(IndiceKind.ALL)

    @classmethod
    def specific(cls, name: str) -> IndiceTarget:
        if not name:
            raise ConfigurationError("#indice name must not be empty")
        return cls(IndiceKind.SPECIFIC, name)

    @classmethod
    def coerce(cls, value: IndiceTarget | str | None) -> IndiceTarget:
        """将用户配置的值转换为 IndiceTarget.

        None 和空字符串视为全部索引。
        """
        if isinstance(value, IndiceTarget):
            return value
        if value is None or value == "":
            return cls.all()
        if isinstance(value, str):
            return cls.specific(value)
        raise ConfigurationError(
            f"#indice must be a string or IndiceTarget, got {type(value).__name__}"
        )

    @property
    def is_all(self) -> bool:
        return self.kind is IndiceKind.ALL

    @property
    def prefix(self) -> str:
        """时间滚动索引名称前缀."""
        return "all" if self.is_all else self.name

    @property
    def request_name(self) -> str:
        """API 请求中使用的索引名称."""
        return "_all" if self.is_all else self.name

    def __str__(self) -> str:
        return self.request_name


ALL = IndiceTarget.all()


def default_snapshot_name(now: datetime) -> str:
    """根据时间生成默认快照名称，例如 snapshot2016.04.20.16h20m00s."""
    return now.strftime(SNAPSHOT_NAME_FORMAT)


@dataclass
class SnapshotConfig:
    """快照配置模型.

    Attributes:
        hosts: ES 节点地址列表（host:port），默认 ["localhost:9200"]
        repository: 集群中已注册的快照仓库名称，默认 "mybackup"
        indice: 目标索引，默认全部索引；开启时间滚动时作为名称前缀
        snapshot: 快照名称，None 时根据当前时间生成
        timeout: 请求超时时间（秒），默认 600，必须 >= 1
        ignore_unavailable: 缺失的索引是否不导致快照失败
        time_based: 索引时间滚动周期
        date_splitter: 日期分隔符，默认 "."
        ago: 备份多少个周期之前的索引，默认 1，必须 >= 1
        strict: 是否要求下一个周期的索引已存在
        max_num_segments: 快照前合并到的分段数，必须 >= 1
        blocks_write: 快照前是否禁止写入
        flush: 快照前是否执行 flush
        username: Basic Auth 用户名
        password: Basic Auth 密码
        scheme: 连接协议，默认 "http"
        validate_ssl: 是否校验服务端证书，https 下默认 True
        cacert: 自签名 CA 证书文件路径

    Examples:
        >>> config = SnapshotConfig()
        >>> config.indice = "logs-"
        >>> config.time_based = "daily"
        >>> config.validate()
    """

    hosts: list[str] = field(default_factory=lambda: list(DEFAULT_HOSTS))
    repository: str = DEFAULT_REPOSITORY
    indice: IndiceTarget | str | None = ALL
    snapshot: str | None = None
    timeout: int = DEFAULT_TIMEOUT
    ignore_unavailable: bool | None = None
    time_based: TimeRotation | str | None = None
    date_splitter: str = DEFAULT_DATE_SPLITTER
    ago: int = DEFAULT_AGO
    strict: bool | None = None
    max_num_segments: int | None = None
    blocks_write: bool | None = None
    flush: bool | None = None
    username: str | None = None
    password: str | None = field(default=None, repr=False)
    scheme: Scheme | str = Scheme.HTTP
    validate_ssl: bool | None = None
    cacert: str | None = None

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> SnapshotConfig:
        """从普通字典构建配置（未校验）.

        Raises:
            ConfigurationError: 存在未知选项时抛出
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ConfigurationError(
                "unknown option(s): " + ", ".join(f"#{name}" for name in unknown)
            )
        return cls(**options)

    def configure(
        self, callback: Callable[[SnapshotConfig], None] | None
    ) -> SnapshotConfig:
        """在默认值之上执行配置回调，支持链式调用."""
        if callback is not None:
            callback(self)
        return self

    def validate(self, now: datetime | None = None) -> SnapshotConfig:
        """校验配置并补全派生默认值.

        在任何派生状态（时间索引、客户端）计算之前调用一次。

        Args:
            now: 生成默认快照名称使用的时间，默认当前时间

        Returns:
            配置实例自身

        Raises:
            ConfigurationError: 选项不合法时抛出
        """
        self._check_unsigned()

        if not self.hosts:
            raise ConfigurationError("#hosts must contain at least one host")
        if isinstance(self.hosts, str):
            self.hosts = [self.hosts]
        else:
            self.hosts = list(self.hosts)

        try:
            self.scheme = Scheme(self.scheme)
        except ValueError:
            raise ConfigurationError(
                f"#scheme must be one of http, https (got {self.scheme!r})"
            ) from None

        if self.time_based is not None:
            try:
                self.time_based = TimeRotation(self.time_based)
            except ValueError:
                raise ConfigurationError(
                    "#time_based must be one of daily, weekly, monthly "
                    f"(got {self.time_based!r})"
                ) from None

        self.indice = IndiceTarget.coerce(self.indice)

        if not self.repository:
            self.repository = DEFAULT_REPOSITORY
        if not self.snapshot:
            self.snapshot = default_snapshot_name(now or datetime.now())
        if self.date_splitter is None:
            self.date_splitter = DEFAULT_DATE_SPLITTER

        if self.scheme is Scheme.HTTPS and self.validate_ssl is None:
            self.validate_ssl = True

        return self

    def _check_unsigned(self) -> None:
        """检查整数选项必须 >= 1."""
        invalid = []
        for name in _UNSIGNED_OPTIONS:
            value = getattr(self, name)
            if value is None and name == "max_num_segments":
                continue
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                invalid.append(name)
        if invalid:
            names = ", ".join(f"#{name}" for name in invalid)
            raise ConfigurationError(f"Configuration Error: {names} must be >= 1")

    @property
    def is_time_based(self) -> bool:
        return self.time_based is not None
