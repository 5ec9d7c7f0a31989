"""快照配置（SnapshotConfig、IndiceTarget）单元测试."""

from datetime import datetime

import pytest

from elasticsnap.config import (
    ALL,
    IndiceKind,
    IndiceTarget,
    Scheme,
    SnapshotConfig,
    TimeRotation,
    default_snapshot_name,
)
from elasticsnap.exceptions import ConfigurationError

NOW = datetime(2016, 4, 20, 16, 20, 0)


def build(**options) -> SnapshotConfig:
    """使用回调方式构建并校验配置."""

    def configure(config: SnapshotConfig) -> None:
        for name, value in options.items():
            setattr(config, name, value)

    return SnapshotConfig().configure(configure).validate(now=NOW)


class TestIndiceTarget:
    """IndiceTarget 测试."""

    def test_all_request_name(self) -> None:
        """测试全部索引的请求名称为 _all."""
        assert ALL.is_all
        assert ALL.request_name == "_all"
        assert ALL.prefix == "all"

    def test_specific(self) -> None:
        """测试指定索引."""
        target = IndiceTarget.specific("users")
        assert target.kind is IndiceKind.SPECIFIC
        assert not target.is_all
        assert target.request_name == "users"
        assert str(target) == "users"

    def test_literal_all_is_specific(self) -> None:
        """测试名为 all 的索引不会被视为全部索引."""
        target = IndiceTarget.coerce("all")
        assert not target.is_all
        assert target.request_name == "all"

    @pytest.mark.parametrize("value", [None, ""])
    def test_blank_means_all(self, value) -> None:
        """测试空值视为全部索引."""
        assert IndiceTarget.coerce(value) == ALL

    def test_coerce_rejects_other_types(self) -> None:
        """测试非法类型抛出 ConfigurationError."""
        with pytest.raises(ConfigurationError, match="#indice"):
            IndiceTarget.coerce(42)

    def test_specific_rejects_empty_name(self) -> None:
        with pytest.raises(ConfigurationError):
            IndiceTarget.specific("")


class TestDefaults:
    """默认值测试."""

    def test_default_values(self) -> None:
        """测试未设置任何选项时的默认值."""
        config = build()
        assert config.hosts == ["localhost:9200"]
        assert config.repository == "mybackup"
        assert config.indice == ALL
        assert config.snapshot == "snapshot2016.04.20.16h20m00s"
        assert config.timeout == 600
        assert config.scheme is Scheme.HTTP
        assert config.validate_ssl is None
        assert config.ignore_unavailable is None
        assert config.time_based is None
        assert config.ago == 1
        assert config.date_splitter == "."
        assert config.strict is None
        assert config.max_num_segments is None
        assert config.blocks_write is None
        assert config.flush is None
        assert config.username is None
        assert config.password is None
        assert config.cacert is None

    def test_default_snapshot_name(self) -> None:
        assert default_snapshot_name(NOW) == "snapshot2016.04.20.16h20m00s"

    def test_https_enables_ssl_validation(self) -> None:
        """测试 https 下 validate_ssl 默认为 True."""
        config = build(scheme="https")
        assert config.scheme is Scheme.HTTPS
        assert config.validate_ssl is True

    def test_https_explicit_ssl_validation_disabled(self) -> None:
        """测试显式关闭 validate_ssl."""
        config = build(scheme="https", validate_ssl=False)
        assert config.validate_ssl is False

    def test_defaults_are_not_shared(self) -> None:
        """测试默认 hosts 列表不在实例间共享."""
        first = SnapshotConfig()
        first.hosts.append("other:9200")
        assert SnapshotConfig().hosts == ["localhost:9200"]


class TestEveryValue:
    """全部选项设置测试."""

    def test_provides_every_value(self) -> None:
        config = build(
            hosts=["myhost:9200"],
            repository="my_repository",
            indice="my_indice-",
            snapshot="my_snapshot",
            timeout=900,
            ignore_unavailable=True,
            time_based="monthly",
            ago=2,
            date_splitter="-",
            strict=True,
            max_num_segments=1,
            blocks_write=True,
            flush=True,
            username="my_username",
            password="my_password",
            scheme="https",
            validate_ssl=True,
            cacert="my_file_path",
        )
        assert config.hosts == ["myhost:9200"]
        assert config.repository == "my_repository"
        assert config.indice == IndiceTarget.specific("my_indice-")
        assert config.snapshot == "my_snapshot"
        assert config.timeout == 900
        assert config.ignore_unavailable is True
        assert config.time_based is TimeRotation.MONTHLY
        assert config.ago == 2
        assert config.date_splitter == "-"
        assert config.strict is True
        assert config.max_num_segments == 1
        assert config.blocks_write is True
        assert config.flush is True
        assert config.username == "my_username"
        assert config.password == "my_password"
        assert config.scheme is Scheme.HTTPS
        assert config.validate_ssl is True
        assert config.cacert == "my_file_path"

    def test_password_not_in_repr(self) -> None:
        config = build(username="elastic", password="secret")
        assert "secret" not in repr(config)

    def test_single_host_string(self) -> None:
        config = build(hosts="myhost:9200")
        assert config.hosts == ["myhost:9200"]


class TestValidation:
    """配置校验测试."""

    def test_invalid_max_num_segments(self) -> None:
        with pytest.raises(ConfigurationError, match=r"#max_num_segments.* must be >= 1"):
            build(max_num_segments=0)

    def test_invalid_timeout(self) -> None:
        with pytest.raises(ConfigurationError, match=r"#timeout.* must be >= 1"):
            build(timeout=0)

    def test_invalid_ago(self) -> None:
        with pytest.raises(ConfigurationError, match=r"#ago.* must be >= 1"):
            build(ago=0)

    def test_bool_is_not_an_integer(self) -> None:
        with pytest.raises(ConfigurationError, match="#timeout"):
            build(timeout=True)

    def test_lists_every_offending_option(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            build(timeout=-1, max_num_segments=0)
        assert "#timeout" in str(exc_info.value)
        assert "#max_num_segments" in str(exc_info.value)

    def test_invalid_scheme(self) -> None:
        with pytest.raises(ConfigurationError, match="#scheme"):
            build(scheme="ftp")

    def test_invalid_time_based(self) -> None:
        with pytest.raises(ConfigurationError, match="#time_based"):
            build(time_based="hourly")

    def test_empty_hosts(self) -> None:
        with pytest.raises(ConfigurationError, match="#hosts"):
            build(hosts=[])

    def test_validation_runs_after_callback(self) -> None:
        """测试回调中修正的值可以通过校验."""
        config = SnapshotConfig(timeout=0)

        def configure(c: SnapshotConfig) -> None:
            c.timeout = 30

        assert config.configure(configure).validate(now=NOW).timeout == 30


class TestFromMapping:
    """from_mapping 测试."""

    def test_builds_config(self) -> None:
        config = SnapshotConfig.from_mapping(
            {"indice": "users", "flush": True}
        ).validate(now=NOW)
        assert config.indice == IndiceTarget.specific("users")
        assert config.flush is True

    def test_unknown_option(self) -> None:
        with pytest.raises(ConfigurationError, match="#retention"):
            SnapshotConfig.from_mapping({"retention": 7})
