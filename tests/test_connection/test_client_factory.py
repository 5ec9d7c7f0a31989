"""ESClientFactory 单元测试.

覆盖客户端参数构建（地址、认证、SSL、超时、节点重载）和生命周期管理。
"""

from unittest.mock import patch

import pytest

from elasticsnap.config import Scheme
from elasticsnap.connection.exceptions import ConnectionConfigError
from elasticsnap.connection.models import ConnectionConfig
from elasticsnap.connection.tool import ESClientFactory, parse_host

ES_PATCH_PATH = "elasticsnap.connection.tool.Elasticsearch"


# ============================================================
# 地址解析测试
# ============================================================


class TestParseHost:
    """parse_host 函数测试."""

    def test_host_and_port(self) -> None:
        assert parse_host("myhost:9201", Scheme.HTTPS) == {
            "scheme": "https",
            "host": "myhost",
            "port": 9201,
        }

    def test_default_port(self) -> None:
        assert parse_host("myhost", Scheme.HTTP) == {
            "scheme": "http",
            "host": "myhost",
            "port": 9200,
        }

    def test_ipv6(self) -> None:
        assert parse_host("[::1]:9300", Scheme.HTTP) == {
            "scheme": "http",
            "host": "::1",
            "port": 9300,
        }

    def test_url_passthrough(self) -> None:
        assert parse_host("https://node:9200", Scheme.HTTP) == "https://node:9200"

    def test_invalid_port(self) -> None:
        with pytest.raises(ConnectionConfigError, match="invalid port"):
            parse_host("myhost:abc", Scheme.HTTP)

    def test_empty_host(self) -> None:
        with pytest.raises(ConnectionConfigError):
            parse_host("  ", Scheme.HTTP)


# ============================================================
# 客户端创建测试
# ============================================================


class TestGetClient:
    """get_client 方法测试."""

    @patch(ES_PATCH_PATH)
    def test_default_kwargs(self, mock_es) -> None:
        factory = ESClientFactory(ConnectionConfig(hosts=["localhost:9200"]))
        factory.get_client()
        call_kwargs = mock_es.call_args[1]
        assert call_kwargs["hosts"] == [
            {"scheme": "http", "host": "localhost", "port": 9200}
        ]
        assert call_kwargs["request_timeout"] == 600
        assert call_kwargs["sniff_on_node_failure"] is True
        assert "basic_auth" not in call_kwargs
        assert "verify_certs" not in call_kwargs
        assert "ca_certs" not in call_kwargs

    @patch(ES_PATCH_PATH)
    def test_client_lazy_caching(self, mock_es) -> None:
        """测试客户端惰性缓存（多次调用返回同一实例）."""
        factory = ESClientFactory(ConnectionConfig(hosts=["localhost:9200"]))
        assert mock_es.call_count == 0
        client1 = factory.get_client()
        client2 = factory.get_client()
        assert client1 is client2
        assert mock_es.call_count == 1

    @patch(ES_PATCH_PATH)
    def test_multiple_hosts(self, mock_es) -> None:
        factory = ESClientFactory(
            ConnectionConfig(hosts=["node1:9200", "node2:9200"], scheme=Scheme.HTTPS)
        )
        factory.get_client()
        hosts = mock_es.call_args[1]["hosts"]
        assert [h["host"] for h in hosts] == ["node1", "node2"]
        assert all(h["scheme"] == "https" for h in hosts)


# ============================================================
# 认证与 SSL 测试
# ============================================================


class TestAuthentication:
    """认证与 SSL 配置测试."""

    @patch(ES_PATCH_PATH)
    def test_basic_auth(self, mock_es) -> None:
        factory = ESClientFactory(
            ConnectionConfig(
                hosts=["myhost:9200"], username="myusername", password="mypassword"
            )
        )
        factory.get_client()
        assert mock_es.call_args[1]["basic_auth"] == ("myusername", "mypassword")

    @patch(ES_PATCH_PATH)
    def test_basic_auth_without_password(self, mock_es) -> None:
        factory = ESClientFactory(
            ConnectionConfig(hosts=["myhost:9200"], username="myusername")
        )
        factory.get_client()
        assert mock_es.call_args[1]["basic_auth"] == ("myusername", "")

    @patch(ES_PATCH_PATH)
    def test_https_verify_with_ca(self, mock_es) -> None:
        factory = ESClientFactory(
            ConnectionConfig(
                hosts=["myhost:9200"],
                scheme=Scheme.HTTPS,
                verify_certs=True,
                ca_certs="/path/to/ca.pem",
            )
        )
        factory.get_client()
        call_kwargs = mock_es.call_args[1]
        assert call_kwargs["verify_certs"] is True
        assert call_kwargs["ca_certs"] == "/path/to/ca.pem"

    @patch(ES_PATCH_PATH)
    def test_https_without_verification(self, mock_es) -> None:
        factory = ESClientFactory(
            ConnectionConfig(
                hosts=["myhost:9200"],
                scheme=Scheme.HTTPS,
                verify_certs=False,
                ca_certs="/path/to/ca.pem",
            )
        )
        factory.get_client()
        call_kwargs = mock_es.call_args[1]
        assert call_kwargs["verify_certs"] is False
        assert "ca_certs" not in call_kwargs


# ============================================================
# 生命周期管理测试
# ============================================================


class TestLifecycle:
    """上下文管理器与 close 测试."""

    @patch(ES_PATCH_PATH)
    def test_context_manager_closes_client(self, mock_es) -> None:
        with ESClientFactory(ConnectionConfig(hosts=["localhost:9200"])) as factory:
            client = factory.get_client()
        client.close.assert_called_once()

    @patch(ES_PATCH_PATH)
    def test_close_without_client(self, mock_es) -> None:
        factory = ESClientFactory(ConnectionConfig(hosts=["localhost:9200"]))
        factory.close()
        mock_es.assert_not_called()

    @patch(ES_PATCH_PATH)
    def test_client_recreated_after_close(self, mock_es) -> None:
        factory = ESClientFactory(ConnectionConfig(hosts=["localhost:9200"]))
        factory.get_client()
        factory.close()
        factory.get_client()
        assert mock_es.call_count == 2
