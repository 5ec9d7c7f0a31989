"""Elasticsnap 异常定义模块."""


class ElasticsnapError(Exception):
    """Elasticsnap 基础异常类."""

    pass


class ConfigurationError(ElasticsnapError):
    """配置校验异常.

    当用户配置的选项不合法时抛出（例如 timeout < 1），
    发生在任何网络请求之前，不会被重试。
    """

    pass
