"""快照备份适配器使用示例.

本文件展示了如何使用 ElasticsearchDatabase 对索引创建快照。
快照仓库需要事先在集群中注册。
"""

import logging

from elasticsearch import ApiError, TransportError

from elasticsnap import (
    BackupError,
    ConfigurationError,
    ElasticsearchDatabase,
    SnapshotConfig,
)

logging.basicConfig(level=logging.INFO)


# ==================== 示例1：对全部索引创建快照 ====================
def example_snapshot_all():
    """使用默认配置对全部索引创建快照."""
    with ElasticsearchDatabase(model="nightly") as db:
        response = db.perform()
        print(f"快照状态: {response['snapshot']['state']}")


# ==================== 示例2：备份昨天的按天滚动索引 ====================
def example_daily_indice():
    """备份 logs-YYYY.MM.DD 中昨天的索引.

    strict 模式下要求今天的索引已存在，确认昨天的数据已经写入完毕。
    快照前禁止写入并合并为每分片 1 个分段。
    """

    def configure(es: SnapshotConfig) -> None:
        es.hosts = ["node1:9200", "node2:9200"]
        es.repository = "logs_backup"
        es.indice = "logs-"
        es.time_based = "daily"
        es.strict = True
        es.flush = True
        es.blocks_write = True
        es.max_num_segments = 1

    with ElasticsearchDatabase("nightly", "logs", configure) as db:
        print(f"备份索引: {db.time_indice}")
        db.perform()


# ==================== 示例3：https 与 Basic Auth ====================
def example_https():
    """使用自签名证书通过 https 连接集群."""

    def configure(es: SnapshotConfig) -> None:
        es.hosts = ["es.example.com:9200"]
        es.scheme = "https"
        es.cacert = "/etc/ssl/certs/es-ca.pem"
        es.username = "backup"
        es.password = "changeme"
        es.indice = "users"
        es.ignore_unavailable = True

    with ElasticsearchDatabase("nightly", "users", configure) as db:
        db.perform()


if __name__ == "__main__":
    for example in (example_snapshot_all, example_daily_indice, example_https):
        try:
            example()
        except ConfigurationError as e:
            print(f"配置错误: {e}")
        except BackupError as e:
            print(f"备份失败: {e}")
        except (ApiError, TransportError) as e:
            print(f"请求失败: {e}")
