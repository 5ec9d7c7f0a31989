"""快照流程异常定义模块.

传输层异常（连接失败、超时、证书被拒绝、仓库校验返回非 2xx）
使用 elasticsearch 库自身的 TransportError / ApiError，不做包装。
"""

from ..exceptions import ElasticsnapError


class BackupError(ElasticsnapError):
    """快照流程基础异常类.

    所有快照流程中的异常都会终止本次 perform() 调用，已完成的维护步骤不会回滚。
    """

    pass


class PreconditionError(BackupError):
    """前置条件异常.

    当目标索引或 strict 模式下的 plus-one 索引不存在时抛出。
    """

    pass


class MaintenanceError(BackupError):
    """维护步骤异常.

    flush、禁止写入或分段合并返回失败标志（分片失败数不为 0 或未被确认）时抛出。
    """

    pass


class SnapshotError(BackupError):
    """快照创建异常.

    快照创建结果的 state 不为 SUCCESS 时抛出。
    """

    pass
