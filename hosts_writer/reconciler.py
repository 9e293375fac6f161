"""
hosts 文件协调模块：计算并应用单个容器的条目变化
"""

import logging
from typing import Callable, Iterable, List

from hosts_writer import codec
from hosts_writer.hosts_file import HostsFileAccessor, HostsFileUnavailable
from hosts_writer.models import FileLine, HostRecord


def apply_change(
    lines: Iterable[FileLine],
    container_id: str,
    records: Iterable[HostRecord] = ()
) -> List[FileLine]:
    """
    移除某容器的全部条目，再在末尾追加新条目

    外部行和其他容器的行保持原样和原有顺序。
    同一别名只追加一次。

    参数:
        lines: 当前文件行
        container_id: 要协调的容器 ID
        records: 该容器的期望条目，为空表示移除

    返回:
        新的文件行列表
    """
    result = [
        line for line in lines
        if not (line.owned and line.container_id == container_id)
    ]

    seen = set()
    for record in records:
        if record.alias in seen:
            continue
        seen.add(record.alias)
        result.append(FileLine.from_record(record))

    return result


def strip_owned(lines: Iterable[FileLine]) -> List[FileLine]:
    """移除所有带所有权标记的行，包括没有容器 ID 的行"""
    return [line for line in lines if not line.owned]


class HostsReconciler:
    """
    hosts 文件变更的唯一入口

    每次协调都是一次完整的 获取 -> 解析 -> 修改 -> 序列化 -> 释放 循环。
    文件不可用时跳过本次操作，文件保持原样。
    """

    def __init__(self, accessor: HostsFileAccessor, logger: logging.Logger):
        """
        初始化协调器

        参数:
            accessor: hosts 文件访问器
            logger: 日志记录器实例
        """
        self.accessor = accessor
        self.logger = logger

    def _rewrite(self, mutate: Callable[[List[FileLine]], List[FileLine]]) -> bool:
        try:
            with self.accessor.acquire() as handle:
                raw = handle.read()
                new_raw = codec.encode(
                    mutate(codec.decode(raw)),
                    codec.detect_newline(raw)
                )
                if new_raw != raw:
                    handle.rewrite(new_raw)
                return True

        except HostsFileUnavailable as e:
            self.logger.error(
                f"{e}. 本次更新已跳过。"
                "可以通过 HOSTS_FILE 环境变量修改 hosts 文件路径。"
            )
            return False

    def reconcile(
        self,
        container_id: str,
        aliases: Iterable[str],
        address: str,
        add: bool
    ) -> bool:
        """
        使容器的条目与期望状态一致

        无论 add 为何值，先移除该容器的全部条目，因此重复应用同一事件
        得到相同的结果。

        参数:
            container_id: 容器 ID
            aliases: 容器在跟踪网络上的别名
            address: 容器在跟踪网络上的 IP 地址
            add: True 为写入别名，False 为只移除

        返回:
            完成协调返回 True，文件不可用而跳过返回 False
        """
        records = [
            HostRecord(address=address, alias=alias, container_id=container_id)
            for alias in aliases
        ] if add else []

        done = self._rewrite(
            lambda lines: apply_change(lines, container_id, records)
        )

        if done:
            if records:
                self.logger.info(
                    f"已写入主机记录: {container_id[:12]} → "
                    f"{', '.join(r.alias for r in records)} ({address})"
                )
            else:
                self.logger.info(f"已移除主机记录: {container_id[:12]}")

        return done

    def clean_all(self) -> bool:
        """
        移除所有带所有权标记的行

        在启动时、扫描现有容器之前调用一次，清除上一次运行残留的条目。

        返回:
            完成清理返回 True，文件不可用而跳过返回 False
        """
        done = self._rewrite(strip_owned)
        if done:
            self.logger.info("已移除所有残留的主机记录")
        return done
