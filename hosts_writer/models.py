"""
hosts 同步的数据模型
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple


OWNER_MARKER = "Added by whw"


@dataclass(frozen=True)
class HostRecord:
    """
    代表 hosts 文件中由本程序写入的单个条目

    属性:
        address: 容器在跟踪网络上的 IP 地址
        alias: 要映射的网络别名
        container_id: 拥有该条目的容器 ID
    """

    address: str
    alias: str
    container_id: str

    def to_hosts_line(self) -> str:
        """
        转换为 hosts 文件行格式

        格式: <IP>\t<别名>\t\t#<容器ID> Added by whw

        返回:
            格式化的 hosts 文件行
        """
        return f"{self.address}\t{self.alias}\t\t#{self.container_id} {OWNER_MARKER}"

    def __str__(self) -> str:
        return f"{self.alias} -> {self.address} ({self.container_id[:12]})"


@dataclass(frozen=True)
class FileLine:
    """
    hosts 文件中的一行

    owned 为 False 的行是外部行，必须原样保留。
    owned 为 True 的行以所有权标记结尾；container_id 在标记前
    没有 "#<容器ID> " 后缀时为 None。
    newline 是该行原有的行尾（最后一行没有行尾时为 ""），
    为 None 时序列化使用文件的默认行尾；它不参与比较。
    """

    text: str
    owned: bool = False
    container_id: Optional[str] = None
    newline: Optional[str] = field(default=None, compare=False)

    @classmethod
    def from_record(cls, record: HostRecord) -> "FileLine":
        return cls(record.to_hosts_line(), True, record.container_id)


@dataclass(frozen=True)
class NetworkAttachment:
    """容器在跟踪网络上的端点：地址和别名（按运行时顺序去重）"""

    network: str
    address: str
    aliases: Tuple[str, ...] = ()

    def records(self, container_id: str) -> Tuple[HostRecord, ...]:
        return tuple(
            HostRecord(address=self.address, alias=alias, container_id=container_id)
            for alias in self.aliases
        )
