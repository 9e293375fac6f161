"""
容器检查模块：读取容器在跟踪网络上的端点
"""

import logging
from typing import List, Optional

import docker

from hosts_writer.config import Config
from hosts_writer.models import NetworkAttachment


class ContainerInspector:
    """
    从 Docker 容器提取跟踪网络上的地址和别名

    只关心一个网络，其他网络上的端点一律忽略。
    """

    def __init__(self, client: docker.DockerClient, config: Config, logger: logging.Logger):
        """
        初始化容器检查器

        参数:
            client: Docker 客户端实例
            config: 应用配置
            logger: 日志记录器实例
        """
        self.client = client
        self.config = config
        self.logger = logger

    @staticmethod
    def _unique_aliases(aliases: Optional[List[str]]) -> List[str]:
        result: List[str] = []
        for alias in aliases or []:
            if alias and alias not in result:
                result.append(alias)
        return result

    def attachment_from_attrs(self, attrs: dict) -> Optional[NetworkAttachment]:
        """
        从 inspect 结果中取出跟踪网络的端点

        参数:
            attrs: 容器的 inspect 数据

        返回:
            NetworkAttachment；容器不在跟踪网络上时返回 None
        """
        networks = (attrs.get('NetworkSettings') or {}).get('Networks') or {}
        network_data = networks.get(self.config.tracked_network)
        if network_data is None:
            return None

        return NetworkAttachment(
            network=self.config.tracked_network,
            address=network_data.get('IPAddress') or '',
            aliases=tuple(self._unique_aliases(network_data.get('Aliases')))
        )

    def attachment(self, container_id: str) -> Optional[NetworkAttachment]:
        """
        检查容器并返回其在跟踪网络上的端点

        参数:
            container_id: 容器 ID

        返回:
            NetworkAttachment；容器不在跟踪网络上时返回 None

        异常:
            docker.errors.NotFound: 容器已不存在
            docker.errors.APIError: Docker API 通信失败
        """
        container = self.client.containers.get(container_id)
        found = self.attachment_from_attrs(container.attrs)

        if found is None:
            self.logger.debug(
                f"容器 {container.name} 不在网络 {self.config.tracked_network} 上"
            )
        else:
            self.logger.debug(
                f"容器 {container.name} 使用网络 {found.network}: "
                f"{found.address or '-'} -> {list(found.aliases)}"
            )

        return found
