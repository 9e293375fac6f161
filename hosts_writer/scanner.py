"""
启动扫描模块：根据正在运行的容器重建 hosts 条目
"""

import logging
from typing import Callable

import docker


class BootstrapScanner:
    """
    启动时扫描所有运行中的容器

    不依赖任何持久化的状态，只从 Docker 的实时状态推导 hosts 条目。
    """

    def __init__(
        self,
        client: docker.DockerClient,
        sync_callback: Callable[[str, bool], None],
        logger: logging.Logger
    ):
        """
        初始化启动扫描器

        参数:
            client: Docker 客户端实例
            sync_callback: 以 (容器ID, add) 调用的同步函数
            logger: 日志记录器实例
        """
        self.client = client
        self.sync_callback = sync_callback
        self.logger = logger

    def bootstrap(self) -> int:
        """
        为每个运行中的容器写入其当前条目

        返回:
            处理的容器数

        异常:
            docker.errors.DockerException: 无法列出容器
        """
        containers = self.client.containers.list()
        self.logger.info(f"发现 {len(containers)} 个运行中的容器")

        for container in containers:
            try:
                self.sync_callback(container.id, True)
            except Exception as e:
                # 隔离错误 - 单个容器失败不影响其他容器
                self.logger.error(f"处理容器 {container.name} 失败: {e}")

        return len(containers)
