"""
Docker 网络事件处理和监控模块
"""

import logging
from typing import Callable, Dict, List

import docker


class NetworkEventListener:
    """
    处理 Docker 网络事件并触发 hosts 条目更新

    监控跟踪网络上的 connect/disconnect 事件，逐个同步处理。
    """

    # 事件动作 -> 是否写入条目
    WATCHED_EVENTS: Dict[str, bool] = {'connect': True, 'disconnect': False}

    def __init__(
        self,
        client: docker.DockerClient,
        network_name: str,
        network_driver: str,
        sync_callback: Callable[[str, bool], None],
        logger: logging.Logger,
        debug: bool = False
    ):
        """
        初始化事件监听器

        参数:
            client: Docker 客户端实例
            network_name: 跟踪的网络名
            network_driver: 要处理的网络驱动类型
            sync_callback: 以 (容器ID, add) 调用的同步函数
            logger: 日志记录器实例
            debug: 出错时是否输出堆栈
        """
        self.client = client
        self.network_name = network_name
        self.network_driver = network_driver
        self.sync_callback = sync_callback
        self.logger = logger
        self.debug = debug
        self.running = True
        self._stream = None

    @property
    def filters(self) -> Dict[str, List[str]]:
        return {
            'type': ['network'],
            'event': sorted(self.WATCHED_EVENTS),
            'network': [self.network_name],
        }

    def handle_event(self, event: dict) -> None:
        """
        处理单个事件，不向外抛出异常

        只处理网络名和驱动都与跟踪网络一致的事件。

        参数:
            event: 解码后的 Docker 事件
        """
        if event.get('Type') != 'network':
            return

        action = event.get('Action')
        if action not in self.WATCHED_EVENTS:
            return

        attributes = event.get('Actor', {}).get('Attributes', {})
        network = attributes.get('name', 'unknown')
        if network != self.network_name or attributes.get('type') != self.network_driver:
            self.logger.debug(
                f"忽略网络 {network} 的事件 "
                f"(驱动: {attributes.get('type', 'unknown')})"
            )
            return

        container_id = attributes.get('container')
        if not container_id:
            self.logger.warning(f"{action} 事件缺少容器 ID")
            return

        self.logger.info(f"网络事件: {action} - {container_id[:12]} ({network})")

        try:
            self.sync_callback(container_id, self.WATCHED_EVENTS[action])
        except Exception as e:
            self.logger.error(
                f"{action} 事件后更新时出错: {e}",
                exc_info=self.debug
            )

    def listen_events(self) -> None:
        """
        监听 Docker 网络事件

        阻塞直到停止或事件流结束。在 stop() 之后调用时直接返回。

        异常:
            docker.errors.DockerException: 无法订阅事件流
        """
        if not self.running:
            return

        self.logger.info("启动 Docker 事件监听器")

        self._stream = self.client.events(decode=True, filters=self.filters)
        try:
            for event in self._stream:
                if not self.running:
                    break
                self.handle_event(event)
        finally:
            self._stream = None

        self.logger.info("事件监听器已停止")

    def stop(self) -> None:
        """
        停止监听事件

        可以在信号处理器中调用：正在处理的事件会先完成。
        """
        self.running = False
        self.logger.info("正在停止事件监听器...")
        stream = self._stream
        if stream is not None and hasattr(stream, 'close'):
            stream.close()
