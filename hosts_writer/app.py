"""
Docker Hosts Writer 主应用模块
"""

import logging
import sys

import docker
from docker.errors import DockerException
from requests.exceptions import RequestException

from hosts_writer.config import Config
from hosts_writer.events import NetworkEventListener
from hosts_writer.hosts_file import HostsFileAccessor
from hosts_writer.inspector import ContainerInspector
from hosts_writer.reconciler import HostsReconciler
from hosts_writer.scanner import BootstrapScanner


RUNTIME_ERRORS = (DockerException, RequestException)


class EventStreamClosed(Exception):
    """事件流在没有请求停止的情况下结束"""


class DockerHostsWriter:
    """
    主应用控制器，协调所有组件

    管理应用的生命周期：
    - 创建 Docker 客户端并传给各个组件
    - 启动时清除上次运行残留的条目
    - 扫描现有容器写入初始条目
    - 逐个处理网络事件
    """

    def __init__(self, config: Config, client: docker.DockerClient = None):
        """
        初始化应用

        参数:
            config: 应用配置
            client: 已创建的 Docker 客户端，为 None 时按配置创建

        异常:
            DockerException: 如果无法连接到 Docker 守护进程
            ValueError: 如果配置无效
        """
        self.config = config
        self.config.validate()

        self.logger = self._setup_logging()
        self.client = client if client is not None else self._connect()

        # 初始化组件
        self.inspector = ContainerInspector(self.client, config, self.logger)
        self.reconciler = HostsReconciler(
            HostsFileAccessor(
                config.hosts_file_path,
                self.logger,
                attempts=config.lock_attempts,
                retry_delay=config.lock_retry_delay
            ),
            self.logger
        )
        self.scanner = BootstrapScanner(self.client, self.sync_container, self.logger)
        self.event_listener = NetworkEventListener(
            self.client,
            config.tracked_network,
            config.network_driver,
            self.sync_container,
            self.logger,
            debug=config.debug
        )

    def _setup_logging(self) -> logging.Logger:
        """
        配置日志系统

        返回:
            配置好的日志记录器实例
        """
        logger = logging.getLogger('docker-hosts-writer')
        logger.setLevel(self.config.log_level)

        # 避免重复的处理器
        if logger.handlers:
            return logger

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(self.config.log_level)

        # 格式: 时间戳 - 名称 - 级别 - 消息
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)

        logger.addHandler(handler)
        return logger

    def _report_runtime_error(self, message: str, error: Exception) -> None:
        self.logger.error(f"{message}: {error}", exc_info=self.config.debug)
        self.logger.error(
            "请确保 Docker 正在运行且可以访问。"
            "可以通过 DOCKER_HOST 环境变量修改 Docker 地址。"
        )

    def _connect(self) -> docker.DockerClient:
        try:
            if self.config.docker_host:
                self.logger.info(f"正在连接到 Docker: {self.config.docker_host}")
                client = docker.DockerClient(base_url=self.config.docker_host)
            else:
                self.logger.info("使用环境检测连接到 Docker")
                client = docker.from_env()

            # 测试连接
            client.ping()
            self.logger.info("成功连接到 Docker 守护进程")
            return client

        except RUNTIME_ERRORS as e:
            self._report_runtime_error("连接到 Docker 守护进程失败", e)
            raise

    def sync_container(self, container_id: str, add: bool) -> None:
        """
        使单个容器的 hosts 条目与其在跟踪网络上的状态一致

        检查容器时的错误只记录日志，不会影响其他容器。

        参数:
            container_id: 容器 ID
            add: True 为写入当前别名，False 为移除
        """
        if not add:
            # 断开后运行时已不再报告该网络，期望的别名集合为空
            self.reconciler.reconcile(container_id, (), '', False)
            return

        try:
            attachment = self.inspector.attachment(container_id)
        except RUNTIME_ERRORS as e:
            self.logger.warning(
                f"无法检查容器 {container_id[:12]}，可能已不存在: {e}",
                exc_info=self.config.debug
            )
            return

        if attachment is None:
            self.logger.debug(
                f"跳过容器 {container_id[:12]}（不在网络 {self.config.tracked_network} 上）"
            )
            return

        if not attachment.address:
            self.logger.warning(
                f"容器 {container_id[:12]} 在网络 {attachment.network} 上没有 IP"
            )
            self.reconciler.reconcile(container_id, (), '', False)
            return

        if not attachment.aliases:
            self.logger.warning(
                f"容器 {container_id[:12]} 在网络 {attachment.network} 上没有别名，"
                "不会写入主机记录。默认 bridge 网络不提供别名，"
                "请通过 TRACKED_NETWORK 指定自定义网络。"
            )

        self.reconciler.reconcile(
            container_id, attachment.aliases, attachment.address, True
        )

    def initialize(self) -> None:
        """
        初始化：清除残留条目，再扫描所有运行中的容器

        异常:
            DockerException: 无法列出容器
        """
        self.logger.info("=" * 60)
        self.logger.info("Docker Hosts Writer 启动中...")
        self.logger.info(f"Hosts 文件: {self.config.hosts_file_path}")
        self.logger.info(
            f"跟踪网络: {self.config.tracked_network} "
            f"(驱动: {self.config.network_driver})"
        )
        self.logger.info("=" * 60)

        self.reconciler.clean_all()

        try:
            self.scanner.bootstrap()
        except RUNTIME_ERRORS as e:
            self._report_runtime_error("扫描运行中的容器失败", e)
            raise

    def run(self) -> None:
        """
        启动主事件循环

        阻塞直到调用 request_stop()。

        异常:
            DockerException: 事件流无法订阅或中途失败
            EventStreamClosed: 事件流意外结束
        """
        self.initialize()
        self.logger.info("正在监听 Docker 网络事件...")

        try:
            self.event_listener.listen_events()
        except Exception as e:
            # 停止时关闭事件流会让读取中断，这不是错误
            if not self.event_listener.running:
                return
            if isinstance(e, RUNTIME_ERRORS):
                self._report_runtime_error("订阅 Docker 事件失败", e)
            raise

        if self.event_listener.running:
            error = EventStreamClosed("Docker 事件流意外结束")
            self._report_runtime_error("事件监听中断", error)
            raise error

    def request_stop(self) -> None:
        """
        请求停止事件循环，可以在信号处理器中调用

        不会打断正在进行的 hosts 文件写入；run() 在当前事件处理完后返回。
        """
        self.event_listener.stop()

    def shutdown(self) -> None:
        """
        停止事件监听器并关闭 Docker 客户端

        不修改 hosts 文件；残留条目在下次启动时清除。
        """
        self.logger.info("正在关闭 Docker Hosts Writer...")

        try:
            self.event_listener.stop()
            self.client.close()
        except Exception as e:
            self.logger.error(f"关闭期间出错: {e}", exc_info=self.config.debug)
