"""
配置管理模块，支持环境变量

hosts 文件加锁使用 fcntl，只支持 POSIX 系统。
"""

import os
from dataclasses import dataclass
from typing import Optional


DEFAULT_HOSTS_FILE = "/etc/hosts"
DEFAULT_NETWORK = "bridge"
DEFAULT_DRIVER = "bridge"


@dataclass
class Config:
    """应用配置类，从环境变量加载配置"""

    hosts_file_path: str = DEFAULT_HOSTS_FILE
    docker_host: Optional[str] = None
    tracked_network: str = DEFAULT_NETWORK
    network_driver: str = DEFAULT_DRIVER
    lock_attempts: int = 5
    lock_retry_delay: float = 1.0
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """
        从环境变量加载配置

        环境变量说明:
            DOCKER_HOST: Docker 守护进程 URL (默认: 自动检测)
            HOSTS_FILE: hosts 文件路径 (默认: 系统 hosts 文件)
            DEBUG: 只要设置即启用详细输出
            LOG_LEVEL: 日志级别 (默认: INFO，DEBUG 设置时忽略)
            TRACKED_NETWORK: 跟踪的网络名 (默认: bridge)。默认 bridge 网络上
                Docker 不报告别名 (Aliases 为 null)，因此不会写入任何条目；
                实际使用时应指定一个自定义网络
            NETWORK_DRIVER: 跟踪网络的驱动类型 (默认: bridge)
            LOCK_ATTEMPTS: 获取文件锁的尝试次数 (默认: 5)
            LOCK_RETRY_DELAY: 两次尝试之间的秒数 (默认: 1.0)
        """
        debug = os.getenv("DEBUG") is not None
        return cls(
            hosts_file_path=os.getenv("HOSTS_FILE", DEFAULT_HOSTS_FILE),
            docker_host=os.getenv("DOCKER_HOST") or None,
            tracked_network=os.getenv("TRACKED_NETWORK", DEFAULT_NETWORK),
            network_driver=os.getenv("NETWORK_DRIVER", DEFAULT_DRIVER),
            lock_attempts=int(os.getenv("LOCK_ATTEMPTS", "5")),
            lock_retry_delay=float(os.getenv("LOCK_RETRY_DELAY", "1.0")),
            debug=debug,
            log_level="DEBUG" if debug else os.getenv("LOG_LEVEL", "INFO").upper()
        )

    def validate(self) -> None:
        """验证配置是否有效"""
        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level not in valid_log_levels:
            raise ValueError(
                f"无效的 LOG_LEVEL: {self.log_level}. "
                f"必须是以下之一: {', '.join(sorted(valid_log_levels))}"
            )
        if self.lock_attempts < 1:
            raise ValueError(f"LOCK_ATTEMPTS 必须至少为 1: {self.lock_attempts}")
        if self.lock_retry_delay < 0:
            raise ValueError(f"LOCK_RETRY_DELAY 不能为负数: {self.lock_retry_delay}")
        if not self.tracked_network:
            raise ValueError("TRACKED_NETWORK 不能为空")
        if not self.network_driver:
            raise ValueError("NETWORK_DRIVER 不能为空")
        if not self.hosts_file_path:
            raise ValueError("HOSTS_FILE 不能为空")
