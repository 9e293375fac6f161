"""
hosts 文件访问模块，支持独占写锁和有限重试
"""

import fcntl
import logging
import os
import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Callable, Iterator


class HostsFileUnavailable(Exception):
    """hosts 文件不存在、无权限，或在重试耗尽后仍被锁定"""


class HostsFileHandle:
    """
    已加独占锁的 hosts 文件句柄

    只在 HostsFileAccessor.acquire() 的 with 块内有效。
    """

    def __init__(self, path: Path, stream: BinaryIO):
        self.path = path
        self._stream = stream

    def read(self) -> bytes:
        """从头读取全部内容"""
        self._stream.seek(0)
        return self._stream.read()

    def rewrite(self, data: bytes) -> None:
        """
        就地重写整个文件，并截断到新的确切长度

        文件可能是绑定挂载的，因此不使用临时文件加重命名。
        """
        self._stream.seek(0)
        self._stream.write(data)
        self._stream.truncate()
        self._stream.flush()
        os.fsync(self._stream.fileno())


class HostsFileAccessor:
    """
    以独占写、共享读的方式打开 hosts 文件

    文件不存在或无权限时立即失败；被其他写入者锁定时按固定间隔重试。
    进程内同一时刻最多只有一个句柄。
    """

    FATAL_ERRORS = (FileNotFoundError, PermissionError, IsADirectoryError)

    def __init__(
        self,
        hosts_path: str,
        logger: logging.Logger,
        attempts: int = 5,
        retry_delay: float = 1.0,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        初始化 hosts 文件访问器

        参数:
            hosts_path: hosts 文件路径
            logger: 日志记录器实例
            attempts: 文件被锁定时的最大尝试次数
            retry_delay: 两次尝试之间等待的秒数
            sleep: 等待函数
        """
        self.hosts_path = Path(hosts_path)
        self.logger = logger
        self.attempts = attempts
        self.retry_delay = retry_delay
        self._sleep = sleep
        self.lock = threading.Lock()

    def _try_open(self) -> BinaryIO:
        stream = open(self.hosts_path, "r+b")
        try:
            fcntl.flock(stream.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BaseException:
            stream.close()
            raise
        return stream

    def _open_locked(self) -> BinaryIO:
        for attempt in range(1, self.attempts + 1):
            try:
                return self._try_open()
            except self.FATAL_ERRORS as e:
                raise HostsFileUnavailable(
                    f"无法访问 hosts 文件 {self.hosts_path}: {e}"
                ) from e
            except OSError as e:
                self.logger.debug(
                    f"hosts 文件被占用 (第 {attempt}/{self.attempts} 次尝试): {e}"
                )
                if attempt < self.attempts:
                    self._sleep(self.retry_delay)

        raise HostsFileUnavailable(
            f"hosts 文件 {self.hosts_path} 在 {self.attempts} 次尝试后仍被锁定"
        )

    @contextmanager
    def acquire(self) -> Iterator[HostsFileHandle]:
        """
        获取 hosts 文件的独占句柄

        返回:
            HostsFileHandle，退出 with 块时解锁并关闭

        异常:
            HostsFileUnavailable: 文件不可用或重试耗尽
        """
        with self.lock:
            stream = self._open_locked()
            try:
                yield HostsFileHandle(self.hosts_path, stream)
            finally:
                try:
                    fcntl.flock(stream.fileno(), fcntl.LOCK_UN)
                finally:
                    stream.close()
