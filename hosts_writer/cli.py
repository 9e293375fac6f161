"""
命令行入口，带信号处理
"""

import signal
import sys

from hosts_writer.app import DockerHostsWriter
from hosts_writer.config import Config


def main() -> None:
    """主入口点"""

    # 从环境变量加载配置
    try:
        config = Config.from_env()
        writer = DockerHostsWriter(config)
    except Exception as e:
        print(f"初始化 Docker Hosts Writer 失败: {e}", file=sys.stderr)
        sys.exit(1)

    def signal_handler(signum: int, frame) -> None:
        """处理关闭信号：只请求停止，正在进行的文件写入会先完成"""
        writer.logger.info(f"收到信号 {signal.Signals(signum).name}，正在关闭...")
        writer.request_stop()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    try:
        writer.run()
    except Exception as e:
        writer.logger.error(f"致命错误: {e}", exc_info=config.debug)
        writer.shutdown()
        sys.exit(1)

    writer.shutdown()
    sys.exit(0)
