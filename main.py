#!/usr/bin/env python3
"""
Docker Hosts Writer - 主入口点

将跟踪网络上容器的别名同步到 hosts 文件。
"""

import sys
from pathlib import Path

# 将当前目录添加到路径以导入 hosts_writer 模块
sys.path.insert(0, str(Path(__file__).parent))

from hosts_writer.cli import main


if __name__ == '__main__':
    main()
