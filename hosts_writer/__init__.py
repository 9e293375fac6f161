"""
Docker Hosts Writer - 将容器网络别名同步到 hosts 文件
"""

__version__ = "1.0.0"
__author__ = "Docker Hosts Writer Project"

from hosts_writer.app import DockerHostsWriter
from hosts_writer.config import Config
from hosts_writer.models import HostRecord
from hosts_writer.reconciler import HostsReconciler

__all__ = ["DockerHostsWriter", "Config", "HostRecord", "HostsReconciler"]
