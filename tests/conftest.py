import logging
import os
import sys

import pytest

# Ensure project root is importable when the package is not installed
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from hosts_writer.hosts_file import HostsFileAccessor
from hosts_writer.reconciler import HostsReconciler


@pytest.fixture
def logger():
    return logging.getLogger("docker-hosts-writer-tests")


@pytest.fixture
def hosts_path(tmp_path):
    path = tmp_path / "hosts"
    path.write_text("127.0.0.1 localhost\n")
    return path


@pytest.fixture
def accessor(hosts_path, logger):
    return HostsFileAccessor(str(hosts_path), logger, attempts=5, retry_delay=0)


@pytest.fixture
def reconciler(accessor, logger):
    return HostsReconciler(accessor, logger)
