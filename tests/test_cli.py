import signal
from unittest.mock import patch

import pytest

from hosts_writer import cli


@pytest.fixture
def handlers():
    registered = {}
    with patch("hosts_writer.cli.signal.signal", side_effect=registered.__setitem__):
        yield registered


@pytest.fixture
def writer():
    with patch("hosts_writer.cli.DockerHostsWriter") as factory:
        yield factory.return_value


def test_signal_requests_stop_and_exits_zero_after_run(handlers, writer):
    def run():
        handlers[signal.SIGTERM](signal.SIGTERM, None)
        writer.finished_run = True

    writer.run.side_effect = run

    with pytest.raises(SystemExit) as exc:
        cli.main()

    assert exc.value.code == 0
    writer.request_stop.assert_called_once()
    assert writer.finished_run is True
    writer.shutdown.assert_called_once()


def test_sigint_uses_same_handler(handlers, writer):
    writer.run.side_effect = lambda: handlers[signal.SIGINT](signal.SIGINT, None)

    with pytest.raises(SystemExit) as exc:
        cli.main()

    assert exc.value.code == 0
    writer.request_stop.assert_called_once()


def test_run_failure_exits_one(handlers, writer):
    writer.run.side_effect = RuntimeError("event stream closed")

    with pytest.raises(SystemExit) as exc:
        cli.main()

    assert exc.value.code == 1
    writer.shutdown.assert_called_once()


def test_startup_failure_exits_one(handlers):
    with patch("hosts_writer.cli.DockerHostsWriter", side_effect=RuntimeError("no docker")):
        with pytest.raises(SystemExit) as exc:
            cli.main()

    assert exc.value.code == 1
