from unittest.mock import MagicMock

import pytest
from docker.errors import APIError

from hosts_writer.events import NetworkEventListener


def network_event(action, container="c1", driver="bridge", name="bridge"):
    return {
        "Type": "network",
        "Action": action,
        "Actor": {"ID": "net1", "Attributes": {"container": container, "name": name, "type": driver}},
    }


@pytest.fixture
def callback():
    return MagicMock()


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def listener(client, callback, logger):
    return NetworkEventListener(client, "bridge", "bridge", callback, logger)


def test_subscribes_with_network_filters(listener, client):
    client.events.return_value = iter([])

    listener.listen_events()

    client.events.assert_called_once_with(
        decode=True,
        filters={"type": ["network"], "event": ["connect", "disconnect"], "network": ["bridge"]},
    )


def test_connect_and_disconnect_dispatch_in_order(listener, client, callback):
    client.events.return_value = iter([
        network_event("connect", "c1"),
        network_event("disconnect", "c1"),
        network_event("connect", "c2"),
    ])

    listener.listen_events()

    assert [c.args for c in callback.call_args_list] == [("c1", True), ("c1", False), ("c2", True)]


def test_other_drivers_and_event_types_are_ignored(listener, client, callback):
    client.events.return_value = iter([
        network_event("connect", driver="overlay", name="swarm"),
        network_event("destroy"),
        {"Type": "container", "Action": "start", "Actor": {"Attributes": {}}},
        network_event("connect", container=""),
    ])

    listener.listen_events()

    callback.assert_not_called()


def test_callback_failure_does_not_stop_loop(listener, client, callback):
    callback.side_effect = [RuntimeError("gone"), None]
    client.events.return_value = iter([network_event("connect", "c1"), network_event("connect", "c2")])

    listener.listen_events()

    assert callback.call_count == 2


def test_subscription_failure_propagates(listener, client):
    client.events.side_effect = APIError("cannot connect")

    with pytest.raises(APIError):
        listener.listen_events()


def test_stop_ends_loop_before_next_event(listener, client, callback):
    def stop_after_first(container_id, add):
        listener.stop()

    callback.side_effect = stop_after_first
    client.events.return_value = iter([network_event("connect", "c1"), network_event("connect", "c2")])

    listener.listen_events()

    assert callback.call_count == 1


def test_events_on_other_network_with_same_driver_are_ignored(listener, client, callback):
    client.events.return_value = iter([
        network_event("disconnect", "c1", driver="bridge", name="mynet"),
        network_event("connect", "c1", driver="bridge", name="mynet"),
    ])

    listener.listen_events()

    callback.assert_not_called()


def test_tracked_network_name_with_wrong_driver_is_ignored(listener, callback):
    listener.handle_event(network_event("connect", "c1", driver="overlay", name="bridge"))

    callback.assert_not_called()


def test_listen_after_stop_does_not_subscribe(listener, client):
    listener.stop()

    listener.listen_events()

    client.events.assert_not_called()


def test_stop_closes_open_stream(listener, client, callback):
    stream = MagicMock()
    stream.__iter__.return_value = iter([network_event("connect", "c1")])
    client.events.return_value = stream
    callback.side_effect = lambda container_id, add: listener.stop()

    listener.listen_events()

    stream.close.assert_called_once()
