import pytest

from territory_editor.core.live_update import LiveUpdateBridge
from territory_editor.core.models.settings import LiveUpdateConfig
from territory_editor.core.payloads import MapUpdate, TerritoryUpdate

from conftest import FakeSocketClient


@pytest.fixture
def bridge(qt_core_app, fake_client):
    return LiveUpdateBridge(LiveUpdateConfig(server_url="http://example:5000"), client=fake_client)


@pytest.fixture
def received(bridge):
    events = {"territory": [], "map": [], "connection": []}
    bridge.territory_updated.connect(events["territory"].append)
    bridge.map_updated.connect(events["map"].append)
    bridge.connection_changed.connect(events["connection"].append)
    return events


def joins(client):
    return [e for e in client.emitted if e[0] == "join-map"]


def test_registers_handlers(bridge, fake_client):
    assert {"connect", "disconnect", "connect_error", "territory-update", "map-update"} <= set(fake_client.handlers)


def test_connect_passes_transport_options(bridge, fake_client):
    assert bridge.connect() is True
    url, kwargs = fake_client.connect_calls[0]
    assert url == "http://example:5000"
    assert kwargs["transports"] == ["websocket", "polling"]
    assert kwargs["socketio_path"] == "socket.io"
    assert bridge.is_connected


def test_connect_when_already_connected_is_noop(bridge, fake_client):
    bridge.connect()
    bridge.connect()
    assert len(fake_client.connect_calls) == 1


def test_subscribe_while_connected_joins(bridge, fake_client):
    bridge.connect()
    bridge.subscribe("map-1")
    assert fake_client.emitted == [("join-map", "map-1")]
    assert bridge.active_map_id == "map-1"


def test_subscribe_same_map_twice_joins_once(bridge, fake_client):
    bridge.connect()
    bridge.subscribe("map-1")
    bridge.subscribe("map-1")
    assert joins(fake_client) == [("join-map", "map-1")]


def test_join_deferred_while_offline(bridge, fake_client):
    bridge.subscribe("map-3")
    assert fake_client.emitted == []
    bridge.connect()
    assert fake_client.emitted == [("join-map", "map-3")]


def test_switching_maps_leaves_before_joining(bridge, fake_client):
    bridge.connect()
    bridge.subscribe("map-1")
    bridge.subscribe("map-2")
    assert fake_client.emitted == [
        ("join-map", "map-1"),
        ("leave-map", "map-1"),
        ("join-map", "map-2"),
    ]


def test_reconnect_rejoins_active_map_once(bridge, fake_client):
    bridge.connect()
    bridge.subscribe("map-7")
    fake_client.emitted.clear()

    fake_client.fire("disconnect")
    assert not bridge.is_connected
    fake_client.fire("connect")

    assert fake_client.emitted == [("join-map", "map-7")]
    assert bridge.is_connected


def test_initial_map_joined_on_first_connect(qt_core_app):
    client = FakeSocketClient()
    bridge = LiveUpdateBridge(LiveUpdateConfig(initial_map_id="map-5"), client=client)
    bridge.connect()
    assert client.emitted == [("join-map", "map-5")]


def test_events_for_other_maps_are_dropped(bridge, fake_client, received):
    bridge.connect()
    bridge.subscribe("map-1")

    fake_client.fire("territory-update", {"mapId": "map-2", "territoryId": "x"})
    fake_client.fire("map-update", {"mapId": "map-2"})
    assert received["territory"] == []
    assert received["map"] == []

    fake_client.fire("territory-update", {"mapId": "map-1", "territoryId": "t-1", "territory": {"name": "A"}})
    fake_client.fire("map-update", {"mapId": "map-1"})
    assert received["territory"] == [TerritoryUpdate(map_id="map-1", territory_id="t-1", territory={"name": "A"})]
    assert received["map"] == [MapUpdate(map_id="map-1")]


def test_events_dropped_after_switch(bridge, fake_client, received):
    bridge.connect()
    bridge.subscribe("map-1")
    bridge.subscribe("map-2")
    fake_client.fire("map-update", {"mapId": "map-1"})
    assert received["map"] == []


def test_events_dropped_without_subscription(bridge, fake_client, received):
    bridge.connect()
    fake_client.fire("map-update", {"mapId": "map-1"})
    assert received["map"] == []


def test_malformed_payload_dropped(bridge, fake_client, received):
    bridge.connect()
    bridge.subscribe("map-1")
    fake_client.fire("territory-update", "garbage")
    fake_client.fire("territory-update", {"territoryId": "t-1"})
    fake_client.fire("map-update", {"mapId": "map-1", "timestamp": 5})
    assert received["territory"] == []
    assert received["map"] == []


def test_unsubscribe_other_map_is_noop(bridge, fake_client):
    bridge.connect()
    bridge.subscribe("map-1")
    bridge.unsubscribe("map-9")
    assert bridge.active_map_id == "map-1"
    assert ("leave-map", "map-9") not in fake_client.emitted


def test_set_active_map_none_leaves(bridge, fake_client):
    bridge.connect()
    bridge.set_active_map("map-1")
    bridge.set_active_map(None)
    assert fake_client.emitted[-1] == ("leave-map", "map-1")
    assert bridge.active_map_id is None


def test_close_leaves_then_disconnects(bridge, fake_client, received):
    bridge.connect()
    bridge.subscribe("map-4")
    bridge.close()
    assert fake_client.emitted[-1] == ("leave-map", "map-4")
    assert not bridge.is_connected
    assert received["connection"] == [True, False]


def test_connection_failure_only_sets_status(qt_core_app):
    client = FakeSocketClient(fail_connect=True)
    bridge = LiveUpdateBridge(LiveUpdateConfig(), client=client)
    bridge.subscribe("map-1")

    assert bridge.connect() is False
    assert not bridge.is_connected
    assert client.emitted == []
    # 구독 상태는 유지되어 이후 연결 시 join
    assert bridge.active_map_id == "map-1"


def test_connect_error_event_marks_disconnected(bridge, fake_client, received):
    bridge.connect()
    fake_client.fire("connect_error", {"message": "boom"})
    assert not bridge.is_connected
    assert received["connection"] == [True, False]


def test_connect_retries_first_attempt(bridge, fake_client):
    bridge.connect()
    assert fake_client.connect_calls[0][1]["retry"] is True


def test_first_connect_succeeds_after_transient_failures(qt_core_app):
    client = FakeSocketClient(failures=3)
    bridge = LiveUpdateBridge(LiveUpdateConfig(initial_map_id="map-7"), client=client)

    assert bridge.connect() is True
    assert bridge.is_connected
    assert client.emitted == [("join-map", "map-7")]


def test_connect_again_after_failed_start_joins_active_map(qt_core_app):
    client = FakeSocketClient(fail_connect=True)
    bridge = LiveUpdateBridge(LiveUpdateConfig(initial_map_id="map-7"), client=client)
    assert bridge.connect() is False

    # 서버가 다시 올라온 뒤
    client.fail_connect = False
    assert bridge.connect() is True
    assert bridge.is_connected
    assert client.emitted == [("join-map", "map-7")]
