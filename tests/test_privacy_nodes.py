import pytest

from wbless.privacy_nodes import (
    DEFAULT_ICON_NAME,
    NODE_INTERFACE_TYPE,
    UNKNOWN_APPLICATION,
    NodeState,
    PrivacyNodeInfo,
    PrivacyNodeType,
    PrivacyRegistry,
    media_type_for_class,
)


@pytest.mark.parametrize(
    "media_class, expected",
    [
        ("Stream/Input/Video", PrivacyNodeType.VIDEO_INPUT),
        ("Stream/Input/Audio", PrivacyNodeType.AUDIO_INPUT),
        ("Stream/Output/Audio", PrivacyNodeType.AUDIO_OUTPUT),
        ("Audio/Sink", PrivacyNodeType.NONE),
    ],
)
def test_media_type_for_class(media_class, expected):
    assert media_type_for_class(media_class) is expected


def test_name_prefers_application_name_and_uppercases_first_letter():
    info = PrivacyNodeInfo(id=1, application_name="firefox", node_name="other")
    assert info.name() == "Firefox"


def test_name_falls_back_to_node_name():
    info = PrivacyNodeInfo(id=1, node_name="Node")
    assert info.name() == "Node"


def test_name_default():
    assert PrivacyNodeInfo(id=1).name() == UNKNOWN_APPLICATION


def test_icon_name_picks_first_known_icon():
    info = PrivacyNodeInfo(
        id=1,
        application_icon_name="missing",
        pipewire_access_portal_app_id="org.example.App",
        application_name="app",
    )
    known = {"org.example.App", "app"}
    assert info.icon_name(lambda name: name in known) == "org.example.App"


def test_icon_name_default_when_nothing_known():
    info = PrivacyNodeInfo(id=1, application_name="app")
    assert info.icon_name(lambda name: False) == DEFAULT_ICON_NAME


def test_handle_node_info_parses_properties():
    info = PrivacyNodeInfo(id=7)
    info.handle_node_info(
        NodeState.RUNNING,
        {
            "client.id": "42",
            "media.name": "call",
            "node.name": "node",
            "application.name": "app",
            "pipewire.access.portal.app_id": "org.example.App",
            "application.icon-name": "icon",
            "stream.monitor": "true",
        },
    )
    assert info.state is NodeState.RUNNING
    assert info.client_id == 42
    assert info.media_name == "call"
    assert info.node_name == "node"
    assert info.application_name == "app"
    assert info.pipewire_access_portal_app_id == "org.example.App"
    assert info.application_icon_name == "icon"
    assert info.is_monitor is True


def test_handle_node_info_bad_client_id_is_zero():
    info = PrivacyNodeInfo(id=7, client_id=5)
    info.handle_node_info(NodeState.IDLE, {"client.id": "abc", "stream.monitor": "no"})
    assert info.client_id == 0
    assert info.is_monitor is False


def test_registry_ignores_non_nodes_and_untracked_classes():
    registry = PrivacyRegistry()
    assert registry.handle_global(1, "PipeWire:Interface:Port", {"media.class": "Stream/Input/Audio"}) is None
    assert registry.handle_global(2, NODE_INTERFACE_TYPE, None) is None
    assert registry.handle_global(3, NODE_INTERFACE_TYPE, {}) is None
    assert registry.handle_global(4, NODE_INTERFACE_TYPE, {"media.class": "Audio/Sink"}) is None
    assert registry.nodes == {}


def test_registry_tracks_and_removes_nodes():
    registry = PrivacyRegistry()
    events = []
    registry.changed.connect(lambda: events.append("changed"))

    info = registry.handle_global(9, NODE_INTERFACE_TYPE, {"media.class": "Stream/Input/Video"})
    assert info is registry.nodes[9]
    assert info.type is PrivacyNodeType.VIDEO_INPUT
    assert info.media_class == "Stream/Input/Video"
    assert events == []

    assert registry.handle_node_info(9, NodeState.RUNNING, {"node.name": "cam"}) is True
    assert registry.nodes[9].node_name == "cam"
    assert len(events) == 1

    registry.handle_global_remove(9)
    assert 9 not in registry.nodes
    assert len(events) == 2


def test_registry_remove_unknown_still_signals():
    registry = PrivacyRegistry()
    events = []
    registry.changed.connect(lambda: events.append(True))
    registry.handle_global_remove(123)
    assert events == [True]
    assert registry.handle_node_info(123, NodeState.IDLE, {}) is False