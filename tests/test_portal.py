from wbless.portal import PORTAL_KEY, PORTAL_NAMESPACE, Appearance, AppearanceTracker


def test_appearance_names():
    tracker = AppearanceTracker()
    assert str(tracker.mode) == "unknown"
    tracker.set_mode(2)
    assert str(tracker.mode) == "light"
    tracker.set_mode(1)
    assert str(tracker.mode) == "dark"


def test_initial_mode_unknown():
    assert AppearanceTracker().mode is Appearance.UNKNOWN


def test_set_mode_notifies_once():
    seen = []
    tracker = AppearanceTracker(seen.append)
    assert tracker.set_mode(2) is True
    assert tracker.set_mode(2) is False
    assert seen == [Appearance.LIGHT]
    assert tracker.mode is Appearance.LIGHT


def test_unknown_value_maps_to_unknown():
    tracker = AppearanceTracker()
    tracker.set_mode(1)
    assert tracker.set_mode(7) is True
    assert tracker.mode is Appearance.UNKNOWN


def test_signal_changes_mode():
    seen = []
    tracker = AppearanceTracker(seen.append)
    assert tracker.on_signal("SettingChanged", (PORTAL_NAMESPACE, PORTAL_KEY, 1)) is True
    assert seen == [Appearance.DARK]


def test_other_signal_ignored():
    tracker = AppearanceTracker()
    assert tracker.on_signal("Other", (PORTAL_NAMESPACE, PORTAL_KEY, 1)) is False
    assert tracker.mode is Appearance.UNKNOWN


def test_wrong_namespace_or_key_ignored():
    tracker = AppearanceTracker()
    assert tracker.on_signal("SettingChanged", ("org.other", PORTAL_KEY, 1)) is False
    assert tracker.on_signal("SettingChanged", (PORTAL_NAMESPACE, "accent", 1)) is False
    assert tracker.mode is Appearance.UNKNOWN


def test_wrong_parameter_count_ignored():
    tracker = AppearanceTracker()
    assert tracker.on_signal("SettingChanged", (PORTAL_NAMESPACE, PORTAL_KEY)) is False
    assert tracker.mode is Appearance.UNKNOWN