import pytest

from wbless.temperature import Temperature, resolve_sensor_path


def _sensor(tmp_path, value):
    path = tmp_path / "temp1_input"
    path.write_text(value)
    return str(path)


def test_resolve_default_thermal_zone():
    assert resolve_sensor_path({}) == "/sys/class/thermal/thermal_zone0/temp"


def test_resolve_configured_thermal_zone():
    assert resolve_sensor_path({"thermal-zone": 3}) == "/sys/class/thermal/thermal_zone3/temp"


def test_resolve_hwmon_path_list_picks_first_existing(tmp_path):
    existing = _sensor(tmp_path, "1000")
    config = {"hwmon-path": [str(tmp_path / "missing"), existing]}
    assert resolve_sensor_path(config) == existing


def test_resolve_hwmon_path_abs(tmp_path):
    (tmp_path / "hwmon2").mkdir()
    (tmp_path / "other").mkdir()
    config = {"hwmon-path-abs": str(tmp_path), "input-filename": "temp1_input"}
    assert resolve_sensor_path(config) == f"{tmp_path / 'hwmon2'}/temp1_input"


def test_hwmon_path_abs_needs_input_filename(tmp_path):
    (tmp_path / "hwmon0").mkdir()
    config = {"hwmon-path-abs": str(tmp_path), "thermal-zone": 1}
    assert resolve_sensor_path(config) == "/sys/class/thermal/thermal_zone1/temp"


def test_missing_file_raises(tmp_path):
    with pytest.raises(RuntimeError, match="Can't open"):
        Temperature({"hwmon-path": str(tmp_path / "absent"), "thermal-zone": 9999})


def test_read_temperature(tmp_path):
    module = Temperature({"hwmon-path": _sensor(tmp_path, "25000\n")})
    assert module.read_temperature() == 25.0


def test_render_units(tmp_path):
    module = Temperature(
        {
            "hwmon-path": _sensor(tmp_path, "0"),
            "format": "{temperatureC} {temperatureF} {temperatureK}",
        }
    )
    assert module.render().text == "0 32 273"


def test_default_tooltip_matches_default_format(tmp_path):
    module = Temperature({"hwmon-path": _sensor(tmp_path, "30000")})
    view = module.render()
    assert view.visible is True
    assert view.tooltip == view.text


def test_tooltip_disabled(tmp_path):
    module = Temperature({"hwmon-path": _sensor(tmp_path, "30000"), "tooltip": False})
    assert module.render().tooltip is None


def test_critical_format_and_class(tmp_path):
    module = Temperature(
        {
            "hwmon-path": _sensor(tmp_path, "90000"),
            "critical-threshold": 80,
            "format-critical": "crit {temperatureC}",
        }
    )
    view = module.render()
    assert view.text.startswith("crit ")
    assert "critical" in view.classes


def test_warning_class_cleared_when_cool(tmp_path):
    path = _sensor(tmp_path, "70000")
    module = Temperature({"hwmon-path": path, "warning-threshold": 60})
    assert "warning" in module.render().classes
    (tmp_path / "temp1_input").write_text("20000")
    assert module.render().classes == frozenset()


def test_thresholds(tmp_path):
    module = Temperature(
        {
            "hwmon-path": _sensor(tmp_path, "1000"),
            "warning-threshold": 50,
            "critical-threshold": 80,
        }
    )
    assert module.is_warning(50) is True
    assert module.is_warning(49) is False
    assert module.is_critical(80) is True
    assert module.is_critical(79) is False


def test_no_thresholds_never_alert(tmp_path):
    module = Temperature({"hwmon-path": _sensor(tmp_path, "1000")})
    assert module.is_critical(1000) is False
    assert module.is_warning(1000) is False


def test_empty_format_hides(tmp_path):
    module = Temperature({"hwmon-path": _sensor(tmp_path, "1000"), "format": ""})
    view = module.render()
    assert view.visible is False
    assert view.text is None