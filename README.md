# wbless

Building blocks for a desktop status bar, as a plain Python library with no
runtime dependencies. Each module holds the state and logic of one piece of
a bar. The caller feeds it values and events, and reads back text, classes,
or the action to take.

## Modules

- `wbless.strings`
  - `trim`, `ltrim` and `rtrim` strip whitespace.
  - `capitalize` upper-cases the ASCII letters of a string.
- `wbless.enum_parser.parse_string_to_enum(text, mapping)` looks up a value by key, ignoring ASCII case. It raises `ValueError` when nothing matches.
- `wbless.pow_format.PowFormat(val, unit, binary=False)` formats a quantity with an SI or binary prefix. For example, `f"{PowFormat(1536, 'B', binary=True)}"` gives `1.5kiB`. The format specs are:
  - `>` and `<` pad the value to a fixed width.
  - `=` pads the number column.
- `wbless.regex_collection.RegexCollection(mapping, default_repr, priority_function)` holds case-insensitive regex rewrite rules.
  - Rules are tried in order of descending priority.
  - Replacement templates accept `$&`, `$1` and similar.
  - Results are cached.
  - `get` returns the rewritten string, or `default_repr` when no rule matches.
  - `get_with_match` also reports whether a rule matched on that lookup.
- `wbless.json_parser.parse_json` parses the first JSON value in a text.
  - It accepts `\x` escapes, comments and trailing commas.
  - It raises `JsonParseError` on malformed input.
- `wbless.command` runs commands through `/bin/sh`:
  - `exec_command(cmd, output_name)` returns a `CommandResult` holding the exit code and the output. `output_name` is exported as `WAYBAR_OUTPUT_NAME`.
  - `exec_no_read` runs a command without reading its output.
  - `fork_exec` starts a command in the background and returns its pid.
  - `reap_children` collects background children that have finished.
  - `open_command`, `read_output` and `close_command` are the lower-level steps.
- `wbless.signals.SafeSignal` is a signal that calls its callbacks at once on the thread that created it. Emissions from other threads are queued until `dispatch()` runs. `prepare_for_sleep()` returns the shared suspend and resume signal.
- `wbless.sleeper.SleeperThread(func)` runs `func` in a loop on a daemon thread.
  - `sleep`, `sleep_for` and `sleep_until` pause the loop.
  - `wake_up` ends a sleep early, and a `False` emission on `prepare_for_sleep()` does the same.
  - `stop` ends the loop, and `close` stops it and joins the thread.
  - It can be used as a context manager.
- `wbless.css_reload.CssReloadHelper(css_file, callback, config_dirs)` follows the `@import` chain of a stylesheet.
  - `parse_imports` lists the stylesheet and the files it imports.
  - `monitor_changes` starts a background thread. The thread polls the modification time and size of those files and calls `callback` when one changes.
  - `stop` ends the watching.
- `wbless.temperature`
  - `resolve_sensor_path(config)` chooses a sensor file. It tries `hwmon-path`, then `hwmon-path-abs` with `input-filename`, then `thermal-zone`.
  - `Temperature(config)` reads the sensor.
  - `render()` returns a `TemperatureView` holding the text, tooltip, the `warning` and `critical` classes, and visibility.
- `wbless.user`
  - `format_user_label` fills a format with the upper-cased user name and the uptime fields.
  - `uptime_seconds` reads the uptime from `/proc/uptime`.
  - `avatar_settings` chooses the avatar image and its size.
  - `open_path` returns the `file:///` URI that a left click would open, or `None`.
- `wbless.portal`: `Appearance` enumerates the colour schemes. `AppearanceTracker` records colour-scheme values and `SettingChanged` signals, and calls `on_change` when the scheme changes.
- `wbless.wireplumber.VolumeControl(config)` tracks the default node's volume.
  - `render()` builds the label, the tooltip and the `muted` class.
  - `scroll(direction)` returns the new volume to set, or `None`.
  - The helpers are `is_valid_node_id` and `choose_node_name`.
- `wbless.privacy_nodes`
  - `PrivacyRegistry` tracks video-input, audio-input and audio-output streams from registry and node-info events.
  - It emits `changed` when a node is updated or removed.
  - `PrivacyNodeInfo` gives a display name and an icon name for each stream.
- The StatusNotifier tray model:
  - `wbless.sni_watcher.StatusNotifierWatcher` registers hosts and items.
  - `wbless.sni_host.TrayHost` and `wbless.sni_host.Tray` keep the item list and the tray's visibility.
  - `wbless.sni_item.TrayItem` holds item properties, status, debounced property updates, scroll deltas and click actions.
  - `wbless.sni_pixmap` holds `argb_to_rgba`, `select_largest_pixmap`, `parse_tooltip` and `scaled_width`.
  - `wbless.icon_manager.icon_manager()` maps application ids to custom icons.
- `wbless.text_width.column_width` counts columns: two for each wide character and one for any other.

## Example

```python
from wbless.regex_collection import RegexCollection

rules = RegexCollection({"firefox": "web", "kitty": "term"}, default_repr="?")
print(rules.get("Firefox"))   # web
print(rules.get("emacs"))     # ?
```

## What this package does not do

There is no bar window, no widgets, and no command to start a bar. Nothing connects to D-Bus, PipeWire or a compositor. The tray, portal, volume and privacy modules keep state and decide what to show or call. Receiving the events and making the calls is left to the caller. Nothing here loads or draws images.

## Running the tests

```
pip install -e .[test]
pytest
```