"""
Unit tests for the configuration file loader.
"""

import json

import pytest

from half_looted_emptier import __version__
from half_looted_emptier.config import load_config, save_config
from half_looted_emptier.config.models import EmptierConfig
from half_looted_emptier.exceptions import ConfigurationError
from half_looted_emptier.models.trigger_policy import TriggerMode


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")


def test_missing_file_creates_defaults(tmp_path):
    """A missing config file is created with defaults."""
    path = tmp_path / "config" / "HalfLootedEmptier.json"

    config = load_config(path)

    assert config == EmptierConfig()
    assert json.loads(path.read_text(encoding="utf-8"))["Version"] == __version__


def test_loads_current_file(tmp_path):
    """A current config file is loaded as written."""
    path = tmp_path / "HalfLootedEmptier.json"
    _write(
        path,
        {
            "Version": __version__,
            "Emptying Trigger Mode": "Remaining",
            "Number Of Items To Trigger Emptying": 2,
            "Delay Before Emptying Container Seconds": 10.0,
            "Remove Items Instead Of Dropping": True,
        },
    )

    config = load_config(str(path))

    assert config.emptying_trigger_mode is TriggerMode.REMAINING
    assert config.number_of_items_to_trigger_emptying == 2
    assert config.delay_before_emptying_container_seconds == 10.0
    assert config.remove_items_instead_of_dropping is True


def test_old_file_is_migrated_and_rewritten(tmp_path):
    """Loading a 1.0.0 file upgrades it and saves the new fields."""
    path = tmp_path / "HalfLootedEmptier.json"
    _write(
        path,
        {
            "Version": "1.0.0",
            "Delay Before Emptying Container Seconds": 60.0,
            "Remove Items Instead Of Dropping": True,
        },
    )

    config = load_config(path)
    on_disk = json.loads(path.read_text(encoding="utf-8"))

    assert config.version == __version__
    assert config.delay_before_emptying_container_seconds == 60.0
    assert on_disk["Version"] == __version__
    assert on_disk["Emptying Trigger Mode"] == "Looted"
    assert on_disk["Number Of Items To Trigger Emptying"] == 1


def test_missing_fields_are_filled_and_saved(tmp_path):
    """Fields absent from a current-version file get defaults on disk."""
    path = tmp_path / "HalfLootedEmptier.json"
    _write(path, {"Version": __version__, "Delay Before Emptying Container Seconds": 5})

    load_config(path)
    on_disk = json.loads(path.read_text(encoding="utf-8"))

    assert on_disk["Remove Items Instead Of Dropping"] is False
    assert on_disk["Delay Before Emptying Container Seconds"] == 5.0


def test_invalid_json_raises_configuration_error(tmp_path):
    """Broken JSON is reported as a configuration error."""
    path = tmp_path / "HalfLootedEmptier.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="not valid JSON"):
        load_config(path)


def test_non_object_json_raises_configuration_error(tmp_path):
    """A JSON document that is not an object is rejected."""
    path = tmp_path / "HalfLootedEmptier.json"
    _write(path, [1, 2, 3])

    with pytest.raises(ConfigurationError, match="JSON object"):
        load_config(path)


def test_invalid_value_reports_config_key(tmp_path):
    """Validation failures name the offending key."""
    path = tmp_path / "HalfLootedEmptier.json"
    _write(path, {"Version": __version__, "Number Of Items To Trigger Emptying": 0})

    with pytest.raises(ConfigurationError) as exc_info:
        load_config(path)

    assert exc_info.value.config_key == "Number Of Items To Trigger Emptying"


def test_save_config_writes_pretty_json(tmp_path):
    """Saved configs are indented for hand editing."""
    path = tmp_path / "nested" / "HalfLootedEmptier.json"

    save_config(EmptierConfig(), path)
    text = path.read_text(encoding="utf-8")

    assert text.startswith("{\n  ")
    assert json.loads(text)["Emptying Trigger Mode"] == "Looted"
