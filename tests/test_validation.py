import pytest

from title_race_core.validation import InputSanitizer, SeasonConfig, ValidatedCmd


def _config(**overrides):
    data = {
        "startingPoints": {"Alpha": 362, "Beta": 315},
        "events": [
            {"name": "Sprint", "short": True, "locked": True},
            {"name": "Finale"},
        ],
        "seedPositions": {"Alpha": {"Sprint": 4}, "Beta": {"Sprint": 1}},
    }
    data.update(overrides)
    return data


def test_validated_cmd_normalizes_type_and_names():
    cmd = ValidatedCmd(type="toggle_position", competitor="  Alpha ", event="Finale", position="3")
    assert cmd.type == "TOGGLE_POSITION"
    assert cmd.competitor == "Alpha"
    assert cmd.position == 3


def test_validated_cmd_requires_fields_per_type():
    with pytest.raises(ValueError):
        ValidatedCmd(type="TOGGLE_POSITION", competitor="Alpha", event="Finale")
    with pytest.raises(ValueError):
        ValidatedCmd(type="SET_FASTEST_LAP", competitor="Alpha", event="Finale")
    with pytest.raises(ValueError):
        ValidatedCmd(type="SET_FASTEST_LAP", event="Finale", checked=True)
    with pytest.raises(ValueError):
        ValidatedCmd(type="TOGGLE_POSITION", competitor="Alpha", event="Finale", position=0)
    assert ValidatedCmd(type="RESET_RESULTS").competitor is None


def test_validate_and_sanitize_cmd_wraps_errors():
    with pytest.raises(ValueError, match="Invalid command"):
        InputSanitizer.validate_and_sanitize_cmd({"type": "START_TIMER"})


def test_sanitize_name_strips_markup_and_control_chars():
    assert InputSanitizer.sanitize_name("  Lando\x00 Norris  ") == "Lando Norris"
    assert InputSanitizer.sanitize_name("Max <Verstappen>") == "Max Verstappen"
    assert InputSanitizer.sanitize_name("Sérgio Pérez") == "Sérgio Pérez"


def test_season_config_accepts_valid_data():
    config = SeasonConfig.model_validate(_config())
    assert [e.name for e in config.events] == ["Sprint", "Finale"]
    assert config.events[0].short is True
    assert config.seedFastestLaps == {}


def test_season_config_rejects_wrong_competitor_count():
    with pytest.raises(ValueError):
        SeasonConfig.model_validate(_config(startingPoints={"Alpha": 1}, seedPositions={}))
    with pytest.raises(ValueError):
        SeasonConfig.model_validate(
            _config(startingPoints={"A": 1, "B": 2, "C": 3}, seedPositions={})
        )


def test_season_config_rejects_bad_references():
    with pytest.raises(ValueError):
        SeasonConfig.model_validate(_config(events=[{"name": "Finale"}, {"name": "Finale"}]))
    with pytest.raises(ValueError):
        SeasonConfig.model_validate(_config(seedPositions={"Alpha": {"Monaco": 1}}))
    with pytest.raises(ValueError):
        SeasonConfig.model_validate(_config(seedPositions={"Gamma": {"Sprint": 1}}))
    with pytest.raises(ValueError):
        SeasonConfig.model_validate(_config(seedPositions={"Alpha": {"Sprint": 9}}))
    with pytest.raises(ValueError):
        SeasonConfig.model_validate(_config(startingPoints={"Alpha": -1, "Beta": 0}))
