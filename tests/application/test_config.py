import pytest
from pydantic import ValidationError

from lexidrill.application.config import AppConfig, config_file, resolve_config
from lexidrill.domain.models import Direction


def test_defaults(mock_home):
    config = AppConfig()
    assert config.strategy == "koch"
    assert config.direction is Direction.REVERSE
    assert config.window_size == 20
    assert config.threshold == 0.85
    assert config.start_size == 2
    assert config.reveal_delay == 2.0
    assert config.decks["sv"] == "vocabulary-sw.txt"
    assert config.state_dir == mock_home / ".config/lexidrill/state"


def test_env_overrides(mock_home, monkeypatch):
    monkeypatch.setenv("LEXIDRILL_STRATEGY", "weighted")
    monkeypatch.setenv("LEXIDRILL_WINDOW_SIZE", "10")
    config = AppConfig()
    assert config.strategy == "weighted"
    assert config.window_size == 10


def test_toml_file_is_lowest_priority(mock_home, monkeypatch):
    path = config_file()
    path.parent.mkdir(parents=True)
    path.write_text('strategy = "weighted"\nstart_size = 4\nreveal_delay = 3.5\n')
    monkeypatch.setenv("LEXIDRILL_START_SIZE", "6")

    config = resolve_config({"reveal_delay": 1.0})

    assert config.strategy == "weighted"
    assert config.start_size == 6
    assert config.reveal_delay == 1.0


def test_resolve_config_ignores_unset_overrides(mock_home, monkeypatch):
    monkeypatch.setenv("LEXIDRILL_STRATEGY", "weighted")
    config = resolve_config({"strategy": None, "seed": 7})
    assert config.strategy == "weighted"
    assert config.seed == 7


@pytest.mark.parametrize(
    "overrides",
    [
        {"threshold": 0},
        {"threshold": 1.2},
        {"window_size": 0},
        {"start_size": 0},
        {"reveal_delay": 0},
        {"strategy": "sm2"},
        {"separator": ""},
        {"decks": {"sv:": "vocabulary-sw.txt"}},
        {"decks": {"": "vocabulary-sw.txt"}},
    ],
)
def test_invalid_values_rejected(mock_home, overrides):
    with pytest.raises(ValidationError):
        resolve_config(overrides)


def test_non_positive_auto_advance_disables_it(mock_home):
    assert resolve_config({"auto_advance": 0}).auto_advance is None
    assert resolve_config({"auto_advance": 4}).auto_advance == 4


def test_unlock_policy_from_config(mock_home):
    policy = resolve_config(
        {"window_size": 10, "threshold": 0.9, "start_size": 3, "reset_window_on_advance": True}
    ).unlock_policy()
    assert policy.window_size == 10
    assert policy.threshold == 0.9
    assert policy.start_size == 3
    assert policy.reset_window_on_advance


def test_deck_name_with_colon_is_rejected_from_env(mock_home, monkeypatch):
    monkeypatch.setenv("LEXIDRILL_DECKS", '{"sv:": "vocabulary-sw.txt"}')
    with pytest.raises(ValidationError, match="must not contain ':'"):
        AppConfig()
