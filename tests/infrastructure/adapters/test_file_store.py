import json

from lexidrill.application.schedulers import ProgressiveUnlockScheduler
from lexidrill.domain.constants import UNLOCK_STATE_KEY
from lexidrill.domain.models import Outcome
from lexidrill.infrastructure.adapters import JsonFileStore


def test_missing_key_loads_none(tmp_path):
    assert JsonFileStore(tmp_path / "state").load("nope") is None


def test_save_creates_directory_and_round_trips(tmp_path):
    store = JsonFileStore(tmp_path / "state")
    store.save("lexidrill:koch:v1", '{"a": 1}')

    assert store.load("lexidrill:koch:v1") == '{"a": 1}'
    assert store.path_for("lexidrill:koch:v1").name == "lexidrill_koch_v1.json"


def test_save_replaces_and_leaves_no_temp_files(tmp_path):
    store = JsonFileStore(tmp_path)
    store.save("k", "1")
    store.save("k", "2")

    assert store.load("k") == "2"
    assert [p.name for p in tmp_path.iterdir()] == ["k.json"]


def test_scheduler_state_on_disk(tmp_path, sample_source):
    store = JsonFileStore(tmp_path)
    scheduler = ProgressiveUnlockScheduler(store)
    items = scheduler.load_deck("sv", sample_source)
    scheduler.record_answer(items[0], Outcome.KNOWN)

    on_disk = json.loads(store.path_for(UNLOCK_STATE_KEY).read_text(encoding="utf-8"))
    assert on_disk["recentOutcomesByDeck"]["sv"] == [True]

    reloaded = ProgressiveUnlockScheduler(JsonFileStore(tmp_path))
    reloaded.load_deck("sv", sample_source)
    assert reloaded.state == scheduler.state


def test_truncated_file_falls_back_to_empty(tmp_path, sample_source):
    store = JsonFileStore(tmp_path)
    store.path_for(UNLOCK_STATE_KEY).write_text('{"unlockedCountByDeck": {"sv": 4', encoding="utf-8")

    scheduler = ProgressiveUnlockScheduler(store)
    scheduler.load_deck("sv", sample_source)
    assert scheduler.get_progress().unlocked_count == 2


def test_unreadable_state_dir_falls_back_to_empty(tmp_path, sample_source):
    # A directory where the blob file should be makes read_text fail
    store = JsonFileStore(tmp_path)
    store.path_for(UNLOCK_STATE_KEY).mkdir()

    scheduler = ProgressiveUnlockScheduler(store)
    scheduler.load_deck("sv", sample_source)
    scheduler.record_answer(scheduler.select_next(), Outcome.KNOWN)
    assert scheduler.get_progress().unlocked_count == 2
