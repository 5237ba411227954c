import json

from runner_configs.core import (
    JsonFileStore, MemoryStore, ConfigurationCollection,
    PersistedState, ModelConfig, STATE_KEY, DEFAULT_MODEL_CONFIG,
    dump_state, load_state, Success, Failure,
)


def test_memory_store_read_write():
    store = MemoryStore()
    assert store.read("a") is None
    store.write("a", "1")
    assert store.read("a") == "1"


def test_json_file_store_creates_parent_dirs(tmp_path):
    path = tmp_path / "nested" / "configs.json"
    store = JsonFileStore(path)

    store.write("a", "1")

    assert json.loads(path.read_text(encoding="utf-8")) == {"a": "1"}
    assert store.read("a") == "1"


def test_json_file_store_keeps_other_keys(tmp_path):
    store = JsonFileStore(tmp_path / "configs.json")
    store.write("a", "1")
    store.write("b", "2")
    store.write("a", "3")

    assert store.read("a") == "3"
    assert store.read("b") == "2"


def test_json_file_store_leaves_no_temp_files(tmp_path):
    store = JsonFileStore(tmp_path / "configs.json")
    store.write("a", "1")
    store.write("a", "2")

    assert [p.name for p in tmp_path.iterdir()] == ["configs.json"]


def test_missing_or_corrupt_file_reads_as_empty(tmp_path):
    path = tmp_path / "configs.json"
    store = JsonFileStore(path)
    assert store.read(STATE_KEY) is None

    path.write_text("{broken", encoding="utf-8")
    assert store.read(STATE_KEY) is None

    path.write_text("[1, 2]", encoding="utf-8")
    assert store.read(STATE_KEY) is None

    path.write_bytes(b"\xff\xfe{garbage")
    assert store.read(STATE_KEY) is None


def test_collection_recovers_from_undecodable_file(tmp_path):
    path = tmp_path / "configs.json"
    path.write_bytes(b"\xff\xfe{garbage")

    collection = ConfigurationCollection.load(JsonFileStore(path))
    assert collection.names() == [DEFAULT_MODEL_CONFIG.name]

    collection.create()
    assert len(ConfigurationCollection.load(JsonFileStore(path))) == 2


def test_collection_survives_restart(tmp_path):
    path = tmp_path / "configs.json"
    first = ConfigurationCollection.load(JsonFileStore(path))
    index = first.create()
    first.replace(index, first.get(index).model_copy(update={"name": "on disk"}))

    second = ConfigurationCollection.load(JsonFileStore(path))

    assert second.names() == first.names()
    assert second.get(index).name == "on disk"


def test_load_state_reports_invalid_payload():
    store = MemoryStore({STATE_KEY: json.dumps({"modelConfigs": [{"name": 3}]})})
    result = load_state(store)
    assert isinstance(result, Failure)
    assert result.error.field == STATE_KEY


def test_dump_state_round_trip():
    state = PersistedState(model_configs=[ModelConfig(name="a")], current_model_config_index=0)
    store = MemoryStore({STATE_KEY: dump_state(state)})

    assert load_state(store) == Success(state)
