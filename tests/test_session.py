import json

import pytest

from runner_configs.core import (
    Success, Failure, ConfigIndexError, STATE_KEY,
    DEFAULT_MODEL_CONFIG, DEFAULT_CONFIG_NAME,
    ConfigurationCollection, EditSession, LiveParameters,
)
from conftest import FakeBackend


def test_initial_draft_matches_current_config(session, collection):
    assert session.selected_index == collection.current_index
    assert session.draft == collection.get(collection.current_index)


def test_create_then_select_yields_default_template(session):
    index = session.collection.create()

    draft = session.select(index)

    assert session.selected_index == index
    assert draft.model_copy(update={"name": DEFAULT_CONFIG_NAME}) == DEFAULT_MODEL_CONFIG


def test_select_discards_unsaved_edits(session):
    other = session.collection.create()
    session.select(0)
    session.edit_name("unsaved")
    session.edit_api_params(temperature=1.5)

    session.select(other)
    session.select(0)

    assert session.draft == session.collection.get(0)
    assert session.draft.name == DEFAULT_CONFIG_NAME


def test_discard_restores_persisted_values(session):
    session.edit_name("unsaved")

    session.discard()

    assert session.draft == session.collection.get(session.selected_index)


def test_select_follows_current_index(session):
    index = session.collection.create()
    session.select(0)
    session.select(index)
    assert session.collection.current_index == index


def test_select_out_of_range_raises_and_keeps_draft(session):
    session.edit_name("pending")

    with pytest.raises(ConfigIndexError):
        session.select(5)

    assert session.draft.name == "pending"
    assert session.selected_index == 0


def test_edits_do_not_touch_collection_until_save(session):
    session.edit_name("draft only")
    session.edit_api_params(top_p=0.9)

    assert session.collection.get(0) == DEFAULT_MODEL_CONFIG


def test_api_merge_is_field_level(session):
    before = session.draft.api_parameters

    result = session.edit_api_params(temperature=0.5)

    assert isinstance(result, Success)
    after = session.draft.api_parameters
    assert after.temperature == 0.5
    assert after.model_copy(update={"temperature": before.temperature}) == before
    assert session.draft.model_parameters == DEFAULT_MODEL_CONFIG.model_parameters


def test_api_edit_out_of_range_is_rejected(session):
    before = session.draft

    result = session.edit_api_params(api_port=70000)

    assert isinstance(result, Failure)
    assert result.error.field == "api_port"
    assert session.draft == before


def test_unknown_field_is_rejected(session):
    result = session.edit_model_params(layers=3)

    assert isinstance(result, Failure)
    assert result.error.field == "layers"


def test_model_merge_keeps_api_parameters(session):
    before = session.draft.api_parameters

    session.edit_model_params(stored_layers=10)

    assert session.draft.api_parameters == before
    assert session.draft.model_parameters.stored_layers == 10


def test_known_model_with_tokenizer_sets_tokenizer(session):
    session.edit_model_params(custom_tokenizer="manual.txt")

    result = session.edit_model_params(model_name="foo")

    assert isinstance(result, Success)
    params = session.draft.model_parameters
    assert params.model_name == "foo"
    assert params.use_custom_tokenizer is True
    assert params.custom_tokenizer == "vocab.txt"


def test_model_without_tokenizer_keeps_manual_path(session):
    session.edit_model_params(use_custom_tokenizer=True, custom_tokenizer="manual.txt")

    session.edit_model_params(model_name="bar")

    params = session.draft.model_parameters
    assert params.use_custom_tokenizer is False
    assert params.custom_tokenizer == "manual.txt"


def test_unknown_model_disables_tokenizer(session):
    session.edit_model_params(use_custom_tokenizer=True, custom_tokenizer="manual.txt")

    session.edit_model_params(model_name="not-in-catalog")

    params = session.draft.model_parameters
    assert params.use_custom_tokenizer is False
    assert params.custom_tokenizer == "manual.txt"


def test_device_change_does_not_coerce_precision(session):
    result = session.edit_model_params(device="CPU (rwkv.cpp)")

    assert isinstance(result, Success)
    assert session.draft.model_parameters.precision == "fp16"
    problems = session.problems()
    assert len(problems) == 1
    assert problems[0].field == "precision"
    assert problems[0].device == "CPU (rwkv.cpp)"


def test_picking_valid_precision_clears_problem(session):
    session.edit_model_params(device="CPU (rwkv.cpp)")

    result = session.edit_model_params(precision="Q5_1")

    assert isinstance(result, Success)
    assert session.problems() == []


def test_invalid_precision_edit_is_rejected(session):
    before = session.draft

    result = session.edit_model_params(precision="nf4")

    assert isinstance(result, Failure)
    assert result.error.code == "INVALID_FIELD_COMBINATION"
    assert session.draft == before


def test_precision_checked_against_new_device_in_same_edit(session):
    result = session.edit_model_params(device="WebGPU", precision="nf4")

    assert isinstance(result, Success)
    assert session.draft.model_parameters.device == "WebGPU"


def test_unknown_device_is_rejected(session):
    result = session.edit_model_params(device="TPU", precision="fp16")

    assert isinstance(result, Failure)
    assert result.error.field == "device"


def test_save_persists_draft(session, store):
    session.edit_name("saved")
    session.edit_api_params(temperature=0.7)

    report = session.save()

    assert report.index == 0
    assert session.collection.get(0) == session.draft
    persisted = ConfigurationCollection.load(store).get(0)
    assert persisted.name == "saved"
    assert persisted.api_parameters.temperature == 0.7


def test_save_pushes_only_hot_reloadable_subset(session, backend):
    session.edit_api_params(api_port=8123, max_response_token=1000, temperature=0.4,
                            top_p=0.6, presence_penalty=0.2, frequency_penalty=-0.3)
    session.edit_model_params(stored_layers=3)

    report = session.save()

    assert report.live == LiveParameters(
        max_tokens=1000, temperature=0.4, top_p=0.6,
        presence_penalty=0.2, frequency_penalty=-0.3,
    )
    params, port = backend.pushes[-1]
    assert params == report.live
    assert port == 8123
    assert "api_port" not in params.model_dump()
    assert session.collection.get(0).api_parameters.api_port == 8123


def test_save_persists_before_push(session, backend):
    session.edit_name("ordered")

    session.save()

    snapshot = json.loads(backend.store_snapshots[-1])
    assert snapshot["modelConfigs"][0]["name"] == "ordered"


def test_backend_failure_does_not_roll_back(collection, catalog, notifier, store):
    backend = FakeBackend(notifier=notifier, store=store, fail=True)
    session = EditSession(collection, catalog, backend, notifier)
    session.edit_name("kept")

    report = session.save()

    assert isinstance(report.push, Failure)
    assert ConfigurationCollection.load(store).get(0).name == "kept"
    assert ("success", "Config Saved") in notifier.messages
    assert any(level == "error" for level, _ in notifier.messages)


def test_save_notifies_operator(session, notifier):
    session.save()
    assert notifier.messages == [("success", "Config Saved")]


def test_draft_equals_collection_after_save(session):
    session.edit_model_params(device="CUDA-Beta", precision="int8")
    session.save()
    assert session.draft == session.collection.get(session.selected_index)


def test_create_selects_new_config(session):
    index = session.create()

    assert index == 1
    assert session.selected_index == 1
    assert session.draft.name == f"{DEFAULT_CONFIG_NAME} 1"


def test_delete_selects_neighbour(session):
    session.create()
    session.create()
    session.select(2)

    index = session.delete()

    assert index == 1
    assert len(session.collection) == 2
    assert session.draft == session.collection.get(1)


def test_delete_middle_keeps_position(session):
    session.create()
    session.create()
    session.select(1)
    expected = session.collection.get(2)

    index = session.delete()

    assert index == 1
    assert session.draft == expected


def test_delete_last_remaining_resets(session):
    session.edit_name("unsaved")
    session.save()

    index = session.delete()

    assert index == 0
    assert len(session.collection) == 1
    assert session.draft == DEFAULT_MODEL_CONFIG


def test_reset_all_selects_first(session):
    session.create()
    session.create()

    draft = session.reset_all()

    assert session.selected_index == 0
    assert draft == DEFAULT_MODEL_CONFIG
    assert len(session.collection) == 1


def test_strategy_only_for_cuda_devices(session):
    session.edit_model_params(stored_layers=20, max_stored_layers=32)
    assert session.strategy() == "cuda fp16 *20 -> cpu fp16 *12"

    session.edit_model_params(device="CPU", precision="fp32")
    assert session.strategy() is None


def test_model_choices_include_incomplete_current(session):
    session.edit_model_params(model_name="partial")
    assert session.model_choices() == ["partial", "foo", "bar"]

    session.edit_model_params(model_name="foo")
    assert session.model_choices() == ["foo", "bar"]


def test_conversion_input_is_draft(session):
    session.edit_name("to convert")
    assert session.conversion_input() == session.draft


def test_session_starts_from_persisted_current_index(store, catalog, notifier):
    first = ConfigurationCollection.load(store)
    index = first.create()
    first.set_current_index(index)

    session = EditSession(ConfigurationCollection.load(store), catalog,
                          FakeBackend(), notifier)

    assert session.selected_index == index
    assert json.loads(store.read(STATE_KEY))["currentModelConfigIndex"] == index
