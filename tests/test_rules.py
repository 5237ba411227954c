import pytest

from runner_configs.core import (
    DEVICES, ModelParameters,
    Success, Failure, InvalidFieldCombination,
    allowed_precisions, fields_visible, is_visible,
    check_precision, validate_model_parameters,
    conversion_kind, available_devices,
)


@pytest.mark.parametrize("device, expected", [
    ("CUDA", {"fp16", "int8", "fp32"}),
    ("CUDA-Beta", {"fp16", "int8", "fp32"}),
    ("CPU", {"int8", "fp32"}),
    ("MPS", {"int8", "fp32"}),
    ("CPU (rwkv.cpp)", {"Q5_1"}),
    ("WebGPU", {"fp16", "int8", "nf4"}),
    ("WebGPU (Python)", {"fp16", "int8", "nf4"}),
    ("Custom", set()),
])
def test_allowed_precisions(device, expected):
    assert allowed_precisions(device) == expected


def test_every_device_except_custom_has_precisions():
    for device in DEVICES:
        if device == "Custom":
            assert not allowed_precisions(device)
        else:
            assert allowed_precisions(device)


def test_cuda_devices_show_stored_layers_and_strategy():
    for device in DEVICES:
        cuda = device in ("CUDA", "CUDA-Beta")
        assert is_visible(device, "storedLayers") is cuda
        assert is_visible(device, "currentStrategy") is cuda


def test_custom_strategy_only_for_custom():
    assert [d for d in DEVICES if is_visible(d, "customStrategy")] == ["Custom"]


def test_custom_cuda_toggle_visibility():
    visible = {d for d in DEVICES if is_visible(d, "useCustomCuda")}
    assert visible == {"CUDA", "CUDA-Beta", "Custom"}


def test_advanced_panel_hidden_only_for_webgpu():
    hidden = {d for d in DEVICES if not is_visible(d, "advanced")}
    assert hidden == {"WebGPU"}


def test_precision_hidden_for_custom():
    assert "precision" not in fields_visible("Custom")
    assert "enableWebUI" not in fields_visible("WebGPU")
    assert "enableWebUI" in fields_visible("WebGPU (Python)")


def test_check_precision():
    assert check_precision("CUDA", "fp16") == Success("fp16")

    result = check_precision("CPU", "fp16")
    assert result == Failure(InvalidFieldCombination(field="precision", device="CPU", value="fp16"))


def test_validate_model_parameters_detects_without_correcting():
    params = ModelParameters(device="CPU (rwkv.cpp)", precision="fp16")

    result = validate_model_parameters(params)

    assert isinstance(result, Failure)
    assert result.error.code == "INVALID_FIELD_COMBINATION"
    assert params.precision == "fp16"


def test_validate_model_parameters_ignores_precision_for_custom():
    params = ModelParameters(device="Custom", precision="nf4", custom_strategy="cuda fp16")
    assert validate_model_parameters(params) == Success(params)


def test_conversion_kind():
    assert conversion_kind("CUDA") == "convert"
    assert conversion_kind("CPU") == "convert"
    assert conversion_kind("CPU (rwkv.cpp)") == "ggml"
    assert conversion_kind("WebGPU") == "safetensors"
    assert conversion_kind("WebGPU (Python)") == "safetensors"


def test_mps_only_offered_on_darwin():
    assert "MPS" in available_devices("darwin")
    assert "MPS" not in available_devices("linux")
    assert "MPS" not in available_devices("win32")
    assert available_devices("darwin")[0] == "CPU"
