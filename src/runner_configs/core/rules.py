"""디바이스별 규칙 테이블 (순수 조회)

디바이스에 따라 달라지는 정밀도 허용 범위와 필드 노출 여부는
모두 이 테이블에서만 결정합니다.
"""
from typing import Literal

from runner_configs.core.types import Device, Precision, ModelParameters
from runner_configs.core.result import Result, Success, Failure
from runner_configs.core.errors import InvalidFieldCombination

FieldName = Literal[
    "precision",
    "storedLayers",
    "currentStrategy",
    "customStrategy",
    "useCustomCuda",
    "advanced",
    "enableWebUI",
]
ConversionKind = Literal["convert", "ggml", "safetensors"]


# ============================================================
# 규칙 테이블
# ============================================================

_ALLOWED_PRECISIONS: dict[Device, frozenset[Precision]] = {
    "CPU": frozenset({"int8", "fp32"}),
    "CPU (rwkv.cpp)": frozenset({"Q5_1"}),
    "MPS": frozenset({"int8", "fp32"}),
    "CUDA": frozenset({"fp16", "int8", "fp32"}),
    "CUDA-Beta": frozenset({"fp16", "int8", "fp32"}),
    "WebGPU": frozenset({"fp16", "int8", "nf4"}),
    "WebGPU (Python)": frozenset({"fp16", "int8", "nf4"}),
    "Custom": frozenset(),
}

_CUDA_FIELDS: frozenset[FieldName] = frozenset({
    "precision", "storedLayers", "currentStrategy", "useCustomCuda",
    "advanced", "enableWebUI",
})

_VISIBLE_FIELDS: dict[Device, frozenset[FieldName]] = {
    "CPU": frozenset({"precision", "advanced", "enableWebUI"}),
    "CPU (rwkv.cpp)": frozenset({"precision", "advanced", "enableWebUI"}),
    "MPS": frozenset({"precision", "advanced", "enableWebUI"}),
    "CUDA": _CUDA_FIELDS,
    "CUDA-Beta": _CUDA_FIELDS,
    "WebGPU": frozenset({"precision"}),
    "WebGPU (Python)": frozenset({"precision", "advanced", "enableWebUI"}),
    "Custom": frozenset({"customStrategy", "useCustomCuda", "advanced", "enableWebUI"}),
}

_CONVERSION_KINDS: dict[Device, ConversionKind] = {
    "CPU (rwkv.cpp)": "ggml",
    "WebGPU": "safetensors",
    "WebGPU (Python)": "safetensors",
}

# 드롭다운 표시 순서
_DEVICE_ORDER: tuple[Device, ...] = (
    "CPU", "CPU (rwkv.cpp)", "MPS", "CUDA", "CUDA-Beta",
    "WebGPU", "WebGPU (Python)", "Custom",
)


# ============================================================
# 조회 함수
# ============================================================

def allowed_precisions(device: Device) -> frozenset[Precision]:
    """디바이스가 허용하는 정밀도 집합 (Custom은 빈 집합)"""
    return _ALLOWED_PRECISIONS[device]


def fields_visible(device: Device) -> frozenset[FieldName]:
    """디바이스에서 노출되는 모델 파라미터 필드"""
    return _VISIBLE_FIELDS[device]


def is_visible(device: Device, field: FieldName) -> bool:
    return field in _VISIBLE_FIELDS[device]


def conversion_kind(device: Device) -> ConversionKind:
    """디바이스에 맞는 변환 워크플로"""
    return _CONVERSION_KINDS.get(device, "convert")


def available_devices(platform: str) -> tuple[Device, ...]:
    """플랫폼에서 선택 가능한 디바이스 (MPS는 macOS 전용)"""
    if platform == "darwin":
        return _DEVICE_ORDER
    return tuple(d for d in _DEVICE_ORDER if d != "MPS")


# ============================================================
# 검증 (자동 보정 없음)
# ============================================================

def check_precision(
    device: Device,
    precision: Precision,
) -> Result[Precision, InvalidFieldCombination]:
    """정밀도가 디바이스 허용 집합에 속하는지 검사"""
    if precision not in _ALLOWED_PRECISIONS[device]:
        return Failure(InvalidFieldCombination(
            field="precision",
            device=device,
            value=precision,
        ))
    return Success(precision)


def validate_model_parameters(
    params: ModelParameters,
) -> Result[ModelParameters, InvalidFieldCombination]:
    """모델 파라미터 조합 검증"""
    if not is_visible(params.device, "precision"):
        return Success(params)

    match check_precision(params.device, params.precision):
        case Failure() as err:
            return err
    return Success(params)
