"""전략(strategy) 문자열 생성 (순수 함수)"""
from runner_configs.core.types import ModelParameters, Precision

CUDA_DEVICES = ("CUDA", "CUDA-Beta")


def _cuda_precision_token(precision: Precision) -> str:
    """CUDA 계층에서 쓰는 정밀도 표기"""
    match precision:
        case "int8":
            return "fp16i8"
        case "fp32":
            return "fp32"
        case _:
            return "fp16"


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def derive_strategy(params: ModelParameters) -> str:
    """
    모델 파라미터로부터 레이어 배치 전략 문자열 생성

    - Custom: 사용자가 입력한 전략 그대로
    - CUDA 계열: storedLayers개는 GPU, 나머지는 호스트 메모리
      (범위를 벗어난 값은 [0, maxStoredLayers]로 보정)
    - 그 외: 표시하지 않으므로 빈 문자열
    """
    if params.device == "Custom":
        return params.custom_strategy

    if params.device not in CUDA_DEVICES:
        return ""

    total = max(params.max_stored_layers, 0)
    stored = _clamp(params.stored_layers, 0, total)
    token = _cuda_precision_token(params.precision)

    if stored == total:
        return f"cuda {token}"
    return f"cuda {token} *{stored} -> cpu {token} *{total - stored}"
