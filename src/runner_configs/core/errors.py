"""에러 타입 정의 (OR Type)"""
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class OutOfRange:
    """설정 인덱스 범위 초과"""
    index: int
    length: int
    code: str = "OUT_OF_RANGE"


@dataclass(frozen=True)
class InvalidFieldCombination:
    """디바이스와 맞지 않는 필드 값"""
    field: str
    device: str
    value: str
    code: str = "INVALID_FIELD_COMBINATION"


@dataclass(frozen=True)
class BackendUnreachable:
    """백엔드 동기화 실패"""
    url: str
    reason: str
    code: str = "BACKEND_UNREACHABLE"


@dataclass(frozen=True)
class ValidationError:
    """검증 에러"""
    field: str
    message: str
    code: str = "VALIDATION_ERROR"


# OR Type: 설정 관리 에러
ConfigError = Union[
    OutOfRange,
    InvalidFieldCombination,
    BackendUnreachable,
    ValidationError,
]


class ConfigIndexError(IndexError):
    """
    잘못된 인덱스 접근 (호출 규약 위반)

    호출자는 항상 유효한 인덱스만 넘겨야 하므로 Result가 아닌 예외로 전파합니다.
    """

    def __init__(self, error: OutOfRange):
        super().__init__(
            f"Config index {error.index} out of range (length {error.length})"
        )
        self.error = error


def error_to_dict(error: ConfigError) -> dict:
    """에러를 딕셔너리로 변환 (알림/출력용)"""
    match error:
        case OutOfRange(index, length, code):
            return {"code": code, "index": index, "length": length,
                    "message": f"Config index {index} out of range (length {length})"}
        case InvalidFieldCombination(field, device, value, code):
            return {"code": code, "field": field, "device": device, "value": value,
                    "message": f"{field}={value} is not allowed for device {device}"}
        case BackendUnreachable(url, reason, code):
            return {"code": code, "url": url, "reason": reason,
                    "message": f"Backend unreachable: {reason}"}
        case ValidationError(field, message, code):
            return {"code": code, "field": field, "message": message}
