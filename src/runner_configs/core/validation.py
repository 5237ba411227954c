"""순수 검증 함수"""
from typing import Any, TypeVar
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from runner_configs.core.result import Result, Success, Failure
from runner_configs.core.errors import ValidationError

M = TypeVar('M', bound=BaseModel)


def merge_fields(record: M, partial: dict[str, Any]) -> Result[M, ValidationError]:
    """
    필드 단위 병합 후 재검증

    지정하지 않은 필드는 그대로 두고, 범위를 벗어난 값이나 모르는 필드는 거부합니다.
    """
    fields = type(record).model_fields
    for key in partial:
        if key not in fields:
            return Failure(ValidationError(
                field=key,
                message=f"Unknown field for {type(record).__name__}",
            ))

    try:
        merged = type(record).model_validate({**record.model_dump(), **partial})
    except PydanticValidationError as e:
        first = e.errors()[0]
        # 에러 위치는 alias(camelCase)일 수 있으므로 필드 이름으로 되돌림
        by_alias = {info.alias or name: name for name, info in fields.items()}
        loc = [by_alias.get(str(part), str(part)) for part in first["loc"]]
        return Failure(ValidationError(
            field=".".join(loc),
            message=first["msg"],
        ))
    return Success(merged)
