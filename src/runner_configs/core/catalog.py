"""모델 카탈로그 (모델 소스 조회)"""
from pathlib import Path
from typing import Any, Iterable
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from runner_configs.core.types import RECORD_CONFIG
from runner_configs.core.result import Result, Success, Failure, bind
from runner_configs.core.errors import ValidationError
from runner_configs.core.config import load_yaml


class ModelSource(BaseModel):
    """모델 소스 정보"""
    name: str
    is_complete: bool = False
    custom_tokenizer: str | None = None

    model_config = RECORD_CONFIG


class ModelCatalog:
    """이름으로 모델 소스를 찾는 카탈로그"""

    def __init__(self, sources: Iterable[ModelSource] = ()):
        self._sources = list(sources)

    def __len__(self) -> int:
        return len(self._sources)

    def __iter__(self):
        return iter(self._sources)

    def find(self, name: str) -> ModelSource | None:
        """이름이 같은 첫 번째 소스"""
        for source in self._sources:
            if source.name == name:
                return source
        return None

    def is_complete(self, name: str) -> bool:
        """다운로드가 끝나 실행 가능한 모델인지"""
        source = self.find(name)
        return source is not None and source.is_complete

    def complete_names(self) -> list[str]:
        return [s.name for s in self._sources if s.is_complete]


def parse_catalog(data: Any) -> Result[ModelCatalog, ValidationError]:
    """`models:` 목록을 카탈로그로 파싱"""
    entries = (data.get("models") or []) if isinstance(data, dict) else None
    if not isinstance(entries, list):
        return Failure(ValidationError(
            field="models",
            message="Catalog 'models' must be a list",
        ))

    try:
        sources = [ModelSource.model_validate(entry) for entry in entries]
    except PydanticValidationError as e:
        return Failure(ValidationError(
            field="models",
            message=str(e),
        ))
    return Success(ModelCatalog(sources))


def load_catalog(path: Path | str | None) -> Result[ModelCatalog, ValidationError]:
    """YAML에서 카탈로그 로드 (경로가 없으면 빈 카탈로그)"""
    if path is None:
        return Success(ModelCatalog())

    return bind(load_yaml(Path(path)), parse_catalog)
