"""영속 저장소 (키-값)"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol
from pydantic import BaseModel, Field

from runner_configs.core.types import ModelConfig, RECORD_CONFIG
from runner_configs.core.result import Result, Success, Failure
from runner_configs.core.errors import ValidationError

logger = logging.getLogger(__name__)

STATE_KEY = "configs"


class PersistedState(BaseModel):
    """저장되는 컬렉션 상태"""
    model_configs: list[ModelConfig] = Field(default_factory=list)
    current_model_config_index: int = 0

    model_config = RECORD_CONFIG


class ConfigStore(Protocol):
    """직렬화된 상태를 보관하는 저장소"""

    def read(self, key: str) -> str | None: ...

    def write(self, key: str, value: str) -> None: ...


class MemoryStore:
    """메모리 저장소"""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """
    JSON 파일 저장소

    파일 하나에 키별 값을 담고, 쓰기는 임시 파일 교체로 원자적으로 수행합니다.
    """

    def __init__(self, path: Path | str):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable store %s: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store %s: top level is not an object", self._path)
            return {}
        return data

    def read(self, key: str) -> str | None:
        return self._load_all().get(key)

    def write(self, key: str, value: str) -> None:
        data = self._load_all()
        data[key] = value

        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except BaseException:
            os.unlink(tmp_name)
            raise
        logger.debug("Wrote %s to %s", key, self._path)


# ============================================================
# 상태 직렬화 (순수 함수)
# ============================================================

def dump_state(state: PersistedState) -> str:
    """저장 포맷(camelCase JSON)으로 직렬화"""
    return state.model_dump_json(by_alias=True)


def load_state(store: ConfigStore) -> Result[PersistedState | None, ValidationError]:
    """저장소에서 상태 로드 (없으면 Success(None))"""
    raw = store.read(STATE_KEY)
    if raw is None:
        return Success(None)

    try:
        return Success(PersistedState.model_validate_json(raw))
    except Exception as e:
        return Failure(ValidationError(
            field=STATE_KEY,
            message=f"Invalid persisted state: {e}",
        ))
