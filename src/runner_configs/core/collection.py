"""설정 컬렉션 (위치 기반 CRUD)"""
import logging
from typing import Iterable, Iterator, Sequence

from runner_configs.core.types import ModelConfig
from runner_configs.core.result import unwrap_or_else
from runner_configs.core.errors import OutOfRange, ConfigIndexError, ValidationError
from runner_configs.core.store import (
    ConfigStore, PersistedState, STATE_KEY,
    dump_state, load_state,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "Default Config"

# 내장 기본 템플릿 (불변이라 그대로 공유)
DEFAULT_MODEL_CONFIG = ModelConfig(name=DEFAULT_CONFIG_NAME)


def next_config_name(names: Iterable[str], base: str = DEFAULT_CONFIG_NAME) -> str:
    """사용되지 않은 `<base> <n>` 이름 (고유성은 표시용일 뿐 강제하지 않음)"""
    taken = set(names)
    n = 1
    while f"{base} {n}" in taken:
        n += 1
    return f"{base} {n}"


class ConfigurationCollection:
    """
    이름 붙은 실행 설정의 순서 있는 컬렉션

    항상 하나 이상의 설정을 가지며, 변경할 때마다 저장소에 전체 상태를 기록합니다.
    """

    def __init__(
        self,
        configs: Sequence[ModelConfig] | None = None,
        current_index: int = 0,
        store: ConfigStore | None = None,
    ):
        self._configs: list[ModelConfig] = list(configs) if configs else [DEFAULT_MODEL_CONFIG]
        self._current_index = max(0, min(current_index, len(self._configs) - 1))
        self._store = store

    @classmethod
    def load(cls, store: ConfigStore) -> 'ConfigurationCollection':
        """저장소에서 복원 (비어 있거나 읽을 수 없으면 기본 설정 하나)"""
        def fallback(error: ValidationError) -> None:
            logger.warning("Resetting configs: %s", error.message)
            return None

        state = unwrap_or_else(load_state(store), fallback)
        if state is None or not state.model_configs:
            return cls(store=store)
        return cls(state.model_configs, state.current_model_config_index, store=store)

    # ------------------------------------------------------------
    # 조회
    # ------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._configs)

    def __iter__(self) -> Iterator[ModelConfig]:
        return iter(list(self._configs))

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current(self) -> ModelConfig:
        return self._configs[self._current_index]

    def names(self) -> list[str]:
        return [c.name for c in self._configs]

    def get(self, index: int) -> ModelConfig:
        self._check(index)
        return self._configs[index]

    def to_state(self) -> PersistedState:
        return PersistedState(
            model_configs=list(self._configs),
            current_model_config_index=self._current_index,
        )

    # ------------------------------------------------------------
    # 변경
    # ------------------------------------------------------------

    def create(self) -> int:
        """기본 템플릿 복제본을 끝에 추가하고 인덱스 반환"""
        config = DEFAULT_MODEL_CONFIG.model_copy(
            update={"name": next_config_name(self.names())}
        )
        self._configs.append(config)
        logger.debug("Created config %r at %d", config.name, len(self._configs) - 1)
        self._persist()
        return len(self._configs) - 1

    def replace(self, index: int, config: ModelConfig) -> None:
        """위치 기준 덮어쓰기 (편집 내용을 반영하는 유일한 경로)"""
        self._check(index)
        self._configs[index] = config
        logger.debug("Replaced config %d with %r", index, config.name)
        self._persist()

    def delete(self, index: int) -> None:
        """삭제 (마지막 하나를 지우면 기본 설정으로 초기화)"""
        self._check(index)
        if len(self._configs) == 1:
            self.reset_all()
            return

        removed = self._configs.pop(index)
        if index < self._current_index:
            self._current_index -= 1
        self._current_index = min(self._current_index, len(self._configs) - 1)
        logger.debug("Deleted config %r at %d", removed.name, index)
        self._persist()

    def reset_all(self) -> 'ConfigurationCollection':
        """전체를 기본 설정 하나로 교체 (되돌릴 수 없음)"""
        self._configs = [DEFAULT_MODEL_CONFIG]
        self._current_index = 0
        logger.debug("Reset configs to defaults")
        self._persist()
        return self

    def set_current_index(self, index: int) -> None:
        self._check(index)
        self._current_index = index
        self._persist()

    # ------------------------------------------------------------
    # 내부
    # ------------------------------------------------------------

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self._configs):
            raise ConfigIndexError(OutOfRange(index=index, length=len(self._configs)))

    def _persist(self) -> None:
        if self._store is not None:
            self._store.write(STATE_KEY, dump_state(self.to_state()))
