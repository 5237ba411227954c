"""편집 세션 (선택, 초안 편집, 저장)"""
import logging
from dataclasses import dataclass
from typing import Any

from runner_configs.core.types import (
    DEVICES, ModelConfig, ApiParameters, ModelParameters, LiveParameters,
)
from runner_configs.core.result import Result, Success, Failure, Railway
from runner_configs.core.errors import ConfigError, InvalidFieldCombination, ValidationError
from runner_configs.core.rules import check_precision, is_visible, validate_model_parameters
from runner_configs.core.strategy import derive_strategy
from runner_configs.core.validation import merge_fields
from runner_configs.core.catalog import ModelCatalog
from runner_configs.core.collection import ConfigurationCollection
from runner_configs.core.backend import BackendSync
from runner_configs.core.notify import Notifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaveReport:
    """저장 결과 (영속화는 항상 성공, 전송 결과는 백엔드가 알림)"""
    index: int
    config: ModelConfig
    live: LiveParameters
    push: Any


class EditSession:
    """
    하나의 설정을 편집하는 세션

    초안(draft)은 선택된 설정의 값 복사본이며, save() 전까지 컬렉션과 분리됩니다.
    선택을 바꾸면 저장하지 않은 편집은 버려집니다.
    """

    def __init__(
        self,
        collection: ConfigurationCollection,
        catalog: ModelCatalog,
        backend: BackendSync,
        notifier: Notifier,
    ):
        self._collection = collection
        self._catalog = catalog
        self._backend = backend
        self._notifier = notifier
        self._selected_index = collection.current_index
        self._draft = collection.get(self._selected_index)

    @property
    def selected_index(self) -> int:
        return self._selected_index

    @property
    def draft(self) -> ModelConfig:
        return self._draft

    @property
    def collection(self) -> ConfigurationCollection:
        return self._collection

    @property
    def catalog(self) -> ModelCatalog:
        return self._catalog

    # ============================================================
    # 선택
    # ============================================================

    def select(self, index: int) -> ModelConfig:
        """선택 변경: 초안을 무조건 교체 (저장 안 된 편집은 폐기)"""
        config = self._collection.get(index)
        self._selected_index = index
        self._draft = config
        self._collection.set_current_index(index)
        return config

    def discard(self) -> ModelConfig:
        """초안을 저장된 값으로 되돌림"""
        return self.select(self._selected_index)

    # ============================================================
    # 편집 (필드 단위 병합)
    # ============================================================

    def edit_name(self, name: str) -> ModelConfig:
        self._draft = self._draft.model_copy(update={"name": name})
        return self._draft

    def edit_enable_web_ui(self, enabled: bool) -> ModelConfig:
        self._draft = self._draft.model_copy(update={"enable_web_ui": enabled})
        return self._draft

    def edit_api_params(self, **partial: Any) -> Result[ModelConfig, ValidationError]:
        """API 파라미터 병합 (실패 시 초안 유지)"""
        return (
            Railway.from_result(merge_fields(self._draft.api_parameters, partial))
            .map(self._apply_api_params)
            .unwrap()
        )

    def edit_model_params(self, **partial: Any) -> Result[ModelConfig, ConfigError]:
        """
        모델 파라미터 병합

        - 정밀도를 직접 지정하면 규칙 테이블로 검사 (자동 보정 없음)
        - 디바이스만 바꾸면 정밀도는 그대로 둠 (problems()로 확인)
        - 모델 이름을 바꾸면 카탈로그의 토크나이저 정보를 반영
        """
        if "model_name" in partial:
            partial = {**self._tokenizer_fields(partial["model_name"]), **partial}

        return (
            Railway.from_result(self._check_precision_edit(partial))
            .bind(lambda p: merge_fields(self._draft.model_parameters, p))
            .map(self._apply_model_params)
            .unwrap()
        )

    def _tokenizer_fields(self, model_name: str) -> dict[str, Any]:
        source = self._catalog.find(model_name)
        if source is not None and source.custom_tokenizer:
            return {"use_custom_tokenizer": True, "custom_tokenizer": source.custom_tokenizer}
        # 직접 입력한 토크나이저 경로는 덮어쓰지 않음
        return {"use_custom_tokenizer": False}

    def _check_precision_edit(
        self,
        partial: dict[str, Any],
    ) -> Result[dict[str, Any], InvalidFieldCombination]:
        if "precision" not in partial:
            return Success(partial)

        device = partial.get("device", self._draft.model_parameters.device)
        if device not in DEVICES:
            # 알 수 없는 디바이스는 병합 단계의 타입 검증이 거부
            return Success(partial)

        match check_precision(device, partial["precision"]):
            case Failure() as err:
                return err
        return Success(partial)

    def _apply_api_params(self, params: ApiParameters) -> ModelConfig:
        self._draft = self._draft.with_api_parameters(params)
        return self._draft

    def _apply_model_params(self, params: ModelParameters) -> ModelConfig:
        self._draft = self._draft.with_model_parameters(params)
        return self._draft

    # ============================================================
    # 파생 정보 (읽기 전용)
    # ============================================================

    def problems(self) -> list[InvalidFieldCombination]:
        """초안의 잘못된 필드 조합"""
        match validate_model_parameters(self._draft.model_parameters):
            case Failure(error):
                return [error]
        return []

    def strategy(self) -> str | None:
        """현재 전략 문자열 (표시 대상 디바이스가 아니면 None)"""
        params = self._draft.model_parameters
        if not is_visible(params.device, "currentStrategy"):
            return None
        return derive_strategy(params)

    def model_choices(self) -> list[str]:
        """모델 선택지 (완료된 모델, 현재 모델이 미완료면 맨 앞에 포함)"""
        current = self._draft.model_parameters.model_name
        choices = self._catalog.complete_names()
        if not self._catalog.is_complete(current):
            choices.insert(0, current)
        return choices

    def conversion_input(self) -> ModelConfig:
        """변환 워크플로에 넘길 설정"""
        return self._draft

    # ============================================================
    # 컬렉션 조작
    # ============================================================

    def save(self) -> SaveReport:
        """
        초안 저장 후 핫 리로드 파라미터 전송

        영속화가 먼저 끝나며, 전송 실패는 저장을 되돌리지 않습니다.
        apiPort와 모델 파라미터는 재시작이 필요하므로 전송하지 않습니다.
        """
        index = self._selected_index
        config = self._draft
        self._collection.replace(index, config)
        self._notifier.success("Config Saved")

        live = LiveParameters.from_api(config.api_parameters)
        push = self._backend.push_live_parameters(live, port=config.api_parameters.api_port)
        logger.debug("Saved config %d (%r)", index, config.name)
        return SaveReport(index=index, config=config, live=live, push=push)

    def create(self) -> int:
        """새 설정을 만들고 선택"""
        index = self._collection.create()
        self.select(index)
        return index

    def delete(self) -> int:
        """선택된 설정을 삭제하고 인접 설정 선택"""
        self._collection.delete(self._selected_index)
        index = min(self._selected_index, len(self._collection) - 1)
        self.select(index)
        return index

    def reset_all(self) -> ModelConfig:
        """모든 설정을 기본값으로 초기화 (확인은 호출자 책임)"""
        self._collection.reset_all()
        return self.select(0)
