"""설정 타입 (Pydantic + YAML)"""
from pathlib import Path
from typing import Any, Literal
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
import yaml

from runner_configs.core.result import Result, Success, Failure, bind
from runner_configs.core.errors import ValidationError


# ============================================================
# 저장소 설정
# ============================================================

class StoreConfig(BaseModel):
    """설정 컬렉션 저장 위치"""
    path: Path = Field(default_factory=lambda: Path.home() / ".runner-configs" / "configs.json")

    model_config = {"frozen": True}

    @field_validator("path")
    @classmethod
    def expand_user(cls, v: Path) -> Path:
        return v.expanduser()


# ============================================================
# 백엔드 설정
# ============================================================

class BackendConfig(BaseModel):
    """추론 백엔드 접속 설정 (포트는 각 실행 설정의 apiPort 사용)"""
    scheme: Literal["http", "https"] = "http"
    host: str = "127.0.0.1"
    timeout: float = Field(default=5.0, gt=0.0)

    model_config = {"frozen": True}


# ============================================================
# 모델 카탈로그 / 로깅
# ============================================================

class CatalogConfig(BaseModel):
    """모델 카탈로그 YAML 경로 (없으면 빈 카탈로그)"""
    path: Path | None = None

    model_config = {"frozen": True}

    @field_validator("path")
    @classmethod
    def expand_user(cls, v: Path | None) -> Path | None:
        return v.expanduser() if v is not None else None


class LoggingConfig(BaseModel):
    """로깅 설정"""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    model_config = {"frozen": True}


# ============================================================
# 전체 앱 설정
# ============================================================

class AppConfig(BaseModel):
    """전체 애플리케이션 설정"""
    store: StoreConfig = Field(default_factory=StoreConfig)
    backend: BackendConfig = Field(default_factory=BackendConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}


# ============================================================
# YAML 로더 (순수 함수)
# ============================================================

# 경로를 지정하지 않으면 앞에서부터 처음 존재하는 파일 사용
DEFAULT_CONFIG_PATHS: tuple[Path, ...] = (
    Path("runner-configs.yaml"),
    Path("runner-configs.yml"),
    Path.home() / ".config" / "runner-configs" / "config.yaml",
)


def load_yaml(path: Path) -> Result[Any, ValidationError]:
    """YAML 파일 로드 (빈 파일은 빈 딕셔너리)"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        return Failure(ValidationError(
            field="config_path",
            message=f"Config file not found: {path}",
        ))
    except (UnicodeDecodeError, yaml.YAMLError) as e:
        return Failure(ValidationError(
            field="config_yaml",
            message=f"Invalid YAML in {path}: {e}",
        ))
    return Success({} if data is None else data)


def parse_config(data: Any) -> Result[AppConfig, ValidationError]:
    """YAML 매핑을 AppConfig로 검증 (에러 필드는 점 경로, 예: backend.timeout)"""
    if not isinstance(data, dict):
        return Failure(ValidationError(
            field="config",
            message=f"Top level must be a mapping, got {type(data).__name__}",
        ))
    try:
        return Success(AppConfig.model_validate(data))
    except PydanticValidationError as e:
        first = e.errors()[0]
        return Failure(ValidationError(
            field=".".join(str(part) for part in first["loc"]) or "config",
            message=first["msg"],
        ))


def find_config_path() -> Path | None:
    for p in DEFAULT_CONFIG_PATHS:
        if p.is_file():
            return p
    return None


def load_config(path: Path | str | None = None) -> Result[AppConfig, ValidationError]:
    """
    설정 로드 (YAML + 기본값)

    경로가 없으면 DEFAULT_CONFIG_PATHS를 탐색하고, 아무 파일도 없으면 기본값 사용
    """
    if path is None:
        path = find_config_path()
        if path is None:
            return Success(AppConfig())

    return bind(load_yaml(Path(path)), parse_config)


def merge_config(base: AppConfig, overrides: dict) -> AppConfig:
    """중첩 섹션 단위로 덮어쓰기 (CLI의 --store 등)"""
    def deep_merge(d1: dict, d2: dict) -> dict:
        merged = dict(d1)
        for k, v in d2.items():
            if isinstance(merged.get(k), dict) and isinstance(v, dict):
                merged[k] = deep_merge(merged[k], v)
            else:
                merged[k] = v
        return merged

    return AppConfig.model_validate(deep_merge(base.model_dump(), overrides))
