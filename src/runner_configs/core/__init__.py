"""Runner Configs Core - 실행 설정 도메인 계층"""
from runner_configs.core.types import (
    Device, Precision, DEVICES, PRECISIONS,
    ApiParameters, ModelParameters, ModelConfig, LiveParameters,
)
from runner_configs.core.result import (
    Result, Success, Failure,
    Railway,
    map_result, bind, unwrap_or_else,
)
from runner_configs.core.errors import (
    OutOfRange, InvalidFieldCombination, BackendUnreachable, ValidationError,
    ConfigError, ConfigIndexError,
    error_to_dict,
)
from runner_configs.core.rules import (
    FieldName, ConversionKind,
    allowed_precisions, fields_visible, is_visible,
    conversion_kind, available_devices,
    check_precision, validate_model_parameters,
)
from runner_configs.core.strategy import derive_strategy
from runner_configs.core.validation import merge_fields
from runner_configs.core.config import (
    StoreConfig, BackendConfig, CatalogConfig, LoggingConfig, AppConfig,
    DEFAULT_CONFIG_PATHS, load_yaml, parse_config, find_config_path, load_config, merge_config,
)
from runner_configs.core.catalog import (
    ModelSource, ModelCatalog, parse_catalog, load_catalog,
)
from runner_configs.core.store import (
    ConfigStore, MemoryStore, JsonFileStore, PersistedState,
    STATE_KEY, dump_state, load_state,
)
from runner_configs.core.collection import (
    ConfigurationCollection,
    DEFAULT_CONFIG_NAME, DEFAULT_MODEL_CONFIG, next_config_name,
)
from runner_configs.core.notify import Notifier, ConsoleNotifier
from runner_configs.core.backend import BackendSync, HttpBackendSync
from runner_configs.core.session import EditSession, SaveReport
from runner_configs.core.logs import setup_logging

__all__ = [
    # Types
    "Device", "Precision", "DEVICES", "PRECISIONS",
    "ApiParameters", "ModelParameters", "ModelConfig", "LiveParameters",
    # Result
    "Result", "Success", "Failure", "Railway",
    "map_result", "bind", "unwrap_or_else",
    # Errors
    "OutOfRange", "InvalidFieldCombination", "BackendUnreachable", "ValidationError",
    "ConfigError", "ConfigIndexError", "error_to_dict",
    # Rules
    "FieldName", "ConversionKind",
    "allowed_precisions", "fields_visible", "is_visible",
    "conversion_kind", "available_devices",
    "check_precision", "validate_model_parameters",
    # Strategy / Validation
    "derive_strategy", "merge_fields",
    # Config
    "StoreConfig", "BackendConfig", "CatalogConfig", "LoggingConfig", "AppConfig",
    "DEFAULT_CONFIG_PATHS", "load_yaml", "parse_config", "find_config_path", "load_config", "merge_config",
    # Catalog
    "ModelSource", "ModelCatalog", "parse_catalog", "load_catalog",
    # Store
    "ConfigStore", "MemoryStore", "JsonFileStore", "PersistedState",
    "STATE_KEY", "dump_state", "load_state",
    # Collection
    "ConfigurationCollection",
    "DEFAULT_CONFIG_NAME", "DEFAULT_MODEL_CONFIG", "next_config_name",
    # Collaborators
    "Notifier", "ConsoleNotifier", "BackendSync", "HttpBackendSync",
    # Session
    "EditSession", "SaveReport",
    # Logging
    "setup_logging",
]
