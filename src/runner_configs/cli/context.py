"""CLI 공통: 설정 로드와 편집 세션 구성"""
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, NoReturn

import typer
from rich.console import Console

from runner_configs.core import (
    Failure, ConfigError, ConfigIndexError, error_to_dict,
    AppConfig, load_config, merge_config, load_catalog,
    JsonFileStore, ConfigurationCollection,
    ConsoleNotifier, HttpBackendSync, EditSession,
    setup_logging,
)

console = Console()

_options: dict = {"verbose": False, "store": None}


def set_options(verbose: bool = False, store: Path | None = None) -> None:
    """전역 옵션 (--verbose는 DEBUG 로그, --store는 저장 파일 경로 덮어쓰기)"""
    _options["verbose"] = verbose
    _options["store"] = store


def fail(error: ConfigError | str) -> NoReturn:
    """에러 한 줄 출력 후 종료"""
    message = error if isinstance(error, str) else error_to_dict(error)["message"]
    console.print(f"[bold red]Error: {message}[/bold red]")
    raise typer.Exit(1)


def load_app_config(config_path: Path | None) -> AppConfig:
    config_result = load_config(config_path)
    if isinstance(config_result, Failure):
        fail(config_result.error)
    config = config_result.value
    if _options["store"] is not None:
        config = merge_config(config, {"store": {"path": _options["store"]}})
    setup_logging("DEBUG" if _options["verbose"] else config.logging.level)
    return config


@contextmanager
def open_session(config_path: Path | None) -> Iterator[EditSession]:
    """설정 파일 기준으로 저장소/카탈로그/백엔드를 묶은 편집 세션"""
    config = load_app_config(config_path)

    catalog_result = load_catalog(config.catalog.path)
    if isinstance(catalog_result, Failure):
        fail(catalog_result.error)

    collection = ConfigurationCollection.load(JsonFileStore(config.store.path))
    notifier = ConsoleNotifier(console)
    backend = HttpBackendSync(config.backend, notifier)

    try:
        yield EditSession(collection, catalog_result.value, backend, notifier)
    except ConfigIndexError as e:
        fail(e.error)
    finally:
        backend.close()
