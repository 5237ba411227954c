"""실행 설정 관리 커맨드"""
from pathlib import Path
from typing import Any, Optional

import typer
from rich.table import Table

from runner_configs.core import (
    Failure, ModelConfig,
    fields_visible, conversion_kind, derive_strategy, validate_model_parameters,
    error_to_dict,
)
from runner_configs.cli.context import console, fail, open_session

app = typer.Typer(help="실행 설정 관리")

ConfigOption = typer.Option(
    None,
    "--config", "-c",
    help="YAML 설정 파일 경로",
)


def _print_problems(config: ModelConfig) -> None:
    """잘못된 필드 조합 경고 (자동 보정하지 않음)"""
    result = validate_model_parameters(config.model_parameters)
    if isinstance(result, Failure):
        console.print(f"[bold yellow]Warning: {error_to_dict(result.error)['message']}[/bold yellow]")


@app.command("list")
def list_configs(
    config_path: Optional[Path] = ConfigOption,
) -> None:
    """설정 목록 출력"""
    with open_session(config_path) as session:
        table = Table(title="Run Configs")
        table.add_column("#", style="dim")
        table.add_column("이름", style="cyan")
        table.add_column("모델", style="green")
        table.add_column("디바이스", style="yellow")
        table.add_column("정밀도", style="magenta")

        current = session.collection.current_index
        for index, config in enumerate(session.collection):
            params = config.model_parameters
            marker = "*" if index == current else ""
            model = params.model_name
            if session.catalog.is_complete(model):
                model = f"{model} ●"
            table.add_row(f"{index}{marker}", config.name, model, params.device, params.precision)

        console.print(table)


@app.command("show")
def show_config(
    index: Optional[int] = typer.Argument(None, help="설정 인덱스 (기본: 현재 설정)"),
    config_path: Optional[Path] = ConfigOption,
) -> None:
    """설정 상세 출력 (디바이스에서 보이는 필드만)"""
    with open_session(config_path) as session:
        if index is None:
            index = session.collection.current_index
        config = session.collection.get(index)
        api = config.api_parameters
        params = config.model_parameters
        visible = fields_visible(params.device)

        table = Table(title=f"[{index}] {config.name}")
        table.add_column("항목", style="cyan")
        table.add_column("값", style="green")

        table.add_row("API Port", str(api.api_port))
        table.add_row("Max Response Token", str(api.max_response_token))
        table.add_row("Temperature", str(api.temperature))
        table.add_row("Top_P", str(api.top_p))
        table.add_row("Presence Penalty", str(api.presence_penalty))
        table.add_row("Frequency Penalty", str(api.frequency_penalty))
        table.add_row("Model", params.model_name)
        table.add_row("Device", params.device)
        if "precision" in visible:
            table.add_row("Precision", params.precision)
        if "currentStrategy" in visible:
            table.add_row("Current Strategy", derive_strategy(params))
        if "storedLayers" in visible:
            table.add_row("Stored Layers", f"{params.stored_layers}/{params.max_stored_layers}")
        if "customStrategy" in visible:
            table.add_row("Strategy", params.custom_strategy)
        if "useCustomCuda" in visible:
            table.add_row("Custom CUDA Kernel", str(params.use_custom_cuda))
        if "advanced" in visible:
            tokenizer = params.custom_tokenizer if params.use_custom_tokenizer else "-"
            table.add_row("Custom Tokenizer", tokenizer)
        if "enableWebUI" in visible:
            table.add_row("Enable WebUI", str(config.enable_web_ui))
        table.add_row("Conversion", conversion_kind(params.device))

        console.print(table)
        _print_problems(config)


@app.command("new")
def new_config(
    config_path: Optional[Path] = ConfigOption,
) -> None:
    """기본 템플릿으로 새 설정 추가"""
    with open_session(config_path) as session:
        index = session.create()
        console.print(f"[bold green]✓ Created config [{index}] {session.draft.name}[/bold green]")


@app.command("delete")
def delete_config(
    index: Optional[int] = typer.Argument(None, help="설정 인덱스 (기본: 현재 설정)"),
    config_path: Optional[Path] = ConfigOption,
) -> None:
    """설정 삭제 (마지막 설정이면 기본값으로 초기화)"""
    with open_session(config_path) as session:
        if index is not None:
            session.select(index)
        removed = session.draft.name
        selected = session.delete()
        console.print(f"[bold green]✓ Deleted {removed}[/bold green]")
        console.print(f"[dim]Selected [{selected}] {session.draft.name}[/dim]")


@app.command("reset")
def reset_configs(
    yes: bool = typer.Option(False, "--yes", "-y", help="확인 없이 초기화"),
    config_path: Optional[Path] = ConfigOption,
) -> None:
    """모든 설정을 기본값으로 초기화"""
    if not yes:
        typer.confirm("Reset all configs to defaults? This cannot be undone.", abort=True)

    with open_session(config_path) as session:
        session.reset_all()
        console.print("[bold green]✓ Configs reset to defaults[/bold green]")


@app.command("select")
def select_config(
    index: int = typer.Argument(..., help="설정 인덱스"),
    config_path: Optional[Path] = ConfigOption,
) -> None:
    """현재 설정 변경"""
    with open_session(config_path) as session:
        config = session.select(index)
        console.print(f"[bold green]✓ Selected [{index}] {config.name}[/bold green]")


@app.command("edit")
def edit_config(
    index: int = typer.Argument(..., help="설정 인덱스"),
    name: Optional[str] = typer.Option(None, "--name", help="설정 이름"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="API 포트"),
    max_tokens: Optional[int] = typer.Option(None, "--max-tokens", help="최대 응답 토큰"),
    temperature: Optional[float] = typer.Option(None, "--temperature", help="샘플링 온도"),
    top_p: Optional[float] = typer.Option(None, "--top-p", help="Top-P"),
    presence_penalty: Optional[float] = typer.Option(None, "--presence-penalty"),
    frequency_penalty: Optional[float] = typer.Option(None, "--frequency-penalty"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="모델 이름"),
    device: Optional[str] = typer.Option(None, "--device", "-d", help="디바이스"),
    precision: Optional[str] = typer.Option(None, "--precision", help="정밀도"),
    stored_layers: Optional[int] = typer.Option(None, "--stored-layers", help="GPU에 올릴 레이어 수"),
    custom_strategy: Optional[str] = typer.Option(None, "--custom-strategy", help="사용자 전략 (Custom)"),
    custom_cuda: Optional[bool] = typer.Option(None, "--custom-cuda/--no-custom-cuda"),
    tokenizer: Optional[str] = typer.Option(None, "--tokenizer", help="사용자 토크나이저 경로"),
    web_ui: Optional[bool] = typer.Option(None, "--web-ui/--no-web-ui"),
    config_path: Optional[Path] = ConfigOption,
) -> None:
    """설정 편집 후 저장 (핫 리로드 파라미터는 실행 중인 백엔드에 반영)"""
    api_edits = _present(
        api_port=port,
        max_response_token=max_tokens,
        temperature=temperature,
        top_p=top_p,
        presence_penalty=presence_penalty,
        frequency_penalty=frequency_penalty,
    )
    model_edits = _present(
        model_name=model,
        device=device,
        precision=precision,
        stored_layers=stored_layers,
        custom_strategy=custom_strategy,
        use_custom_cuda=custom_cuda,
    )
    if tokenizer is not None:
        model_edits.update(use_custom_tokenizer=True, custom_tokenizer=tokenizer)

    with open_session(config_path) as session:
        session.select(index)
        if name is not None:
            session.edit_name(name)
        if web_ui is not None:
            session.edit_enable_web_ui(web_ui)
        if api_edits:
            result = session.edit_api_params(**api_edits)
            if isinstance(result, Failure):
                fail(result.error)
        if model_edits:
            result = session.edit_model_params(**model_edits)
            if isinstance(result, Failure):
                fail(result.error)

        session.save()
        _print_problems(session.draft)
        strategy = session.strategy()
        if strategy is not None:
            console.print(f"[dim]Strategy: {strategy}[/dim]")


@app.command("strategy")
def show_strategy(
    index: Optional[int] = typer.Argument(None, help="설정 인덱스 (기본: 현재 설정)"),
    config_path: Optional[Path] = ConfigOption,
) -> None:
    """전략 문자열 출력"""
    with open_session(config_path) as session:
        if index is None:
            index = session.collection.current_index
        params = session.collection.get(index).model_parameters
        if "currentStrategy" not in fields_visible(params.device) and params.device != "Custom":
            console.print(f"[dim]No strategy shown for device {params.device}[/dim]")
            return
        console.print(derive_strategy(params))


def _present(**values: Any) -> dict[str, Any]:
    """지정된 옵션만 추림"""
    return {k: v for k, v in values.items() if v is not None}
