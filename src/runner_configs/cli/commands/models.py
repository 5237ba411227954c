"""모델 카탈로그 커맨드"""
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from runner_configs.core import Failure, load_catalog
from runner_configs.cli.context import console, fail, load_app_config

app = typer.Typer(help="모델 카탈로그")


@app.command("list")
def list_models(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="YAML 설정 파일 경로",
    ),
) -> None:
    """카탈로그 모델 목록 출력"""
    config = load_app_config(config_path)
    result = load_catalog(config.catalog.path)
    if isinstance(result, Failure):
        fail(result.error)

    catalog = result.value
    if not len(catalog):
        console.print("[dim]No model catalog configured (catalog.path)[/dim]")
        return

    table = Table(title="Model Catalog")
    table.add_column("모델", style="cyan")
    table.add_column("실행 가능", style="green")
    table.add_column("토크나이저", style="yellow")

    for source in catalog:
        table.add_row(
            source.name,
            "yes" if source.is_complete else "no",
            source.custom_tokenizer or "-",
        )

    console.print(table)
