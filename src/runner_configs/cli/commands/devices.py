"""디바이스 규칙 커맨드"""
import sys

import typer
from rich.table import Table

from runner_configs.core import (
    allowed_precisions, fields_visible, conversion_kind, available_devices,
    PRECISIONS,
)
from runner_configs.cli.context import console

app = typer.Typer(help="디바이스 규칙")


@app.command("list")
def list_devices(
    platform: str = typer.Option(sys.platform, "--platform", help="대상 플랫폼"),
) -> None:
    """디바이스별 정밀도와 노출 필드 출력"""
    table = Table(title=f"Devices ({platform})")
    table.add_column("디바이스", style="cyan")
    table.add_column("정밀도", style="green")
    table.add_column("필드", style="yellow")
    table.add_column("변환", style="magenta")

    for device in available_devices(platform):
        precisions = [p for p in PRECISIONS if p in allowed_precisions(device)]
        table.add_row(
            device,
            ", ".join(precisions) or "-",
            ", ".join(sorted(fields_visible(device))),
            conversion_kind(device),
        )

    console.print(table)
