"""Runner Configs CLI 메인 엔트리"""
from pathlib import Path
from typing import Optional

import typer
from runner_configs.cli.context import console, set_options
from runner_configs.cli.commands import configs, models, devices

app = typer.Typer(
    name="runner-configs",
    help="Runner Configs - 로컬 추론 백엔드 실행 설정 관리",
    add_completion=False,
)

# 서브커맨드 등록
app.add_typer(configs.app, name="configs")
app.add_typer(models.app, name="models")
app.add_typer(devices.app, name="devices")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="디버그 로그 출력"),
    store: Optional[Path] = typer.Option(None, "--store", "-s", help="설정 저장 파일 경로 (설정 파일보다 우선)"),
) -> None:
    """Runner Configs CLI"""
    set_options(verbose=verbose, store=store)


@app.command()
def version() -> None:
    """버전 정보 출력"""
    from runner_configs import __version__
    console.print(f"[bold blue]runner-configs[/bold blue] version [green]{__version__}[/green]")


def cli() -> None:
    """CLI 진입점"""
    app()


if __name__ == "__main__":
    cli()
