"""운영자 알림 (짧은 일회성 메시지)"""
from typing import Protocol
from rich.console import Console


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class ConsoleNotifier:
    """Rich 콘솔 알림"""

    def __init__(self, console: Console | None = None):
        self._console = console or Console()

    def success(self, message: str) -> None:
        self._console.print(f"[bold green]✓ {message}[/bold green]")

    def warning(self, message: str) -> None:
        self._console.print(f"[bold yellow]! {message}[/bold yellow]")

    def error(self, message: str) -> None:
        self._console.print(f"[bold red]✗ {message}[/bold red]")
