#!filepath: progress_logger/cli.py
from enum import Enum
from typing import Optional

import typer
from rich import print

from progress_logger import __version__
from progress_logger.config.app_config import AppConfig
from progress_logger.observability.progress import ProgressLogger
from progress_logger.utils.logger import init_logging, logs

app = typer.Typer(help="progress_logger demo CLI")


class Mode(str, Enum):
    light = "light"
    full = "full"
    up = "up"
    all = "all"


@app.command()
def version():
    print(__version__)


@app.command()
def demo(
    n: int = typer.Argument(..., min=0, help="number of updates"),
    frequency: float = typer.Option(1.0, help="seconds between progress lines"),
    items: str = typer.Option("nodes", help="item name"),
    mode: Mode = typer.Option(Mode.all, help="update path to exercise"),
    config: Optional[str] = typer.Option(None, help="YAML config path"),
):
    """
    对 n 次计数分别跑 update_light / update / up 三种路径
    """
    init_logging(AppConfig.load(config).log)

    modes = [Mode.light, Mode.full, Mode.up] if mode is Mode.all else [mode]
    for m in modes:
        print(f"[green]{m.value} updates[/green]")
        _run(m, n, frequency, items)


@logs.catch("demo run failed")
def _run(mode: Mode, n: int, frequency: float, items: str) -> None:
    pl = (
        ProgressLogger.builder()
        .with_expected_updates(n)
        .with_frequency(frequency)
        .with_items_name(items)
        .start()
    )
    for _ in range(n):
        if mode is Mode.light:
            pl.update_light(1)
        elif mode is Mode.full:
            pl.update(1)
        else:
            pl.up()
    pl.stop()


if __name__ == "__main__":
    app()

# python -m progress_logger.cli demo 10000000 --frequency 1
