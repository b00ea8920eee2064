"""Rendering of report rows as rich tables."""
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional, Sequence, Union

from pydantic import BaseModel
from rich import box
from rich.console import Console
from rich.table import Table

from .styles import Styles

console = Console()


def _cell(value) -> str:
    if value is None:
        return "-"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _is_numeric(rows: Sequence[BaseModel], name: str) -> bool:
    values = [getattr(row, name) for row in rows]
    return any(isinstance(value, (int, Decimal)) and not isinstance(value, bool) for value in values)


def build_table(
    title: str, rows: Sequence[BaseModel], columns: Optional[Iterable[str]] = None
) -> Table:
    """One column per model field (or per name in `columns`), one line per row."""
    if columns is None:
        columns = list(type(rows[0]).model_fields) if rows else []
    columns = list(columns)

    table = Table(
        title=title,
        title_style=Styles.TITLE,
        border_style=Styles.TABLE_BORDER,
        box=box.ROUNDED,
    )
    for name in columns:
        table.add_column(name, justify="right" if _is_numeric(rows, name) else "left")
    for row in rows:
        table.add_row(*(_cell(getattr(row, name)) for name in columns))
    return table


def print_rows(title: str, rows: Union[BaseModel, Sequence[BaseModel]]) -> None:
    if isinstance(rows, BaseModel):
        rows = [rows]
    if not rows:
        console.print(f"[{Styles.SUBTITLE}]{title}: no rows[/]")
        return
    console.print(build_table(title, rows))
