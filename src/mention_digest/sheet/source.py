"""
スプレッドシート読み込みモジュール

シート単位で行データを取得する。ローカルでは CSV ファイルをシートとして扱う。
"""

import csv
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

Cell = str | int | float
Row = list[Cell]


class SheetError(Exception):
    """シート読み込みエラー"""
    pass


class Sheet(Protocol):
    """シート"""

    name: str

    def last_row(self) -> int:
        """データが入っている最終行（ヘッダー行を含む、1始まり）"""
        ...

    def data_rows(self) -> list[Row]:
        """ヘッダー行を除いた全行"""
        ...


class Workbook(Protocol):
    """スプレッドシート"""

    def get_sheet(self, name: str) -> Sheet | None: ...


def coerce_cell(value: str) -> Cell:
    """CSVの文字列を数値に変換できる場合は変換する"""
    text = value.strip()
    if not text:
        return value
    try:
        return int(text.replace(",", "")) if "." not in text else float(text.replace(",", ""))
    except ValueError:
        return value


class MemorySheet:
    """メモリ上のシート"""

    def __init__(self, name: str, rows: Sequence[Sequence[Cell]]):
        self.name = name
        self._rows = [list(row) for row in rows]

    def last_row(self) -> int:
        return len(self._rows)

    def data_rows(self) -> list[Row]:
        return [list(row) for row in self._rows[1:]]


class InMemoryWorkbook:
    """メモリ上のスプレッドシート"""

    def __init__(self, sheets: dict[str, Sequence[Sequence[Cell]]] | None = None):
        self._sheets = {name: MemorySheet(name, rows) for name, rows in (sheets or {}).items()}

    def get_sheet(self, name: str) -> MemorySheet | None:
        return self._sheets.get(name)


class CsvWorkbook:
    """
    CSVファイルのディレクトリをスプレッドシートとして扱う

    シート "Sheet1" は <directory>/Sheet1.csv に対応する。
    """

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def get_sheet(self, name: str) -> MemorySheet | None:
        path = self.directory / f"{name}.csv"
        if not path.exists():
            return None

        try:
            with open(path, encoding="utf-8-sig", newline="") as f:
                rows = [[coerce_cell(cell) for cell in row] for row in csv.reader(f)]
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise SheetError(f"シートの読み込みに失敗しました: {path}: {e}") from e

        # 末尾の空行は最終行に数えない
        while rows and not any(str(cell).strip() for cell in rows[-1]):
            rows.pop()

        logger.debug(f"シート読み込み: {path} ({len(rows)}行)")
        return MemorySheet(name, rows)
