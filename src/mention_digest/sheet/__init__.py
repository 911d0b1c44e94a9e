"""
スプレッドシート（Sheet）モジュール
"""

from mention_digest.sheet.source import (
    CsvWorkbook,
    InMemoryWorkbook,
    MemorySheet,
    Sheet,
    SheetError,
    Workbook,
    coerce_cell,
)

__all__ = [
    "Sheet",
    "Workbook",
    "SheetError",
    "MemorySheet",
    "InMemoryWorkbook",
    "CsvWorkbook",
    "coerce_cell",
]
