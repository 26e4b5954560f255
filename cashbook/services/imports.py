"""Bulk import of transactions from CSV files.

The file is read row by row with the standard ``csv`` reader. Rows are
validated as they stream past and buffered in memory; the store is touched
only once the whole file has been consumed:

1. one query for the categories already known by title,
2. one flush creating the missing categories,
3. one flush creating every transaction.

All three happen in the same unit of work. The source file is removed only
after that unit of work commits, and a failed removal does not turn a
committed import into an error.

Imports skip the balance check that single transactions go through.
"""
from __future__ import annotations

import csv
import logging
import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterator

from sqlalchemy.orm import Session, sessionmaker

from ..config import CSV_IMPORT_DELIMITER, CSV_IMPORT_ENCODING, CSV_IMPORT_FROM_LINE
from ..database import SessionLocal, session_scope
from ..errors import CategoryResolutionError, InvalidImportFileError
from ..models import CENTS, MAX_VALUE, Category, TransactionType
from ..repositories import CategoryRepository, TransactionRepository
from ..schemas import CategoryRead, ImportResult, TransactionRead
from .categories import unique_titles

logger = logging.getLogger(__name__)

CSV_COLUMNS = ("title", "type", "value", "category")


@dataclass(frozen=True)
class CsvTransactionRow:
    """A validated data row awaiting insertion."""

    line_number: int
    title: str
    type: TransactionType
    value: Decimal
    category: str


def parse_row(cells: list[str], line_number: int) -> CsvTransactionRow | None:
    """Turn raw cells into a row, or ``None`` when the row must be skipped.

    A row is skipped when its title, type, value or category is empty, when
    the type is neither income nor outcome, or when the value is not a finite
    decimal between 0 and ``MAX_VALUE``.
    """

    padded = [cell.strip() for cell in cells] + [""] * (len(CSV_COLUMNS) - len(cells))
    title, type_, value, category = padded[: len(CSV_COLUMNS)]

    if not title or not type_ or not value:
        return None
    if not category:
        return None

    try:
        transaction_type = TransactionType(type_)
    except ValueError:
        return None

    try:
        amount = Decimal(value).quantize(CENTS)
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount < 0 or amount > MAX_VALUE:
        return None

    return CsvTransactionRow(
        line_number=line_number,
        title=title,
        type=transaction_type,
        value=amount,
        category=category,
    )


def iter_csv_rows(
    path: Path,
    *,
    from_line: int = CSV_IMPORT_FROM_LINE,
    delimiter: str = CSV_IMPORT_DELIMITER,
    encoding: str = CSV_IMPORT_ENCODING,
) -> Iterator[tuple[int, list[str]]]:
    """Yield ``(line_number, cells)`` for every non-empty row from ``from_line`` on."""

    with path.open("r", encoding=encoding, newline="") as handle:
        reader = csv.reader(handle, delimiter=delimiter)
        for cells in reader:
            # line_num counts physical lines, so quoted newlines are accounted for.
            if reader.line_num < from_line:
                continue
            if not any(cell.strip() for cell in cells):
                continue
            yield reader.line_num, cells


class ImportTransactionsService:
    """Import a CSV file of ``title,type,value,category`` rows."""

    def __init__(
        self,
        session_factory: sessionmaker[Session] = SessionLocal,
        *,
        from_line: int = CSV_IMPORT_FROM_LINE,
        delimiter: str = CSV_IMPORT_DELIMITER,
        encoding: str = CSV_IMPORT_ENCODING,
    ) -> None:
        if from_line < 1:
            raise ValueError("from_line is 1-based and must be at least 1")
        self.session_factory = session_factory
        self.from_line = from_line
        self.delimiter = delimiter
        self.encoding = encoding

    def execute(self, csv_file_path: str | os.PathLike[str]) -> ImportResult:
        path = Path(csv_file_path)
        if not path.is_file():
            raise InvalidImportFileError(f"CSV file not found: {path}")

        pending, skipped = self._read(path)
        category_titles = unique_titles(row.category for row in pending)

        with session_scope(self.session_factory) as session:
            categories = CategoryRepository(session)
            transactions = TransactionRepository(session)

            existing = categories.find_by_titles(category_titles)
            existing_titles = {category.title for category in existing}
            missing_titles = [title for title in category_titles if title not in existing_titles]

            new_categories = categories.create_many(missing_titles)
            categories.save(new_categories)

            pool = new_categories + existing
            created = transactions.create_many(
                {
                    "title": row.title,
                    "type": row.type,
                    "value": row.value,
                    "category": _resolve(pool, row),
                }
                for row in pending
            )
            transactions.save(created)

            result = ImportResult(
                transactions=[TransactionRead.model_validate(item) for item in created],
                created_categories=[
                    CategoryRead.model_validate(category) for category in new_categories
                ],
                skipped_rows=skipped,
            )

        logger.info(
            "Imported %d transactions from %s (%d new categories, %d rows skipped)",
            len(result.transactions),
            path.name,
            len(result.created_categories),
            skipped,
        )

        result.source_removed = self._remove_source(path)
        return result

    def _read(self, path: Path) -> tuple[list[CsvTransactionRow], int]:
        pending: list[CsvTransactionRow] = []
        skipped = 0
        for line_number, cells in iter_csv_rows(
            path, from_line=self.from_line, delimiter=self.delimiter, encoding=self.encoding
        ):
            row = parse_row(cells, line_number)
            if row is None:
                skipped += 1
                logger.debug("Skipping line %d of %s: %r", line_number, path.name, cells)
                continue
            pending.append(row)
        return pending, skipped

    @staticmethod
    def _remove_source(path: Path) -> bool:
        try:
            path.unlink()
        except OSError as exc:
            logger.warning("Imported %s but could not remove it: %s", path, exc)
            return False
        return True


def _resolve(pool: list[Category], row: CsvTransactionRow) -> Category:
    for category in pool:
        if category.title == row.category:
            return category
    raise CategoryResolutionError(
        f"Line {row.line_number}: category {row.category!r} could not be resolved"
    )
