"""
# Conlang-Markdown: tables.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Table layout.

A cell with `rows=«r», cols=«c»` covers «r» rows by «c» columns from its position.
In later rows, each covered position must be filled by a blank placeholder cell,
which is consumed without output; content there is ignored with a warning.
"""

from typing import Callable, NamedTuple, Optional

from conlangmd.blocks import Table, TableCell, TableColumn, TableRow
from conlangmd.exceptions import ConlangMarkdownWarning, SpanOverlapContentIgnoredWarning
from conlangmd.utilities import merge_class_names


class CoverageGrid:
    """
    Positions (row index, column index) covered by cells placed so far.
    """
    _covered_positions: set[tuple[int, int]]

    def __init__(self):
        self._covered_positions = set()

    def is_covered(self, row_index: int, column_index: int) -> bool:
        return (row_index, column_index) in self._covered_positions

    def count_free_columns(self, row_index: int, column_index: int, column_span: int) -> int:
        """
        Count the uncovered columns from a position, up to `column_span`.
        """
        free_column_count = 0
        while free_column_count < column_span:
            if self.is_covered(row_index, column_index + free_column_count):
                break
            free_column_count += 1

        return free_column_count

    def cover(self, row_index: int, column_index: int, row_span: int, column_span: int):
        for covered_row_index in range(row_index, row_index + row_span):
            for covered_column_index in range(column_index, column_index + column_span):
                self._covered_positions.add((covered_row_index, covered_column_index))


class PlacedCell(NamedTuple):
    cell: TableCell
    column_index: int
    row_span: int
    column_span: int
    is_header: bool
    scope: Optional[str]
    class_names: tuple[str, ...]


class LaidOutRow(NamedTuple):
    row: TableRow
    placed_cells: list[PlacedCell]


def place_cell(cell: TableCell, row: TableRow, column: Optional[TableColumn],
               column_index: int, column_span: int) -> PlacedCell:
    """
    Place a cell, applying row and column parameters.

    Column parameters apply only to cells spanning a single column.
    Row classes apply to the row, and also to cells spanning more than one row.
    A header row gives `th scope="col"` (`colgroup` if spanning columns);
    a header column gives `th scope="row"` (`rowgroup` if spanning rows).
    """
    row_span = cell.row_span

    if column_span > 1:
        column = None

    is_column_header = column is not None and column.is_header

    if row.is_header:
        scope = 'colgroup' if column_span > 1 else 'col'
    elif is_column_header:
        scope = 'rowgroup' if row_span > 1 else 'row'
    else:
        scope = None

    column_class_names = column.class_names if column is not None else ()
    row_class_names = row.class_names if row_span > 1 else ()
    class_names = merge_class_names(column_class_names, row_class_names, cell.class_names)

    return PlacedCell(
        cell=cell,
        column_index=column_index,
        row_span=row_span,
        column_span=column_span,
        is_header=scope is not None,
        scope=scope,
        class_names=tuple(class_names),
    )


def layout_table(table: Table, record_warning: Callable[[ConlangMarkdownWarning], None]) -> list[LaidOutRow]:
    """
    Lay out the cells of a table on a coverage grid.

    A column span overlapping a span from an earlier row is truncated, with a warning.
    """
    grid = CoverageGrid()
    columns = table.columns
    laid_out_rows = []

    for row_index, row in enumerate(table.rows):
        placed_cells = []
        column_index = 0

        for cell in row.cells:
            if grid.is_covered(row_index, column_index):
                if not cell.is_blank:
                    record_warning(
                        SpanOverlapContentIgnoredWarning(
                            f'content of cell in column {column_index + 1} ignored '
                            '(position covered by a spanning cell)',
                            cell.line_number,
                        )
                    )
                column_index += 1
                continue

            column_span = grid.count_free_columns(row_index, column_index, cell.column_span)
            if column_span < cell.column_span:
                record_warning(
                    SpanOverlapContentIgnoredWarning(
                        f'column span of cell in column {column_index + 1} truncated '
                        f'from {cell.column_span} to {column_span} (overlaps a spanning cell)',
                        cell.line_number,
                    )
                )

            column = columns[column_index] if column_index < len(columns) else None
            placed_cells.append(place_cell(cell, row, column, column_index, column_span))
            grid.cover(row_index, column_index, cell.row_span, column_span)
            column_index += column_span

        laid_out_rows.append(LaidOutRow(row, placed_cells))

    return laid_out_rows
