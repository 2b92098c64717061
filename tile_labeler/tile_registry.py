#!/usr/bin/env python3
"""
Tile label registry
Maps user-assigned labels to tile grid coordinates and round-trips the
mapping through the single-line config text format:

    label:row_col,label:row_col,...

Invariants:
    - labels are unique (dict keys)
    - at most one label occupies a coordinate; assign clears the
      coordinate before inserting

No operation here raises. Malformed config tokens degrade to coordinate 0.
"""

from typing import Iterator, NamedTuple, Optional

from .constants import (COORD_SEPARATOR, ENTRY_SEPARATOR, FIELD_SEPARATOR,
                        IGNORED_TOKEN_LENGTH, LABEL_FORMAT)
from .logging_config import get_logger

logger = get_logger("registry")


class GridCoord(NamedTuple):
    """(row, col) of an 8x8 cell in a tile sheet"""

    row: int
    col: int


def format_label(cursor: int, prefix: str = "") -> str:
    """Build an automatic label from the cursor, e.g. 0 -> '0x00'"""
    return f"{prefix}{cursor:{LABEL_FORMAT}}"


def parse_label_number(label: str, prefix: str = "") -> Optional[int]:
    """Return the hex value of an automatic label, or None for free text"""
    if prefix:
        if not label.startswith(prefix):
            return None
        label = label[len(prefix):]
    if not label.lower().startswith("0x"):
        return None
    try:
        return int(label, 16)
    except ValueError:
        return None


def is_storable_label(label: str) -> bool:
    """True if a label survives export_config/import_config unchanged"""
    return (
        bool(label)
        and label == label.strip()
        and ENTRY_SEPARATOR not in label
        and FIELD_SEPARATOR not in label
    )


def _parse_coordinate_field(text: str, token: str) -> int:
    try:
        value = int(text)
    except ValueError:
        logger.warning(f"Malformed coordinate {text!r} in {token!r}, using 0")
        return 0
    if value < 0:
        logger.warning(f"Negative coordinate {value} in {token!r}, using 0")
        return 0
    return value


class TileRegistry:
    """Ordered label -> GridCoord mapping with one label per cell"""

    def __init__(self):
        self._entries: dict[str, GridCoord] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, label) -> bool:
        return label in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._entries))

    def __eq__(self, other):
        if not isinstance(other, TileRegistry):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self):
        return f"TileRegistry({dict(self.items())!r})"

    def items(self) -> list[tuple[str, GridCoord]]:
        """Snapshot of (label, coord) pairs in label order"""
        return sorted(self._entries.items())

    def lookup(self, label: str) -> Optional[GridCoord]:
        return self._entries.get(label)

    def lookup_by_coord(self, coord) -> Optional[str]:
        """Find the label occupying a coordinate"""
        coord = GridCoord(*coord)
        for label, value in self._entries.items():
            if value == coord:
                return label
        return None

    def assign(self, label: str, coord) -> None:
        """
        Give a cell a label.

        Any label already on the cell is removed first, and a previous use
        of the same label elsewhere is overwritten (last write wins).
        Surrounding whitespace is stripped, as import_config does.
        """
        label = label.strip()
        coord = GridCoord(*coord)
        self.clear(coord)
        previous = self._entries.get(label)
        if previous is not None:
            logger.debug(f"Moving {label} from {previous} to {coord}")
        self._entries[label] = coord
        logger.debug(f"Assigned {label} -> {coord}")

    def clear(self, coord) -> Optional[str]:
        """Remove the label on a cell; returns it, or None if the cell was empty"""
        label = self.lookup_by_coord(coord)
        if label is not None:
            del self._entries[label]
            logger.debug(f"Cleared {label} from {tuple(coord)}")
        return label

    def reset(self) -> None:
        """Drop every entry (a new image invalidates all labels)"""
        self._entries.clear()

    def export_config(self) -> str:
        """Serialize to 'label:row_col' entries joined by commas, in label order"""
        return ENTRY_SEPARATOR.join(
            f"{label}{FIELD_SEPARATOR}{coord.row}{COORD_SEPARATOR}{coord.col}"
            for label, coord in self.items()
        )

    def import_config(self, text: str) -> int:
        """
        Assign every entry of a config line.

        Tokens of three characters or fewer are skipped, which also absorbs
        empty tokens from a stray leading or trailing separator. Coordinates
        that fail to parse become 0.

        Args:
            text: Config text as produced by export_config

        Returns:
            Number of entries assigned
        """
        assigned = 0
        for token in text.split(ENTRY_SEPARATOR):
            token = token.strip()
            if len(token) <= IGNORED_TOKEN_LENGTH:
                continue

            label, _, position = token.partition(FIELD_SEPARATOR)
            if not label.strip():
                logger.warning(f"Skipping config token without a label: {token!r}")
                continue

            row_text, _, col_text = position.partition(COORD_SEPARATOR)
            row = _parse_coordinate_field(row_text, token)
            col = _parse_coordinate_field(col_text, token)

            self.assign(label, GridCoord(row, col))
            assigned += 1

        logger.info(f"Imported {assigned} labels")
        return assigned

    def _plan_shift(self, cursor: int, delta: int, before: bool,
                    prefix: str) -> list[tuple[str, str, GridCoord]]:
        moves = []
        for label, coord in self.items():
            value = parse_label_number(label, prefix)
            if value is None:
                continue
            if (value < cursor) != before:
                continue
            if value + delta < 0:
                continue
            moves.append((label, format_label(value + delta, prefix), coord))
        return moves

    def shift_conflicts(self, cursor: int, delta: int, before: bool = False,
                        prefix: str = "") -> list[str]:
        """Unshifted labels that a shift with these arguments would overwrite"""
        moves = self._plan_shift(cursor, delta, before, prefix)
        moved = {label for label, _, _ in moves}
        return sorted(
            new_label for _, new_label, _ in moves
            if new_label in self._entries and new_label not in moved
        )

    def shift_labels(self, cursor: int, delta: int, before: bool = False,
                     prefix: str = "") -> int:
        """
        Renumber automatic labels relative to the cursor.

        Labels whose hex value is >= cursor (or < cursor when ``before`` is
        set) move by ``delta``. Free-text labels are left alone, as are
        labels that would drop below zero. If any renamed label would land
        on an unshifted label, nothing moves.

        Returns:
            Number of renamed entries
        """
        conflicts = self.shift_conflicts(cursor, delta, before, prefix)
        if conflicts:
            logger.warning(f"Shift by {delta} would overwrite {', '.join(conflicts)}")
            return 0

        moves = self._plan_shift(cursor, delta, before, prefix)
        for label, _, _ in moves:
            del self._entries[label]
        for _, new_label, coord in moves:
            self.assign(new_label, coord)

        logger.debug(f"Shifted {len(moves)} labels by {delta}")
        return len(moves)
