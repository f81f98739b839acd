"""Resolution of cell formulas, including shared formulas that shift references."""

from __future__ import annotations

from dataclasses import dataclass

from .coords import (
    FIXED_REF_CHAR,
    digits_only,
    get_cell_id_from_coords,
    get_coords_from_cell_id,
    letters_only,
)

_WHITESPACE = " \t\n\r"


@dataclass(frozen=True)
class SharedFormula:
    """The anchor cell and text of a shared formula."""

    x: int
    y: int
    formula: str


@dataclass(frozen=True)
class RawFormula:
    """A formula element as stored in a worksheet cell."""

    content: str = ""
    t: str = ""
    ref: str = ""
    si: int = 0


def _is_upper(char: str) -> bool:
    return "A" <= char <= "Z"


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def shift_cell(cell_id: str, dx: int, dy: int) -> str:
    """Move a cell reference by ``dx`` columns and ``dy`` rows.

    Parts marked as absolute with ``$`` are left where they are and keep
    their marker.
    """
    try:
        fx, fy = get_coords_from_cell_id(cell_id)
    except ValueError:
        fx, fy = 0, 0

    fixed_col = cell_id.find(FIXED_REF_CHAR) == 0
    fixed_row = cell_id.rfind(FIXED_REF_CHAR) > 0

    if not fixed_col:
        fx += dx
    if not fixed_row:
        fy += dy

    shifted = get_cell_id_from_coords(fx, fy)
    if not fixed_col and not fixed_row:
        return shifted

    column = letters_only(shifted)
    row = digits_only(shifted)
    return (
        (FIXED_REF_CHAR if fixed_col else "")
        + column
        + (FIXED_REF_CHAR if fixed_row else "")
        + row
    )


def _shift_formula(text: str, dx: int, dy: int) -> str:
    """Shift every cell reference outside string literals in ``text``."""
    pieces: list[str] = []
    size = len(text)
    start = 0
    end = 0
    in_literal = False
    while end < size:
        char = text[end]
        if char == '"':
            in_literal = not in_literal
        if in_literal:
            end += 1
            continue
        if _is_upper(char) or char == FIXED_REF_CHAR:
            pieces.append(text[start:end])
            start = end
            end += 1
            found_number = False
            while end < size:
                following = text[end]
                if _is_digit(following) or following == FIXED_REF_CHAR:
                    found_number = True
                elif _is_upper(following):
                    if found_number:
                        break
                else:
                    break
                end += 1
            if found_number:
                pieces.append(shift_cell(text[start:end], dx, dy))
                start = end
        end += 1
    if start < size:
        pieces.append(text[start:])
    return "".join(pieces)


def formula_for_cell(
    cell_ref: str,
    formula: RawFormula | None,
    shared_formulas: dict[int, SharedFormula],
) -> str:
    """Return the formula text for the cell at ``cell_ref``.

    A shared formula that carries a ``ref`` is recorded in
    ``shared_formulas`` under its index; later cells using the same index
    get the recorded formula with its references shifted to their position.
    """
    if formula is None:
        return ""
    if formula.t != "shared":
        return formula.content.strip(_WHITESPACE)

    try:
        x, y = get_coords_from_cell_id(cell_ref)
    except ValueError:
        return formula.content.strip(_WHITESPACE)

    if formula.ref:
        shared_formulas[formula.si] = SharedFormula(x, y, formula.content)
        return formula.content.strip(_WHITESPACE)

    anchor = shared_formulas.get(formula.si, SharedFormula(0, 0, ""))
    result = _shift_formula(anchor.formula, x - anchor.x, y - anchor.y)
    return result.strip(_WHITESPACE)