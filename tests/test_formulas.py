import pytest

from sheetcore.coords import get_coords_from_cell_id
from sheetcore.formulas import (
    RawFormula,
    SharedFormula,
    formula_for_cell,
    shift_cell,
)


def test_shared_formulas_follow_anchor():
    shared: dict[int, SharedFormula] = {}
    first = formula_for_cell(
        "A2", RawFormula(content="2*A1", t="shared", ref="A2:C2", si=0), shared
    )
    assert first == "2*A1"
    assert shared[0] == SharedFormula(0, 1, "2*A1")
    assert formula_for_cell("B2", RawFormula(t="shared", si=0), shared) == "2*B1"
    assert formula_for_cell("C2", RawFormula(t="shared", si=0), shared) == "2*C1"


FORMULAS = [
    "A1",
    "$A1",
    "A$1",
    "$A$1",
    "A1+B1",
    "$A1+B1",
    "$A$1+B1",
    "A1+$B1",
    "A1+B$1",
    "A1+$B$1",
    "$A$1+$B$1",
    'IF(C23>=E$12,"Q4",IF(C23>=$D$12,"Q3",IF(C23>=C$12,"Q2","Q1")))',
    "SUM(D44:H44)*IM_A_DEFINED_NAME",
    "IM_A_DEFINED_NAME+SUM(D44:H44)*IM_A_DEFINED_NAME_ALSO",
    "SUM(D44:H44)*IM_A_DEFINED_NAME+A1",
    "AA1",
    "$AA1",
    "AA$1",
    "$AA$1",
]

EXPECTED = [
    "B2",
    "$A2",
    "B$1",
    "$A$1",
    "B2+C2",
    "$A2+C2",
    "$A$1+C2",
    "B2+$B2",
    "B2+C$1",
    "B2+$B$1",
    "$A$1+$B$1",
    'IF(D24>=F$12,"Q4",IF(D24>=$D$12,"Q3",IF(D24>=D$12,"Q2","Q1")))',
    "SUM(E45:I45)*IM_A_DEFINED_NAME",
    "IM_A_DEFINED_NAME+SUM(E45:I45)*IM_A_DEFINED_NAME_ALSO",
    "SUM(E45:I45)*IM_A_DEFINED_NAME+B2",
    "AB2",
    "$AA2",
    "AB$1",
    "$AA$1",
]


@pytest.fixture
def anchored_formulas():
    x, y = get_coords_from_cell_id("C4")
    return {i: SharedFormula(x, y, text) for i, text in enumerate(FORMULAS)}


@pytest.mark.parametrize("index", range(len(FORMULAS)))
def test_shared_formulas_with_absolute_references(anchored_formulas, index):
    cell_formula = RawFormula(content=FORMULAS[index], t="shared", si=index)
    assert formula_for_cell("D5", cell_formula, anchored_formulas) == EXPECTED[index]


def test_formula_for_cell_without_formula():
    assert formula_for_cell("A1", None, {}) == ""


def test_plain_formula_is_trimmed():
    assert formula_for_cell("E1", RawFormula(content="  10+20\n"), {}) == "10+20"


def test_shared_formula_with_bad_reference_keeps_content():
    shared: dict[int, SharedFormula] = {}
    result = formula_for_cell("", RawFormula(content="A1*2", t="shared", si=3), shared)
    assert result == "A1*2"
    assert shared == {}


def test_shift_cell_relative():
    assert shift_cell("A1", 1, 1) == "B2"


def test_shift_cell_fixed_column_and_row():
    assert shift_cell("$A1", 2, 3) == "$A4"
    assert shift_cell("A$1", 2, 3) == "C$1"
    assert shift_cell("$A$1", 2, 3) == "$A$1"


def test_shift_cell_zero_offset_is_identity():
    for ref in ["A1", "Z9", "AA10", "$B$7", "C$3", "$D4"]:
        assert shift_cell(ref, 0, 0) == ref