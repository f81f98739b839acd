# sheetcore

Building blocks for reading and writing spreadsheet workbooks (the zipped
XML format used by modern office suites). There are no dependencies outside
the standard library.

## What it covers

- **Cell coordinates** (`sheetcore.coords`): convert between references such
  as `"B3"` and zero-based `(x, y)` pairs (`get_coords_from_cell_id`,
  `get_cell_id_from_coords`, `get_cell_id_from_coords_with_fixed`), between
  column letters and indexes (`col_letters_to_index`, `col_index_to_letters`),
  and read ranges such as `"1:3"` (`get_range_from_string`) and dimensions
  such as `"A1:B2"` (`get_max_min_from_dimension_ref`). Malformed input raises
  `ValueError`.
- **Shared strings** (`sheetcore.reftable`): the `RefTable` class keeps the
  shared-string table of a workbook. In write mode (`is_write=True`) a string
  already present is not stored twice. `to_xml()` writes the table as a
  shared-strings XML document, and `make_shared_string_ref_table` builds a
  table from plain strings or lists of rich-text runs.
- **Shared formulas** (`sheetcore.formulas`): `formula_for_cell` records a
  shared formula at its anchor cell and expands it for each other cell that
  uses it, shifting relative references; `shift_cell` moves one reference and
  leaves `$` absolute parts where they are. Text inside string literals is not
  touched.
- **HSL colours** (`sheetcore.hsl`): `rgb_to_hsl` and `hsl_to_rgb` convert
  between 8-bit RGB and HSL; the `HSL` dataclass gives 16-bit components with
  `rgba()`, and `hsl_model` converts other colours to `HSL`.
- **Workbook relationships** (`sheetcore.rels`): `make_workbook_rels_xml`
  writes the workbook relationships part (the worksheets followed by the
  shared strings, theme and styles parts), `parse_workbook_rels` maps
  relationship ids to worksheet names, and `truncate_sheet_xml` cuts a
  worksheet's XML down to its first rows. Unreadable XML raises `ReaderError`.
- **Number formats** (`sheetcore.numfmt_parse`, `sheetcore.numfmt`):
  `parse_full_number_format_string` splits a format code into its positive,
  negative, zero and text sections; `format_value` applies a code to a cell
  value of a given `CellType`. Dates and times, percentages, currency
  annotations, quoted and escaped literals, and the common fixed and
  scientific number formats are handled. `general_numeric_scientific` renders
  numbers as the "general" format does, and `excel_time_to_datetime` turns a
  serial day number into a `datetime` in the 1900 or 1904 date system.

## Installation

```
pip install .
```

## Examples

```python
from sheetcore.coords import get_coords_from_cell_id, get_cell_id_from_coords

get_coords_from_cell_id("A3")      # (0, 2)
get_cell_id_from_coords(2, 2)      # "C3"
```

```python
from sheetcore.reftable import RefTable

table = RefTable(is_write=True)
table.add_string("Foo")            # 0
table.add_string("Foo")            # 0, already in the table
table.resolve_shared_string(0)     # "Foo"
```

```python
from sheetcore.numfmt import CellType, format_value

format_value("[$$-409]0", "18.989999999999998", CellType.NUMERIC, False)  # "$19"
format_value("0;(0)", "-1", CellType.NUMERIC, False)                      # "(1)"
```

When a value cannot be shown with its format, `format_value` raises
`ValueError` (or its subclass `NumberFormatError`) rather than returning a
result. A number format that is recognised but not supported gives back the
value unchanged.

## What it does not do

This package works on the individual parts of a workbook. It does not open or
save whole workbook files, unpack the zip container, or read worksheets into
rows and cells; those steps are left to the code that uses it. Number formats
are applied only for the common codes listed above, and thousands separators
are not inserted.

## Running the tests

```
pip install .[test]
pytest
```