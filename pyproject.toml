[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sheetcore"
version = "0.1.0"
description = "Core helpers for spreadsheet workbooks: cell coordinates, shared strings, shared formulas, HSL colours, workbook relationships and number formats"
requires-python = ">=3.10"
dependencies = []
keywords = ["xlsx", "spreadsheet", "number-format", "excel", "office-open-xml"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Spreadsheet",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sheetcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
