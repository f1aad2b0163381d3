"""Shared fixtures: templates and spreadsheets are built at test time."""

import io
from pathlib import Path
from typing import Sequence, Tuple

import pandas as pd
import pytest
from PIL import Image

from certbatch.models import FontSettings, NameEntry, Position
from certbatch.template import decode_template


def make_image_bytes(
    width: int = 120,
    height: int = 80,
    color: Tuple[int, int, int] = (255, 255, 255),
    fmt: str = "PNG",
) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buf, fmt)
    return buf.getvalue()


def write_sheet(path: Path, rows: Sequence[Sequence[object]]) -> Path:
    """Write rows to an .xlsx file without a header row."""
    pd.DataFrame(list(rows), dtype=object).to_excel(path, header=False, index=False)
    return path


@pytest.fixture
def template_bytes() -> bytes:
    return make_image_bytes()


@pytest.fixture
def template(template_bytes):
    return decode_template(template_bytes)


@pytest.fixture
def font() -> FontSettings:
    return FontSettings(family="DejaVuSans", size=24, color="#000000")


@pytest.fixture
def position() -> Position:
    return Position(60, 40)


@pytest.fixture
def names():
    return [NameEntry("Bob", 1), NameEntry("Alice", 2), NameEntry("Carol", 3)]


@pytest.fixture
def names_file(tmp_path) -> Path:
    return write_sheet(tmp_path / "names.xlsx", [["Alice"], ["Bob"], ["Carol"]])
