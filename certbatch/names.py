"""Read the list of recipient names from a spreadsheet."""

import io
import logging
from pathlib import Path
from typing import BinaryIO, List, Union

import pandas as pd

from .errors import ParseError
from .models import NameEntry

logger = logging.getLogger(__name__)

NameSource = Union[str, Path, bytes, BinaryIO]


def _read_first_sheet(source: NameSource) -> pd.DataFrame:
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    # header=None: row 1 is data, there is no header detection.
    # No NA markers: "NA", "None" or "null" are names, empty cells come back as "".
    return pd.read_excel(
        source,
        sheet_name=0,
        header=None,
        dtype=object,
        keep_default_na=False,
        na_values=[],
    )


def parse_names(source: NameSource) -> List[NameEntry]:
    """
    Extract names from the first column of the first sheet.

    A cell counts as a name only when it holds a string that is not blank
    after trimming. Rows keep their 1-based position in the sheet as
    source_row. Raises ParseError when the file cannot be decoded or no
    names are found.
    """
    try:
        df = _read_first_sheet(source)
    except Exception as e:
        raise ParseError(
            "Failed to parse Excel file. Please ensure it's a valid Excel file."
        ) from e

    names = []
    if not df.empty:
        for index, value in enumerate(df.iloc[:, 0], 1):
            if isinstance(value, str) and value.strip():
                names.append(NameEntry(name=value.strip(), source_row=index))

    if not names:
        raise ParseError(
            "No names found in the Excel file. Please ensure names are in the first column."
        )

    logger.info("Loaded %d names", len(names))
    return names
