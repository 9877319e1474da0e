# solardevis/services/csv_ingest.py

import logging
import math
import re
import time
from typing import List, Optional

from solardevis.models.quote import LineItem

logger = logging.getLogger(__name__)

DELIMITER = ";"
BOM = "\ufeff"

# Positional layout of an audit export row
COLUMNS = (
    "client",
    "site",
    "address",
    "date",
    "agent",
    "device",
    "hourly_kwh",
    "peak_w",
    "duration_h",
    "quantity",
)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_LEADING_FLOAT = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
_LEADING_INT = re.compile(r"^[+-]?\d+")


# --- Helpers ---

def _clean_field(val: str) -> str:
    val = (val or "").strip()
    if val.startswith('"'):
        val = val[1:]
    if val.endswith('"'):
        val = val[:-1]
    return val.strip()


def parse_fr_float(val) -> float:
    """
    Lenient French-style number parse: decimal comma accepted, the leading
    number of the field is read ("12,5 W" -> 12.5). Returns 0.0 when nothing
    numeric can be read.
    """
    if val is None:
        return 0.0
    if isinstance(val, bool):
        return float(val)
    if isinstance(val, (int, float)):
        return float(val) if math.isfinite(val) else 0.0
    text = str(val).strip().replace(",", ".", 1)
    m = _LEADING_FLOAT.match(text)
    if not m:
        return 0.0
    try:
        number = float(m.group(0))
    except ValueError:
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def parse_quantity(val) -> int:
    """Leading integer of the field, clamped at 0. "3,5" -> 3, "abc" -> 0."""
    if val is None:
        return 0
    if isinstance(val, (int, float)) and not isinstance(val, bool):
        number = int(val) if math.isfinite(val) else 0
    else:
        m = _LEADING_INT.match(str(val).strip())
        if not m:
            return 0
        number = int(m.group(0))
    return max(0, number)


def split_lines(text: str) -> List[str]:
    return _LINE_BREAK.split(text or "")


def parse_row(line: str, row_id: str) -> LineItem:
    values = [_clean_field(v) for v in line.split(DELIMITER)]
    values += [""] * (len(COLUMNS) - len(values))
    row = dict(zip(COLUMNS, values))

    return LineItem(
        id=row_id,
        client=row["client"],
        site=row["site"],
        address=row["address"],
        date=row["date"],
        agent=row["agent"],
        device=row["device"],
        hourly_kwh=parse_fr_float(row["hourly_kwh"]),
        peak_w=parse_fr_float(row["peak_w"]),
        duration_h=parse_fr_float(row["duration_h"]),
        quantity=parse_quantity(row["quantity"]),
        unit_price=0.0,
    )


def parse_csv(text: Optional[str]) -> List[LineItem]:
    """
    Parse a semicolon-delimited audit export into line items.

    The first line is a header and is discarded; blank lines are skipped.
    Never raises on malformed content: unreadable numbers become 0 and an
    input with fewer than two lines yields an empty list.
    """
    text = text or ""
    if text.startswith(BOM):
        text = text[len(BOM):]

    lines = split_lines(text)
    if len(lines) < 2:
        return []

    stamp = int(time.time() * 1000)
    data_lines = [line for line in lines[1:] if line.strip()]
    items = [parse_row(line, f"csv-{idx}-{stamp}") for idx, line in enumerate(data_lines)]

    logger.debug(f"Parsed {len(items)} line items from {len(lines)} lines")
    return items


def decode_upload(raw: bytes) -> str:
    """Decode uploaded bytes as UTF-8 (BOM tolerated); invalid bytes are replaced."""
    return raw.decode("utf-8-sig", errors="replace")
