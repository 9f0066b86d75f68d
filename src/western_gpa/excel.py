from __future__ import annotations

import io
import logging
import posixpath
import re
from typing import List, Optional
from xml.etree import ElementTree as ET
from zipfile import BadZipFile, ZipFile

from .errors import UnreadableInputError

logger = logging.getLogger(__name__)

NS_MAIN = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
NS_REL = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
NS_PKG_REL = "http://schemas.openxmlformats.org/package/2006/relationships"
NSMAP = {"main": NS_MAIN, "rel": NS_PKG_REL}

CELL_REF = re.compile(r"^([A-Z]+)(\d+)$")


def read_first_sheet(content: bytes) -> List[List[object]]:
    """Decode the first worksheet of an ``.xlsx`` workbook into a grid.

    Rows are returned in sheet order with gaps preserved as empty lists, and
    cells missing from a row are ``None``. Numbers come back as ``int`` when
    integral and ``float`` otherwise; every other cell is a string or bool.
    """
    try:
        with ZipFile(io.BytesIO(content)) as z:
            sheet_path = _first_sheet_path(z)
            shared_strings = _read_shared_strings(z)
            sheet_root = ET.fromstring(z.read(sheet_path))
        grid = _read_rows(sheet_root, shared_strings)
    except BadZipFile as exc:
        raise UnreadableInputError("Workbook is not a valid .xlsx archive") from exc
    except KeyError as exc:
        raise UnreadableInputError(f"Workbook is missing a required part: {exc}") from exc
    except ET.ParseError as exc:
        raise UnreadableInputError(f"Workbook contains malformed XML: {exc}") from exc
    except ValueError as exc:
        raise UnreadableInputError(f"Workbook contains a malformed cell: {exc}") from exc

    logger.debug("Read %d rows from %s", len(grid), sheet_path)
    return grid


def _read_rows(sheet_root: ET.Element, shared_strings: List[str]) -> List[List[object]]:
    sheet_data = sheet_root.find("main:sheetData", NSMAP)
    if sheet_data is None:
        raise UnreadableInputError("Worksheet missing sheetData node")

    grid: List[List[object]] = []
    for row_el in sheet_data.findall("main:row", NSMAP):
        row_number = int(row_el.attrib.get("r", len(grid) + 1))
        while len(grid) < row_number - 1:
            grid.append([])

        cells: List[object] = []
        for cell_el in row_el.findall("main:c", NSMAP):
            column = _column_index(cell_el.attrib.get("r"), len(cells))
            while len(cells) < column:
                cells.append(None)
            cells.append(_cell_value(cell_el, shared_strings))
        grid.append(cells)
    return grid


def _first_sheet_path(z: ZipFile) -> str:
    workbook = ET.fromstring(z.read("xl/workbook.xml"))
    sheet = workbook.find("main:sheets/main:sheet", NSMAP)
    if sheet is None:
        raise UnreadableInputError("Workbook has no sheets")

    rel_id = sheet.attrib.get(f"{{{NS_REL}}}id")
    rels = ET.fromstring(z.read("xl/_rels/workbook.xml.rels"))
    for rel in rels.findall("rel:Relationship", NSMAP):
        if rel.attrib.get("Id") == rel_id:
            target = rel.attrib["Target"]
            if target.startswith("/"):
                return target.lstrip("/")
            return posixpath.normpath(posixpath.join("xl", target))
    raise UnreadableInputError(f"Workbook relationship {rel_id!r} not found")


def _read_shared_strings(z: ZipFile) -> List[str]:
    if "xl/sharedStrings.xml" not in z.namelist():
        return []
    shared_root = ET.fromstring(z.read("xl/sharedStrings.xml"))
    # Rich text splits one string into several <r><t> runs.
    return [
        "".join(t.text or "" for t in si.iter(f"{{{NS_MAIN}}}t"))
        for si in shared_root.findall("main:si", NSMAP)
    ]


def _column_index(ref: Optional[str], default: int) -> int:
    if not ref:
        return default
    match = CELL_REF.match(ref)
    if not match:
        return default
    index = 0
    for letter in match.group(1):
        index = index * 26 + (ord(letter) - ord("A") + 1)
    return index - 1


def _cell_value(cell_el: ET.Element, shared_strings: List[str]) -> object:
    cell_type = cell_el.attrib.get("t", "n")

    if cell_type == "inlineStr":
        inline = cell_el.find("main:is", NSMAP)
        if inline is None:
            return None
        return "".join(t.text or "" for t in inline.iter(f"{{{NS_MAIN}}}t"))

    v_el = cell_el.find("main:v", NSMAP)
    if v_el is None or v_el.text is None:
        return None
    raw = v_el.text

    if cell_type == "s":
        index = int(raw)
        if index >= len(shared_strings):
            raise UnreadableInputError(f"Shared string index {index} out of range")
        return shared_strings[index]
    if cell_type == "b":
        return raw == "1"
    if cell_type in {"str", "e"}:
        return raw

    try:
        number = float(raw)
    except ValueError:
        return raw
    return int(number) if number.is_integer() else number
