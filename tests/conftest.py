import io
import string
from typing import List, Optional, Sequence
from xml.sax.saxutils import escape
from zipfile import ZipFile

import pytest
from reportlab.pdfgen import canvas  # type: ignore

NS_MAIN = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
NS_REL = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
NS_PKG_REL = "http://schemas.openxmlformats.org/package/2006/relationships"


def build_xlsx(rows: Sequence[Optional[Sequence[object]]]) -> bytes:
    """Assemble a minimal single-sheet workbook; ``None`` rows are left out."""
    shared: List[str] = []
    row_xml = []
    for r_idx, row in enumerate(rows, start=1):
        if row is None:
            continue
        cells = []
        for c_idx, value in enumerate(row):
            if value is None:
                continue
            ref = f"{string.ascii_uppercase[c_idx]}{r_idx}"
            if isinstance(value, bool):
                cells.append(f'<c r="{ref}" t="b"><v>{int(value)}</v></c>')
            elif isinstance(value, str):
                shared.append(value)
                cells.append(f'<c r="{ref}" t="s"><v>{len(shared) - 1}</v></c>')
            else:
                cells.append(f'<c r="{ref}"><v>{value}</v></c>')
        row_xml.append(f'<row r="{r_idx}">{"".join(cells)}</row>')

    workbook = (
        f'<workbook xmlns="{NS_MAIN}" xmlns:r="{NS_REL}"><sheets>'
        '<sheet name="Transcript" sheetId="1" r:id="rId1"/></sheets></workbook>'
    )
    rels = (
        f'<Relationships xmlns="{NS_PKG_REL}">'
        f'<Relationship Id="rId1" Type="{NS_REL}/worksheet" Target="worksheets/sheet1.xml"/>'
        "</Relationships>"
    )
    sst = "".join(f"<si><t>{escape(text)}</t></si>" for text in shared)
    shared_xml = f'<sst xmlns="{NS_MAIN}" count="{len(shared)}" uniqueCount="{len(shared)}">{sst}</sst>'
    sheet_xml = f'<worksheet xmlns="{NS_MAIN}"><sheetData>{"".join(row_xml)}</sheetData></worksheet>'

    buffer = io.BytesIO()
    with ZipFile(buffer, "w") as z:
        z.writestr("xl/workbook.xml", workbook)
        z.writestr("xl/_rels/workbook.xml.rels", rels)
        z.writestr("xl/sharedStrings.xml", shared_xml)
        z.writestr("xl/worksheets/sheet1.xml", sheet_xml)
    return buffer.getvalue()


def build_pdf(lines: Sequence[str]) -> bytes:
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer)
    c.setFont("Helvetica", 12)
    y = 720
    for line in lines:
        c.drawString(72, y, line)
        y -= 24
    c.save()
    return buffer.getvalue()


@pytest.fixture
def make_xlsx():
    return build_xlsx


@pytest.fixture
def make_pdf():
    return build_pdf


WESTERN_TRANSCRIPT = """\
Student Name: Test Student
Print Date: 2025-05-01
Faculty of Science
2024 Fall
Course Description Credits Earned Grade
CALC 1000 Introductory Calculus 0.5 0.5 85
PHYS 1028A Physics for Life Sciences 0.5 0.5 72
2025 Winter
MATH 1600 Linear Algebra 0.5 0.5 91
Page 1 of 1
End of Western University Unofficial Transcript
"""


@pytest.fixture
def western_transcript() -> str:
    return WESTERN_TRANSCRIPT
