import pytest

import screentype.config as config
import screentype.export as export
import screentype.pdf as pdf
import screentype.pml as pml
import screentype.ps as ps
import u
from screentype.error import MiscError


def pageTexts(pg):
    return [op.text for op in pg.ops]


def testConvertPS():
    res = export.convert(u.load())

    assert res.pageCount == 3
    assert res.warnings == []

    data = res.data
    assert data.startswith(b"%!PS-Adobe-3.0\n")
    assert b"%%Title: (The Long Night)\n" in data
    assert b"%%Creator: (screentype " in data
    assert b"%%DocumentFonts: Courier\n" in data
    assert b"%%BoundingBox: 0 0 612 792\n" in data
    assert b"%%Pages: 3\n" in data
    assert data.count(b"\nshowpage\n") == 3
    assert data.endswith(b"%%EOF\n")

    # underlined emphasis
    assert b" U\n" in data

    # Latin 1 as octal escapes
    assert b"CAF\\311" in data

    data.decode("ascii")


def testDeterministic():
    assert export.convert(u.load()).data == export.convert(u.load()).data
    assert (
        export.convert(u.load(), fmt=export.FORMAT_PDF).data
        == export.convert(u.load(), fmt=export.FORMAT_PDF).data
    )


def testConvertPDF():
    res = export.convert(u.load(), fmt=export.FORMAT_PDF)

    assert res.pageCount == 3
    assert res.data.startswith(b"%PDF")


def testUnknownFormat():
    with pytest.raises(MiscError):
        export.convert(u.load(), fmt="docx")


def testPageCount():
    sp = u.doc(*u.paras(200))

    assert export.convert(sp).pageCount == 9
    assert export.convert(sp, u.cfg()).pageCount == 8

    data = export.convert(sp, u.cfg()).data
    assert b"%%Pages: 8\n" in data


def testLayout():
    cfg = u.cfg()
    tocs = {}
    res = export.layout(u.load(), cfg, tocs)

    assert res.getPageCount() == 2
    assert res.pages[0].forced

    assert tocs == {
        0: "ACT ONE",
        2: "1 INT. KITCHEN - NIGHT",
        11: "2A EXT. STREET - CONTINUOUS",
        14: "ACT THREE",
        15: "2 INT. CAFÉ - DAY",
    }


def testGeneratePML():
    sp = u.load()
    cfg = config.Config()
    tocs = {}
    res = export.layout(sp, cfg, tocs)
    doc = export.generatePML(sp, cfg, res, tocs)

    assert len(doc.pages) == 3
    assert doc.title == "The Long Night"
    assert len(doc.tocs) == 5

    # title page
    texts = pageTexts(doc.pages[0])
    assert texts[:3] == ["Tales of the City", "The Long Night", "written by"]
    assert "Jane Doe & John Smith" in texts
    assert "123 Main Street" in texts

    # first body page has no page number, the others do
    assert "1." not in pageTexts(doc.pages[1])
    assert pageTexts(doc.pages[2])[0] == "2."

    op = doc.pages[1].ops[0]
    assert op.text == "ACT ONE"
    assert op.x == cfg.column2x(30)
    assert op.y == cfg.line2y(0)
    assert op.toc.text == "ACT ONE"


def testUnderlinedOps():
    sp = u.doc(u.p("x ", u.em("a b"), " y"))
    cfg = u.cfg()
    doc = export.generatePML(sp, cfg, export.layout(sp, cfg))

    ops = doc.pages[0].ops
    assert [(op.text, op.flags) for op in ops] == [
        ("x ", pml.NORMAL),
        ("a b", pml.UNDERLINED),
        (" y", pml.NORMAL),
    ]
    assert ops[1].x == cfg.column2x(8)


def testPSEscape():
    pe = ps.PSExporter(pml.Document(100.0, 100.0))

    assert pe.escapeStr("a(b)c\\") == "a\\(b\\)c\\\\"
    assert pe.escapeStr("é€") == "\\351?"


def testPSFonts():
    doc = pml.Document(100.0, 100.0, "T")
    pg = pml.Page(doc)
    pg.add(pml.TextOp("bold", 10.0, 10.0, 12, pml.BOLD))
    pg.add(pml.TextOp("plain", 10.0, 20.0, 12))
    doc.add(pg)

    data = ps.generate(doc)

    assert b"%%DocumentFonts: Courier Courier-Bold\n" in data
    assert b"/Courier-Bold-Latin1 /Courier-Bold RE\n" in data
    assert b"/Courier-Bold-Latin1 12 F\n" in data
    assert b"(bold) 28.35 " in data


def testPDFOutline():
    doc = pml.Document(100.0, 100.0, "T")
    pg = pml.Page(doc)
    op = pml.TextOp("INT. HOUSE", 10.0, 10.0, 12)
    op.toc = pml.TOCItem("1 INT. HOUSE", op)
    pg.add(op)
    doc.add(pg)
    doc.showTOC = True

    assert pdf.generate(doc).startswith(b"%PDF")


def testDump():
    s = export.dump(u.loadString("<p>Hello.</p>"))

    assert s == '#0 Paragraph [lines=1 atomic droppable=0] "Hello."\n'


def texts(page):
    return [ln.getText() for ln in page.lines]


def testLongDocument():
    sp = u.load("long.xml")
    res = export.layout(sp, config.Config())

    assert res.warnings == []
    assert [len(pg.lines) for pg in res.pages] == [55, 55, 28, 53]
    assert [pg.forced for pg in res.pages] == [False, False, True, False]

    # numbered scenes are marked where they continue
    p1 = texts(res.pages[0])
    assert p1[0] == "ACT ONE"
    assert res.pages[0].lines[0].column == 30
    assert p1[3].startswith("1     INT. OFFICE - DAY ")
    assert p1[51] == "Para 24."
    assert p1[52:] == ["", "", "(CONTINUED)"]

    p2 = texts(res.pages[1])
    assert p2[0] == "1     CONTINUED:" + " " * 47 + "1"
    assert p2[2] == "Para 25."
    assert p2[12] == "Para 30."
    assert p2[14] == "GEORGE"
    assert p2[15] == "Sentence number 1 is right here."
    assert p2[51] == "Sentence number 37 is right here."
    assert p2[52:] == ["(MORE)", "", "(CONTINUED)"]

    p3 = texts(res.pages[2])
    assert p3[0] == "1     CONTINUED: (2)" + " " * 43 + "1"
    assert p3[2] == "GEORGE (CONT'D)"
    assert p3[3] == "Sentence number 38 is right here."
    assert p3[25] == "Sentence number 60 is right here."
    assert p3[27] == "CUT TO:"

    p4 = texts(res.pages[3])
    assert p4[0].strip() == "ACT TWO"
    assert p4[3].startswith("5A    EXT. PARK - NIGHT ")
    assert p4[5:9] == ["MARY", "Hello.", "(beat)", "Hi."]
    assert p4[48] == "Para 50."
    assert p4[50] == "FADE OUT."
    assert p4[52].strip() == "THE END"

    conv = export.convert(sp)
    assert conv.pageCount == 5
    assert b"%%Pages: 5\n" in conv.data
    assert conv.data.count(b"\nshowpage\n") == 5

    assert export.convert(sp, fmt=export.FORMAT_PDF).pageCount == 5
