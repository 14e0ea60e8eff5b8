from typing import Dict

from reportlab.pdfgen.canvas import Canvas

import screentype.pml as pml


# users should only use this.
def generate(doc: "pml.Document") -> bytes:
    tmp = PDFExporter(doc)
    return tmp.generate()


# An abstract base class for all PDF drawing operations.
class PDFDrawOp:

    # draw the PML object pmlOp on the canvas. pe = PDFExporter.
    def draw(self, pmlOp: "pml.DrawOp", pageNr: int, pe: "PDFExporter", canvas: Canvas) -> None:
        raise Exception("draw not implemented")


class PDFTextOp(PDFDrawOp):
    def draw(self, pmlOp: "pml.DrawOp", pageNr: int, pe: "PDFExporter", canvas: Canvas) -> None:
        if not isinstance(pmlOp, pml.TextOp):
            raise Exception(
                "PDFTextOp is only compatible with pml.TextOp, got "
                + type(pmlOp).__name__
            )

        # we need to adjust y position since PDF uses baseline of text as
        # the y pos, but pml uses top of the text as y pos. The Adobe
        # standard Courier family font metrics give 157 units in 1/1000
        # point units as the Descender value, thus giving (1000 - 157) =
        # 843 units from baseline to top of text.
        x = pe.x(pmlOp.x)
        y = pe.y(pmlOp.y) - 0.843 * pmlOp.size

        newFont = pe.getFontForFlags(pmlOp.flags)
        canvas.setFont(newFont, pmlOp.size)
        canvas.drawString(x, y, pmlOp.text)

        if pmlOp.flags & pml.UNDERLINED:
            undLen = canvas.stringWidth(pmlOp.text, newFont, pmlOp.size)

            # all standard PDF fonts have the underline line 100 units
            # below baseline with a thickness of 50
            undY = y - 0.1 * pmlOp.size
            canvas.setLineWidth(0.05 * pmlOp.size)

            canvas.line(x, undY, x + undLen, undY)

        # create bookmark for table of contents if applicable
        if pmlOp.toc:
            bookmarkKey = pe.nextBookmarkKey()
            canvas.bookmarkHorizontal(bookmarkKey, pe.x(pmlOp.x), pe.y(pmlOp.y))
            canvas.addOutlineEntry(pmlOp.toc.text, bookmarkKey)


# PML operation type -> its drawer
_drawers: Dict[type, PDFDrawOp] = {
    pml.TextOp: PDFTextOp(),
}


class PDFExporter:
    def __init__(self, doc: "pml.Document"):
        self.doc: pml.Document = doc

        # fast lookup of font names
        self.fonts: Dict[int, str] = {
            pml.COURIER: "Courier",
            pml.COURIER | pml.BOLD: "Courier-Bold",
            pml.COURIER | pml.ITALIC: "Courier-Oblique",
            pml.COURIER | pml.BOLD | pml.ITALIC: "Courier-BoldOblique",
        }

        # counter for bookmark names
        self.bookmarkNr: int = 0

    # generate PDF document and return it as bytes
    def generate(self) -> bytes:
        doc = self.doc
        canvas = Canvas(
            "",
            pdfVersion=(1, 5),
            pagesize=(self.mm2points(doc.w), self.mm2points(doc.h)),
            initialFontName=self.getFontForFlags(pml.NORMAL),
            invariant=1,
        )

        # set PDF info
        canvas.setTitle(doc.title)
        canvas.setCreator(doc.producer)
        canvas.setProducer(doc.producer)

        numberOfPages: int = len(doc.pages)

        # draw pages
        for i in range(numberOfPages):
            pg = doc.pages[i]
            for op in pg.ops:
                self.getDrawer(op).draw(op, i, self, canvas)

            if i < numberOfPages - 1:
                canvas.showPage()

        if doc.showTOC:
            canvas.showOutline()

        return canvas.getpdfdata()

    def getDrawer(self, op: "pml.DrawOp") -> PDFDrawOp:
        drawer = _drawers.get(type(op))

        if not drawer:
            raise Exception("PDF: no drawer for %s" % type(op).__name__)

        return drawer

    def nextBookmarkKey(self) -> str:
        self.bookmarkNr += 1

        return "toc%d" % self.bookmarkNr

    # get font name to use for given flags.
    def getFontForFlags(self, flags: int) -> str:
        # the "& 15" gets rid of the underline flag
        name = self.fonts.get(flags & 15)

        if not name:
            raise Exception("PDF.getFontForFlags: invalid flags %d" % flags)

        return name

    # convert mm to points (1/72 inch).
    def mm2points(self, mm: float) -> float:
        # 2.834 = 72 / 25.4
        return mm * 2.83464567

    # convert x coordinate
    def x(self, x: float) -> float:
        return self.mm2points(x)

    # convert y coordinate
    def y(self, y: float) -> float:
        return self.mm2points(self.doc.h - y)
