# PostScript renderer for PML documents. The output follows the Document
# Structuring Conventions: a header with the title, the fonts used, the
# bounding box and the page count, a prolog defining a few procedures,
# then one %%Page section per page. It is plain 7-bit text, Latin 1
# characters being written as octal escapes, and contains nothing that
# changes between runs.

from typing import Dict

import screentype.pml as pml
import screentype.util as util

# Courier fonts for the bold / italic flag combinations
FONTS: Dict[int, str] = {
    pml.COURIER: "Courier",
    pml.COURIER | pml.BOLD: "Courier-Bold",
    pml.COURIER | pml.ITALIC: "Courier-Oblique",
    pml.COURIER | pml.BOLD | pml.ITALIC: "Courier-BoldOblique",
}

# suffix of the names of our re-encoded fonts
_LATIN1_SUFFIX = "-Latin1"

_PROLOG = """\
%%BeginProlog
% /newname /oldname RE: define newname as oldname with Latin 1 encoding
/RE { findfont dup length dict begin
  { 1 index /FID ne { def } { pop pop } ifelse } forall
  /Encoding ISOLatin1Encoding def currentdict end definefont pop } bind def
% /font size F: select font
/F { exch findfont exch scalefont setfont } bind def
% (text) x y S: show text at x y
/S { moveto show } bind def
% width x y linewidth U: draw underline
/U { setlinewidth newpath moveto 0 rlineto stroke } bind def
%%EndProlog
"""


# users should only use this.
def generate(doc: "pml.Document") -> bytes:
    tmp = PSExporter(doc)
    return tmp.generate()


# An abstract base class for all PostScript drawing operations.
class PSDrawOp:

    # write PostScript code corresponding to the PML object pmlOp to
    # output (util.String). pe = PSExporter.
    def draw(self, pmlOp: "pml.DrawOp", pageNr: int, pe: "PSExporter", output: util.String) -> None:
        raise Exception("draw not implemented")


class PSTextOp(PSDrawOp):
    def draw(self, pmlOp: "pml.DrawOp", pageNr: int, pe: "PSExporter", output: util.String) -> None:
        if not isinstance(pmlOp, pml.TextOp):
            raise Exception(
                "PSTextOp is only compatible with pml.TextOp, got "
                + type(pmlOp).__name__
            )

        # PML positions are the top of the text, PostScript ones the
        # baseline. Courier's ascent is 843/1000 of the font size.
        x = pe.x(pmlOp.x)
        y = pe.y(pmlOp.y) - 0.843 * pmlOp.size

        font = pe.getFontForFlags(pmlOp.flags)

        if pe.font != (font, pmlOp.size):
            output += "/%s%s %d F\n" % (font, _LATIN1_SUFFIX, pmlOp.size)
            pe.font = (font, pmlOp.size)

        output += "(%s) %.2f %.2f S\n" % (pe.escapeStr(pmlOp.text), x, y)

        if pmlOp.flags & pml.UNDERLINED:
            undLen = len(pmlOp.text) * util.COURIER_PITCH * pmlOp.size

            # the standard fonts have the underline 100 units below the
            # baseline with a thickness of 50
            output += "%.2f %.2f %.2f %.2f U\n" % (
                undLen,
                x,
                y - 0.1 * pmlOp.size,
                0.05 * pmlOp.size,
            )


# PML operation type -> its drawer
_drawers: Dict[type, PSDrawOp] = {
    pml.TextOp: PSTextOp(),
}


class PSExporter:
    def __init__(self, doc: "pml.Document"):
        self.doc: pml.Document = doc

        # currently selected (font name, size), or None
        self.font = None

    # generate PostScript document and return it as bytes
    def generate(self) -> bytes:
        doc = self.doc
        fonts = self.getUsedFonts()

        output = util.String()

        output += "%!PS-Adobe-3.0\n"
        output += "%%%%Title: (%s)\n" % self.escapeStr(doc.title)
        output += "%%%%Creator: (%s)\n" % self.escapeStr(doc.producer)
        output += "%%%%DocumentFonts: %s\n" % " ".join(fonts)
        output += "%%%%BoundingBox: 0 0 %d %d\n" % (
            round(self.mm2points(doc.w)),
            round(self.mm2points(doc.h)),
        )
        output += "%%%%Pages: %d\n" % len(doc.pages)
        output += "%%PageOrder: Ascend\n"
        output += "%%EndComments\n"

        output += _PROLOG

        output += "%%BeginSetup\n"

        for name in fonts:
            output += "/%s%s /%s RE\n" % (name, _LATIN1_SUFFIX, name)

        output += "%%EndSetup\n"

        for i, pg in enumerate(doc.pages):
            output += "%%%%Page: %d %d\n" % (i + 1, i + 1)

            # pages must not depend on each other's state
            self.font = None

            for op in pg.ops:
                self.getDrawer(op).draw(op, i, self, output)

            output += "showpage\n"

        output += "%%Trailer\n"
        output += "%%EOF\n"

        return str(output).encode("ascii")

    def getDrawer(self, op: "pml.DrawOp") -> PSDrawOp:
        drawer = _drawers.get(type(op))

        if not drawer:
            raise Exception("PS: no drawer for %s" % type(op).__name__)

        return drawer

    # return sorted list of the font names used in the document. Courier
    # is always included.
    def getUsedFonts(self) -> list:
        used = {FONTS[pml.COURIER]}

        for pg in self.doc.pages:
            for op in pg.ops:
                if isinstance(op, pml.TextOp):
                    used.add(self.getFontForFlags(op.flags))

        return sorted(used)

    # get font name to use for given flags.
    def getFontForFlags(self, flags: int) -> str:
        # the "& 15" gets rid of the underline flag
        name = FONTS.get(flags & 15)

        if not name:
            raise Exception("PS.getFontForFlags: invalid flags %d" % flags)

        return name

    # escape string for use inside a PostScript string literal. anything
    # outside printable ASCII is written as an octal escape of its Latin 1
    # code.
    def escapeStr(self, s: str) -> str:
        res = ""

        for b in util.toLatin1(s):
            if b in (0x28, 0x29, 0x5C):
                res += "\\" + chr(b)
            elif (b < 32) or (b > 126):
                res += "\\%03o" % b
            else:
                res += chr(b)

        return res

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
