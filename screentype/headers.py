import screentype.pml as pml
import screentype.util as util


# a script's headers, printed in the top margin of every page but the
# first.
class Headers:
    def __init__(self):
        # list of HeaderString objects
        self.hdrs = []

    # create standard headers: the page number
    def addDefaults(self, cfg):
        h = HeaderString()
        h.text = "${PAGE}."
        h.line = cfg.headerLine
        h.column = cfg.pageNumberColumn

        self.hdrs.append(h)

    # add headers to given page. 'pageNr' must be a string.
    def generatePML(self, page, pageNr, cfg):
        for h in self.hdrs:
            h.generatePML(page, pageNr, cfg)


# a single header string
class HeaderString:
    def __init__(self):

        # which line from the top of the paper, 1-based
        self.line = 1

        # column, relative to the left margin
        self.column = 0

        # contents of string. ${PAGE} is replaced by the page number.
        self.text = ""

        self.align = util.ALIGN_LEFT

        # style flags
        self.isBold = False
        self.isUnderlined = False

    def generatePML(self, page, pageNr, cfg):
        fl = pml.COURIER

        if self.isBold:
            fl |= pml.BOLD

        if self.isUnderlined:
            fl |= pml.UNDERLINED

        x = cfg.column2x(self.column)
        y = (self.line - 1) * cfg.lineHeight

        text = self.text.replace("${PAGE}", pageNr)

        page.add(pml.TextOp(text, x, y, cfg.fontSize, fl, self.align))
