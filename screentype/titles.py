import screentype.pml as pml
import screentype.screenplay as screenplay
import screentype.text as text
import screentype.util as util


# a script's title pages.
class Titles:
    def __init__(self):
        # list of lists of TitleString objects
        self.pages = []

    # create the title page from the screenplay's head: title, author and
    # note centered in the upper half, contact information in the lower
    # left corner.
    def addFromScreenplay(self, sp, cfg):
        width = cfg.getType(screenplay.PARAGRAPH).width
        fs = cfg.fontSize

        items = []

        if sp.series:
            items.extend(text.plainLines(sp.series.content, width))
            items.append("")

        if sp.title:
            items.extend(text.plainLines(sp.title.content, width))

        if sp.authors:
            items.extend(["", cfg.strWrittenBy, ""])
            items.append(" & ".join(sp.getAuthorNames()))

        if sp.note:
            items.append("")
            items.extend(text.plainLines(sp.note.content, width))

        a = [TitleString(items, y=cfg.line2y(cfg.titleSkip), size=fs)]

        if sp.contact:
            contact = text.plainLines(sp.contact.content, width)
            y = cfg.line2y(cfg.linesOnPage - len(contact))

            a.append(
                TitleString(
                    contact, cfg.column2x(cfg.contactColumn), y, False, size=fs
                )
            )

        self.pages.append(a)

    # add title pages to doc.
    def generatePages(self, doc):
        for page in self.pages:
            pg = pml.Page(doc)

            for s in page:
                s.generatePML(pg)

            doc.add(pg)


# a single string displayed on a title page
class TitleString:
    def __init__(self, items, x=0.0, y=0.0, isCentered=True, isBold=False, size=12):

        # list of text strings
        self.items = items

        # position
        self.x = x
        self.y = y

        # size in points
        self.size = size

        # whether this is centered in the horizontal direction
        self.isCentered = isCentered

        self.isBold = isBold

    def getStyle(self):
        fl = pml.COURIER

        if self.isBold:
            fl |= pml.BOLD

        return fl

    def generatePML(self, page):
        y = self.y

        for line in self.items:
            x = self.x
            align = util.ALIGN_LEFT

            if self.isCentered:
                x = page.doc.w / 2.0
                align = util.ALIGN_CENTER

            if line:
                page.add(pml.TextOp(line, x, y, self.size, self.getStyle(), align))

            y += util.getTextHeight(self.size)
