import screentype.headers as headers
import screentype.pml as pml


# used to iteratively add PML pages to a document
class Pager:
    def __init__(self, cfg, title=""):
        self.cfg = cfg
        self.doc = pml.Document(cfg.paperWidth, cfg.paperHeight, title)

        self.headers = headers.Headers()
        self.headers.addDefaults(cfg)

        # key = element id, value = text of its table of contents entry.
        # an entry is made for the first line of the element we see.
        self.tocs = {}

    # add a paginator.Page. lines go on a fixed grid: line i of the page
    # is i line pitches below the top margin, and each styled run of text
    # is placed at its own column.
    def addPage(self, page):
        cfg = self.cfg
        pg = pml.Page(self.doc)

        if page.number > 1:
            self.headers.generatePML(pg, str(page.number), cfg)

        for i, line in enumerate(page.lines):
            y = cfg.line2y(i)
            column = line.column

            for s, fl in line.segments:
                if s.strip() or (fl & pml.UNDERLINED):
                    op = pml.TextOp(s, cfg.column2x(column), y, cfg.fontSize, fl)
                    pg.add(op)

                    self.addTOC(line.elemId, op)

                column += len(s)

        self.doc.add(pg)

    def addTOC(self, elemId, op):
        s = self.tocs.pop(elemId, None)

        if s is not None:
            op.toc = pml.TOCItem(s, op)
            self.doc.addTOC(op.toc)
