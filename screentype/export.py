# conversion of screenplays to finished documents. layout happens in full
# before any output is generated, so structural errors surface before a
# single byte is produced.

import logging

import screentype.composer as composer
import screentype.config as config
import screentype.disposition as disposition
import screentype.mypager as mypager
import screentype.paginator as paginator
import screentype.pdf as pdf
import screentype.ps as ps
import screentype.screenplay as screenplay
import screentype.text as text
import screentype.titles as titles
from screentype.error import MiscError

log = logging.getLogger(__name__)

# output formats
FORMAT_PS = "ps"
FORMAT_PDF = "pdf"

_generators = {
    FORMAT_PS: ps.generate,
    FORMAT_PDF: pdf.generate,
}


# result of a conversion
class Conversion:
    def __init__(self, data, pageCount, warnings):
        # the finished document, bytes
        self.data = data

        # total page count, title page included
        self.pageCount = pageCount

        # list of paginator.LayoutWarning
        self.warnings = warnings


# pass blocks through, recording a table of contents entry for each scene
# and act in 'tocs' (key = element id, value = entry text)
def _collectTOC(blocks, tocs):
    for blk in blocks:
        if not blk.isBare():
            s = " ".join(text.plainLines(blk.elem.content))

            if blk.kind == screenplay.SLUG:
                tocs[blk.elemId] = "%s %s" % (blk.label, s)
            elif blk.kind == screenplay.ACT:
                tocs[blk.elemId] = s

        yield blk


# lay out the screenplay's body, returning a paginator.Pagination. if
# 'tocs' is given, table of contents entries are collected into it.
def layout(sp, cfg=None, tocs=None):
    if cfg is None:
        cfg = config.Config()

    blocks = composer.compose(sp, cfg)

    if tocs is not None:
        blocks = _collectTOC(blocks, tocs)

    pagination = paginator.paginate(blocks, cfg, sp.numbering)

    log.debug(
        "laid out %d elements on %d pages",
        len(sp.body),
        pagination.getPageCount(),
    )

    return pagination


# return a pml.Document of the title page (if enabled) and the pages of
# 'pagination'
def generatePML(sp, cfg, pagination, tocs=None):
    pager = mypager.Pager(cfg, sp.getTitle())

    if tocs:
        pager.tocs.update(tocs)

    if cfg.titlePage:
        t = titles.Titles()
        t.addFromScreenplay(sp, cfg)
        t.generatePages(pager.doc)

    for page in pagination.pages:
        pager.addPage(page)

    return pager.doc


# convert screenplay to a finished document in format 'fmt'. returns a
# Conversion. raises StructureError for invalid documents, and MiscError
# for an unknown format.
def convert(sp, cfg=None, fmt=FORMAT_PS):
    gen = _generators.get(fmt)

    if gen is None:
        raise MiscError("unknown output format '%s'" % fmt)

    if cfg is None:
        cfg = config.Config()

    tocs = {}
    pagination = layout(sp, cfg, tocs)

    doc = generatePML(sp, cfg, pagination, tocs)
    data = gen(doc)

    log.info("generated %d pages, %d bytes of %s", len(doc.pages), len(data), fmt)

    return Conversion(data, len(doc.pages), pagination.warnings)


# return the diagnostic dump of a screenplay or a fragment
def dump(root, cfg=None):
    return disposition.dump(root, cfg)
