# PML is short for Page Modeling Language, a neutral description of the
# finished pages: a document is a list of pages and each page a list of
# simple drawing commands. It is easy to render to anything, and we have
# renderers for PostScript and PDF.
#
# All measurements in PML are in (floating point) millimeters, with the
# origin at the top left corner of the page and y growing downwards.

from typing import List, Optional

import screentype.misc as misc
import screentype.util as util

# text flags. don't change these unless you know what you're doing.
NORMAL = 0
BOLD = 1
ITALIC = 2
COURIER = 0
UNDERLINED = 16


# A single document.
class Document:

    # (w, h) is the size of each page.
    def __init__(self, w: float, h: float, title: str = ""):
        self.w: float = w
        self.h: float = h

        # document title, for the output's header
        self.title: str = title

        # who made this, for the output's header
        self.producer: str = misc.getProducer()

        self.pages: List[Page] = []

        self.tocs: List[TOCItem] = []

        # whether to show TOC by default on document open
        self.showTOC: bool = False

    def add(self, page: "Page") -> None:
        self.pages.append(page)

    def addTOC(self, toc: "TOCItem") -> None:
        self.tocs.append(toc)


class Page:
    def __init__(self, doc: Document):

        # link to containing document
        self.doc: Document = doc

        # a collection of Operation objects
        self.ops: List["DrawOp"] = []

    def add(self, op: "DrawOp") -> None:
        self.ops.append(op)


# Table of content item (Outline item, in PDF lingo)
class TOCItem:
    def __init__(self, text: str, op: "TextOp"):
        # text to show in TOC
        self.text: str = text

        # pointer to the TextOp that this item links to (used to get the
        # correct positioning information)
        self.op: TextOp = op


# An abstract base class for all drawing operations. each renderer keeps
# its own table of how to draw each operation type.
class DrawOp:
    pass


# Draw text string 'text', at position (x, y) mm from the upper left
# corner of the page. Font used is 'size' points Courier, possibly bold /
# italic / underlined as indicated by the flags.
class TextOp(DrawOp):
    def __init__(
        self,
        text: str,
        x: float,
        y: float,
        size: int,
        flags: int = NORMAL | COURIER,
        align: int = util.ALIGN_LEFT,
    ):
        self.text: str = text
        self.x: float = x
        self.y: float = y
        self.size: int = size
        self.flags: int = flags

        # TOCItem, by default we have none
        self.toc: Optional[TOCItem] = None

        if align != util.ALIGN_LEFT:
            w = util.getTextWidth(text, flags, size)

            if align == util.ALIGN_CENTER:
                self.x -= w / 2.0
            elif align == util.ALIGN_RIGHT:
                self.x -= w
