# The line composer walks the body of a screenplay in document order and
# turns each element into a Block: the element's physical lines, placed
# at their columns, plus everything the paginator needs to know to put
# them on pages (spacing before the block, keep-together relations, scene
# membership, and how to split the block if it is splittable).
#
# All running state (scene and act counters, the current cue) lives in a
# ComposeContext owned by the Composer, so composing one document never
# affects another.

import copy
import logging

import screentype.disposition as disposition
import screentype.screenplay as screenplay
import screentype.text as text
import screentype.util as util
from screentype.error import StructureError

log = logging.getLogger(__name__)

# kinds that end the scene they are in
_SCENE_ENDERS = frozenset((screenplay.TRANSITION, screenplay.CLOSE))

# kinds that are never part of a scene
_OUTSIDE_SCENES = frozenset((screenplay.ACT, screenplay.END))

# kinds that make up the dialogue following a cue
_TRAIN = frozenset((screenplay.DIALOGUE, screenplay.DIRECTION))


# running state of one composition pass
class ComposeContext:
    def __init__(self, numbering):
        self.numbering = numbering

        # last automatic scene number
        self.sceneNr = 0

        # count of scenes started so far, including ones with a manual
        # label. identifies the current scene.
        self.sceneSeq = 0

        # label of the current scene, and whether we're inside one
        self.sceneLabel = None
        self.inScene = False

        # current act number, and how many acts we've seen
        self.actNr = 0
        self.actCount = 0

        # Block of the cue whose dialogue we're in, or None
        self.cue = None

        # last Block with printable content, for spacing
        self.prev = None


# one composed element
class Block:
    def __init__(self, elem, disp):
        self.elem = elem
        self.kind = elem.kind
        self.elemId = elem.id
        self.disp = disp

        # list of text.Line
        self.lines = []

        # droppable blank lines wanted before the block
        self.spaceBefore = 0

        # block must be on the same page as the start of the next one
        self.keepWithNext = disp.keepWithNext

        # block must start a new page
        self.newPage = False

        # for dialogue and directions, the Block of their cue
        self.cue = None

        # scene the block is in (0 = none), that scene's label, and
        # whether the scene ends with this block
        self.sceneSeq = 0
        self.sceneLabel = None
        self.endsScene = False

        # slug: its scene label. act: its act number.
        self.label = None
        self.actNr = None

        # for splittable blocks: the tokens, the wrap width, the column
        # and the break points of the text
        self.tokens = None
        self.width = 0
        self.column = 0
        self.breakPoints = []

    def __repr__(self):
        return "Block(%s #%d, %d lines)" % (
            screenplay.kind2name(self.kind),
            self.elemId,
            len(self.lines),
        )

    def __len__(self):
        return len(self.lines)

    # returns True if the block consists only of droppable lines
    def isBare(self):
        return (self.disp.droppable > 0) and (
            self.disp.droppable == self.disp.printedLines
        )

    def isSplittable(self):
        return (
            (self.kind in disposition.SPLITTABLE)
            and (self.tokens is not None)
            and bool(self.breakPoints)
        )

    # return copy of the block with its text refilled from 'tokens'
    def _derive(self, tokens):
        segLines, breakPoints = text.fill(tokens, self.width)

        b = copy.copy(self)
        b.tokens = tokens
        b.breakPoints = breakPoints
        b.lines = [text.Line(segs, self.column, self.elemId) for segs in segLines]
        b.disp = disposition.Disposition(
            len(segLines),
            disposition.OPTIONAL if breakPoints else disposition.ATOMIC,
            0,
            self.disp.keepWithNext,
        )

        return b

    # split the block at given break point. returns (head, tail), the
    # head having exactly bp.lineCount lines.
    def split(self, bp):
        head = self._derive(self.tokens[: bp.tokenIndex])
        tail = self._derive(self.tokens[bp.tokenIndex :])
        tail.spaceBefore = 0

        return head, tail

    # return copy of the block with 's' appended to its last line, used
    # to repeat a cue on a continuing page
    def continued(self, s):
        b = copy.copy(self)
        b.lines = self.lines[:-1] + [self.lines[-1].withSuffix(s)]
        b.spaceBefore = 0

        return b


class Composer:
    def __init__(self, sp, cfg):
        self.sp = sp
        self.cfg = cfg
        self.ctx = ComposeContext(sp.numbering)

        self.handlers = {
            screenplay.ACT: self.composeAct,
            screenplay.CLOSE: self.composeColumn,
            screenplay.CUE: self.composeColumn,
            screenplay.DIALOGUE: self.composeText,
            screenplay.DIRECTION: self.composeDirection,
            screenplay.END: self.composeCentered,
            screenplay.OPEN: self.composeColumn,
            screenplay.PARAGRAPH: self.composeText,
            screenplay.PAGEBREAK: self.composePageBreak,
            screenplay.SLUG: self.composeSlug,
            screenplay.TRANSITION: self.composeColumn,
            screenplay.BREAK: self.composeBare,
        }

    # generate Blocks for the body, in document order
    def blocks(self):
        for elem in self.sp.body:
            yield self.compose(elem)

    def compose(self, elem):
        handler = self.handlers.get(elem.kind)

        if handler is None:
            raise StructureError(
                "%s not allowed in body" % screenplay.kind2name(elem.kind),
                elem.getTag(),
                elem.sourceline,
            )

        wrapped = None

        if elem.kind in screenplay.TEXT_KINDS:
            wrapped = disposition.wrap(elem, self.cfg)

        blk = Block(elem, disposition.classify(elem, self.cfg, wrapped))

        if blk.isBare():
            self.composeBare(blk, wrapped)
        else:
            handler(blk, wrapped)
            self.setSpacing(blk)

        self.track(blk)

        log.debug("composed %r", blk)

        return blk

    # return Lines for the filled text at given column
    def place(self, blk, wrapped, column):
        return [text.Line(segs, column, blk.elemId) for segs in wrapped.lines]

    def setSpacing(self, blk):
        ctx = self.ctx
        t = self.cfg.getType(blk.kind)
        before = t.spaceBefore

        if ctx.prev is None:
            blk.spaceBefore = 0
        else:
            if (blk.kind == screenplay.SLUG) and (ctx.prev.kind == screenplay.OPEN):
                before = min(before, 1)

            after = self.cfg.getType(ctx.prev.kind).spaceAfter
            blk.spaceBefore = max(after, before)

        if blk.lines:
            ctx.prev = blk

    # update cue and scene state
    def track(self, blk):
        ctx = self.ctx

        if blk.kind == screenplay.CUE:
            ctx.cue = blk
        elif (blk.kind in _TRAIN) and (ctx.cue is not None):
            blk.cue = ctx.cue
        elif (blk.kind == screenplay.PAGEBREAK) or not blk.isBare():
            ctx.cue = None

        if blk.kind == screenplay.SLUG and not blk.isBare():
            ctx.sceneSeq += 1
            ctx.sceneLabel = blk.label
            ctx.inScene = True
        elif blk.kind in _OUTSIDE_SCENES:
            ctx.inScene = False

        if ctx.inScene:
            blk.sceneSeq = ctx.sceneSeq
            blk.sceneLabel = ctx.sceneLabel

            if blk.kind in _SCENE_ENDERS:
                blk.endsScene = True
                ctx.inScene = False

    def composeBare(self, blk, wrapped):
        blk.lines = [
            text.blank(blk.elemId, True) for i in range(blk.disp.printedLines)
        ]

    def composePageBreak(self, blk, wrapped):
        blk.lines = []

    # plain text at the kind's column plus the element's indent. these
    # are the kinds that can be split.
    def composeText(self, blk, wrapped):
        t = self.cfg.getType(blk.kind)
        column = t.indent + disposition.getIndent(blk.elem)

        blk.lines = self.place(blk, wrapped, column)
        blk.tokens = wrapped.tokens
        blk.width = wrapped.width
        blk.column = column
        blk.breakPoints = wrapped.breakPoints

    def composeColumn(self, blk, wrapped):
        blk.lines = self.place(blk, wrapped, self.cfg.getType(blk.kind).indent)

    # directions are in parentheses, the opening one hanging one column
    # left of the text
    def composeDirection(self, blk, wrapped):
        column = self.cfg.getType(blk.kind).indent
        lines = self.place(blk, wrapped, column)

        lines[0] = lines[0].withPrefix("(", max(column - 1, 0))
        lines[-1] = lines[-1].withSuffix(")")

        blk.lines = lines

    def composeCentered(self, blk, wrapped):
        cc = self.cfg.centerColumn

        blk.lines = [
            ln.moved(util.centerColumn(ln.getText(), cc))
            for ln in self.place(blk, wrapped, 0)
        ]

    def composeAct(self, blk, wrapped):
        ctx = self.ctx

        number = blk.elem.getAttr("number")

        if number is not None:
            ctx.actNr = number
        else:
            ctx.actNr += 1

        ctx.actCount += 1

        blk.actNr = ctx.actNr
        blk.newPage = ctx.actCount > 1

        self.composeCentered(blk, wrapped)

    def composeSlug(self, blk, wrapped):
        ctx = self.ctx
        cfg = self.cfg

        addition = blk.elem.getAttr("addition")

        if addition is not None:
            blk.label = addition
        else:
            ctx.sceneNr += 1
            blk.label = str(ctx.sceneNr)

        lines = self.place(blk, wrapped, cfg.getType(blk.kind).indent)

        if ctx.numbering in (screenplay.NUMBERING_RIGHT, screenplay.NUMBERING_FULL):
            lines[0] = lines[0].withSuffix(
                blk.label, cfg.sceneNumberRightColumn, minGap=1
            )

        if ctx.numbering in (screenplay.NUMBERING_LEFT, screenplay.NUMBERING_FULL):
            lines[0] = lines[0].withPrefix(
                blk.label, cfg.sceneNumberLeftColumn, minGap=1
            )

        blk.lines = lines


# return a generator of the Blocks of the screenplay's body
def compose(sp, cfg):
    return Composer(sp, cfg).blocks()
