# The paginator takes the composer's Blocks and puts their lines on pages
# of fixed capacity.
#
# Blocks are scheduled in keep-together groups: a cue with the dialogue
# following it, and a slug (or any other keep-with-next block) with the
# group after it. For each group:
#
#  - a page break ends the page there and then, however full it is.
#
#  - a group that fits goes on the current page. one that doesn't is
#    split at the last place that fits: between two dialogue elements
#    (never right after a direction), or at a sentence end or mandatory
#    break inside a paragraph or dialogue. a split dialogue gets (MORE)
#    at the bottom of the page and its cue repeated with (CONT'D) at the
#    top of the next one.
#
#  - a group that can't be split moves to the next page whole, and one
#    that doesn't fit even on an empty page is broken at the page
#    boundary with a warning.
#
# Blank spacing lines and bare breaks that would land on the first or the
# last line of a page are dropped. Pages broken because they are full are
# padded to exactly the capacity.

import copy
import logging

import screentype.disposition as disposition
import screentype.screenplay as screenplay
import screentype.text as text

log = logging.getLogger(__name__)

# lines needed at a page bottom for the scene continued marker
_CONTINUED_LINES = 2


# a non-fatal problem found during layout
class LayoutWarning:
    def __init__(self, elemId, sourceline, msg):
        self.elemId = elemId
        self.sourceline = sourceline
        self.msg = msg

    def __str__(self):
        if self.sourceline is not None:
            return "line %d: %s" % (self.sourceline, self.msg)

        return self.msg

    def __repr__(self):
        return "LayoutWarning(%d, %r)" % (self.elemId, self.msg)


# a finished page
class Page:
    def __init__(self, number):
        # 1-based page number
        self.number = number

        # list of text.Line
        self.lines = []

        # whether the page was ended by a forced break
        self.forced = False

    def __len__(self):
        return len(self.lines)

    def __repr__(self):
        return "Page(%d, %d lines)" % (self.number, len(self.lines))


# result of pagination
class Pagination:
    def __init__(self, pages, warnings):
        self.pages = pages
        self.warnings = warnings

    def getPageCount(self):
        return len(self.pages)


class Paginator:
    def __init__(self, cfg, numbering=screenplay.NUMBERING_NONE):
        self.cfg = cfg
        self.numbering = numbering
        self.capacity = cfg.linesOnPage

        # whether pages broken inside a scene get "(CONTINUED)" markers
        self.continueds = cfg.useSceneContinueds(numbering)

        self.pages = []
        self.warnings = []

        # page being filled
        self.page = None

        # True until something other than markers is put on the page
        self.atTop = True

        # last Block put on a page
        self.lastBlock = None

        # key = scene sequence number, value = how many times that scene
        # has been continued on a new page
        self.sceneConts = {}

    def run(self, blocks):
        self.newPage()

        groups = self.groups(blocks)
        group = next(groups, None)

        while group is not None:
            nextGroup = next(groups, None)
            self.placeGroup(group, nextGroup)
            group = nextGroup

        self.finish()

        return Pagination(self.pages, self.warnings)

    # generate keep-together groups (lists of Blocks) from blocks
    def groups(self, blocks):
        group = []

        for blk in blocks:
            if group and not self.joins(group, blk):
                yield group
                group = []

            group.append(blk)

            if blk.kind == screenplay.PAGEBREAK:
                yield group
                group = []

        if group:
            yield group

    # returns True if blk must be in the same group as the blocks in
    # 'group'
    def joins(self, group, blk):
        if (blk.kind == screenplay.PAGEBREAK) or blk.newPage:
            return False

        lead = None

        for b in reversed(group):
            if not b.isBare():
                lead = b
                break

        if lead is None:
            return False

        if lead.keepWithNext:
            return True

        if blk.isBare():
            return lead.cue is not None

        return (blk.cue is not None) and ((lead is blk.cue) or (lead.cue is blk.cue))

    def newPage(self):
        self.page = Page(len(self.pages) + 1)
        self.pages.append(self.page)
        self.atTop = True

    # lines available on the current page for content ending with blk.
    # 'whole' is False if only a part of blk goes on the page.
    def room(self, blk, whole=True):
        n = self.capacity - len(self.page.lines)

        if self.continueds and blk.sceneSeq and not (whole and blk.endsScene):
            n -= _CONTINUED_LINES

        return n

    # return lists of Lines, one for each block in group, as they would
    # land on the current page: spacing lines included, droppable lines
    # at the top of the page left out.
    def materialize(self, group):
        res = []
        dropping = self.atTop

        for blk in group:
            lines = []

            for i in range(blk.spaceBefore):
                lines.append(text.blank(blk.elemId, True))

            lines.extend(blk.lines)

            if dropping:
                while lines and lines[0].droppable:
                    lines.pop(0)

                if lines:
                    dropping = False

            res.append(lines)

        return res

    def addLines(self, lines):
        if lines:
            self.page.lines.extend(lines)
            self.atTop = False

    def dropTrailing(self):
        lines = self.page.lines

        while lines and lines[-1].droppable:
            lines.pop()

    def placeGroup(self, group, nextGroup):
        first = group[0]

        if first.kind == screenplay.PAGEBREAK:
            self.breakPage(True, nextGroup[0] if nextGroup else None)

            return

        if first.newPage and not self.atTop:
            self.breakPage(True, first)

        while group:
            group = self.fit(group)

    # put as much of group on the current page as possible, breaking the
    # page if needed. returns what is left over, which is an empty list
    # once the whole group has been placed.
    def fit(self, group):
        lines = [ln for blkLines in self.materialize(group) for ln in blkLines]

        content = len(lines)
        while content and lines[content - 1].droppable:
            content -= 1

        room = self.room(group[-1])

        if content <= room:
            self.addLines(lines[:room])
            self.lastBlock = group[-1]

            return []

        split = self.findSplit(group)

        if split:
            return self.splitGroup(group, *split)

        if not self.atTop:
            self.breakPage(False, group[0])

            return group

        return self.forceSplit(group)

    # find the last place group can be split so that the first part fits
    # on the current page. returns (index of block, text.BreakPoint) for a
    # split inside the block, (index of block, None) for a split after
    # it, or None if there is no such place.
    def findSplit(self, group):
        parts = self.materialize(group)
        best = None
        used = 0

        for i, blk in enumerate(group):
            # the first part ends with blk, or a piece of it
            room = self.room(blk)
            more = 1 if blk.cue is not None else 0

            if blk.isSplittable():
                pre = len(parts[i]) - len(blk.lines)

                for bp in blk.breakPoints:
                    if (used + pre + bp.lineCount + more) > room:
                        break

                    best = (i, bp)

            used += len(parts[i])

            if used > room:
                break

            if (
                ((i + 1) < len(group))
                and (blk.kind == screenplay.DIALOGUE)
                and (blk.cue is not None)
                and (group[i + 1].cue is blk.cue)
                and ((used + 1) <= room)
            ):
                best = (i, None)

        return best

    def splitGroup(self, group, i, bp):
        cfg = self.cfg
        blk = group[i]

        if bp is None:
            head = group[: i + 1]
            tail = group[i + 1 :]
        else:
            h, t = blk.split(bp)
            head = group[:i] + [h]
            tail = [t] + group[i + 1 :]

        for lines in self.materialize(head):
            self.addLines(lines)

        self.lastBlock = head[-1]

        if blk.cue is not None:
            self.page.lines.append(
                text.Line([(cfg.strMore, 0)], cfg.moreColumn, blk.elemId)
            )
            tail = [blk.cue.continued(cfg.strDialogueContinued)] + tail

        log.debug("split %r at %r", blk, bp)

        self.breakPage(False, tail[0])

        return tail

    # break group at the page boundary, for groups that don't fit on an
    # empty page and have no place to split.
    def forceSplit(self, group):
        cfg = self.cfg

        lines = [ln for blkLines in self.materialize(group) for ln in blkLines]
        room = self.room(group[-1], False)

        cue = None
        for blk in group:
            if blk.cue is not None:
                cue = blk.cue
                break

        # room for (MORE), and for the repeated cue on the next page
        if (cue is not None) and ((room - 1) <= len(cue.lines)):
            cue = None

        take = max(room - (1 if cue is not None else 0), 1)

        last = group[-1]
        for blk in group:
            if blk.elemId == lines[take - 1].elemId:
                last = blk

        w = LayoutWarning(
            last.elemId,
            last.elem.sourceline,
            "%s does not fit on a page, breaking it by force"
            % screenplay.kind2name(last.kind),
        )
        log.warning("%s", w)
        self.warnings.append(w)

        self.addLines(lines[:take])
        self.lastBlock = last

        if cue is not None:
            self.page.lines.append(
                text.Line([(cfg.strMore, 0)], cfg.moreColumn, last.elemId)
            )

        # the rest is carried over as plain lines
        tailBlk = self.carryOver(group[-1], lines[take:])
        tail = [tailBlk]

        if cue is not None:
            tail.insert(0, cue.continued(cfg.strDialogueContinued))

        self.breakPage(False, tailBlk)

        return tail

    def carryOver(self, blk, lines):
        dropped = len([ln for ln in lines if ln.droppable])

        b = copy.copy(blk)
        b.lines = lines
        b.spaceBefore = 0
        b.tokens = None
        b.breakPoints = []
        b.keepWithNext = False
        b.disp = disposition.Disposition(len(lines), disposition.ATOMIC, dropped)

        return b

    # returns True if a page break before nextBlock is inside a scene and
    # should be marked as such
    def continuesScene(self, nextBlock):
        last = self.lastBlock

        return (
            self.continueds
            and (last is not None)
            and (nextBlock is not None)
            and bool(last.sceneSeq)
            and not last.endsScene
            and (nextBlock.sceneSeq == last.sceneSeq)
        )

    # end current page and start a new one. 'forced' is True for breaks
    # not caused by the page being full. 'nextBlock' is the block that
    # goes on the new page, if known.
    def breakPage(self, forced, nextBlock):
        cfg = self.cfg
        page = self.page
        cont = self.continuesScene(nextBlock)

        self.dropTrailing()

        if cont:
            if not forced:
                self.pad(self.capacity - _CONTINUED_LINES)

            page.lines.append(text.blank())
            page.lines.append(
                text.Line(
                    [(cfg.strContinuedPageEnd, 0)], cfg.sceneContinuedColumn
                )
            )
        elif not forced:
            self.pad(self.capacity)

        page.forced = forced

        log.debug("page %d done, %d lines", page.number, len(page.lines))

        self.newPage()

        if cont:
            self.addContinuedHeader(self.lastBlock)

    def pad(self, n):
        while len(self.page.lines) < n:
            self.page.lines.append(text.blank())

    # put "CONTINUED:" at the top of the page, for the scene of blk
    def addContinuedHeader(self, blk):
        cfg = self.cfg
        seq = blk.sceneSeq

        nr = self.sceneConts.get(seq, 0) + 1
        self.sceneConts[seq] = nr

        s = cfg.strContinuedPageStart

        if nr > 1:
            s += " (%d)" % nr

        line = text.Line([(s, 0)], cfg.getType(screenplay.SLUG).indent)
        if blk.sceneLabel:
            if self.numbering in (screenplay.NUMBERING_RIGHT, screenplay.NUMBERING_FULL):
                line = line.withSuffix(
                    blk.sceneLabel, cfg.sceneNumberRightColumn, minGap=1
                )

            if self.numbering in (screenplay.NUMBERING_LEFT, screenplay.NUMBERING_FULL):
                line = line.withPrefix(
                    blk.sceneLabel, cfg.sceneNumberLeftColumn, minGap=1
                )

        self.page.lines.append(line)
        self.page.lines.append(text.blank())

    def finish(self):
        self.dropTrailing()

        # a page break at the very end doesn't leave an empty page behind
        if (
            (len(self.pages) > 1)
            and not self.page.lines
            and self.pages[-2].forced
        ):
            self.pages.pop()


# paginate blocks, returning a Pagination
def paginate(blocks, cfg, numbering=screenplay.NUMBERING_NONE):
    return Paginator(cfg, numbering).run(blocks)
