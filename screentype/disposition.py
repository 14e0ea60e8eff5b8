# Disposition of an element: how many lines it prints, whether and how it
# can be broken across pages, and how many of its lines are bare breaks
# that may be dropped at a page edge. Classification looks at one element
# alone; relations between neighbours are the composer's business.

import re

import screentype.config as config
import screentype.screenplay as screenplay
import screentype.text as text
import screentype.util as util
from screentype.error import StructureError

# breakability classes
ATOMIC = 0
OPTIONAL = 1
FORCED_AFTER = 2

_breakable2str = {
    ATOMIC: "atomic",
    OPTIONAL: "optional",
    FORCED_AFTER: "forced-after",
}

# kinds whose element must end up on the same page as the start of the
# element following it
KEEP_WITH_NEXT = frozenset((screenplay.CUE, screenplay.SLUG))

# kinds the paginator may split at their internal break points
SPLITTABLE = frozenset((screenplay.PARAGRAPH, screenplay.DIALOGUE))


class Disposition:
    def __init__(self, printedLines, breakable, droppable=0, keepWithNext=False):
        self.printedLines = printedLines
        self.breakable = breakable

        # how many of the printed lines are break-only lines
        self.droppable = droppable

        self.keepWithNext = keepWithNext

    def __eq__(self, other):
        return isinstance(other, Disposition) and (
            (self.printedLines, self.breakable, self.droppable, self.keepWithNext)
            == (
                other.printedLines,
                other.breakable,
                other.droppable,
                other.keepWithNext,
            )
        )

    def __repr__(self):
        return "Disposition(%s)" % self

    def __str__(self):
        s = "lines=%d %s droppable=%d" % (
            self.printedLines,
            _breakable2str[self.breakable],
            self.droppable,
        )

        if self.keepWithNext:
            s += " keep-with-next"

        return s


# element text filled to its column budget
class Wrapped:
    def __init__(self, tokens, width, lines, breakPoints):
        self.tokens = tokens
        self.width = width

        # list of segment lists, see text.fill
        self.lines = lines
        self.breakPoints = breakPoints


# return the element's 'indent' attribute, 0 if missing. raises
# StructureError if it's out of range.
def getIndent(elem):
    indent = elem.getAttr("indent", 0)

    if (
        not isinstance(indent, int)
        or indent < screenplay.INDENT_MIN
        or indent > screenplay.INDENT_MAX
    ):
        raise StructureError(
            "indent %r not in range %d-%d"
            % (indent, screenplay.INDENT_MIN, screenplay.INDENT_MAX),
            elem.getTag(),
            elem.sourceline,
        )

    return indent


def wrapWidth(elem, cfg):
    t = cfg.getType(elem.kind)

    return max(t.width - getIndent(elem), config.MIN_WRAP_WIDTH)


# return the tokens an element prints
def getTokens(elem):
    tokens = text.tokenize(elem.content)

    addition = elem.getAttr("addition")

    if (elem.kind == screenplay.CUE) and addition:
        tokens += text.tokenize(["(%s)" % addition])

    return tokens


def wrap(elem, cfg):
    tokens = getTokens(elem)
    width = wrapWidth(elem, cfg)
    lines, breakPoints = text.fill(tokens, width)

    return Wrapped(tokens, width, lines, breakPoints)


# returns True if tokens contain no words, only breaks
def isBare(tokens):
    for tok in tokens:
        if tok is not text.BREAK:
            return False

    return True


def classify(elem, cfg, wrapped=None):
    kind = elem.kind

    if kind == screenplay.PAGEBREAK:
        return Disposition(0, FORCED_AFTER)

    if kind == screenplay.BREAK:
        return Disposition(1, ATOMIC, 1)

    if kind not in screenplay.BODY_KINDS:
        raise StructureError(
            "unknown element kind %s" % screenplay.kind2name(kind),
            elem.getTag(),
            elem.sourceline,
        )

    if wrapped is None:
        wrapped = wrap(elem, cfg)

    if isBare(wrapped.tokens):
        n = max(1, len(wrapped.lines))

        return Disposition(n, ATOMIC, n)

    if wrapped.breakPoints:
        breakable = OPTIONAL
    else:
        breakable = ATOMIC

    return Disposition(len(wrapped.lines), breakable, 0, kind in KEEP_WITH_NEXT)


# return a readable rendering of an element's content, with inline
# elements shown as tags
def _contentStr(content):
    s = ""

    for it in content:
        if isinstance(it, str):
            s += re.sub(r"\s+", " ", it)
        elif it.kind == screenplay.BREAK:
            s += "<br/>"
        elif it.kind == screenplay.EMPHASIS:
            s += "<em>%s</em>" % _contentStr(it.content)
        else:
            s += "<%s/>" % it.getTag()

    return s


def _quote(s):
    return '"%s"' % s.strip().replace("\\", "\\\\").replace('"', '\\"')


def _attrStr(elem):
    s = ""

    for name in ("indent", "addition", "number"):
        if name in elem.attrs:
            v = elem.attrs[name]

            if isinstance(v, str):
                v = _quote(v)

            s += " %s=%s" % (name, v)

    return s


def _dumpElement(s, elem, depth, cfg):
    s += "  " * depth

    if elem.id != -1:
        s += "#%d " % elem.id

    s += elem.getName() + _attrStr(elem)

    if elem.kind in screenplay.BODY_KINDS:
        try:
            s += " [%s]" % classify(elem, cfg)
        except StructureError as e:
            s += " [error: %s]" % e.msg

    if elem.kind in screenplay.TEXT_KINDS:
        s += " " + _quote(_contentStr(elem.content))
        s += "\n"
    else:
        s += "\n"

        for child in elem.children():
            _dumpElement(s, child, depth + 1, cfg)


# return a deterministic, human readable dump of the element tree with
# each body element's disposition. 'root' is a Screenplay or, for
# fragments, an Element.
def dump(root, cfg=None):
    if cfg is None:
        cfg = config.Config()

    s = util.String()

    if isinstance(root, screenplay.Screenplay):
        s += "Screenplay numbering=%s\n" % screenplay.numbering2str(root.numbering)
        s += "  Head\n"

        for elem in (root.series, root.title):
            if elem:
                _dumpElement(s, elem, 2, cfg)

        s += "    Authors\n"

        for elem in root.authors:
            _dumpElement(s, elem, 3, cfg)

        for elem in (root.note, root.contact):
            if elem:
                _dumpElement(s, elem, 2, cfg)

        s += "  Body\n"

        for elem in root.body:
            _dumpElement(s, elem, 2, cfg)
    else:
        _dumpElement(s, root, 0, cfg)

    return str(s)
