# the document model: a screenplay is a head (title, authors, ...) and a
# body, which is an ordered list of typed elements. elements are built
# once by the reader (or by hand, in tests) and never modified after
# that; everything downstream only reads them.

# element kinds. the values are only used internally, the names and tags
# are in the table at the end of this file.
SCREENPLAY = 0
HEAD = 1
SERIES = 2
TITLE = 3
AUTHORS = 4
FULLNAME = 5
NOTE = 6
CONTACT = 7
BODY = 8
ACT = 9
CLOSE = 10
CUE = 11
DIALOGUE = 12
DIRECTION = 13
END = 14
OPEN = 15
PARAGRAPH = 16
PAGEBREAK = 17
SLUG = 18
TRANSITION = 19

# inline text-run members
BREAK = 20
EMPHASIS = 21

# scene numbering modes
NUMBERING_NONE = 0
NUMBERING_LEFT = 1
NUMBERING_RIGHT = 2
NUMBERING_FULL = 3

# allowed range for the 'indent' attribute
INDENT_MIN = 0
INDENT_MAX = 65

# kinds that may appear directly in a body
BODY_KINDS = frozenset(
    (
        ACT,
        CLOSE,
        CUE,
        DIALOGUE,
        DIRECTION,
        END,
        OPEN,
        PARAGRAPH,
        PAGEBREAK,
        SLUG,
        TRANSITION,
        BREAK,
    )
)

# kinds whose content is text (plain strings mixed with BREAK and EMPHASIS
# elements)
TEXT_KINDS = frozenset(
    (
        SERIES,
        TITLE,
        FULLNAME,
        NOTE,
        CONTACT,
        ACT,
        CLOSE,
        CUE,
        DIALOGUE,
        DIRECTION,
        END,
        OPEN,
        PARAGRAPH,
        SLUG,
        TRANSITION,
        EMPHASIS,
    )
)

# which attributes each kind accepts. kinds not listed accept none.
ATTRIBUTES = {
    DIALOGUE: ("indent",),
    PARAGRAPH: ("indent",),
    CUE: ("addition",),
    SLUG: ("addition",),
    ACT: ("number",),
}


# a single element of the document tree
class Element:
    def __init__(self, kind, content=None, attrs=None, sourceline=None):

        # one of the kind constants above
        self.kind = kind

        # for text kinds, a list of str and inline Elements; for
        # containers, a list of child Elements.
        self.content = content if content is not None else []

        # attribute name -> value (int for 'indent' and 'number', str for
        # 'addition')
        self.attrs = attrs if attrs is not None else {}

        # document-order index among body-level elements, or -1
        self.id = -1

        # line number in the source document, or None
        self.sourceline = sourceline

    def __repr__(self):
        return "Element(%s, id=%d)" % (kind2name(self.kind), self.id)

    def getName(self):
        return kind2name(self.kind)

    def getTag(self):
        return kind2tag(self.kind)

    def getAttr(self, name, defVal=None):
        return self.attrs.get(name, defVal)

    # return content as plain text, with BREAKs turned into newlines.
    # whitespace is kept as is.
    def getText(self):
        s = ""

        for it in self.content:
            if isinstance(it, str):
                s += it
            elif it.kind == BREAK:
                s += "\n"
            else:
                s += it.getText()

        return s

    # return child elements (skipping text)
    def children(self):
        return [it for it in self.content if isinstance(it, Element)]


# a complete screenplay
class Screenplay:
    def __init__(self, numbering=NUMBERING_NONE):
        self.numbering = numbering

        # head, each an Element or None
        self.series = None
        self.title = None
        self.note = None
        self.contact = None

        # list of FULLNAME Elements, at least one in a valid screenplay
        self.authors = []

        # list of body-level Elements
        self.body = []

    # append element to the body and give it the next id.
    def add(self, elem):
        elem.id = len(self.body)
        self.body.append(elem)

        return elem

    # return the title as a single line of plain text
    def getTitle(self):
        if not self.title:
            return ""

        return " ".join(self.title.getText().split())

    def getAuthorNames(self):
        return [" ".join(a.getText().split()) for a in self.authors]


# give body-level elements in 'elems' consecutive ids, starting at 0.
# used for fragments, which have no Screenplay to do it.
def numberElements(elems):
    i = 0

    for elem in elems:
        elem.id = i
        i += 1


# kind, XML tag, display name
_kinds = (
    (SCREENPLAY, "screenplay", "Screenplay"),
    (HEAD, "head", "Head"),
    (SERIES, "series", "Series"),
    (TITLE, "title", "Title"),
    (AUTHORS, "authors", "Authors"),
    (FULLNAME, "fullName", "FullName"),
    (NOTE, "note", "Note"),
    (CONTACT, "contact", "Contact"),
    (BODY, "body", "Body"),
    (ACT, "act", "Act"),
    (CLOSE, "close", "Close"),
    (CUE, "cue", "Cue"),
    (DIALOGUE, "d", "Dialogue"),
    (DIRECTION, "dir", "Direction"),
    (END, "end", "End"),
    (OPEN, "open", "Open"),
    (PARAGRAPH, "p", "Paragraph"),
    (PAGEBREAK, "pageBreak", "PageBreak"),
    (SLUG, "slug", "Slug"),
    (TRANSITION, "trans", "Transition"),
    (BREAK, "br", "Break"),
    (EMPHASIS, "em", "Emphasis"),
)

_kind2tag = {}
_kind2name = {}
_tag2kind = {}

for _kind, _tag, _name in _kinds:
    _kind2tag[_kind] = _tag
    _kind2name[_kind] = _name
    _tag2kind[_tag] = _kind

_numbering2str = {
    NUMBERING_NONE: "none",
    NUMBERING_LEFT: "left",
    NUMBERING_RIGHT: "right",
    NUMBERING_FULL: "full",
}

_str2numbering = dict((v, k) for k, v in _numbering2str.items())


def kind2name(kind):
    return _kind2name.get(kind, "Unknown(%s)" % kind)


def kind2tag(kind):
    return _kind2tag.get(kind, "?")


# return kind for given tag, or None
def tag2kind(tag):
    return _tag2kind.get(tag)


def numbering2str(numbering):
    return _numbering2str[numbering]


# return numbering mode for given string, or None
def str2numbering(s):
    return _str2numbering.get(s)
