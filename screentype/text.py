# Text handling for the fixed-pitch layout: turning element content into
# words, filling words into lines of a given width, and the styled Line
# objects the rest of the layout works with.
#
# Text follows typewriter conventions: a word that ends a sentence is
# followed by two spaces, and the end of a sentence is also the only place
# where a paragraph may be split across pages (besides mandatory breaks).
# A backslash before whitespace gives a single space that does not end a
# sentence, for things like "INT.\ HOUSE" or "Mr.\ Smith".

import re
from typing import List, Optional, Sequence, Tuple

import screentype.pml as pml
import screentype.screenplay as screenplay
from screentype.error import StructureError

# (text, flags) run of same-styled text. flags are pml text flags.
Segment = Tuple[str, int]

_WHITESPACE = " \t\n\r"

# typewriter equivalents of typographic characters
_typewriter = {
    "—": "--",
    "–": "-",
    "…": "...",
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
}

# word ending a sentence: ., ! or ? possibly followed by closing quotes
# and brackets
_eosRe = re.compile(r"[.!?]['\")\]]*$")


# mandatory line break in a token list
class Break:
    def __repr__(self):
        return "BREAK"


BREAK = Break()


# append text to a list of segments, merging it into the last segment if
# the flags are the same
def _append(segs: List[Segment], text: str, flags: int) -> None:
    if not text:
        return

    if segs and segs[-1][1] == flags:
        segs[-1] = (segs[-1][0] + text, flags)
    else:
        segs.append((text, flags))


# a single word, possibly with differently styled parts
class Word:
    def __init__(self, segments: Optional[List[Segment]] = None, eos: bool = False):
        self.segments: List[Segment] = segments if segments is not None else []

        # whether this word ends a sentence
        self.eos: bool = eos

    def __len__(self) -> int:
        return sum(len(s[0]) for s in self.segments)

    def __repr__(self) -> str:
        return "Word(%r%s)" % (self.getText(), ", eos" if self.eos else "")

    def add(self, s: str, flags: int) -> None:
        _append(self.segments, s, flags)

    def getText(self) -> str:
        return "".join(s[0] for s in self.segments)

    def firstFlags(self) -> int:
        return self.segments[0][1] if self.segments else 0

    def lastFlags(self) -> int:
        return self.segments[-1][1] if self.segments else 0

    # return characters [start, end) as a new Word. only a slice reaching
    # the end of the word can end a sentence.
    def slice(self, start: int, end: int) -> "Word":
        w = Word(eos=self.eos and end >= len(self))
        pos = 0

        for text, fl in self.segments:
            a = max(start - pos, 0)
            b = min(end - pos, len(text))

            if a < b:
                w.add(text[a:b], fl)

            pos += len(text)

        return w


class _Tokenizer:
    def __init__(self):
        self.tokens = []

        # word being collected, or None
        self.word = None

        # True if the previous character was an unescaped backslash
        self.escape = False
        self.escapeFlags = 0

    def feed(self, content, flags):
        for it in content:
            if isinstance(it, str):
                self.feedText(it, flags)
            elif it.kind == screenplay.BREAK:
                self.endWord()
                self.tokens.append(BREAK)
            elif it.kind == screenplay.EMPHASIS:
                self.feed(it.content, flags | pml.UNDERLINED)
            else:
                raise StructureError(
                    "element not allowed in text", it.getTag(), it.sourceline
                )

    def feedText(self, s, flags):
        for ch in s:
            if self.escape:
                self.escape = False

                if ch in _WHITESPACE:
                    self.endWord(False)
                else:
                    self.addChar(ch, flags)

            elif ch == "\\":
                self.escape = True
                self.escapeFlags = flags

            elif ch in _WHITESPACE:
                self.endWord()

            else:
                self.addChar(_typewriter.get(ch, ch), flags)

    def addChar(self, s, flags):
        if self.word is None:
            self.word = Word()

        self.word.add(s, flags)

    def endWord(self, canEndSentence=True):
        if self.word is None:
            return

        self.word.eos = canEndSentence and bool(_eosRe.search(self.word.getText()))
        self.tokens.append(self.word)
        self.word = None

    def finish(self):
        # a trailing lone backslash is literal
        if self.escape:
            self.addChar("\\", self.escapeFlags)
            self.escape = False

        self.endWord()

        return self.tokens


# turn element content (str and inline BREAK / EMPHASIS elements) into a
# list of Words and BREAKs. 'flags' are the text flags of the content.
def tokenize(content: Sequence, flags: int = pml.NORMAL) -> list:
    tz = _Tokenizer()
    tz.feed(content, flags)

    return tz.finish()


# place where text can be split between pages: the first 'tokenIndex'
# tokens fill exactly 'lineCount' lines.
class BreakPoint:
    def __init__(self, tokenIndex: int, lineCount: int):
        self.tokenIndex: int = tokenIndex
        self.lineCount: int = lineCount

    def __repr__(self) -> str:
        return "BreakPoint(%d, %d)" % (self.tokenIndex, self.lineCount)

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, BreakPoint)
            and self.tokenIndex == other.tokenIndex
            and self.lineCount == other.lineCount
        )


# join words into segments, with sentence spacing. the space between two
# underlined words is underlined as well.
def _joinWords(words: List[Word]) -> List[Segment]:
    segs: List[Segment] = []
    prev = None

    for w in words:
        if prev is not None:
            sep = "  " if prev.eos else " "
            _append(segs, sep, prev.lastFlags() & w.firstFlags() & pml.UNDERLINED)

        for s, fl in w.segments:
            _append(segs, s, fl)

        prev = w

    return segs


# fill tokens greedily into lines at most 'width' characters wide. words
# longer than that are split. returns (lines, breakPoints), where lines is
# a list of segment lists and breakPoints lists the places inside the text
# where it may be split, in order.
def fill(tokens: list, width: int) -> Tuple[List[List[Segment]], List[BreakPoint]]:
    width = max(width, 1)

    lines: List[List[Word]] = []
    breakPoints: List[BreakPoint] = []

    # words on the line being filled, or None if no line is open
    cur: Optional[List[Word]] = None
    curLen = 0
    prev: Optional[Word] = None

    for i, tok in enumerate(tokens):
        if tok is BREAK:
            lines.append(cur if cur is not None else [])
            cur = None
            prev = None

            # a sentence ending right before the break splits after it
            if breakPoints and breakPoints[-1].tokenIndex == i:
                breakPoints.pop()

            breakPoints.append(BreakPoint(i + 1, len(lines)))

            continue

        word = tok

        if cur is not None:
            sep = 2 if prev.eos else 1

            if (curLen + sep + len(word)) <= width:
                cur.append(word)
                curLen += sep + len(word)
            else:
                lines.append(cur)
                cur = None

        if cur is None:
            while len(word) > width:
                lines.append([word.slice(0, width)])
                word = word.slice(width, len(word))

            cur = [word]
            curLen = len(word)

        prev = word

        if word.eos:
            breakPoints.append(BreakPoint(i + 1, len(lines) + 1))

    if cur is not None:
        lines.append(cur)

    # only points strictly inside the text are useful
    n = len(lines)
    breakPoints = [
        bp for bp in breakPoints if (0 < bp.lineCount < n) and (bp.tokenIndex < len(tokens))
    ]

    return [_joinWords(ln) for ln in lines], breakPoints


# one physical output line: styled text starting at 'column' (characters
# from the left margin). lines are never modified after creation, the
# with* methods return new ones.
class Line:
    def __init__(
        self,
        segments: Sequence[Segment] = (),
        column: int = 0,
        elemId: int = -1,
        droppable: bool = False,
    ):
        self.segments: Tuple[Segment, ...] = tuple(segments)
        self.column: int = column

        # id of the element this line came from, -1 for lines added by
        # the paginator
        self.elemId: int = elemId

        # break-only line that may be dropped at a page edge
        self.droppable: bool = droppable

    def __len__(self) -> int:
        return sum(len(s[0]) for s in self.segments)

    def __repr__(self) -> str:
        return "Line(%d, %r)" % (self.column, self.getText())

    def getText(self) -> str:
        return "".join(s[0] for s in self.segments)

    def isBlank(self) -> bool:
        return self.getText().strip() == ""

    # return copy of the line placed at another column
    def moved(self, column: int) -> "Line":
        return Line(self.segments, column, self.elemId, self.droppable)

    # return new line starting at 'column' with 's' in front of our text.
    # our text stays at its column if there is room for 's' and at least
    # 'minGap' spaces, otherwise it moves right.
    def withPrefix(
        self, s: str, column: int, flags: int = pml.NORMAL, minGap: int = 0
    ) -> "Line":
        gap = max(self.column - column - len(s), minGap)

        segs: List[Segment] = []
        _append(segs, s, flags)
        _append(segs, " " * gap, pml.NORMAL)

        for text, fl in self.segments:
            _append(segs, text, fl)

        return Line(segs, column, self.elemId, False)

    # return new line with 's' after our text. if 'column' is given, 's'
    # is padded to start there, with at least 'minGap' spaces before it.
    def withSuffix(
        self,
        s: str,
        column: Optional[int] = None,
        flags: int = pml.NORMAL,
        minGap: int = 0,
    ) -> "Line":
        segs = list(self.segments)

        if column is not None:
            gap = max(column - self.column - len(self), minGap)
            _append(segs, " " * gap, pml.NORMAL)

        _append(segs, s, flags)

        return Line(segs, self.column, self.elemId, False)


# return a blank line
def blank(elemId: int = -1, droppable: bool = False) -> Line:
    return Line((), 0, elemId, droppable)


# return content filled to 'width' as a list of plain strings, for places
# that print text without styling (title page, outline entries)
def plainLines(content: Sequence, width: int = 1000) -> List[str]:
    lines, breakPoints = fill(tokenize(content), width)

    return ["".join(s[0] for s in segs) for segs in lines]
