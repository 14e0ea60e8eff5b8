# ut:ignore
import os

import screentype.config as config
import screentype.reader as reader
import screentype.screenplay as screenplay


# return new default Config. title page is off, so page counts in tests
# are body pages only.
def cfg():
    c = config.Config()
    c.titlePage = False

    return c


def fixtureFilePath(filePathRelativeToFixturesDir: str) -> str:
    location = os.path.dirname(__file__) + "/fixtures/"

    return os.path.join(location, filePathRelativeToFixturesDir)


# load document from the given file, relative to the fixtures directory
def load(filename="sample.xml"):
    return reader.loadFile(fixtureFilePath(filename))


# load document from given string
def loadString(s: str):
    return reader.load(s)


# return a complete screenplay document with 'body' (XML text) as its body
def wrap(body: str, numbering: str = "none") -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<screenplay numbering="%s">\n'
        "<head><title>Test</title><authors><fullName>A. Writer</fullName>"
        "</authors></head>\n"
        "<body>\n%s\n</body>\n"
        "</screenplay>\n" % (numbering, body)
    )


def elem(kind, *content, **attrs):
    return screenplay.Element(kind, list(content), attrs)


def br():
    return elem(screenplay.BREAK)


def em(*content):
    return elem(screenplay.EMPHASIS, *content)


def p(*content, **attrs):
    return elem(screenplay.PARAGRAPH, *content, **attrs)


def slug(*content, **attrs):
    return elem(screenplay.SLUG, *content, **attrs)


def cue(*content, **attrs):
    return elem(screenplay.CUE, *content, **attrs)


def d(*content, **attrs):
    return elem(screenplay.DIALOGUE, *content, **attrs)


def pageBreak():
    return elem(screenplay.PAGEBREAK)


# return new Screenplay with a minimal head and 'elems' as its body
def doc(*elems, numbering=screenplay.NUMBERING_NONE):
    sp = screenplay.Screenplay(numbering)
    sp.title = elem(screenplay.TITLE, "Test")
    sp.authors = [elem(screenplay.FULLNAME, "A. Writer")]

    for e in elems:
        sp.add(e)

    return sp


# return list of 'count' one-line paragraphs
def paras(count, start=1):
    return [p("Para %d." % i) for i in range(start, start + count)]
