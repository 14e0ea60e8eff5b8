import pytest

import screentype.reader as reader
import screentype.screenplay as screenplay
import u
from screentype.error import MiscError, StructureError


def testLoadSample():
    sp = u.load()

    assert isinstance(sp, screenplay.Screenplay)
    assert sp.numbering == screenplay.NUMBERING_FULL
    assert sp.getTitle() == "The Long Night"
    assert sp.series.getText() == "Tales of the City"
    assert sp.getAuthorNames() == ["Jane Doe", "John Smith"]
    assert sp.note.getText() == "Based on a true story."
    assert sp.contact.getText() == "123 Main Street\nSpringfield"

    assert [e.getTag() for e in sp.body] == [
        "act", "open", "slug", "p", "cue", "d", "dir", "d", "br", "p",
        "trans", "slug", "p", "pageBreak", "act", "slug", "p", "close", "end",
    ]
    assert [e.id for e in sp.body] == list(range(19))

    # comments don't count, and lines are those of the source file
    assert sp.body[0].sourceline == 15

    assert sp.body[4].getAttr("addition") == "V.O."
    assert sp.body[9].getAttr("indent") == 4
    assert sp.body[14].getAttr("number") == 3
    assert sp.body[11].getAttr("addition") == "2A"


def testMixedContent():
    sp = u.load()
    content = sp.body[3].content

    assert content[0] == "A small kitchen. The light is off. "
    assert content[1].kind == screenplay.EMPHASIS
    assert content[1].content == ["Someone"]
    assert content[2] == " is waiting."

    content = sp.body[9].content
    assert content[1].kind == screenplay.BREAK


def testNumbering():
    for s, numbering in (
        ("none", screenplay.NUMBERING_NONE),
        ("left", screenplay.NUMBERING_LEFT),
        ("right", screenplay.NUMBERING_RIGHT),
        ("full", screenplay.NUMBERING_FULL),
    ):
        sp = u.loadString(u.wrap("<p>x</p>", s))
        assert sp.numbering == numbering

    sp = u.loadString(u.wrap("<p>x</p>").replace(' numbering="none"', ""))
    assert sp.numbering == screenplay.NUMBERING_NONE


def testNonAscii():
    sp = u.loadString(u.wrap("<p>Café – “ok”</p>"))

    assert sp.body[0].getText() == "Café – “ok”"


def testNamespacedAttributes():
    s = u.wrap("<p>x</p>").replace(
        "<screenplay ",
        '<screenplay xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
        'xsi:noNamespaceSchemaLocation="screenplay.xsd" ',
    )

    assert len(u.loadString(s).body) == 1


def loadError(s):
    with pytest.raises(StructureError) as e:
        u.loadString(s)

    return e.value


def testIndentOutOfRange():
    e = loadError(u.wrap('<p indent="70">x</p>'))

    assert e.elemName == "p"
    assert e.line == 5
    assert str(e).startswith("line 5: <p>: ")
    assert "70" in str(e)

    loadError(u.wrap('<d indent="-1">x</d>'))

    sp = u.loadString(u.wrap('<d indent="65">x</d>'))
    assert sp.body[0].getAttr("indent") == 65


def testBadAttributes():
    e = loadError(u.wrap('<p indent="abc">x</p>'))
    assert e.elemName == "p"

    e = loadError(u.wrap('<act number="one">ACT ONE</act>'))
    assert e.elemName == "act"

    # attributes that don't apply
    e = loadError(u.wrap('<p addition="A">x</p>'))
    assert e.elemName == "p"

    # an empty addition would leave the scene without a label
    e = loadError(u.wrap('<slug addition=" ">x</slug>'))
    assert e.elemName == "slug"
    assert "addition" in str(e)

    loadError(u.wrap('<cue addition="">x</cue>'))
    loadError(u.wrap('<slug indent="2">x</slug>'))
    loadError(u.wrap('<cue number="2">x</cue>'))

    e = loadError(u.wrap("<p>x</p>", "both"))
    assert e.elemName == "screenplay"


def testBadStructure():
    e = loadError(u.wrap("<foo>x</foo>"))
    assert e.elemName == "foo"
    assert e.line == 5

    # text directly in body
    e = loadError(u.wrap("hello <p>x</p>"))
    assert e.elemName == "body"

    # block element inside text
    e = loadError(u.wrap("<p>a <slug>b</slug></p>"))
    assert e.elemName == "slug"

    e = loadError(u.wrap("<pageBreak>x</pageBreak>"))
    assert e.elemName == "pageBreak"

    # head elements in body
    loadError(u.wrap("<title>x</title>"))


def testBadHead():
    loadError(
        "<screenplay><head><authors><fullName>A</fullName></authors></head>"
        "<body/></screenplay>"
    )

    loadError(
        "<screenplay><head><title>T</title><authors/></head><body/></screenplay>"
    )

    loadError(
        "<screenplay><head><title>T</title></head><body/></screenplay>"
    )

    # wrong order
    loadError(
        "<screenplay><head><authors><fullName>A</fullName></authors>"
        "<title>T</title></head><body/></screenplay>"
    )

    # no body
    e = loadError(
        "<screenplay><head><title>T</title><authors><fullName>A</fullName>"
        "</authors></head></screenplay>"
    )
    assert e.elemName == "screenplay"


def testSyntaxError():
    e = loadError("<screenplay>\n<head>\n</screenplay>")

    assert e.line is not None
    assert str(e).startswith("line ")

    loadError("")


def testEmptyBody():
    sp = u.loadString(u.wrap(""))

    assert sp.body == []


def testFragments():
    elem = u.loadString("<body><p>Hi.</p><br/><pageBreak/></body>")

    assert isinstance(elem, screenplay.Element)
    assert elem.kind == screenplay.BODY
    assert [e.id for e in elem.content] == [0, 1, 2]

    elem = u.loadString('<d indent="2">Hello.</d>')
    assert elem.kind == screenplay.DIALOGUE
    assert elem.id == 0
    assert elem.getAttr("indent") == 2

    elem = u.loadString("<authors><fullName>A</fullName></authors>")
    assert elem.kind == screenplay.AUTHORS
    assert len(elem.content) == 1

    elem = u.loadString(
        "<head><title>T</title><authors><fullName>A</fullName></authors></head>"
    )
    assert elem.kind == screenplay.HEAD

    # fragments are checked as well
    loadError('<p indent="100">x</p>')


def testLoadFileMissing():
    with pytest.raises(MiscError):
        reader.loadFile(u.fixtureFilePath("missing.xml"))
