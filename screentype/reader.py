# reads screenplay XML documents into screenplay.Screenplay objects.
#
# a document whose root is not <screenplay> is a fragment: any other
# element of the vocabulary (a <body>, a single <p>, ...). fragments can't
# be laid out, but they can be dumped.

import logging

from lxml import etree

import screentype.screenplay as screenplay
import screentype.util as util
from screentype.error import StructureError

log = logging.getLogger(__name__)

# maximum size of an input file we accept. this only exists to avoid
# reading /dev/zero and the like.
MAX_FILE_SIZE = 10000000

# head children, in the order they must appear in, and whether they're
# required
_headOrder = (
    (screenplay.SERIES, False),
    (screenplay.TITLE, True),
    (screenplay.AUTHORS, True),
    (screenplay.NOTE, False),
    (screenplay.CONTACT, False),
)


def _makeParser():
    return etree.XMLParser(
        remove_comments=True,
        remove_pis=True,
        resolve_entities=False,
        no_network=True,
    )


class _Reader:
    def fail(self, msg, node):
        raise StructureError(msg, self.getTag(node), node.sourceline)

    # return tag of node without any namespace
    def getTag(self, node):
        return etree.QName(node).localname

    def getKind(self, node):
        kind = screenplay.tag2kind(self.getTag(node))

        if kind is None:
            self.fail("unknown element", node)

        return kind

    # return element children of node, skipping entity references and
    # the like
    def getChildren(self, node):
        return [c for c in node if isinstance(c.tag, str)]

    # check that node only has attributes in 'allowed'. namespaced
    # attributes (xsi:schemaLocation etc.) are ignored.
    def checkAttrs(self, node, allowed):
        for name in node.attrib:
            if name.startswith("{"):
                continue

            if name not in allowed:
                self.fail("attribute '%s' not allowed here" % name, node)

    # check that a container element has no text of its own
    def checkNoText(self, node):
        if node.text and node.text.strip():
            self.fail("text not allowed here", node)

        for c in node:
            if c.tail and c.tail.strip():
                self.fail("text not allowed here", node)

    def readScreenplay(self, node):
        self.checkAttrs(node, ("numbering",))
        self.checkNoText(node)

        s = node.get("numbering", "none")
        numbering = screenplay.str2numbering(s)

        if numbering is None:
            self.fail("invalid numbering '%s'" % s, node)

        sp = screenplay.Screenplay(numbering)

        children = self.getChildren(node)
        kinds = [self.getKind(c) for c in children]

        if kinds != [screenplay.HEAD, screenplay.BODY]:
            self.fail("must contain a head followed by a body", node)

        self.readHead(children[0], sp)

        for elem in self.readBody(children[1]).content:
            sp.add(elem)

        return sp

    def readHead(self, node, sp):
        self.checkAttrs(node, ())
        self.checkNoText(node)

        children = self.getChildren(node)
        i = 0

        for kind, required in _headOrder:
            if (i < len(children)) and (self.getKind(children[i]) == kind):
                child = children[i]
                i += 1

                if kind == screenplay.AUTHORS:
                    sp.authors = self.readAuthors(child).content
                elif kind == screenplay.SERIES:
                    sp.series = self.readText(child, kind)
                elif kind == screenplay.TITLE:
                    sp.title = self.readText(child, kind)
                elif kind == screenplay.NOTE:
                    sp.note = self.readText(child, kind)
                else:
                    sp.contact = self.readText(child, kind)

            elif required:
                self.fail(
                    "missing <%s>" % screenplay.kind2tag(kind), node
                )

        if i < len(children):
            self.fail("element not allowed here", children[i])

    def readAuthors(self, node):
        self.checkAttrs(node, ())
        self.checkNoText(node)

        authors = []

        for c in self.getChildren(node):
            if self.getKind(c) != screenplay.FULLNAME:
                self.fail("element not allowed here", c)

            authors.append(self.readText(c, screenplay.FULLNAME))

        if not authors:
            self.fail("at least one <fullName> is required", node)

        return screenplay.Element(
            screenplay.AUTHORS, authors, sourceline=node.sourceline
        )

    def readBody(self, node):
        self.checkAttrs(node, ())
        self.checkNoText(node)

        elems = [self.readBodyElement(c) for c in self.getChildren(node)]

        return screenplay.Element(screenplay.BODY, elems, sourceline=node.sourceline)

    def readBodyElement(self, node):
        kind = self.getKind(node)

        if kind not in screenplay.BODY_KINDS:
            self.fail("element not allowed in body", node)

        if kind in (screenplay.PAGEBREAK, screenplay.BREAK):
            self.checkAttrs(node, ())

            if (node.text and node.text.strip()) or self.getChildren(node):
                self.fail("element must be empty", node)

            return screenplay.Element(kind, sourceline=node.sourceline)

        return self.readText(node, kind)

    # read an element whose content is text
    def readText(self, node, kind):
        self.checkAttrs(node, screenplay.ATTRIBUTES.get(kind, ()))

        return screenplay.Element(
            kind,
            self.readContent(node),
            self.readAttrs(node, kind),
            node.sourceline,
        )

    # return mixed content of node as a list of str and inline Elements
    def readContent(self, node):
        content = []

        if node.text:
            content.append(node.text)

        for c in node:
            if isinstance(c.tag, str):
                kind = self.getKind(c)

                if kind == screenplay.BREAK:
                    self.checkAttrs(c, ())

                    if (c.text and c.text.strip()) or self.getChildren(c):
                        self.fail("element must be empty", c)

                    content.append(
                        screenplay.Element(kind, sourceline=c.sourceline)
                    )

                elif kind == screenplay.EMPHASIS:
                    self.checkAttrs(c, ())

                    content.append(
                        screenplay.Element(
                            kind, self.readContent(c), sourceline=c.sourceline
                        )
                    )

                else:
                    self.fail("element not allowed in text", c)

            if c.tail:
                content.append(c.tail)

        return content

    def readAttrs(self, node, kind):
        attrs = {}

        for name in screenplay.ATTRIBUTES.get(kind, ()):
            s = node.get(name)

            if s is None:
                continue

            if name == "addition":
                if not s.strip():
                    self.fail("addition must not be empty", node)

                attrs[name] = s
                continue

            try:
                val = int(s.strip())
            except ValueError:
                self.fail("%s '%s' is not an integer" % (name, s), node)

            if (name == "indent") and not (
                screenplay.INDENT_MIN <= val <= screenplay.INDENT_MAX
            ):
                self.fail(
                    "indent %d not in range %d-%d"
                    % (val, screenplay.INDENT_MIN, screenplay.INDENT_MAX),
                    node,
                )

            attrs[name] = val

        return attrs

    # read a document whose root is not <screenplay>
    def readFragment(self, node):
        kind = self.getKind(node)

        if kind == screenplay.BODY:
            elem = self.readBody(node)
            screenplay.numberElements(elem.content)

        elif kind == screenplay.HEAD:
            sp = screenplay.Screenplay()
            self.readHead(node, sp)

            content = [e for e in (sp.series, sp.title) if e]
            content.append(
                screenplay.Element(screenplay.AUTHORS, sp.authors)
            )
            content.extend(e for e in (sp.note, sp.contact) if e)

            elem = screenplay.Element(kind, content, sourceline=node.sourceline)

        elif kind == screenplay.AUTHORS:
            elem = self.readAuthors(node)

        elif kind in screenplay.BODY_KINDS:
            elem = self.readBodyElement(node)
            screenplay.numberElements([elem])

        elif kind in screenplay.TEXT_KINDS:
            elem = self.readText(node, kind)

        else:
            self.fail("element can't be a document root", node)

        return elem

    def read(self, root):
        if self.getKind(root) == screenplay.SCREENPLAY:
            return self.readScreenplay(root)

        log.debug("reading fragment <%s>", self.getTag(root))

        return self.readFragment(root)


# parse XML document in 'data' (bytes or str). returns a
# screenplay.Screenplay, or for fragments, a screenplay.Element. raises
# StructureError on any problem with the document.
def load(data):
    if isinstance(data, str):
        data = data.encode("UTF-8")

    if not data.strip():
        raise StructureError("empty document")

    try:
        root = etree.fromstring(data, _makeParser())
    except etree.XMLSyntaxError as e:
        raise StructureError("invalid XML: %s" % e.msg, line=e.lineno)

    return _Reader().read(root)


# like load, but from a file. raises MiscError if the file can't be read.
def loadFile(filename):
    return load(util.loadFile(filename, MAX_FILE_SIZE, binary=True))
