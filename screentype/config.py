# layout configuration. every measurement the composer and the paginator
# use comes from here; columns are in characters relative to the left
# margin, spacings in lines.
#
# the config can be saved to and loaded from a simple "Name:value" text
# format. loading never fails on bad values, they are clamped or ignored.

import screentype.screenplay as screenplay
import screentype.util as util
from screentype.error import ConfigError, MiscError

# standard typed screenplay page: 55 body lines
LINES_ON_PAGE = 55

# never wrap text narrower than this many characters, however big the
# indent
MIN_WRAP_WIDTH = 10

# scene continued modes. with CONTINUEDS_AUTO they're used for documents
# with scene numbers.
CONTINUEDS_OFF = 0
CONTINUEDS_ON = 1
CONTINUEDS_AUTO = 2


# one config variable. 'key' is its name in saved configs. numbers are
# kept between minVal and maxVal. 'choices', if given, are the names the
# values 0, 1, ... are saved as.
class Var:
    def __init__(self, name, defVal, key, minVal=None, maxVal=None, choices=None):
        self.name = name
        self.defVal = defVal
        self.key = key
        self.choices = choices

        if choices:
            minVal, maxVal = 0, len(choices) - 1

        self.minVal = minVal
        self.maxVal = maxVal

    def isNumeric(self):
        return not isinstance(self.defVal, (bool, str))

    def toStr(self, val):
        if self.choices:
            return self.choices[val]
        elif isinstance(self.defVal, bool):
            return str(bool(val))
        elif isinstance(self.defVal, float):
            return "%.2f" % val
        elif isinstance(self.defVal, int):
            return "%d" % val

        return val

    def fromStr(self, s):
        defVal = self.defVal

        if self.choices and (s in self.choices):
            return self.choices.index(s)
        elif isinstance(defVal, bool):
            return s == "True"
        elif isinstance(defVal, float):
            return util.str2float(s, defVal, self.minVal, self.maxVal)
        elif isinstance(defVal, int):
            return util.str2int(s, defVal, self.minVal, self.maxVal)

        # strings must be printable in the Latin 1 output encoding
        return util.toLatin1(s).decode("ISO-8859-1")


# the variables of one config class, in the order they are saved in
class VarList(list):
    def add(self, *params, **kw):
        self.append(Var(*params, **kw))

    def setDefaults(self, obj):
        for v in self:
            setattr(obj, v.name, v.defVal)

    def clamp(self, obj):
        for v in self:
            if v.isNumeric():
                util.clampObj(obj, v.name, v.minVal, v.maxVal)

    def save(self, obj, prefix):
        return "".join(
            "%s%s:%s\n" % (prefix, v.key, v.toStr(getattr(obj, v.name)))
            for v in self
        )

    # set obj's variables from 'vals' (see parseVals), removing the ones
    # used from it
    def load(self, obj, vals, prefix):
        for v in self:
            s = vals.pop(prefix + v.key, None)

            if s is not None:
                setattr(obj, v.name, v.fromStr(s))


# parse "Name:value" lines into a dictionary. lines without a colon are
# ignored.
def parseVals(s):
    vals = {}

    for line in util.fixNL(s).split("\n"):
        if ":" in line:
            name, val = line.split(":", 1)
            vals[name] = val

    return vals


# layout of one element kind
class Type:
    cvars = None

    def __init__(self, kind):

        # element kind
        self.kind = kind

        if not self.__class__.cvars:
            v = self.__class__.cvars = VarList()

            # blank lines wanted before and after the element. the gap
            # between two elements is the larger of the two.
            v.add("spaceBefore", 0, "SpaceBefore", 0, 10)
            v.add("spaceAfter", 0, "SpaceAfter", 0, 10)

            v.add("indent", 0, "Indent", 0, 80)
            v.add("width", 5, "Width", 5, 80)

        self.cvars.setDefaults(self)

    def save(self, prefix):
        prefix += "%s/" % screenplay.kind2name(self.kind)

        return self.cvars.save(self, prefix)

    def load(self, vals, prefix):
        prefix += "%s/" % screenplay.kind2name(self.kind)

        self.cvars.load(self, vals, prefix)


class Config:
    cvars = None

    def __init__(self):

        if not self.__class__.cvars:
            self.setupVars()

        self.__class__.cvars.setDefaults(self)

        # type configs, key = element kind, value = Type
        self.types = {}

        # kind, space before, space after, indent, width
        for kind, before, after, indent, width in (
            (screenplay.ACT, 0, 1, 0, 57),
            (screenplay.CLOSE, 1, 1, 50, 16),
            (screenplay.CUE, 1, 0, 32, 30),
            (screenplay.DIALOGUE, 0, 0, 16, 34),
            (screenplay.DIRECTION, 0, 0, 24, 19),
            (screenplay.END, 1, 0, 0, 57),
            (screenplay.OPEN, 0, 1, 6, 57),
            (screenplay.PARAGRAPH, 1, 1, 6, 57),
            (screenplay.PAGEBREAK, 0, 0, 0, 57),
            (screenplay.SLUG, 2, 1, 6, 57),
            (screenplay.TRANSITION, 1, 1, 50, 16),
            (screenplay.BREAK, 0, 0, 0, 57),
        ):
            t = Type(kind)
            t.spaceBefore = before
            t.spaceAfter = after
            t.indent = indent
            t.width = width
            self.types[kind] = t

        self.recalc()

    def setupVars(self):
        v = self.__class__.cvars = VarList()

        # font size, in points. line pitch is the same.
        v.add("fontSize", 12, "FontSize", 6, 24)

        # paper size, US Letter
        v.add("paperWidth", 215.9, "Paper/Width", 50.0, 1000.0)
        v.add("paperHeight", 279.4, "Paper/Height", 100.0, 1000.0)

        # margins
        v.add("marginLeft", 25.4, "Margin/Left", 0.0, 900.0)
        v.add("marginTop", 25.4, "Margin/Top", 0.0, 900.0)
        v.add("marginBottom", 19.05, "Margin/Bottom", 0.0, 900.0)

        # page capacity in lines. recalc() lowers it if the paper can't
        # hold that many.
        v.add("linesOnPage", LINES_ON_PAGE, "LinesOnPage", 10, 200)

        # line of the page-number header, counted from the top of the
        # paper (1-based), and its column
        v.add("headerLine", 5, "Header/Line", 1, 20)
        v.add("pageNumberColumn", 62, "Header/PageNumberColumn", 0, 80)

        # acts and ends are centered on this column
        v.add("centerColumn", 33, "CenterColumn", 0, 80)

        # scene number columns for left and right numbering
        v.add("sceneNumberLeftColumn", 0, "SceneNumber/LeftColumn", 0, 80)
        v.add("sceneNumberRightColumn", 63, "SceneNumber/RightColumn", 0, 100)

        # (MORE) column
        v.add("moreColumn", 32, "MoreColumn", 0, 80)

        # when scene continueds are used (CONTINUEDS_*), and the column of
        # the "(CONTINUED)" line at the bottom of a page
        v.add(
            "sceneContinueds",
            CONTINUEDS_AUTO,
            "SceneContinueds",
            choices=("Off", "On", "Auto"),
        )
        v.add("sceneContinuedColumn", 50, "SceneContinuedColumn", 0, 80)

        # title page
        v.add("titlePage", True, "TitlePage")
        v.add("titleSkip", 19, "TitlePage/Skip", 0, 50)
        v.add("contactColumn", 2, "TitlePage/ContactColumn", 0, 80)

        # various strings we add to the script
        v.add("strMore", "(MORE)", "String/MoreDialogue")
        v.add("strContinuedPageEnd", "(CONTINUED)", "String/ContinuedPageEnd")
        v.add("strContinuedPageStart", "CONTINUED:", "String/ContinuedPageStart")
        v.add("strDialogueContinued", " (CONT'D)", "String/DialogueContinued")
        v.add("strWrittenBy", "written by", "String/WrittenBy")

    # load config from string 's'. does not throw any exceptions, silently
    # ignores any errors, and always leaves config in an ok state.
    def load(self, s):
        vals = parseVals(str(s))

        self.cvars.load(self, vals, "")

        for t in self.types.values():
            t.load(vals, "Element/")

        self.recalc()

    # save config into a string and return that.
    def save(self):
        s = self.cvars.save(self, "")

        for t in self.types.values():
            s += t.save("Element/")

        return s

    # fix up all invalid config values and recalculate all variables
    # dependent on other variables.
    def recalc(self):
        self.cvars.clamp(self)

        for t in self.types.values():
            t.cvars.clamp(t)

        # make sure usable space on the page isn't too small
        if (self.marginTop + self.marginBottom) >= (self.paperHeight - 50.0):
            self.marginTop = 0.0
            self.marginBottom = 0.0

        # line pitch and character width, in mm
        self.lineHeight = util.getTextHeight(self.fontSize)
        self.charWidth = util.getTextWidth(" ", 0, self.fontSize)

        h = self.paperHeight - self.marginTop - self.marginBottom
        fits = max(1, int(h / self.lineHeight))

        self.linesOnPage = min(self.linesOnPage, fits)

    def getType(self, kind):
        return self.types[kind]

    # whether a document with given numbering mode gets scene continueds
    def useSceneContinueds(self, numbering):
        if self.sceneContinueds == CONTINUEDS_AUTO:
            return numbering != screenplay.NUMBERING_NONE

        return self.sceneContinueds == CONTINUEDS_ON

    # return x position in mm of given column
    def column2x(self, column):
        return self.marginLeft + column * self.charWidth

    # return y position in mm of given body line (0-based)
    def line2y(self, line):
        return self.marginTop + line * self.lineHeight


# return a Config loaded from given file.
def loadFile(filename):
    try:
        s = util.loadFile(filename)
    except MiscError as e:
        raise ConfigError(str(e))

    cfg = Config()
    cfg.load(s)

    return cfg
