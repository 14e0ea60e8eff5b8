from screentype.error import MiscError

# alignment values
ALIGN_LEFT = 0
ALIGN_CENTER = 1
ALIGN_RIGHT = 2

# Courier advance width, as a fraction of the font size. every glyph in
# the Courier family has the same width (600 units in 1/1000 em).
COURIER_PITCH = 0.6


# return 's' converted to an ISO-8859-1 byte string. characters not
# representable in ISO-8859-1 are replaced with '?'.
def toLatin1(s):
    return s.encode("ISO-8859-1", "replace")


# returns s with all possible different types of newlines converted to
# unix newlines, i.e. a single "\n"
def fixNL(s):
    return s.replace("\r\n", "\n").replace("\r", "\n")


# clamps the given value to a specific range. both limits are optional.
def clamp(val, minVal=None, maxVal=None):
    ret = val

    if minVal is not None:
        ret = max(ret, minVal)

    if maxVal is not None:
        ret = min(ret, maxVal)

    return ret


# like clamp, but gets/sets value directly from given object
def clampObj(obj, name, minVal=None, maxVal=None):
    setattr(obj, name, clamp(getattr(obj, name), minVal, maxVal))


# convert given string to float, clamping it to the given range
# (optional). never throws any exceptions, return defVal (possibly clamped
# as well) on any errors.
def str2float(s, defVal, minVal=None, maxVal=None):
    val = defVal

    try:
        val = float(s)
    except (ValueError, OverflowError):
        pass

    return clamp(val, minVal, maxVal)


# like str2float, but for ints.
def str2int(s, defVal, minVal=None, maxVal=None, radix=10):
    val = defVal

    try:
        val = int(s, radix)
    except ValueError:
        pass

    return clamp(val, minVal, maxVal)


# return 's' centered on 'column', i.e. the column the first character of
# 's' goes to. never returns less than 0.
def centerColumn(s, column):
    return max(0, column - len(s) // 2)


# return height of font in mm, including line spacing. every font we use
# has a line pitch equal to its point size.
def getTextHeight(size):
    return (size / 72.0) * 25.4


# return how many mm wide given text is at given size. all our fonts are
# fixed pitch, so the style does not matter.
def getTextWidth(text, style, size):
    return (len(text) * COURIER_PITCH * size / 72.0) * 25.4


# simple (and fast) string builder.
class String:
    def __init__(self, s=None):

        # character count of data appended
        self.pos = 0

        # list of strings
        self.data = []

        if s:
            self += s

    def __len__(self):
        return self.pos

    def __str__(self):
        return "".join(self.data)

    def __iadd__(self, s):
        s2 = str(s)

        self.data.append(s2)
        self.pos += len(s2)

        return self


# load at most maxSize (all if -1) bytes from 'filename', returning the
# data as a string. raises MiscError on errors.
def loadFile(filename, maxSize=-1, binary=False):
    try:
        if binary:
            f = open(filename, "rb")
        else:
            f = open(filename, "r", encoding="UTF-8")

        with f:
            return f.read(maxSize)

    except (IOError, UnicodeDecodeError) as e:
        raise MiscError("Error loading file '%s': %s" % (filename, e))


# write 'data' to 'filename'. str data is written as UTF-8. raises
# MiscError on errors.
def writeToFile(filename, data):
    try:
        with open(filename, "wb") as f:
            if isinstance(data, str):
                f.write(data.encode("UTF-8"))
            else:
                f.write(data)

    except IOError as e:
        raise MiscError("Error writing file '%s': %s" % (filename, e))
