# exception classes


class ScreentypeError(Exception):
    def __init__(self, msg):
        Exception.__init__(self, msg)
        self.msg = msg

    def __str__(self):
        return str(self.msg)


class ConfigError(ScreentypeError):
    def __init__(self, msg):
        ScreentypeError.__init__(self, msg)


class MiscError(ScreentypeError):
    def __init__(self, msg):
        ScreentypeError.__init__(self, msg)


# the input document is malformed or has an attribute outside its domain.
# 'elemName' is the offending element's tag name and 'line' its line in
# the source document, both optional.
class StructureError(ScreentypeError):
    def __init__(self, msg, elemName=None, line=None):
        ScreentypeError.__init__(self, msg)
        self.elemName = elemName
        self.line = line

    def __str__(self):
        s = str(self.msg)

        if self.elemName:
            s = "<%s>: %s" % (self.elemName, s)

        if self.line is not None:
            s = "line %d: %s" % (self.line, s)

        return s
