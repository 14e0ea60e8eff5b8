version = "0.9.0"

# name used in the document-structure header of generated files
progName = "screentype"


def getProducer():
    return "%s %s" % (progName, version)
