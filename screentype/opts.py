import sys

USAGE = """\
usage: screentype [options] INPUT

Lay out a screenplay XML document and write it as PostScript (or PDF).
Documents whose root is not <screenplay> are fragments; for them, and
with --elements, the element tree is dumped instead.

options:
  -o FILE       write output to FILE instead of standard output
  --pdf         write PDF instead of PostScript
  --conf FILE   load layout config from FILE
  --elements    dump the element tree with each element's disposition
  -v            verbose logging
  -h, --help    show this help
"""


def init(args=None):
    global conf, filename, output, elements, pdf, verbose, showHelp, error

    if args is None:
        args = sys.argv[1:]

    # name of config file to use, or None
    conf = None

    # input filename, or None
    filename = None

    # output filename, or None for standard output
    output = None

    # dump element tree instead of converting
    elements = False

    # write PDF instead of PostScript
    pdf = False

    verbose = False
    showHelp = False

    # usage error message, or None
    error = None

    i = 0
    while i < len(args):
        arg = args[i]

        if arg in ("-h", "--help"):
            showHelp = True
        elif arg == "-v":
            verbose = True
        elif arg == "--elements":
            elements = True
        elif arg == "--pdf":
            pdf = True
        elif arg in ("--conf", "-o"):
            if (i + 1) < len(args):
                if arg == "--conf":
                    conf = args[i + 1]
                else:
                    output = args[i + 1]

                i += 1
            else:
                error = "option %s needs an argument" % arg
        elif arg.startswith("-") and (arg != "-"):
            error = "unknown option %s" % arg
        elif filename is None:
            filename = arg
        else:
            error = "only one input file can be given"

        i += 1

    if (filename is None) and not showHelp and (error is None):
        error = "no input file given"
