import logging
import sys

import screentype.config as config
import screentype.export as export
import screentype.opts as opts
import screentype.reader as reader
import screentype.screenplay as screenplay
import screentype.util as util
from screentype.error import ScreentypeError, StructureError

log = logging.getLogger(__name__)

# exit statuses
EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2


def readInput(filename):
    if filename == "-":
        return reader.load(sys.stdin.buffer.read())

    return reader.loadFile(filename)


def writeOutput(filename, data):
    if filename is None:
        if isinstance(data, str):
            data = data.encode("UTF-8")

        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
    else:
        util.writeToFile(filename, data)


def run():
    if opts.conf:
        cfg = config.loadFile(opts.conf)
    else:
        cfg = config.Config()

    root = readInput(opts.filename)

    if opts.elements or not isinstance(root, screenplay.Screenplay):
        writeOutput(opts.output, export.dump(root, cfg))

        return

    if opts.pdf:
        fmt = export.FORMAT_PDF
    else:
        fmt = export.FORMAT_PS

    res = export.convert(root, cfg, fmt)

    writeOutput(opts.output, res.data)

    log.info(
        "%d pages, %d layout warnings", res.pageCount, len(res.warnings)
    )


def main(args=None):
    opts.init(args)

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if opts.verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )

    if opts.showHelp:
        sys.stdout.write(opts.USAGE)

        return EXIT_OK

    if opts.error:
        sys.stderr.write("screentype: %s\n\n%s" % (opts.error, opts.USAGE))

        return EXIT_USAGE

    try:
        run()
    except StructureError as e:
        sys.stderr.write("screentype: %s: %s\n" % (opts.filename, e))

        return EXIT_ERROR
    except ScreentypeError as e:
        sys.stderr.write("screentype: %s\n" % e)

        return EXIT_ERROR

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
