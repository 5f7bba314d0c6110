""" Entry point for running a calendar pod: ``python -m calpod``, or the
    ``calpod`` console script. The host launches this process and talks to
    it over standard input and output; diagnostics go to standard error.
"""

import argparse
import logging
import sys

from . import config
from . import json
from . import store
from .pod import Pod

logger = logging.getLogger(__name__)


def build_parser():

    description = 'Answer calendar requests from a pod host over stdin/stdout.'
    parser = argparse.ArgumentParser(prog='calpod', description=description)

    parser.add_argument('--log-level', default=None,
        help='logging level for diagnostics on stderr (default: $CALPOD_LOG_LEVEL or WARNING)')
    parser.add_argument('--data', default=None, metavar='FILE',
        help='file the calendars are persisted to (default: $CALPOD_DATA or calendars.json in $CALPOD_HOME)')
    parser.add_argument('--memory', action='store_true',
        help='keep calendars in memory only, nothing is persisted')
    parser.add_argument('--deny-access', action='store_true',
        help='refuse every request for calendar access')
    parser.add_argument('--chunk', type=int, default=None, metavar='BYTES',
        help='bytes requested per read from stdin (default: 1)')

    return parser



def parse_arguments(argv=None):
    return build_parser().parse_args(argv)



def settings(arguments, environ=None):
    """ Merge the parsed command-line *arguments* over the settings found in
        the environment. Raises ValueError for any setting that cannot be
        used.
    """

    found = config.Settings.from_environment(environ)

    if arguments.log_level:
        found.log_level = arguments.log_level.upper()

    if arguments.memory:
        found.data_file = None
    elif arguments.data:
        found.data_file = arguments.data

    if arguments.deny_access:
        found.grant_access = False

    if arguments.chunk is not None:
        if arguments.chunk < 1:
            raise ValueError('--chunk must be at least 1')
        found.chunk = arguments.chunk

    return found



def setup_logging(level):

    root = logging.getLogger()

    try:
        root.setLevel(level)
    except (TypeError, ValueError):
        raise ValueError('unknown log level: ' + repr(level)) from None

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('[calpod] %(levelname)s %(name)s: %(message)s'))
    root.addHandler(handler)



def main(argv=None):

    parser = build_parser()
    arguments = parser.parse_args(argv)

    try:
        found = settings(arguments)
        setup_logging(found.log_level)
    except ValueError as e:
        # Exits with status 2, the same as any other usage error.
        parser.error(str(e))

    try:
        backend = store.LocalBackend(found.data_file, grant_access=found.grant_access)
    except (OSError, json.DecodeError) as e:
        logger.critical("cannot load calendars from %s: %s", found.data_file, str(e))
        return 1

    pod = Pod(backend, chunk=found.chunk)

    status = pod.run()
    logger.debug("exiting with status %d", status)
    return status



if __name__ == '__main__':
    sys.exit(main())


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
