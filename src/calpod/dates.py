""" Conversion between :class:`datetime.datetime` and the one date format a
    host uses for event times, ``yyyy-MM-dd HH:mm``.
"""

import datetime
import re

from .backend import InvalidDateFormat


pattern = '%Y-%m-%d %H:%M'

# strptime() alone is lenient about zero-padding ('2024-1-5 9:0' parses);
# the host always sends the padded form, and so must we.
_shape = re.compile(r'\d{4}-\d{2}-\d{2} \d{2}:\d{2}')


def parse(text):
    """ Return the naive :class:`datetime.datetime` described by *text*.
        Raises :class:`InvalidDateFormat` if *text* is not exactly in
        ``yyyy-MM-dd HH:mm`` form, or names a date that does not exist.
    """

    if not isinstance(text, str) or _shape.fullmatch(text) is None:
        raise InvalidDateFormat()

    try:
        return datetime.datetime.strptime(text, pattern)
    except ValueError:
        raise InvalidDateFormat() from None



def format(moment):
    """ The inverse of :func:`parse`.
    """

    return moment.strftime(pattern)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
