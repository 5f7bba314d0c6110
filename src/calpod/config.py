""" Runtime settings for a pod process. Settings come from the environment
    first, and any command-line arguments given to the pod override them;
    see :func:`Settings.from_environment` and :mod:`calpod.__main__`.
"""

import os
from typing import Optional

import msgspec


class Settings(msgspec.Struct):
    """ The knobs a pod process exposes.

        :ivar log_level: Name of the logging level for stderr diagnostics.
        :ivar data_file: Where the local backend persists its calendars;
            None keeps everything in memory.
        :ivar grant_access: The answer the local backend gives to every
            request for calendar access.
        :ivar chunk: Bytes requested per read from standard input.
    """

    log_level: str = 'WARNING'
    data_file: Optional[str] = None
    grant_access: bool = True
    chunk: int = 1


    @classmethod
    def from_environment(cls, environ=None):
        """ Build :class:`Settings` from *environ*, which defaults to
            :data:`os.environ`. Recognized variables are ``CALPOD_LOG_LEVEL``,
            ``CALPOD_DATA``, ``CALPOD_ACCESS`` (``grant`` or ``deny``), and
            ``CALPOD_CHUNK``. Absent the ``CALPOD_DATA`` variable, the data
            file is ``calendars.json`` in the :func:`directory`.
        """

        if environ is None:
            environ = os.environ

        settings = cls()

        level = environ.get('CALPOD_LOG_LEVEL')
        if level:
            settings.log_level = level.upper()

        data_file = environ.get('CALPOD_DATA')
        if data_file:
            settings.data_file = os.path.expanduser(os.path.expandvars(data_file))
        else:
            settings.data_file = os.path.join(directory(environ=environ), 'calendars.json')

        access = environ.get('CALPOD_ACCESS')
        if access:
            access = access.lower()
            if access == 'grant':
                settings.grant_access = True
            elif access == 'deny':
                settings.grant_access = False
            else:
                raise ValueError("CALPOD_ACCESS must be 'grant' or 'deny', not " + repr(access))

        chunk = environ.get('CALPOD_CHUNK')
        if chunk:
            try:
                chunk = int(chunk)
            except ValueError:
                raise ValueError('CALPOD_CHUNK must be an integer, not ' + repr(chunk)) from None
            if chunk < 1:
                raise ValueError('CALPOD_CHUNK must be at least 1')
            settings.chunk = chunk

        return settings


# end of class Settings



def directory(environ=None):
    """ Return the directory location where persistent pod data lives.
        This defaults to ``$HOME/.calpod``, but can be overridden by setting
        the ``CALPOD_HOME`` environment variable. The directory is not created
        here; :class:`calpod.store.LocalBackend` creates it on first write.
    """

    if environ is None:
        environ = os.environ

    found = environ.get('CALPOD_HOME')

    if found:
        return os.path.expanduser(found)

    home = os.path.expanduser('~')
    return os.path.join(home, '.calpod')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
