""" A self-contained :class:`calpod.backend.Backend` that keeps calendars and
    events in memory, optionally persisting them to a JSON file so they
    survive from one pod process to the next.
"""

import logging
import os
import uuid

import msgspec

from . import dates
from . import json
from .backend import (
    Backend,
    CalendarInfo,
    CalendarNotFound,
    Event,
    InvalidDateFormat,
    ReadOnlyCalendar,
)

logger = logging.getLogger(__name__)


class StoredEvent(msgspec.Struct):
    id: str
    calendar: str
    title: str
    start: str
    end: str


class Document(msgspec.Struct):
    calendars: list[CalendarInfo]
    events: list[StoredEvent] = []


def default_calendars():

    calendars = list()
    calendars.append(CalendarInfo('Personal', 'personal-1'))
    calendars.append(CalendarInfo('Work', 'work-1'))
    calendars.append(CalendarInfo('Family', 'family-1', writable=False))
    return calendars



class LocalBackend(Backend):
    """ The :class:`LocalBackend` is the backend the pod runs with when no
        other is supplied. If *path* is given, the calendars and events are
        loaded from that file when it exists, and the file is rewritten
        after every change; with no *path* everything is lost when the
        process exits.

        *grant_access* decides the answer to every :func:`request_access`
        call; setting it to False is the way to exercise the access denied
        path end to end. *calendars* seeds a store that has no file yet,
        defaulting to :func:`default_calendars`.
    """

    def __init__(self, path=None, grant_access=True, calendars=None):

        self.path = path
        self.grant_access = grant_access

        document = None

        if path is not None:
            document = self._load()

        if document is None:
            if calendars is None:
                calendars = default_calendars()
            document = Document(calendars=list(calendars))

        self.calendars = document.calendars
        self.events = document.events


    def request_access(self):
        return bool(self.grant_access)


    def list_calendars(self):
        self.ensure_access()
        return list(self.calendars)


    def add_event(self, calendar, title, start, end):

        self.ensure_access()

        dates.parse(start)
        dates.parse(end)

        found = self._calendar(calendar)

        if not found.writable:
            raise ReadOnlyCalendar()

        event = StoredEvent(str(uuid.uuid4()), calendar, title, start, end)
        events = self.events + [event]

        # Nothing changes in memory unless the file agrees.
        self._save(events)
        self.events = events

        logger.debug("added event %s to %r", event.id, calendar)


    def list_events(self, calendar, start, end):

        self.ensure_access()

        first = dates.parse(start)
        last = dates.parse(end)

        self._calendar(calendar)

        matched = list()

        for event in self.events:
            if event.calendar != calendar:
                continue

            # Events written by hand into the file might not parse; they
            # can't be placed in the range, so they never match.

            try:
                event_start = dates.parse(event.start)
                event_end = dates.parse(event.end)
            except InvalidDateFormat:
                continue

            if event_start >= first and event_end <= last:
                matched.append((event_start, event.title, event))

        matched.sort(key=lambda match: match[:2])

        results = list()
        for match in matched:
            event = match[2]
            results.append(Event(event.id, event.title, event.start, event.end))

        return results


    def search_events(self, calendar, start, end, query):

        query = query.casefold()
        events = self.list_events(calendar, start, end)

        results = list()
        for event in events:
            if query in event.title.casefold():
                results.append(event)

        return results


    def _calendar(self, title):

        for calendar in self.calendars:
            if calendar.title == title:
                return calendar

        raise CalendarNotFound()


    def _load(self):
        """ Return the :class:`Document` stored at *path*, or None if there is
            no such file yet.
        """

        try:
            with open(self.path, 'rb') as stored:
                contents = stored.read()
        except FileNotFoundError:
            return None

        document = json.decode(contents, Document)
        logger.debug("loaded %d calendars and %d events from %s", len(document.calendars), len(document.events), self.path)
        return document


    def _save(self, events):
        """ Write the calendars and *events* out to *path*. The new contents
            go to a temporary file first, which then replaces the original, so
            that a failed write never leaves a truncated file behind.
        """

        if self.path is None:
            return

        document = Document(calendars=self.calendars, events=events)
        contents = json.dumps(document)

        directory = os.path.dirname(self.path)
        if directory and not os.path.exists(directory):
            os.makedirs(directory, mode=0o775)

        temporary = self.path + '.tmp'

        try:
            with open(temporary, 'wb') as stored:
                stored.write(contents)
            os.replace(temporary, self.path)
        finally:
            if os.path.isfile(temporary):
                os.remove(temporary)


# end of class LocalBackend


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
