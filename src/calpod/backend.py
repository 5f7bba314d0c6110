"""Calendar backend interface.

This is the (small) contract a calendar implementation must follow for the
pod to expose it. It lives outside :mod:`calpod.protocol` so the protocol
remains calendar-agnostic; the pod only ever talks to a :class:`Backend`.

Argument and result shapes are :class:`msgspec.Struct` types, so the JSON
the host sends can be decoded straight into them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

import msgspec


# Backend exceptions. The text of each is copied verbatim into the
# 'ex-message' of a failed invoke response.

class BackendError(Exception):
    """Base class for all calendar backend errors."""

    message = "Calendar operation failed"

    def __init__(self, message: str = None):
        Exception.__init__(self, message or self.message)


class AccessDenied(BackendError):
    """Calendar access was not granted."""

    message = "Access denied"


class InvalidDateFormat(BackendError):
    """A date was not in 'yyyy-MM-dd HH:mm' form."""

    message = "Invalid date format"


class CalendarNotFound(BackendError):
    """No calendar with the requested title exists."""

    message = "Calendar not found"


class EventNotFound(BackendError):
    """No event with the requested identifier exists."""

    message = "Event not found"


class ReadOnlyCalendar(BackendError):
    """The calendar exists but does not accept new events."""

    message = "Calendar is read-only"


# Argument shapes, one per invokable var.

class AddEventArgs(msgspec.Struct):
    calendar: str
    title: str
    start: str
    end: str


class ListEventsArgs(msgspec.Struct):
    calendar: str
    start: str
    end: str


class SearchEventsArgs(msgspec.Struct):
    calendar: str
    start: str
    end: str
    query: str


# Result shapes.

class Event(msgspec.Struct):
    id: str
    title: str
    start: str
    end: str


class CalendarInfo(msgspec.Struct):
    title: str
    identifier: str
    writable: bool = True


class Backend(ABC):
    """Minimal contract for a calendar backend.

    Every operation other than :meth:`request_access` must make sure access
    has been granted before doing anything else; :meth:`ensure_access` does
    exactly that. Calls are synchronous: an implementation that has to wait
    on something (a permission prompt, say) blocks until it settles.
    """

    @abstractmethod
    def request_access(self) -> bool:
        """Ask for calendar access; return whether it was granted."""

    @abstractmethod
    def add_event(self, calendar: str, title: str, start: str, end: str) -> None:
        """Create an event in the calendar titled *calendar*."""

    @abstractmethod
    def list_events(self, calendar: str, start: str, end: str) -> List[Event]:
        """Return the events of *calendar* that fall within start..end."""

    @abstractmethod
    def search_events(self, calendar: str, start: str, end: str, query: str) -> List[Event]:
        """Like :meth:`list_events`, restricted to titles containing *query*,
        compared case-insensitively.
        """

    @abstractmethod
    def list_calendars(self) -> List[CalendarInfo]:
        """Return every calendar this backend can see."""

    def ensure_access(self) -> None:
        """Raise :class:`AccessDenied` unless :meth:`request_access` grants access."""

        if not self.request_access():
            raise AccessDenied()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
