""" The pod itself: the loop that reads requests from the host, acts on
    them, and writes back responses. The calendar work is delegated to a
    :class:`calpod.backend.Backend`; everything here is protocol.
"""

import enum
import logging
import sys

from . import protocol
from .backend import AddEventArgs, ListEventsArgs, SearchEventsArgs
from .protocol import fields
from .protocol.errors import FramingMalformed, RequestMalformed

logger = logging.getLogger(__name__)


NAMESPACE = 'calendar'


class State(enum.Enum):
    RUNNING = 'running'
    TERMINATED = 'terminated'



def describe():
    """ Return the manifest sent in answer to a describe request. The
        search-events var is invokable but, as with earlier releases of this
        pod, is not advertised here.
    """

    manifest = dict()
    manifest[fields.FORMAT] = fields.JSON

    names = list()
    for name in Pod.described:
        names.append({fields.NAME: name})

    namespace = dict()
    namespace[fields.NAME] = NAMESPACE
    namespace[fields.VARS] = names

    manifest[fields.NAMESPACES] = [namespace]
    manifest[fields.OPS] = {fields.SHUTDOWN: {}}

    return protocol.wrap(manifest)



class Pod:
    """ The :class:`Pod` reads one request at a time from *input*, handles
        it completely, including any call into the *backend*, and writes at
        most one response to *output* before reading the next request. The
        *input* and *output* default to the binary standard input and output
        streams; *chunk* is passed through to the :class:`protocol.Reader`.

        A :class:`Pod` starts out :attr:`State.RUNNING` and becomes
        :attr:`State.TERMINATED` on a shutdown request, when the input
        closes, or when a response cannot be written.

        :ivar vars: Maps each invokable var name, without its namespace, to
            the argument shape it expects and the method that handles it.
        :ivar described: The var names listed in the describe manifest.
    """

    vars = {
        'add-event': (AddEventArgs, 'inv_add_event'),
        'list-events': (ListEventsArgs, 'inv_list_events'),
        'search-events': (SearchEventsArgs, 'inv_search_events'),
    }

    described = ('add-event', 'list-events')

    def __init__(self, backend, input=None, output=None, chunk=1):

        if input is None:
            input = sys.stdin.buffer

        if output is None:
            output = sys.stdout.buffer

        self.backend = backend
        self.reader = protocol.Reader(input, chunk)
        self.output = output
        self.state = State.RUNNING
        self.manifest = describe()


    def run(self):
        """ Handle requests until the pod terminates. The return value is the
            exit status for the process: zero after a shutdown request or
            the end of the input, one if writing a response failed.
        """

        while self.state is State.RUNNING:

            try:
                value = self.reader.read()
            except FramingMalformed as e:
                logger.warning("discarding malformed input: %s", str(e))
                continue

            if value is None:
                logger.debug("input closed, stopping")
                self.state = State.TERMINATED
                break

            response = self.handle(value)

            if response is None:
                continue

            try:
                self.write(response)
            except OSError as e:
                # Nobody is left to tell about this.
                logger.critical("cannot write response: %s", str(e))
                self.state = State.TERMINATED
                return 1

        return 0


    def handle(self, value):
        """ Handle one decoded top-level *value*. Returns the response
            :class:`protocol.Value` to send, or None if there is nothing to
            send; a request that cannot be interpreted is logged and
            produces no response.
        """

        try:
            request = protocol.Request.from_value(value)
            response = self.req_handler(request)
        except RequestMalformed as e:
            logger.warning("ignoring request: %s", str(e))
            return None

        return response


    def write(self, value):

        self.output.write(protocol.encode(value))
        self.output.flush()


    def req_handler(self, request):
        """ Inspect the request op and decide how a response will be
            generated.
        """

        op = request.op
        logger.debug("received %r", request)

        if op == fields.DESCRIBE:
            response = self.req_describe(request)
        elif op == fields.INVOKE:
            response = self.req_invoke(request)
        elif op == fields.SHUTDOWN:
            response = self.req_shutdown(request)
        else:
            raise RequestMalformed('unhandled request op: ' + op)

        return response


    def req_describe(self, request):
        return self.manifest


    def req_shutdown(self, request):
        logger.debug("shutdown requested")
        self.state = State.TERMINATED
        return None


    def req_invoke(self, request):
        """ Dispatch an invoke request to the handler for its var. Every
            failure past this point, whether in decoding the arguments or in
            the backend itself, becomes an error response for the host.
        """

        namespace, ignored, name = request.var.partition('/')

        if namespace != NAMESPACE or name not in self.vars:
            raise RequestMalformed('unknown var: ' + repr(request.var))

        shape, method = self.vars[name]
        method = getattr(self, method)

        try:
            arguments = request.arguments(shape)
            result = method(arguments)
            response = protocol.Response.done(request.id, result)
        except Exception as e:
            logger.info("%s failed: %s: %s", request.var, type(e).__name__, str(e))
            response = protocol.Response.failed(request.id, e)

        return response.to_value()


    def inv_add_event(self, arguments):

        backend = self.backend
        backend.add_event(arguments.calendar, arguments.title, arguments.start, arguments.end)
        return 'ok'


    def inv_list_events(self, arguments):

        backend = self.backend
        return backend.list_events(arguments.calendar, arguments.start, arguments.end)


    def inv_search_events(self, arguments):

        backend = self.backend
        return backend.search_events(arguments.calendar, arguments.start, arguments.end, arguments.query)


# end of class Pod


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
