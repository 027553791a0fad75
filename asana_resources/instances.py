from itertools import islice
import logging
import threading
from urllib.parse import urlsplit, parse_qsl
import weakref

from .exceptions import MalformedResponseError
from .routes import Request
from .signals import page_fetched

log = logging.getLogger(__name__)

HAS_PAGE = 'has_page'
EXHAUSTED = 'exhausted'


class Collection(object):
    """
    A lazy, ordered sequence of resources spread over one or more pages.

    Iterating a collection yields the items of the pages fetched so far and then fetches the following
    page, one request at a time, whenever the items run out and the last page had a ``next_page`` cursor.
    Iterating again replays the fetched pages without new requests. If fetching a page fails, the error
    is raised from the iteration and the collection keeps its cursor, so that the same page can be
    requested again.

    :param list elements: the resources of the first page
    :param dict next_page: the continuation cursor of the first page, or ``None``
    :param type: the resource type expected for items
    :param client: the :class:`Client` used to fetch further pages
    :param routes.Request request: the request that produced the first page
    :param bool strict: passed to the resource factory for further pages
    """

    def __init__(self, elements, next_page=None, type=None, client=None, request=None, strict=None):
        self._pages = [list(elements or ())]
        self._cursors = [next_page or None]
        self._lock = threading.Lock()
        self.type = type
        self.strict = strict
        self.request = request
        self.client = client if client is None or isinstance(client, weakref.ProxyTypes) else weakref.proxy(client)
        self.fetch_count = 0

    @property
    def elements(self):
        """
        The resources of the first page.
        """
        return self._pages[0]

    @property
    def materialized(self):
        """
        All resources fetched so far, in order.
        """
        return [item for page in self._pages for item in page]

    @property
    def cursor(self):
        """
        The continuation cursor of the last fetched page; ``None`` once the last page has been fetched.
        """
        return self._cursors[-1]

    @property
    def state(self):
        return EXHAUSTED if self.cursor is None else HAS_PAGE

    @property
    def exhausted(self):
        return self.cursor is None

    def __iter__(self):
        index = 0
        while self._ensure_page(index):
            for item in self._pages[index]:
                yield item
            index += 1

    def take(self, n):
        """
        Returns a list of the first ``n`` items, fetching only the pages needed to get them.
        """
        return list(islice(self, n))

    def next_page(self):
        """
        Returns the page following the first one as a new :class:`Collection`, or ``None`` if there is no
        such page. The page is fetched at most once, whether through this method or through iteration.
        """
        if not self._ensure_page(1):
            return None
        return Collection(self._pages[1],
                          next_page=self._cursors[1],
                          type=self.type,
                          client=self.client,
                          request=self._next_request(self._cursors[0]),
                          strict=self.strict)

    def _next_request(self, cursor):
        offset = cursor.get('offset')
        if offset is not None and self.request is not None:
            return self.request.with_params(offset=offset)

        if not cursor.get('path'):
            raise MalformedResponseError('next_page has neither a path nor an offset for a known request')

        split = urlsplit(cursor['path'])
        if self.request is None:
            return Request('GET', split.path, dict(parse_qsl(split.query)), {}, None)

        params = dict(self.request.params)
        params.update(parse_qsl(split.query))
        return self.request._replace(path=split.path, params=params)

    def _ensure_page(self, index):
        """
        Fetches pages until the page at ``index`` is available or there are no more pages.

        :return: ``True`` if the page at ``index`` is available
        """
        while index >= len(self._pages):
            if not self._fetch_next_page(len(self._pages)):
                return False
        return True

    def _fetch_next_page(self, count):
        with self._lock:
            if len(self._pages) > count:
                return True
            cursor = self._cursors[-1]
            if cursor is None:
                return False

            index = len(self._pages)
            request = self._next_request(cursor)
            log.debug('Fetching page %d of %s %s', index + 1, request.method, request.path)

            envelope = self.client.dispatch(request)
            elements = self.client.factory.build(envelope.data or [], self.type, self.strict)

            self._pages.append(elements)
            self._cursors.append(envelope.next_page or None)
            self.fetch_count += 1

        page_fetched.send(self, request=request, page=index, items=elements)
        return True

    def __repr__(self):
        name = getattr(self.type, '__name__', self.type) or 'Resource'
        return '<Collection[{}] {} items{}>'.format(name,
                                                   sum(len(page) for page in self._pages),
                                                   '' if self.exhausted else ', more available')
