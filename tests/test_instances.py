import threading

from asana_resources import Collection
from asana_resources.exceptions import MalformedResponseError, ServerError
from asana_resources.instances import HAS_PAGE, EXHAUSTED
from asana_resources.resources import User, users
from asana_resources.signals import page_fetched
from tests import BaseTestCase, user_payload


def user_pages(*sizes):
    pages, gid = [], 0
    for size in sizes:
        page = []
        for _ in range(size):
            gid += 1
            page.append(user_payload(str(gid), "User {}".format(gid)))
        pages.append(page)
    return pages


class CollectionTestCase(BaseTestCase):

    def setUp(self):
        super(CollectionTestCase, self).setUp()
        self.stub_pages('/workspaces/W/users', user_pages(20, 20, 5))

    def test_iterate_all_pages(self):
        collection = users.find_by_workspace(self.client, 'W')

        self.assertEqual(1, self.api.call_count())
        self.assertEqual(HAS_PAGE, collection.state)
        self.assertEqual(20, len(collection.elements))

        items = list(collection)

        self.assertEqual(45, len(items))
        self.assertEqual([str(i) for i in range(1, 46)], [user.gid for user in items])
        self.assertTrue(all(isinstance(user, User) for user in items))
        self.assertEqual(3, self.api.call_count('GET', '/workspaces/W/users'))
        self.assertEqual(2, collection.fetch_count)
        self.assertEqual(EXHAUSTED, collection.state)
        self.assertTrue(collection.exhausted)
        self.assertIsNone(collection.cursor)

    def test_page_requests(self):
        list(users.find_by_workspace(self.client, 'W'))

        self.assertEqual([{'limit': 20}, {'limit': 20, 'offset': '1'}, {'limit': 20, 'offset': '2'}],
                         [dict(request.params) for request in self.api.calls])

    def test_replay_without_refetch(self):
        collection = users.find_by_workspace(self.client, 'W')

        first = [user.gid for user in collection]
        second = [user.gid for user in collection]

        self.assertEqual(first, second)
        self.assertEqual(3, self.api.call_count())
        self.assertEqual(45, len(collection.materialized))

    def test_lazy_fetch(self):
        collection = users.find_by_workspace(self.client, 'W')
        iterator = iter(collection)

        for _ in range(20):
            next(iterator)
        self.assertEqual(1, self.api.call_count())

        next(iterator)
        self.assertEqual(2, self.api.call_count())

    def test_take(self):
        collection = users.find_by_workspace(self.client, 'W')

        self.assertEqual(['1', '2', '3'], [user.gid for user in collection.take(3)])
        self.assertEqual(0, collection.fetch_count)

        self.assertEqual(25, len(collection.take(25)))
        self.assertEqual(1, collection.fetch_count)

        self.assertEqual(45, len(collection.take(100)))
        self.assertEqual(2, collection.fetch_count)

    def test_next_page(self):
        collection = users.find_by_workspace(self.client, 'W')

        second = collection.next_page()
        self.assertIsInstance(second, Collection)
        self.assertEqual([str(i) for i in range(21, 41)], [user.gid for user in second.elements])
        self.assertEqual(2, self.api.call_count())

        again = collection.next_page()
        self.assertEqual([user.gid for user in second.elements], [user.gid for user in again.elements])
        self.assertEqual(2, self.api.call_count())

        third = second.next_page()
        self.assertEqual(5, len(third.elements))
        self.assertTrue(third.exhausted)
        self.assertIsNone(third.next_page())
        self.assertEqual(3, self.api.call_count())

    def test_single_page(self):
        self.api.reply('GET', '/workspaces/W2/users', {
            "data": [user_payload("1", "A"), user_payload("2", "B")],
            "next_page": None
        })
        collection = users.find_by_workspace(self.client, 'W2')

        self.assertTrue(collection.exhausted)
        self.assertEqual(['1', '2'], [user.gid for user in collection])
        self.assertIsNone(collection.next_page())
        self.assertEqual(1, self.api.call_count())

    def test_empty(self):
        self.api.reply('GET', '/workspaces/W2/users', {"data": []})
        collection = users.find_by_workspace(self.client, 'W2')

        self.assertEqual([], list(collection))
        self.assertEqual(EXHAUSTED, collection.state)
        self.assertEqual('<Collection[user] 0 items>', repr(collection))

    def test_failure_keeps_cursor(self):
        pages = user_pages(2, 2)
        attempts = []

        @self.api.on('GET', '/workspaces/W3/users')
        def handler(response):
            offset = response.request.params.get('offset')
            if offset is None:
                response.body = {"data": pages[0], "next_page": {"offset": "abc", "path": "/workspaces/W3/users"}}
                return

            attempts.append(offset)
            if len(attempts) == 1:
                response.status = 500
                response.body = {"errors": [{"message": "Server Error"}]}
            else:
                response.body = {"data": pages[1], "next_page": None}

        collection = users.find_by_workspace(self.client, 'W3')

        with self.assertRaises(ServerError):
            list(collection)

        self.assertEqual(HAS_PAGE, collection.state)
        self.assertEqual({"offset": "abc", "path": "/workspaces/W3/users"}, collection.cursor)
        self.assertEqual(2, len(collection.materialized))
        self.assertEqual(0, collection.fetch_count)

        self.assertEqual(['1', '2', '3', '4'], [user.gid for user in collection])
        self.assertEqual(['abc', 'abc'], attempts)
        self.assertEqual(1, collection.fetch_count)

    def test_path_cursor(self):
        self.api.reply('GET', '/workspaces/W4/users', {"data": [user_payload("7", "G")]})

        collection = Collection([], next_page={"path": "/workspaces/W4/users?limit=5&offset=xyz"},
                                type='user', client=self.client)

        self.assertEqual(['7'], [user.gid for user in collection])
        self.assertEqual({'limit': '5', 'offset': 'xyz'}, dict(self.api.calls[0].params))

    def test_offset_cursor_without_request(self):
        collection = Collection([user_payload("1", "A")], next_page={"offset": "xyz"}, type='user', client=self.client)
        iterator = iter(collection)
        next(iterator)

        with self.assertRaises(MalformedResponseError) as cm:
            next(iterator)
        self.assertEqual('Malformed response: next_page has neither a path nor an offset for a known request',
                         str(cm.exception))
        self.assertEqual(0, self.api.call_count())
        self.assertEqual(HAS_PAGE, collection.state)

    def test_page_fetched_signal(self):
        fetched = []

        def receiver(sender, request, page, items):
            fetched.append((sender, request.params.get('offset'), page, len(items)))

        collection = users.find_by_workspace(self.client, 'W')
        with page_fetched.connected_to(receiver):
            list(collection)

        self.assertEqual([(collection, '1', 1, 20), (collection, '2', 2, 5)], fetched)

    def test_concurrent_iteration(self):
        collection = users.find_by_workspace(self.client, 'W')
        results = []

        def consume():
            results.append([user.gid for user in collection])

        threads = [threading.Thread(target=consume) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(4, len(results))
        for result in results:
            self.assertEqual([str(i) for i in range(1, 46)], result)
        self.assertEqual(2, collection.fetch_count)
        self.assertEqual(3, self.api.call_count())

    def test_repr(self):
        collection = users.find_by_workspace(self.client, 'W')
        self.assertEqual('<Collection[user] 20 items, more available>', repr(collection))
