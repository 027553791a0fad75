from unittest import TestCase

from flask import json

from asana_resources import Client
from asana_resources.testing import StubAPI

BASE_URI = 'https://app.asana.test/api/1.0'


def user_payload(gid, name, **kwargs):
    payload = {"gid": gid, "resource_type": "user", "name": name}
    payload.update(kwargs)
    return payload


class BaseTestCase(TestCase):

    def setUp(self):
        super(BaseTestCase, self).setUp()
        self.api = StubAPI(BASE_URI)
        self.client = self.create_client()

    def create_client(self, **config):
        return Client(transport=self.api, **config)

    def assertJSONEqual(self, first, second, msg=None):
        self.assertEqual(json.loads(json.dumps(first)), json.loads(json.dumps(second)), msg)

    def stub_pages(self, path, pages):
        """
        Stubs a paginated endpoint. ``pages`` is a list of lists of JSON objects; the ``offset`` query
        parameter selects the page.
        """
        def handler(response):
            index = int(response.request.params.get('offset', 0))
            next_page = None
            if index + 1 < len(pages):
                next_page = {
                    "offset": str(index + 1),
                    "path": "{}?limit=20&offset={}".format(path, index + 1),
                    "uri": "{}{}?limit=20&offset={}".format(BASE_URI, path, index + 1)
                }
            response.body = {"data": pages[index], "next_page": next_page}

        self.api.on('GET', path, handler)
