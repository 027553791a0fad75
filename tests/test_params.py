from unittest import TestCase

from asana_resources import required, require, MissingParameterError
from asana_resources.resources import users
from tests import BaseTestCase


class RequireTestCase(TestCase):

    def test_returns_value(self):
        self.assertEqual('W', require('workspace', 'W'))
        self.assertEqual(0, require('limit', 0))
        self.assertEqual(False, require('archived', False))

    def test_missing(self):
        for value in (None, required):
            with self.assertRaises(MissingParameterError) as cm:
                require('workspace', value)
            self.assertEqual('workspace', cm.exception.parameter)
            self.assertIn('"workspace"', str(cm.exception))

    def test_operation_in_message(self):
        with self.assertRaises(MissingParameterError) as cm:
            require('workspace', None, 'find_by_workspace')
        self.assertEqual('find_by_workspace', cm.exception.operation)
        self.assertEqual('Missing required parameter "workspace" for find_by_workspace()', str(cm.exception))

    def test_required_repr(self):
        self.assertEqual('required', repr(required))


class RequiredParametersTestCase(BaseTestCase):

    def assertMissing(self, name, operation, *args, **kwargs):
        with self.assertRaises(MissingParameterError) as cm:
            operation(*args, **kwargs)
        self.assertEqual(name, cm.exception.parameter)
        self.assertEqual(0, self.api.call_count())

    def test_find_by_workspace(self):
        self.assertMissing('workspace', users.find_by_workspace, self.client)
        self.assertMissing('workspace', users.find_by_workspace, self.client, workspace=None)
        self.assertMissing('workspace', self.client.users.find_by_workspace)

    def test_find_by_id(self):
        self.assertMissing('id', users.find_by_id, self.client)

    def test_favorites(self):
        self.assertMissing('workspace', users.get_user_favorites, self.client, 'me', resource_type='project')
        self.assertMissing('resource_type', users.get_user_favorites, self.client, 'me', workspace='W')
        self.assertMissing('user', users.get_user_favorites, self.client, workspace='W', resource_type='project')
