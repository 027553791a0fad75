from datetime import datetime, date
import weakref

from asana_resources import fields, Resource, ResourceRegistry
from asana_resources.resources import User, Task, Tag, registry
from tests import BaseTestCase, user_payload


class ResourceTestCase(BaseTestCase):

    def test_meta_defaults(self):
        types = ResourceRegistry()

        class FooBar(Resource):
            class Meta:
                registry = types

        self.assertEqual('foobar', FooBar.meta.name)
        self.assertIsNone(FooBar.meta.plural_name)
        self.assertIs(FooBar, types['foobar'])
        self.assertNotIn('foobar', registry)

    def test_meta_unregistered(self):
        class Scratch(Resource):
            class Meta:
                name = 'scratch'
                registry = None

        self.assertNotIn('scratch', registry)

    def test_schema_inheritance(self):
        types = ResourceRegistry()

        class Base(Resource):
            class Schema:
                name = fields.String()

            class Meta:
                registry = types

        class Derived(Base):
            class Schema:
                count = fields.Integer()

        self.assertEqual(['gid', 'resource_type', 'name', 'count'], list(Derived.schema.fields))
        self.assertEqual(['gid', 'resource_type', 'name'], list(Base.schema.fields))
        self.assertEqual('derived', Derived.meta.name)
        self.assertIs(Derived, types['derived'])

    def test_builtin_types_registered(self):
        for name in ('user', 'workspace', 'project', 'task', 'tag'):
            self.assertIn(name, registry)
        self.assertIs(User, registry['user'])

    def test_read_only(self):
        user = self.client.factory.build(user_payload("1", "Greg"), User)

        with self.assertRaises(AttributeError):
            user.name = 'Bob'
        with self.assertRaises(AttributeError):
            user.email = 'bob@example.com'
        with self.assertRaises(AttributeError):
            del user.name
        self.assertEqual('Greg', user.name)

    def test_raw_access(self):
        raw = user_payload("1", "Greg", custom_field="x")
        user = self.client.factory.build(raw, User)

        self.assertEqual(raw, user.raw)
        self.assertEqual("x", user["custom_field"])
        self.assertIn("custom_field", user)
        self.assertNotIn("email", user)
        self.assertIsNone(user.get("email"))
        self.assertEqual(set(raw), set(user.keys()))
        self.assertFalse(hasattr(user, 'custom_field'))

        with self.assertRaises(KeyError):
            user["email"]

    def test_to_dict(self):
        user = self.client.factory.build(user_payload("1", "Greg", email="greg@example.com", unknown=1), User)
        self.assertEqual({"gid": "1", "resource_type": "user", "name": "Greg", "email": "greg@example.com"},
                         user.to_dict())

    def test_repr(self):
        self.assertEqual("<User gid='1' name='Greg'>", repr(self.client.factory.build(user_payload("1", "Greg"))))
        self.assertEqual("<Resource>", repr(Resource({})))

    def test_self_reference(self):
        task = self.client.factory.build({
            "gid": "2",
            "resource_type": "task",
            "name": "Subtask",
            "parent": {"gid": "1", "resource_type": "task", "name": "Task"},
            "tags": [{"gid": "3", "resource_type": "tag", "name": "urgent"}]
        })

        self.assertIsInstance(task, Task)
        self.assertIsInstance(task.parent, Task)
        self.assertEqual("Task", task.parent.name)
        self.assertIsInstance(task.tags[0], Tag)

    def test_dates_round_trip(self):
        raw = {
            "gid": "2",
            "resource_type": "task",
            "name": "Ship",
            "created_at": "2012-02-22T02:06:58.147Z",
            "completed_at": None,
            "due_on": "2012-03-26"
        }
        task = self.client.factory.build(raw)

        self.assertEqual("2012-02-22T02:06:58.147Z", task.created_at)
        self.assertEqual("2012-03-26", task.due_on)
        self.assertEqual(raw, task.to_dict())
        self.assertEqual(raw, task.raw)

        self.assertEqual(date(2012, 3, 26), task.parsed('due_on'))
        self.assertEqual(datetime(2012, 2, 22, 2, 6, 58, 147000), task.parsed('created_at').replace(tzinfo=None))
        self.assertIsNone(task.parsed('completed_at'))
        self.assertEqual("Ship", task.parsed('name'))

        with self.assertRaises(AttributeError):
            task.parsed('modified_at')
        with self.assertRaises(AttributeError):
            task.parsed('num_likes')

    def test_described_by(self):
        schema = User.described_by()

        self.assertEqual("http://json-schema.org/draft-04/schema#", schema["$schema"])
        self.assertEqual("User", schema["title"])
        self.assertEqual("object", schema["type"])
        self.assertEqual({"type": "string", "format": "email"}, schema["properties"]["email"])
        self.assertEqual({"type": "string"}, schema["properties"]["gid"])

    def test_client_reference(self):
        user = self.client.factory.build(user_payload("1", "Greg"))
        self.assertIsInstance(user.client, weakref.ProxyTypes)
        self.assertIs(self.client.transport, user.client.transport)

    def test_refresh(self):
        self.api.reply('GET', '/users/1', {"data": user_payload("1", "Greg", email="greg@example.com")})
        user = self.client.factory.build(user_payload("1", "Gregory"))

        self.assertIs(user, user.refresh(options={"fields": ["name", "email"]}))
        self.assertEqual("Greg", user.name)
        self.assertEqual("greg@example.com", user.email)
        self.assertEqual(["name", "email"], self.api.calls[0].params["opt_fields"])

    def test_refresh_unbound(self):
        with self.assertRaises(RuntimeError):
            User(user_payload("1", "Greg"), attributes={"gid": "1"}).refresh()

        with self.assertRaises(RuntimeError):
            Resource({"gid": "1"}, client=self.client, attributes={"gid": "1"}).refresh()
