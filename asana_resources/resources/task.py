from .. import fields
from ..resource import Resource


class Task(Resource):
    class Schema:
        name = fields.String()
        notes = fields.String()
        completed = fields.Boolean()
        completed_at = fields.DateTimeString(nullable=True)
        created_at = fields.DateTimeString()
        due_on = fields.DateString(nullable=True)
        num_likes = fields.Integer(minimum=0)
        assignee = fields.Inline('user', nullable=True)
        parent = fields.Inline('self', nullable=True)
        projects = fields.Array(fields.Inline('project'))
        tags = fields.Array(fields.Inline('tag'))
        workspace = fields.Inline('workspace')

    class Meta:
        name = 'task'
        plural_name = 'tasks'
