from .. import fields
from ..resource import Resource


class Project(Resource):
    class Schema:
        name = fields.String()
        notes = fields.String()
        archived = fields.Boolean()
        color = fields.String(nullable=True)
        created_at = fields.DateTimeString()
        modified_at = fields.DateTimeString()
        due_on = fields.DateString(nullable=True)
        owner = fields.Inline('user', nullable=True)
        workspace = fields.Inline('workspace')
        members = fields.Array(fields.Inline('user'))

    class Meta:
        name = 'project'
        plural_name = 'projects'
