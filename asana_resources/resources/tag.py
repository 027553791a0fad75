from .. import fields
from ..resource import Resource


class Tag(Resource):
    class Schema:
        name = fields.String()
        color = fields.String(nullable=True)
        created_at = fields.DateTimeString()
        workspace = fields.Inline('workspace')

    class Meta:
        name = 'tag'
        plural_name = 'tags'
