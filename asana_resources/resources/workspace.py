from .. import fields
from ..resource import Resource


class Workspace(Resource):
    """
    A *workspace* is the highest-level organizational unit. Every user, project, task and tag belongs to
    one. An *organization* is a special kind of workspace that represents a company.
    """

    class Schema:
        name = fields.String()
        is_organization = fields.Boolean()
        email_domains = fields.Array(fields.String)

    class Meta:
        name = 'workspace'
        plural_name = 'workspaces'
