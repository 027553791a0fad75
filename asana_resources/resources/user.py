from .. import fields
from ..params import required
from ..resource import Resource
from . import users


class User(Resource):
    """
    A *user* object represents an account that can be given access to workspaces, projects and tasks.

    Users are referred to by their ``gid``; the special identifier ``"me"`` refers to the authenticated user
    anywhere a user identifier is accepted.
    """

    class Schema:
        name = fields.String()
        email = fields.Email()
        photo = fields.Object(fields.Uri, nullable=True)
        workspaces = fields.Array(fields.Inline('workspace'))

    class Meta:
        name = 'user'
        plural_name = 'users'

    def get_favorites(self, workspace=required, resource_type=required, options=None):
        """
        Returns this user's favorites of one resource type in a workspace, in the order of the sidebar.

        :param workspace: the workspace in which to get favorites
        :param str resource_type: the resource type of the favorites to return, e.g. ``"project"``
        :param dict options: request options
        :return: a :class:`Collection` of resources of mixed types
        """
        return users.get_user_favorites(self.client, self.gid,
                                        workspace=workspace,
                                        resource_type=resource_type,
                                        options=options)
