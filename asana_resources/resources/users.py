"""
Operations on users. Each takes the :class:`Client` to issue requests with as first argument.
"""
from ..params import required, require
from ..resource import Resource
from ..routes import Route

__all__ = ('me', 'find_by_id', 'find_by_workspace', 'find_all', 'get_user_favorites')

ME = Route.GET('/users/me')
USER = Route.GET('/users/{user}')
USERS = Route.GET('/users')
WORKSPACE_USERS = Route.GET('/workspaces/{workspace}/users')
USER_FAVORITES = Route.GET('/users/{user}/favorites')


def me(client, options=None):
    """
    Returns the full user record for the currently authenticated user.

    :param dict options: request options
    """
    return client.get_resource(ME, type='user', options=options)


def find_by_id(client, id=required, options=None):
    """
    Returns the full user record for the single user with the provided identifier.

    :param id: an email address, the ``gid`` of the user, or ``"me"`` for the current user
    :param dict options: request options
    """
    require('id', id, 'find_by_id')
    return client.get_resource(USER, type='user', path={'user': id}, options=options)


def find_by_workspace(client, workspace=required, per_page=None, options=None):
    """
    Returns the user records for all users in the specified workspace or organization.

    :param workspace: the workspace in which to get users
    :param int per_page: the number of records to fetch per page, default ``DEFAULT_PER_PAGE`` (20)
    :param dict options: request options
    :return: a :class:`Collection` of :class:`User`
    """
    require('workspace', workspace, 'find_by_workspace')
    return client.get_collection(WORKSPACE_USERS, type='user', path={'workspace': workspace},
                                 per_page=per_page, options=options)


def find_all(client, workspace=None, per_page=None, options=None):
    """
    Returns the user records for all users in all workspaces and organizations accessible to the
    authenticated user, optionally only those of one workspace.

    :param workspace: optional workspace or organization to filter users on
    :param int per_page: the number of records to fetch per page, default ``DEFAULT_PER_PAGE`` (20)
    :param dict options: request options
    """
    return client.get_collection(USERS, type='user', params={'workspace': workspace},
                                 per_page=per_page, options=options)


def get_user_favorites(client, user=required, workspace=required, resource_type=required, options=None):
    """
    Returns all of a user's favorites of the given type in the given workspace, in the same order as the
    sidebar.

    :param user: the ``gid`` of the user, or ``"me"``
    :param workspace: the workspace in which to get favorites
    :param str resource_type: the resource type of the favorites to return
    :param dict options: request options
    """
    require('user', user, 'get_user_favorites')
    require('workspace', workspace, 'get_user_favorites')
    require('resource_type', resource_type, 'get_user_favorites')
    return client.get_collection(USER_FAVORITES, type=Resource, path={'user': user},
                                 params={'workspace': workspace, 'resource_type': resource_type},
                                 options=options)
