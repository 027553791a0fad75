"""
Operations on workspaces.
"""
from ..params import required, require
from ..routes import Route

__all__ = ('find_by_id', 'find_all')

WORKSPACE = Route.GET('/workspaces/{workspace}')
WORKSPACES = Route.GET('/workspaces')


def find_by_id(client, id=required, options=None):
    """
    Returns the full workspace record for a single workspace.

    :param id: the ``gid`` of the workspace
    :param dict options: request options
    """
    require('id', id, 'find_by_id')
    return client.get_resource(WORKSPACE, type='workspace', path={'workspace': id}, options=options)


def find_all(client, per_page=None, options=None):
    """
    Returns the compact records for all workspaces visible to the authenticated user.

    :param int per_page: the number of records to fetch per page
    :param dict options: request options
    """
    return client.get_collection(WORKSPACES, type='workspace', per_page=per_page, options=options)
