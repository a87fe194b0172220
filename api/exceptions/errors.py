"""Domain exceptions for the org chart API.

Every failure the core can report is an ``OrgChartError`` carrying the HTTP
status code and the detail string the client receives. The exception
handlers in ``api.exceptions.handlers`` turn them into JSON responses, so
services and stores raise these and never build responses themselves.
"""

from typing import Optional


class OrgChartError(Exception):
    """Base class for all reportable org chart failures."""

    status_code = 500
    default_detail = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class UnauthorizedError(OrgChartError):
    """Mutating call without a valid admin session, or a failed login."""

    status_code = 401
    default_detail = "Unauthorized"


class NotFoundError(OrgChartError):
    """The operation targets a node id that does not exist."""

    status_code = 404
    default_detail = "Node not found"

    def __init__(self, detail: Optional[str] = None, node_id: Optional[str] = None):
        self.node_id = node_id
        if detail is None and node_id is not None:
            detail = f"Node '{node_id}' not found"
        super().__init__(detail)


class MalformedInputError(OrgChartError):
    """The request payload is missing required shape or is inconsistent."""

    status_code = 400
    default_detail = "Malformed input"


class MalformedDataError(OrgChartError):
    """The stored nodes violate the single-root tree invariant."""

    status_code = 500
    default_detail = "Stored node data is malformed"


class StoreError(OrgChartError):
    """The underlying persistence layer failed."""

    status_code = 500
    default_detail = "Node store operation failed"
