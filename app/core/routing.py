from __future__ import annotations

from starlette.requests import Request


def route_template(request: Request) -> str:
    """
    Return the matched route template (e.g. /api/quiz/{quiz_id}) for labels and logs.

    Raw paths carry quiz ids and would blow up metric cardinality, so requests that
    did not match a route (404) are reported as "unmatched".
    """

    route = request.scope.get("route")
    path = getattr(route, "path", None)
    if isinstance(path, str) and path:
        return path
    return "unmatched"
