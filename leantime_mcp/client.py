"""
Leantime JSON-RPC client.

Every upstream method is a thin wrapper around ``LeantimeClient.call``, which
posts a JSON-RPC 2.0 request to ``<service_url>/api/jsonrpc`` and returns the
``result`` payload untouched.
"""

import itertools
import logging
import threading
from typing import Any, Dict, Optional

import httpx

from leantime_mcp.config import Config
from leantime_mcp.errors import TransportError, UpstreamError

logger = logging.getLogger(__name__)

JSONRPC_VERSION = "2.0"
RPC_PATH = "/api/jsonrpc"

TICKETS = "leantime.rpc.Tickets.Tickets"
PROJECTS = "leantime.rpc.Projects.Projects"


def build_params(**kwargs: Any) -> Dict[str, Any]:
    """Keyword arguments as a params object, dropping the ones that are None."""
    return {key: value for key, value in kwargs.items() if value is not None}


class LeantimeClient:
    """Async client for the Leantime JSON-RPC API."""

    def __init__(
        self,
        config: Config,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.timeout = timeout
        self._transport = transport
        self._http_client: Optional[httpx.AsyncClient] = None
        self._ids = itertools.count(1)
        self._id_lock = threading.Lock()

    @property
    def endpoint(self) -> str:
        return f"{self.config.service_url}{RPC_PATH}"

    def next_id(self) -> int:
        with self._id_lock:
            return next(self._ids)

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            headers = {
                "Content-Type": "application/json",
                "x-api-key": self.config.api_key,
            }
            self._http_client = httpx.AsyncClient(
                timeout=self.timeout, headers=headers, transport=self._transport
            )
        return self._http_client

    async def aclose(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "LeantimeClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def call(self, method: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Invoke a JSON-RPC method and return its result.

        Raises:
            TransportError: non-2xx status, connection failure or a body that is not JSON
            UpstreamError: Leantime returned a JSON-RPC error object
        """
        request_id = self.next_id()
        payload: Dict[str, Any] = {
            "method": method,
            "jsonrpc": JSONRPC_VERSION,
            "id": request_id,
        }
        if params is not None:
            payload["params"] = params

        logger.debug("JSON-RPC request %s -> %s", request_id, method)
        client = self._get_http_client()
        try:
            response = await client.post(self.endpoint, json=payload)
        except httpx.RequestError as e:
            logger.warning("JSON-RPC request %s (%s) failed: %s", request_id, method, e)
            raise TransportError(f"Request failed: {e}") from e

        if response.is_error:
            reason = response.reason_phrase or "Unknown error"
            logger.warning("JSON-RPC request %s (%s) returned HTTP %s", request_id, method, response.status_code)
            raise TransportError(
                f"HTTP error {response.status_code}: {reason}",
                status_code=response.status_code,
                reason=reason,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(
                "Invalid JSON response from Leantime", status_code=response.status_code
            ) from e

        if isinstance(body, dict) and "error" in body:
            error = body["error"]
            logger.warning("JSON-RPC request %s (%s) returned error: %s", request_id, method, error)
            if not isinstance(error, dict):
                raise UpstreamError(code=0, message=str(error) if error else "Unknown error")
            raise UpstreamError(
                code=error.get("code", 0),
                message=error.get("message", "Unknown error"),
                data=error.get("data"),
            )

        return body.get("result") if isinstance(body, dict) else None

    # ==================== Tickets ====================

    async def get_ticket(self, id: int) -> Any:
        return await self.call(f"{TICKETS}.getTicket", {"id": id})

    async def get_all_tickets(self, search_criteria: Optional[Dict[str, Any]] = None) -> Any:
        return await self.call(f"{TICKETS}.getAll", build_params(searchCriteria=search_criteria))

    async def add_ticket(self, values: Dict[str, Any]) -> Any:
        return await self.call(f"{TICKETS}.addTicket", {"values": values})

    async def update_ticket(self, values: Dict[str, Any]) -> Any:
        return await self.call(f"{TICKETS}.updateTicket", {"values": values})

    async def delete_ticket(self, id: int) -> Any:
        return await self.call(f"{TICKETS}.delete", {"id": id})

    async def get_status_labels(self, project_id: int) -> Any:
        return await self.call(f"{TICKETS}.getStatusLabels", {"projectId": project_id})

    async def get_all_milestones(
        self, search_criteria: Optional[Dict[str, Any]] = None, sort_by: Optional[str] = None
    ) -> Any:
        return await self.call(
            f"{TICKETS}.getAllMilestones",
            build_params(searchCriteria=search_criteria, sortBy=sort_by),
        )

    async def find_ticket(self, term: str, project_id: int, user_id: Optional[int] = None) -> Any:
        return await self.call(
            f"{TICKETS}.findTicket",
            build_params(term=term, projectId=project_id, userId=user_id),
        )

    async def get_priority_labels(self) -> Any:
        return await self.call(f"{TICKETS}.getPriorityLabels")

    async def get_ticket_types(self) -> Any:
        return await self.call(f"{TICKETS}.getTicketTypes")

    # ==================== Projects ====================

    async def get_all_projects(self) -> Any:
        return await self.call(f"{PROJECTS}.getAllProjects")

    async def get_project(self, id: int) -> Any:
        return await self.call(f"{PROJECTS}.getProject", {"id": id})

    async def get_all(self, show_closed_projects: Optional[bool] = None) -> Any:
        """Projects of the current user."""
        return await self.call(
            f"{PROJECTS}.getAll", build_params(showClosedProjects=show_closed_projects)
        )

    async def add_project(self, values: Dict[str, Any]) -> Any:
        return await self.call(f"{PROJECTS}.addProject", {"values": values})

    async def patch_project(self, id: int, params: Dict[str, Any]) -> Any:
        return await self.call(f"{PROJECTS}.patch", {"id": id, "params": params})

    async def get_project_types(self) -> Any:
        return await self.call(f"{PROJECTS}.getProjectTypes")

    async def get_project_progress(self, project_id: int) -> Any:
        return await self.call(f"{PROJECTS}.getProjectProgress", {"projectId": project_id})

    async def get_users_assigned_to_project(self, project_id: int) -> Any:
        return await self.call(f"{PROJECTS}.getUsersAssignedToProject", {"projectId": project_id})

    async def get_projects_assigned_to_user(
        self, user_id: int, project_status: Optional[str] = None, client_id: Optional[int] = None
    ) -> Any:
        return await self.call(
            f"{PROJECTS}.getProjectsAssignedToUser",
            build_params(userId=user_id, projectStatus=project_status, clientId=client_id),
        )

    async def is_user_assigned_to_project(self, user_id: int, project_id: int) -> Any:
        return await self.call(
            f"{PROJECTS}.isUserAssignedToProject", {"userId": user_id, "projectId": project_id}
        )

    async def get_project_role(self, user_id: int, project_id: int) -> Any:
        return await self.call(
            f"{PROJECTS}.getProjectRole", {"userId": user_id, "projectId": project_id}
        )

    async def find_project(self, term: str) -> Any:
        return await self.call(f"{PROJECTS}.findProject", {"term": term})

    async def duplicate_project(
        self,
        project_id: int,
        client_id: int,
        project_name: str,
        user_start_date: str,
        assign_same_users: bool,
    ) -> Any:
        return await self.call(
            f"{PROJECTS}.duplicateProject",
            {
                "projectId": project_id,
                "clientId": client_id,
                "projectName": project_name,
                "userStartDate": user_start_date,
                "assignSameUsers": assign_same_users,
            },
        )

    async def get_project_hierarchy_assigned_to_user(
        self, user_id: int, project_status: Optional[str] = None, client_id: Optional[int] = None
    ) -> Any:
        return await self.call(
            f"{PROJECTS}.getProjectHierarchyAssignedToUser",
            build_params(userId=user_id, projectStatus=project_status, clientId=client_id),
        )

    async def get_all_clients_available_to_user(
        self, user_id: int, project_status: Optional[str] = None
    ) -> Any:
        return await self.call(
            f"{PROJECTS}.getAllClientsAvailableToUser",
            build_params(userId=user_id, projectStatus=project_status),
        )
