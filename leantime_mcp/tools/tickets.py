"""Ticket tools."""

from typing import Any, Dict, List, Optional

from pydantic import Field

from leantime_mcp.client import LeantimeClient, build_params
from leantime_mcp.errors import NotFoundError
from leantime_mcp.tools.base import Tool, ToolArguments

# Kept from the stored ticket by update_ticket unless the caller supplies them
PRESERVED_TICKET_FIELDS = (
    "description",
    "status",
    "priority",
    "userId",
    "dateToFinish",
    "planHours",
    "tags",
    "sprint",
    "storypoints",
)


class TicketId(ToolArguments):
    id: int = Field(description="The ticket ID")


class SearchTicketsArgs(ToolArguments):
    search_criteria: Optional[Dict[str, Any]] = Field(
        None,
        description='Search criteria as JSON object. Examples: {"currentProject": 1}, {"users": [2]}, {"status": 3}',
    )


class CreateTicketArgs(ToolArguments):
    headline: str = Field(description="Ticket title (required)")
    description: Optional[str] = Field(None, description="Ticket description")
    project_id: Optional[int] = Field(None, description="Project ID")
    type: Optional[str] = Field(None, description="Ticket type (task, bug, milestone, etc.)")
    status: Optional[int] = Field(None, description="Ticket status (number)")
    priority: Optional[str] = Field(None, description="Ticket priority")
    user_id: Optional[int] = Field(None, description="Assigned user ID")
    date_to_finish: Optional[str] = Field(None, description="Due date (format: YYYY-MM-DD)")
    plan_hours: Optional[float] = Field(None, description="Planned hours")
    tags: Optional[str] = Field(None, description="Tags separated by comma")
    sprint: Optional[str] = Field(None, description="Assigned sprint")
    storypoints: Optional[str] = Field(None, description="Story points")
    milestoneid: Optional[int] = Field(None, description="Associated milestone ID")


class UpdateTicketArgs(ToolArguments):
    id: int = Field(description="Ticket ID to update (required)")
    headline: Optional[str] = Field(None, description="New ticket title")
    description: Optional[str] = Field(None, description="New ticket description")
    type: Optional[str] = Field(None, description="New ticket type")
    status: Optional[int] = Field(None, description="New ticket status")
    priority: Optional[str] = Field(None, description="New priority")
    user_id: Optional[int] = Field(None, description="New assigned user ID")
    date_to_finish: Optional[str] = Field(None, description="New due date")
    plan_hours: Optional[float] = Field(None, description="New planned hours")
    tags: Optional[str] = Field(None, description="New tags")
    sprint: Optional[str] = Field(None, description="New sprint")
    storypoints: Optional[str] = Field(None, description="New story points")


class FindTicketArgs(ToolArguments):
    term: str = Field(description="Search term")
    project_id: int = Field(description="Project ID to search in")
    user_id: Optional[int] = Field(None, description="User ID to filter by (optional)")


class StatusLabelsArgs(ToolArguments):
    project_id: int = Field(description="Project ID")


class MilestonesArgs(ToolArguments):
    search_criteria: Optional[Dict[str, Any]] = Field(
        None, description='Search criteria as JSON object, e.g. {"currentProject": 1}'
    )
    sort_by: Optional[str] = Field(None, description="Field to sort milestones by")


async def get_ticket(client: LeantimeClient, args: TicketId) -> Any:
    return await client.get_ticket(args.id)


async def search_tickets(client: LeantimeClient, args: SearchTicketsArgs) -> Any:
    return await client.get_all_tickets(args.search_criteria)


async def create_ticket(client: LeantimeClient, args: CreateTicketArgs) -> Any:
    return await client.add_ticket(args.to_params())


def merge_ticket(current: Dict[str, Any], supplied: Dict[str, Any]) -> Dict[str, Any]:
    """
    Overlay supplied fields on a stored ticket.

    Leantime's updateTicket replaces the whole record. projectId, headline, type
    and the fields listed in PRESERVED_TICKET_FIELDS are carried over from the
    stored copy unless supplied; any other stored field (milestoneid, ...) is
    not sent.
    """
    values = build_params(
        id=supplied["id"],
        projectId=current.get("projectId"),
        headline=supplied.get("headline", current.get("headline")),
        type=supplied.get("type", current.get("type")),
    )
    for field in PRESERVED_TICKET_FIELDS:
        if field in supplied:
            values[field] = supplied[field]
        elif field in current:
            values[field] = current[field]
    return values


async def update_ticket(client: LeantimeClient, args: UpdateTicketArgs) -> Any:
    current = await client.get_ticket(args.id)
    if not current or not isinstance(current, dict):
        raise NotFoundError(f"Ticket {args.id} not found or invalid response")
    return await client.update_ticket(merge_ticket(current, args.to_params()))


async def delete_ticket(client: LeantimeClient, args: TicketId) -> Any:
    return await client.delete_ticket(args.id)


async def find_ticket(client: LeantimeClient, args: FindTicketArgs) -> Any:
    return await client.find_ticket(args.term, args.project_id, args.user_id)


async def get_ticket_types(client: LeantimeClient, args: ToolArguments) -> Any:
    return await client.get_ticket_types()


async def get_priority_labels(client: LeantimeClient, args: ToolArguments) -> Any:
    return await client.get_priority_labels()


async def get_status_labels(client: LeantimeClient, args: StatusLabelsArgs) -> Any:
    return await client.get_status_labels(args.project_id)


async def get_milestones(client: LeantimeClient, args: MilestonesArgs) -> Any:
    return await client.get_all_milestones(args.search_criteria, args.sort_by)


TICKET_TOOLS: List[Tool] = [
    Tool(
        name="get_ticket",
        description="Retrieves complete information about a Leantime ticket by its ID",
        arguments=TicketId,
        handler=get_ticket,
        error_action="retrieving ticket",
    ),
    Tool(
        name="search_tickets",
        description="Searches for tickets in Leantime based on search criteria. Can filter by project, user, status, etc.",
        arguments=SearchTicketsArgs,
        handler=search_tickets,
        error_action="searching tickets",
    ),
    Tool(
        name="create_ticket",
        description="Creates a new ticket in Leantime with the specified values",
        arguments=CreateTicketArgs,
        handler=create_ticket,
        error_action="creating ticket",
        success_message="Ticket created successfully.",
    ),
    Tool(
        name="update_ticket",
        description="Updates an existing ticket in Leantime with the specified values. The ticket ID must be included in the update.",
        arguments=UpdateTicketArgs,
        handler=update_ticket,
        error_action="updating ticket",
        success_message="Ticket updated successfully.",
    ),
    Tool(
        name="delete_ticket",
        description="Deletes a ticket from Leantime by its ID",
        arguments=TicketId,
        handler=delete_ticket,
        error_action="deleting ticket",
        success_message="Ticket deleted successfully.",
    ),
    Tool(
        name="find_ticket",
        description="Searches for tickets in Leantime by search term in the headline",
        arguments=FindTicketArgs,
        handler=find_ticket,
        error_action="searching tickets",
    ),
    Tool(
        name="get_ticket_types",
        description="Retrieves the list of available ticket types in Leantime (task, bug, milestone, etc.)",
        handler=get_ticket_types,
        error_action="retrieving ticket types",
    ),
    Tool(
        name="get_priority_labels",
        description="Retrieves the list of available priority labels in Leantime",
        handler=get_priority_labels,
        error_action="retrieving priority labels",
    ),
    Tool(
        name="get_status_labels",
        description="Retrieves the available status labels for a specific project in Leantime",
        arguments=StatusLabelsArgs,
        handler=get_status_labels,
        error_action="retrieving status labels",
    ),
    Tool(
        name="get_milestones",
        description="Retrieves milestones matching the given search criteria, optionally sorted",
        arguments=MilestonesArgs,
        handler=get_milestones,
        error_action="retrieving milestones",
    ),
]
