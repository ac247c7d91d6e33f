"""Project tools."""

from typing import Any, List, Optional

from pydantic import Field

from leantime_mcp.client import LeantimeClient
from leantime_mcp.tools.base import Tool, ToolArguments

STATUS_FILTER_HELP = 'Project status filter (defaults to "open")'


class ProjectId(ToolArguments):
    id: int = Field(description="The project ID")


class ProjectRef(ToolArguments):
    project_id: int = Field(description="The project ID")


class UserProjectsArgs(ToolArguments):
    show_closed_projects: Optional[bool] = Field(None, description="Set to true to include closed projects")


class CreateProjectArgs(ToolArguments):
    name: str = Field(description="Project name (required)")
    client_id: int = Field(description="Client ID associated with the project (required)")
    details: Optional[str] = Field(None, description="Additional project details")
    hour_budget: Optional[float] = Field(None, description="Hour budget for the project")
    dollar_budget: Optional[float] = Field(None, description="Dollar budget for the project")
    assigned_users: Optional[str] = Field(None, description="List of assigned users")
    psettings: Optional[str] = Field(
        None, description="Project settings (e.g., 'restricted'), defaults to 'restricted'"
    )
    start: Optional[str] = Field(None, description="Start date in user format (YYYY-MM-DD) or null")
    end: Optional[str] = Field(None, description="End date in user format (YYYY-MM-DD) or null")


class UpdateProjectArgs(ToolArguments):
    id: int = Field(description="Project ID to update (required)")
    name: Optional[str] = Field(None, description="New project name")
    details: Optional[str] = Field(None, description="New project details")
    client_id: Optional[int] = Field(None, description="New client ID")
    hour_budget: Optional[float] = Field(None, description="New hour budget")
    dollar_budget: Optional[float] = Field(None, description="New dollar budget")
    start: Optional[str] = Field(None, description="New start date")
    end: Optional[str] = Field(None, description="New end date")
    status: Optional[str] = Field(None, description="New project status")


class UserFilterArgs(ToolArguments):
    user_id: int = Field(description="The user ID")
    project_status: Optional[str] = Field(None, description=STATUS_FILTER_HELP)
    client_id: Optional[int] = Field(None, description="Client ID filter (optional)")


class UserProjectArgs(ToolArguments):
    user_id: int = Field(description="The user ID")
    project_id: int = Field(description="The project ID")


class SearchProjectsArgs(ToolArguments):
    term: str = Field(description="The search term")


class DuplicateProjectArgs(ToolArguments):
    project_id: int = Field(description="The ID of the project to duplicate")
    client_id: int = Field(description="The client ID for the duplicate project")
    project_name: str = Field(description="The name of the duplicate project")
    user_start_date: str = Field(
        description="The start date in user format (e.g., YYYY-MM-DD or locale format)"
    )
    assign_same_users: bool = Field(description="Whether to assign the same users as the original project")


class AvailableClientsArgs(ToolArguments):
    user_id: int = Field(description="The user ID")
    project_status: Optional[str] = Field(None, description=STATUS_FILTER_HELP)


async def get_all_projects(client: LeantimeClient, args: ToolArguments) -> Any:
    return await client.get_all_projects()


async def get_project(client: LeantimeClient, args: ProjectId) -> Any:
    return await client.get_project(args.id)


async def get_user_projects(client: LeantimeClient, args: UserProjectsArgs) -> Any:
    return await client.get_all(args.show_closed_projects)


async def create_project(client: LeantimeClient, args: CreateProjectArgs) -> Any:
    values = args.to_params()
    values["type"] = "project"
    return await client.add_project(values)


async def update_project(client: LeantimeClient, args: UpdateProjectArgs) -> Any:
    return await client.patch_project(args.id, args.to_params(exclude={"id"}))


async def get_project_progress(client: LeantimeClient, args: ProjectRef) -> Any:
    return await client.get_project_progress(args.project_id)


async def get_project_users(client: LeantimeClient, args: ProjectRef) -> Any:
    return await client.get_users_assigned_to_project(args.project_id)


async def get_user_assigned_projects(client: LeantimeClient, args: UserFilterArgs) -> Any:
    return await client.get_projects_assigned_to_user(args.user_id, args.project_status, args.client_id)


async def check_user_project_assignment(client: LeantimeClient, args: UserProjectArgs) -> Any:
    is_assigned = await client.is_user_assigned_to_project(args.user_id, args.project_id)
    return {"isAssigned": is_assigned}


async def get_project_role(client: LeantimeClient, args: UserProjectArgs) -> Any:
    role = await client.get_project_role(args.user_id, args.project_id)
    return {"role": role}


async def search_projects(client: LeantimeClient, args: SearchProjectsArgs) -> Any:
    return await client.find_project(args.term)


async def get_project_types(client: LeantimeClient, args: ToolArguments) -> Any:
    return await client.get_project_types()


async def duplicate_project(client: LeantimeClient, args: DuplicateProjectArgs) -> Any:
    return await client.duplicate_project(
        args.project_id,
        args.client_id,
        args.project_name,
        args.user_start_date,
        args.assign_same_users,
    )


async def get_project_hierarchy(client: LeantimeClient, args: UserFilterArgs) -> Any:
    return await client.get_project_hierarchy_assigned_to_user(
        args.user_id, args.project_status, args.client_id
    )


async def get_available_clients(client: LeantimeClient, args: AvailableClientsArgs) -> Any:
    return await client.get_all_clients_available_to_user(args.user_id, args.project_status)


PROJECT_TOOLS: List[Tool] = [
    Tool(
        name="get_all_projects",
        description="Retrieves all projects from Leantime",
        handler=get_all_projects,
        error_action="retrieving all projects",
    ),
    Tool(
        name="get_project",
        description="Retrieves detailed information about a specific project by its ID",
        arguments=ProjectId,
        handler=get_project,
        error_action="retrieving project",
    ),
    Tool(
        name="get_user_projects",
        description="Retrieves all projects for the current user. By default, closed projects are not included.",
        arguments=UserProjectsArgs,
        handler=get_user_projects,
        error_action="retrieving user projects",
    ),
    Tool(
        name="create_project",
        description="Creates a new project in Leantime with the specified values",
        arguments=CreateProjectArgs,
        handler=create_project,
        error_action="creating project",
        success_message="Project created successfully.",
    ),
    Tool(
        name="update_project",
        description="Updates an existing project with the given parameters",
        arguments=UpdateProjectArgs,
        handler=update_project,
        error_action="updating project",
        success_message="Project updated successfully.",
    ),
    Tool(
        name="get_project_progress",
        description="Retrieves the progress of a project including completion percentage, estimated completion date, and planned completion date",
        arguments=ProjectRef,
        handler=get_project_progress,
        error_action="retrieving project progress",
    ),
    Tool(
        name="get_project_users",
        description="Retrieves all users assigned to a specific project",
        arguments=ProjectRef,
        handler=get_project_users,
        error_action="retrieving project users",
    ),
    Tool(
        name="get_user_assigned_projects",
        description="Retrieves projects assigned to a specific user",
        arguments=UserFilterArgs,
        handler=get_user_assigned_projects,
        error_action="retrieving user projects",
    ),
    Tool(
        name="check_user_project_assignment",
        description="Checks if a user is assigned to a particular project",
        arguments=UserProjectArgs,
        handler=check_user_project_assignment,
        error_action="checking user assignment",
    ),
    Tool(
        name="get_project_role",
        description="Retrieves the role of a user in a specific project",
        arguments=UserProjectArgs,
        handler=get_project_role,
        error_action="retrieving project role",
    ),
    Tool(
        name="search_projects",
        description="Searches for projects based on a search term in project names",
        arguments=SearchProjectsArgs,
        handler=search_projects,
        error_action="searching projects",
    ),
    Tool(
        name="get_project_types",
        description="Retrieves the list of available project types in Leantime",
        handler=get_project_types,
        error_action="retrieving project types",
    ),
    Tool(
        name="duplicate_project",
        description="Duplicates an existing project with specified details",
        arguments=DuplicateProjectArgs,
        handler=duplicate_project,
        error_action="duplicating project",
        success_message="Project duplicated successfully.",
    ),
    Tool(
        name="get_project_hierarchy",
        description="Retrieves the hierarchy of projects assigned to a user, including parent-child relationships",
        arguments=UserFilterArgs,
        handler=get_project_hierarchy,
        error_action="retrieving project hierarchy",
    ),
    Tool(
        name="get_available_clients",
        description="Retrieves all clients available to a user based on project access",
        arguments=AvailableClientsArgs,
        handler=get_available_clients,
        error_action="retrieving available clients",
    ),
]
