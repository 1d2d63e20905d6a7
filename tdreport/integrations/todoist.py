"""Todoist integration for tdreport."""

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from tdreport import config
from tdreport.errors import TodoistAPIError, TodoistDecodeError
from tdreport.models.comment import Comment
from tdreport.models.project import Label, Project
from tdreport.models.task import Task

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class TaskQuery(BaseModel):
    """Optional server-side task selection, passed to the API as-is."""

    project_id: Optional[str] = Field(None, description="Only tasks in this project")
    section_id: Optional[str] = Field(None, description="Only tasks in this section")
    label: Optional[str] = Field(None, description="Only tasks with this label name")
    filter: Optional[str] = Field(None, description="Todoist filter expression")
    ids: List[str] = Field(default_factory=list, description="Only tasks with these ids")

    def to_params(self) -> Dict[str, str]:
        params = {}
        for name in ("project_id", "section_id", "label", "filter"):
            value = getattr(self, name)
            if value:
                params[name] = value
        if self.ids:
            params["ids"] = ",".join(self.ids)
        return params


class TodoistClient:
    """Read-only client for the Todoist REST API."""

    def __init__(
        self,
        api_token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize Todoist client.

        Args:
            api_token: Todoist API token. If None, read from TODOIST_API_TOKEN or the token file.
            base_url: API base URL. If None, read from TODOIST_API_BASE.
            timeout: Request timeout in seconds. If None, read from TODOIST_TIMEOUT_SEC.
            session: requests session to use (a new one is created if None).
        """
        self.api_token = api_token or config.get_api_token()
        self.base_url = (base_url or config.get_api_base()).rstrip("/")
        self.timeout = timeout if timeout is not None else config.get_timeout()
        self.session = session or requests.Session()
        self.headers = {
            "Authorization": f"Bearer {self.api_token}",
            "Accept": "application/json",
        }

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "TodoistClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def get(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        """Send one GET request and return the decoded JSON body.

        Args:
            path: Path relative to the API base (e.g. "/projects")
            params: Optional query parameters

        Returns:
            Decoded JSON

        Raises:
            TodoistAPIError: If the request fails or the API answers 4xx/5xx
            TodoistDecodeError: If the body is not valid JSON
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.debug(f"GET {url} params={params or {}}")
        try:
            response = self.session.get(url, headers=self.headers, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Request to {url} failed: {type(e).__name__}: {str(e)}")
            raise TodoistAPIError(f"Failed to fetch {path} from Todoist: {e}") from e

        if 400 <= response.status_code <= 599:
            body = response.text
            logger.error(f"Todoist answered {response.status_code} for {path}: {body[:200]}")
            raise TodoistAPIError(
                f"Todoist returned HTTP {response.status_code} for {path}: {body or response.reason}",
                status_code=response.status_code,
                body=body,
            )

        try:
            return response.json()
        except ValueError as e:
            raise TodoistDecodeError(
                f"Todoist returned a malformed body for {path}: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e

    def _get_model(self, path: str, model: Type[ModelT], params: Optional[Dict[str, str]] = None) -> ModelT:
        payload = self.get(path, params)
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise TodoistDecodeError(f"Unexpected {model.__name__} payload from {path}: {e}") from e

    def _get_models(self, path: str, model: Type[ModelT], params: Optional[Dict[str, str]] = None) -> List[ModelT]:
        payload = self.get(path, params)
        try:
            items = TypeAdapter(List[model]).validate_python(payload)
        except ValidationError as e:
            raise TodoistDecodeError(f"Unexpected {model.__name__} list from {path}: {e}") from e
        logger.debug(f"Fetched {len(items)} {model.__name__.lower()}s from {path}")
        return items

    def get_all_projects(self) -> List[Project]:
        """Fetch all projects of the user."""
        return self._get_models("/projects", Project)

    def get_project(self, project_id: str) -> Project:
        return self._get_model(f"/projects/{project_id}", Project)

    def get_all_labels(self) -> List[Label]:
        """Fetch all personal labels of the user."""
        return self._get_models("/labels", Label)

    def get_label(self, label_id: str) -> Label:
        return self._get_model(f"/labels/{label_id}", Label)

    def get_all_shared_labels(self) -> List[str]:
        """Fetch the names of labels shared with the user by collaborators."""
        payload = self.get("/labels/shared")
        try:
            return TypeAdapter(List[str]).validate_python(payload)
        except ValidationError as e:
            raise TodoistDecodeError(f"Unexpected shared label list: {e}") from e

    def get_active_tasks(self, query: Optional[TaskQuery] = None) -> List[Task]:
        """Fetch active (non-completed) tasks.

        Args:
            query: Optional server-side selection; passed through untouched

        Returns:
            List of tasks in the order the API returned them
        """
        params = query.to_params() if query else None
        return self._get_models("/tasks", Task, params)

    def get_active_task(self, task_id: str) -> Task:
        return self._get_model(f"/tasks/{task_id}", Task)

    def get_task_comments(self, task_id: str) -> List[Comment]:
        return self._get_models("/comments", Comment, {"task_id": task_id})

    def get_project_comments(self, project_id: str) -> List[Comment]:
        return self._get_models("/comments", Comment, {"project_id": project_id})
