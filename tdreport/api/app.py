"""FastAPI web application for tdreport."""

import logging
from typing import Dict, Iterator, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.responses import HTMLResponse

from tdreport.engine.catalog import projects_by_id
from tdreport.engine.hierarchy import child_project_ids
from tdreport.engine.report import ReportOptions, build_report
from tdreport.errors import HierarchyCycleError, ResolutionError, TodoistAPIError
from tdreport.integrations.todoist import TaskQuery, TodoistClient
from tdreport.models.display import DisplayReport
from tdreport.models.project import Label, Project
from tdreport.render import render_html

logger = logging.getLogger(__name__)

VERSION = "0.1.0"

app = FastAPI(
    title="tdreport API",
    description="Filtered, sorted and grouped views of your Todoist tasks",
    version=VERSION,
)


def get_todoist_client() -> Iterator[TodoistClient]:
    """Dependency providing a Todoist client for one request."""
    try:
        client = TodoistClient()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e))
    try:
        yield client
    finally:
        client.close()


def _report_options(
    label: Optional[str] = Query(None, description="Only tasks with this label name"),
    project: Optional[str] = Query(None, description="Only tasks in this project"),
    priorities: List[int] = Query([], description="Display priorities to keep (repeatable)"),
    grouped: bool = Query(True, description="Group tasks by project"),
    tree: bool = Query(False, description="Nest projects by hierarchy"),
    filter: Optional[str] = Query(None, description="Todoist filter expression"),
) -> ReportOptions:
    query = TaskQuery(filter=filter) if filter else None
    return ReportOptions(
        label=label,
        project=project,
        priorities=priorities,
        grouped=grouped,
        tree=tree,
        query=query,
    )


def _run_report(client: TodoistClient, options: ReportOptions) -> DisplayReport:
    try:
        return build_report(client, options)
    except ResolutionError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except HierarchyCycleError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except TodoistAPIError as e:
        logger.error(f"Report failed: {e}")
        raise HTTPException(status_code=502, detail=f"Failed to fetch from Todoist: {str(e)}")


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": VERSION}


@app.get("/projects", response_model=List[Project])
def list_projects(client: TodoistClient = Depends(get_todoist_client)):
    """List all projects."""
    try:
        return client.get_all_projects()
    except TodoistAPIError as e:
        raise HTTPException(status_code=502, detail=f"Failed to fetch projects: {str(e)}")


@app.get("/projects/tree", response_model=Dict[str, List[str]])
def project_children(client: TodoistClient = Depends(get_todoist_client)):
    """Map each parent project id ("" for top level) to its child project ids."""
    try:
        projects = client.get_all_projects()
    except TodoistAPIError as e:
        raise HTTPException(status_code=502, detail=f"Failed to fetch projects: {str(e)}")
    return child_project_ids(projects_by_id(projects).values())


@app.get("/labels", response_model=List[Label])
def list_labels(client: TodoistClient = Depends(get_todoist_client)):
    """List all personal labels."""
    try:
        return client.get_all_labels()
    except TodoistAPIError as e:
        raise HTTPException(status_code=502, detail=f"Failed to fetch labels: {str(e)}")


@app.get("/report", response_model=DisplayReport)
def report(
    options: ReportOptions = Depends(_report_options),
    client: TodoistClient = Depends(get_todoist_client),
):
    """Filtered, sorted and grouped tasks as JSON."""
    return _run_report(client, options)


@app.get("/", response_class=HTMLResponse)
def report_page(
    options: ReportOptions = Depends(_report_options),
    client: TodoistClient = Depends(get_todoist_client),
):
    """Filtered, sorted and grouped tasks as an HTML page."""
    return render_html(_run_report(client, options))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
