"""Routes Uitgiftes (remises) / Issue API routes."""

from fastapi import APIRouter, Depends, HTTPException, Query

from radio_console.api.deps import get_assignment_service
from radio_console.schemas.assignment import IssueCreate, IssueRead, IssueUpdate, IssueView
from radio_console.services.assignment_service import AssignmentService

router = APIRouter()


@router.get("/", response_model=list[IssueView])
async def list_issues(
    q: str | None = Query(None, description="issued_to, afdeling, item"),
    service: AssignmentService = Depends(get_assignment_service),
):
    """Lister les remises avec l'objet résolu / List issues with resolved item."""
    return await service.list_issues(q)


@router.get("/{issue_id}", response_model=IssueView)
async def get_issue(issue_id: str, service: AssignmentService = Depends(get_assignment_service)):
    issue = await service.get_issue(issue_id)
    if issue is None:
        raise HTTPException(status_code=404, detail="Issue not found")
    return issue


@router.post("/", response_model=IssueRead, status_code=201)
async def create_issue(data: IssueCreate, service: AssignmentService = Depends(get_assignment_service)):
    """Remettre un objet / Issue an item.

    Pour une radio, une entree 'issued' est ajoutee a son journal.
    For a radio, an 'issued' entry is appended to its log.
    """
    return await service.create_issue(data)


@router.put("/{issue_id}", response_model=IssueRead)
async def update_issue(issue_id: str, data: IssueUpdate, service: AssignmentService = Depends(get_assignment_service)):
    issue = await service.update_issue(issue_id, data)
    if issue is None:
        raise HTTPException(status_code=404, detail="Issue not found")
    return issue


@router.delete("/{issue_id}", status_code=204)
async def delete_issue(issue_id: str, service: AssignmentService = Depends(get_assignment_service)):
    await service.delete_issue(issue_id)
