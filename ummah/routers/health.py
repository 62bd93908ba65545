from fastapi import APIRouter, Depends, HTTPException, Request

from ummah.repositories.file_repository import FileRepository

router = APIRouter(tags=["health"])


def get_repository(request: Request) -> FileRepository:
    """Hand out the repository built by the app lifespan."""
    return request.app.state.repository


@router.get("/healthz")
def healthz(repo: FileRepository = Depends(get_repository)):
    if not repo.check_health():
        raise HTTPException(503, "Storage unavailable")
    return {"ok": True}


@router.get("/status")
def status(repo: FileRepository = Depends(get_repository)):
    return repo.get_database_status()
