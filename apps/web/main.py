"""FastAPI web application for wsprobe."""

from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from wsprobe.detect import get_workspaces, parse_kind
from wsprobe.models import Broken, Found

app = FastAPI(
    title="wsprobe",
    description="Find and describe the workspace a directory belongs to",
    version="0.1.0",
)


class DiscoverRequest(BaseModel):
    """Request model for a workspace search."""
    start_dir: str
    clamp_dir: Optional[str] = None
    kind: Optional[str] = None


class DiscoverResponse(BaseModel):
    """Response model for a workspace search."""
    status: str
    kind: Optional[str] = None
    manifest_path: Optional[str] = None
    cause: Optional[str] = None
    workspace: Optional[dict] = None


@app.get("/health")
def health():
    """Liveness probe."""
    return {"status": "ok"}


@app.post("/api/discover", response_model=DiscoverResponse)
def discover_workspace(request: DiscoverRequest):
    """Search upward from a server-side directory for a workspace."""
    try:
        start_dir = Path(request.start_dir)
        if not start_dir.is_dir():
            raise HTTPException(status_code=400, detail=f"Directory {request.start_dir} not found")

        try:
            kinds = [parse_kind(request.kind)] if request.kind else None
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        clamp_dir = Path(request.clamp_dir) if request.clamp_dir else None
        workspaces = get_workspaces(start_dir, clamp_dir, kinds)

        found = workspaces.found()
        if found:
            info = workspaces.best()
            return DiscoverResponse(
                status=Found.status,
                kind=info.kind.value,
                manifest_path=str(info.manifest_path),
                workspace=info.as_dict(),
            )

        for kind, search in workspaces.searches.items():
            if isinstance(search, Broken):
                return DiscoverResponse(
                    status=Broken.status,
                    kind=kind.value,
                    manifest_path=str(search.manifest_path),
                    cause=str(search.cause),
                )

        return DiscoverResponse(status="missing")

    except HTTPException:
        # Re-raise HTTP exceptions (don't convert to 500)
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error discovering workspace: {str(e)}")
