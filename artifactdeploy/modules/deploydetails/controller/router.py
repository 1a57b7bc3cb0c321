"""FastAPI routes exposing deploy detail resolution."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request

from artifactdeploy.modules.deploydetails.service.manager import DeployDetailsService

router = APIRouter(prefix="/deploydetails", tags=["deploy-details"])


def get_service(request: Request) -> DeployDetailsService:
    container = getattr(request.app.state, "container", None)
    if not container or not getattr(container, "deploydetails_service", None):
        raise HTTPException(status_code=500, detail="Deploy details service not initialized.")
    return container.deploydetails_service


@router.post("/resolve")
async def resolve(payload: Dict[str, Any], svc: DeployDetailsService = Depends(get_service)):
    result = svc.resolve_payload(payload)
    if not result.ok and result.data is None:
        raise HTTPException(status_code=400, detail=result.message)
    return result.as_dict()


@router.get("/publisher")
async def publisher(svc: DeployDetailsService = Depends(get_service)):
    config = svc.config
    return {
        "repoKey": config.repo_key,
        "releaseRepoKey": config.release_repo_key,
        "snapshotRepoKey": config.snapshot_repo_key,
        "m2Compatible": config.m2_compatible,
        "artifactPattern": config.artifact_pattern,
        "packageType": config.package_type.value,
        "propertySpecs": len(svc.specs),
    }
