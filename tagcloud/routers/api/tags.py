# ruff: noqa: B008
"""API routes for tags and the tag cloud."""

from typing import List

from fastapi import APIRouter, Depends, status

from tagcloud.database import Store, get_store
from tagcloud.schemas import MessageResponse, Tag, UpsertRequest, UpsertResponse
from tagcloud.services.tag_service import TagService

router = APIRouter(prefix="/api", tags=["tags"])


def get_tag_service(store: Store = Depends(get_store)) -> TagService:
    """Dependency for getting a tag service bound to the store."""
    return TagService(store)


@router.get("/tags", response_model=List[Tag])
def list_tags(service: TagService = Depends(get_tag_service)):
    """List all tags."""
    return service.list_tags()


@router.post("/tags", response_model=UpsertResponse, status_code=status.HTTP_201_CREATED)
def add_tags(request: UpsertRequest, service: TagService = Depends(get_tag_service)):
    """Add tags, incrementing the count of those already known."""
    processed = service.upsert_tags(request.tags)
    return UpsertResponse(message="Tags added successfully", count=processed)


@router.delete("/tags/{tag_id}", response_model=MessageResponse)
def delete_tag(tag_id: int, service: TagService = Depends(get_tag_service)):
    """Delete a tag by ID. Unknown IDs are accepted."""
    service.delete_tag(tag_id)
    return MessageResponse(message="Tag deleted successfully")


@router.get("/tagcloud", response_model=List[Tag])
def tag_cloud(service: TagService = Depends(get_tag_service)):
    """Get a random selection of at most 20 tags."""
    return service.tag_cloud()
