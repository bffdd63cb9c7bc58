# preview_server/api/routes.py
"""Read-only `/public` endpoints backed by the JSON snapshots.

Registration order matters: `/listings/by-tag` is a prefix match (it also
takes `/listings/by-tag/x` and `/listings/by-tagged`) and must be declared
before the catch-all `/listings/{...}` id route.
"""
from fastapi import APIRouter, Depends
from .. import projections, snapshots
from ..config import Settings
from ..exceptions import NotFoundError
from ..responses import json_response
from ..schemas import ListingTagQuery, ReviewQuery
from ..snapshots import SnapshotReader, get_settings, get_snapshots

router = APIRouter(prefix="/public")


def _last_segment(path: str) -> str:
    return path.split("/")[-1]


@router.get("/reviews")
def reviews(query: ReviewQuery = Depends(), store: SnapshotReader = Depends(get_snapshots)):
    data = store.read(snapshots.REVIEWS, [])
    return json_response(projections.limit_reviews(data, query.limit))


@router.get("/listings")
def listings(store: SnapshotReader = Depends(get_snapshots)):
    return json_response(projections.list_listings(store.read(snapshots.LISTINGS, [])))


@router.get("/listings/by-tag{suffix:path}")
def listings_by_tag(
    suffix: str,
    query: ListingTagQuery = Depends(),
    store: SnapshotReader = Depends(get_snapshots),
    settings: Settings = Depends(get_settings),
):
    tags = store.read(snapshots.TAGS, [])
    tag_id = projections.resolve_tag_id(tags, query.tag_id, query.tag_ref, settings)
    data = store.read(snapshots.LISTINGS, [])
    return json_response(projections.listings_by_tag(data, tag_id, query.admin_only, settings))


@router.get("/listings/{listing_path:path}")
def get_listing(listing_path: str, store: SnapshotReader = Depends(get_snapshots)):
    obj = projections.find_listing(store.read(snapshots.LISTINGS, []), _last_segment(listing_path))
    if obj is None:
        raise NotFoundError("Vehicle not found")
    return json_response(obj)


@router.get("/blogs")
def blogs(store: SnapshotReader = Depends(get_snapshots)):
    return json_response(projections.list_blogs(store.read(snapshots.BLOGS, [])))


@router.get("/blogs/{blog_path:path}")
def get_blog(blog_path: str, store: SnapshotReader = Depends(get_snapshots)):
    obj = projections.find_blog(store.read(snapshots.BLOGS, []), _last_segment(blog_path))
    if obj is None:
        raise NotFoundError("Blog not found")
    return json_response(obj)


@router.get("/categories")
def categories(store: SnapshotReader = Depends(get_snapshots)):
    return json_response(projections.list_categories(store.read(snapshots.CATEGORIES, [])))


@router.get("/models")
def models(store: SnapshotReader = Depends(get_snapshots)):
    return json_response(projections.list_models(store.read(snapshots.MODELS, [])))


@router.get("/tags")
def tags(store: SnapshotReader = Depends(get_snapshots)):
    return json_response(projections.list_tags(store.read(snapshots.TAGS, [])))
