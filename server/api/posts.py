# server/api/posts.py

import logging
from pydantic import BaseModel, ConfigDict
from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from api.deps import get_current_user, get_settings, get_store
from config import Settings
from core.errors import ValidationError
from core.store import PostStore, check_required_fields
from core.uploads import save_image
from models.post import POST_TEXT_FIELDS


# -------------------------------
# Router & Schemas
# -------------------------------

router = APIRouter(prefix="/api/posts", tags=["posts"])

logger = logging.getLogger("portfolio.posts")

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


class PostOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str | None = None
    date: str | None = None
    image: str | None = None
    category: str | None = None
    excerpt: str | None = None
    content: str | None = None
    author: str | None = None


def _as_text(value):
    return None if value is None else str(value)


async def read_post_payload(request: Request) -> tuple[dict, UploadFile | None]:
    """
    Reads post fields from either a JSON body or a multipart form.
    A multipart form may carry the image file under `image`.
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        fields = {name: form.get(name) for name in POST_TEXT_FIELDS if name in form}
        for name, value in fields.items():
            if isinstance(value, UploadFile):
                raise ValidationError(f"Invalid form field: {name}")
        image = form.get("image")
        if isinstance(image, UploadFile):
            # an empty file input still arrives as a part with no filename
            return fields, image if image.filename else None
        if "image" in form:
            fields["image"] = image or None
        return fields, None

    try:
        body = await request.json()
    except ValueError as e:
        raise ValidationError("Invalid JSON body") from e
    if not isinstance(body, dict):
        raise ValidationError("Invalid JSON body")

    fields = {name: _as_text(body[name]) for name in POST_TEXT_FIELDS if name in body}
    if "image" in body:
        fields["image"] = _as_text(body["image"]) or None
    return fields, None


# -------------------------------
# Post Endpoints
# -------------------------------

@router.get("", response_model=list[PostOut])
def list_posts(store: PostStore = Depends(get_store)):
    """
    Lists every post, newest first. Category filtering happens on the client.
    """
    return store.list_posts()


@router.get("/{post_id}", response_model=PostOut)
def get_post(post_id: int, store: PostStore = Depends(get_store)):
    return store.get_post(post_id)


@router.post("", response_model=PostOut, status_code=201)
async def create_post(
    request: Request,
    current_user: dict = Depends(get_current_user),
    store: PostStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    fields, image = await read_post_payload(request)
    check_required_fields(fields)

    if image is not None:
        fields["image"] = await run_in_threadpool(save_image, image, settings.upload_dir)

    post = await run_in_threadpool(store.create_post, fields)
    logger.info("User %r created post %s", current_user["username"], post.id)
    return post


@router.put("/{post_id}", response_model=PostOut)
async def update_post(
    post_id: int,
    request: Request,
    current_user: dict = Depends(get_current_user),
    store: PostStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    fields, image = await read_post_payload(request)

    if image is not None:
        # 404 before anything lands in the uploads folder
        await run_in_threadpool(store.get_post, post_id)
        fields["image"] = await run_in_threadpool(save_image, image, settings.upload_dir)

    post = await run_in_threadpool(store.update_post, post_id, fields)
    logger.info("User %r updated post %s", current_user["username"], post_id)
    return post


@router.delete("/{post_id}")
def delete_post(
    post_id: int,
    current_user: dict = Depends(get_current_user),
    store: PostStore = Depends(get_store),
):
    """
    Deletes the post if it exists. Deleting an unknown id still succeeds.
    """
    store.delete_post(post_id)
    logger.info("User %r deleted post %s", current_user["username"], post_id)
    return {"success": True}
