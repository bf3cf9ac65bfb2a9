import logging

from fastapi import APIRouter, Depends

from app.api.v1.deps import get_current_user, get_current_user_id, parse_id
from app.core.errors import ForbiddenError, NotFoundError, ValidationError, field_error
from app.models.post import Post
from app.models.user import User
from app.schemas.post import PostIn

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/posts", tags=["posts"])

POST_NOT_FOUND_MSG = "Post could not be found"


def _post_to_dict(p: Post) -> dict:
    return {
        "id": str(p.id),
        "user": str(p.user_id),
        "text": p.text,
        "name": p.name,
        "avatar": p.avatar,
        "date": p.created_at.isoformat() if p.created_at else None,
    }


async def _get_post(post_id: str) -> Post:
    post = await Post.get_or_none(id=parse_id(post_id, POST_NOT_FOUND_MSG))
    if not post:
        raise NotFoundError(POST_NOT_FOUND_MSG)
    return post


@router.post("")
async def create_post(body: PostIn, user: User = Depends(get_current_user)):
    """
    Create a post as the current user.

    The author's name and avatar are copied onto the post at write time.

    Raises:
        ValidationError (400): Empty text
        NotFoundError (404): The user was deleted after the token was issued
    """
    if not body.text or not body.text.strip():
        raise ValidationError([field_error("text", "You must input text.")])
    post = await Post.create(
        user=user,
        text=body.text,
        name=user.name,
        avatar=user.avatar,
    )
    return _post_to_dict(post)


@router.get("")
async def list_posts(user_id: str = Depends(get_current_user_id)):
    """
    Get all posts, newest first.
    """
    rows = await Post.all().order_by("-created_at")
    return [_post_to_dict(p) for p in rows]


@router.get("/{post_id}")
async def get_post(post_id: str, user_id: str = Depends(get_current_user_id)):
    """
    Get a single post.

    Raises:
        NotFoundError (404): Malformed id or no such post
    """
    return _post_to_dict(await _get_post(post_id))


@router.delete("/{post_id}")
async def delete_post(post_id: str, user_id: str = Depends(get_current_user_id)):
    """
    Delete one of the current user's posts.

    Raises:
        NotFoundError (404): Malformed id or no such post
        ForbiddenError (403): The post belongs to someone else
    """
    post = await _get_post(post_id)
    if str(post.user_id) != user_id:
        raise ForbiddenError("User not authorized")
    await post.delete()
    logger.info("[posts] user=%s deleted post=%s", user_id, post_id)
    return {"msg": "Post removed"}
