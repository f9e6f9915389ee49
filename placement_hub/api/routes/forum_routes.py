"""
Forum Routes

GET /forum/posts - List posts (category, search, sort)
POST /forum/posts - Create post
GET /forum/my-posts - The caller's own posts
GET /forum/posts/{post_id} - Post with comments (counts as a view)
PUT /forum/posts/{post_id} - Edit own post
DELETE /forum/posts/{post_id} - Delete own post and its comments
POST /forum/posts/{post_id}/like - Toggle like on a post
GET /forum/posts/{post_id}/comments - Comments on a post, oldest first
POST /forum/posts/{post_id}/comments - Comment on a post
PUT /forum/comments/{comment_id} - Edit own comment
DELETE /forum/comments/{comment_id} - Delete own comment
POST /forum/comments/{comment_id}/like - Toggle like on a comment
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional

from placement_hub.core.auth import Identity, get_current_user
from placement_hub.services.forum_service import ForumService, PostSort
from placement_hub.schemas.schemas import (
    APIResponse, CommentCreate, CommentListResponse, CommentResponse, LikeResponse, PostCreate,
    PostDetailResponse, PostListResponse, PostResponse, PostUpdate
)

router = APIRouter(prefix="/forum", tags=["Forum"])


# ============================================================
# POSTS
# ============================================================

@router.get("/posts", response_model=PostListResponse)
async def list_posts(
    category: Optional[str] = Query(None, description="Category name, or All"),
    search: Optional[str] = Query(None, description="Search title, content and tags"),
    sort: PostSort = Query(PostSort.recent),
    user: Identity = Depends(get_current_user)
):
    posts = ForumService().list_posts(user, category=category, search=search, sort=sort.value)
    return PostListResponse(count=len(posts), posts=posts)


@router.post("/posts", response_model=PostResponse, status_code=201)
async def create_post(post: PostCreate, user: Identity = Depends(get_current_user)):
    created = ForumService().create_post(user, post.title, post.content, post.category.value, post.tags)
    return PostResponse(message="Post created successfully", post=created)


@router.get("/my-posts", response_model=PostListResponse)
async def my_posts(user: Identity = Depends(get_current_user)):
    posts = ForumService().list_posts(user, author_id=user.id)
    return PostListResponse(count=len(posts), posts=posts)


@router.get("/posts/{post_id}", response_model=PostDetailResponse)
async def get_post(post_id: str, user: Identity = Depends(get_current_user)):
    post = ForumService().get_post(user, post_id)
    return PostDetailResponse(post=post, comments=post["comments"])


@router.put("/posts/{post_id}", response_model=PostResponse)
async def update_post(post_id: str, update: PostUpdate, user: Identity = Depends(get_current_user)):
    updated = ForumService().edit_post(user, post_id, update.model_dump(exclude_unset=True, mode="json"))
    return PostResponse(message="Post updated successfully", post=updated)


@router.delete("/posts/{post_id}", response_model=APIResponse)
async def delete_post(post_id: str, user: Identity = Depends(get_current_user)):
    """Authors delete their own posts; admins may moderate. Comments go with the post."""
    ForumService().delete_post(user, post_id)
    return APIResponse(message="Post deleted successfully")


@router.post("/posts/{post_id}/like", response_model=LikeResponse)
async def like_post(post_id: str, user: Identity = Depends(get_current_user)):
    return LikeResponse(**ForumService().toggle_post_like(user, post_id))


# ============================================================
# COMMENTS
# ============================================================

@router.get("/posts/{post_id}/comments", response_model=CommentListResponse)
async def list_comments(post_id: str, user: Identity = Depends(get_current_user)):
    comments = ForumService().list_comments(user, post_id)
    return CommentListResponse(count=len(comments), comments=comments)


@router.post("/posts/{post_id}/comments", response_model=CommentResponse, status_code=201)
async def add_comment(post_id: str, comment: CommentCreate, user: Identity = Depends(get_current_user)):
    created = ForumService().add_comment(user, post_id, comment.content)
    return CommentResponse(message="Comment added successfully", comment=created)


@router.put("/comments/{comment_id}", response_model=CommentResponse)
async def update_comment(comment_id: str, comment: CommentCreate, user: Identity = Depends(get_current_user)):
    updated = ForumService().edit_comment(user, comment_id, comment.content)
    return CommentResponse(message="Comment updated successfully", comment=updated)


@router.delete("/comments/{comment_id}", response_model=APIResponse)
async def delete_comment(comment_id: str, user: Identity = Depends(get_current_user)):
    ForumService().delete_comment(user, comment_id)
    return APIResponse(message="Comment deleted successfully")


@router.post("/comments/{comment_id}/like", response_model=LikeResponse)
async def like_comment(comment_id: str, user: Identity = Depends(get_current_user)):
    return LikeResponse(**ForumService().toggle_comment_like(user, comment_id))
