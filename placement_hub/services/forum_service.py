"""
Forum Service - community posts and comments.

Rules:
- Posts and comments are edited only by their author. Deletion is also
  open to admins when forum moderation is enabled.
- Deleting a post deletes every comment on it; comments never outlive
  their post.
- Likes are a set (liked_by). Toggling is done with conditional
  $addToSet / $pull updates so concurrent likes cannot be lost, and the
  like count is always the size of that set.
- Every read of a post increments its view count, repeat readers included.
"""

import logging
from enum import Enum
from typing import List, Optional, Tuple
from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection

from placement_hub.core.auth import Identity
from placement_hub.core.errors import NotFound, ValidationError
from placement_hub.core.policy import Action, ResourceKind, enforce
from placement_hub.db.mongodb import get_collection
from placement_hub.services.mongo_service import (
    NEWEST_FIRST, OLDEST_FIRST, contains_pattern, serialize_doc, to_object_id, utcnow
)
from placement_hub.services.notification_service import NotificationKind, NotificationService

logger = logging.getLogger(__name__)


class ForumCategory(str, Enum):
    interview_tips = "Interview Tips"
    job_seeking = "Job Seeking"
    career_advice = "Career Advice"
    networking = "Networking"
    general = "General Discussion"
    company_reviews = "Company Reviews"


class PostSort(str, Enum):
    recent = "recent"
    popular = "popular"
    views = "views"


def parse_category(value: str) -> ForumCategory:
    try:
        return ForumCategory(value)
    except ValueError:
        raise ValidationError(f"Unknown category '{value}'")


def clean_tags(tags: Optional[List[str]]) -> List[str]:
    seen = []
    for tag in tags or []:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


def toggle_like(collection: Collection, oid, account_id: str) -> Tuple[dict, bool]:
    """
    Flip account_id's membership in liked_by. Returns (document, is_liked).

    Each branch is a single conditional update, so two users liking at the
    same time both land in the set.
    """
    liked = collection.find_one_and_update(
        {"_id": oid, "liked_by": {"$ne": account_id}},
        {"$addToSet": {"liked_by": account_id}},
        return_document=ReturnDocument.AFTER
    )
    if liked is not None:
        return liked, True

    unliked = collection.find_one_and_update(
        {"_id": oid, "liked_by": account_id},
        {"$pull": {"liked_by": account_id}},
        return_document=ReturnDocument.AFTER
    )
    if unliked is not None:
        return unliked, False

    raise NotFound("Content not found")


def present_content(doc: dict, viewer_id: str) -> dict:
    """Serialize a post/comment with viewer-relative like fields."""
    item = serialize_doc(doc)
    liked_by = item.pop("liked_by", []) or []
    item["like_count"] = len(liked_by)
    item["is_liked"] = viewer_id in liked_by
    return item


class ForumService:

    def __init__(self):
        self.posts = get_collection("posts")
        self.comments = get_collection("comments")
        self.notifications = NotificationService()

    # ============================================================
    # POSTS
    # ============================================================

    def create_post(self, identity: Identity, title: str, content: str,
                    category: str = ForumCategory.general.value, tags: List[str] = None) -> dict:
        title, content = (title or "").strip(), (content or "").strip()
        if not title or not content:
            raise ValidationError("Title and content are required")

        now = utcnow()
        doc = {
            "author_id": identity.id,
            "author_name": identity.name,
            "title": title,
            "content": content,
            "category": parse_category(category).value,
            "tags": clean_tags(tags),
            "liked_by": [],
            "view_count": 0,
            "created_at": now,
            "updated_at": now,
        }
        result = self.posts.insert_one(doc)
        doc["_id"] = result.inserted_id
        return self._present_post(doc, identity.id, comment_count=0)

    def list_posts(
        self,
        identity: Identity,
        category: Optional[str] = None,
        search: Optional[str] = None,
        sort: str = PostSort.recent.value,
        author_id: Optional[str] = None,
    ) -> List[dict]:
        query = {}
        if category and category != "All":
            query["category"] = parse_category(category).value
        if author_id:
            query["author_id"] = author_id
        if search and search.strip():
            pattern = contains_pattern(search)
            query["$or"] = [{"title": pattern}, {"content": pattern}, {"tags": pattern}]

        sort = PostSort(sort)
        cursor = self.posts.find(query)
        if sort == PostSort.views:
            cursor = cursor.sort([("view_count", DESCENDING)] + NEWEST_FIRST)
        else:
            cursor = cursor.sort(NEWEST_FIRST)
        docs = list(cursor)
        if sort == PostSort.popular:
            # Array length is not sortable in a find(); order in memory, stable on recency
            docs.sort(key=lambda d: len(d.get("liked_by") or []), reverse=True)

        return [self._present_post(doc, identity.id) for doc in docs]

    def get_post(self, identity: Identity, post_id: str) -> dict:
        """Read a post with its comments. Counts as a view."""
        post = self.posts.find_one_and_update(
            {"_id": to_object_id(post_id, "Post")},
            {"$inc": {"view_count": 1}},
            return_document=ReturnDocument.AFTER
        )
        if not post:
            raise NotFound("Post not found")

        comments = self.list_comments(identity, str(post["_id"]))
        result = self._present_post(post, identity.id, comment_count=len(comments))
        result["comments"] = comments
        return result

    def edit_post(self, identity: Identity, post_id: str, changes: dict) -> dict:
        post = self._get_post(post_id)
        enforce(identity, ResourceKind.post, Action.edit, post)

        updates = {}
        for field in ("title", "content"):
            if changes.get(field) is not None:
                value = changes[field].strip()
                if not value:
                    raise ValidationError(f"{field} cannot be empty")
                updates[field] = value
        if changes.get("category") is not None:
            updates["category"] = parse_category(changes["category"]).value
        if changes.get("tags") is not None:
            updates["tags"] = clean_tags(changes["tags"])
        if not updates:
            raise ValidationError("No fields to update")

        updates["updated_at"] = utcnow()
        updated = self.posts.find_one_and_update(
            {"_id": post["_id"]},
            {"$set": updates},
            return_document=ReturnDocument.AFTER
        )
        return self._present_post(updated, identity.id)

    def delete_post(self, identity: Identity, post_id: str) -> int:
        """Delete a post and all of its comments. Returns the number of comments removed."""
        post = self._get_post(post_id)
        enforce(identity, ResourceKind.post, Action.delete, post)

        post_key = str(post["_id"])
        self.posts.delete_one({"_id": post["_id"]})
        # add_comment re-checks the post after inserting and removes a comment that lost its post
        removed = self.comments.delete_many({"post_id": post_key}).deleted_count
        logger.info("Post %s deleted by %s with %d comments", post_key, identity.user_id, removed)
        return removed

    def toggle_post_like(self, identity: Identity, post_id: str) -> dict:
        post, is_liked = toggle_like(self.posts, to_object_id(post_id, "Post"), identity.id)
        if is_liked:
            self.notifications.notify_unless_self(
                identity.id, post["author_id"],
                f"{identity.name} liked your post \"{post['title']}\"",
                NotificationKind.like,
                link=f"/forum/posts/{post['_id']}",
            )
        return {"like_count": len(post["liked_by"]), "is_liked": is_liked}

    # ============================================================
    # COMMENTS
    # ============================================================

    def add_comment(self, identity: Identity, post_id: str, content: str) -> dict:
        post = self._get_post(post_id)
        content = (content or "").strip()
        if not content:
            raise ValidationError("Comment content is required")

        now = utcnow()
        doc = {
            "post_id": str(post["_id"]),
            "author_id": identity.id,
            "author_name": identity.name,
            "content": content,
            "liked_by": [],
            "created_at": now,
            "updated_at": now,
        }
        result = self.comments.insert_one(doc)
        doc["_id"] = result.inserted_id

        # The post may have been deleted between the lookup and the insert
        if not self.posts.find_one({"_id": post["_id"]}, {"_id": 1}):
            self.comments.delete_one({"_id": result.inserted_id})
            raise NotFound("Post not found")

        try:
            self.notifications.notify_unless_self(
                identity.id, post["author_id"],
                f"{identity.name} commented on your post \"{post['title']}\"",
                NotificationKind.comment,
                link=f"/forum/posts/{post['_id']}",
            )
        except Exception:
            self.comments.delete_one({"_id": result.inserted_id})
            raise
        return present_content(doc, identity.id)

    def list_comments(self, identity: Identity, post_id: str) -> List[dict]:
        post_id = str(self._get_post(post_id)["_id"])
        cursor = self.comments.find({"post_id": post_id}).sort(OLDEST_FIRST)
        return [present_content(doc, identity.id) for doc in cursor]

    def edit_comment(self, identity: Identity, comment_id: str, content: str) -> dict:
        comment = self._get_comment(comment_id)
        enforce(identity, ResourceKind.comment, Action.edit, comment)
        content = (content or "").strip()
        if not content:
            raise ValidationError("Comment content is required")

        updated = self.comments.find_one_and_update(
            {"_id": comment["_id"]},
            {"$set": {"content": content, "updated_at": utcnow()}},
            return_document=ReturnDocument.AFTER
        )
        return present_content(updated, identity.id)

    def delete_comment(self, identity: Identity, comment_id: str) -> None:
        comment = self._get_comment(comment_id)
        enforce(identity, ResourceKind.comment, Action.delete, comment)
        self.comments.delete_one({"_id": comment["_id"]})

    def toggle_comment_like(self, identity: Identity, comment_id: str) -> dict:
        comment, is_liked = toggle_like(self.comments, to_object_id(comment_id, "Comment"), identity.id)
        if is_liked:
            self.notifications.notify_unless_self(
                identity.id, comment["author_id"],
                f"{identity.name} liked your comment",
                NotificationKind.like,
                link=f"/forum/posts/{comment['post_id']}",
            )
        return {"like_count": len(comment["liked_by"]), "is_liked": is_liked}

    # ============================================================
    # HELPERS
    # ============================================================

    def _get_post(self, post_id: str) -> dict:
        post = self.posts.find_one({"_id": to_object_id(post_id, "Post")})
        if not post:
            raise NotFound("Post not found")
        return post

    def _get_comment(self, comment_id: str) -> dict:
        comment = self.comments.find_one({"_id": to_object_id(comment_id, "Comment")})
        if not comment:
            raise NotFound("Comment not found")
        return comment

    def _present_post(self, doc: dict, viewer_id: str, comment_count: Optional[int] = None) -> dict:
        item = present_content(doc, viewer_id)
        if comment_count is None:
            comment_count = self.comments.count_documents({"post_id": item["id"]})
        item["comment_count"] = comment_count
        return item
