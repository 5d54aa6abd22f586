"""Thread-aware comment search.

Matching is two-tiered: an exact substring test on normalized content,
then an approximate pass through a TextMatcher. A matching reply pulls
its top-level parent into the results (marked to show replies expanded),
and a parent is never placed after one of its own matched replies.
Unrelated results keep their collection order.
"""

from threadlens.domain.model import Comment
from threadlens.domain.service.text_matcher import TextMatcher, TokenWindowMatcher
from threadlens.domain.value import CommentId
from threadlens.util.text import normalize_text


def _resolve_parent(
    comment: Comment, by_id: dict[CommentId, Comment]
) -> Comment | None:
    """Return the top-level parent of a reply, or None for orphans."""
    if not comment.is_reply or not comment.comment_parent_id:
        return None
    parent = by_id.get(comment.comment_parent_id)
    if parent is None or not parent.is_top_level:
        return None
    return parent


def _thread_order(
    matched: dict[CommentId, Comment], by_id: dict[CommentId, Comment]
) -> list[Comment]:
    """Emit each parent no later than its first matched reply."""
    ordered: list[Comment] = []
    emitted: set[CommentId] = set()
    for comment_id, comment in matched.items():
        if comment_id in emitted:
            continue
        parent = _resolve_parent(comment, by_id)
        if parent is not None and parent.comment_id not in emitted:
            ordered.append(matched[parent.comment_id])
            emitted.add(parent.comment_id)
        ordered.append(comment)
        emitted.add(comment_id)
    return ordered


def search_comments(
    comments: list[Comment],
    keyword: str,
    matcher: TextMatcher | None = None,
) -> list[Comment]:
    """Search comments, keeping thread structure intact.

    An empty or whitespace-only keyword returns the input unchanged.

    Args:
        comments: Collection to search (top-level comments and replies)
        keyword: Free text to look for
        matcher: Approximate matcher; defaults to TokenWindowMatcher

    Returns:
        Matched comments and the parents of matched replies, each once
    """
    if not keyword or not keyword.strip():
        return comments

    matcher = matcher or TokenWindowMatcher()
    needle = normalize_text(keyword.strip())

    by_id: dict[CommentId, Comment] = {}
    for comment in comments:
        by_id.setdefault(comment.comment_id, comment)

    matched: dict[CommentId, Comment] = {}
    for comment in comments:
        content = normalize_text(comment.content)
        if needle not in content and not matcher.matches(needle, content):
            continue

        if comment.comment_id not in matched:
            matched[comment.comment_id] = comment

        parent = _resolve_parent(comment, by_id)
        if parent is not None:
            # Replaces a plain entry in place if the parent matched itself
            matched[parent.comment_id] = parent.model_copy(
                update={"show_replies_default": True}
            )

    return _thread_order(matched, by_id)
