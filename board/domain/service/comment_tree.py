"""Reply tree construction.

Comments are stored flat, each with an optional parent. A post's thread is
rebuilt per request in two passes over the flat list: index every comment,
then attach each one to its parent. Nothing walks parent chains, so the cost
is linear in the number of comments no matter how deep the thread goes.
"""

from dataclasses import dataclass, field
from typing import Sequence

import logfire

from board.domain.model.comment import Comment
from board.domain.value import CommentId


@dataclass(frozen=True)
class CommentNode:
    """One comment and its direct replies, oldest first."""

    comment: Comment
    replies: tuple["CommentNode", ...] = ()

    def walk(self):
        """Yield this node and every descendant, depth first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.replies))


@dataclass
class _Branch:
    comment: Comment
    children: list["_Branch"] = field(default_factory=list)


def build_comment_tree(comments: Sequence[Comment]) -> list[CommentNode]:
    """Arrange a post's comments into a forest of reply trees.

    Expects comments ordered by created_at ascending; siblings keep the input
    order. Deleted comments stay in place so their replies remain attached.
    A comment whose parent is not in the input is promoted to a root.

    Args:
        comments: Every comment of one post

    Returns:
        Top-level nodes in input order

    Raises:
        ValueError: If two comments share an id
    """
    branches: dict[CommentId, _Branch] = {}
    for comment in comments:
        if comment.id in branches:
            raise ValueError(f"Duplicate comment id in thread: {comment.id}")
        branches[comment.id] = _Branch(comment)

    roots: list[_Branch] = []
    for comment in comments:
        branch = branches[comment.id]
        parent = branches.get(comment.parent_id) if comment.parent_id else None
        if parent is not None:
            parent.children.append(branch)
            continue
        if comment.parent_id is not None:
            logfire.warn(
                "Comment parent missing from thread, treating as top-level",
                comment_id=str(comment.id),
                parent_id=str(comment.parent_id),
                post_id=str(comment.post_id),
            )
        roots.append(branch)

    return [_freeze(root) for root in roots]


def _freeze(root: _Branch) -> CommentNode:
    """Convert a branch into immutable nodes, children before parents."""
    frozen: dict[CommentId, CommentNode] = {}
    stack: list[tuple[_Branch, bool]] = [(root, False)]
    while stack:
        branch, children_done = stack.pop()
        if children_done:
            frozen[branch.comment.id] = CommentNode(
                comment=branch.comment,
                replies=tuple(frozen[child.comment.id] for child in branch.children),
            )
        else:
            stack.append((branch, True))
            stack.extend((child, False) for child in branch.children)
    return frozen[root.comment.id]
