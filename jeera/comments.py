"""Read-only access to issue comments"""

from __future__ import annotations

from typing import Any, Dict, List

from .exceptions import MalformedResponseError
from .issues import issue_path
from .model import Comment
from .transport import JiraTransport, check_status, decode_json


def comment_from_api(raw: Dict[str, Any]) -> Comment:
    """Project a server comment onto :class:`Comment`.

    Author and timezone come from ``updateAuthor``, i.e. whoever last edited
    the comment, which is what the server reports as the comment's author.
    """
    author = raw.get("updateAuthor")
    if not isinstance(author, dict):
        raise MalformedResponseError(f"comment {raw.get('id')} has no updateAuthor")
    if not isinstance(raw.get("id"), str) or not isinstance(raw.get("body"), str):
        raise MalformedResponseError(f"comment without id/body: {raw!r}")

    return Comment(
        id=raw["id"],
        body=raw["body"],
        author_display_name=author.get("displayName"),
        created=raw.get("created"),
        last_updated=raw.get("updated"),
        timezone=author.get("timeZone"),
    )


class CommentReader:
    def __init__(self, transport: JiraTransport) -> None:
        self.transport = transport

    def list_comments(self, id_or_key: str) -> List[Comment]:
        response = self.transport.request("GET", issue_path(id_or_key, "/comment"))
        check_status(response, 200, "get comments")

        data = decode_json(response, "get comments")
        raw_comments = data.get("comments") if isinstance(data, dict) else None
        if not isinstance(raw_comments, list):
            raise MalformedResponseError("comments response has no 'comments' list", body=response.text)

        comments = []
        for raw in raw_comments:
            if not isinstance(raw, dict):
                raise MalformedResponseError(f"comment entry is not an object: {raw!r}", body=response.text)
            try:
                comments.append(comment_from_api(raw))
            except MalformedResponseError as e:
                e.body = response.text
                raise
        return comments
