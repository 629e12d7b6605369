"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Tables/panels are reused by several commands.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Comment, Post, PostDetail, User

_PREVIEW_CHARS = 60


def print_banner(console: Console) -> None:
    title = Text("blog-sync", style="bold cyan")
    subtitle = Text("Posts • Comments • Users", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _preview(text: str) -> str:
    line = " ".join(text.split())
    if len(line) <= _PREVIEW_CHARS:
        return line
    return line[: _PREVIEW_CHARS - 1].rstrip() + "…"


def build_posts_table(posts: Iterable[Post], *, title: str = "Posts") -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True, justify="right")
    table.add_column("Title", style="bold white")
    table.add_column("Preview", style="dim")
    for post in posts:
        table.add_row(str(post.id), post.title, _preview(post.body))
    return table


def build_users_table(users: Iterable[User]) -> Table:
    table = Table(title="Users")
    table.add_column("ID", style="cyan", no_wrap=True, justify="right")
    table.add_column("Username", style="white")
    table.add_column("Name", style="bold white")
    table.add_column("Email", style="magenta")
    table.add_column("Website", style="dim")
    for user in users:
        table.add_row(str(user.id), user.username, user.name, user.email, user.website or "")
    return table


def build_comments_table(comments: Iterable[Comment]) -> Table:
    table = Table(title="Comments")
    table.add_column("ID", style="cyan", no_wrap=True, justify="right")
    table.add_column("Post", style="cyan", justify="right")
    table.add_column("Author", style="magenta")
    table.add_column("Comment", style="white")
    for comment in comments:
        table.add_row(str(comment.id), str(comment.post_id), comment.email, _preview(comment.body))
    return table


def build_post_detail_panel(detail: PostDetail) -> Panel:
    """Detail screen: post body, author and comments."""

    body = Text()
    body.append(detail.post.body.strip() + "\n\n")
    if detail.author:
        body.append("By ", style="dim")
        body.append(f"{detail.author.name} (@{detail.author.username})", style="bold")
    else:
        body.append(f"By user #{detail.post.user_id}", style="dim")

    parts: list[object] = [body]
    if detail.comments:
        comments = Text()
        comments.append(f"\n{len(detail.comments)} comments\n", style="bold")
        for comment in detail.comments:
            comments.append(f"- {comment.email}: ", style="magenta")
            comments.append(_preview(comment.body) + "\n")
        parts.append(comments)

    title = Text(detail.post.title, style="bold yellow")
    return Panel(Group(*parts), title=title, border_style="yellow")
