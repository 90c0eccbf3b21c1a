#!/usr/bin/env python3
"""Interactive CLI for working with Jira issues and the active sprint."""

import logging
import math
import sys
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .common import describe_error, setup_logging
from .config import CONFIG_HELP, JiraConfig
from .exceptions import JeeraError
from .model import Issue, IssueFields, IssueTypeRef, ProjectRef
from .session import Session

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

VERSION = "2.0"


def report_error(operation: str, error: Exception) -> None:
    err_console.print(f"❌ Error {escape(describe_error(operation, error))}", style="red")
    logger.debug(f"{operation} failed", exc_info=True)


def format_points(points: Optional[float]) -> str:
    return "-" if points is None else f"{points:g}"


def ask(text: str) -> str:
    """Prompt for a line of input; an empty answer is allowed."""
    return click.prompt(text, default="", show_default=False).strip()


def parse_story_points(text: str) -> Optional[float]:
    """Parse a non-negative number; report and return None otherwise."""
    try:
        value = float(text)
    except ValueError:
        value = None
    if value is None or not math.isfinite(value) or value < 0:
        err_console.print(f"❌ Invalid story points value: {escape(text)}", style="red")
        return None
    return value


# ============================================================================
# ACTIVE SPRINT
# ============================================================================
def show_sprint_report(session: Session, board_id: Optional[int], board_name: Optional[str]) -> None:
    logger.debug(f"board ID: {board_id}, board name: {board_name}")
    try:
        report = session.my_sprint_report(board_id=board_id, board_name=board_name)
    except JeeraError as e:
        report_error("fetching active sprint data", e)
        return

    if board_id is None:
        console.print(f"Board ID: {report.board.id}")
        console.print(f"Board Name: {escape(report.board.name)}")

    console.print("Associated Project Keys:")
    for i, key in enumerate(report.project_keys, start=1):
        console.print(f"  Key {i}: {escape(key)}")

    console.print(f"Active Sprint: {escape(report.sprint.name)} (ID: {report.sprint.id})")

    if not report.issues:
        console.print("No issues assigned to you in the active sprint.", style="yellow")
    else:
        table = Table(title="Your issues in the active sprint")
        table.add_column("Key", style="cyan", no_wrap=True)
        table.add_column("Summary", style="white")
        table.add_column("Points", style="green", justify="right")
        table.add_column("Status", style="magenta")
        for issue in report.issues:
            fields = issue.fields
            table.add_row(
                escape(issue.key or ""),
                escape(fields.summary or ""),
                format_points(fields.story_points),
                escape(fields.status.name or "") if fields.status else "",
            )
        console.print(table)

    console.print(
        f"Total Story Points assigned to you in this sprint: {format_points(report.total_story_points)}",
        style="bold",
    )


# ============================================================================
# INTERACTIVE PROMPTS
# ============================================================================
def create_issue_interactive(session: Session) -> None:
    console.print("\n--- Create New Issue ---", style="cyan")

    project_key = ask("Project Key")
    issue_type = ask("Issue Type (e.g., Bug, Task, Story)")
    summary = ask("Summary")
    description = ask("Description (optional)")

    issue = Issue(
        fields=IssueFields(
            project=ProjectRef(key=project_key) if project_key else None,
            issue_type=IssueTypeRef(name=issue_type) if issue_type else None,
            summary=summary,
            description=description,
        )
    )

    try:
        result = session.create_issue(issue)
    except JeeraError as e:
        report_error("creating issue", e)
        return

    console.print("✅ Issue created successfully!", style="green")
    console.print(f"Key: {result.key}")
    console.print(f"ID: {result.id}")


def get_issue_interactive(session: Session) -> None:
    console.print("\n--- Get Issue ---", style="cyan")
    id_or_key = ask("Issue ID or Key")

    try:
        issue = session.get_issue(id_or_key)
    except JeeraError as e:
        report_error("getting issue", e)
        return

    fields = issue.fields
    info_table = Table.grid(padding=1)
    info_table.add_column(style="cyan", justify="right")
    info_table.add_column(style="white")

    info_table.add_row("Key:", issue.key or "")
    info_table.add_row("ID:", issue.id or "")
    info_table.add_row("Summary:", escape(fields.summary or ""))
    if fields.issue_type:
        info_table.add_row("Issue Type:", escape(fields.issue_type.name or ""))
    if fields.assignee:
        info_table.add_row("Assignee:", escape(fields.assignee.display_name or fields.assignee.name or ""))
    if fields.status:
        info_table.add_row("Status:", escape(fields.status.name or ""))
    if fields.priority:
        info_table.add_row("Priority:", escape(fields.priority.name or ""))
    if fields.story_points is not None:
        info_table.add_row("Story Points:", format_points(fields.story_points))

    console.print("✅ Issue retrieved successfully!", style="green")
    console.print(Panel(info_table, title=f"Issue {escape(issue.key or id_or_key)}", border_style="blue"))

    if fields.description:
        console.print(Panel(escape(fields.description), title="Description", border_style="green"))
    if fields.acceptance_criteria:
        console.print(Panel(escape(fields.acceptance_criteria), title="Acceptance Criteria", border_style="green"))


def update_issue_interactive(session: Session) -> None:
    console.print("\n--- Update Issue ---", style="cyan")

    id_or_key = ask("Issue ID or Key")
    summary = ask("New Summary (leave empty to keep current)")
    description = ask("New Description (leave empty to keep current)")
    acceptance_criteria = ask("New Acceptance Criteria (leave empty to keep current)")
    story_points_text = ask("New Story Points (leave empty to keep current)")
    assignee = ask("New Assignee ID (leave empty to keep current)")

    story_points = parse_story_points(story_points_text) if story_points_text else None

    fields = IssueFields(
        summary=summary or None,
        description=description or None,
        acceptance_criteria=acceptance_criteria or None,
        story_points=story_points,
    )

    try:
        result = session.update_issue(id_or_key, fields, assignee=assignee or None)
    except JeeraError as e:
        report_error("updating issue", e)
        return

    if result.assignee_updated:
        console.print(f"✅ Issue {escape(id_or_key)} assigned to {escape(assignee)} successfully!", style="green")
    if result.fields_updated:
        console.print(f"✅ Issue {escape(id_or_key)} updated successfully!", style="green")
    if result.noop:
        console.print("No changes specified.", style="yellow")


def transition_issue_interactive(session: Session) -> None:
    console.print("\n--- Transition Issue ---", style="cyan")
    id_or_key = ask("Issue ID or Key")

    try:
        transitions = session.list_transitions(id_or_key)
    except JeeraError as e:
        report_error("fetching transitions", e)
        return

    if not transitions:
        console.print("No transitions available for this issue.", style="yellow")
        return

    console.print("Available Transitions:")
    for i, transition in enumerate(transitions, start=1):
        console.print(f"  {i}. {escape(transition.name)} (ID: {transition.id})")

    choice = ask("\nSelect transition number")
    if not choice.isdigit() or not 1 <= int(choice) <= len(transitions):
        err_console.print("❌ Invalid choice.", style="red")
        return
    selected = transitions[int(choice) - 1]

    try:
        performed = session.transition_issue(id_or_key, selected.id)
    except JeeraError as e:
        report_error("performing transition", e)
        return

    console.print(f"✅ Issue {escape(id_or_key)} transitioned to '{escape(performed.name)}' successfully!", style="green")


def show_comments(session: Session, id_or_key: str) -> None:
    console.print("\n--- Get Comments ---", style="cyan")

    try:
        comments = session.list_comments(id_or_key)
    except JeeraError as e:
        report_error("getting comments", e)
        return

    if not comments:
        console.print("No comments found for this issue.", style="yellow")
        return

    console.print(f"✅ Comments retrieved successfully! Total: {len(comments)}", style="green")
    for comment in comments:
        console.print(f"\nCommentID {comment.id}")
        console.print(f"Author: {escape(comment.author_display_name or '')}")
        console.print(f"Created: {comment.created or ''}")
        console.print(f"Last Updated: {comment.last_updated or ''} ({comment.timezone or 'unknown zone'})")
        console.print("-" * 42)
        console.print(escape(comment.body), highlight=False)


# ============================================================================
# ENTRY POINT
# ============================================================================
@click.command()
@click.option("--board", "board_id", type=click.IntRange(min=0), help="Jira board ID (shows your issues in its active sprint)")
@click.option("--board-name", help="Jira board name, if the board ID is not known (case sensitive)")
@click.option("--create", is_flag=True, help="Create a new issue")
@click.option("--get", "get_", is_flag=True, help="Get an existing issue")
@click.option("--update", is_flag=True, help="Update an existing issue")
@click.option("--trans", is_flag=True, help="Transition an existing issue")
@click.option("--comments", "comments_issue", metavar="ISSUE", help="Show the comments of an existing issue")
@click.option("--debug", is_flag=True, help="Enable debugging messages")
def cli(board_id, board_name, create, get_, update, trans, comments_issue, debug):
    """Work with your Jira issues and your board's active sprint."""
    setup_logging(debug)

    config = JiraConfig.from_env()
    if not config.is_valid():
        console.print("❌ Missing required configuration!", style="red")
        console.print(CONFIG_HELP, markup=False, highlight=False)
        sys.exit(1)

    if debug:
        console.print(f"jeera v{VERSION} [bold](Running in Debug Mode)[/bold]")
    else:
        console.print(f"jeera v{VERSION}")
    console.print("=================================")
    console.print(f"Connected to: {config.base_url}")

    session = Session(config, debug=debug)
    try:
        try:
            user = session.who_am_i()
            console.print(f"Display Name: {escape(user.display_name or '')}")
            console.print(f"Name: {escape(user.name)}")
        except JeeraError as e:
            report_error("fetching user details", e)

        if config.uses_pat:
            console.print("Authentication: Personal Access Token (Bearer)\n")
        else:
            console.print("Authentication: API Token (Basic)\n")

        if board_id is not None or board_name:
            show_sprint_report(session, board_id, board_name)

        if create:
            create_issue_interactive(session)
        if get_:
            get_issue_interactive(session)
        if update:
            update_issue_interactive(session)
        if trans:
            transition_issue_interactive(session)
        if comments_issue:
            show_comments(session, comments_issue)
    finally:
        session.close()


if __name__ == "__main__":
    cli()
