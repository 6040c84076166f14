import html
import logging
import re
from typing import Annotated

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from typer import Argument, Exit, Option, Typer

from .config import create_index_client
from .index import SearchServiceError
from .models import SearchInterval, SearchOrder, SearchRange, SearchRequest, UserFilter
from .search import SearchResult, SearchService
from .search.highlight import HIGHLIGHT_POST_TAG, HIGHLIGHT_PRE_TAG

app = Typer()

MATCH_STYLE = "bold yellow"

_HIGHLIGHT_RE = re.compile(
    re.escape(HIGHLIGHT_PRE_TAG) + r"(.*?)" + re.escape(HIGHLIGHT_POST_TAG), re.DOTALL
)


def highlighted_text(fragment: str) -> Text:
    """Render an HTML-encoded highlight fragment with matches styled."""
    text = Text()
    position = 0
    for match in _HIGHLIGHT_RE.finditer(fragment):
        text.append(html.unescape(fragment[position : match.start()]))
        text.append(html.unescape(match.group(1)), style=MATCH_STYLE)
        position = match.end()
    text.append(html.unescape(fragment[position:]))
    return text


def _cell(hit_highlights: list[str] | None, raw_value: object) -> Text:
    if hit_highlights:
        return highlighted_text(hit_highlights[0])
    return Text(str(raw_value))


def render_result(console: Console, request: SearchRequest, result: SearchResult) -> None:
    table = Table(
        title=f"{result.total} results for {request.query_text!r}",
        title_justify="left",
    )
    table.add_column("#", justify="right")
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Section")
    table.add_column("Excerpt")

    for position, hit in enumerate(result.hits, start=request.offset + 1):
        title = _cell(
            hit.highlights.get("title") or hit.highlights.get("topic_title"),
            hit.fields.get("title") or hit.fields.get("topic_title", ""),
        )
        excerpt = _cell(hit.highlights.get("message"), hit.fields.get("message", ""))
        table.add_row(
            str(position),
            title,
            Text(str(hit.fields.get("author", ""))),
            Text(str(hit.fields.get("section", ""))),
            excerpt,
        )
    console.print(table)

    for name, buckets in result.facets.items():
        if not buckets:
            continue
        content = "\n".join(f"{bucket.value}: {bucket.count}" for bucket in buckets)
        console.print(
            Panel(
                Text(content),
                title_align="left",
                title=f"Facet: {name}",
                border_style="bold magenta",
            )
        )


@app.command()
def search(
    query: Annotated[str, Argument(help="Free-text query.")],
    offset: Annotated[int, Option("--offset", min=0, help="Pagination start.")] = 0,
    range_: Annotated[
        SearchRange, Option("--range", help="Search topics, comments or both.")
    ] = SearchRange.ALL,
    interval: Annotated[
        SearchInterval, Option("--interval", help="How far back to search.")
    ] = SearchInterval.ALL,
    order: Annotated[SearchOrder, Option("--order", help="Result ordering.")] = SearchOrder.RELEVANCE,
    user: Annotated[str | None, Option("--user", help="Only messages by this nickname.")] = None,
    topic_author: Annotated[
        bool,
        Option("--topic-author", help="With --user, match topics the user started instead."),
    ] = False,
    section: Annotated[str | None, Option("--section", help="Only this section.")] = None,
    group: Annotated[str | None, Option("--group", help="Only this group.")] = None,
    es_url: Annotated[
        str | None, Option("--es-url", help="Elasticsearch URL (overrides FORUM_SEARCH_ES_URL).")
    ] = None,
    verbose: Annotated[bool, Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Search forum messages and print hits with facet counts."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    console = Console()
    request = SearchRequest(
        query_text=query,
        offset=offset,
        range=range_,
        interval=interval,
        order=order,
        user=(
            UserFilter(nick=user, topic_author=topic_author)
            if user and user.strip()
            else None
        ),
        section=section,
        group=group,
    )

    client = create_index_client(es_url)
    try:
        with console.status(status="Searching..."):
            result = SearchService(client).search(request)
    except SearchServiceError as exc:
        console.print("[bold red]Search failed:[/]", Text(str(exc)))
        raise Exit(code=1) from exc
    finally:
        client.close()

    render_result(console, request, result)


@app.command()
def options() -> None:
    """List accepted --range, --interval and --order values."""
    console = Console()
    for title, choices in (
        ("range", SearchRange),
        ("interval", SearchInterval),
        ("order", SearchOrder),
    ):
        table = Table(title=title, title_justify="left")
        table.add_column("Value", style="bold cyan")
        table.add_column("Meaning")
        for item in choices:
            table.add_row(item.value, item.label)
        console.print(table)
