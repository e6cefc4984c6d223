"""MCP server entrypoint (stdio transport).

Exposes the journal summary as a tool so MCP clients can ask for the most
frequent or most severe messages of a time range.

Run locally (stdio):
    python -m logwizzy.server.log_server
"""

from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from logwizzy.core.config import configure_logging
from logwizzy.tools.summarize import summarize_journal_impl

LOGGER = logging.getLogger(__name__)

mcp = FastMCP("logwizzy", json_response=True)


@mcp.tool()
async def summarize_journal(
    since: str = "today",
    view: str = "summary",
    limit: int | None = None,
    log_file: str | None = None,
    include_times: bool = False,
) -> dict[str, Any]:
    """Group identical journal messages and return them ranked.

    Parameters
    ----------
    since:
        Passed to `journalctl --since` (e.g., "today", "-1h", "2025-12-30 08:00").
    view:
        "summary" (top N by frequency), "all", "important" (critical/error/warning,
        ranked by severity) or "errors" (critical/error only).
    limit:
        Number of groups in the "summary" view (hard-capped in the implementation).
    log_file:
        Summarize a saved `journalctl -o json` export (plain or .gz) instead of
        running journalctl.
    include_times:
        Include every occurrence timestamp per group.

    Returns
    -------
    dict:
        {"title": str, "groups": list[dict], "additional_errors": list[dict], ...}
    """
    return await summarize_journal_impl(
        since=since,
        view=view,
        limit=limit,
        log_file=log_file,
        include_times=include_times,
    )


def main() -> None:
    """Start the MCP server over stdio."""
    configure_logging("INFO")
    LOGGER.debug("Starting MCP server (transport=stdio)")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
