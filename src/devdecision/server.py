"""DevDecision Referee MCP Server.

FastMCP server exposing technology comparison and catalog tools.
Run: devdecision-mcp
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from .cache import DEFAULT_MAX_ENTRIES, ComparisonCache, comparison_cache_key
from .core.comparison import ComparisonError, generate_comparison, resolve_technology_ids
from .core.models import UserConstraints
from .core.recommendation import summarize_recommendation
from .db import close_db, init_db
from .inventory import (
    count_inventory,
    create_custom_technology,
    find_technologies_by_category,
    find_technologies_by_ids,
    find_technologies_by_names,
    get_all_categories,
    get_all_criteria,
    get_all_tags,
    needs_seed,
    seed_inventory,
    search_technologies,
)

logger = logging.getLogger(__name__)

READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=False)
CATALOG_WRITE = ToolAnnotations(readOnlyHint=False, destructiveHint=False, idempotentHint=False, openWorldHint=False)

comparison_cache = ComparisonCache(int(os.environ.get("COMPARISON_CACHE_SIZE", str(DEFAULT_MAX_ENTRIES))))


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Initialize the catalog database and seed it on first run."""
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    await init_db()
    if os.environ.get("SEED_INVENTORY", "1") != "0" and await needs_seed():
        logger.info("Empty catalog detected, seeding default criteria and technologies")
        await seed_inventory()
    try:
        yield
    finally:
        comparison_cache.clear()
        await close_db()


mcp = FastMCP(
    "DevDecision Referee",
    instructions="Compare up to five technologies: weighted scores, priority boosts, radar-chart data, and KPI figures from a local technology catalog.",
    lifespan=lifespan,
)


# ─── Tool 1: Compare ─────────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def compare_technologies(
    technology_ids: Optional[list[int]] = None,
    technology_names: Optional[list[str]] = None,
    priority_tags: Optional[list[str]] = None,
    project_type: Optional[str] = None,
    team_size: Optional[str] = None,
    timeline: Optional[str] = None,
    include_recommendation: bool = True,
) -> dict:
    """Compare 1-5 technologies: overall scores, radar-chart rows, KPI figures, and a summary.

    Args:
        technology_ids: Catalog ids to compare, in display order. Use this or technology_names.
        technology_names: Technology names (case-insensitive), in display order.
        priority_tags: Criterion types to boost 1.5x, e.g. 'performance', 'learning-curve'.
        project_type: Optional project context, e.g. 'web-app'.
        team_size: Optional team size, e.g. 'small'.
        timeline: Optional timeline, e.g. '3 months'.
        include_recommendation: Attach a one-paragraph recommendation summary. Default True.
    """
    if technology_ids and technology_names:
        raise ComparisonError("Provide technology_ids or technology_names, not both")

    constraints = UserConstraints(
        priority_tags=priority_tags or [],
        project_type=project_type,
        team_size=team_size,
        timeline=timeline,
    )

    technologies = None
    if technology_names:
        technologies = await find_technologies_by_names(technology_names)
        ids = resolve_technology_ids(technology_names, technologies)
    else:
        ids = list(technology_ids or [])

    key = comparison_cache_key(ids, constraints)
    result = comparison_cache.get(key)
    if result is None:
        if technologies is None:
            technologies = await find_technologies_by_ids(ids)
        criteria = await get_all_criteria()
        try:
            result = generate_comparison(ids, technologies, criteria, constraints)
        except ComparisonError as exc:
            logger.warning("Rejected comparison request %s: %s", ids, exc)
            raise
        comparison_cache.put(key, result)
    else:
        logger.debug("Comparison cache hit for %s", key)

    if include_recommendation:
        result = result.with_recommendation(summarize_recommendation(result.scores, constraints))

    return result.to_json()


# ─── Tool 2: Technologies ────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def list_technologies(category: str = "", query: str = "") -> dict:
    """Browse the technology catalog.

    Args:
        category: Exact category filter (e.g. 'frontend-framework'). Takes precedence over query.
        query: Substring search over names, categories, and tags. Empty returns everything.
    """
    if category:
        technologies = await find_technologies_by_category(category)
        scope = f"in category '{category}'"
    else:
        technologies = await search_technologies(query)
        scope = f"matching '{query}'" if query else "in the catalog"

    return {
        "technologies": [t.model_dump(mode="json", by_alias=True) for t in technologies],
        "count": len(technologies),
        "summary": f"Found {len(technologies)} technologies {scope}",
    }


# ─── Tool 3: Criteria ────────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def list_criteria() -> dict:
    """Evaluation criteria every comparison is scored against, with weights and priority tags."""
    criteria = await get_all_criteria()
    return {
        "criteria": [
            {**c.model_dump(mode="json", by_alias=True), "priorityTag": c.type.tag}
            for c in criteria
        ],
        "count": len(criteria),
        "summary": ", ".join(f"{c.name} (x{c.weight:g})" for c in criteria) or "No criteria defined",
    }


# ─── Tool 4: Categories & Tags ───────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def list_categories() -> dict:
    """All technology categories and tags in the catalog."""
    categories = await get_all_categories()
    tags = await get_all_tags()
    return {
        "categories": categories,
        "tags": tags,
        "summary": f"{len(categories)} categories and {len(tags)} tags",
    }


# ─── Tool 5: Add Technology ──────────────────────────────────────────────────


@mcp.tool(annotations=CATALOG_WRITE)
async def add_technology(
    name: str,
    category: str,
    description: str = "",
    metrics: Optional[dict[str, float]] = None,
    tags: Optional[list[str]] = None,
) -> dict:
    """Add a custom technology to the catalog so it can be compared.

    Args:
        name: Unique technology name (1-100 characters).
        category: Category such as 'frontend-framework' (1-50 characters).
        description: Optional free-text description.
        metrics: Optional raw metrics, e.g. {"performance_score": 8.2, "github_stars": 12000}.
        tags: Optional descriptive tags.
    """
    technology = await create_custom_technology(
        name,
        category,
        description=description or None,
        metrics=metrics,
        tags=tags,
    )
    comparison_cache.clear()
    return {
        "technology": technology.model_dump(mode="json", by_alias=True),
        "summary": f"Added {technology.name} ({technology.category}) with id {technology.id}",
    }


# ─── Tool 6: Health ──────────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def inventory_health() -> dict:
    """Catalog size and cache status."""
    counts = await count_inventory()
    status = "healthy" if counts["technologies"] and counts["criteria"] else "empty"
    return {
        "status": status,
        "technology_count": counts["technologies"],
        "criteria_count": counts["criteria"],
        "cached_comparisons": len(comparison_cache),
        "summary": f"{counts['technologies']} technologies, {counts['criteria']} criteria ({status})",
    }


def main():
    """Entry point for the CLI command."""
    mcp.run()


if __name__ == "__main__":
    main()
