"""Technology and criteria catalog backed by the local SQLite store.

Every read returns frozen core models, never ORM rows, so callers can hand
the results straight to the scoring engine. The catalog is seeded with a
default set of criteria and technologies on first start.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError

from .core.models import Criterion, Technology, technology_name_key
from .db import get_session_factory, session_scope
from .seed import DEFAULT_CRITERIA, DEFAULT_TECHNOLOGIES
from .sqlmodels import CriterionRecord, TechnologyRecord

logger = logging.getLogger(__name__)


def _split_tags(tags: str) -> list[str]:
    return [t for t in (tags or "").split(",") if t]


def _join_tags(tags: Iterable[str]) -> str:
    return ",".join(sorted({t.strip().lower() for t in tags if t.strip()}))


def _to_technology(record: TechnologyRecord) -> Technology:
    return Technology(
        id=record.id,
        name=record.name,
        category=record.category,
        description=record.description,
        metrics=record.metrics or {},
        tags=_split_tags(record.tags),
    )


def _to_criterion(record: CriterionRecord) -> Criterion:
    return Criterion(
        id=record.id,
        name=record.name,
        type=record.criterion_type,
        weight=record.weight,
        description=record.description,
    )


async def _select_technologies(*conditions) -> list[Technology]:
    session_factory = get_session_factory()
    async with session_factory() as session:
        query = select(TechnologyRecord).where(*conditions).order_by(TechnologyRecord.id)
        result = await session.execute(query)
        rows = result.scalars().all()
    return [_to_technology(r) for r in rows]


# ─── Seeding ──────────────────────────────────────────────────────────────────


async def needs_seed() -> bool:
    """True when either the criteria or the technology table is empty."""
    counts = await count_inventory()
    return counts["criteria"] == 0 or counts["technologies"] == 0


async def seed_inventory() -> dict[str, int]:
    """Load the default criteria and technologies into empty tables.

    Each table is seeded independently and only when it has no rows.
    Returns how many rows were added per table.
    """
    counts = await count_inventory()
    added = {"criteria": 0, "technologies": 0}

    async with session_scope() as session:
        if counts["criteria"] == 0:
            for entry in DEFAULT_CRITERIA:
                session.add(CriterionRecord(
                    name=entry["name"],
                    description=entry["description"],
                    weight=entry.get("weight", 1.0),
                    criterion_type=entry["type"].value,
                ))
            added["criteria"] = len(DEFAULT_CRITERIA)
        else:
            logger.info("Criteria already exist, skipping criteria seeding")

        if counts["technologies"] == 0:
            for entry in DEFAULT_TECHNOLOGIES:
                session.add(TechnologyRecord(
                    name=entry["name"],
                    name_key=technology_name_key(entry["name"]),
                    category=entry["category"],
                    description=entry["description"],
                    metrics=dict(entry["metrics"]),
                    tags=_join_tags(entry["tags"]),
                ))
            added["technologies"] = len(DEFAULT_TECHNOLOGIES)
        else:
            logger.info("Technologies already exist, skipping technology seeding")

    logger.info("Seeded %d criteria and %d technologies", added["criteria"], added["technologies"])
    return added


# ─── Criteria ─────────────────────────────────────────────────────────────────


async def get_all_criteria() -> list[Criterion]:
    """All evaluation criteria, in creation order."""
    session_factory = get_session_factory()
    async with session_factory() as session:
        result = await session.execute(select(CriterionRecord).order_by(CriterionRecord.id))
        rows = result.scalars().all()
    return [_to_criterion(r) for r in rows]


# ─── Technologies ─────────────────────────────────────────────────────────────


async def get_all_technologies() -> list[Technology]:
    return await _select_technologies()


async def find_technologies_by_ids(ids: Sequence[int]) -> list[Technology]:
    """Technologies whose id is in ``ids``. Unknown ids are simply absent from the result."""
    if not ids:
        return []
    return await _select_technologies(TechnologyRecord.id.in_(list(ids)))


async def find_technology_by_name(name: str) -> Optional[Technology]:
    """Case-insensitive exact name lookup, folding non-ASCII letters too."""
    if not name or not name.strip():
        return None
    matches = await _select_technologies(TechnologyRecord.name_key == technology_name_key(name))
    return matches[0] if matches else None


async def find_technologies_by_names(names: Sequence[str]) -> list[Technology]:
    wanted = [technology_name_key(n) for n in names if n and n.strip()]
    if not wanted:
        return []
    return await _select_technologies(TechnologyRecord.name_key.in_(wanted))


async def find_technologies_by_category(category: str) -> list[Technology]:
    if not category or not category.strip():
        return []
    return await _select_technologies(func.lower(TechnologyRecord.category) == category.strip().lower())


async def search_technologies(query: str) -> list[Technology]:
    """Substring search over name, category, and tags. A blank query returns everything."""
    if not query or not query.strip():
        return await get_all_technologies()

    pattern = f"%{query.strip().lower()}%"
    return await _select_technologies(or_(
        TechnologyRecord.name_key.like(f"%{technology_name_key(query)}%"),
        func.lower(TechnologyRecord.category).like(pattern),
        TechnologyRecord.tags.like(pattern),
    ))


async def get_all_categories() -> list[str]:
    session_factory = get_session_factory()
    async with session_factory() as session:
        result = await session.execute(
            select(TechnologyRecord.category).distinct().order_by(TechnologyRecord.category)
        )
        return list(result.scalars().all())


async def get_all_tags() -> list[str]:
    session_factory = get_session_factory()
    async with session_factory() as session:
        result = await session.execute(select(TechnologyRecord.tags))
        tag_strings = result.scalars().all()
    return sorted({tag for tags in tag_strings for tag in _split_tags(tags)})


async def create_custom_technology(
    name: str,
    category: str,
    description: Optional[str] = None,
    metrics: Optional[dict[str, float]] = None,
    tags: Optional[Iterable[str]] = None,
) -> Technology:
    """Add a user-defined technology to the catalog.

    Raises:
        ValueError: name or category is blank, or the name is already taken
            (ignoring case, including a concurrent insert of the same name).
        pydantic.ValidationError: the record breaks a model constraint
            (name over 100 chars, negative metric, ...). Nothing is written.
    """
    if not name or not name.strip():
        raise ValueError("Technology name is required")
    if not category or not category.strip():
        raise ValueError("Technology category is required")
    if await find_technology_by_name(name) is not None:
        raise ValueError(f"Technology with name '{name.strip()}' already exists")

    logger.info("Creating custom technology: %s in category: %s", name.strip(), category.strip())

    try:
        async with session_scope() as session:
            record = TechnologyRecord(
                name=name.strip(),
                name_key=technology_name_key(name),
                category=category.strip(),
                description=description,
                metrics=dict(metrics or {}),
                tags=_join_tags(tags or []),
            )
            session.add(record)
            await session.flush()
            # Validate before the commit so an invalid record never lands
            technology = _to_technology(record)
    except IntegrityError as exc:
        logger.warning("Lost insert race for technology %s: %s", name.strip(), exc.orig)
        raise ValueError(f"Technology with name '{name.strip()}' already exists") from exc

    return technology


async def count_inventory() -> dict[str, int]:
    session_factory = get_session_factory()
    async with session_factory() as session:
        technologies = await session.scalar(select(func.count()).select_from(TechnologyRecord))
        criteria = await session.scalar(select(func.count()).select_from(CriterionRecord))
    return {"technologies": technologies or 0, "criteria": criteria or 0}
