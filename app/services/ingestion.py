# path: skate-spot-api/app/services/ingestion.py

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional
import logging

from app.models.spot_models import DEFAULT_ACCENT_COLOR, Venue

logger = logging.getLogger(__name__)

# creator id -> favourite color, or None when the profile has none
ColorLookup = Callable[[str], Optional[str]]


def resolve_accent_colors(
    venues: Iterable[Venue],
    lookup: ColorLookup,
    fallback: str = DEFAULT_ACCENT_COLOR,
) -> List[Venue]:
    """
    Stamp each venue with its creator's color before it reaches the engine.

    One lookup per distinct creator. A missing creator, an empty answer or a
    failed lookup all fall back to `fallback` for that venue only.
    """
    cache: Dict[str, str] = {}
    out: List[Venue] = []
    for v in venues:
        if not v.created_by:
            color = fallback
        elif v.created_by in cache:
            color = cache[v.created_by]
        else:
            try:
                color = lookup(v.created_by) or fallback
            except Exception as e:
                logger.warning("Color lookup failed for creator %s: %s", v.created_by, e)
                color = fallback
            cache[v.created_by] = color
        out.append(v.model_copy(update={"accent_color": color}))
    return out
