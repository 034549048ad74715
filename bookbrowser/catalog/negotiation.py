"""
Minimal ``Accept`` header negotiation.

Only what the detail route needs: pick one of the server's offered
media types for a request, or ``None`` when the client accepts none of
them. Entries are ranked by quality, then by specificity
(``text/html`` beats ``text/*`` beats ``*/*``), then by position in
the header and finally by the order of the offers. A missing header
accepts anything, so the first offer wins.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple


def parse_accept(header: Optional[str]) -> List[Tuple[str, str, float]]:
    """Split an ``Accept`` header into ``(type, subtype, q)`` entries."""
    entries: List[Tuple[str, str, float]] = []
    if not header:
        return entries
    for part in header.split(","):
        fields = [f.strip() for f in part.split(";")]
        media = fields[0].lower()
        if not media:
            continue
        if media == "*":
            media = "*/*"
        if "/" not in media:
            continue
        mtype, _, subtype = media.partition("/")
        q = 1.0
        for param in fields[1:]:
            name, _, value = param.partition("=")
            if name.strip().lower() == "q":
                try:
                    q = float(value.strip())
                except ValueError:
                    q = 0.0
        entries.append((mtype, subtype, q))
    return entries


def _specificity(mtype: str, subtype: str, offer: str) -> int:
    otype, _, osub = offer.partition("/")
    if mtype == "*" and subtype == "*":
        return 0
    if mtype != otype:
        return -1
    if subtype == "*":
        return 1
    return 2 if subtype == osub else -1


def negotiate(header: Optional[str], offered: Sequence[str]) -> Optional[str]:
    """Return the best offered media type for ``header`` or ``None``."""
    if not offered:
        return None
    entries = parse_accept(header)
    if not entries:
        return offered[0]

    best: Optional[Tuple[float, int, int, int]] = None
    choice: Optional[str] = None
    for index, offer in enumerate(offered):
        # The most specific matching entry decides the offer's quality.
        match: Optional[Tuple[int, float, int]] = None
        for position, (mtype, subtype, q) in enumerate(entries):
            spec = _specificity(mtype, subtype, offer.lower())
            if spec < 0:
                continue
            if match is None or spec > match[0]:
                match = (spec, q, position)
        if match is None or match[1] <= 0:
            continue
        rank = (match[1], match[0], -match[2], -index)
        if best is None or rank > best:
            best = rank
            choice = offer
    return choice
