"""
Standalone HTML rendering for a TimelineDocument.

The page is self-contained: stylesheet, script and data are inlined, so the
file can be opened from disk or attached to an email.
"""
from __future__ import annotations

import html
import json
from datetime import date, timedelta
from typing import Any

from claims_timeline.shared.models import (
    ClaimItem,
    RenderOptions,
    Theme,
    TimelineDocument,
)
from claims_timeline.worker.steps.export_render.common import format_claim_kind, format_date
from claims_timeline.worker.steps.export_render.constants import (
    BASE_CSS,
    DARK_PALETTE,
    INTERACTIVE_JS,
    LIGHT_PALETTE,
)

DEFAULT_TITLE = "Medical Claims Timeline"
_AXIS_TICKS = 5


def _h(s: Any) -> str:
    return html.escape("" if s is None else str(s))


def _theme_css(theme: Theme) -> str:
    if theme == Theme.LIGHT:
        return f":root {{{LIGHT_PALETTE}}}"
    if theme == Theme.DARK:
        return f":root {{{DARK_PALETTE}}}"
    return (
        f":root {{{LIGHT_PALETTE}}}\n"
        f"@media (prefers-color-scheme: dark) {{ :root {{{DARK_PALETTE}}} }}"
    )


def _bar_geometry(item: ClaimItem, origin: date, total_days: int) -> tuple[float, float]:
    """Left offset and width of an item's bar, both in percent of the lane."""
    lo = min(item.interval.start, item.interval.end)
    hi = max(item.interval.start, item.interval.end)
    width = min(max((hi - lo).days, 1) / total_days * 100, 100.0)
    # single-day items at the end of the span still get a visible bar
    left = min((lo - origin).days / total_days * 100, 100.0 - width)
    return round(left, 4), round(width, 4)


def _axis_labels(doc: TimelineDocument, total_days: int) -> list[str]:
    step = total_days / (_AXIS_TICKS - 1)
    return [
        format_date(doc.span.start + timedelta(days=round(step * i)))
        for i in range(_AXIS_TICKS)
    ]


def _item_payload(item: ClaimItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "kind": item.kind.value,
        "kindLabel": format_claim_kind(item.kind),
        "label": item.label,
        "color": item.color_tag,
        "start": item.interval.start.isoformat(),
        "end": item.interval.end.isoformat(),
        "attributes": item.attributes.model_dump(mode="json", exclude={"category"}),
    }


def _data_script(doc: TimelineDocument, title: str) -> str:
    payload = {
        "title": title,
        "span": {"start": doc.span.start.isoformat(), "end": doc.span.end.isoformat()},
        "items": [_item_payload(item) for item in doc.items],
    }
    raw = json.dumps(payload, default=str).replace("</", "<\\/")
    return f'<script type="application/json" id="timeline-data">{raw}</script>'


def render_html(doc: TimelineDocument, options: RenderOptions | None = None) -> str:
    """Render *doc* into a complete HTML page."""
    options = options or RenderOptions()
    title = options.title or DEFAULT_TITLE
    total_days = max(doc.span.duration_days(), 1)

    colors: dict[str, str] = {}
    for item in doc.items:
        colors.setdefault(item.kind.value, item.color_tag)

    # ── Header and legend ────────────────────────────────────────────────
    parts: list[str] = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '<meta charset="utf-8">',
        f"<title>{_h(title)}</title>",
        f"<style>\n{_theme_css(options.theme)}\n{BASE_CSS}</style>",
        "</head>",
        "<body>",
        f'<div class="container" style="width: {options.width}px; max-width: 100%;">',
        f"<h1>{_h(title)}</h1>",
        '<div class="summary">',
        f"<span>Claims: {doc.summary.total_items}</span>",
        f"<span>Types: {_h(', '.join(format_claim_kind(k) for k in doc.summary.kinds))}</span>",
        f"<span>Date Range: {format_date(doc.span.start)} to {format_date(doc.span.end)}</span>",
        "</div>",
        '<div class="legend">',
    ]
    for kind in doc.summary.kinds:
        swatch = f'<span class="swatch" style="background: {_h(colors[kind.value])};"></span>'
        if options.interactive:
            parts.append(
                f'<label><input type="checkbox" value="{_h(kind.value)}" checked>'
                f"{swatch}{_h(format_claim_kind(kind))}</label>"
            )
        else:
            parts.append(f"<label>{swatch}{_h(format_claim_kind(kind))}</label>")
    parts.append("</div>")

    if options.interactive:
        parts.append(
            '<div class="toolbar">'
            '<button id="zoom-in" type="button">Zoom in</button>'
            '<button id="zoom-out" type="button">Zoom out</button>'
            '<button id="zoom-reset" type="button">Reset</button>'
            "</div>"
        )

    # ── Rows ─────────────────────────────────────────────────────────────
    parts.append(f'<div class="timeline" style="height: {options.height}px;">')
    parts.append('<div class="track" id="track">')
    parts.append('<div class="axis">' + "".join(
        f"<span>{label}</span>" for label in _axis_labels(doc, total_days)
    ) + "</div>")
    for item in doc.items:
        left, width = _bar_geometry(item, doc.span.start, total_days)
        tip = f"{item.label}: {format_date(item.interval.start)} to {format_date(item.interval.end)}"
        parts.append(
            f'<div class="row" data-kind="{_h(item.kind.value)}">'
            f'<div class="row-label" title="{_h(item.label)}">{_h(item.label)}</div>'
            f'<div class="row-lane"><div class="bar" data-id="{_h(item.id)}" '
            f'style="left: {left}%; width: {width}%; background: {_h(item.color_tag)};"'
            + ("" if options.interactive else f' title="{_h(tip)}"')
            + "></div></div></div>"
        )
    parts.append("</div></div>")

    if options.interactive:
        parts.append('<div class="tooltip" id="tooltip"></div>')
        parts.append('<div class="details" id="details"></div>')
        parts.append(_data_script(doc, title))
        parts.append(f"<script>{INTERACTIVE_JS}</script>")

    parts.extend(["</div>", "</body>", "</html>"])
    return "\n".join(parts) + "\n"
