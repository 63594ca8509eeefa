"""
Inline stylesheet and script for the standalone timeline page.
"""
from __future__ import annotations

LIGHT_PALETTE = """
  --bg: #ffffff; --fg: #1f2933; --muted: #6b7280; --panel: #f5f7fa;
  --grid: #e5e7eb; --row-hover: #eef2f7;
"""

DARK_PALETTE = """
  --bg: #111827; --fg: #e5e7eb; --muted: #9ca3af; --panel: #1f2937;
  --grid: #374151; --row-hover: #273244;
"""

BASE_CSS = """
* { box-sizing: border-box; }
body { margin: 0; padding: 24px; background: var(--bg); color: var(--fg);
       font-family: -apple-system, "Segoe UI", Roboto, Helvetica, Arial, sans-serif; }
h1 { font-size: 1.4rem; margin: 0 0 8px 0; }
.summary { color: var(--muted); margin-bottom: 16px; font-size: 0.9rem; }
.summary span { margin-right: 16px; }
.legend { display: flex; gap: 16px; margin-bottom: 12px; font-size: 0.85rem; }
.legend label { display: flex; align-items: center; gap: 6px; cursor: pointer; }
.swatch { width: 12px; height: 12px; border-radius: 2px; display: inline-block; }
.toolbar { margin-bottom: 12px; display: flex; gap: 8px; }
.toolbar button { background: var(--panel); color: var(--fg); border: 1px solid var(--grid);
                  border-radius: 4px; padding: 4px 10px; cursor: pointer; }
.timeline { overflow: auto; border: 1px solid var(--grid); border-radius: 6px; background: var(--panel); }
.track { position: relative; min-width: 100%; }
.axis { display: flex; justify-content: space-between; font-size: 0.75rem; color: var(--muted);
        padding: 4px 8px 4px 248px; border-bottom: 1px solid var(--grid); }
.row { display: flex; align-items: center; height: 28px; border-bottom: 1px solid var(--grid); }
.row:hover { background: var(--row-hover); }
.row-label { width: 240px; flex: 0 0 240px; padding: 0 8px; font-size: 0.8rem;
             overflow: hidden; text-overflow: ellipsis; white-space: nowrap; }
.row-lane { position: relative; flex: 1 1 auto; height: 100%; }
.bar { position: absolute; top: 6px; height: 16px; min-width: 4px; border-radius: 3px; opacity: 0.9; }
.tooltip { position: fixed; pointer-events: none; background: var(--panel); color: var(--fg);
           border: 1px solid var(--grid); border-radius: 4px; padding: 6px 8px; font-size: 0.8rem;
           display: none; max-width: 320px; z-index: 10; }
.details { margin-top: 16px; padding: 12px; border: 1px solid var(--grid); border-radius: 6px;
           background: var(--panel); font-size: 0.85rem; display: none; }
.details table { border-collapse: collapse; }
.details td { padding: 2px 12px 2px 0; vertical-align: top; }
.details td:first-child { color: var(--muted); }
"""

INTERACTIVE_JS = """
(function () {
  var data = JSON.parse(document.getElementById("timeline-data").textContent);
  var byId = {};
  data.items.forEach(function (item) { byId[item.id] = item; });
  var tooltip = document.getElementById("tooltip");
  var details = document.getElementById("details");
  var track = document.getElementById("track");
  var zoom = 1;

  function describe(item) {
    return item.label + " (" + item.start + " to " + item.end + ")";
  }

  document.querySelectorAll(".bar").forEach(function (bar) {
    bar.addEventListener("mousemove", function (ev) {
      tooltip.textContent = describe(byId[bar.dataset.id]);
      tooltip.style.left = (ev.clientX + 12) + "px";
      tooltip.style.top = (ev.clientY + 12) + "px";
      tooltip.style.display = "block";
    });
    bar.addEventListener("mouseleave", function () { tooltip.style.display = "none"; });
    bar.addEventListener("click", function () {
      var item = byId[bar.dataset.id];
      var rows = [["Label", item.label], ["Type", item.kindLabel], ["Start", item.start], ["End", item.end]];
      Object.keys(item.attributes).forEach(function (key) {
        var value = item.attributes[key];
        if (value !== null && typeof value === "object") { value = JSON.stringify(value); }
        rows.push([key, String(value)]);
      });
      details.innerHTML = "";
      var table = document.createElement("table");
      rows.forEach(function (r) {
        var tr = document.createElement("tr");
        r.forEach(function (cell) {
          var td = document.createElement("td");
          td.textContent = cell;
          tr.appendChild(td);
        });
        table.appendChild(tr);
      });
      details.appendChild(table);
      details.style.display = "block";
    });
  });

  function applyZoom() { track.style.width = (zoom * 100) + "%"; }
  document.getElementById("zoom-in").addEventListener("click", function () { zoom = Math.min(zoom * 1.5, 20); applyZoom(); });
  document.getElementById("zoom-out").addEventListener("click", function () { zoom = Math.max(zoom / 1.5, 1); applyZoom(); });
  document.getElementById("zoom-reset").addEventListener("click", function () { zoom = 1; applyZoom(); });

  document.querySelectorAll(".legend input").forEach(function (box) {
    box.addEventListener("change", function () {
      document.querySelectorAll('.row[data-kind="' + box.value + '"]').forEach(function (row) {
        row.style.display = box.checked ? "" : "none";
      });
    });
  });
})();
"""
