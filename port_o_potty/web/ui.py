from __future__ import annotations
import json
from typing import Iterable

from ..config import RANGES_STORAGE_KEY
from ..models import PortRange

HTML = """
<!doctype html>
<html>
<head>
  <meta charset="utf-8"/>
  <title>Port-o-Potty</title>
  <style>
    body { background:#14181d; color:#e8eaed; font-family: ui-sans-serif,system-ui,Segoe UI,Arial; margin:0; }
    .container { padding: 18px; }
    .header { display:flex; justify-content:space-between; align-items:center; margin-bottom:14px; }
    .title { font-size: 20px; font-weight: 600; }
    .muted { color:#9aa0a6; }
    .pill { border:1px solid #2a2f36; border-radius:999px; padding:4px 12px; display:flex; gap:6px; font-size:12px; }
    .grid { display:grid; grid-template-columns: 320px 1fr; gap:14px; }
    .panel { border:1px solid #2a2f36; border-radius:12px; padding:12px; }
    .row { display:flex; gap:8px; align-items:center; margin-bottom:10px; }
    .table { width:100%; border-collapse:collapse; }
    .table td, .table th { text-align:left; padding:6px; border-bottom:1px solid #2a2f36; }
    .btn { background:#2a2f36; color:#e8eaed; border:0; border-radius:6px; padding:5px 10px; cursor:pointer; }
    .btn.primary { background:#3489eb; }
    .btn.danger { background:#e84a5f; }
    .thbtn { background:none; border:0; color:inherit; font:inherit; cursor:pointer; padding:0; }
    .error { background:#5c1d24; border-radius:8px; padding:8px 12px; margin-bottom:12px; }
    .empty { color:#9aa0a6; padding:12px 0; }
    input { width:90px; background:#1d2229; color:#e8eaed; border:1px solid #2a2f36; border-radius:6px; padding:4px; }
  </style>
</head>
<body>
<div class="container">
  <div class="header">
    <div>
      <div class="title">Port-o-Potty</div>
      <div class="muted">Shows listeners in your configured port ranges.</div>
    </div>
    <div class="pill"><span id="focus">Active</span><span class="muted">&bull;</span><span class="muted">Refresh: __REFRESH_LABEL__</span></div>
  </div>
  <div id="error" class="error" style="display:none"></div>
  <div class="grid">
    <div class="panel">
      <h2>Port Ranges</h2>
      <div class="row">
        <input id="start" type="number" min="1" max="65535" value="3000"/>
        <span class="muted">to</span>
        <input id="end" type="number" min="1" max="65535" value="3999"/>
      </div>
      <div class="row">
        <button class="btn primary" id="add">Add range</button>
        <button class="btn" id="refresh">Refresh now</button>
      </div>
      <div class="muted" id="watching" style="margin-bottom:10px;font-size:12px"></div>
      <div id="ranges"></div>
    </div>
    <div class="panel">
      <h2>Listeners</h2>
      <div id="listeners"></div>
    </div>
  </div>
</div>

<script>
const STORAGE_KEY = "__STORAGE_KEY__";
const DEFAULT_RANGES = __DEFAULT_RANGES__;
const REFRESH_MS = __REFRESH_MS__;

let listeners = [];
let busy = false;
let sortKey = "port", sortDir = "asc";

function clampPort(v) { return Math.max(1, Math.min(65535, Math.floor(Number(v)))); }
function normalizeRanges(rs) {
  return rs.map(r => ({start: clampPort(r.start), end: clampPort(r.end)}))
           .map(r => r.start <= r.end ? r : {start: r.end, end: r.start});
}
function loadRanges() {
  try {
    const raw = localStorage.getItem(STORAGE_KEY);
    if (!raw) return DEFAULT_RANGES;
    const parsed = JSON.parse(raw);
    if (!Array.isArray(parsed)) throw new Error("invalid");
    return parsed.map(r => ({start: Number(r.start), end: Number(r.end)}))
                 .filter(r => Number.isFinite(r.start) && Number.isFinite(r.end));
  } catch (e) {
    return DEFAULT_RANGES;
  }
}
let ranges = normalizeRanges(loadRanges());

function formatUptime(s) {
  if (s == null) return "\\u2014";
  if (s < 60) return s + "s ago";
  const m = Math.floor(s / 60); if (m < 60) return m + "m ago";
  const h = Math.floor(m / 60); if (h < 48) return h + "h ago";
  return Math.floor(h / 24) + "d ago";
}
function cmpNullable(a, b, f) {
  if (a == null && b == null) return 0;
  if (a == null) return 1;
  if (b == null) return -1;
  return f(a, b);
}
function sorted() {
  const dir = sortDir === "asc" ? 1 : -1;
  const num = (a, b) => (a - b) * dir;
  const str = (a, b) => a.localeCompare(b, undefined, {sensitivity: "base"}) * dir;
  return listeners.map((l, i) => ({l, i})).sort((x, y) => {
    const a = x.l, b = y.l;
    let c = 0;
    if (sortKey === "port") c = num(a.port, b.port);
    else if (sortKey === "pid") c = num(a.pid, b.pid);
    else if (sortKey === "process") c = cmpNullable(a.process_name, b.process_name, str);
    else c = cmpNullable(a.started_seconds_ago, b.started_seconds_ago, num);
    return c || (a.port - b.port) || (a.pid - b.pid) || (x.i - y.i);
  }).map(x => x.l);
}
function showError(msg) {
  const el = document.getElementById("error");
  el.textContent = msg || "";
  el.style.display = msg ? "block" : "none";
}
function esc(s) { const d = document.createElement("div"); d.textContent = String(s); return d.innerHTML; }
function indicator(k) { return k !== sortKey ? "\\u2195" : (sortDir === "asc" ? "\\u2191" : "\\u2193"); }

function renderRanges() {
  document.getElementById("watching").textContent =
    "Watching: " + (ranges.map(r => r.start + "-" + r.end).join(", ") || "\\u2014");
  const el = document.getElementById("ranges");
  if (!ranges.length) { el.innerHTML = '<div class="empty">Add at least one port range.</div>'; return; }
  el.innerHTML = '<table class="table"><thead><tr><th>Range</th><th></th></tr></thead><tbody>' +
    ranges.map((r, i) => '<tr><td>' + r.start + '\\u2013' + r.end +
      '</td><td><button class="btn danger" data-remove="' + i + '">Remove</button></td></tr>').join("") +
    '</tbody></table>';
}
function renderListeners() {
  const el = document.getElementById("listeners");
  const rows = sorted();
  if (!rows.length) {
    el.innerHTML = '<div class="empty">No listeners found in these ranges. ' + (busy ? "Scanning\\u2026" : "") + '</div>';
    return;
  }
  const th = (k, label) => '<th><button class="thbtn" data-sort="' + k + '">' + label + ' ' + indicator(k) + '</button></th>';
  el.innerHTML = '<table class="table"><thead><tr>' + th("port", "Port") + th("process", "Process") +
    th("pid", "PID") + th("started", "Started") + '<th></th></tr></thead><tbody>' +
    rows.map(l => '<tr><td>' + l.port + '</td><td>' + esc(l.process_name ?? "\\u2014") +
      '</td><td class="muted">' + l.pid + '</td><td class="muted">' + formatUptime(l.started_seconds_ago) +
      '</td><td><button class="btn danger" data-kill="' + l.pid + '">Kill</button></td></tr>').join("") +
    '</tbody></table>';
}

async function post(url, body) {
  const r = await fetch(url, {method: "POST", headers: {"Content-Type": "application/json"}, body: JSON.stringify(body)});
  const data = await r.json();
  if (!r.ok) throw new Error(data.error || r.statusText);
  return data;
}
async function refresh() {
  busy = true; showError(null); renderListeners();
  try {
    listeners = await post("/api/scan", {ranges});
  } catch (e) {
    showError(String(e.message || e));
  } finally {
    busy = false; renderListeners();
  }
}
async function kill(pid) {
  if (!confirm("Kill PID " + pid + "?")) return;
  showError(null);
  try {
    await post("/api/kill", {pid});
    listeners = listeners.filter(l => l.pid !== pid);
    renderListeners();
    setTimeout(refresh, 600);
  } catch (e) {
    showError(String(e.message || e));
  }
}
function setRanges(next) {
  ranges = next;
  localStorage.setItem(STORAGE_KEY, JSON.stringify(ranges));
  renderRanges();
  refresh();
}

document.getElementById("add").onclick = () => setRanges(normalizeRanges(ranges.concat([{
  start: Number(document.getElementById("start").value),
  end: Number(document.getElementById("end").value)}])));
document.getElementById("refresh").onclick = refresh;
document.getElementById("ranges").onclick = ev => {
  const i = ev.target.dataset.remove;
  if (i !== undefined) setRanges(ranges.filter((_, j) => j !== Number(i)));
};
document.getElementById("listeners").onclick = ev => {
  const d = ev.target.dataset;
  if (d.kill !== undefined) kill(Number(d.kill));
  if (d.sort !== undefined) {
    if (d.sort === sortKey) sortDir = sortDir === "asc" ? "desc" : "asc";
    else { sortKey = d.sort; sortDir = "asc"; }
    renderListeners();
  }
};

let timer = null;
function updateFocus() {
  const visible = document.visibilityState === "visible";
  document.getElementById("focus").textContent = visible ? "Active" : "Paused";
  if (visible && timer === null) timer = setInterval(refresh, REFRESH_MS);
  if (!visible && timer !== null) { clearInterval(timer); timer = null; }
}
document.addEventListener("visibilitychange", updateFocus);
window.addEventListener("focus", updateFocus);
window.addEventListener("blur", updateFocus);

renderRanges();
updateFocus();
refresh();
</script>
</body>
</html>
"""

def _refresh_label(seconds: float) -> str:
    return f"{seconds:g}s"

def render_html(ranges: Iterable[PortRange], refresh_seconds: float) -> str:
    defaults = json.dumps([{"start": r.lower, "end": r.upper} for r in ranges])
    html = HTML.replace("__STORAGE_KEY__", RANGES_STORAGE_KEY)
    html = html.replace("__DEFAULT_RANGES__", defaults)
    html = html.replace("__REFRESH_MS__", str(int(refresh_seconds * 1000)))
    html = html.replace("__REFRESH_LABEL__", _refresh_label(refresh_seconds))
    return html
