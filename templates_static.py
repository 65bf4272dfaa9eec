"""Front-end template and static file generation."""

from pathlib import Path

# Template content
INDEX_HTML = """<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>{{ title }}</title>
  <link rel="stylesheet" href="/static/app.css">
</head>
<body data-thumb-size="{{ default_size }}">
  <header class="topbar">
    <a href="/" class="brand">📷 {{ title }}</a>
    <span id="status"></span>
    <button id="help-toggle" title="Keyboard shortcuts">?</button>
  </header>
  <main class="layout">
    <aside id="folders" class="folders"></aside>
    <section class="content">
      <div id="browse-view">
        <div class="toolbar">
          <span id="crumb"></span>
          <button id="select-all">Select all</button>
          <button id="compare" disabled>Compare selected (<span id="count">0</span>)</button>
        </div>
        <div id="grid" class="grid"></div>
      </div>
      <div id="compare-view" class="compare hidden">
        <div class="toolbar">
          <span id="batch-label"></span>
          <span id="tally"></span>
          <label>Target folder <input id="target" value="saved" /></label>
          <button id="undo">Undo</button>
          <button id="save">Save kept</button>
          <button id="back">Exit</button>
        </div>
        <div id="pair" class="pair"></div>
      </div>
    </section>
  </main>
  <div id="help" class="help hidden">
    <div class="help-box">
      <h2>Keyboard shortcuts</h2>
      <div id="help-body"></div>
      <p class="muted">Press ? or Escape to close</p>
    </div>
  </div>
  <script src="/static/app.js"></script>
</body>
</html>
"""

APP_CSS = """* { box-sizing: border-box; }
body { margin: 0; font-family: system-ui, sans-serif; background: #111; color: #ddd; }
.topbar { display: flex; justify-content: space-between; align-items: center; padding: .6rem 1rem; background: #1b1b1b; }
.brand { color: #fff; text-decoration: none; font-weight: 600; }
.layout { display: flex; min-height: calc(100vh - 2.6rem); }
.folders { width: 240px; padding: .5rem; border-right: 1px solid #222; }
.folders a { display: block; padding: .2rem .4rem; color: #9cf; text-decoration: none; }
.folders a.cursor { background: #234; }
.content { flex: 1; padding: .5rem 1rem; }
.toolbar { display: flex; gap: 1rem; align-items: center; margin-bottom: .5rem; }
.grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(160px, 1fr)); gap: .5rem; }
.tile { background: #1b1b1b; padding: .3rem; border: 2px solid transparent; cursor: pointer; }
.tile.selected { border-color: #4ade80; }
.tile.cursor { outline: 2px dashed #9cf; }
.tile img { width: 100%; height: 150px; object-fit: contain; }
.tile .name { font-size: .75rem; overflow: hidden; text-overflow: ellipsis; white-space: nowrap; }
.pair { display: grid; grid-template-columns: 1fr 1fr; gap: 1rem; }
.pair figure { margin: 0; background: #1b1b1b; padding: .5rem; }
.pair figure.best { outline: 3px solid #4ade80; }
.pair figcaption { font-size: .85rem; margin-top: .3rem; }
.pair img { width: 100%; max-height: 70vh; object-fit: contain; }
.pair .done { grid-column: 1 / -1; text-align: center; padding: 2rem; }
.help { position: fixed; inset: 0; background: rgba(0, 0, 0, .7); display: flex; align-items: center; justify-content: center; }
.help-box { background: #1b1b1b; padding: 1rem 2rem; border-radius: 6px; min-width: 320px; }
.help-box h3 { margin-bottom: .3rem; text-transform: capitalize; }
.help-box kbd { display: inline-block; min-width: 5.5rem; color: #9cf; }
.muted { color: #888; font-size: .8rem; }
.hidden { display: none !important; }
"""

APP_JS = """const API = '/api';
const thumbSize = document.body.dataset.thumbSize || 200;
const $ = (id) => document.getElementById(id);

const state = {
  view: 'browse',
  folder: null,
  folderCursor: 0,
  images: [],
  imageCursor: 0,
  selected: new Set(),
  batch: null,
  showHelp: false,
};

const emptyComparison = () => ({
  currentBest: null,
  candidates: [],
  currentCandidateIndex: 0,
  savedImages: [],
  rejectedImages: [],
});
let comparison = emptyComparison();
let undoStack = [];

// Builds a DOM node; text always goes through textContent.
function el(tag, props = {}, children = []) {
  const node = document.createElement(tag);
  for (const [key, value] of Object.entries(props)) {
    if (key === 'text') node.textContent = value;
    else if (key === 'className') node.className = value;
    else if (key === 'dataset') Object.assign(node.dataset, value);
    else node.setAttribute(key, value);
  }
  for (const child of children) node.append(child);
  return node;
}

async function request(endpoint, options = {}) {
  const res = await fetch(API + endpoint, {
    headers: { 'Content-Type': 'application/json' },
    ...options,
  });
  const body = await res.json();
  if (!res.ok) throw new Error(body.error || res.status);
  return body;
}

const encodePath = (path) => path.split('/').map(encodeURIComponent).join('/');
const thumbUrl = (path, size) => `${API}/thumbnail/${encodePath(path)}?size=${size}`;
const report = (err) => status(err.message);

function status(msg) { $('status').textContent = msg; }

function setView(view) {
  state.view = view;
  $('browse-view').classList.toggle('hidden', view === 'compare');
  $('compare-view').classList.toggle('hidden', view !== 'compare');
}

// Folder browsing

function folderLinks() { return [...$('folders').querySelectorAll('a')]; }

async function openFolder(path) {
  const folder = path ? await request('/folders/' + encodePath(path))
                      : (await request('/folders'))[0];
  state.folder = folder;
  state.images = folder.images;
  state.selected.clear();
  state.folderCursor = 0;
  state.imageCursor = 0;
  $('crumb').textContent = '/' + folder.path;

  const links = folder.subfolders.map(
    (f) => el('a', { href: '#', dataset: { path: f.path }, text: '📁 ' + f.name }));
  if (folder.path) {
    const parent = folder.path.split('/').slice(0, -1).join('/');
    links.unshift(el('a', { href: '#', dataset: { path: parent }, text: '⬆ ..' }));
  }
  $('folders').replaceChildren(...links);

  $('grid').replaceChildren(...folder.images.map((img, i) => el(
    'div', { className: 'tile', dataset: { index: String(i) } }, [
      el('img', { loading: 'lazy', src: thumbUrl(img.path, thumbSize), alt: '' }),
      el('div', { className: 'name', text: img.name }),
    ])));
  renderCursors();
  updateCount();
}

function goParent() {
  if (!state.folder || !state.folder.path) return Promise.resolve();
  return openFolder(state.folder.path.split('/').slice(0, -1).join('/'));
}

function renderCursors() {
  const browsing = state.view === 'browse';
  folderLinks().forEach((a, i) => a.classList.toggle('cursor', browsing && i === state.folderCursor));
  [...$('grid').children].forEach((tile, i) => {
    tile.classList.toggle('cursor', state.view === 'images' && i === state.imageCursor);
    tile.classList.toggle('selected', state.selected.has(state.images[i].path));
  });
}

function moveFolderCursor(delta) {
  const count = folderLinks().length;
  if (!count) return;
  state.folderCursor = Math.min(Math.max(state.folderCursor + delta, 0), count - 1);
  renderCursors();
}

function enterFolder() {
  const link = folderLinks()[state.folderCursor];
  if (link) openFolder(link.dataset.path).catch(report);
  else if (state.images.length) { setView('images'); renderCursors(); }
}

// Image selection

function gridColumns() {
  return getComputedStyle($('grid')).gridTemplateColumns.split(' ').length || 1;
}

function moveImageCursor(delta) {
  if (!state.images.length) return;
  state.imageCursor = Math.min(Math.max(state.imageCursor + delta, 0), state.images.length - 1);
  renderCursors();
}

function toggleSelect(index) {
  const img = state.images[index];
  if (!img) return;
  if (state.selected.has(img.path)) state.selected.delete(img.path);
  else state.selected.add(img.path);
  renderCursors();
  updateCount();
}

function selectAll() {
  state.images.forEach((img) => state.selected.add(img.path));
  renderCursors();
  updateCount();
}

function updateCount() {
  $('count').textContent = state.selected.size;
  $('compare').disabled = state.selected.size < 2;
}

// Comparison: the current best is compared against one candidate at a time.

async function startComparison() {
  if (state.selected.size < 2) return;
  const batch = await request('/batch', {
    method: 'POST', body: JSON.stringify({ imagePaths: [...state.selected] }),
  });
  if (!batch.images.length) { status('Nothing to compare'); return; }
  state.batch = batch;
  const [best, ...candidates] = batch.images;
  comparison = { ...emptyComparison(), currentBest: best, candidates };
  undoStack = [];
  $('batch-label').textContent = `${batch.id} (${batch.images.length} images)`;
  setView('compare');
  renderComparison();
}

function snapshot() {
  undoStack.push({
    ...comparison,
    candidates: [...comparison.candidates],
    savedImages: [...comparison.savedImages],
    rejectedImages: [...comparison.rejectedImages],
  });
}

function currentCandidate() {
  return comparison.candidates[comparison.currentCandidateIndex] || null;
}

function takeCandidate() {
  const candidate = currentCandidate();
  comparison.candidates.splice(comparison.currentCandidateIndex, 1);
  if (comparison.currentCandidateIndex >= comparison.candidates.length) {
    comparison.currentCandidateIndex = Math.max(comparison.candidates.length - 1, 0);
  }
  return candidate;
}

function stepCandidate(delta) {
  const count = comparison.candidates.length;
  if (!count) return;
  comparison.currentCandidateIndex = (comparison.currentCandidateIndex + delta + count) % count;
  renderComparison();
}

function selectCurrentBest() {
  if (!currentCandidate()) return;
  snapshot();
  const previous = comparison.currentBest;
  comparison.currentBest = takeCandidate();
  comparison.rejectedImages.push(previous);
  renderComparison();
}

function saveCandidate() {
  if (!currentCandidate()) return;
  snapshot();
  comparison.savedImages.push(takeCandidate());
  renderComparison();
}

function rejectCandidate() {
  if (!currentCandidate()) return;
  snapshot();
  comparison.rejectedImages.push(takeCandidate());
  renderComparison();
}

function undo() {
  if (!undoStack.length) return;
  comparison = undoStack.pop();
  renderComparison();
}

function figure(img, role) {
  return el('figure', { className: role, dataset: { role } }, [
    el('img', { src: thumbUrl(img.path, 1000), alt: '' }),
    el('figcaption', { text: `${role === 'best' ? 'Best' : 'Candidate'}: ${img.name} · ${img.width}×${img.height}` }),
  ]);
}

function renderComparison() {
  const candidate = currentCandidate();
  const nodes = [figure(comparison.currentBest, 'best')];
  if (candidate) nodes.push(figure(candidate, 'candidate'));
  else nodes.push(el('div', { className: 'done', text: 'No candidates left. Save kept to move them.' }));
  $('pair').replaceChildren(...nodes);
  const position = candidate
    ? `${comparison.currentCandidateIndex + 1}/${comparison.candidates.length}` : '0/0';
  $('tally').textContent = `candidate ${position} · ` +
    `${comparison.savedImages.length} saved · ${comparison.rejectedImages.length} rejected`;
  $('undo').disabled = !undoStack.length;
}

function keptPaths() {
  const kept = comparison.savedImages.map((img) => img.path);
  if (comparison.currentBest) kept.push(comparison.currentBest.path);
  return kept;
}

async function save() {
  const result = await request('/save', {
    method: 'POST',
    body: JSON.stringify({
      batchId: state.batch.id,
      selectedPaths: keptPaths(),
      targetFolder: $('target').value,
    }),
  });
  status(`Saved ${result.success.length} to ${result.targetFolder}, ` +
         `${result.conflicts.length} conflicts, ${result.failed.length} failed`);
  exitComparison();
  await openFolder(state.folder.path);
}

function exitComparison() {
  comparison = emptyComparison();
  undoStack = [];
  setView('images');
  renderCursors();
}

// Keyboard handling, one key map per view plus global keys.

const keyMaps = {
  browse: {
    'enter': enterFolder,
    'arrowup': () => moveFolderCursor(-1),
    'arrowdown': () => moveFolderCursor(1),
    'arrowright': () => { if (state.images.length) { setView('images'); renderCursors(); } },
  },
  images: {
    'enter': () => startComparison().catch(report),
    'space': () => toggleSelect(state.imageCursor),
    'a': selectAll,
    'escape': () => { setView('browse'); goParent().then(renderCursors).catch(report); },
    'arrowleft': () => moveImageCursor(-1),
    'arrowright': () => moveImageCursor(1),
    'arrowup': () => moveImageCursor(-gridColumns()),
    'arrowdown': () => moveImageCursor(gridColumns()),
  },
  compare: {
    'arrowleft': () => stepCandidate(-1),
    'arrowright': () => stepCandidate(1),
    'a': () => stepCandidate(-1),
    'd': () => stepCandidate(1),
    'space': selectCurrentBest,
    'enter': selectCurrentBest,
    's': saveCandidate,
    'x': rejectCandidate,
    'u': undo,
    'escape': exitComparison,
    'q': exitComparison,
  },
};

const helpText = {
  browse: [['↑ ↓', 'Move through folders'], ['Enter', 'Open folder'], ['→', 'Go to images']],
  images: [['Arrows', 'Move through images'], ['Space', 'Toggle selection'], ['A', 'Select all'],
           ['Enter', 'Compare selected'], ['Escape', 'Parent folder']],
  compare: [['← → / A D', 'Previous / next candidate'], ['Space / Enter', 'Candidate becomes best'],
            ['S', 'Keep candidate'], ['X', 'Reject candidate'], ['U', 'Undo'],
            ['Escape / Q', 'Exit comparison']],
  global: [['?', 'Toggle this help']],
};

function renderHelp() {
  const sections = Object.entries(helpText).map(([context, rows]) => el('section', {}, [
    el('h3', { text: context }),
    ...rows.map(([key, label]) => el('div', {}, [el('kbd', { text: key }), label])),
  ]));
  $('help-body').replaceChildren(...sections);
}

function toggleHelp(show = !state.showHelp) {
  state.showHelp = show;
  $('help').classList.toggle('hidden', !show);
}

function handleKeydown(event) {
  if (event.target.matches('input, textarea')) return;
  const key = event.key === ' ' ? 'space' : event.key.toLowerCase();
  if (key === '?') { event.preventDefault(); toggleHelp(); return; }
  if (state.showHelp) {
    if (key === 'escape') { event.preventDefault(); toggleHelp(false); }
    return;
  }
  const handler = keyMaps[state.view][key];
  if (handler) {
    event.preventDefault();
    handler(event);
  }
}

// Mouse handling

$('folders').addEventListener('click', (e) => {
  const a = e.target.closest('a');
  if (!a) return;
  e.preventDefault();
  setView('browse');
  openFolder(a.dataset.path).catch(report);
});
$('grid').addEventListener('click', (e) => {
  const tile = e.target.closest('.tile');
  if (!tile) return;
  setView('images');
  state.imageCursor = Number(tile.dataset.index);
  toggleSelect(state.imageCursor);
});
$('pair').addEventListener('click', (e) => {
  const fig = e.target.closest('figure');
  if (fig && fig.dataset.role === 'candidate') selectCurrentBest();
});
$('select-all').addEventListener('click', selectAll);
$('compare').addEventListener('click', () => startComparison().catch(report));
$('undo').addEventListener('click', undo);
$('save').addEventListener('click', () => save().catch(report));
$('back').addEventListener('click', exitComparison);
$('help-toggle').addEventListener('click', () => toggleHelp());
$('help').addEventListener('click', (e) => { if (e.target.id === 'help') toggleHelp(false); });
document.addEventListener('keydown', handleKeydown);

renderHelp();
openFolder('').catch(report);
"""


def ensure_assets(frontend_dir: Path) -> None:
    """Ensure templates and static files exist under frontend_dir."""
    templates_dir = frontend_dir / "templates"
    static_dir = frontend_dir / "static"
    templates_dir.mkdir(parents=True, exist_ok=True)
    static_dir.mkdir(parents=True, exist_ok=True)

    files = {
        templates_dir / "index.html": INDEX_HTML,
        static_dir / "app.css": APP_CSS,
        static_dir / "app.js": APP_JS,
    }

    for path, content in files.items():
        if not path.exists():
            path.write_text(content, encoding="utf-8")
