# cocktailbot/api/admin_page.py

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["admin"])

ADMIN_HTML = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>CocktailBot machine monitor</title>
  <style>
    body { font-family: system-ui, -apple-system, Segoe UI, Roboto, Arial, sans-serif; padding: 16px; background: #111; color: #eee; }
    .row { display: flex; gap: 12px; flex-wrap: wrap; align-items: center; }
    .badge { padding: 4px 10px; border: 1px solid #444; border-radius: 999px; }
    #events { margin-top: 12px; border: 1px solid #333; border-radius: 8px; padding: 12px; height: 65vh; overflow: auto; background: #1a1a1a; }
    .ev { border-bottom: 1px solid #2a2a2a; padding: 6px 0; }
    .ev b { color: #7fd; }
    .failed b { color: #f77; }
    button { padding: 8px 14px; border-radius: 8px; border: 1px solid #555; background: #222; color: #eee; cursor: pointer; }
  </style>
</head>
<body>
  <h2>CocktailBot machine monitor</h2>

  <div class="row">
    <span class="badge">socket: <span id="sock">closed</span></span>
    <span class="badge">machine: <span id="state">?</span></span>
    <span class="badge">job: <span id="job">-</span></span>
    <button id="btnCancel">Cancel remaining steps</button>
    <button id="btnClear">Clear</button>
  </div>

  <div id="events"></div>

<script>
  const box = document.getElementById('events');

  function show(ev) {
    const div = document.createElement('div');
    div.className = 'ev' + (ev.type === 'preparation_failed' ? ' failed' : '');
    const when = new Date((ev.ts || Date.now() / 1000) * 1000).toLocaleTimeString();
    div.innerHTML = '<b>' + ev.type + '</b> ' + when + ' <code>' + JSON.stringify(ev.data || {}) + '</code>';
    box.prepend(div);
  }

  async function refreshStatus() {
    try {
      const res = await fetch('/api/v1/control/status');
      const st = await res.json();
      document.getElementById('state').textContent = st.state;
      document.getElementById('job').textContent = st.job || '-';
    } catch (e) {
      document.getElementById('state').textContent = 'unreachable';
    }
  }

  function connect() {
    const scheme = (location.protocol === 'https:') ? 'wss' : 'ws';
    const ws = new WebSocket(scheme + '://' + location.host + '/ws/admin');
    ws.onopen = () => { document.getElementById('sock').textContent = 'open'; };
    ws.onclose = () => {
      document.getElementById('sock').textContent = 'closed';
      setTimeout(connect, 2000);
    };
    ws.onmessage = (msg) => {
      try { show(JSON.parse(msg.data)); } catch (e) { show({type: 'raw', data: {payload: msg.data}}); }
      refreshStatus();
    };
  }

  document.getElementById('btnCancel').onclick = () => fetch('/api/v1/control/cancel', {method: 'POST'}).then(refreshStatus);
  document.getElementById('btnClear').onclick = () => { box.innerHTML = ''; };

  connect();
  refreshStatus();
  setInterval(refreshStatus, 3000);
</script>
</body>
</html>
"""


@router.get("/admin", response_class=HTMLResponse)
def admin_page():
    return ADMIN_HTML
