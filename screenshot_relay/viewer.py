from __future__ import annotations

import json
import time
from string import Template
from urllib.parse import quote

# Characters encodeURIComponent leaves untouched, besides alphanumerics and "_.-~".
_URI_COMPONENT_SAFE = "!*'()"

_PAGE = Template("""<!doctype html>
<html>
  <head>
    <meta charset="utf-8"/>
    <title>Embedded Viewer</title>
    <style>
      body{font-family:Arial,sans-serif;margin:0;display:flex;flex-direction:column;height:100vh;}
      header{background:#0b5cff;color:#fff;padding:10px;display:flex;align-items:center;gap:8px;}
      #controls{margin-left:auto;}
      .btn{padding:8px 10px;border-radius:6px;border:none;background:#fff;color:#0b5cff;cursor:pointer;}
      #viewport{flex:1;display:flex;align-items:center;justify-content:center;background:#222;}
      img{max-width:100%;max-height:100%;}
    </style>
  </head>
  <body>
    <header>
      <div>Embedded Viewer</div>
      <div id="controls">
        <button class="btn" id="back">Back</button>
        <button class="btn" id="forward">Forward</button>
        <button class="btn" id="refresh">Refresh</button>
        <button class="btn" id="open">Open in new tab</button>
      </div>
    </header>
    <div id="viewport">
      <img id="shot" src="/screenshot?url=$encoded&_t=$now_ms" alt="screenshot"/>
    </div>
    <script>
      const target = $target_js;
      const shot = document.getElementById('shot');
      document.getElementById('refresh').addEventListener('click', () => {
        shot.src = '/screenshot?url=' + encodeURIComponent(target) + '&_t=' + Date.now();
      });
      document.getElementById('open').addEventListener('click', () => window.open(target, '_blank', 'noopener'));
      // No navigation history behind a screenshot, so these stay inert.
      document.getElementById('back').addEventListener('click', () => alert('Back not implemented.'));
      document.getElementById('forward').addEventListener('click', () => alert('Forward not implemented.'));
    </script>
  </body>
</html>
""")


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def render_viewer_page(target: str, *, now_ms: int | None = None) -> str:
    """HTML shell showing the screenshot of ``target`` with refresh/open controls."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return _PAGE.substitute(
        encoded=encode_uri_component(target),
        now_ms=now_ms,
        target_js=json.dumps(target).replace("</", "<\\/"),
    )
