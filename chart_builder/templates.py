# CSS/HTML/JS templates for the chart page
from .config import FOOTER_TEXT

BASE_CSS = r"""
:root{--bg:#0b0b0b;--fg:#f5f5f5;--muted:#a5a5a5;--accent:#66b3ff;--card:#141414;--border:#2a2a2a}
*{box-sizing:border-box}
html,body{margin:0;padding:0;background:var(--bg);color:var(--fg);font:16px/1.5 system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,"Helvetica Neue",Arial}
.container{max-width:1240px;margin:0 auto;padding:16px}
.header{display:flex;flex-wrap:wrap;align-items:center;gap:12px;margin-bottom:16px}
.header h1{font-size:1.25rem;margin:0}
.card{background:var(--card);border:1px solid var(--border);border-radius:12px;padding:16px}
.controls{display:flex;flex-wrap:wrap;gap:16px;align-items:center;margin-bottom:12px}
.btn-group{display:flex;flex-wrap:wrap;gap:6px}
.btn{display:inline-block;padding:8px 12px;background:#1e1e1e;border:1px solid var(--border);border-radius:10px;color:var(--fg);cursor:pointer}
.btn.active{border-color:var(--accent);color:var(--accent)}
.btn input{display:none}
.btn:focus{outline:2px solid var(--accent);outline-offset:2px}
/* the chart itself draws dark text on white, like the original d3 page */
#vis{background:#fff;color:#111;border-radius:10px;overflow-x:auto}
#vis svg{display:block}
#vis .bar{cursor:pointer}
#vis .x-axis .tick text{transform:rotate(-90deg) translate(-12px,-13px);text-anchor:end;font-size:10px}
#vis .y-axis .tick text{text-anchor:end;font-size:10px}
#vis .axis-label{font-size:13px;font-weight:600}
#tooltip{position:absolute;pointer-events:none;opacity:0;background:#fff;color:#111;border:1px solid #999;border-radius:6px;padding:6px 10px;font-size:13px;box-shadow:0 2px 8px rgba(0,0,0,0.4)}
#tooltip ul{margin:0;padding-left:16px}
footer{margin-top:24px;color:var(--muted);font-size:.9rem}
.legend{color:var(--muted);font-size:.95rem}
"""

CHART_JS = r"""
(function(){
  const tooltip = document.getElementById('tooltip');
  const pad = %TOOLTIP_PADDING%;
  const labels = %TOOLTIP_LABELS%;
  let reversed = false;

  // Current selection of the sex/type toggle groups
  function getFilters(){
    const s = {sex: %DEFAULT_SEX%, type: %DEFAULT_TYPE%};
    document.querySelectorAll('.btn-group input:checked').forEach(el => {
      if (el.classList.contains('sex')) s.sex = el.value; else s.type = el.value;
    });
    return s;
  }

  function show(){
    const f = getFilters();
    const order = reversed ? 'reversed' : 'default';
    document.querySelectorAll('.frame').forEach(el => {
      el.hidden = !(el.dataset.sex === f.sex && el.dataset.type === f.type && el.dataset.order === order);
    });
    document.querySelectorAll('.btn-group label').forEach(l => {
      const input = l.querySelector('input');
      l.classList.toggle('active', !!(input && input.checked));
    });
  }

  document.querySelectorAll('.btn-group input').forEach(el => el.addEventListener('change', show));
  document.getElementById('sorting').addEventListener('click', () => { reversed = !reversed; show(); });

  document.querySelectorAll('rect.bar').forEach(rect => {
    rect.addEventListener('mouseover', () => {
      const ul = document.createElement('ul');
      labels.forEach(([field, label]) => {
        const li = document.createElement('li');
        li.textContent = label + ': ' + rect.getAttribute('data-' + field);
        ul.appendChild(li);
      });
      const box = document.createElement('div');
      box.className = 'tooltip-label';
      box.appendChild(ul);
      tooltip.replaceChildren(box);
      tooltip.style.opacity = 1;
    });
    rect.addEventListener('mousemove', (event) => {
      tooltip.style.left = (event.pageX + pad) + 'px';
      tooltip.style.top = (event.pageY + pad) + 'px';
    });
    rect.addEventListener('mouseleave', () => { tooltip.style.opacity = 0; });
  });

  show();
})();
"""

PAGE_HTML = r"""<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>%TITLE%</title>
<link rel="stylesheet" href="styles.css" />
</head>
<body>
<div class="container">
  <div class="header"><h1>%TITLE%</h1></div>
  <div class="card">
    <div class="controls">
%CONTROLS%
      <button id="sorting" class="btn" type="button">Reverse order</button>
    </div>
    <div id="vis">
%FRAMES%
    </div>
  </div>
  <footer>""" + FOOTER_TEXT + r""" <span class="legend">Last updated: %LAST_UPDATED%</span></footer>
</div>
<div id="tooltip"></div>
<script src="chart.js"></script>
</body>
</html>
"""
