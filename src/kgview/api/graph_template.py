GRAPH_HTML = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Knowledge Graph</title>
    <link rel="icon" href="/favicon.ico">
    <style>
        * { margin: 0; padding: 0; box-sizing: border-box; }
        :root { color-scheme: light dark; --bg: #ffffff; --panel: rgba(245,245,248,0.95); --border: #e2e2e8; --text: #1a1a24; --muted: #6b6b7b; }
        @media (prefers-color-scheme: dark) {
            :root { --bg: #0b0b12; --panel: rgba(16,16,26,0.95); --border: #1f1f30; --text: #e6e6f0; --muted: #8b8ba0; }
        }
        body { background: var(--bg); color: var(--text); font-family: -apple-system, BlinkMacSystemFont, sans-serif; overflow: hidden; }
        #container { position: relative; width: 100vw; height: 100vh; overflow: hidden; }
        #canvas { width: 100%; height: 100%; display: block; cursor: grab; }

        .panel { position: absolute; z-index: 10; background: var(--panel); border: 1px solid var(--border); border-radius: 8px; font-size: 12px; backdrop-filter: blur(8px); }
        #stats { top: 12px; left: 12px; padding: 6px 12px; color: var(--muted); display: none; }
        #stats strong { color: var(--text); font-weight: 500; }
        #legend { top: 12px; right: 12px; padding: 8px 12px; display: none; }
        .legend-item { display: flex; align-items: center; gap: 8px; padding: 2px 0; color: var(--muted); text-transform: capitalize; }
        .legend-dot { width: 8px; height: 8px; border-radius: 50%; }

        #details { bottom: 16px; left: 50%; transform: translateX(-50%); width: min(520px, calc(100vw - 32px)); padding: 12px 16px; display: none; }
        #details .head { display: flex; align-items: center; gap: 8px; margin-bottom: 8px; }
        #details .kind { font-size: 11px; font-weight: 600; text-transform: uppercase; color: var(--muted); }
        #details .close { margin-left: auto; background: none; border: none; color: var(--muted); cursor: pointer; font-size: 14px; }
        #details .content { font-size: 14px; line-height: 1.5; margin-bottom: 8px; }
        #details .tags { display: flex; flex-wrap: wrap; gap: 6px; }
        #details .tag { padding: 2px 8px; border-radius: 999px; background: rgba(224,85,119,0.15); color: #e05577; font-size: 11px; }
        #details .time { margin-top: 8px; font-size: 11px; color: var(--muted); }

        #placeholder { position: absolute; inset: 0; display: none; align-items: center; justify-content: center; flex-direction: column; gap: 12px; color: var(--muted); text-align: center; padding: 32px; }
        #placeholder h2 { color: var(--text); font-size: 18px; }
        #placeholder p { max-width: 480px; font-size: 14px; line-height: 1.6; }
    </style>
</head>
<body>
    <div id="container">
        <canvas id="canvas"></canvas>
        <div id="stats" class="panel"></div>
        <div id="legend" class="panel"></div>
        <div id="details" class="panel"></div>
        <div id="placeholder">
            <h2>Knowledge Graph</h2>
            <p>No memories yet. As memories are learned they will appear here as an interconnected graph linked by tags.</p>
        </div>
    </div>

    <script>
        const container = document.getElementById('container');
        const canvas = document.getElementById('canvas');
        const ctx = canvas.getContext('2d');
        const darkQuery = window.matchMedia('(prefers-color-scheme: dark)');

        let socket = null;
        let pendingOps = null;
        let paintFrameId = null;

        function send(event) {
            if (socket && socket.readyState === WebSocket.OPEN) {
                socket.send(JSON.stringify(event));
            }
        }

        function localPoint(e) {
            const rect = canvas.getBoundingClientRect();
            return { x: e.clientX - rect.left, y: e.clientY - rect.top };
        }

        function escapeHtml(s) {
            return String(s).replace(/[&<>"']/g, c => ({ '&': '&amp;', '<': '&lt;', '>': '&gt;', '"': '&quot;', "'": '&#39;' }[c]));
        }

        // Display list replay
        function paint(ops) {
            for (const op of ops) {
                switch (op.op) {
                    case 'resize':
                        if (canvas.width !== op.w || canvas.height !== op.h) {
                            canvas.width = op.w;
                            canvas.height = op.h;
                        }
                        ctx.setTransform(op.dpr, 0, 0, op.dpr, 0, 0);
                        ctx.__dpr = op.dpr;
                        break;
                    case 'clear':
                        ctx.clearRect(0, 0, canvas.width, canvas.height);
                        break;
                    case 'transform': {
                        const dpr = ctx.__dpr || 1;
                        ctx.setTransform(dpr * op.k, 0, 0, dpr * op.k, dpr * op.x, dpr * op.y);
                        break;
                    }
                    case 'line':
                        ctx.globalAlpha = op.alpha;
                        ctx.strokeStyle = op.color;
                        ctx.lineWidth = op.width;
                        ctx.beginPath();
                        ctx.moveTo(op.x1, op.y1);
                        ctx.lineTo(op.x2, op.y2);
                        ctx.stroke();
                        break;
                    case 'circle':
                        ctx.globalAlpha = op.alpha;
                        ctx.shadowColor = op.glow || 'transparent';
                        ctx.shadowBlur = op.glow ? 16 : 0;
                        ctx.fillStyle = op.fill;
                        ctx.beginPath();
                        ctx.arc(op.x, op.y, op.r, 0, Math.PI * 2);
                        ctx.fill();
                        if (op.stroke) {
                            ctx.strokeStyle = op.stroke;
                            ctx.lineWidth = op.strokeWidth;
                            ctx.stroke();
                        }
                        ctx.shadowColor = 'transparent';
                        ctx.shadowBlur = 0;
                        break;
                    case 'text':
                        ctx.globalAlpha = op.alpha;
                        ctx.font = op.font;
                        ctx.fillStyle = op.color;
                        ctx.textAlign = 'center';
                        ctx.textBaseline = 'top';
                        ctx.fillText(op.text, op.x, op.y);
                        break;
                }
            }
            ctx.globalAlpha = 1;
        }

        function schedulePaint(ops) {
            pendingOps = ops;
            if (paintFrameId === null) {
                paintFrameId = requestAnimationFrame(() => {
                    paintFrameId = null;
                    if (pendingOps) paint(pendingOps);
                    pendingOps = null;
                });
            }
        }

        function showStats(stats) {
            const el = document.getElementById('stats');
            el.innerHTML = `<strong>${stats.memories}</strong> memories &middot; <strong>${stats.tags}</strong> tags &middot; <strong>${stats.connections}</strong> connections`;
            el.style.display = 'block';
        }

        function showLegend(legend) {
            const el = document.getElementById('legend');
            el.innerHTML = legend.map(e =>
                `<div class="legend-item"><div class="legend-dot" style="background:${e.color}"></div>${escapeHtml(e.label)}</div>`
            ).join('');
            el.style.display = 'block';
        }

        function showDetails(sel) {
            const el = document.getElementById('details');
            if (!sel) {
                el.style.display = 'none';
                return;
            }
            const kind = sel.kind === 'tag' ? 'Tag' : sel.category;
            const source = sel.source ? ` &middot; ${escapeHtml(sel.source)}` : '';
            const body = sel.kind === 'tag'
                ? `Connects ${sel.connections} memories`
                : escapeHtml(sel.content || '');
            const tags = (sel.tags || []).map(t => `<span class="tag">#${escapeHtml(t)}</span>`).join('');
            const time = sel.timestamp ? `<div class="time">${new Date(sel.timestamp).toLocaleString()}</div>` : '';
            el.innerHTML = `
                <div class="head">
                    <div class="legend-dot" style="background:${sel.color}"></div>
                    <span class="kind">${escapeHtml(kind)}</span><span class="kind">${source}</span>
                    <button class="close" id="details-close">&times;</button>
                </div>
                <div class="content">${body}</div>
                ${tags ? `<div class="tags">${tags}</div>` : ''}
                ${time}`;
            el.style.display = 'block';
            document.getElementById('details-close').onclick = () => send({ type: 'select', id: null });
        }

        function onMessage(msg) {
            const data = JSON.parse(msg.data);
            const placeholder = document.getElementById('placeholder');
            if (data.type === 'empty') {
                placeholder.style.display = 'flex';
                canvas.style.visibility = 'hidden';
                showDetails(null);
                return;
            }
            if (data.type === 'error') {
                console.warn('Graph event rejected:', data.detail);
                return;
            }
            placeholder.style.display = 'none';
            canvas.style.visibility = 'visible';
            if (data.stats) showStats(data.stats);
            if (data.legend) showLegend(data.legend);
            if ('selection' in data) showDetails(data.selection);
            canvas.style.cursor = data.cursor;
            schedulePaint(data.ops);
        }

        // Input
        const onMouseDown = e => send({ type: 'pointerdown', ...localPoint(e) });
        const onMouseMove = e => send({ type: 'pointermove', ...localPoint(e) });
        const onMouseUp = () => send({ type: 'pointerup' });
        const onMouseLeave = () => send({ type: 'pointerleave' });
        const onClick = e => send({ type: 'click', ...localPoint(e) });
        const onWheel = e => {
            e.preventDefault();
            send({ type: 'wheel', ...localPoint(e), deltaY: e.deltaY });
        };
        const onTheme = () => send({ type: 'theme', theme: darkQuery.matches ? 'dark' : 'light' });
        const sendSize = () => {
            const rect = container.getBoundingClientRect();
            send({ type: 'resize', width: rect.width, height: rect.height, dpr: window.devicePixelRatio || 1 });
        };
        const resizeObserver = new ResizeObserver(sendSize);

        function connect() {
            const scheme = location.protocol === 'https:' ? 'wss' : 'ws';
            socket = new WebSocket(`${scheme}://${location.host}/graph/ws`);
            socket.onopen = () => {
                sendSize();
                onTheme();
            };
            socket.onmessage = onMessage;
        }

        function teardown() {
            resizeObserver.disconnect();
            canvas.removeEventListener('wheel', onWheel);
            darkQuery.removeEventListener('change', onTheme);
            if (paintFrameId !== null) cancelAnimationFrame(paintFrameId);
            if (socket) socket.close();
        }

        canvas.addEventListener('mousedown', onMouseDown);
        canvas.addEventListener('mousemove', onMouseMove);
        canvas.addEventListener('mouseup', onMouseUp);
        canvas.addEventListener('mouseleave', onMouseLeave);
        canvas.addEventListener('click', onClick);
        // Non-passive so preventDefault stops page scroll
        canvas.addEventListener('wheel', onWheel, { passive: false });
        darkQuery.addEventListener('change', onTheme);
        resizeObserver.observe(container);
        window.addEventListener('pagehide', teardown);

        connect();
    </script>
</body>
</html>
"""
