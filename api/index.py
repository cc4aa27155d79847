# api/index.py

from http.server import BaseHTTPRequestHandler

HTML = """<!DOCTYPE html>
<html><head>
<meta charset=\"utf-8\"><title>GitWrapped Cards</title>
<style>
body { font-family: system-ui, sans-serif; background: #0d1117; color: #c9d1d9; max-width: 820px; margin: 40px auto; padding: 20px; }
a { color: #58a6ff; } code { background: #21262d; padding: 2px 6px; border-radius: 4px; }
pre { background: #161b22; padding: 16px; border-radius: 6px; overflow-x: auto; }
h1 { border-bottom: 1px solid #30363d; padding-bottom: 10px; }
.endpoint { margin: 20px 0; padding: 16px; background: #161b22; border-radius: 6px; border-left: 3px solid #58a6ff; }
</style>
</head><body>
<h1>GitWrapped Cards API</h1>
<p>Trading cards, badges and stats for GitHub profiles. Embed the SVGs in READMEs or anywhere that renders images.</p>

<div class=\"endpoint\">
<h3>GET <code>/api/card</code></h3>
<p>350&times;490 trading card themed by the top programming language. Add <code>format=json</code> for the raw card data.</p>
<pre>?username=octocat
&amp;format=svg|json</pre>
</div>

<div class=\"endpoint\">
<h3>GET <code>/api/badge</code></h3>
<p>Small profile badge (320&times;80, minimal 200&times;58).</p>
<pre>?username=octocat
&amp;variant=compact|minimal|identity
&amp;theme=light|dark|mono
&amp;portfolio=octocat.dev
&amp;linkedin=in/octocat</pre>
</div>

<div class=\"endpoint\">
<h3>GET <code>/api/stats</code></h3>
<p>Full profile statistics as JSON, including the card data.</p>
<pre>?username=octocat</pre>
</div>

<div class=\"endpoint\">
<h3>GET <code>/api/language_stats</code></h3>
<p>Top programming languages by bytes across recently pushed repos.</p>
<pre>?username=octocat
&amp;mode=percent|bytes|both</pre>
</div>

<h3>Example</h3>
<pre>&lt;img src=\"https://your-domain.vercel.app/api/card?username=octocat\" /&gt;</pre>

<p>Card and badge endpoints allow 30 requests per minute per client.</p>
</body></html>"""

class handler(BaseHTTPRequestHandler):
    def do_GET(self):
        self.send_response(200)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.end_headers()
        self.wfile.write(HTML.encode())
