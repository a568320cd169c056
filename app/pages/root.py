"""HTML served at ``/``: where Snipe-IT lives, which headers to send, main routes."""

from html import escape

_ROUTES: tuple[tuple[str, str, str], ...] = (
    ("GET", "/api/locations", "Top-level locations"),
    ("GET", "/api/assets/search?query=", "Find an asset by tag or SAP number"),
    ("POST", "/api/audit", "Record an audit"),
    ("GET", "/api/audits/user/{username}", "Audits by one user"),
    ("GET", "/api/snipeit/assets", "Staleness snapshot (admin)"),
    ("POST", "/api/audits/resolve", "Resolve mismatches (admin)"),
)

# Inline only: the page CSP allows no external stylesheets or fonts.
_STYLE = """
body { font: 15px/1.5 system-ui, sans-serif; max-width: 44rem; margin: 2.5rem auto;
       padding: 0 1rem; color: #1f2933; background: #f7f8fa; }
h1 { font-size: 1.9rem; margin: 0; }
h2 { font-size: .8rem; letter-spacing: .06em; text-transform: uppercase; color: #52606d; }
section { background: #fff; border: 1px solid #d9e2ec; border-radius: 6px;
          padding: .5rem 1.25rem 1.25rem; margin-top: 1.25rem; }
table { border-collapse: collapse; width: 100%; }
th, td { text-align: left; padding: .3rem .4rem; border-top: 1px solid #e4e7eb; }
th { width: 4.5rem; font-size: .75rem; color: #3e4c59; }
code { font: .85rem ui-monospace, monospace; }
.lead { color: #616e7c; margin-top: .25rem; }
.docs { display: inline-block; margin-top: .5rem; padding: .45rem .9rem; border-radius: 4px;
        background: #1f2933; color: #fff; text-decoration: none; }
""".strip()


def _route_rows() -> str:
    return "\n".join(
        f"<tr><th>{method}</th><td><code>{escape(path)}</code></td><td>{escape(label)}</td></tr>"
        for method, path, label in _ROUTES
    )


def render_root_page(app_name: str, snipeit_url: str) -> str:
    name = escape(app_name)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{name}</title>
<style>{_STYLE}</style>
</head>
<body>
<h1>Asset Audit</h1>
<p class="lead">Scan assets and reconcile their locations with Snipe-IT.</p>
<section>
<h2>Connection</h2>
<p>Snipe-IT: <code>{escape(snipeit_url)}</code>. Send your Snipe-IT API token as
<code>X-API-Token</code>; admin routes also take <code>X-Admin-Password</code>.</p>
<a class="docs" href="/docs">API docs</a>
</section>
<section>
<h2>Routes</h2>
<table>
{_route_rows()}
</table>
</section>
<p class="lead">{name} &middot; API under <code>/api</code></p>
</body>
</html>"""
