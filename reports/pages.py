"""
pages.py

Small standalone HTML pages served next to the comparison map:

- build_home_page() -> str HTML explaining the /compare/<uuid> URL
- build_error_page(message, uuid) -> str HTML showing a lookup failure
"""

import html
from typing import Optional


PAGE_STYLE = """
    body {
        font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Helvetica, Arial, sans-serif;
        margin: 0;
        min-height: 100vh;
        display: flex;
        align-items: center;
        justify-content: center;
        background: #f9fafb;
        color: #111827;
    }
    .panel { text-align: center; }
    h1 { margin-bottom: 16px; }
    p { color: #4b5563; }
    code {
        background: #e5e7eb;
        padding: 2px 8px;
        border-radius: 4px;
    }
    .example {
        background: #fff;
        padding: 24px;
        border-radius: 8px;
        box-shadow: 0 1px 4px rgba(0,0,0,0.1);
        max-width: 420px;
        margin: 32px auto 0;
    }
    .example code { background: none; color: #2563eb; }
    .error { color: #dc2626; }
"""


def _page(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8" />
    <title>{html.escape(title)}</title>
    <style>{PAGE_STYLE}</style>
</head>
<body>
    <div class="panel">
{body}
    </div>
</body>
</html>
"""


def build_home_page() -> str:
    body = """
        <h1>GeoJSON Compare</h1>
        <p>Navigate to <code>/compare/[uuid]</code> to view geometry comparisons</p>
        <div class="example">
            <p>Example:</p>
            <code>/compare/your-uuid-here</code>
        </div>
"""
    return _page("GeoJSON Compare", body)


def build_error_page(message: str, uuid: Optional[str] = None) -> str:
    """
    The viewer does not distinguish failure kinds; it just shows the message.
    """
    uuid_line = ""
    if uuid:
        uuid_line = f"<p>UUID: {html.escape(uuid)}</p>"

    body = f"""
        <h1 class="error">Error</h1>
        <p class="message">{html.escape(message)}</p>
        {uuid_line}
"""
    return _page("GeoJSON Compare - Error", body)
