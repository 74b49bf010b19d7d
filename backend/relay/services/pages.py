from __future__ import annotations

import json
from html import escape


def _script_literal(value: str) -> str:
    # keep the literal from terminating the surrounding <script> element
    return (
        json.dumps(value)
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
    )


def render_download_page(link: str) -> str:
    href = escape(link, quote=True)
    return f"""<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <title>Redirecting...</title>
    <meta http-equiv="refresh" content="0; url={href}" />
  </head>
  <body>
    <script>
      window.location.href = {_script_literal(link)};
    </script>
    <noscript>
      <p>If you're not redirected, <a href="{href}">click here</a>.</p>
    </noscript>
  </body>
</html>
"""


def _diagnostics_block(status_code: int, details: dict[str, str]) -> str:
    rows = "".join(
        f"<dt>{escape(key)}</dt><dd>{escape(value)}</dd>" for key, value in details.items()
    )
    return f"""
    <details class="diagnostics">
      <summary>Details</summary>
      <dl><dt>status</dt><dd>{status_code}</dd>{rows}</dl>
    </details>"""


def render_fallback_page(
    share_url: str,
    status_code: int,
    details: dict[str, str] | None = None,
    reveal_after_ms: int = 3000,
    show_diagnostics: bool = True,
) -> str:
    """Page shown when no direct link could be obtained.

    The provider's own public page is embedded in a frame. If the provider
    refuses to be framed the visitor still gets a button to open it, shown
    after ``reveal_after_ms``.
    """
    url = escape(share_url, quote=True)
    diagnostics = _diagnostics_block(status_code, details or {}) if show_diagnostics else ""
    return f"""<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <title>Open shared file</title>
    <style>
      body {{ font-family: Arial, sans-serif; margin: 0; }}
      header {{ padding: 16px 24px; }}
      iframe {{ border: 0; width: 100%; height: 80vh; }}
      #open-share {{ display: none; padding: 10px 18px; font-size: 16px; }}
      .diagnostics {{ margin: 16px 24px; color: #666; }}
    </style>
  </head>
  <body>
    <header>
      <h1>Unable to generate a direct download link</h1>
      <p>The file is still available on the provider's page.</p>
      <a id="open-share" href="{url}" target="_blank" rel="noopener noreferrer">Open on the provider</a>
      <noscript><p><a href="{url}">Open the shared file</a></p></noscript>
    </header>
    <iframe src="{url}" title="Shared file"></iframe>
    <script>
      setTimeout(function () {{
        document.getElementById("open-share").style.display = "inline-block";
      }}, {int(reveal_after_ms)});
    </script>{diagnostics}
  </body>
</html>
"""
