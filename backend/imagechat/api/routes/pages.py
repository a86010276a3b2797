from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from imagechat.config import UIConfig, get_ui_config

router = APIRouter()

HTML_SHELL = """<!DOCTYPE html>
<html>
  <head>
    <title>{title}</title>
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <link href="https://fonts.googleapis.com/css2?family=Poppins:wght@300;400;600&display=swap" rel="stylesheet">
    <link href="/static/app.css" rel="stylesheet">
  </head>
  <body>
    <div id="root"></div>
    <script id="imagechat-config" type="application/json">{config}</script>
    <script type="module" src="/static/app.js"></script>
  </body>
</html>
"""


def render_shell(ui_config: UIConfig) -> str:
    # "<" is escaped so the JSON can never close the script tag early
    config_json = ui_config.model_dump_json().replace("<", "\\u003c")
    title = ui_config.title.replace("&", "&amp;").replace("<", "&lt;")
    return HTML_SHELL.format(title=title, config=config_json)


@router.get("/{path:path}", response_class=HTMLResponse, include_in_schema=False)
async def html_shell(ui_config: UIConfig = Depends(get_ui_config)):
    """Serve the single-page app for any GET path."""
    return render_shell(ui_config)
