import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from imagechat.api.errors import register_exception_handlers
from imagechat.api.routes import chat, dispatch, image, pages
from imagechat.config import get_settings

settings = get_settings()

logging.basicConfig(level=settings.log_level)

STATIC_DIR = Path(__file__).resolve().parent / "static"

app = FastAPI(title=settings.app_title)

app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=settings.cors_origin_regex,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Order matters: explicit routes and the POST dispatcher come before the static
# mount, which would otherwise take every method under /static.
app.include_router(image.router, tags=["image"])
app.include_router(chat.router, tags=["chat"])
app.include_router(dispatch.router)
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
app.include_router(pages.router)
