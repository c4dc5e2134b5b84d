"""ReviewHub FastAPI application.

Web server that processes commands synchronously via HTTP. Every request
runs inside the ReviewHub domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import os

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied.
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from reviewhub.domain import reviewhub  # noqa: E402

reviewhub.init()

UPLOADS_PATH = os.environ.get("UPLOAD_URL_PREFIX", "/uploads")
UPLOADS_CACHE_CONTROL = "public, max-age=31536000, immutable"

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="ReviewHub API",
    description="Categorized reviews with ratings, images and helpful votes",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the ReviewHub domain context for each request."""
    with reviewhub.domain_context():
        response = await call_next(request)
    if request.url.path.startswith(UPLOADS_PATH) and response.status_code == 200:
        response.headers["Cache-Control"] = UPLOADS_CACHE_CONTROL
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from reviewhub.api import ROUTERS, register_error_handlers  # noqa: E402

for router in ROUTERS:
    app.include_router(router)

register_error_handlers(app)

app.mount(
    UPLOADS_PATH,
    StaticFiles(directory=os.environ.get("UPLOAD_DIR", "uploads"), check_dir=False),
    name="uploads",
)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": {"name": reviewhub.name}})
