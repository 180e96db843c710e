"""FastAPI web dashboard for managing posts."""

import logging
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from ..config import Config
from ..errors import (
    DuplicateId,
    DuplicateTitle,
    InvalidId,
    InvalidTitle,
    NotFound,
    PostSyncError,
    RemoteError,
    RemoteUnavailable,
)
from ..store import SyncStore

logger = logging.getLogger(__name__)

# Template directory
TEMPLATE_DIR = Path(__file__).parent / "templates"


class PostCreate(BaseModel):
    id: int
    title: str


class PostUpdate(BaseModel):
    title: str


def _status_for(error: PostSyncError) -> int:
    """Map a store error to an HTTP status code."""
    if isinstance(error, (DuplicateId, DuplicateTitle)):
        return 409
    if isinstance(error, NotFound):
        return 404
    if isinstance(error, (InvalidId, InvalidTitle)):
        return 422
    if isinstance(error, RemoteError):
        return 502
    return 400


def create_app(config: Config, store: SyncStore) -> FastAPI:
    """Create the FastAPI dashboard application.

    Args:
        config: Application configuration.
        store: SyncStore that every page and API route reads and mutates.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(
        title=f"{config.dashboard.title} Dashboard",
        description="Manage posts stored in a remote document collection",
        version="0.1.0",
    )

    # Store references for route handlers
    app.state.config = config
    app.state.store = store

    # Set up Jinja2 templates
    templates = Jinja2Templates(directory=str(TEMPLATE_DIR))

    def render_result(
        request: Request,
        message: str,
        message_type: str = "success",
        close_forms: bool = False,
    ) -> HTMLResponse:
        """Render the post table plus an out-of-band message."""
        return templates.TemplateResponse(
            request,
            "partials/result.html",
            {
                "posts": store.records,
                "message": message,
                "message_type": message_type,
                "close_forms": close_forms,
            },
        )

    @app.exception_handler(PostSyncError)
    async def handle_store_error(request: Request, exc: PostSyncError) -> JSONResponse:
        return JSONResponse(status_code=_status_for(exc), content={"error": str(exc)})

    # ==================== HTML Routes ====================

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request):
        """Main page; reloads posts from the remote on every visit."""
        message = "Posts loaded successfully!"
        message_type = "success"

        try:
            await store.load()
        except RemoteUnavailable as e:
            logger.error(f"Error loading posts: {e}")
            message = f"Error loading posts: {e.detail or e}"
            message_type = "error"

        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "page_title": config.dashboard.title,
                "posts": store.records,
                "message": message,
                "message_type": message_type,
            },
        )

    # ==================== HTMX Partials ====================

    @app.get("/htmx/posts", response_class=HTMLResponse)
    async def htmx_posts(request: Request):
        """HTMX partial for the post table."""
        return templates.TemplateResponse(
            request, "partials/posts_table.html", {"posts": store.records}
        )

    @app.get("/htmx/posts/new", response_class=HTMLResponse)
    async def htmx_new_form(request: Request):
        """HTMX partial for the add form."""
        return templates.TemplateResponse(request, "partials/add_form.html", {})

    @app.get("/htmx/posts/{remote_key}/edit", response_class=HTMLResponse)
    async def htmx_edit_form(request: Request, remote_key: str):
        """HTMX partial for the update form, prefilled with the current title."""
        post = store.get(remote_key)
        if post is None:
            return templates.TemplateResponse(
                request,
                "partials/message.html",
                {"message": "Post not found", "message_type": "error"},
                status_code=404,
            )

        return templates.TemplateResponse(
            request, "partials/update_form.html", {"post": post}
        )

    @app.get("/htmx/close", response_class=HTMLResponse)
    async def htmx_close():
        """Empty partial used to close forms and expire messages."""
        return HTMLResponse("")

    @app.post("/htmx/posts", response_class=HTMLResponse)
    async def htmx_add_post(request: Request):
        """Create a post from the add form."""
        form = await request.form()
        title = str(form.get("title", "")).strip()

        try:
            post_id = int(str(form.get("id", "")).strip())
        except ValueError:
            return render_result(request, "ID must be a whole number!", "error")

        try:
            await store.create(post_id, title)
        except PostSyncError as e:
            logger.error(f"Add post error: {e}")
            return render_result(request, str(e), "error")

        return render_result(request, "Post added successfully!", close_forms=True)

    @app.post("/htmx/posts/{remote_key}", response_class=HTMLResponse)
    async def htmx_update_post(request: Request, remote_key: str):
        """Update a post's title from the update form."""
        form = await request.form()
        title = str(form.get("title", "")).strip()

        try:
            await store.update(remote_key, title)
        except PostSyncError as e:
            logger.error(f"Update post error: {e}")
            return render_result(request, str(e), "error")

        return render_result(request, "Post updated successfully!", close_forms=True)

    @app.delete("/htmx/posts/{remote_key}", response_class=HTMLResponse)
    async def htmx_delete_post(request: Request, remote_key: str):
        """Delete a post; the markup asks the user to confirm first."""
        try:
            await store.delete(remote_key)
        except PostSyncError as e:
            logger.error(f"Delete post error: {e}")
            return render_result(request, str(e), "error")

        return render_result(request, "Post deleted successfully!")

    # ==================== API Routes (JSON) ====================

    @app.get("/api/posts")
    async def api_posts(refresh: bool = False) -> dict[str, Any]:
        """List cached posts, loading them first if asked or never loaded."""
        if refresh or store.last_load is None:
            await store.load()

        return {
            "count": len(store),
            "posts": [asdict(post) for post in store.records],
        }

    @app.post("/api/posts", status_code=201)
    async def api_create_post(body: PostCreate) -> dict[str, Any]:
        """Create a post."""
        post = await store.create(body.id, body.title)
        return asdict(post)

    @app.patch("/api/posts/{remote_key}")
    async def api_update_post(remote_key: str, body: PostUpdate) -> dict[str, Any]:
        """Update a post's title."""
        post = await store.update(remote_key, body.title)
        return asdict(post)

    @app.delete("/api/posts/{remote_key}", status_code=204)
    async def api_delete_post(remote_key: str) -> Response:
        """Delete a post."""
        await store.delete(remote_key)
        return Response(status_code=204)

    @app.get("/api/health")
    async def api_health() -> dict[str, Any]:
        """Health check endpoint for monitoring.

        Always returns 200 OK; remote reachability is reported by the
        status CLI command, not here.
        """
        return {
            "status": "ok",
            "timestamp": datetime.now().isoformat(),
            "store": store.get_status(),
        }

    return app
