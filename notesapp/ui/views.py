"""
Notes App — Browser Pages
=========================

What:  Server-rendered notes page and its form endpoints.
How:   Each request builds a NotesController over an httpx client pointed at
       the JSON API, loads the list, replays the user's action as events and
       renders `templates/index.html` from the resulting UIState.

    GET  /                          list; ?form=new | ?edit=<id> | ?delete=<id>
                                    open the form or the delete dialog
    POST /ui/notes                  create
    POST /ui/notes/{note_id}        edit
    POST /ui/notes/{note_id}/delete confirm delete

Successful submissions redirect (303) to "/" so a reload never resubmits.
Failed ones re-render with the form or dialog still open and the error shown.
"""

import logging
from pathlib import Path
from typing import AsyncGenerator, Optional

import httpx
from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from notesapp.config import settings
from notesapp.middleware.request_id import request_id_var
from notesapp.ui.client import NotesClient
from notesapp.ui.controller import NotesController
from notesapp.ui.state import UIState

logger = logging.getLogger(__name__)

router = APIRouter(tags=["UI"], include_in_schema=False)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

# Host name used for in-process calls; never resolved
IN_PROCESS_BASE_URL = "http://notesapp.internal"


async def get_notes_client(request: Request) -> AsyncGenerator[NotesClient, None]:
    """
    API client for the duration of one page request.

    Without UI_API_BASE_URL the client calls this same application through
    httpx.ASGITransport, so the UI goes through the public API exactly like
    an external client would.
    """
    if settings.ui_api_base_url:
        transport = None
        base_url = settings.ui_api_base_url
    else:
        transport = httpx.ASGITransport(app=request.app)
        base_url = IN_PROCESS_BASE_URL

    headers = {}
    rid = request_id_var.get("")
    if rid:
        headers["X-Request-ID"] = rid

    async with httpx.AsyncClient(
        transport=transport,
        base_url=base_url,
        timeout=settings.ui_request_timeout,
        headers=headers,
    ) as http:
        yield NotesClient(http)


def render(request: Request, state: UIState) -> HTMLResponse:
    return templates.TemplateResponse(request, "index.html", {"state": state})


def redirect_home() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)


@router.get("/", response_class=HTMLResponse)
async def notes_page(
    request: Request,
    form: Optional[str] = Query(default=None),
    edit: Optional[str] = Query(default=None),
    delete: Optional[str] = Query(default=None),
    client: NotesClient = Depends(get_notes_client),
) -> Response:
    controller = NotesController(client)
    await controller.load()

    if form == "new":
        controller.open_create()
    elif edit:
        controller.open_edit(edit)
    elif delete:
        controller.open_delete(delete)

    return render(request, controller.state)


@router.post("/ui/notes", response_class=HTMLResponse)
async def create_note(
    request: Request,
    title: str = Form(default=""),
    content: str = Form(default=""),
    client: NotesClient = Depends(get_notes_client),
) -> Response:
    controller = NotesController(client)
    await controller.load()
    controller.open_create()

    state = await controller.submit(title, content)
    if state.form is None:
        return redirect_home()
    return render(request, state)


@router.post("/ui/notes/{note_id}", response_class=HTMLResponse)
async def update_note(
    request: Request,
    note_id: str,
    title: str = Form(default=""),
    content: str = Form(default=""),
    client: NotesClient = Depends(get_notes_client),
) -> Response:
    controller = NotesController(client)
    await controller.load()
    if controller.open_edit(note_id).form is None:
        # Note vanished since the form was opened; show the fresh list
        logger.info("Edit submitted for unknown note %s", note_id)
        return redirect_home()

    state = await controller.submit(title, content)
    if state.form is None:
        return redirect_home()
    return render(request, state)


@router.post("/ui/notes/{note_id}/delete", response_class=HTMLResponse)
async def delete_note(
    request: Request,
    note_id: str,
    client: NotesClient = Depends(get_notes_client),
) -> Response:
    controller = NotesController(client)
    await controller.load()
    if controller.open_delete(note_id).delete is None:
        logger.info("Delete confirmed for unknown note %s", note_id)
        return redirect_home()

    state = await controller.confirm_delete()
    if state.delete is None:
        return redirect_home()
    return render(request, state)
