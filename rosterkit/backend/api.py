"""FastAPI endpoints for roster sessions, prize draws, grouping and websocket sync."""

from __future__ import annotations

import asyncio
from collections import defaultdict
from contextlib import asynccontextmanager
import logging
from typing import Any, AsyncIterator, Coroutine

from fastapi import Depends, FastAPI, HTTPException, Query, Request, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from .config import BackendSettings, load_settings
from .errors import ParticipantNotFoundError, RosterKitError, SessionNotFoundError
from .export import groups_to_csv, groups_to_text, history_to_csv, history_to_text
from .ingest import demo_names, parse_delimited, parse_text
from .session import Session
from .store import InMemorySessionStore, SessionStore

logger = logging.getLogger(__name__)


class CreateSessionRequest(BaseModel):
    name: str = Field(min_length=1, max_length=200)


class CreateSessionResponse(BaseModel):
    session_id: str


class SessionStateResponse(BaseModel):
    state: dict[str, Any]


class ActionEnvelope(BaseModel):
    action: dict[str, Any]


class TextIngestRequest(BaseModel):
    text: str


class UploadIngestRequest(BaseModel):
    content: str
    delimiter: str = Field(default=",", min_length=1, max_length=1)


class DemoIngestRequest(BaseModel):
    count: int | None = Field(default=None, ge=1, le=100)


class DrawSettingsRequest(BaseModel):
    allow_repeats: bool


class DrawRequest(BaseModel):
    animate: bool = True


class DrawResponse(BaseModel):
    state: dict[str, Any]
    winner: dict[str, Any] | None = None


class GroupSettingsRequest(BaseModel):
    group_size: Any = None


class GroupsResponse(BaseModel):
    state: dict[str, Any]
    groups: list[dict[str, Any]]


class SessionWebSocketHub:
    def __init__(self) -> None:
        self._connections: dict[str, set[WebSocket]] = defaultdict(set)

    async def connect(self, session_id: str, websocket: WebSocket) -> None:
        await websocket.accept()
        self._connections[session_id].add(websocket)

    def disconnect(self, session_id: str, websocket: WebSocket) -> None:
        connections = self._connections.get(session_id)
        if connections is None:
            return
        connections.discard(websocket)
        if not connections:
            self._connections.pop(session_id, None)

    async def send_state(self, websocket: WebSocket, state: dict[str, Any]) -> None:
        await websocket.send_json({"type": "state.full", "state": state})

    async def broadcast(self, session_id: str, message: dict[str, Any]) -> None:
        stale_connections: list[WebSocket] = []
        for websocket in list(self._connections.get(session_id, set())):
            try:
                await websocket.send_json(message)
            except RuntimeError:
                stale_connections.append(websocket)
        for websocket in stale_connections:
            self.disconnect(session_id=session_id, websocket=websocket)

    async def broadcast_state(self, session_id: str, state: dict[str, Any]) -> None:
        await self.broadcast(session_id, {"type": "state.full", "state": state})

    async def broadcast_tick(self, session_id: str, tick: int, display: str) -> None:
        await self.broadcast(session_id, {"type": "draw.tick", "tick": tick, "display": display})


def _default_store(settings: BackendSettings) -> SessionStore:
    return InMemorySessionStore(
        default_group_size=settings.default_group_size,
        spin_timing=settings.spin_timing,
    )


def create_app(store: SessionStore | None = None, settings: BackendSettings | None = None) -> FastAPI:
    backend_settings = settings if settings is not None else load_settings()
    session_store = store if store is not None else _default_store(backend_settings)
    websocket_hub = SessionWebSocketHub()
    background_tasks: set[asyncio.Task[None]] = set()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            yield
        finally:
            session_store.close_all()
            logger.info("Stopped rosterkit backend")

    app = FastAPI(title="Rosterkit API", version="0.1.0", lifespan=lifespan)
    app.state.websocket_hub = websocket_hub

    def spawn(coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        background_tasks.add(task)
        task.add_done_callback(background_tasks.discard)

    session_store.publish_state = lambda session_id, state: spawn(websocket_hub.broadcast_state(session_id, state))
    session_store.publish_tick = lambda session_id, tick, display: spawn(
        websocket_hub.broadcast_tick(session_id, tick, display)
    )

    async def publish_state(session_id: str, state: dict[str, Any]) -> None:
        await websocket_hub.broadcast_state(session_id=session_id, state=state)

    app.state.publish_state = publish_state

    @app.exception_handler(RosterKitError)
    async def handle_rosterkit_error(request: Request, exc: RosterKitError) -> JSONResponse:
        status_code = 404 if isinstance(exc, (ParticipantNotFoundError, SessionNotFoundError)) else 409
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    def get_store() -> SessionStore:
        return session_store

    def require_session(session_id: str, local_store: SessionStore = Depends(get_store)) -> Session:
        session = local_store.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    @app.post("/api/sessions", response_model=CreateSessionResponse)
    def create_session(
        payload: CreateSessionRequest,
        local_store: SessionStore = Depends(get_store),
    ) -> CreateSessionResponse:
        created = local_store.create_session(name=payload.name)
        return CreateSessionResponse(session_id=created.session_id)

    @app.get("/api/sessions/{session_id}", response_model=SessionStateResponse)
    def get_session(session: Session = Depends(require_session)) -> SessionStateResponse:
        return SessionStateResponse(state=session.to_state())

    @app.delete("/api/sessions/{session_id}", status_code=204)
    async def delete_session(session_id: str, local_store: SessionStore = Depends(get_store)) -> None:
        if not local_store.close_session(session_id):
            raise HTTPException(status_code=404, detail="Session not found")

    @app.post("/api/sessions/{session_id}/actions", response_model=SessionStateResponse)
    async def post_action(
        session_id: str,
        payload: ActionEnvelope,
        local_store: SessionStore = Depends(get_store),
    ) -> SessionStateResponse:
        state = local_store.apply_action(session_id=session_id, action=payload.action)
        if state is None:
            raise SessionNotFoundError(session_id)
        await publish_state(session_id=session_id, state=state)
        return SessionStateResponse(state=state)

    @app.post("/api/sessions/{session_id}/participants/text", response_model=SessionStateResponse)
    async def post_text(
        payload: TextIngestRequest,
        session: Session = Depends(require_session),
    ) -> SessionStateResponse:
        state = session.add_names(parse_text(payload.text), source="text")
        await publish_state(session_id=session.session_id, state=state)
        return SessionStateResponse(state=state)

    @app.post("/api/sessions/{session_id}/participants/upload", response_model=SessionStateResponse)
    async def post_upload(
        payload: UploadIngestRequest,
        session: Session = Depends(require_session),
    ) -> SessionStateResponse:
        state = session.add_names(parse_delimited(payload.content, payload.delimiter), source="upload")
        await publish_state(session_id=session.session_id, state=state)
        return SessionStateResponse(state=state)

    @app.post("/api/sessions/{session_id}/participants/demo", response_model=SessionStateResponse)
    async def post_demo(
        payload: DemoIngestRequest,
        session: Session = Depends(require_session),
    ) -> SessionStateResponse:
        count = payload.count if payload.count is not None else backend_settings.demo_count
        state = session.add_names(demo_names(count), source="demo")
        await publish_state(session_id=session.session_id, state=state)
        return SessionStateResponse(state=state)

    @app.put("/api/sessions/{session_id}/draw/settings", response_model=SessionStateResponse)
    async def put_draw_settings(
        payload: DrawSettingsRequest,
        session: Session = Depends(require_session),
    ) -> SessionStateResponse:
        state = session.set_allow_repeats(payload.allow_repeats)
        await publish_state(session_id=session.session_id, state=state)
        return SessionStateResponse(state=state)

    @app.post("/api/sessions/{session_id}/draws", response_model=DrawResponse)
    async def post_draw(
        payload: DrawRequest,
        session: Session = Depends(require_session),
    ) -> DrawResponse:
        if payload.animate:
            state = session.start_draw(scheduler=asyncio.get_running_loop())
            await publish_state(session_id=session.session_id, state=state)
            return DrawResponse(state=state)
        # the commit listener publishes the new state
        entry = session.draw_now()
        return DrawResponse(state=session.to_state(), winner=entry.winner.to_dict())

    @app.delete("/api/sessions/{session_id}/draws", response_model=SessionStateResponse)
    async def delete_draws(session: Session = Depends(require_session)) -> SessionStateResponse:
        state = session.reset_history()
        await publish_state(session_id=session.session_id, state=state)
        return SessionStateResponse(state=state)

    @app.get("/api/sessions/{session_id}/draws/export")
    def export_draws(
        export_format: str = Query("text", alias="format", pattern="^(text|csv)$"),
        session: Session = Depends(require_session),
    ) -> PlainTextResponse:
        history = session.draw_engine.history
        if export_format == "csv":
            return PlainTextResponse(history_to_csv(history), media_type="text/csv")
        return PlainTextResponse(history_to_text(history))

    @app.put("/api/sessions/{session_id}/groups/settings", response_model=SessionStateResponse)
    async def put_group_settings(
        payload: GroupSettingsRequest,
        session: Session = Depends(require_session),
    ) -> SessionStateResponse:
        state = session.set_group_size(payload.group_size)
        await publish_state(session_id=session.session_id, state=state)
        return SessionStateResponse(state=state)

    @app.post("/api/sessions/{session_id}/groups", response_model=GroupsResponse)
    async def post_groups(session: Session = Depends(require_session)) -> GroupsResponse:
        groups = session.generate_groups()
        state = session.to_state()
        await publish_state(session_id=session.session_id, state=state)
        return GroupsResponse(state=state, groups=[group.to_dict() for group in groups])

    @app.get("/api/sessions/{session_id}/groups/export")
    def export_groups(
        export_format: str = Query("text", alias="format", pattern="^(text|csv)$"),
        session: Session = Depends(require_session),
    ) -> PlainTextResponse:
        groups = session.grouping_engine.groups
        if export_format == "csv":
            return PlainTextResponse(groups_to_csv(groups), media_type="text/csv")
        return PlainTextResponse(groups_to_text(groups))

    @app.websocket("/ws/sessions/{session_id}")
    async def session_ws(
        websocket: WebSocket,
        session_id: str,
        local_store: SessionStore = Depends(get_store),
    ) -> None:
        state = local_store.get_session_state(session_id)
        if state is None:
            await websocket.close(code=1008)
            return

        await websocket_hub.connect(session_id=session_id, websocket=websocket)
        await websocket_hub.send_state(websocket=websocket, state=state)

        try:
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            websocket_hub.disconnect(session_id=session_id, websocket=websocket)

    return app


app = create_app()
