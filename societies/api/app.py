"""
FastAPI Application - REST and WebSocket API for game clients.

Endpoints:
    POST   /api/v1/sessions                 Create a lobby
    GET    /api/v1/sessions/{id}            Get game state
    POST   /api/v1/sessions/{id}/join       Join a lobby
    POST   /api/v1/sessions/{id}/actions    Submit a game action
    GET    /api/v1/leaderboard              Top players by wins
    WS     /api/v1/sessions/{id}/ws         WebSocket for real-time updates

Every rejected request answers with an ErrorResponse whose status code
follows the error kind (400/401/403/404/409/500).

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional
import asyncio
import json
import logging
import os

logger = logging.getLogger(__name__)

# Environment configuration
SOCIETIES_ENV = os.getenv("SOCIETIES_ENV", "development")
SOCIETIES_DATA_DIR = os.getenv("SOCIETIES_DATA_DIR", None)
SOCIETIES_SAVE_RETRIES = int(os.getenv("SOCIETIES_SAVE_RETRIES", "3"))
SOCIETIES_LOG_LEVEL = os.getenv("SOCIETIES_LOG_LEVEL", "INFO")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")


def build_gateway(data_dir: Optional[str] = None, save_retries: Optional[int] = None):
    """
    Create the session gateway from configuration.

    A data directory selects the JSON file store; otherwise sessions
    live in memory for the life of the process.
    """
    from ..session import SessionGateway, InMemoryGameStore, JsonFileGameStore

    data_dir = data_dir if data_dir is not None else SOCIETIES_DATA_DIR
    store = JsonFileGameStore(data_dir) if data_dir else InMemoryGameStore()
    retries = save_retries if save_retries is not None else SOCIETIES_SAVE_RETRIES
    return SessionGateway(store=store, save_retries=retries)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Query, Request, WebSocket, WebSocketDisconnect
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .. import __version__
    from ..engine_core.errors import GameError
    from .service import APIService
    from .schemas import (
        # Request models
        CreateSessionRequest,
        JoinSessionRequest,
        ActionRequest,
        # Response models
        CreateSessionResponse,
        JoinSessionResponse,
        GameStateResponse,
        ActionResponse,
        LeaderboardResponse,
        ErrorResponse,
        HealthResponse,
        # Enums
        ErrorCode,
    )

    app = FastAPI(
        title="Secret Societies API",
        description="""
Server-authoritative game state for Secret Societies (2-4 players).

## Game Flow

1. `POST /sessions` creates a lobby; the caller is the host
2. Other players `POST /sessions/{id}/join`
3. The host sends `START_GAME_FROM_LOBBY`, then everyone selects a
   Victory Condition in turn order
4. Turns cycle Draw -> Return Exploits -> Exploit Secrets ->
   Reveal Secrets -> End of Turn
5. The host sends `CONCLUDE_GAME` to record the winner

## Error Codes

| Code | Status | Description |
|------|--------|-------------|
| `VALIDATION_ERROR` | 400 | Missing or malformed payload |
| `AUTHENTICATION_ERROR` | 401 | Wrong lobby password |
| `AUTHORIZATION_ERROR` | 403 | Not host, not your turn, or wrong phase |
| `NOT_FOUND` | 404 | Session or player does not exist |
| `CONFLICT` | 409 | Lobby full, name taken, or stale draw |
| `INTERNAL_ERROR` | 500 | Server-side invariant violated |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    # CORS for browser clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Service instance
    api_service = service or APIService(gateway=build_gateway())

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(),
        )

    @app.exception_handler(GameError)
    async def game_error_handler(request: Request, exc: GameError) -> JSONResponse:
        return make_error_response(
            ErrorCode(exc.kind.value),
            exc.message,
            status_code=exc.http_status,
            details=exc.details,
        )

    error_responses = {
        400: {"model": ErrorResponse, "description": "Invalid request"},
        401: {"model": ErrorResponse, "description": "Wrong password"},
        403: {"model": ErrorResponse, "description": "Not allowed now"},
        404: {"model": ErrorResponse, "description": "Session not found"},
        409: {"model": ErrorResponse, "description": "Conflict"},
    }

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=CreateSessionResponse,
        status_code=201,
        responses={400: error_responses[400]},
        tags=["Sessions"],
        summary="Create a new lobby",
    )
    async def create_session(body: CreateSessionRequest) -> CreateSessionResponse:
        """
        Create a new lobby.

        The caller becomes the host (player 0) and receives their player id.
        """
        return api_service.create_session(body)

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=GameStateResponse,
        responses={404: error_responses[404]},
        tags=["Sessions"],
        summary="Get game state",
    )
    async def get_session(session_id: str) -> GameStateResponse:
        """Get the complete current game state for display."""
        return api_service.get_game_state(session_id)

    @app.post(
        "/api/v1/sessions/{session_id}/join",
        response_model=JoinSessionResponse,
        responses={code: error_responses[code] for code in (400, 401, 403, 404, 409)},
        tags=["Sessions"],
        summary="Join an open lobby",
    )
    async def join_session(session_id: str, body: JoinSessionRequest) -> JoinSessionResponse:
        """
        Join a lobby that has not started yet.

        Names are unique per lobby, ignoring case. At most four players.
        """
        return api_service.join_session(session_id, body)

    # =========================================================================
    # Action Endpoint
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/actions",
        response_model=ActionResponse,
        responses=error_responses,
        tags=["Game Loop"],
        summary="Submit a game action",
    )
    async def submit_action(session_id: str, body: ActionRequest) -> ActionResponse:
        """
        Submit one game action.

        **Request Body:**
        ```json
        {
            "type": "CONFIRM_DRAW",
            "payload": {
                "playerId": "p_1234567890",
                "cardsToTake": [{"id": "dg_common1", "instanceId": "..."}]
            }
        }
        ```

        Accepted actions are pushed to every WebSocket subscriber.
        """
        return api_service.submit_action(session_id, body)

    # =========================================================================
    # Leaderboard
    # =========================================================================

    @app.get(
        "/api/v1/leaderboard",
        response_model=LeaderboardResponse,
        tags=["Leaderboard"],
        summary="Top players by wins",
    )
    async def get_leaderboard(
        limit: int = Query(10, ge=1, le=100, description="Number of entries"),
    ) -> LeaderboardResponse:
        return api_service.leaderboard(limit)

    # =========================================================================
    # WebSocket Endpoint
    # =========================================================================

    @app.websocket("/api/v1/sessions/{session_id}/ws")
    async def websocket_endpoint(websocket: WebSocket, session_id: str):
        """
        WebSocket for real-time updates.

        Messages from server:
        - state_update: Game state changed
        - session_deleted: Game concluded or terminated
        - error: Error occurred

        Messages from client:
        - ping: Keep-alive
        """
        await websocket.accept()

        try:
            initial = api_service.get_game_state(session_id)
        except GameError as e:
            await websocket.send_json({"type": "error", "payload": {"message": e.message}})
            await websocket.close(code=4404)
            return

        loop = asyncio.get_running_loop()
        updates: asyncio.Queue = asyncio.Queue()

        def on_change(snapshot):
            # Store writes may happen on a worker thread
            loop.call_soon_threadsafe(updates.put_nowait, snapshot)

        unsubscribe = api_service.gateway.subscribe(session_id, on_change)

        async def push_updates():
            while True:
                snapshot = await updates.get()
                if snapshot is None:
                    await websocket.send_json({
                        "type": "session_deleted",
                        "payload": {"session_id": session_id},
                    })
                    await websocket.close()
                    return
                await websocket.send_json({
                    "type": "state_update",
                    "payload": api_service.convert_snapshot(snapshot).model_dump(),
                })

        await websocket.send_json({"type": "state_update", "payload": initial.model_dump()})
        pusher = asyncio.create_task(push_updates())

        try:
            # Listen for messages
            while True:
                data = await websocket.receive_text()
                try:
                    message = json.loads(data)
                except json.JSONDecodeError:
                    await websocket.send_json({
                        "type": "error",
                        "payload": {"message": "Invalid JSON"},
                    })
                    continue
                if isinstance(message, dict) and message.get("type") == "ping":
                    await websocket.send_json({"type": "pong"})

        except WebSocketDisconnect:
            logger.debug("WebSocket disconnected", extra={"session_id": session_id})
        finally:
            unsubscribe()
            pusher.cancel()
            try:
                await pusher
            except (asyncio.CancelledError, WebSocketDisconnect):
                pass
            except Exception:
                logger.warning("State push failed", extra={"session_id": session_id}, exc_info=True)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="secret-societies",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Secret Societies API",
            "version": __version__,
            "environment": SOCIETIES_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn societies.api.app:app
app = None
try:
    app = create_app()
except ImportError:
    # FastAPI not installed
    pass
