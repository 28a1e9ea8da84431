"""FastAPI application for the maze game."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from ..core.errors import ConfigurationError
from .controller import GameController


class MoveRequest(BaseModel):
    direction: Literal["up", "right", "down", "left"]


class RestartRequest(BaseModel):
    seed: Optional[int] = None


def create_app(
    controller: GameController,
    *,
    static_dir: Optional[Path] = None,
) -> FastAPI:
    """Build the FastAPI instance around a controller."""
    app = FastAPI(title="Tile Maze Web API", version="1.0.0")
    app.state.controller = controller

    # Front end is served from elsewhere during development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/ping")
    async def ping():
        return {"status": "ok"}

    @app.get("/api/state")
    async def get_state():
        return controller.get_state_payload()

    @app.post("/api/state/restart")
    async def restart_state(payload: Optional[RestartRequest] = None):
        seed = payload.seed if payload else None
        try:
            state_payload, maze_payload = controller.restart_game(seed)
        except ConfigurationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {"state": state_payload, "maze": maze_payload}

    @app.get("/api/maze")
    async def get_maze():
        return controller.get_maze_payload()

    @app.post("/api/player/move")
    async def move_player(payload: MoveRequest):
        try:
            return controller.move_player(payload.direction)
        except ConfigurationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    if static_dir and static_dir.exists():
        app.mount(
            "/web",
            StaticFiles(directory=static_dir, html=True),
            name="web",
        )

        @app.get("/")
        async def root():
            index_file = static_dir / "index.html"
            if not index_file.exists():
                raise HTTPException(status_code=404, detail="index.html not found")
            return FileResponse(index_file)

    return app
