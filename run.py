"""Tile maze launcher (web edition)

Loads the configured maze, then serves the FastAPI backend with uvicorn.
"""

import logging
import sys
import webbrowser
from pathlib import Path

import uvicorn
import yaml
from dotenv import load_dotenv

from tilemaze.core.errors import ConfigurationError
from tilemaze.core.state import Settings
from tilemaze.server.api import create_app
from tilemaze.server.controller import build_controller

load_dotenv()


def load_config() -> dict:
    """加载配置文件"""
    config_path = Path("config.yaml")
    if not config_path.exists():
        print("Warning: config.yaml not found, using default config")
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        print(f"Warning: Failed to load config ({exc}), using default config")
        return {}


def main():
    """脚本入口，启动 Web 服务"""
    print("=" * 60)
    print("Tile Maze - Web Edition")
    print("=" * 60)
    print()

    print("Loading configuration...")
    config = load_config()
    settings = Settings()
    if config:
        try:
            settings.load_from_dict(config)
        except ConfigurationError as exc:
            print(f"[!] Cannot start: {exc}")
            return 1
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    print("[OK] Configuration loaded")
    print()

    print(f"Decoding maze '{settings.maze_name}'...")
    try:
        controller = build_controller(settings=settings)
    except ConfigurationError as exc:
        print(f"[!] Cannot start: {exc}")
        return 1
    maze = controller.maze
    print(f"[OK] Maze decoded ({maze.rows}x{maze.columns}, seed={controller.seed})")
    if maze.diagnostics:
        print(f"[!] {len(maze.diagnostics)} border problem(s) found, see log")
    print()

    static_dir = Path(settings.static_root)
    if not static_dir.exists():
        print(f"[!] Static directory not found: {static_dir}")

    app = create_app(controller, static_dir=static_dir if static_dir.exists() else None)

    url = f"http://{settings.server_host}:{settings.server_port}"
    print("=" * 60)
    print(f"Server running at: {url}")
    print(f"API docs: {url}/docs")
    print("=" * 60)
    print()

    if settings.auto_open_browser and static_dir.exists():
        webbrowser.open(url)

    config = uvicorn.Config(
        app,
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )
    server = uvicorn.Server(config)
    try:
        server.run()
    except KeyboardInterrupt:
        print("\nServer interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
