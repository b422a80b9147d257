"""swatch server — start the FastAPI server with uvicorn."""
from __future__ import annotations

import sys

from swatch.config import get_server_config


def cmd_server(args) -> None:
    try:
        import uvicorn
    except ImportError:
        print("swatch: uvicorn not installed. Run: pip install uvicorn[standard]", file=sys.stderr)
        sys.exit(1)

    server_cfg = get_server_config()
    host_bind = getattr(args, "host", None) or server_cfg["host"]
    port = getattr(args, "port", None) or server_cfg["port"]
    reload = getattr(args, "reload", False)

    print(f"Starting swatch server on {host_bind}:{port}", flush=True)

    uvicorn.run(
        "server.main:app",
        host=host_bind,
        port=port,
        reload=reload,
    )
