"""
Entry point for the RoundRobinKeeper HTTP API.

Development (hot-reload):
    python web_main.py      ← API on :8000
"""

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "rrkeeper.web.app:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
