"""
Main entrypoint.

Run:
- python main.py                                  (local dev, auto-reload)
- uvicorn api_gateway.main:app --host 0.0.0.0 --port 3000
"""
import uvicorn

from api_gateway.main import app  # noqa: F401

if __name__ == "__main__":
    # For production use uvicorn/gunicorn with workers.
    uvicorn.run("api_gateway.main:app", host="0.0.0.0", port=3000, reload=True)
