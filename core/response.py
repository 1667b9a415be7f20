from fastapi.responses import JSONResponse


def ok(data=None):
    """Standard success envelope (gateway-owned endpoints only; proxied bodies are relayed as-is)."""
    return {"ok": True, "data": data, "error": None}


def error(message: str = "Internal server error"):
    """Error body the UI expects from the gateway itself."""
    return {"error": message}


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error(message))


def unauthorized() -> JSONResponse:
    return error_response(401, "Unauthorized")


def forbidden() -> JSONResponse:
    return error_response(403, "Forbidden")
