from fastapi.responses import PlainTextResponse

# Browsers call the relay directly from any origin.
CORS_ALLOW_ORIGINS = ["*"]
CORS_ALLOW_METHODS = ["GET", "POST", "OPTIONS"]
CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS),
    "Access-Control-Allow-Methods": ", ".join(CORS_ALLOW_METHODS),
}


def preflight_response() -> PlainTextResponse:
    """Reply to an OPTIONS request that CORSMiddleware did not answer (no Origin header)."""
    return PlainTextResponse("ok", headers=CORS_HEADERS)
