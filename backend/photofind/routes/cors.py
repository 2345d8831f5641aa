from fastapi import Response

# Fixed header set returned to preflight requests, before any pipeline work
INDEX_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,x-amz-meta-customLabels,Authorization,X-Requested-With",
    "Access-Control-Allow-Methods": "OPTIONS,GET,PUT,POST",
}

SEARCH_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
    "Access-Control-Allow-Methods": "GET,OPTIONS",
}


def preflight(headers: dict) -> Response:
    return Response(status_code=200, headers=headers)
