# =============================================================================
# app/routers/metrics.py - Metrics Endpoint
# =============================================================================
# Serves the app's Prometheus registry for scraping.
# =============================================================================

from fastapi import APIRouter, Request, Response

router = APIRouter()


@router.get(
    "",
    response_class=Response,
    responses={200: {"content": {"text/plain": {"schema": {"type": "string"}}}}},
)
async def metrics(request: Request):
    """Prometheus metrics in text exposition format."""
    request_metrics = request.app.state.metrics
    return Response(content=request_metrics.render(), media_type=request_metrics.content_type)
