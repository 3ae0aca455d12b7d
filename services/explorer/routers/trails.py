"""
Trail search endpoint: GET /trails?data[latitude]=..&data[longitude]=..

Hiking Project trails near a point, including current trail conditions.
"""

from fastapi import APIRouter, Request

from services.explorer.normalizers import normalize_trail
from services.explorer.records import to_payload
from services.explorer.routers._deps import get_upstream, query_param, upstream_items

router = APIRouter(tags=["trails"])

# Search radius in miles
MAX_DISTANCE_MI = 10


@router.get("/trails")
async def get_trails(request: Request) -> list[dict]:
    latitude = query_param(request, "latitude")
    longitude = query_param(request, "longitude")

    body = await get_upstream(request).get_json(
        "trails",
        {"lat": latitude, "lon": longitude, "maxDistance": MAX_DISTANCE_MI},
    )
    trails = upstream_items(body, "trails", "trails")
    return [to_payload(normalize_trail(t)) for t in trails]
