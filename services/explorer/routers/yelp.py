"""
Business search endpoint: GET /yelp?data[search_query]=..

Yelp Fusion business search by location text. Yelp wants a bearer token,
which the upstream client adds.
"""

from fastapi import APIRouter, Request

from services.explorer.normalizers import normalize_business
from services.explorer.records import to_payload
from services.explorer.routers._deps import get_upstream, query_param, upstream_items

router = APIRouter(tags=["yelp"])


@router.get("/yelp")
async def get_businesses(request: Request) -> list[dict]:
    search_query = query_param(request, "search_query")

    body = await get_upstream(request).get_json("yelp", {"location": search_query})
    businesses = upstream_items(body, "yelp", "businesses")
    return [to_payload(normalize_business(b)) for b in businesses]
