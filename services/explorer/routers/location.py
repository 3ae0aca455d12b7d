"""
Location endpoint: GET /location?data=<search query>

Geocodes a free-text query through the location cache. Repeat queries are
answered from the locations table; new ones hit the geocoder once and are
stored. Body: {search_query, formatted_query, latitude, longitude, id?}
"""

from fastapi import APIRouter, Request

from services.explorer.routers._deps import get_location_cache, query_param

router = APIRouter(tags=["location"])


@router.get("/location")
async def get_location(request: Request) -> dict:
    search_query = query_param(request)
    record = await get_location_cache(request).get_or_fetch(search_query)
    return record.to_payload()
