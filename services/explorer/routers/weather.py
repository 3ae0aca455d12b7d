"""
Weather endpoint: GET /weather?data[latitude]=..&data[longitude]=..

Dark Sky daily forecast for a point, one {time, forecast} per day.
"""

from fastapi import APIRouter, Request

from services.explorer.normalizers import normalize_weather
from services.explorer.records import to_payload
from services.explorer.routers._deps import get_upstream, query_param, upstream_items

router = APIRouter(tags=["weather"])


@router.get("/weather")
async def get_weather(request: Request) -> list[dict]:
    latitude = query_param(request, "latitude")
    longitude = query_param(request, "longitude")

    body = await get_upstream(request).get_json(
        "weather",
        path={"latitude": latitude, "longitude": longitude},
    )
    days = upstream_items(body, "weather", "daily", "data")
    return [to_payload(normalize_weather(day)) for day in days]
