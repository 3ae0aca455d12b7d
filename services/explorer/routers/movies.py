"""Movie search endpoint: GET /movies?data[search_query]=.. (TMDB /search/movie)."""

from fastapi import APIRouter, Request

from services.explorer.normalizers import normalize_movie
from services.explorer.records import to_payload
from services.explorer.routers._deps import get_upstream, query_param, upstream_items

router = APIRouter(tags=["movies"])


@router.get("/movies")
async def get_movies(request: Request) -> list[dict]:
    search_query = query_param(request, "search_query")

    body = await get_upstream(request).get_json("movies", {"query": search_query})
    movies = upstream_items(body, "movies", "results")
    return [to_payload(normalize_movie(m)) for m in movies]
