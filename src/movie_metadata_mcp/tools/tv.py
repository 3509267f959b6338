"""TV tools backed by TMDB: show search, show details and episode details."""

from typing import Any

from .arguments import EpisodeArguments, SearchArguments, TvShowArguments
from .base import ToolHandler, names_of
from .movies import SEARCH_RESULT_LIMIT, encode_query


def shape_tv_search(data: dict[str, Any]) -> dict[str, Any]:
    return {
        "total_results": data["total_results"],
        "results": [
            {
                "id": show["id"],
                "name": show["name"],
                "first_air_date": show.get("first_air_date"),
                "overview": show.get("overview"),
                "vote_average": show.get("vote_average"),
                "popularity": show.get("popularity"),
            }
            for show in data["results"][:SEARCH_RESULT_LIMIT]
        ],
    }


def shape_tv_show_details(data: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": data["id"],
        "name": data["name"],
        "first_air_date": data.get("first_air_date"),
        "last_air_date": data.get("last_air_date"),
        "number_of_seasons": data.get("number_of_seasons"),
        "number_of_episodes": data.get("number_of_episodes"),
        "genres": names_of(data["genres"]),
        "overview": data.get("overview"),
        "vote_average": data.get("vote_average"),
        "vote_count": data.get("vote_count"),
        "status": data.get("status"),
    }


def shape_episode_details(data: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": data["id"],
        "name": data["name"],
        "episode_number": data.get("episode_number"),
        "season_number": data.get("season_number"),
        "air_date": data.get("air_date"),
        "overview": data.get("overview"),
        "vote_average": data.get("vote_average"),
        "runtime": data.get("runtime"),
    }


class SearchTvShows(ToolHandler):
    arguments_model = SearchArguments

    async def execute(self, params: SearchArguments) -> dict[str, Any]:
        endpoint = f"/search/tv?query={encode_query(params.query)}"
        if params.year:
            endpoint += f"&first_air_date_year={params.year}"
        return shape_tv_search(await self.tmdb.fetch(endpoint))


class GetTvShowDetails(ToolHandler):
    arguments_model = TvShowArguments

    async def execute(self, params: TvShowArguments) -> dict[str, Any]:
        return shape_tv_show_details(await self.tmdb.fetch(f"/tv/{params.tv_id}"))


class GetTvEpisodeDetails(ToolHandler):
    arguments_model = EpisodeArguments

    async def execute(self, params: EpisodeArguments) -> dict[str, Any]:
        endpoint = (
            f"/tv/{params.tv_id}/season/{params.season_number}"
            f"/episode/{params.episode_number}"
        )
        return shape_episode_details(await self.tmdb.fetch(endpoint))
