from fastapi import Request

from app.api.faceit_utils.cache import TTLCache
from app.api.faceit_utils.service import FaceitService


def get_response_cache(request: Request) -> TTLCache:
    return request.app.state.response_cache


def get_faceit_service(request: Request) -> FaceitService:
    return request.app.state.faceit_service
