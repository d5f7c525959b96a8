# travel_sync/static.py

from starlette.staticfiles import StaticFiles

from travel_sync.config import STATIC_MAX_AGE


class CachedStaticFiles(StaticFiles):
    """StaticFiles that also sends a Cache-Control max-age."""

    def __init__(self, *args, max_age: int = STATIC_MAX_AGE, **kwargs):
        super().__init__(*args, **kwargs)
        self.max_age = max_age

    def file_response(self, *args, **kwargs):
        response = super().file_response(*args, **kwargs)
        response.headers["Cache-Control"] = f"public, max-age={self.max_age}"
        return response
