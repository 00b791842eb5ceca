"""ASGI entrypoint: settings come from the environment and ``.env`` files."""

from food_score.api.app import create_app
from food_score.config import Settings
from food_score.containers import build_container

settings = Settings()
app = create_app(build_container(settings))
