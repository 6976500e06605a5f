import logging

from fastapi import FastAPI

from wordspy import __version__
from wordspy.api.routes import router
from wordspy.config import get_settings

# Configure logging
logging.basicConfig(level=get_settings().log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="wordspy", version=__version__)
app.include_router(router)


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "wordspy", "version": __version__}
