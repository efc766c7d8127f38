# Run from project root: uvicorn weblook.main:app --reload

import logging

from fastapi import FastAPI

from weblook.api.routes import router
from weblook.core.config import LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL)


app = FastAPI(title="WeblookAI")
app.include_router(router)
