# path: taxi-route-api/taxiroute/main.py

import logging

from fastapi import FastAPI

from taxiroute.api.routes.routes import config_router, router as routes_router
from taxiroute.config import get_settings

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="taxi-route-api")

app.include_router(config_router)
app.include_router(routes_router)
