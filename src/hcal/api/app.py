from fastapi import FastAPI

from hcal.api.public import router as public_router
from hcal.core.config import setup_logging

setup_logging()

app = FastAPI(title="hcal public api")
app.include_router(public_router)
