import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from restaurant_hours.core.config import settings
from restaurant_hours.api.v1.api import router as api_v1_router

# configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

app = FastAPI(title="Restaurant Hours Admin API", version="0.1.0")

# set up CORS so the admin console can talk to us
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# mount our API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
def health():
    return {"status": "ok", "env": settings.APP_ENV}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("restaurant_hours.main:app", host=settings.APP_HOST, port=settings.APP_PORT)
