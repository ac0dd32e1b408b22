from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from planner.core.config import Settings, settings
from planner.core.errors import (
    PlannerError,
    planner_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)
from planner.core.init_db import init_db
from planner.core.logger import logger
from planner.core.redis_lifecycle import init_redis_client, close_redis
from planner.routes import api_router


def create_app(app_settings: Settings = settings) -> FastAPI:
    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        version=app_settings.PROJECT_VERSION,
        description=app_settings.PROJECT_DESCRIPTION,
        openapi_url="/openapi.json"
    )
    app.state.settings = app_settings
    logger.setLevel(app_settings.LOG_LEVEL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(PlannerError, planner_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Include all API routes
    app.include_router(api_router)

    @app.get("/")
    async def root():
        return {"message": f"Welcome to {app_settings.PROJECT_NAME}"}

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    @app.on_event("startup")
    async def startup_event():
        await init_db()
        await init_redis_client(app_settings.REDIS_URL)
        logger.info(f"{app_settings.PROJECT_NAME} listening on {app_settings.HOST}:{app_settings.PORT}")

    @app.on_event("shutdown")
    async def shutdown_event():
        await close_redis()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("planner.main:app", host=settings.HOST, port=settings.PORT)
