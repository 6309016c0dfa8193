"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from zen_service.api.errors import execution_exception_handler, validation_exception_handler
from zen_service.api.models import InfoMessage
from zen_service.api.routes_execute import router as execute_router
from zen_service.core.config import Settings, get_settings
from zen_service.core.errors import ExecutionError
from zen_service.pipeline.executor import ExecutionPipeline
from zen_service.rules.evaluator import DecisionEvaluator, ZenEvaluator
from zen_service.rules.store import RuleStore

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Welcome to Zen Engine!"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info("Rules folder: %s", app.state.store.root)
    logger.info("Keep rules in memory: %s", settings.keep_in_memory)
    yield
    logger.info("Shutting down")


def create_app(
    settings: Optional[Settings] = None,
    evaluator: Optional[DecisionEvaluator] = None,
) -> FastAPI:
    """Create the app with one shared rule store and pipeline."""
    settings = settings or get_settings()
    evaluator = evaluator or ZenEvaluator()

    store = RuleStore(
        settings.rules_folder,
        evaluator,
        keep_in_memory=settings.keep_in_memory,
    )
    pipeline = ExecutionPipeline(store, evaluator, timeout=settings.evaluation_timeout)

    app = FastAPI(
        title="Zen Service",
        version="0.1.0",
        description="HTTP front-end for evaluating zen-engine decision graphs",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.pipeline = pipeline

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ExecutionError, execution_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(execute_router)

    @app.get("/", response_model=InfoMessage)
    async def index() -> InfoMessage:
        return InfoMessage(message=WELCOME_MESSAGE)

    return app
