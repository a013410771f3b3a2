"""Random integer resource API.

This module exposes a FastAPI app that drives the random integer lifecycle
(create, read, replace, delete, import) and keeps each resource's persisted
record as JSON in Redis.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import redis
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

from import_codec import ImportStateError
from integer_resource import IntegerResource, IntegerResourceRequest, check_utf8
from lifecycle import IntegerResourceController, PlanAction
from seeded_random import RangeError

logger = logging.getLogger(__name__)

app = FastAPI(title="Random Integer API", version="1.0.0")


@app.exception_handler(RequestValidationError)
def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # rejected input may hold lone surrogates that cannot be encoded back to UTF-8
    errors = [
        {key: value for key, value in error.items() if key not in ("input", "ctx")}
        for error in exc.errors()
    ]
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(errors)})


@dataclass
class RedisConfig:
    url: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    key_prefix: str = os.getenv("RESOURCE_KEY_PREFIX", "random_integer:")

    def client(self) -> redis.Redis:
        return redis.Redis.from_url(self.url, decode_responses=True)


class ResourceStore:
    """Persisted records keyed by resource name."""

    def __init__(self, client: redis.Redis, key_prefix: str = "random_integer:") -> None:
        self._client = client
        self._prefix = key_prefix

    def _key(self, name: str) -> str:
        return f"{self._prefix}{name}"

    def get(self, name: str) -> IntegerResource | None:
        raw = self._client.get(self._key(name))
        if not raw:
            return None
        return IntegerResource.model_validate_json(raw)

    def put(self, name: str, record: IntegerResource) -> None:
        self._client.set(self._key(name), record.model_dump_json())

    def remove(self, name: str) -> None:
        self._client.delete(self._key(name))


def get_config() -> RedisConfig:
    return RedisConfig()


def get_redis_client(config: RedisConfig = Depends(get_config)) -> redis.Redis:
    return config.client()


def get_store(
    redis_client: redis.Redis = Depends(get_redis_client),
    config: RedisConfig = Depends(get_config),
) -> ResourceStore:
    return ResourceStore(redis_client, config.key_prefix)


def get_controller() -> IntegerResourceController:
    return IntegerResourceController()


class ImportRequest(BaseModel):
    id: str = Field(..., description="<result>,<min>,<max> or <result>,<min>,<max>,<seed>")

    @field_validator("id")
    @classmethod
    def validate_id(cls, value: str) -> str:
        return check_utf8(value, "id")


class ApplyResponse(BaseModel):
    action: PlanAction
    resource: IntegerResource


@app.put("/integers/{name}", response_model=ApplyResponse)
def apply_integer(
    name: str,
    request: IntegerResourceRequest,
    store: ResourceStore = Depends(get_store),
    controller: IntegerResourceController = Depends(get_controller),
):
    state = store.get(name)
    action = controller.plan(request, state)

    if action is PlanAction.NOOP:
        return ApplyResponse(action=action, resource=controller.update(request, state))

    try:
        record = controller.create(request)
    except RangeError as exc:
        logger.warning("Rejected %s: %s", name, exc.detail)
        raise HTTPException(status_code=400, detail=exc.as_dict()) from exc

    if action is PlanAction.REPLACE:
        controller.delete(state)
    store.put(name, record)
    return ApplyResponse(action=action, resource=record)


@app.get("/integers/{name}", response_model=IntegerResource)
def read_integer(
    name: str,
    store: ResourceStore = Depends(get_store),
    controller: IntegerResourceController = Depends(get_controller),
):
    return controller.read(_require(store, name))


@app.delete("/integers/{name}")
def delete_integer(
    name: str,
    store: ResourceStore = Depends(get_store),
    controller: IntegerResourceController = Depends(get_controller),
):
    controller.delete(_require(store, name))
    store.remove(name)
    return {"status": "ok"}


@app.post("/integers/{name}/import", response_model=IntegerResource)
def import_integer(
    name: str,
    request: ImportRequest,
    store: ResourceStore = Depends(get_store),
    controller: IntegerResourceController = Depends(get_controller),
):
    try:
        record = controller.import_state(request.id)
    except ImportStateError as exc:
        logger.warning("Rejected import of %s: %s", name, exc.detail)
        raise HTTPException(status_code=400, detail=exc.as_dict()) from exc
    store.put(name, record)
    return record


def _require(store: ResourceStore, name: str) -> IntegerResource:
    state = store.get(name)
    if state is None:
        raise HTTPException(status_code=404, detail=f"Random integer {name!r} not found")
    return state


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
