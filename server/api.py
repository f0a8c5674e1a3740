"""FastAPI server exposing the wardrobe, suggestion and outfit endpoints."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Callable, Dict, List, Optional

from fastapi import Body, FastAPI, HTTPException, Response

from logic.validation import InvalidRequestError
from models.taxonomy import DEFAULT_OCCASION, OCCASIONS
from wardrobe_app.app import NotFoundError, WardrobeApp


@lru_cache(maxsize=1)
def _default_service() -> WardrobeApp:
    return WardrobeApp()


def _call(operation: Callable[..., Any], **kwargs: Any) -> Any:
    """Run a facade operation, translating domain errors into HTTP errors."""

    try:
        return operation(**kwargs)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidRequestError as exc:
        raise HTTPException(status_code=422, detail={"message": str(exc), "errors": exc.details}) from exc


def create_app(service: WardrobeApp | None = None) -> FastAPI:
    """Build the HTTP app around ``service``; the default service is created on first use."""

    app = FastAPI(title="Wardrobe Stylist", version="0.1.0")

    def get_service() -> WardrobeApp:
        return service if service is not None else _default_service()

    @app.get("/healthz")
    def healthcheck() -> dict:
        """Lightweight readiness check."""

        return {
            "status": "ok",
            "service": "wardrobe-stylist",
            "environment": get_service().config.environment or "local",
        }

    @app.get("/occasions")
    def list_occasions() -> dict:
        """Occasions a client can offer; unknown ones are scored with the casual keywords."""

        return {"occasions": list(OCCASIONS), "default": DEFAULT_OCCASION}

    @app.get("/users/{user_id}/items")
    def list_items(user_id: str, category: Optional[str] = None) -> List[dict]:
        items = _call(get_service().list_items, user_id=user_id, category=category)
        return [item.to_dict() for item in items]

    @app.post("/users/{user_id}/items", status_code=201)
    def add_item(user_id: str, payload: Dict[str, Any] = Body(...)) -> dict:
        return _call(get_service().add_item, user_id=user_id, payload=payload).to_dict()

    @app.patch("/users/{user_id}/items/{item_id}")
    def update_item(user_id: str, item_id: str, payload: Dict[str, Any] = Body(...)) -> dict:
        return _call(get_service().update_item, user_id=user_id, item_id=item_id, payload=payload).to_dict()

    @app.delete("/users/{user_id}/items/{item_id}", status_code=204)
    def delete_item(user_id: str, item_id: str) -> Response:
        _call(get_service().delete_item, user_id=user_id, item_id=item_id)
        return Response(status_code=204)

    @app.post("/users/{user_id}/suggestions")
    def suggest(user_id: str, payload: Optional[Dict[str, Any]] = Body(default=None)) -> dict:
        """Rank outfits for an occasion, using weather when a location resolves."""

        return _call(get_service().suggest_outfits, user_id=user_id, payload=payload or {})

    @app.get("/users/{user_id}/outfits")
    def list_outfits(user_id: str, occasion: Optional[str] = None) -> List[dict]:
        return _call(get_service().list_outfits, user_id=user_id, occasion=occasion)

    @app.post("/users/{user_id}/outfits", status_code=201)
    def save_outfit(user_id: str, payload: Dict[str, Any] = Body(...)) -> dict:
        return _call(get_service().save_outfit, user_id=user_id, payload=payload)

    @app.post("/users/{user_id}/outfits/{outfit_id}/favorite")
    def toggle_favorite(user_id: str, outfit_id: str) -> dict:
        return _call(get_service().toggle_favorite, user_id=user_id, outfit_id=outfit_id)

    @app.delete("/users/{user_id}/outfits/{outfit_id}", status_code=204)
    def delete_outfit(user_id: str, outfit_id: str) -> Response:
        _call(get_service().delete_outfit, user_id=user_id, outfit_id=outfit_id)
        return Response(status_code=204)

    @app.post("/users/{user_id}/outfits/{outfit_id}/share", status_code=201)
    def share_outfit(user_id: str, outfit_id: str) -> dict:
        return _call(get_service().share_outfit, user_id=user_id, outfit_id=outfit_id)

    @app.get("/shared/{share_token}")
    def get_shared(share_token: str) -> dict:
        return _call(get_service().get_shared_outfit, share_token=share_token)

    @app.get("/users/{user_id}/profile")
    def get_profile(user_id: str) -> dict:
        return _call(get_service().get_profile, user_id=user_id)

    @app.put("/users/{user_id}/profile")
    def update_profile(user_id: str, payload: Dict[str, Any] = Body(...)) -> dict:
        return _call(get_service().update_profile, user_id=user_id, payload=payload)

    return app


app = create_app()


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=8080, reload=False)
