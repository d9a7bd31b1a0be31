from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
def health(request: Request):
    collections = getattr(request.app.state, "collections", {})
    return {"ok": True, "collections": {name: svc.count() for name, svc in collections.items()}}
