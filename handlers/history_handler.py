from fastapi import APIRouter, Depends, HTTPException, Request

from lib.storage.history import HistoryStorage

router = APIRouter()


def require_history_storage(request: Request) -> HistoryStorage:
    storage = getattr(request.app.state, "history_storage", None)
    if storage is None:
        raise HTTPException(status_code=503, detail="History storage is not configured")
    return storage


@router.get("/history")
def get_history(
    limit: int = 10,
    history_storage: HistoryStorage = Depends(require_history_storage),
):
    """
    Return the most recent generations, newest first
    """
    if limit <= 0:
        raise HTTPException(status_code=400, detail="Limit must be positive")

    return {"items": history_storage.get_recent(limit)}


@router.delete("/history")
def delete_history(history_storage: HistoryStorage = Depends(require_history_storage)):
    """
    Remove all stored generations
    """
    return {"deleted": history_storage.clear()}
