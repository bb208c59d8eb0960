from fastapi import APIRouter, HTTPException
from models import HistoryEntry
from storage import clear_history, delete_history_entry, get_history_entry, load_history
from typing import List
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/history", response_model=List[HistoryEntry])
def get_history():
    entries = load_history()
    logger.info("GET /history - returned %d entries", len(entries))
    return entries


@router.get("/history/{entry_id}", response_model=HistoryEntry)
def get_history_item(entry_id: str):
    entry = get_history_entry(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"History entry not found: {entry_id}")
    return entry


@router.delete("/history/{entry_id}")
def delete_history_item(entry_id: str):
    logger.info("DELETE /history/%s", entry_id)
    if not delete_history_entry(entry_id):
        raise HTTPException(status_code=404, detail=f"History entry not found: {entry_id}")
    return {"status": "ok"}


@router.delete("/history")
def delete_history():
    logger.info("DELETE /history - clearing all entries")
    clear_history()
    return {"status": "ok"}
