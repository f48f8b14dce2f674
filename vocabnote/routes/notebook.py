"""Notebook JSON routes."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from vocabnote.exceptions import InvalidChapterError, StorageError
from vocabnote.services.notebook import Notebook, create_notebook

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notebook", tags=["notebook"])


async def get_notebook(chapter: str = Query("", description="Chapter name")) -> Notebook:
    """Open the configured notebook for dependency injection."""
    try:
        notebook = create_notebook(chapter=chapter or None)
        await notebook.initialize()
    except InvalidChapterError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    except StorageError as e:
        logger.error(f"Cannot open notebook: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from None
    return notebook


@router.get("/notes")
async def list_notes(notebook: Notebook = Depends(get_notebook)) -> dict[str, Any]:
    """List the notes of a chapter in ranking order."""
    try:
        notes = await notebook.list_notes()
    except StorageError as e:
        logger.error(f"Cannot list notes: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from None
    return {"chapter": notebook.chapter, "notes": [note.to_dict() for note in notes]}


@router.get("/chapters")
async def list_chapters(notebook: Notebook = Depends(get_notebook)) -> dict[str, list[str]]:
    """List chapters holding notes."""
    try:
        chapters = await notebook.list_chapters()
    except StorageError as e:
        logger.error(f"Cannot list chapters: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from None
    return {"chapters": sorted(chapters)}
