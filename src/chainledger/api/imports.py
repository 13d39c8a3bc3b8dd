"""Imports API: conversion history and CoinTracking import tracking."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from chainledger.api.deps import get_db
from chainledger.api.schemas.imports import (
    ConversionRecordListResponse,
    ConversionRecordResponse,
    MarkImportedResponse,
)
from chainledger.db.repos.conversion_repo import ConversionRepo

router = APIRouter(prefix="/api/imports", tags=["imports"])

DbDep = Annotated[AsyncSession, Depends(get_db)]


@router.get("", response_model=ConversionRecordListResponse)
async def list_imports(
    db: DbDep,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
) -> ConversionRecordListResponse:
    records, total = await ConversionRepo(db).list_all(limit=limit, offset=offset)
    return ConversionRecordListResponse(
        imports=[ConversionRecordResponse.model_validate(r) for r in records],
        total=total,
    )


@router.get("/{import_id}", response_model=ConversionRecordResponse)
async def get_import(import_id: str, db: DbDep) -> ConversionRecordResponse:
    record = await ConversionRepo(db).get_by_id(import_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Import not found")
    return ConversionRecordResponse.model_validate(record)


@router.post("/{import_id}/mark-imported", response_model=MarkImportedResponse)
async def mark_imported(import_id: str, db: DbDep) -> MarkImportedResponse:
    if not await ConversionRepo(db).mark_imported(import_id):
        raise HTTPException(status_code=404, detail="Import not found")
    await db.commit()
    return MarkImportedResponse(id=import_id, imported_to_cointracking=True)
