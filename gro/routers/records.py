"""
Record Snapshot Endpoints
=========================
Replace and inspect the in-memory list of survey points.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from gro.geodesy.transform import CoordinateTransformer, get_coordinate_transformer
from gro.routers.points import build_point_out
from gro.schemas.points import PointOut, RecordIn, RecordsReplaced, RecordsSummary
from gro.services.records import RecordStore, get_record_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/records", tags=["Records"])


@router.put("", response_model=RecordsReplaced)
def replace_records(
    records: list[RecordIn],
    store: RecordStore = Depends(get_record_store),
):
    """Replace the whole snapshot; rows without finite coordinates are skipped."""
    result = store.replace(r.to_record() for r in records)
    return RecordsReplaced(count=result.count, skipped=result.skipped)


@router.get("", response_model=RecordsSummary)
def records_summary(store: RecordStore = Depends(get_record_store)):
    return RecordsSummary(count=len(store))


@router.get("/{record_id}", response_model=PointOut)
def get_record(
    record_id: str,
    store: RecordStore = Depends(get_record_store),
    transformer: CoordinateTransformer = Depends(get_coordinate_transformer),
):
    record = store.get(record_id)
    if record is None:
        raise HTTPException(404, "Point not found")
    return build_point_out(record, transformer)
