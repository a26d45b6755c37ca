from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from app.api.deps import CurrentUser, parse_object_id
from app.models.attendance import (
    AttendanceRecord,
    AttendanceRecordCreate,
    AttendanceRecordOut,
    AttendanceRecordUpdate,
)
from app.services import records

router = APIRouter()


def _out(record: AttendanceRecord) -> dict:
    return {**record.model_dump(exclude={"id", "user_id"}), "id": str(record.id)}


async def _get_owned(record_id: str, user_id: str) -> AttendanceRecord:
    record = await records.get_attendance_record(user_id, parse_object_id(record_id, "record id"))
    if not record:
        raise HTTPException(status_code=404, detail="Attendance record not found")
    return record


@router.get("/", response_model=List[AttendanceRecordOut])
async def list_attendance(
    user: CurrentUser,
    grade: Optional[str] = Query(None),
    person: Optional[str] = Query(None),
    limit: int = Query(1000, ge=1, le=10000),
):
    """List the user's attendance records, newest first."""
    rows = await records.list_attendance_records(str(user.id), limit=limit, grade=grade, person=person)
    return [_out(r) for r in rows]


@router.post("/", response_model=AttendanceRecordOut, status_code=201)
async def create_attendance(data: AttendanceRecordCreate, user: CurrentUser):
    record = AttendanceRecord(user_id=str(user.id), **data.model_dump())
    await record.insert()
    return _out(record)


@router.get("/{record_id}", response_model=AttendanceRecordOut)
async def get_attendance(record_id: str, user: CurrentUser):
    return _out(await _get_owned(record_id, str(user.id)))


@router.patch("/{record_id}", response_model=AttendanceRecordOut)
async def update_attendance(record_id: str, data: AttendanceRecordUpdate, user: CurrentUser):
    record = await _get_owned(record_id, str(user.id))
    update_data = data.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        setattr(record, key, value)
    record.updated_at = datetime.utcnow()
    await record.save()
    return _out(record)


@router.delete("/{record_id}", status_code=204)
async def delete_attendance(record_id: str, user: CurrentUser):
    record = await _get_owned(record_id, str(user.id))
    await record.delete()
    return None
