from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.students.schemas import StudentResponse
from app.core.exceptions import ServiceError
from app.db.session import get_db

from .schemas import ClassCreate, ClassResponse, ClassUpdate
from . import service

router = APIRouter(prefix="/api/v1/classes", tags=["classes"])


@router.get("", response_model=List[ClassResponse])
async def list_classes(db: AsyncSession = Depends(get_db)) -> List[ClassResponse]:
    return await service.list_classes(db)


@router.get("/subject/{subject_id}", response_model=List[ClassResponse])
async def list_classes_by_subject(subject_id: int, db: AsyncSession = Depends(get_db)) -> List[ClassResponse]:
    try:
        return await service.list_classes_by_subject(db, subject_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/teacher/{teacher_id}", response_model=List[ClassResponse])
async def list_classes_by_teacher(teacher_id: int, db: AsyncSession = Depends(get_db)) -> List[ClassResponse]:
    try:
        return await service.list_classes_by_teacher(db, teacher_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/student/{student_id}", response_model=List[ClassResponse])
async def list_classes_by_student(student_id: int, db: AsyncSession = Depends(get_db)) -> List[ClassResponse]:
    return await service.list_classes_by_student(db, student_id)


@router.get("/semester", response_model=List[ClassResponse])
async def list_classes_by_semester_and_year(
    semester: str = Query(..., description="e.g. Fall"),
    academic_year: str = Query(..., description="e.g. 2024-2025"),
    db: AsyncSession = Depends(get_db),
) -> List[ClassResponse]:
    return await service.list_classes_by_semester_and_year(db, semester, academic_year)


@router.get("/available", response_model=List[ClassResponse])
async def list_available_classes(db: AsyncSession = Depends(get_db)) -> List[ClassResponse]:
    """Classes whose enrolled count is below capacity."""
    return await service.list_available_classes(db)


@router.get("/{class_id}", response_model=ClassResponse)
async def get_class(class_id: int, db: AsyncSession = Depends(get_db)) -> ClassResponse:
    obj = await service.get_class(db, class_id)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Class not found")
    return obj


@router.get("/{class_id}/students", response_model=List[StudentResponse])
async def list_class_students(class_id: int, db: AsyncSession = Depends(get_db)) -> List[StudentResponse]:
    try:
        return await service.list_class_students(db, class_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("", response_model=ClassResponse, status_code=status.HTTP_201_CREATED)
async def create_class(payload: ClassCreate, db: AsyncSession = Depends(get_db)) -> ClassResponse:
    try:
        return await service.create_class(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{class_id}", response_model=ClassResponse)
async def update_class(class_id: int, payload: ClassUpdate, db: AsyncSession = Depends(get_db)) -> ClassResponse:
    try:
        return await service.update_class(db, class_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{class_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_class(class_id: int, db: AsyncSession = Depends(get_db)) -> None:
    try:
        await service.delete_class(db, class_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/{class_id}/enroll/{student_id}", response_model=ClassResponse)
async def enroll_student(class_id: int, student_id: int, db: AsyncSession = Depends(get_db)) -> ClassResponse:
    """Enroll a student. 400 when the class is full or the student is already enrolled."""
    try:
        return await service.enroll_student(db, class_id, student_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{class_id}/enroll/{student_id}", response_model=ClassResponse)
async def remove_student(class_id: int, student_id: int, db: AsyncSession = Depends(get_db)) -> ClassResponse:
    try:
        return await service.remove_student(db, class_id, student_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
