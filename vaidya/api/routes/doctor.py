from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...core.security import TokenIdentity
from ...api.deps import get_current_identity, get_doctor_identity
from ...models.appointment import AppointmentStatus
from ...services.doctor_service import DoctorService, list_doctors
from ...schemas.doctor import (
    AppointmentStatusUpdate, DoctorProfileResponse, DoctorProfileUpdate, DoctorSummary,
    HealthRecordCreate, PrescriptionCreate
)
from ...schemas.patient import (
    AppointmentResponse, HealthRecordResponse, PrescriptionResponse, VitalsResponse
)

router = APIRouter(prefix="/doctor", tags=["Doctor"])
directory_router = APIRouter(prefix="/doctors", tags=["Doctors"])


def get_doctor_service(
    identity: TokenIdentity = Depends(get_doctor_identity),
    db: Session = Depends(get_db),
) -> DoctorService:
    return DoctorService(db, identity.subject_id)


@router.get("/profile", response_model=DoctorProfileResponse)
def get_profile(service: DoctorService = Depends(get_doctor_service)):
    return DoctorProfileResponse.from_user(service.get_profile())


@router.put("/profile", response_model=DoctorProfileResponse)
def update_profile(
    update: DoctorProfileUpdate,
    service: DoctorService = Depends(get_doctor_service),
):
    return DoctorProfileResponse.from_user(service.update_profile(update))


@router.get("/appointments", response_model=List[AppointmentResponse])
def list_appointments(
    appointment_status: Optional[AppointmentStatus] = Query(None, alias="status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    service: DoctorService = Depends(get_doctor_service),
):
    return service.list_appointments(status=appointment_status, skip=skip, limit=limit)


@router.patch("/appointments/{appointment_id}/status", response_model=AppointmentResponse)
def update_appointment_status(
    appointment_id: str,
    update: AppointmentStatusUpdate,
    service: DoctorService = Depends(get_doctor_service),
):
    """Confirm, complete or cancel one of this doctor's appointments."""
    return service.update_appointment_status(appointment_id, update)


@router.get("/patients/{patient_id}/vitals/latest", response_model=VitalsResponse)
def get_patient_latest_vitals(
    patient_id: str,
    service: DoctorService = Depends(get_doctor_service),
):
    return service.get_patient_latest_vitals(patient_id)


@router.post("/health-records", response_model=HealthRecordResponse, status_code=status.HTTP_201_CREATED)
def create_health_record(
    record_data: HealthRecordCreate,
    service: DoctorService = Depends(get_doctor_service),
):
    return service.create_health_record(record_data)


@router.post("/prescriptions", response_model=PrescriptionResponse, status_code=status.HTTP_201_CREATED)
def create_prescription(
    prescription_data: PrescriptionCreate,
    service: DoctorService = Depends(get_doctor_service),
):
    return service.create_prescription(prescription_data)


@directory_router.get(
    "",
    response_model=List[DoctorSummary],
    dependencies=[Depends(get_current_identity)],
)
def get_doctors(
    specialty: Optional[str] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
):
    """List doctors available for booking."""
    return [DoctorSummary.from_user(user) for user in list_doctors(db, specialty, skip, limit)]
