from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...core.security import TokenIdentity
from ...api.deps import get_patient_identity
from ...services.patient_service import PatientService
from ...schemas.patient import (
    AppointmentCreate, AppointmentResponse, HealthRecordResponse, PatientProfileResponse,
    PatientProfileUpdate, PrescriptionResponse, VitalsCreate, VitalsResponse
)

router = APIRouter(prefix="/patient", tags=["Patient"])


def get_patient_service(
    identity: TokenIdentity = Depends(get_patient_identity),
    db: Session = Depends(get_db),
) -> PatientService:
    return PatientService(db, identity.subject_id)


@router.get("/profile", response_model=PatientProfileResponse)
def get_profile(service: PatientService = Depends(get_patient_service)):
    return PatientProfileResponse.from_user(service.get_profile())


@router.put("/profile", response_model=PatientProfileResponse)
def update_profile(
    update: PatientProfileUpdate,
    service: PatientService = Depends(get_patient_service),
):
    return PatientProfileResponse.from_user(service.update_profile(update))


@router.get("/vitals/latest", response_model=VitalsResponse)
def get_latest_vitals(service: PatientService = Depends(get_patient_service)):
    return service.get_latest_vitals()


@router.get("/vitals", response_model=List[VitalsResponse])
def list_vitals(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    service: PatientService = Depends(get_patient_service),
):
    return service.list_vitals(skip=skip, limit=limit)


@router.post("/vitals", response_model=VitalsResponse, status_code=status.HTTP_201_CREATED)
def record_vitals(
    vitals_data: VitalsCreate,
    service: PatientService = Depends(get_patient_service),
):
    return service.record_vitals(vitals_data)


@router.get("/appointments", response_model=List[AppointmentResponse])
def list_appointments(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    service: PatientService = Depends(get_patient_service),
):
    return service.list_appointments(skip=skip, limit=limit)


@router.post("/appointments", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def book_appointment(
    appointment_data: AppointmentCreate,
    service: PatientService = Depends(get_patient_service),
):
    """Book an appointment with a doctor for the authenticated patient."""
    return service.book_appointment(appointment_data)


@router.patch("/appointments/{appointment_id}/cancel", response_model=AppointmentResponse)
def cancel_appointment(
    appointment_id: str,
    service: PatientService = Depends(get_patient_service),
):
    return service.cancel_appointment(appointment_id)


@router.get("/health-records", response_model=List[HealthRecordResponse])
def list_health_records(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    service: PatientService = Depends(get_patient_service),
):
    return service.list_health_records(skip=skip, limit=limit)


@router.get("/prescriptions", response_model=List[PrescriptionResponse])
def list_prescriptions(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    service: PatientService = Depends(get_patient_service),
):
    return service.list_prescriptions(skip=skip, limit=limit)
