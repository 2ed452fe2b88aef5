"""
Clinic Booking API Routes

FastAPI router for availability, booking, appointment administration,
calendar export and slot blocking. Domain errors propagate to the
application exception handlers.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from app.config.settings import get_settings
from app.domains.clinic_booking.api.dependencies import (
    get_appointment_use_case,
    get_available_slots_use_case,
    get_block_day_use_case,
    get_block_slot_use_case,
    get_book_appointment_use_case,
    get_cleanup_missed_appointments_use_case,
    get_export_calendar_event_use_case,
    get_list_appointments_use_case,
    get_list_slot_blocks_use_case,
    get_unblock_day_use_case,
    get_unblock_slot_use_case,
    get_update_appointment_status_use_case,
)
from app.domains.clinic_booking.api.schemas import (
    AppointmentResponse,
    BookAppointmentBody,
    CalendarEventResponse,
    CalendarUrlResponse,
    CleanupBody,
    CleanupResponse,
    SlotBlockBody,
    SlotBlockBulkBody,
    SlotBlockCountResponse,
    SlotBlockResponse,
    StatusUpdateBody,
    TimeSlotResponse,
)
from app.domains.clinic_booking.application.dto import AppointmentView, BookAppointmentRequest
from app.domains.clinic_booking.application.use_cases import (
    BlockDayUseCase,
    BlockSlotUseCase,
    BookAppointmentUseCase,
    CleanupMissedAppointmentsUseCase,
    ExportCalendarEventUseCase,
    GetAppointmentUseCase,
    GetAvailableSlotsUseCase,
    ListAppointmentsUseCase,
    ListSlotBlocksUseCase,
    UnblockDayUseCase,
    UnblockSlotUseCase,
    UpdateAppointmentStatusUseCase,
)
from app.domains.clinic_booking.domain.services.status_resolver import effective_status
from app.domains.clinic_booking.domain.value_objects import SlotKey
from app.domains.clinic_booking.infrastructure.calendar import (
    ICS_MEDIA_TYPE,
    google_calendar_url,
    ics_document,
    ics_filename,
)

router = APIRouter(prefix="/booking", tags=["Clinic Booking"])

# Type aliases for use case dependencies
BookAppointmentUseCaseDep = Annotated[BookAppointmentUseCase, Depends(get_book_appointment_use_case)]
GetAvailableSlotsUseCaseDep = Annotated[GetAvailableSlotsUseCase, Depends(get_available_slots_use_case)]
ListAppointmentsUseCaseDep = Annotated[ListAppointmentsUseCase, Depends(get_list_appointments_use_case)]
GetAppointmentUseCaseDep = Annotated[GetAppointmentUseCase, Depends(get_appointment_use_case)]
UpdateStatusUseCaseDep = Annotated[UpdateAppointmentStatusUseCase, Depends(get_update_appointment_status_use_case)]
CleanupUseCaseDep = Annotated[CleanupMissedAppointmentsUseCase, Depends(get_cleanup_missed_appointments_use_case)]
ExportCalendarUseCaseDep = Annotated[ExportCalendarEventUseCase, Depends(get_export_calendar_event_use_case)]
BlockSlotUseCaseDep = Annotated[BlockSlotUseCase, Depends(get_block_slot_use_case)]
UnblockSlotUseCaseDep = Annotated[UnblockSlotUseCase, Depends(get_unblock_slot_use_case)]
ListSlotBlocksUseCaseDep = Annotated[ListSlotBlocksUseCase, Depends(get_list_slot_blocks_use_case)]
BlockDayUseCaseDep = Annotated[BlockDayUseCase, Depends(get_block_day_use_case)]
UnblockDayUseCaseDep = Annotated[UnblockDayUseCase, Depends(get_unblock_day_use_case)]

DateQuery = Annotated[date, Query(alias="date", description="Calendar date (YYYY-MM-DD)")]


# ==================== Availability ====================


@router.get("/time-slots", response_model=list[TimeSlotResponse])
async def list_time_slots(day: DateQuery, use_case: GetAvailableSlotsUseCaseDep):
    """All template slots for a date with their availability flags."""
    slots = await use_case.execute(day, include_unavailable=True)
    return [TimeSlotResponse.from_slot(slot) for slot in slots]


@router.get("/time-slots/available", response_model=list[TimeSlotResponse])
async def list_available_time_slots(day: DateQuery, use_case: GetAvailableSlotsUseCaseDep):
    """Free slots for a date, ordered by time then doctor."""
    slots = await use_case.execute(day)
    return [TimeSlotResponse.from_slot(slot) for slot in slots]


@router.get("/time-slots/upcoming", response_model=list[TimeSlotResponse])
async def list_upcoming_time_slots(
    use_case: GetAvailableSlotsUseCaseDep,
    days: Annotated[int | None, Query(ge=1, le=60)] = None,
):
    """Free slots for the next days, starting tomorrow."""
    slots = await use_case.upcoming(days or get_settings().UPCOMING_SLOT_DAYS)
    return [TimeSlotResponse.from_slot(slot) for slot in slots]


@router.get("/doctors", response_model=list[str])
async def list_doctors_offering(day: DateQuery, use_case: GetAvailableSlotsUseCaseDep):
    """Doctors with at least one free slot on the date."""
    return await use_case.doctors_offering(day)


@router.get("/doctors/{doctor_name}/times", response_model=list[str])
async def list_doctor_times(doctor_name: str, day: DateQuery, use_case: GetAvailableSlotsUseCaseDep):
    """Free time labels for one doctor on the date."""
    return await use_case.times_for(day, doctor_name)


# ==================== Appointments ====================


@router.post("/appointments", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def book_appointment(body: BookAppointmentBody, use_case: BookAppointmentUseCaseDep):
    """Book a new appointment."""
    appointment = await use_case.execute(
        BookAppointmentRequest(
            doctor_name=body.doctor_name,
            treatment_type=body.treatment_type,
            appointment_date=body.appointment_date,
            appointment_time=body.appointment_time,
            patient_id=body.patient_id,
            notes=body.notes,
        )
    )
    view = AppointmentView(appointment=appointment, effective_status=effective_status(appointment, use_case.clock()))
    return AppointmentResponse.from_view(view)


@router.get("/appointments", response_model=list[AppointmentResponse])
async def list_appointments(
    use_case: ListAppointmentsUseCaseDep,
    patient_id: Annotated[str | None, Query(alias="patientId")] = None,
):
    """List appointments, most recent first, with their effective status."""
    views = await use_case.execute(patient_id=patient_id)
    return [AppointmentResponse.from_view(view) for view in views]


@router.post("/appointments/cleanup", response_model=CleanupResponse)
async def cleanup_missed_appointments(body: CleanupBody, use_case: CleanupUseCaseDep):
    """Cancel the selected appointments that are currently missed."""
    result = await use_case.execute(body.appointment_ids)
    return CleanupResponse.from_result(result)


@router.get("/appointments/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(appointment_id: str, use_case: GetAppointmentUseCaseDep):
    """Get one appointment with its effective status."""
    view = await use_case.execute(appointment_id)
    return AppointmentResponse.from_view(view)


@router.patch("/appointments/{appointment_id}/status", response_model=AppointmentResponse)
async def update_appointment_status(
    appointment_id: str,
    body: StatusUpdateBody,
    use_case: UpdateStatusUseCaseDep,
    get_use_case: GetAppointmentUseCaseDep,
):
    """Change an appointment's stored status."""
    await use_case.execute(appointment_id, body.status)
    view = await get_use_case.execute(appointment_id)
    return AppointmentResponse.from_view(view)


# ==================== Calendar Export ====================


@router.get("/appointments/{appointment_id}/calendar-event", response_model=CalendarEventResponse)
async def get_calendar_event(appointment_id: str, use_case: ExportCalendarUseCaseDep):
    """Semantic calendar event fields for an appointment."""
    event = await use_case.execute(appointment_id)
    return CalendarEventResponse.from_event(event)


@router.get("/appointments/{appointment_id}/calendar.ics")
async def download_calendar_ics(appointment_id: str, use_case: ExportCalendarUseCaseDep) -> Response:
    """Downloadable iCalendar document for an appointment."""
    event = await use_case.execute(appointment_id)
    return Response(
        content=ics_document(event, uid=appointment_id),
        media_type=ICS_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{ics_filename(event)}"'},
    )


@router.get("/appointments/{appointment_id}/calendar-url", response_model=CalendarUrlResponse)
async def get_calendar_url(appointment_id: str, use_case: ExportCalendarUseCaseDep):
    """Google Calendar template link for an appointment."""
    event = await use_case.execute(appointment_id)
    return CalendarUrlResponse(url=google_calendar_url(event))


# ==================== Slot Blocks ====================


@router.get("/slot-blocks", response_model=list[SlotBlockResponse])
async def list_slot_blocks(day: DateQuery, use_case: ListSlotBlocksUseCaseDep):
    """Blocked slots for a date."""
    blocks = await use_case.execute(day)
    return [SlotBlockResponse.from_block(block) for block in blocks]


@router.post("/slot-blocks", response_model=SlotBlockResponse, status_code=status.HTTP_201_CREATED)
async def block_slot(body: SlotBlockBody, use_case: BlockSlotUseCaseDep):
    """Close one slot for booking."""
    block = await use_case.execute(SlotKey(body.doctor_name, body.date, body.time), reason=body.reason)
    return SlotBlockResponse.from_block(block)


@router.delete("/slot-blocks", status_code=status.HTTP_204_NO_CONTENT)
async def unblock_slot(
    day: DateQuery,
    doctor_name: Annotated[str, Query(alias="doctorName", min_length=1)],
    time_label: Annotated[str, Query(alias="time", min_length=1)],
    use_case: UnblockSlotUseCaseDep,
) -> Response:
    """Reopen a blocked slot."""
    await use_case.execute(SlotKey(doctor_name, day, time_label))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/slot-blocks/bulk", response_model=list[SlotBlockResponse], status_code=status.HTTP_201_CREATED)
async def block_day(body: SlotBlockBulkBody, use_case: BlockDayUseCaseDep):
    """Close a whole day, one doctor's day, or chosen times of a day."""
    blocks = await use_case.execute(body.date, doctor_name=body.doctor_name, times=body.times, reason=body.reason)
    return [SlotBlockResponse.from_block(block) for block in blocks]


@router.delete("/slot-blocks/bulk", response_model=SlotBlockCountResponse)
async def unblock_day(
    day: DateQuery,
    use_case: UnblockDayUseCaseDep,
    doctor_name: Annotated[str | None, Query(alias="doctorName", min_length=1)] = None,
):
    """Reopen every blocked slot of a date, or only one doctor's."""
    removed = await use_case.execute(day, doctor_name=doctor_name)
    return SlotBlockCountResponse(count=removed)
