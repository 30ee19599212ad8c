"""Schedule routes: generate a priority-weighted study schedule."""

from datetime import date
from fastapi import APIRouter
from planner.allocator import allocate
from planner.schemas import GenerateScheduleRequest, GenerateScheduleResponse

router = APIRouter()


@router.post("/generate-schedule", response_model=GenerateScheduleResponse)
def generate_schedule(body: GenerateScheduleRequest):
    """Allocate study time for the given subjects.

    Nothing is saved here: the client stores the returned tasks itself if the
    user keeps them. Input errors surface as 400 via the app's error handlers.
    """
    start_date = body.start_date or date.today()
    schedules = allocate(body.subjects, body.available_hours_per_day, body.days, start_date)
    return GenerateScheduleResponse(schedules=schedules)
