"""FastAPI application factory."""

import logging
from datetime import date

from fastapi import Depends, FastAPI, HTTPException, Request, status

from fasting_tracker.api.auth import require_login
from fasting_tracker.api.auth import router as auth_router
from fasting_tracker.api.errors import raise_for_error
from fasting_tracker.api.schemas import (
    MealRequest,
    ProfileRequest,
    StartFastingRequest,
    WorkoutRequest,
)
from fasting_tracker.app_logging import configure_logging
from fasting_tracker.containers import AppContainer
from fasting_tracker.domain.errors import CorruptRecordError, ErrorKind, Result
from fasting_tracker.domain.fasting import FastingProgress
from fasting_tracker.domain.meals import DailySummary
from fasting_tracker.services.codec import (
    FASTING_SESSION_CODEC,
    MEAL_ENTRY_CODEC,
    PROFILE_CODEC,
    WORKOUT_ENTRY_CODEC,
)


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Fasting Tracker")
    app.state.container = container

    app.include_router(auth_router)

    def state_container(request: Request) -> AppContainer:
        return request.app.state.container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/profile")
    async def get_profile(
        request: Request, email: str = Depends(require_login)
    ) -> dict[str, object]:
        """Return the logged-in user's profile."""
        profile = state_container(request).profile_service.get_profile(email)
        if profile is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return PROFILE_CODEC.to_payload(profile)

    @app.put("/profile")
    async def save_profile(
        payload: ProfileRequest,
        request: Request,
        email: str = Depends(require_login),
    ) -> dict[str, object]:
        """Overwrite the profile, recomputing age and BMR."""
        result = state_container(request).profile_service.save_profile(
            email,
            name=payload.name,
            gender=payload.gender,
            birth_date=payload.birth_date,
            weight_kg=payload.weight,
            height_cm=payload.height,
        )
        raise_for_error(result)
        return PROFILE_CODEC.to_payload(result.value)

    @app.get("/fasting")
    async def get_fasting(
        request: Request, email: str = Depends(require_login)
    ) -> dict[str, object]:
        """Return the current session with its timer values."""
        progress = state_container(request).fasting_service.progress(email)
        if progress is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return _progress_payload(progress)

    @app.post("/fasting/start", status_code=status.HTTP_201_CREATED)
    async def start_fasting(
        payload: StartFastingRequest,
        request: Request,
        email: str = Depends(require_login),
    ) -> dict[str, object]:
        """Start a session, replacing any existing one."""
        service = state_container(request).fasting_service
        return _session_payload(service.start(email, payload.method, payload.duration))

    @app.post("/fasting/{action}")
    async def transition_fasting(
        action: str, request: Request, email: str = Depends(require_login)
    ) -> dict[str, object]:
        """Pause, resume or complete the current session."""
        service = state_container(request).fasting_service
        handlers = {
            "pause": service.pause,
            "resume": service.resume,
            "complete": service.complete,
        }
        handler = handlers.get(action)
        if handler is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        result = handler(email)
        if not result.ok:
            logger.info(
                "Rejected fasting transition: action=%s error=%s", action, result.error
            )
        return _session_payload(result)

    @app.delete("/fasting")
    async def clear_fasting(
        request: Request, email: str = Depends(require_login)
    ) -> dict[str, str]:
        """Discard the current session."""
        state_container(request).fasting_service.clear(email)
        return {"status": "ok"}

    @app.get("/meals/{day}")
    async def list_meals(
        day: date, request: Request, email: str = Depends(require_login)
    ) -> dict[str, object]:
        """Return the meals logged on a day."""
        meals = state_container(request).meal_plan_service.list_meals(
            email, day.isoformat()
        )
        return {"meals": [MEAL_ENTRY_CODEC.to_payload(meal) for meal in meals]}

    @app.post("/meals/{day}", status_code=status.HTTP_201_CREATED)
    async def add_meal(
        day: date,
        payload: MealRequest,
        request: Request,
        email: str = Depends(require_login),
    ) -> dict[str, object]:
        """Append a meal to a day."""
        meal = state_container(request).meal_plan_service.add_meal(
            email, day.isoformat(), payload.name, payload.calories
        )
        return MEAL_ENTRY_CODEC.to_payload(meal)

    @app.put("/meals/{day}")
    async def replace_meals(
        day: date,
        payload: list[dict[str, object]],
        request: Request,
        email: str = Depends(require_login),
    ) -> dict[str, object]:
        """Overwrite the meal list of a day."""
        try:
            meals = [MEAL_ENTRY_CODEC.from_payload(item) for item in payload]
        except CorruptRecordError as exc:
            raise HTTPException(
                status_code=422, detail={"error": str(ErrorKind.CORRUPT_RECORD)}
            ) from exc
        result = state_container(request).meal_plan_service.replace_meals(
            email, day.isoformat(), meals
        )
        raise_for_error(result)
        return {"meals": [MEAL_ENTRY_CODEC.to_payload(meal) for meal in result.value]}

    @app.delete("/meals/{day}/{meal_id}")
    async def remove_meal(
        day: date,
        meal_id: str,
        request: Request,
        email: str = Depends(require_login),
    ) -> dict[str, str]:
        """Remove one meal from a day."""
        removed = state_container(request).meal_plan_service.remove_meal(
            email, day.isoformat(), meal_id
        )
        if not removed:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"status": "ok"}

    @app.get("/workouts/{day}")
    async def list_workouts(
        day: date, request: Request, email: str = Depends(require_login)
    ) -> dict[str, object]:
        """Return the workouts logged on a day."""
        workouts = state_container(request).workout_service.list_workouts(
            email, day.isoformat()
        )
        return {
            "workouts": [WORKOUT_ENTRY_CODEC.to_payload(item) for item in workouts]
        }

    @app.post("/workouts/{day}", status_code=status.HTTP_201_CREATED)
    async def log_workout(
        day: date,
        payload: WorkoutRequest,
        request: Request,
        email: str = Depends(require_login),
    ) -> dict[str, object]:
        """Append a workout to a day."""
        workout = state_container(request).workout_service.log_workout(
            email,
            workout_type=payload.type,
            duration=payload.duration,
            calories_burned=payload.calories_burned,
            day=day.isoformat(),
        )
        return WORKOUT_ENTRY_CODEC.to_payload(workout)

    @app.get("/summary/{day}")
    async def daily_summary(
        day: date, request: Request, email: str = Depends(require_login)
    ) -> dict[str, object]:
        """Return calories eaten and burned on a day next to the BMR."""
        current = state_container(request)
        profile = current.profile_service.get_profile(email)
        summary = DailySummary(
            day=day.isoformat(),
            calories_consumed=current.meal_plan_service.total_calories(
                email, day.isoformat()
            ),
            calories_burned=current.workout_service.total_burned(
                email, day.isoformat()
            ),
            bmr=profile.bmr if profile else None,
        )
        return {
            "date": summary.day,
            "caloriesConsumed": summary.calories_consumed,
            "caloriesBurned": summary.calories_burned,
            "netCalories": summary.net_calories,
            "bmr": summary.bmr,
        }

    return app


def _session_payload(result: Result) -> dict[str, object]:
    raise_for_error(result)
    return FASTING_SESSION_CODEC.to_payload(result.value)


def _progress_payload(progress: FastingProgress) -> dict[str, object]:
    return {
        "session": FASTING_SESSION_CODEC.to_payload(progress.session),
        "elapsedMinutes": progress.elapsed_minutes,
        "remainingMinutes": progress.remaining_minutes,
        "percentComplete": progress.percent_complete,
        "plannedEnd": progress.planned_end.isoformat()
        if progress.planned_end
        else None,
        "isFinished": progress.is_finished,
    }
