"""Health profile setup validation."""

from collections.abc import Mapping

from pydantic import ValidationError

from sehat_sense.domain.conditions import Condition
from sehat_sense.domain.errors import ProfileValidationError
from sehat_sense.domain.profile import UserProfile

PERSONAL_STEP = 1
CONDITIONS_STEP = 2
BODY_STEP = 3
LIFESTYLE_STEP = 4
SETUP_STEPS = LIFESTYLE_STEP
MIN_SLEEP_HOURS = 4
MAX_SLEEP_HOURS = 10


def validate_step(step: int, draft: Mapping[str, object]) -> None:
    """Check the fields collected by one setup step.

    Raises ``ProfileValidationError`` with a user-facing message.
    """
    if step == PERSONAL_STEP:
        name = draft.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ProfileValidationError("Please fill in all personal details.")
        if not draft.get("age") or not draft.get("gender"):
            raise ProfileValidationError("Please fill in all personal details.")
    elif step == CONDITIONS_STEP:
        if not draft.get("conditions"):
            raise ProfileValidationError(
                "Please select at least one health condition or goal."
            )
    elif step == BODY_STEP:
        if not draft.get("height") or not draft.get("current_weight"):
            raise ProfileValidationError(
                "Please provide your height and current weight."
            )
        conditions = draft.get("conditions") or ()
        wants_weight_loss = any(
            str(item) == Condition.WEIGHT_LOSS_GOAL.value for item in conditions
        )
        if wants_weight_loss and not draft.get("target_weight"):
            raise ProfileValidationError("Please enter your target weight.")
    elif step == LIFESTYLE_STEP:
        if (
            not draft.get("water_intake")
            or not draft.get("activity_level")
            or not draft.get("sleep_hours")
        ):
            raise ProfileValidationError("Please provide all your lifestyle details.")
        sleep_hours = _as_number(draft.get("sleep_hours"))
        if sleep_hours is None or not MIN_SLEEP_HOURS <= sleep_hours <= MAX_SLEEP_HOURS:
            raise ProfileValidationError(
                f"Sleep hours must be between {MIN_SLEEP_HOURS} and {MAX_SLEEP_HOURS}."
            )
    else:
        raise ProfileValidationError(f"Unknown setup step: {step}")


def build_profile(draft: Mapping[str, object]) -> UserProfile:
    """Validate every setup step and return the resulting profile."""
    for step in range(PERSONAL_STEP, SETUP_STEPS + 1):
        validate_step(step, draft)
    try:
        return UserProfile.model_validate(dict(draft))
    except ValidationError as exc:
        raise ProfileValidationError(_first_error(exc)) from exc


def _as_number(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"])
    return f"Invalid {location}: {error['msg']}"
