"""Persistent state store for the profile and food log."""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import Protocol

from pydantic import ValidationError

from sehat_sense.domain.errors import ProfileMissingError, ProfileValidationError
from sehat_sense.domain.meals import FoodLog, LoggedMeal
from sehat_sense.domain.profile import UserProfile
from sehat_sense.domain.state import AppState

StateListener = Callable[[AppState], None]

_logger = logging.getLogger(__name__)


class StateStorage(Protocol):
    """Durable storage for the single state document."""

    def read(self) -> dict[str, object] | None:
        """Return the stored payload, or ``None`` when nothing is stored."""

    def write(self, payload: dict[str, object]) -> None:
        """Durably replace the stored payload."""


@dataclass
class StateStore:
    """Owns the user profile and food log.

    Reads are served from memory. Each mutation builds a new document from
    the current one, persists it, and only then publishes it to readers and
    listeners.
    """

    storage: StateStorage
    timezone: tzinfo | None = None
    _state: AppState = field(default_factory=AppState, init=False, repr=False)
    _listeners: list[StateListener] = field(
        default_factory=list, init=False, repr=False
    )
    _lock: threading.RLock = field(
        default_factory=threading.RLock, init=False, repr=False
    )

    @classmethod
    def open(
        cls, storage: StateStorage, timezone: tzinfo | None = None
    ) -> "StateStore":
        """Create a store initialised from durable storage."""
        store = cls(storage=storage, timezone=timezone)
        store._state = store.load()
        return store

    def load(self) -> AppState:
        """Read the persisted state; missing or corrupt content yields empty state."""
        try:
            payload = self.storage.read()
        except Exception:
            _logger.exception("Stored state is unreadable; starting fresh")
            return AppState()
        if payload is None:
            return AppState()
        try:
            return AppState.model_validate(payload)
        except (ValidationError, TypeError, ValueError):
            _logger.warning("Stored state is invalid; starting fresh", exc_info=True)
            return AppState()

    @property
    def state(self) -> AppState:
        """Return the current state document."""
        return self._state

    @property
    def profile(self) -> UserProfile | None:
        """Return the current profile, if one has been set up."""
        return self._state.profile

    @property
    def food_log(self) -> FoodLog:
        """Return a copy of the food log keyed by ISO date."""
        return dict(self._state.food_log)

    def meals_for(self, day: date | str) -> tuple[LoggedMeal, ...]:
        """Return meals logged on a date, most recent first."""
        key = day if isinstance(day, str) else day.isoformat()
        return self._state.food_log.get(key, ())

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener for committed state; returns an unsubscribe hook."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_profile(self, profile: UserProfile) -> None:
        """Replace the profile and start a fresh food log."""
        with self._lock:
            self._commit(AppState(profile=_revalidate(profile), food_log={}))

    def update_profile(self, **updates: object) -> UserProfile:
        """Merge fields into the existing profile and return the result."""
        with self._lock:
            current = self._state.profile
            if current is None:
                raise ProfileMissingError("No profile to update")
            merged = {**current.model_dump(), **updates}
            try:
                profile = UserProfile.model_validate(merged)
            except ValidationError as exc:
                raise ProfileValidationError(f"Invalid profile update: {exc}") from exc
            self._commit(self._state.model_copy(update={"profile": profile}))
            return profile

    def add_meal(self, meal: LoggedMeal) -> None:
        """Prepend a meal to the bucket of its local calendar date."""
        with self._lock:
            key = self.bucket_for(meal)
            food_log = dict(self._state.food_log)
            food_log[key] = (meal, *food_log.get(key, ()))
            self._commit(self._state.model_copy(update={"food_log": food_log}))

    def delete_meal(self, meal_id: str) -> bool:
        """Remove a meal by id; empty date buckets are dropped."""
        with self._lock:
            food_log: FoodLog = {}
            removed = False
            for key, meals in self._state.food_log.items():
                kept = tuple(meal for meal in meals if meal.id != meal_id)
                removed = removed or len(kept) != len(meals)
                if kept:
                    food_log[key] = kept
            if not removed:
                return False
            self._commit(self._state.model_copy(update={"food_log": food_log}))
            return True

    def reset(self) -> None:
        """Forget the profile and every logged meal."""
        with self._lock:
            self._commit(AppState())

    def today(self) -> date:
        """Return the current calendar date in the store's timezone."""
        return datetime.now(self.timezone).date()

    def bucket_for(self, meal: LoggedMeal) -> str:
        """Return the ISO date key a meal is filed under."""
        return meal.timestamp.astimezone(self.timezone).date().isoformat()

    def _commit(self, state: AppState) -> None:
        self.storage.write(state.model_dump(mode="json"))
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                _logger.exception("State listener failed")


def _revalidate(profile: UserProfile) -> UserProfile:
    return UserProfile.model_validate(profile.model_dump())
