"""Tests for the user profile model."""

import pytest
from pydantic import ValidationError

from sehat_sense.domain.conditions import Condition
from sehat_sense.domain.profile import UserProfile, compute_bmi


@pytest.mark.parametrize(
    ("weight", "height"),
    [(72, 160), (55.5, 151.2), (101.3, 187), (48, 149.9)],
)
def test_bmi_is_derived_from_weight_and_height(weight: float, height: float) -> None:
    profile = UserProfile(name="Ravi", current_weight=weight, height=height)

    assert profile.bmi == round(weight / (height / 100) ** 2, 1)


def test_supplied_bmi_is_ignored() -> None:
    profile = UserProfile(name="Ravi", current_weight=80, height=200, bmi=99.9)

    assert profile.bmi == 20.0


def test_bmi_unset_without_height() -> None:
    assert UserProfile(name="Ravi", current_weight=80).bmi is None
    assert compute_bmi(None, 170) is None


def test_weight_loss_goal_follows_conditions() -> None:
    with_goal = UserProfile(
        name="Ravi", conditions=["weight_loss_goal"], weight_loss_goal=False
    )
    without_goal = UserProfile(
        name="Ravi", conditions=["diabetes"], weight_loss_goal=True
    )

    assert with_goal.weight_loss_goal is True
    assert without_goal.weight_loss_goal is False


def test_conditions_are_deduplicated_in_order() -> None:
    profile = UserProfile(
        name="Ravi",
        conditions=["diabetes", "fatty_liver", "diabetes"],
    )

    assert profile.conditions == (Condition.DIABETES, Condition.FATTY_LIVER)


def test_sleep_hours_must_be_in_range() -> None:
    with pytest.raises(ValidationError):
        UserProfile(name="Ravi", sleep_hours=11)


def test_profile_is_frozen(profile: UserProfile) -> None:
    with pytest.raises(ValidationError):
        profile.name = "Someone else"  # type: ignore[misc]
