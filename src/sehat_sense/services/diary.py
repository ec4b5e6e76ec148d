"""Food diary summaries and CSV export."""

from collections.abc import Iterable
from dataclasses import dataclass

from sehat_sense.domain.meals import FoodLog, LoggedMeal

CSV_HEADER = "Date,Meal,Calories,Protein(g),Carbs(g),Fats(g),Score"
WEEK_DAYS = 7


@dataclass(frozen=True)
class DailySummary:
    """Totals for a single day."""

    calories: float
    average_score: int
    meal_count: int


@dataclass(frozen=True)
class MacroTotals:
    """Macronutrients summed across meals."""

    protein: float
    carbs: float
    fats: float


@dataclass(frozen=True)
class DayScore:
    """Average score of one logged day."""

    day: str
    score: int


def daily_summary(meals: Iterable[LoggedMeal]) -> DailySummary:
    """Sum calories and average the score of a day's meals."""
    items = list(meals)
    calories = sum(meal.analysis.calories for meal in items)
    if not items:
        return DailySummary(calories=0, average_score=0, meal_count=0)
    total_score = sum(meal.analysis.overall_score for meal in items)
    return DailySummary(
        calories=calories,
        average_score=round(total_score / len(items)),
        meal_count=len(items),
    )


def macro_totals(food_log: FoodLog) -> MacroTotals:
    """Sum protein, carbs and fats over every logged meal."""
    meals = [meal for day in food_log.values() for meal in day]
    return MacroTotals(
        protein=sum(meal.analysis.protein for meal in meals),
        carbs=sum(meal.analysis.carbs for meal in meals),
        fats=sum(meal.analysis.fats for meal in meals),
    )


def weekly_scores(food_log: FoodLog) -> list[DayScore]:
    """Average score for the latest seven logged days, oldest first."""
    latest = sorted(food_log, reverse=True)[:WEEK_DAYS]
    return [
        DayScore(day=day, score=daily_summary(food_log[day]).average_score)
        for day in reversed(latest)
    ]


def export_csv(food_log: FoodLog) -> str:
    """Render the diary as CSV, newest day first.

    Commas are stripped from meal names rather than quoted.
    """
    rows = [CSV_HEADER]
    for day in sorted(food_log, reverse=True):
        for meal in food_log[day]:
            analysis = meal.analysis
            rows.append(
                ",".join(
                    [
                        day,
                        meal.name.replace(",", ""),
                        _number(analysis.calories),
                        _number(analysis.protein),
                        _number(analysis.carbs),
                        _number(analysis.fats),
                        str(analysis.overall_score),
                    ]
                )
            )
    return "\r\n".join(rows) + "\r\n"


def _number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)
