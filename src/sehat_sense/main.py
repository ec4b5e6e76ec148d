"""Command line front-end.

Usage:
    sehat-sense setup profile.json
    sehat-sense profile
    sehat-sense log "2 roti, paneer sabzi, dal" [--meal-type Dinner]
    sehat-sense diary [--date YYYY-MM-DD]
    sehat-sense delete <meal-id>
    sehat-sense export [diary.csv]
    sehat-sense report <file>
    sehat-sense meals | drinks
    sehat-sense chat
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from sehat_sense.app_logging import configure_logging
from sehat_sense.containers import AppContainer, build_container
from sehat_sense.domain.conditions import CONDITION_DETAILS
from sehat_sense.domain.errors import ProfileValidationError, SehatSenseError
from sehat_sense.domain.meals import MealType
from sehat_sense.services import diary
from sehat_sense.services.profiles import build_profile
from sehat_sense.services.request_scope import RequestScope

_logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="sehat-sense", description="Personal health tracking coach"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    setup = commands.add_parser("setup", help="Create a profile from a JSON file")
    setup.add_argument("path", type=Path)

    commands.add_parser("profile", help="Show the current profile")

    log = commands.add_parser("log", help="Analyze a meal and log it")
    log.add_argument("description")
    log.add_argument(
        "--meal-type",
        choices=[meal_type.value for meal_type in MealType],
        default=MealType.LUNCH.value,
    )

    diary_cmd = commands.add_parser("diary", help="Show meals for a date")
    diary_cmd.add_argument("--date", help="ISO date; defaults to today")

    delete = commands.add_parser("delete", help="Delete a logged meal")
    delete.add_argument("meal_id")

    export = commands.add_parser("export", help="Export the diary as CSV")
    export.add_argument("path", nargs="?", type=Path)

    report = commands.add_parser("report", help="Upload a lab report")
    report.add_argument("path", type=Path)

    commands.add_parser("meals", help="Suggest meal ideas")
    commands.add_parser("drinks", help="Suggest healthy drinks")
    commands.add_parser("chat", help="Chat with the health coach")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line front-end."""
    configure_logging()
    args = build_parser().parse_args(argv)
    try:
        container = build_container()
    except ValidationError as exc:
        _logger.debug("Invalid configuration", exc_info=True)
        print(_settings_message(exc), file=sys.stderr)
        return 1
    try:
        return asyncio.run(_run(container, args))
    except SehatSenseError as exc:
        _logger.debug("Command failed", exc_info=True)
        print(exc.user_message, file=sys.stderr)
        return 1
    except OSError as exc:
        _logger.debug("File access failed", exc_info=True)
        target = exc.filename or "file"
        print(f"Could not access {target}: {exc.strerror or exc}", file=sys.stderr)
        return 1


def _settings_message(exc: ValidationError) -> str:
    names = sorted(
        {str(error["loc"][0]).upper() for error in exc.errors() if error["loc"]}
    )
    return (
        f"Configuration is missing or invalid: {', '.join(names)}. "
        "Set it in the environment or a .env file."
    )


async def _run(container: AppContainer, args: argparse.Namespace) -> int:
    scope = RequestScope()
    try:
        return await scope.run(_dispatch(container, args))
    finally:
        scope.dismiss()
        await container.close_resources()


async def _dispatch(container: AppContainer, args: argparse.Namespace) -> int:
    store = container.store
    if args.command == "setup":
        store.set_profile(build_profile(_read_draft(args.path)))
        print("Profile saved. Your food diary starts fresh.")
        return 0
    if args.command == "profile":
        return _show_profile(container)
    if args.command == "log":
        meal = await container.meal_logging_service.analyze_and_log(
            args.description, MealType(args.meal_type)
        )
        print(f"Logged {meal.name} ({meal.id}): score {meal.analysis.overall_score}")
        for tip in meal.analysis.smart_suggestions:
            print(f"  - {tip}")
        return 0
    if args.command == "diary":
        day = args.date or store.today().isoformat()
        meals = store.meals_for(day)
        summary = diary.daily_summary(meals)
        print(
            f"{day}: {summary.meal_count} meals, "
            f"{summary.calories:g} kcal, score {summary.average_score}/100"
        )
        for meal in meals:
            print(f"  {meal.id}  {meal.name}  {meal.analysis.overall_score}")
        return 0
    if args.command == "delete":
        if not store.delete_meal(args.meal_id):
            print(f"No meal with id {args.meal_id}", file=sys.stderr)
            return 1
        return 0
    if args.command == "export":
        csv_text = diary.export_csv(store.food_log)
        if args.path is None:
            sys.stdout.write(csv_text)
        else:
            args.path.write_text(csv_text, encoding="utf-8", newline="")
        return 0
    if args.command == "report":
        analysis, _ = await container.report_service.upload(args.path.read_bytes())
        for key, value in analysis.report_data.present().items():
            print(f"{key}: {value:g}")
        for condition in sorted(analysis.conditions):
            print(f"Flagged: {CONDITION_DETAILS[condition].label}")
        return 0
    if args.command == "meals":
        for meal in await container.planner_service.meal_ideas():
            print(f"{meal.name} ({meal.prep_time}, {meal.difficulty}): {meal.image}")
        return 0
    if args.command == "drinks":
        for drink in await container.planner_service.drinks():
            print(f"{drink.name} - best {drink.best_time}")
        return 0
    return await _chat(container)


def _read_draft(path: Path) -> dict[str, object]:
    try:
        draft = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ProfileValidationError(f"{path} is not valid JSON.") from exc
    if not isinstance(draft, dict):
        raise ProfileValidationError(f"{path} must contain a JSON object.")
    return draft


def _show_profile(container: AppContainer) -> int:
    profile = container.store.profile
    if profile is None:
        print("No profile yet. Run `sehat-sense setup <profile.json>`.")
        return 1
    print(profile.model_dump_json(indent=2))
    return 0


async def _chat(container: AppContainer) -> int:
    session = container.new_chat_session()
    print(session.messages[0].text)
    while True:
        try:
            line = await asyncio.to_thread(input, "> ")
        except EOFError:
            return 0
        if line.strip().lower() in {"exit", "quit"}:
            return 0
        reply = await session.send(line)
        if reply is not None:
            print(reply.text)


if __name__ == "__main__":
    raise SystemExit(main())
