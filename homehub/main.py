from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from datetime import date

from homehub.infra.badge_repository import BadgeStatusRepository
from homehub.infra.db import SessionLocal, create_schema, init_db
from homehub.infra.expense_repository import ExpenseRepository, RecurringExpenseRepository
from homehub.infra.household_repository import HouseholdRepository
from homehub.infra.inventory_repository import InventoryRepository
from homehub.infra.logging import setup_logging
from homehub.infra.plant_repository import PlantRepository
from homehub.infra.repository import TaskRepository
from homehub.infra.shopping_repository import ShoppingListRepository
from homehub.infra.vendor_repository import VendorRepository
from homehub.services.badge_service import BadgeService
from homehub.services.expense_service import ExpenseService
from homehub.services.household_service import HouseholdService
from homehub.services.inventory_service import InventoryService
from homehub.services.plant_service import PlantService
from homehub.services.recurring_expense_service import RecurringExpenseService
from homehub.services.search_service import SearchService
from homehub.services.shopping_service import ShoppingService
from homehub.services.task_service import TaskService
from homehub.services.vendor_service import VendorService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HomeHub:
    households: HouseholdService
    tasks: TaskService
    expenses: ExpenseService
    recurring_expenses: RecurringExpenseService
    inventory: InventoryService
    shopping: ShoppingService
    plants: PlantService
    vendors: VendorService
    badges: BadgeService
    search: SearchService


def build_services(session_factory=SessionLocal) -> HomeHub:
    household_repo = HouseholdRepository(session_factory)
    task_repo = TaskRepository(session_factory)
    expense_repo = ExpenseRepository(session_factory)
    inventory_repo = InventoryRepository(session_factory)

    expenses = ExpenseService(expense_repo, household_repo)
    shopping = ShoppingService(ShoppingListRepository(session_factory), expense_repo)
    tasks = TaskService(task_repo, inventory_repo)
    inventory = InventoryService(inventory_repo, shopping)
    plants = PlantService(PlantRepository(session_factory))
    vendors = VendorService(VendorRepository(session_factory))

    return HomeHub(
        households=HouseholdService(household_repo),
        tasks=tasks,
        expenses=expenses,
        recurring_expenses=RecurringExpenseService(
            RecurringExpenseRepository(session_factory), expenses, household_repo
        ),
        inventory=inventory,
        shopping=shopping,
        plants=plants,
        vendors=vendors,
        badges=BadgeService(BadgeStatusRepository(session_factory), expenses, shopping, task_repo),
        search=SearchService(expenses, tasks, inventory, plants, vendors, shopping),
    )


def _format_task(task) -> str:
    when = task.scheduled_time or "--:--"
    return f"  {when}  {task.title} ({task.room}, {task.estimated_minutes} min)"


def _print_days(days: dict) -> None:
    for day, tasks in days.items():
        print(day.strftime("%a %Y-%m-%d"))
        for task in tasks:
            print(_format_task(task))


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="homehub", description="Household tasks and expenses")
    parser.add_argument("--household", type=int, help="household id")
    parser.add_argument("--date", type=date.fromisoformat, help="reference date (YYYY-MM-DD)")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("init-db", help="create tables from the models")
    sub.add_parser("today", help="tasks due on the reference date")
    sub.add_parser("week", help="tasks for the week of the reference date")
    sub.add_parser("month", help="month calendar of the reference date")
    search = sub.add_parser("search", help="search every collection")
    search.add_argument("query")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    setup_logging()
    try:
        init_db()
    except Exception as exc:  # noqa: BLE001
        logger.error("Database unavailable: %s", exc)
        return 1

    if args.command == "init-db":
        create_schema()
        return 0
    if args.household is None:
        print("--household is required for this command", file=sys.stderr)
        return 2

    hub = build_services()
    reference = args.date or date.today()

    if args.command == "today":
        for task in hub.tasks.list_today(args.household, reference):
            print(_format_task(task))
    elif args.command == "week":
        _print_days(hub.tasks.list_week(args.household, reference))
    elif args.command == "month":
        days = hub.tasks.calendar_month(args.household, reference, include_completed=False)
        _print_days({day: tasks for day, tasks in days.items() if tasks})
    elif args.command == "search":
        for result in hub.search.search_all(args.household, args.query):
            print(f"[{result.type}] {result.title} - {result.description or ''}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
