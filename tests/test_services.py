from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from homehub.domain.entities import MaintenanceItem
from homehub.domain.enums import InventoryStatus, SearchResultType
from homehub.domain.errors import HouseholdError, NotFoundError, ValidationError
from homehub.domain.filters import ExpenseFilters, InventoryFilters
from homehub.main import build_services
from homehub.services.badge_service import has_streak
from homehub.services.inventory_service import stock_status
from homehub.services.recurring_expense_service import next_due_date


@pytest.fixture
def hub(session_factory):
    return build_services(session_factory)


@pytest.fixture
def household(hub):
    home = hub.households.create_household("anna", "Casa", now=datetime(2025, 1, 1))
    return hub.households.add_member(home.id, "marco")


def test_join_by_invite_code(hub) -> None:
    home = hub.households.create_household("anna", "Casa", now=datetime(2025, 1, 1))

    joined = hub.households.join_by_invite_code("luca", home.invite_code.lower(),
                                                now=datetime(2025, 1, 3))
    assert joined.members == ("anna", "luca")
    assert hub.households.for_user("luca").id == home.id

    with pytest.raises(HouseholdError):
        hub.households.join_by_invite_code("eva", home.invite_code, now=datetime(2025, 2, 1))
    with pytest.raises(HouseholdError):
        hub.households.join_by_invite_code("eva", "WRONG")
    with pytest.raises(NotFoundError):
        hub.households.get_household(999)


def test_expense_defaults_to_equal_split(hub, household) -> None:
    expense = hub.expenses.create_expense("anna", {
        "household_id": household.id,
        "amount": "45.00",
        "category": "groceries",
        "description": "Weekly shop",
        "date": date(2025, 1, 8),
    })

    assert expense.paid_by == "anna"
    assert expense.currency == "EUR"
    assert expense.split_between == {"anna": Decimal("22.50"), "marco": Decimal("22.50")}

    summary = hub.expenses.month_summary(household.id, today=date(2025, 1, 20))
    assert summary["total"] == Decimal("45.00")
    assert summary["balances"] == {"anna": Decimal("22.50"), "marco": Decimal("-22.50")}
    assert summary["categories"][0].category == "groceries"


def test_expense_listing_cache_is_invalidated_on_write(hub, household) -> None:
    filters = ExpenseFilters(household_id=household.id)
    assert hub.expenses.list_expenses(filters) == []

    expense = hub.expenses.create_expense("marco", {
        "household_id": household.id,
        "amount": 12,
        "category": "transport",
        "date": date(2025, 1, 8),
    })
    assert [e.id for e in hub.expenses.list_expenses(filters)] == [expense.id]

    hub.expenses.delete_expense(expense.id, household.id)
    assert hub.expenses.list_expenses(filters) == []


@pytest.mark.parametrize("amount, category", [("0", "bills"), ("abc", "bills"), ("5", "fun")])
def test_expense_validation(hub, household, amount, category) -> None:
    with pytest.raises(ValidationError):
        hub.expenses.create_expense("anna", {
            "household_id": household.id,
            "amount": amount,
            "category": category,
        })


def test_expense_date_is_parsed_before_storing(hub, household) -> None:
    expense = hub.expenses.create_expense("anna", {
        "household_id": household.id,
        "amount": 10,
        "category": "bills",
        "date": "2025-01-08",
    })
    assert expense.date == date(2025, 1, 8)

    for bad_date in (None, "someday"):
        with pytest.raises(ValidationError):
            hub.expenses.create_expense("anna", {
                "household_id": household.id,
                "amount": 10,
                "category": "bills",
                "date": bad_date,
            })
    assert len(hub.expenses.list_expenses(ExpenseFilters(household_id=household.id))) == 1


def test_week_expenses_use_reference_date(hub, household) -> None:
    for day in (date(2025, 1, 5), date(2025, 1, 6), date(2025, 1, 8)):
        hub.expenses.create_expense("anna", {
            "household_id": household.id,
            "amount": 1,
            "category": "extra",
            "date": day,
        })

    week = hub.expenses.week_expenses(household.id, today=date(2025, 1, 8))

    assert sorted(e.date for e in week) == [date(2025, 1, 6), date(2025, 1, 8)]


def test_recurring_expense_mark_paid_creates_expense(hub, household) -> None:
    rent = hub.recurring_expenses.create("anna", {
        "household_id": household.id,
        "title": "Rent",
        "amount": "900",
        "category": "home",
        "frequency": "monthly",
        "next_due_date": date(2025, 1, 31),
        "auto_create": True,
    })

    paid = hub.recurring_expenses.mark_paid(rent.id, "marco", today=date(2025, 1, 30))

    assert paid.next_due_date == date(2025, 2, 28)
    assert paid.last_paid_date == date(2025, 1, 30)
    expenses = hub.expenses.list_expenses(ExpenseFilters(household_id=household.id))
    assert len(expenses) == 1
    assert expenses[0].paid_by == "marco"
    assert expenses[0].description == "Rent"
    assert expenses[0].split_between == {"anna": Decimal("450.00"), "marco": Decimal("450.00")}

    upcoming = hub.recurring_expenses.upcoming(household.id, days_ahead=30, today=date(2025, 2, 1))
    assert [e.id for e in upcoming] == [rent.id]
    assert hub.recurring_expenses.mark_paid(999, "anna") is None


def test_next_due_date_periods() -> None:
    assert next_due_date(date(2025, 1, 10), "weekly") == date(2025, 1, 17)
    assert next_due_date(date(2024, 2, 29), "yearly") == date(2025, 2, 28)
    assert next_due_date(date(2025, 12, 15), "monthly") == date(2026, 1, 15)


def test_inventory_status_follows_quantity(hub, household) -> None:
    item = hub.inventory.create_item("anna", {
        "household_id": household.id,
        "name": "Dish soap",
        "category": "cleaning",
        "quantity": 3,
        "min_quantity": 1,
    })

    assert hub.inventory.refresh_status(item.id, 1).status == InventoryStatus.LOW
    assert hub.inventory.refresh_status(item.id, 0).status == InventoryStatus.OUT
    assert [i.id for i in hub.inventory.low_stock(household.id)] == [item.id]
    assert hub.inventory.mark_purchased(item.id, 4).status == InventoryStatus.OK

    added = hub.inventory.add_to_shopping_list(item.id, "anna")
    assert added.name == "Dish soap"
    assert stock_status(None, 2) == InventoryStatus.OUT
    assert stock_status(5, None) == InventoryStatus.OK


def test_seed_critical_items_skips_existing(hub, household) -> None:
    hub.inventory.create_item("anna", {"household_id": household.id, "name": "pasta",
                                       "category": "groceries"})

    created = hub.inventory.seed_critical_items("anna", household.id)

    assert "Pasta" not in {item.name for item in created}
    assert len(created) == 7


def test_task_completion_updates_inventory(hub, household) -> None:
    sponge = hub.inventory.create_item("anna", {
        "household_id": household.id,
        "name": "Sponge",
        "category": "cleaning",
        "quantity": 2,
    })
    task = hub.tasks.create_task("anna", {
        "household_id": household.id,
        "title": "Clean the sink",
        "room": "bathroom",
        "frequency": "daily",
        "start_date": date(2025, 1, 1),
        "required_products": [sponge.id],
    })

    hub.tasks.complete_task(task.id, "anna", now=datetime(2025, 1, 9, 8))

    [stored] = hub.inventory.list_items(InventoryFilters(household_id=household.id))
    assert stored.quantity == 1
    assert stored.last_used == datetime(2025, 1, 9, 8)


def test_shopping_list_flow(hub, household) -> None:
    milk = hub.shopping.add_item(household.id, "  Milk ", "anna")
    hub.shopping.add_item(household.id, "Bread", "marco")
    assert milk.name == "Milk"

    toggled = hub.shopping.toggle_item(household.id, milk.id, "marco", now=datetime(2025, 1, 2))
    assert toggled.checked is True
    assert toggled.checked_by == "marco"
    untoggled = hub.shopping.toggle_item(household.id, milk.id, "marco")
    assert untoggled.checked is False
    assert untoggled.checked_at is None

    hub.shopping.toggle_item(household.id, milk.id, "anna")
    assert hub.shopping.clear_checked(household.id) == 1
    assert [i.name for i in hub.shopping.get_list(household.id).items] == ["Bread"]

    with pytest.raises(ValidationError):
        hub.shopping.add_item(household.id, "   ", "anna")
    with pytest.raises(NotFoundError):
        hub.shopping.toggle_item(household.id, 999, "anna")


def test_purchase_suggestions_from_grocery_expenses(hub, household) -> None:
    for description in ("Milk", "milk and bread", "Big monthly supermarket run with coffee"):
        hub.expenses.create_expense("anna", {
            "household_id": household.id,
            "amount": 5,
            "category": "groceries",
            "description": description,
            "date": date(2025, 1, 3),
        })

    suggestions = hub.shopping.purchase_suggestions(household.id)
    frequent = dict(hub.shopping.frequent_items(household.id))

    assert {"Milk", "Bread", "Coffee", "Milk and bread"} <= set(suggestions)
    assert frequent["Milk"] == 2


def test_plants_watering_cycle(hub, household) -> None:
    now = datetime(2025, 3, 1, 9)
    fern = hub.plants.create_plant("anna", {
        "household_id": household.id,
        "name": "Fern",
        "location": "Bathroom window",
        "watering_frequency": 3,
    }, now=now)

    assert fern.next_watering == now + timedelta(days=3)
    assert hub.plants.needing_water(household.id, now=now + timedelta(days=2)) == []
    assert [p.id for p in hub.plants.needing_water(household.id, now=now + timedelta(days=3))] == [fern.id]

    watered = hub.plants.water(fern.id, now=now + timedelta(days=4))
    assert watered.last_watered == now + timedelta(days=4)
    assert watered.next_watering == now + timedelta(days=7)

    with pytest.raises(ValidationError):
        hub.plants.create_plant("anna", {"household_id": household.id, "name": "Cactus",
                                         "watering_frequency": 0})


def test_vendor_maintenance(hub, household) -> None:
    vendor = hub.vendors.create_vendor("anna", {
        "household_id": household.id,
        "name": "Boiler Co",
        "type": "maintenance",
        "maintenance_schedule": [
            MaintenanceItem(type="Boiler check", frequency=365, next_service=date(2025, 1, 20)),
            MaintenanceItem(type="Filter", frequency=90, next_service=date(2025, 1, 10)),
        ],
    })

    upcoming = hub.vendors.upcoming_maintenance(household.id, today=date(2025, 1, 5))
    assert [item.type for _, item in upcoming] == ["Filter", "Boiler check"]

    updated = hub.vendors.mark_maintenance_done(vendor.id, "Filter", today=date(2025, 1, 10))
    filter_item = next(i for i in updated.maintenance_schedule if i.type == "Filter")
    assert filter_item.last_service == date(2025, 1, 10)
    assert filter_item.next_service == date(2025, 4, 10)

    with pytest.raises(NotFoundError):
        hub.vendors.mark_maintenance_done(vendor.id, "Chimney")


def test_search_across_collections(hub, household) -> None:
    hub.tasks.create_task("anna", {"household_id": household.id, "title": "Clean the oven",
                                   "room": "kitchen"})
    hub.inventory.create_item("anna", {"household_id": household.id, "name": "Oven cleaner",
                                       "category": "cleaning"})
    hub.shopping.add_item(household.id, "oven gloves", "anna")
    hub.vendors.create_vendor("anna", {"household_id": household.id, "name": "Oven",
                                       "type": "service"})

    results = hub.search.search_all(household.id, "  OVEN ")

    assert results[0].title == "Oven"
    assert results[0].type == SearchResultType.VENDOR
    assert {r.type for r in results} == {
        SearchResultType.VENDOR,
        SearchResultType.TASK,
        SearchResultType.INVENTORY,
        SearchResultType.SHOPPING,
    }
    assert hub.search.search_all(household.id, "   ") == []


def test_badges_are_announced_once(hub, household) -> None:
    hub.expenses.create_expense("anna", {"household_id": household.id, "amount": 3,
                                         "category": "extra", "date": date(2025, 1, 6)})
    hub.expenses.create_expense("anna", {"household_id": household.id, "amount": 3,
                                         "category": "extra", "date": date(2025, 1, 7)})
    task = hub.tasks.create_task("anna", {"household_id": household.id, "title": "Bins"})
    hub.tasks.complete_task(task.id, "anna", now=datetime(2025, 1, 8, 20))

    first = hub.badges.new_badges(household.id, "anna", today=date(2025, 1, 8))
    second = hub.badges.new_badges(household.id, "anna", today=date(2025, 1, 8))

    assert {badge.id for badge in first} == {"first-expense", "house-harmony"}
    assert second == []


def test_has_streak() -> None:
    days = {date(2025, 1, 1), date(2025, 1, 2), date(2025, 1, 4)}
    assert not has_streak(days, 3)
    assert has_streak(days | {date(2025, 1, 3)}, 3)
