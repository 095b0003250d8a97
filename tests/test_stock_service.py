"""
Tests for Stock Control Services
Items, categories and the stock movement ledger
"""

import pytest
from datetime import datetime, timedelta
from sqlalchemy.orm import Session

from stockroom.core.exceptions import (
    CategoryInUseError,
    InsufficientStockError,
    NotFoundError,
    ValidationError,
)
from stockroom.models.auth import User
from stockroom.models.inventory import Item, StockMovement, reorder_suggestion
from stockroom.services.category_service import CategoryService
from stockroom.services.item_service import ItemService
from stockroom.services.stock_movements import StockMovementsService, parse_date_bound

MISSING_ID = "0" * 24


class TestCategoryService:

    def test_categories_sorted_by_name(self, db_session: Session):
        service = CategoryService(db_session)
        for name in ("Produce", "Beverages", "Meat"):
            service.create_category({"name": name})

        assert [c.name for c in service.get_categories()] == ["Beverages", "Meat", "Produce"]

    def test_update_category(self, db_session: Session, sample_category):
        service = CategoryService(db_session)

        updated = service.update_category(sample_category.id, {"description": "Fridge"})

        assert updated.name == "Dairy"
        assert updated.description == "Fridge"

    def test_delete_unused_category(self, db_session: Session, sample_category):
        service = CategoryService(db_session)

        service.delete_category(sample_category.id)

        with pytest.raises(NotFoundError):
            service.get_category(sample_category.id)

    def test_delete_category_in_use(self, db_session: Session, sample_item):
        service = CategoryService(db_session)

        with pytest.raises(CategoryInUseError, match="Cannot delete category that has items"):
            service.delete_category(sample_item["category_id"])

        assert service.get_category(sample_item["category_id"]) is not None

    def test_ensure_category_is_idempotent(self, db_session: Session):
        service = CategoryService(db_session)

        first = service.ensure_category("Dry goods")
        second = service.ensure_category("Dry goods")

        assert first.id == second.id
        assert len(service.get_categories()) == 1


class TestItemService:

    def test_create_item(self, db_session: Session, sample_item_data):
        item = ItemService(db_session).create_item(sample_item_data)

        assert len(item["id"]) == 24
        assert item["category"]["name"] == "Dairy"
        assert item["quantity"] == 10
        assert item["low_stock"] is False

    def test_create_item_unknown_category(self, db_session: Session, sample_item_data):
        sample_item_data["category_id"] = MISSING_ID

        with pytest.raises(NotFoundError, match="Category not found"):
            ItemService(db_session).create_item(sample_item_data)

    def test_low_stock_filter(self, db_session: Session, sample_item_data):
        service = ItemService(db_session)
        service.create_item(sample_item_data)
        service.create_item({**sample_item_data, "name": "Butter", "quantity": 5, "min_quantity": 5})
        service.create_item({**sample_item_data, "name": "Cream", "quantity": 1, "min_quantity": 2})

        low = service.list_items(low_stock=True)

        assert [i["name"] for i in low] == ["Butter", "Cream"]
        assert all(i["low_stock"] for i in low)

    def test_search_is_case_insensitive_substring(self, db_session: Session, sample_item_data):
        service = ItemService(db_session)
        service.create_item({**sample_item_data, "name": "Whole Milk"})
        service.create_item({**sample_item_data, "name": "Oat milk"})
        service.create_item({**sample_item_data, "name": "Cheddar"})

        assert [i["name"] for i in service.list_items(search="MILK")] == ["Oat milk", "Whole Milk"]

    def test_search_treats_wildcards_literally(self, db_session: Session, sample_item_data):
        service = ItemService(db_session)
        service.create_item({**sample_item_data, "name": "Flour 100%"})
        service.create_item({**sample_item_data, "name": "Flour 1000g"})

        assert [i["name"] for i in service.list_items(search="0%")] == ["Flour 100%"]

    def test_category_filter(self, db_session: Session, sample_item_data):
        other = CategoryService(db_session).create_category({"name": "Produce"})
        service = ItemService(db_session)
        service.create_item(sample_item_data)
        service.create_item({**sample_item_data, "name": "Apples", "category_id": other.id})

        assert [i["name"] for i in service.list_items(category_id=other.id)] == ["Apples"]

    def test_update_item(self, db_session: Session, sample_item):
        service = ItemService(db_session)

        updated = service.update_item(sample_item["id"], {"supplier": "Other Farm", "min_quantity": 12})

        assert updated["supplier"] == "Other Farm"
        assert updated["low_stock"] is True
        assert updated["updated_at"] >= sample_item["updated_at"]

    def test_delete_item_keeps_ledger(self, db_session: Session, sample_item, test_user: User):
        StockMovementsService(db_session, test_user).receive(sample_item["id"], 2)

        ItemService(db_session).delete_item(sample_item["id"])

        movements = StockMovementsService(db_session).get_movements(item_id=sample_item["id"])
        assert len(movements) == 1
        assert movements[0]["item"] is None

    def test_reorder_list(self, db_session: Session, sample_item_data):
        service = ItemService(db_session)
        service.create_item(sample_item_data)
        service.create_item({**sample_item_data, "name": "Butter", "quantity": 4, "min_quantity": 5})
        service.create_item({**sample_item_data, "name": "Cream", "quantity": 0, "min_quantity": 3})

        rows = service.get_reorder_list()

        assert {r["name"]: r["suggested_quantity"] for r in rows} == {"Butter": 2, "Cream": 4}


class TestReorderSuggestion:

    @pytest.mark.parametrize("quantity,min_quantity,expected", [
        (4, 5, 2),
        (5, 5, 1),
        (0, 3, 4),
        (10, 5, 0),
        (2.5, 3, 1.5),
    ])
    def test_suggestion(self, quantity, min_quantity, expected):
        assert reorder_suggestion(quantity, min_quantity) == expected


class TestStockMovementsService:
    """The quantity on hand always moves together with the ledger"""

    def test_receive_increases_quantity(self, db_session: Session, sample_item, test_user: User):
        service = StockMovementsService(db_session, test_user)

        movement = service.receive(sample_item["id"], 5, "Delivery")

        item = db_session.get(Item, sample_item["id"])
        assert item.quantity == 15
        assert movement["type"] == "in"
        assert movement["quantity"] == 5
        assert movement["reason"] == "Delivery"
        assert movement["created_by"] == test_user.id
        assert movement["item"] == {"id": item.id, "name": "Milk", "unit": "L"}

    def test_issue_decreases_quantity(self, db_session: Session, sample_item, test_user: User):
        StockMovementsService(db_session, test_user).issue(sample_item["id"], 3)

        assert db_session.get(Item, sample_item["id"]).quantity == 7

    def test_issue_entire_stock(self, db_session: Session, sample_item, test_user: User):
        StockMovementsService(db_session, test_user).issue(sample_item["id"], 10)

        assert db_session.get(Item, sample_item["id"]).quantity == 0

    def test_issue_more_than_on_hand(self, db_session: Session, sample_item, test_user: User):
        service = StockMovementsService(db_session, test_user)

        with pytest.raises(InsufficientStockError) as exc_info:
            service.issue(sample_item["id"], 11)

        assert exc_info.value.message == "Insufficient stock. Available: 10, Requested: 11"
        assert db_session.get(Item, sample_item["id"]).quantity == 10
        assert db_session.query(StockMovement).count() == 0

    def test_guarded_update_rejects_stale_read(self, db_session: Session, sample_item, test_user: User):
        """The conditional update re-checks stock even if the loaded row is stale"""
        service = StockMovementsService(db_session, test_user)
        item = db_session.get(Item, sample_item["id"])

        # Drain the row behind the session's back
        db_session.query(Item).filter(Item.id == item.id).update(
            {Item.quantity: 1}, synchronize_session=False
        )
        db_session.commit()
        item.quantity = 10  # stale in-memory value passes the fast check

        with pytest.raises(InsufficientStockError) as exc_info:
            service.issue(item.id, 5)

        assert exc_info.value.available == 1
        assert db_session.query(StockMovement).count() == 0

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_quantity_must_be_positive(self, db_session: Session, sample_item, quantity):
        with pytest.raises(ValidationError):
            StockMovementsService(db_session).receive(sample_item["id"], quantity)

    def test_invalid_movement_type(self, db_session: Session, sample_item):
        with pytest.raises(ValidationError):
            StockMovementsService(db_session).post_movement(sample_item["id"], "adjust", 1)

    def test_unknown_item(self, db_session: Session):
        with pytest.raises(NotFoundError, match="Item not found"):
            StockMovementsService(db_session).receive(MISSING_ID, 1)

    def test_ledger_balance_matches_quantity(self, db_session: Session, sample_item_data, test_user: User):
        """Starting from zero, on-hand quantity equals the net of the ledger"""
        item = ItemService(db_session).create_item({**sample_item_data, "quantity": 0})
        service = StockMovementsService(db_session, test_user)

        service.receive(item["id"], 8)
        service.issue(item["id"], 3)
        service.receive(item["id"], 2.5)
        with pytest.raises(InsufficientStockError):
            service.issue(item["id"], 100)
        service.issue(item["id"], 7.5)

        on_hand = db_session.get(Item, item["id"]).quantity
        assert on_hand == 0
        assert service.get_item_balance(item["id"]) == on_hand

    def test_movements_newest_first_with_limit(self, db_session: Session, sample_item, test_user: User):
        service = StockMovementsService(db_session, test_user)
        for qty in (1, 2, 3):
            service.receive(sample_item["id"], qty)

        movements = service.get_movements(limit=2)

        assert [m["quantity"] for m in movements] == [3, 2]

    def test_movements_date_range(self, db_session: Session, sample_item, test_user: User):
        service = StockMovementsService(db_session, test_user)
        service.receive(sample_item["id"], 1)
        old = db_session.query(StockMovement).one()
        old.created_at = datetime(2024, 1, 15, 12, 0, 0)
        db_session.commit()
        service.receive(sample_item["id"], 2)

        january = service.get_movements(date_from="2024-01-01", date_to="2024-01-31T23:59:59Z")
        since_february = service.get_movements(date_from="2024-02-01")

        assert [m["quantity"] for m in january] == [1]
        assert [m["quantity"] for m in since_february] == [2]

    def test_invalid_date_bound_is_ignored(self, db_session: Session, sample_item, test_user: User):
        service = StockMovementsService(db_session, test_user)
        service.receive(sample_item["id"], 1)

        assert len(service.get_movements(date_from="not-a-date")) == 1


class TestParseDateBound:

    def test_utc_suffix(self):
        assert parse_date_bound("2024-03-01T10:00:00Z") == datetime(2024, 3, 1, 10, 0, 0)

    def test_offset_converted_to_utc(self):
        assert parse_date_bound("2024-03-01T10:00:00+02:00") == datetime(2024, 3, 1, 8, 0, 0)

    def test_date_only(self):
        assert parse_date_bound("2024-03-01") == datetime(2024, 3, 1)

    @pytest.mark.parametrize("value", [None, "", "  ", "yesterday"])
    def test_unusable_values(self, value):
        assert parse_date_bound(value) is None

    def test_bound_is_naive(self):
        assert parse_date_bound((datetime.now() - timedelta(days=1)).isoformat()).tzinfo is None
