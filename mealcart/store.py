"""Shopping list persistence keyed by meal plan id."""

import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Optional

from .models import MealcartError, ShoppingList

logger = logging.getLogger(__name__)

PLAN_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


class StoreError(MealcartError):
    """Raised when a shopping list can't be stored or read back."""


def validate_plan_id(plan_id) -> str:
    plan_id = str(plan_id).strip() if plan_id is not None else ""
    if not PLAN_ID_PATTERN.match(plan_id):
        raise StoreError(f"Invalid plan id: {plan_id!r}")
    return plan_id


class InMemoryPlanStore:
    """Keeps shopping lists in a dict; one list per plan."""

    def __init__(self):
        self.lists: dict[str, dict] = {}

    def save(self, plan_id, shopping_list: ShoppingList) -> None:
        # Stored as plain data so later edits to the list don't leak in
        self.lists[validate_plan_id(plan_id)] = shopping_list.to_dict()

    def get(self, plan_id) -> Optional[ShoppingList]:
        data = self.lists.get(validate_plan_id(plan_id))
        return ShoppingList.from_dict(data) if data is not None else None

    def delete(self, plan_id) -> bool:
        return self.lists.pop(validate_plan_id(plan_id), None) is not None


class JsonPlanStore:
    """Stores each plan's shopping list as a JSON file in a directory."""

    def __init__(self, base_path: Path):
        self.base_path = Path(base_path)

    def _path_for(self, plan_id) -> Path:
        return self.base_path / f"{validate_plan_id(plan_id)}.json"

    def save(self, plan_id, shopping_list: ShoppingList) -> None:
        """Write the list for a plan, replacing any earlier one."""
        path = self._path_for(plan_id)
        payload = {
            "weekly_plan_id": str(plan_id),
            "created_at": datetime.now().isoformat(timespec="seconds"),
            "items": shopping_list.to_dict(),
        }

        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
        except OSError as e:
            raise StoreError(f"Failed to save shopping list for plan {plan_id}: {e}") from e

        logger.debug("Saved shopping list for plan %s to %s", plan_id, path)

    def get(self, plan_id) -> Optional[ShoppingList]:
        path = self._path_for(plan_id)
        if not path.exists():
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                payload = json.load(f)
            return ShoppingList.from_dict(payload["items"])
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            raise StoreError(f"Failed to read shopping list for plan {plan_id}: {e}") from e

    def delete(self, plan_id) -> bool:
        path = self._path_for(plan_id)
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as e:
            raise StoreError(f"Failed to delete shopping list for plan {plan_id}: {e}") from e
        return True

    def list_plans(self) -> list[str]:
        if not self.base_path.exists():
            return []
        return sorted(p.stem for p in self.base_path.glob("*.json"))
