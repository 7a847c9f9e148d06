"""DynamoDB repository classes for restaurants, branches and menu items.

The repositories expose the three read shapes the menu pipeline relies on:
list everything (newest first), filter by field equality and filter one field
by a case-insensitive pattern. Reads return None when the store itself fails,
so callers can tell "nothing matched" ([]) apart from "could not ask" (None).
Writes return False on failure rather than raising.
"""

import logging
import re
from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Generic, TypeVar

from boto3.dynamodb.conditions import Attr
from botocore.exceptions import BotoCoreError, ClientError
from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource, Table
from pydantic import ValidationError

from menu_master.models.menu_models import Branch, MenuItem, Restaurant
from menu_master.utils.normalize import normalize_to_string

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", Restaurant, Branch, MenuItem)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)

# Update failures that mean "no row under this key type", so the next key form is tried
_KEY_MISS_CODES = ("ConditionalCheckFailedException", "ValidationException")


def compile_name_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a SQL ILIKE style pattern into a case-insensitive regex.

    '%' matches any run of characters and '_' matches a single character;
    everything else is literal.

    Args:
        pattern: Pattern such as 'burger house' or 'burger%'

    Returns:
        Compiled regex to be used with fullmatch
    """
    parts = []
    for char in pattern:
        if char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


def key_forms(value: Any) -> list[Any]:
    """Every stored form an identifier may take.

    Ids come back from the models as strings, but older rows hold them as
    numbers and DynamoDB never treats "7" and 7 as equal.

    Args:
        value: Identifier as a string, number or Decimal

    Returns:
        list: The string form, followed by the numeric form when there is one
    """
    text = normalize_to_string(value)
    forms: list[Any] = [text]
    if text != text.strip():
        return forms

    try:
        number = Decimal(text)
    except InvalidOperation:
        return forms

    if number.is_finite():
        forms.append(number)
    return forms


def equality_condition(field: str, value: Any) -> Any:
    """Build a filter matching the field against any stored form of the value."""
    condition = None
    for form in key_forms(value):
        clause = Attr(field).eq(form)
        condition = clause if condition is None else condition | clause
    return condition


def _sort_key(model: Any) -> datetime:
    created_at = model.created_at
    if created_at is None:
        return _OLDEST
    if created_at.tzinfo is None:
        return created_at.replace(tzinfo=timezone.utc)
    return created_at


class MenuTableRepository(Generic[ModelT]):
    """Read access shared by the menu tables.

    Subclasses set the model parser and an entity label for log messages.
    """

    entity_name = "row"

    def __init__(
        self,
        dynamodb_resource: DynamoDBServiceResource,
        table_name: str,
        parser: Callable[[dict[str, Any]], ModelT],
    ) -> None:
        """Initialize repository.

        Args:
            dynamodb_resource: Boto3 DynamoDB resource
            table_name: Name of the DynamoDB table
            parser: Builds a model from a raw DynamoDB item
        """
        self.dynamodb = dynamodb_resource
        self.table_name = table_name
        self.table: Table = dynamodb_resource.Table(table_name)
        self._parse = parser

    def _scan(self, filter_expression: Any = None) -> list[dict[str, Any]]:
        """Scan the table, following pagination to the end."""
        kwargs: dict[str, Any] = {}
        if filter_expression is not None:
            kwargs["FilterExpression"] = filter_expression

        rows: list[dict[str, Any]] = []
        while True:
            response = self.table.scan(**kwargs)
            rows.extend(response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return rows
            kwargs["ExclusiveStartKey"] = last_key

    def _to_models(self, rows: list[dict[str, Any]]) -> list[ModelT]:
        """Parse rows newest first, skipping rows that fail validation."""
        models: list[ModelT] = []
        for row in rows:
            try:
                models.append(self._parse(row))
            except ValidationError as e:
                logger.warning(
                    f"Skipping malformed {self.entity_name} {row.get('id')!r} "
                    f"in {self.table_name}: {e.error_count()} validation error(s)"
                )
        return sorted(models, key=_sort_key, reverse=True)

    def list_all(self) -> list[ModelT] | None:
        """List every row, most recently created first.

        Returns:
            list: Parsed models (empty list if none), or None on store failure
        """
        try:
            return self._to_models(self._scan())

        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to list {self.entity_name}s from {self.table_name}: {e}")
            return None

    def find_by(self, **criteria: Any) -> list[ModelT] | None:
        """List rows whose fields equal all the given values.

        Values are compared as opaque strings, so "7" also finds a row that
        stores the number 7.

        Args:
            **criteria: Field name to required value

        Returns:
            list: Matching models, most recent first, or None on store failure
        """
        if not criteria:
            return self.list_all()

        condition = None
        for field, value in criteria.items():
            clause = equality_condition(field, value)
            condition = clause if condition is None else condition & clause

        try:
            return self._to_models(self._scan(condition))

        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to query {self.entity_name}s by {sorted(criteria)}: {e}")
            return None

    def find_by_pattern(self, field: str, pattern: str, **criteria: Any) -> list[ModelT] | None:
        """List rows whose field matches a case-insensitive ILIKE pattern.

        DynamoDB has no case-insensitive comparison, so equality criteria are
        pushed to the scan and the pattern is applied to the parsed rows.

        Args:
            field: Model field to match, e.g. 'name'
            pattern: ILIKE pattern; without wildcards this is an exact match
            **criteria: Additional equality filters

        Returns:
            list: Matching models, most recent first, or None on store failure
        """
        candidates = self.find_by(**criteria)
        if candidates is None:
            return None

        regex = compile_name_pattern(pattern)
        return [
            model
            for model in candidates
            if regex.fullmatch(str(getattr(model, field, "") or ""))
        ]


class RestaurantRepository(MenuTableRepository[Restaurant]):
    """Repository for the restaurants table."""

    entity_name = "restaurant"

    def __init__(self, dynamodb_resource: DynamoDBServiceResource, table_name: str) -> None:
        super().__init__(dynamodb_resource, table_name, Restaurant.from_dynamodb_item)


class BranchRepository(MenuTableRepository[Branch]):
    """Repository for the branches table."""

    entity_name = "branch"

    def __init__(self, dynamodb_resource: DynamoDBServiceResource, table_name: str) -> None:
        super().__init__(dynamodb_resource, table_name, Branch.from_dynamodb_item)

    def list_for_restaurant(self, restaurant_id: str) -> list[Branch] | None:
        """List the branches owned by a restaurant, most recent first."""
        return self.find_by(restaurant_id=restaurant_id)

    def update_template(self, branch_id: str, template_id: str) -> bool:
        """Persist the active template of an existing branch.

        Last write wins; writing the same template twice leaves the same row.
        A numeric-looking id is tried as a string key first, then as a number.

        Args:
            branch_id: Branch identifier
            template_id: Template identifier to store

        Returns:
            bool: True if update succeeded, False otherwise (including unknown branch)
        """
        for key in key_forms(branch_id):
            try:
                self.table.update_item(
                    Key={"id": key},
                    UpdateExpression="SET active_template = :template",
                    ConditionExpression="attribute_exists(id)",
                    ExpressionAttributeValues={":template": template_id},
                )
                return True

            except ClientError as e:
                if e.response.get("Error", {}).get("Code") in _KEY_MISS_CODES:
                    continue
                logger.error(f"Failed to update template for branch {branch_id}: {e}")
                return False

            except BotoCoreError as e:
                logger.error(f"Failed to update template for branch {branch_id}: {e}")
                return False

        logger.warning(f"No branch stored under id {branch_id!r}")
        return False


class MenuItemRepository(MenuTableRepository[MenuItem]):
    """Repository for the menu items table."""

    entity_name = "menu item"

    def __init__(self, dynamodb_resource: DynamoDBServiceResource, table_name: str) -> None:
        super().__init__(dynamodb_resource, table_name, MenuItem.from_dynamodb_item)

    def list_for_branch(self, branch_id: str) -> list[MenuItem] | None:
        """List the menu items of a branch, most recent first."""
        return self.find_by(branch_id=branch_id)

    def save_item(self, item: MenuItem, branch: Branch) -> bool:
        """Save a menu item after checking it is consistent with its branch.

        The item's denormalized restaurant_id must match the branch's restaurant.

        Args:
            item: MenuItem to save
            branch: Branch the item belongs to

        Returns:
            bool: True if save succeeded, False if inconsistent or the write failed
        """
        if item.branch_id != branch.id:
            logger.error(f"Menu item {item.id} references branch {item.branch_id}, not {branch.id}")
            return False

        if item.restaurant_id != branch.restaurant_id:
            logger.error(
                f"Menu item {item.id} restaurant {item.restaurant_id} does not match "
                f"branch {branch.id} restaurant {branch.restaurant_id}"
            )
            return False

        try:
            self.table.put_item(Item=item.to_dynamodb_item())
            return True

        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to save menu item {item.id}: {e}")
            return False
