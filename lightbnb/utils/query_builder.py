"""
Listing query builder.
Turns a PropertyFilter and a result limit into SQL text plus bound parameters
without touching the store.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Tuple
from lightbnb.schemas.property import PropertyFilter

LISTING_SELECT = (
    "SELECT properties.*, avg(property_reviews.rating) AS average_rating\n"
    "FROM properties\n"
    "JOIN property_reviews ON properties.id = property_reviews.property_id"
)
LISTING_GROUP_BY = "GROUP BY properties.id"
LISTING_ORDER_BY = "ORDER BY properties.cost_per_night"
LIMIT_PARAM = "limit"


def to_minor_units(amount: Any) -> int:
    """
    Convert a decimal price in major units into integer minor units.

    Args:
        amount: Price such as 100.00 or "19.99"

    Returns:
        Price multiplied by 100, rounded half up to a whole number
    """
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    return int((value * 100).to_integral_value(rounding=ROUND_HALF_UP))


def placeholder(index: int) -> str:
    """Named placeholder for the parameter at 1-based ``index``."""
    return f":p{index}"


@dataclass(frozen=True)
class ListingQuery:
    """Rendered listing statement. ``parameters[i]`` is bound to ``:p{i+1}``."""

    text: str
    parameters: Tuple[Any, ...]
    limit: int

    def bind_params(self) -> Dict[str, Any]:
        params = {placeholder(i)[1:]: value for i, value in enumerate(self.parameters, start=1)}
        params[LIMIT_PARAM] = self.limit
        return params


@dataclass
class ListingQueryBuilder:
    """
    Ordered pre-aggregation predicates plus an optional post-aggregation one.
    Predicates are templates with a single ``{}`` slot for their placeholder.
    """

    where: List[Tuple[str, Any]] = field(default_factory=list)
    having: Optional[Tuple[str, Any]] = None

    def add_where(self, predicate: str, value: Any) -> "ListingQueryBuilder":
        self.where.append((predicate, value))
        return self

    def set_having(self, predicate: str, value: Any) -> "ListingQueryBuilder":
        self.having = (predicate, value)
        return self

    def render(self, limit: int) -> ListingQuery:
        """
        Render the statement.

        The first WHERE predicate opens the clause and each later one is
        joined with AND. GROUP BY is always emitted; the HAVING predicate
        follows it and never shares an expression with the WHERE clause.

        Args:
            limit: Maximum number of rows to return

        Returns:
            ListingQuery with text, parameters and limit

        Raises:
            ValueError: If limit is negative
        """
        limit = int(limit)
        if limit < 0:
            raise ValueError("limit cannot be negative")

        lines = [LISTING_SELECT]
        parameters: List[Any] = []

        for predicate, value in self.where:
            parameters.append(value)
            keyword = "WHERE" if len(parameters) == 1 else "AND"
            lines.append(f"{keyword} {predicate.format(placeholder(len(parameters)))}")

        lines.append(LISTING_GROUP_BY)

        if self.having is not None:
            predicate, value = self.having
            parameters.append(value)
            lines.append(f"HAVING {predicate.format(placeholder(len(parameters)))}")

        lines.append(LISTING_ORDER_BY)
        lines.append(f"LIMIT :{LIMIT_PARAM}")

        return ListingQuery(text="\n".join(lines), parameters=tuple(parameters), limit=limit)


def build_listing_query(filters: PropertyFilter, limit: int) -> ListingQuery:
    """
    Build the property listing statement for the given filters.

    Args:
        filters: Validated listing filters
        limit: Maximum number of rows to return

    Returns:
        Rendered ListingQuery
    """
    builder = ListingQueryBuilder()

    if filters.city is not None:
        builder.add_where("properties.city LIKE {}", f"%{filters.city}%")

    if filters.owner_id is not None:
        builder.add_where("properties.owner_id = {}", int(filters.owner_id))

    if filters.minimum_price_per_night is not None:
        builder.add_where("properties.cost_per_night >= {}", to_minor_units(filters.minimum_price_per_night))

    if filters.maximum_price_per_night is not None:
        builder.add_where("properties.cost_per_night <= {}", to_minor_units(filters.maximum_price_per_night))

    if filters.minimum_rating is not None:
        builder.set_having("avg(property_reviews.rating) >= {}", float(filters.minimum_rating))

    return builder.render(limit)
