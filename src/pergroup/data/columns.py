"""Column definitions for type-safe fruit queries."""

from enum import Enum


class FruitColumn(str, Enum):
    """
    Available columns in the fruits dataset.

    Examples
    --------
    >>> from pergroup.data.columns import FruitColumn
    >>> from pergroup.queries import QuerySpec
    >>>
    >>> spec = QuerySpec(
    ...     group_column=FruitColumn.TYPE,
    ...     value_column=FruitColumn.PRICE,
    ... )
    """

    TYPE = "type"  # Grouping key, low cardinality
    VARIETY = "variety"
    PRICE = "price"

    @classmethod
    def values(cls) -> list[str]:
        """
        Get all column names as strings.

        Returns
        -------
        list[str]
            List of all available column names.

        Examples
        --------
        >>> FruitColumn.values()
        ['type', 'variety', 'price']
        """
        return [col.value for col in cls]

    @classmethod
    def has_column(cls, column_name: str) -> bool:
        """Check if a column name exists in the enum."""
        return column_name in cls.values()
