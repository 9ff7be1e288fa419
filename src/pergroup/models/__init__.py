"""Record models for fruit data."""

from pergroup.models.fruit import Fruit

__all__ = ["Fruit"]
