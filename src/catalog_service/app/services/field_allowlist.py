from dataclasses import dataclass, field
from typing import Any, Mapping


class UnknownFieldError(ValueError):
    def __init__(self, entity: str, keys: list[str]):
        super().__init__(f"Unknown {entity} field(s): {', '.join(sorted(keys))}")
        self.entity = entity
        self.keys = keys


@dataclass(frozen=True)
class FieldAllowlist:
    """Explicit mapping from writable API field names to model attributes."""

    entity: str
    attributes: Mapping[str, str] = field(default_factory=dict)

    def to_attributes(self, values: Mapping[str, Any]) -> dict[str, Any]:
        unknown = [key for key in values if key not in self.attributes]
        if unknown:
            raise UnknownFieldError(self.entity, unknown)
        return {self.attributes[key]: value for key, value in values.items()}


ITEM_FIELDS = FieldAllowlist(
    entity="item",
    attributes={
        "item_name": "name",
        "item_description": "description",
        "item_sku": "sku",
        "item_price": "price",
    },
)
