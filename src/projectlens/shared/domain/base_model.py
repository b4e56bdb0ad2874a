"""
Base domain model with camelCase JSON compatibility.

Provides automatic camelCase <-> snake_case conversion for consumers of the
analysis profiles (document generators, IDE writers).
All domain models should inherit from BaseDomainModel.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Annotated, Any, Dict, Type, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, WrapSerializer

T = TypeVar("T", bound="BaseDomainModel")
K = TypeVar("K")
V = TypeVar("V")


def to_camel_case(snake_str: str) -> str:
    """
    Convert snake_case to camelCase.

    Examples:
        >>> to_camel_case("relative_path")
        'relativePath'
        >>> to_camel_case("content_sample")
        'contentSample'
    """
    components = snake_str.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


def _freeze_mapping(value: Mapping[Any, Any]) -> Mapping[Any, Any]:
    return MappingProxyType(dict(value))


# Read-only mapping field: validated into a MappingProxyType, dumped as a dict.
# Declare with Field(default_factory=dict, validate_default=True).
FrozenMapping = Annotated[
    Mapping[K, V],
    AfterValidator(_freeze_mapping),
    WrapSerializer(lambda value, handler: handler(dict(value))),
]


class BaseDomainModel(BaseModel):
    """
    Base class for all domain models.

    Models are frozen: once a profile is returned, callers may cache it but
    never mutate it in place.

    - to_json() serializes to camelCase
    - from_json() deserializes from camelCase JSON
    - Enum values are serialized as their values
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel_case,
        populate_by_name=True,
        use_enum_values=False,
    )

    def to_json(self) -> Dict[str, Any]:
        """
        Serialize to JSON-compatible dict (camelCase).

        Returns:
            Dictionary with camelCase keys and enum values as plain values
        """
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_json(cls: Type[T], data: Dict[str, Any]) -> T:
        """
        Deserialize from camelCase JSON.

        Args:
            data: Dictionary with camelCase keys

        Returns:
            Instance of the domain model

        Raises:
            pydantic.ValidationError: If required fields are missing or invalid
        """
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation for logging."""
        field_strs = [f"{name}={getattr(self, name)!r}" for name in type(self).model_fields]
        return f"{self.__class__.__name__}({', '.join(field_strs)})"
