# -*- coding: utf-8 -*-
"""
show

Field descriptions and the mapper used to declare show views.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, Protocol

from pydantic import BaseModel, Field as PField

from .exceptions import ConfigurationError


class FieldDescription(BaseModel):
    """Describe one field displayed by an admin view."""

    name: str
    type: str | None = None
    options: Dict[str, Any] = PField(default_factory=dict)

    @property
    def label(self) -> str:
        label = self.options.get("label")
        if label:
            return str(label)
        return self.name.rsplit(".", 1)[-1].replace("_", " ").capitalize()

    def merge_options(self, options: Dict[str, Any] | None) -> None:
        """Overlay ``options`` on top of the current options."""
        if options:
            self.options = {**self.options, **options}

    def get_value(self, obj: Any) -> Any:
        """Resolve the (possibly dotted) field path on ``obj``."""
        value = obj
        for part in self.name.split("."):
            if value is None:
                return None
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = getattr(value, part, None)
        return value


class FieldDescriptionCollection:
    """Ordered collection of field descriptions keyed by name."""

    def __init__(self) -> None:
        self._elements: Dict[str, FieldDescription] = {}

    def add(self, description: FieldDescription) -> None:
        self._elements[description.name] = description

    def get(self, name: str) -> FieldDescription:
        try:
            return self._elements[name]
        except KeyError:
            raise ConfigurationError(f"Element `{name}` does not exist") from None

    def has(self, name: str) -> bool:
        return name in self._elements

    def remove(self, name: str) -> None:
        self._elements.pop(name, None)

    def names(self) -> list[str]:
        return list(self._elements)

    def __iter__(self) -> Iterator[FieldDescription]:
        return iter(list(self._elements.values()))

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, name: object) -> bool:
        return name in self._elements


class ShowBuilder(Protocol):
    """Turn a field description into a show element."""

    def add_field(
        self,
        collection: FieldDescriptionCollection,
        type: str | None,
        description: FieldDescription,
        admin: Any,
    ) -> None:  # pragma: no cover - structural
        """Add ``description`` to ``collection``."""


class SimpleShowBuilder:
    """Default builder: fix the field type and register it on the admin."""

    default_type = "string"

    def add_field(
        self,
        collection: FieldDescriptionCollection,
        type: str | None,
        description: FieldDescription,
        admin: Any,
    ) -> None:
        if type is not None:
            description.type = type
        elif description.type is None:
            description.type = self.default_type
        description.options.setdefault("label", description.label)
        collection.add(description)
        admin.add_show_field_description(description.name, description)


class ShowMapper:
    """Declare the fields and groups of a show view.

    Fields added outside of an explicit group land in a group named after the
    admin label.
    """

    def __init__(
        self,
        show_builder: ShowBuilder,
        collection: FieldDescriptionCollection,
        admin: Any,
    ) -> None:
        self.show_builder = show_builder
        self.list = collection
        self.admin = admin
        self.current_group: str | None = None

    def add(
        self,
        name: str | FieldDescription,
        type: str | None = None,
        options: Dict[str, Any] | None = None,
    ) -> "ShowMapper":
        if not self.current_group:
            self.with_(self.admin.get_label())

        if isinstance(name, FieldDescription):
            description = name
            description.merge_options(options)
        elif isinstance(name, str) and not self.admin.has_show_field_description(name):
            description = self.admin.get_model_manager().get_new_field_description_instance(
                self.admin.get_class(),
                name,
                dict(options or {}),
            )
        else:
            raise ConfigurationError("invalid state")

        groups = self.admin.get_show_groups()
        groups[self.current_group]["fields"][description.name] = description.name
        self.admin.set_show_groups(groups)

        self.show_builder.add_field(self.list, type, description, self.admin)
        return self

    def get(self, name: str) -> FieldDescription:
        return self.list.get(name)

    def has(self, key: str) -> bool:
        return self.list.has(key)

    def remove(self, key: str) -> None:
        self.admin.remove_show_field_description(key)
        self.list.remove(key)

    def with_(self, name: str, options: Dict[str, Any] | None = None) -> "ShowMapper":
        """Open group ``name``, creating it on first use."""
        groups = self.admin.get_show_groups()
        if name not in groups:
            groups[name] = {"collapsed": False, "fields": {}, **(options or {})}
        self.admin.set_show_groups(groups)
        self.current_group = name
        return self

    def end(self) -> "ShowMapper":
        self.current_group = None
        return self


__all__ = [
    "FieldDescription",
    "FieldDescriptionCollection",
    "ShowBuilder",
    "SimpleShowBuilder",
    "ShowMapper",
]


# The End
