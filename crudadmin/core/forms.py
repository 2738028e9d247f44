# -*- coding: utf-8 -*-
"""
forms

Form binding backed by pydantic schemas.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import types
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Union, get_args, get_origin

from pydantic import BaseModel, ValidationError

from .exceptions import ValidationFailure
from .request import RequestContext


@dataclass
class FieldView:
    """Template-facing state of one form field."""

    name: str
    label: str
    value: Any = None
    required: bool = False
    errors: List[str] = field(default_factory=list)


@dataclass
class FormView:
    """Template-facing state of a whole form."""

    fields: List[FieldView]
    submitted: bool = False
    valid: bool = False
    errors: List[str] = field(default_factory=list)

    def __getitem__(self, name: str) -> FieldView:
        for item in self.fields:
            if item.name == name:
                return item
        raise KeyError(name)

    def __iter__(self):
        return iter(self.fields)


class SchemaForm:
    """Bind request data onto an object through a pydantic ``schema``.

    ``set_data`` reads the initial values from the object, ``bind`` merges the
    submitted values over them and validates. Boolean fields missing from a
    submission are read as ``False``, since browsers omit unchecked boxes.
    Valid data is written back on the object; invalid data stays on the form
    so the view can show it with its errors.
    """

    def __init__(self, schema: type[BaseModel], *, fields: Sequence[str] | None = None) -> None:
        self.schema = schema
        self.field_names: List[str] = list(fields or schema.model_fields)
        self.initial: Dict[str, Any] = {}
        self.data: Dict[str, Any] = {}
        self.cleaned: Dict[str, Any] | None = None
        self.failure: ValidationFailure | None = None
        self._object: Any = None
        self._submitted = False

    def set_data(self, obj: Any) -> None:
        self._object = obj
        self.initial = {name: self._read(obj, name) for name in self.field_names}
        self.data = dict(self.initial)

    def bind(self, request: RequestContext) -> None:
        self._submitted = True
        merged = {
            name: request.get(name) if name in request.params else self._absent_value(name)
            for name in self.field_names
        }
        self.data = merged
        try:
            validated = self.schema.model_validate(
                {name: value for name, value in merged.items() if value is not None}
            )
        except ValidationError as exc:
            self.failure = ValidationFailure.from_pydantic(exc)
            self.cleaned = None
            return

        self.failure = None
        self.cleaned = validated.model_dump(include=set(self.field_names))
        if self._object is not None:
            for name, value in self.cleaned.items():
                if isinstance(self._object, dict):
                    self._object[name] = value
                else:
                    setattr(self._object, name, value)

    def is_submitted(self) -> bool:
        return self._submitted

    def is_valid(self) -> bool:
        return self._submitted and self.failure is None

    def create_view(self) -> FormView:
        errors = self.failure.field_errors() if self.failure else {}
        model_fields = self.schema.model_fields
        views = []
        for name in self.field_names:
            info = model_fields.get(name)
            label = (info.title if info is not None and info.title else None) or name.replace(
                "_", " "
            ).capitalize()
            views.append(
                FieldView(
                    name=name,
                    label=label,
                    value=self.data.get(name),
                    required=bool(info is not None and info.is_required()),
                    errors=list(errors.get(name, [])),
                )
            )
        return FormView(
            fields=views,
            submitted=self._submitted,
            valid=self.is_valid(),
            errors=list(errors.get("__all__", [])),
        )

    def _absent_value(self, name: str) -> Any:
        field_info = self.schema.model_fields.get(name)
        if field_info is not None and _is_bool(field_info.annotation):
            return False
        return self.initial.get(name)

    @staticmethod
    def _read(obj: Any, name: str) -> Any:
        if isinstance(obj, dict):
            return obj.get(name)
        return getattr(obj, name, None)


def _is_bool(annotation: Any) -> bool:
    if annotation is bool:
        return True
    if get_origin(annotation) in (Union, types.UnionType):
        return bool in get_args(annotation)
    return False


__all__ = ["FieldView", "FormView", "SchemaForm"]


# The End
