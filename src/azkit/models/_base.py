"""Base classes for wire models.

Every model mirrors one JSON schema of a service's API definition.  Fields
are optional at construction time, like the generated models they replace;
:meth:`RestModel.validate_required` is what enforces required-ness before a
model is sent as a request body.
"""

from __future__ import annotations

import json
from typing import Any, ClassVar, Self

from pydantic import AliasPath, BaseModel, ConfigDict, Field, GetCoreSchemaHandler
from pydantic.alias_generators import to_camel
from pydantic.fields import FieldInfo
from pydantic_core import core_schema, to_jsonable_python

_REQUIRED = "wireRequired"
_READ_ONLY = "wireReadOnly"
_PATH = "wirePath"


def wire_field(
    alias: str | None = None,
    *,
    required: bool = False,
    read_only: bool = False,
    default: Any = None,
    default_factory: Any = None,
) -> Any:
    """Declare a model field.

    *alias* is the wire name when it is not the camelCase of the Python
    name.  A dotted alias (``"properties.status"``) declares a field the
    service nests under an envelope object but which the model exposes flat.
    OData annotations such as ``"@odata.type"`` are names, not paths.
    """
    extra: dict[str, Any] = {_REQUIRED: required, _READ_ONLY: read_only}
    kwargs: dict[str, Any] = {"json_schema_extra": extra}
    if default_factory is not None:
        kwargs["default_factory"] = default_factory
    else:
        kwargs["default"] = default
    if alias and "." in alias and not alias.startswith("@"):
        path = alias.split(".")
        extra[_PATH] = path
        kwargs["validation_alias"] = AliasPath(*path)
        kwargs["serialization_alias"] = alias
    elif alias:
        kwargs["alias"] = alias
    return Field(**kwargs)


def _extra(field: FieldInfo) -> dict[str, Any]:
    extra = field.json_schema_extra
    return extra if isinstance(extra, dict) else {}


def _wire_value(value: Any) -> Any:
    if isinstance(value, str):
        return str(value)
    if isinstance(value, RestModel):
        return value.to_wire()
    if isinstance(value, (list, tuple)):
        return [_wire_value(v) for v in value]
    if isinstance(value, dict):
        return {k: _wire_value(v) for k, v in value.items()}
    return to_jsonable_python(value)


class RestModel(BaseModel):
    """A flat record mirroring one service JSON schema."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        validate_assignment=True,
        protected_namespaces=(),
    )

    @classmethod
    def from_wire(cls, data: dict | str | bytes) -> Self:
        """Build a model from a wire payload (JSON text or decoded dict)."""
        if isinstance(data, (str, bytes)):
            data = json.loads(data)
        return cls.model_validate(data)

    def to_wire(self) -> dict[str, Any]:
        """Serialise to the wire shape, omitting ``None`` and read-only fields."""
        out: dict[str, Any] = {}
        for name, field in type(self).model_fields.items():
            extra = _extra(field)
            if extra.get(_READ_ONLY):
                continue
            value = getattr(self, name)
            if value is None:
                continue
            path = extra.get(_PATH) or [field.serialization_alias or field.alias or name]
            target = out
            for key in path[:-1]:
                target = target.setdefault(key, {})
            target[path[-1]] = _wire_value(value)
        return out

    def validate_required(self) -> None:
        """Raise ``ValueError`` if a required field (at any depth) is ``None``."""
        missing = self._missing_required()
        if missing:
            raise ValueError(
                f"Missing required property {', '.join(missing)} in model {type(self).__name__}"
            )

    def _missing_required(self, prefix: str = "") -> list[str]:
        missing: list[str] = []
        for name, field in type(self).model_fields.items():
            extra = _extra(field)
            wire_name = ".".join(extra.get(_PATH) or [field.alias or name])
            value = getattr(self, name)
            if value is None:
                if extra.get(_REQUIRED):
                    missing.append(f"{prefix}{wire_name}")
                continue
            items = value if isinstance(value, list) else [value]
            for i, item in enumerate(items):
                if isinstance(item, RestModel):
                    index = f"[{i}]" if isinstance(value, list) else ""
                    missing.extend(item._missing_required(f"{prefix}{wire_name}{index}."))
        return missing


class ExpandableEnum(str):
    """A string enumeration that also accepts values it does not know.

    Services add enum values between API versions; an unknown value is
    kept as-is instead of failing deserialisation.  Known members are the
    upper-case string class attributes of a subclass::

        class Color(ExpandableEnum):
            RED = "Red"

        Color.from_value("red") is Color.RED   # True
        Color.from_value("Teal").is_known      # False
    """

    _members: ClassVar[dict[str, ExpandableEnum]]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._members = {}
        for attr, value in list(vars(cls).items()):
            if attr.isupper() and isinstance(value, str):
                member = cls(value)
                setattr(cls, attr, member)
                cls._members[value.lower()] = member

    @classmethod
    def from_value(cls, value: str) -> Self:
        if isinstance(value, cls):
            return value
        return cls._members.get(value.lower()) or cls(value)  # type: ignore[return-value]

    @classmethod
    def values(cls) -> list[Self]:
        return list(cls._members.values())  # type: ignore[arg-type]

    @property
    def is_known(self) -> bool:
        return self.lower() in type(self)._members

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str.__repr__(self)})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls.from_value,
            core_schema.str_schema(),
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )
