import logging
from collections.abc import Iterable, Mapping
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator
from pydantic import Field as PydanticField

from .paths import MISSING, split_path

logger = logging.getLogger(__name__)


class FieldConfigError(ValueError):
    pass


class Field(BaseModel):
    """A single field of a model type.

    `mapping` is a dotted path into the raw input and defaults to `name`.
    A field with a `convert` function is computed: it is evaluated after all
    mapped fields as `convert(raw, model)` and is never written back by
    `Model.extract()`.
    """
    model_config = ConfigDict(
        frozen=True,
        extra='forbid',
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    name: str = PydanticField(min_length=1)
    mapping: Optional[str] = None
    default_value: Any = PydanticField(default=MISSING, alias='defaultValue')
    convert: Optional[Callable[[Any, Any], Any]] = None

    @model_validator(mode='before')
    @classmethod
    def _expand_name(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {'name': data, 'mapping': data}
        if isinstance(data, Mapping):
            # never write through to the caller's dict
            data = dict(data)
            data['mapping'] = data.get('mapping') or data.get('name')
        return data

    @property
    def path(self) -> tuple[str, ...]:
        return split_path(self.mapping or '')

    @property
    def has_default(self) -> bool:
        return self.default_value is not MISSING

    @property
    def is_computed(self) -> bool:
        return self.convert is not None

    def __repr__(self) -> str:
        parts = [f"name={self.name!r}"]
        if self.mapping != self.name:
            parts.append(f"mapping={self.mapping!r}")
        if self.has_default:
            parts.append(f"default_value={self.default_value!r}")
        if self.is_computed:
            parts.append(f"convert={getattr(self.convert, '__name__', self.convert)!r}")
        return f"Field({', '.join(parts)})"


FieldSpec = Union[str, Field, Mapping[str, Any]]


def normalize_field(spec: FieldSpec) -> Field:
    if isinstance(spec, Field):
        return spec
    try:
        return Field.model_validate(spec)
    except ValidationError as exc:
        raise FieldConfigError(f"invalid field declaration {spec!r}: {exc}") from exc


def normalize_fields(specs: Iterable[FieldSpec]) -> tuple[Field, ...]:
    """Turn a declared field list into Field descriptors, in order.

    Bare names become `Field(name=s, mapping=s)`, dicts are validated into
    Field objects. The declared list and its dicts are left untouched, so
    this is safe to call repeatedly. Duplicate names are kept, the
    last-listed one wins within its phase.
    """
    if isinstance(specs, (str, Mapping, Field)):
        raise FieldConfigError(f"fields must be a list of declarations, got {type(specs).__name__}")
    fields = tuple(normalize_field(spec) for spec in specs)

    seen: set[str] = set()
    for field in fields:
        if field.name in seen:
            logger.debug(f"duplicate field name '{field.name}', last declaration wins")
        seen.add(field.name)
    return fields
