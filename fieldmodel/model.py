"""
Model types and immutable model instances.

A ModelType is a plain value: a normalized field list plus an optional
extract hook. Calling it (or `create`) hydrates raw input into a Model:

    User = define('User', [
        'id',
        {'name': 'email', 'mapping': 'contact.email'},
        {'name': 'active', 'defaultValue': True},
        {'name': 'label', 'convert': lambda raw, m: f"{m.get('id')} <{m.get('email')}>"},
    ])

    user = User({'id': 7, 'contact': {'email': 'a@b.c'}})
    user.get('label')                   # '7 <a@b.c>'
    user.set('email', 'x@y.z').extract()
    # {'id': 7, 'contact': {'email': 'x@y.z'}, 'active': True}

Hydration runs in three phases: defaults, then mapped fields (dotted path
lookups into the raw input), then computed fields in declaration order.
"""
import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from .fields import Field, FieldSpec, normalize_fields
from .paths import MISSING, assign_path, resolve_path

logger = logging.getLogger(__name__)

ExtractHook = Callable[[dict[str, Any], 'Model'], Any]


class ModelType(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = 'Model'
    fields: tuple[Field, ...] = ()
    extract_hook: Optional[Callable[..., Any]] = None

    @field_validator('fields', mode='before')
    @classmethod
    def _normalize_fields(cls, value: Any) -> tuple[Field, ...]:
        return normalize_fields(value)

    def model_post_init(self, context: Any, /) -> None:
        logger.debug(f"model type {self.name} declared with fields {self.field_names}")

    @property
    def field_names(self) -> list[str]:
        return [field.name for field in self.fields]

    @property
    def mapped_fields(self) -> tuple[Field, ...]:
        return tuple(field for field in self.fields if not field.is_computed)

    @property
    def computed_fields(self) -> tuple[Field, ...]:
        return tuple(field for field in self.fields if field.is_computed)

    def field(self, name: str) -> Field:
        for field in reversed(self.fields):
            if field.name == name:
                return field
        raise KeyError(name)

    def create(self, raw: Any = None) -> 'Model':
        return Model(self, raw)

    def __call__(self, raw: Any = None) -> 'Model':
        return Model(self, raw)

    def creator(self) -> Callable[[Any], 'Model']:
        """ One-argument factory, e.g. for `map(User.creator(), rows)` """
        return self.create

    def create_many(self, rows: Iterable[Any]) -> list['Model']:
        return [Model(self, row) for row in rows]

    def create_set(self, values: Mapping[str, Any]) -> 'Model':
        """Build a model from attribute names rather than raw input.

        Starts from an empty model and applies `set` for each key in
        iteration order.
        """
        model = Model(self, {})
        for name, value in values.items():
            model = model.set(name, value)
        return model

    def extend(self, fields: Iterable[FieldSpec] = (), *, name: Optional[str] = None, extract_hook: Any = MISSING) -> 'ModelType':
        """ New type with this type's fields followed by `fields`; self is unchanged """
        return ModelType(
            name=name or self.name,
            fields=self.fields + normalize_fields(fields),
            extract_hook=self.extract_hook if extract_hook is MISSING else extract_hook,
        )

    def with_extract_hook(self, hook: Optional[ExtractHook]) -> 'ModelType':
        return self.model_copy(update={'extract_hook': hook})


def define(name: str, fields: Iterable[FieldSpec] = (), extract: Optional[ExtractHook] = None) -> ModelType:
    return ModelType(name=name, fields=normalize_fields(fields), extract_hook=extract)


class Model:
    """An immutable, hydrated view over one raw input.

    `set` and `clone` return new instances; the raw input is shared by
    reference and never modified.
    """
    __slots__ = ('model_type', 'raw', '_data')

    def __init__(self, model_type: ModelType, raw: Any = None):
        if raw is None:
            raw = {}
        object.__setattr__(self, 'model_type', model_type)
        object.__setattr__(self, 'raw', raw)
        object.__setattr__(self, '_data', {})
        self._hydrate()

    @classmethod
    def _from_data(cls, model_type: ModelType, raw: Any, data: dict[str, Any]) -> 'Model':
        model = cls.__new__(cls)
        object.__setattr__(model, 'model_type', model_type)
        object.__setattr__(model, 'raw', raw)
        object.__setattr__(model, '_data', data)
        return model

    def _hydrate(self) -> None:
        data = self._data
        fields = self.model_type.fields

        for field in fields:
            if field.has_default:
                data[field.name] = field.default_value

        for field in fields:
            if field.is_computed:
                continue
            value = resolve_path(self.raw, field.path)
            if value is not MISSING:
                data[field.name] = value

        # computed fields see everything above plus earlier computed fields
        for field in fields:
            if field.is_computed:
                data[field.name] = field.convert(self.raw, self)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable, use set() instead")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def attributes(self) -> Mapping[str, Any]:
        return MappingProxyType(self._data)

    def get(self, name: str, default: Any = None) -> Any:
        """Stored value, or `default` when the field was never set.

        A stored None and an unset field both give None by default; use
        `has(name)` or `get(name, MISSING)` to tell them apart.
        """
        return self._data.get(name, default)

    def has(self, name: str) -> bool:
        return name in self._data

    def __getitem__(self, name: str) -> Any:
        return self._data[name]

    def __contains__(self, name: object) -> bool:
        return name in self._data

    def set(self, name: str, value: Any) -> 'Model':
        data = dict(self._data)
        data[name] = value
        return Model._from_data(self.model_type, self.raw, data)

    def update(self, values: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> 'Model':
        model = self
        for name, value in {**(values or {}), **kwargs}.items():
            model = model.set(name, value)
        return model

    def clone(self) -> 'Model':
        return Model._from_data(self.model_type, self.raw, dict(self._data))

    def extract(self) -> dict[str, Any]:
        """Rebuild a nested structure shaped like the raw input.

        Every mapped field that holds a value is written at its mapping path;
        computed fields and fields that were never set are left out. The
        model type's extract hook then receives the structure and this model.
        It edits the structure in place; whatever it returns is ignored.
        """
        extracted: dict[str, Any] = {}
        for field in self.model_type.mapped_fields:
            if field.name in self._data:
                assign_path(extracted, field.path, self._data[field.name])

        hook = self.model_type.extract_hook
        if hook is not None:
            logger.debug(f"running extract hook {getattr(hook, '__name__', hook)!r} for {self.model_type.name}")
            hook(extracted, self)
        return extracted

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Model):
            return NotImplemented
        return self.model_type == other.model_type and self._data == other._data

    __hash__ = None

    def __repr__(self) -> str:
        return f"{self.model_type.name}({self._data!r})"
