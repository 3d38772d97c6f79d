from .fields import Field, FieldSpec, FieldConfigError, normalize_field, normalize_fields
from .paths import MISSING, split_path, resolve_path, assign_path
from .model import Model, ModelType, define

__all__ = [
    "Field",
    "FieldSpec",
    "FieldConfigError",
    "normalize_field",
    "normalize_fields",
    "MISSING",
    "split_path",
    "resolve_path",
    "assign_path",
    "Model",
    "ModelType",
    "define",
]

__version__ = "0.1.0"
