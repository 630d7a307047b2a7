"""Property accessors — how a rule reads its value from the instance."""

from collections.abc import Mapping
from typing import Any, Callable, Optional, Union

from fluentcheck.validators.errors import ValidatorConfigurationError
from fluentcheck.validators.options import global_options


def get_value(obj: Any, path: str) -> Any:
    """Read a dotted attribute path; mappings are read by key. A None hop yields None."""
    for segment in path.split("."):
        if obj is None:
            return None
        if isinstance(obj, Mapping):
            obj = obj.get(segment)
        else:
            obj = getattr(obj, segment)
    return obj


class PropertyAccessor:
    """Reads one property of an instance and knows its name.

    Built from an attribute path ("surname", "contact.name") or from a
    callable plus an explicit name.
    """

    def __init__(self, source: Union[str, Callable[[Any], Any]], name: Optional[str] = None):
        if isinstance(source, str):
            if not source or any(not part.isidentifier() for part in source.split(".")):
                raise ValidatorConfigurationError(
                    f"'{source}' is not a valid property path",
                    details={"property": source},
                )
            self.path: Optional[str] = source
            self._getter = None
            self.property_name = source if name is None else name
        elif callable(source):
            if name is None:
                name = getattr(source, "__name__", "")
                if name == "<lambda>":
                    raise ValidatorConfigurationError(
                        "Property name could not be determined for a lambda accessor; pass name=...",
                    )
            self.path = None
            self._getter = source
            self.property_name = name
        else:
            raise ValidatorConfigurationError(
                f"Property accessor must be a string or callable, got {type(source).__name__}",
            )

    def __call__(self, instance: Any) -> Any:
        if self._getter is not None:
            return self._getter(instance)
        return get_value(instance, self.path)

    @property
    def display_name(self) -> str:
        last = self.property_name.rsplit(".", 1)[-1]
        return global_options.display_name_resolver(last)

    def __repr__(self) -> str:
        return f"PropertyAccessor({self.property_name!r})"


def prop(path: str) -> PropertyAccessor:
    """Reference another property, e.g. `.equal(prop("password_confirmation"))`."""
    return PropertyAccessor(path)


def identity(value: Any) -> Any:
    return value
