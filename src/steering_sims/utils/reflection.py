import inspect
from types import ModuleType


def get_class(name: str, module: ModuleType, base: type | None = None) -> type:
    """
    Case-insensitive lookup of a class defined in (or exported by) `module`.

    With `base`, only concrete subclasses of it are accepted.
    """
    wanted = name.lower()
    for key, obj in vars(module).items():
        if isinstance(obj, type) and key.lower() == wanted:
            if base is not None and (not issubclass(obj, base) or inspect.isabstract(obj)):
                raise ValueError(f"'{name}' in {module.__name__} is not a concrete {base.__name__}")
            return obj
    raise ValueError(f"Unknown class '{name}' in {module.__name__}")
