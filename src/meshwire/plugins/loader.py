import importlib
import importlib.util
import logging
import os
import typing
from types import ModuleType

__all__ = ["import_fn", "is_path_identifier"]

logger = logging.getLogger(__name__)

# Absolute file path -> loaded module
_path_modules: typing.Dict[str, ModuleType] = {}


def is_path_identifier(identifier: str) -> bool:
    return os.path.isabs(identifier) or os.sep in identifier or identifier.endswith(".py")


def _locate_file(path: str) -> typing.Optional[str]:
    for candidate in (path, path + ".py", os.path.join(path, "__init__.py")):
        if os.path.isfile(candidate):
            return candidate
    return None


def _load_file(identifier: str) -> ModuleType:
    path = os.path.abspath(identifier)
    if path in _path_modules:
        return _path_modules[path]

    file_path = _locate_file(path)
    if file_path is None:
        raise ModuleNotFoundError(f"No module named '{identifier}'", name=identifier)

    module_name = "_meshwire_file_" + os.path.splitext(os.path.basename(file_path))[0]
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    if spec is None or spec.loader is None:
        raise ModuleNotFoundError(f"No module named '{identifier}'", name=identifier)

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    _path_modules[path] = module
    logger.debug("Loaded %s from %s", identifier, file_path)
    return module


async def import_fn(identifier: str) -> ModuleType:
    """Default module loader

    Dotted names are imported with importlib. Filesystem paths, with or without
    a .py suffix, are executed as standalone modules and cached by absolute path.
    Raises ModuleNotFoundError with ``name`` set when nothing exists at *identifier*.
    """
    if is_path_identifier(identifier):
        return _load_file(identifier)
    return importlib.import_module(identifier)
