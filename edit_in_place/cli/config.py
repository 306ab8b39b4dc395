"""Configuration file loading, validation and application.

This module handles loading configuration from JSON and YAML files,
validating configuration files, and applying them to a Configuration.

Configuration files can specify:
- mode: Default rendering mode
- middlewares: Default middlewares (registered names or import paths)
- defined_middlewares: Import paths of the permitted middleware classes, in
  execution order
- registered_middlewares: Mapping of names to middleware import paths
- field_types: Mapping of names to field type import paths, or to
  ``{"type": <import path>, "params": {...}}`` for field types that take
  construction arguments

Import paths have the form ``package.module:attribute`` (``package.module.
attribute`` is accepted as well).

Example configuration (YAML):
    mode: viewing
    defined_middlewares:
      - myapp.middlewares:Strip
      - myapp.middlewares:Upcase
    registered_middlewares:
      strip: myapp.middlewares:Strip
    middlewares: [strip]
    field_types:
      title:
        type: edit_in_place.fields:TemplateFieldType
        params:
          viewing: "<h1>{0}</h1>"
          editing: '<input value="{0}">'
"""

import importlib
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from edit_in_place.core.configuration import Configuration, configure
from edit_in_place.core.exceptions import EditInPlaceError

logger = logging.getLogger(__name__)

CONFIG_KEYS = ("mode", "middlewares", "defined_middlewares", "registered_middlewares", "field_types")


class ConfigError(EditInPlaceError):
    """Configuration file error.

    Raised when configuration files cannot be loaded, parsed, or applied.
    This includes file not found errors, syntax errors in JSON/YAML, schema
    violations and import paths that cannot be resolved.

    Context typically includes:
        - path: Configuration file path
        - field: Configuration key that is invalid
        - import_path: Import path that could not be resolved
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        field: str | None = None,
        **extra_context: Any,
    ) -> None:
        context: dict[str, Any] = {}
        if path is not None:
            context["path"] = path
        if field is not None:
            context["field"] = field
        context.update(extra_context)

        super().__init__(message, context)


def load_config(path: Path) -> dict[str, Any]:
    """Load configuration from JSON or YAML file.

    Format is determined by file extension (.json, .yaml, .yml) or
    auto-detected (JSON first, then YAML) for any other extension.

    Args:
        path: Path to configuration file

    Returns:
        Configuration dictionary (empty for an empty YAML document)

    Raises:
        ConfigError: If file cannot be loaded, parsed, or is not a mapping

    Example:
        >>> config = load_config(Path("edit_in_place.yaml"))
        >>> config["mode"]
        'viewing'
    """
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}", path=str(path))

    try:
        content = path.read_text(encoding="utf-8")

        if path.suffix == ".json":
            data = json.loads(content)
        elif path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        else:
            try:
                data = json.loads(content)
            except json.JSONDecodeError:
                data = yaml.safe_load(content)

    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}", path=str(path)) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}", path=str(path)) from e
    except OSError as e:
        raise ConfigError(f"Failed to load config from {path}: {e}", path=str(path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration file must contain a mapping, got: {type(data).__name__}",
            path=str(path),
        )
    return data


def import_object(import_path: str) -> Any:
    """Import the object designated by an import path.

    Args:
        import_path: ``package.module:attribute`` or ``package.module.attribute``

    Returns:
        The imported object

    Raises:
        ConfigError: If the module or attribute cannot be found
    """
    if ":" in import_path:
        module_name, _, attribute = import_path.partition(":")
    else:
        module_name, _, attribute = import_path.rpartition(".")

    if not module_name or not attribute:
        raise ConfigError(f"Invalid import path '{import_path}'", import_path=import_path)

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(
            f"Cannot import module '{module_name}': {e}", import_path=import_path
        ) from e

    for part in attribute.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise ConfigError(
                f"Module '{module_name}' has no attribute '{attribute}'", import_path=import_path
            ) from e
    return obj


def import_reference(reference: str) -> Any:
    """Import reference if it is an import path, otherwise return it unchanged.

    Only ``package.module:attribute`` paths are imported here since a bare
    name is a registered name.
    """
    return import_object(reference) if ":" in reference else reference


def validate_config(config: dict[str, Any]) -> list[str]:
    """Validate configuration structure and referenced objects.

    Checks that:
    - Every key has the expected type
    - Every import path can be resolved
    - Every field type and middleware can be registered

    Args:
        config: Configuration dictionary to validate

    Returns:
        List of validation error messages (empty list if valid)

    Example:
        >>> validate_config({"mode": 3})
        ["'mode' must be a string, got: int"]
    """
    errors = _check_structure(config)
    if errors:
        return errors

    try:
        apply_config(config, Configuration())
    except EditInPlaceError as e:
        errors.append(str(e))
    return errors


def apply_config(config: dict[str, Any], configuration: Configuration | None = None) -> Configuration:
    """Apply a configuration dictionary to a Configuration.

    Defined middlewares are appended to the configured ones (classes already
    defined are skipped); registrations are added atomically per key; the
    mode replaces the configured mode; middlewares are appended to the
    default middlewares.

    Args:
        config: Configuration dictionary, as returned by load_config
        configuration: Configuration to modify; defaults to the global one,
                       which is then modified while holding its lock

    Returns:
        The modified configuration

    Raises:
        ConfigError: If the configuration is malformed or an import fails
        EditInPlaceError: If a registration is rejected
    """
    errors = _check_structure(config)
    if errors:
        raise ConfigError(f"Invalid configuration: {'; '.join(errors)}")

    if configuration is None:
        return configure(lambda c: _apply(config, c))
    _apply(config, configuration)
    return configuration


def _apply(config: dict[str, Any], configuration: Configuration) -> None:
    for import_path in config.get("defined_middlewares", []):
        cls = import_object(import_path)
        if not isinstance(cls, type):
            raise ConfigError(
                f"Defined middleware '{import_path}' is not a class",
                field="defined_middlewares",
                import_path=import_path,
            )
        if cls not in configuration.defined_middlewares:
            configuration.defined_middlewares.append(cls)

    registered = {
        name: import_object(import_path)
        for name, import_path in config.get("registered_middlewares", {}).items()
    }
    configuration.registered_middlewares.register_all(registered)

    field_types = {
        name: _build_field_type(spec) for name, spec in config.get("field_types", {}).items()
    }
    configuration.field_types.register_all(field_types)

    if config.get("mode") is not None:
        configuration.field_options.mode = config["mode"]

    configuration.field_options.middlewares.extend(
        import_reference(m) for m in config.get("middlewares", [])
    )
    logger.debug(
        "Applied configuration: %d field types, %d registered middlewares",
        len(field_types),
        len(registered),
    )


def _build_field_type(spec: str | Mapping[str, Any]) -> Any:
    if isinstance(spec, str):
        return import_object(spec)

    field_type = import_object(spec["type"])
    params = spec.get("params", {})
    try:
        return field_type(**params)
    except (TypeError, ValueError) as e:
        raise ConfigError(
            f"Failed to construct field type '{spec['type']}': {e}",
            field="field_types",
            import_path=spec["type"],
        ) from e


def _check_structure(config: Any) -> list[str]:
    if not isinstance(config, dict):
        return [f"Configuration must be a dictionary, got: {type(config).__name__}"]

    errors: list[str] = []
    unknown = sorted(set(config) - set(CONFIG_KEYS))
    if unknown:
        errors.append(f"Unknown configuration keys: {', '.join(map(str, unknown))}")

    mode = config.get("mode")
    if mode is not None and not isinstance(mode, str):
        errors.append(f"'mode' must be a string, got: {type(mode).__name__}")

    for key in ("middlewares", "defined_middlewares"):
        value = config.get(key, [])
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            errors.append(f"'{key}' must be a list of strings")

    registered = config.get("registered_middlewares", {})
    if not isinstance(registered, dict) or not all(isinstance(v, str) for v in registered.values()):
        errors.append("'registered_middlewares' must map names to import paths")

    field_types = config.get("field_types", {})
    if not isinstance(field_types, dict):
        errors.append("'field_types' must map names to field type specifications")
    else:
        for name, spec in field_types.items():
            errors.extend(_check_field_type_spec(name, spec))

    return errors


def _check_field_type_spec(name: str, spec: Any) -> list[str]:
    if isinstance(spec, str):
        return []
    if not isinstance(spec, dict) or not isinstance(spec.get("type"), str):
        return [f"Field type '{name}' must be an import path or a mapping with a 'type' key"]
    if not isinstance(spec.get("params", {}), dict):
        return [f"Params of field type '{name}' must be a mapping"]
    return []
