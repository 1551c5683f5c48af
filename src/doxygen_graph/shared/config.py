"""Configuration classes for the Doxygen graph pipeline.

Component configurations validate themselves in ``__post_init__``; the frozen
``GraphConfig`` aggregates them and wraps validation failures into
``ConfigValidationError``.
"""

import hashlib
import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, List, Optional

DEFAULT_IGNORED_ELEMENTS: FrozenSet[str] = frozenset({
    "incdepgraph",
    "invincdepgraph",
    "inheritancegraph",
    "collaborationgraph",
})

DEFAULT_COLLECTION_FOLDERS: Dict[str, str] = {
    "class": "classes",
    "struct": "structs",
    "union": "unions",
    "namespace": "namespaces",
    "file": "files",
    "dir": "folders",
    "group": "groups",
    "page": "pages",
}


@dataclass
class ParserConfig:
    """Configuration for turning lxml trees into data-model nodes.

    With ``preserve_whitespace_text`` off, whitespace-only text between
    inline elements is dropped too, so ``<ref>A</ref> <ref>B</ref>`` renders
    as ``AB``. Renderers that need those separators should turn it on (the
    ``strict`` preset does).
    """

    preserve_whitespace_text: bool = False
    ignored_elements: FrozenSet[str] = DEFAULT_IGNORED_ELEMENTS
    resolve_entities: bool = False
    huge_tree: bool = False

    def __post_init__(self) -> None:
        """Validate parser configuration."""
        # JSON round trips deliver lists
        self.ignored_elements = frozenset(self.ignored_elements)
        if self.resolve_entities:
            raise ValueError("resolve_entities must stay disabled for Doxygen input")
        for name in self.ignored_elements:
            if not name or not isinstance(name, str):
                raise ValueError("ignored_elements must contain element names")


@dataclass
class PermalinkConfig:
    """Configuration for permalink computation."""

    base_url: str = "/"
    docs_base_url: str = "docs"
    api_base_url: str = "api"
    lowercase: bool = True
    anonymous_namespace_label: str = "anonymous"
    template_hash: str = "md5"
    collection_folders: Dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_COLLECTION_FOLDERS)
    )

    def __post_init__(self) -> None:
        """Validate permalink configuration."""
        if not self.base_url.endswith("/"):
            raise ValueError("base_url must end with '/'")
        if not self.anonymous_namespace_label:
            raise ValueError("anonymous_namespace_label cannot be empty")
        if self.template_hash not in hashlib.algorithms_available:
            raise ValueError(f"template_hash '{self.template_hash}' is not a hashlib algorithm")
        missing = sorted(set(DEFAULT_COLLECTION_FOLDERS) - set(self.collection_folders))
        if missing:
            raise ValueError(f"collection_folders is missing kinds {missing}")

    @property
    def page_base_url(self) -> str:
        """Prefix prepended to relative permalinks, e.g. ``/docs/api/``."""
        parts = [part.strip("/") for part in (self.docs_base_url, self.api_base_url)]
        prefix = "/".join(part for part in parts if part)
        return f"{self.base_url}{prefix}/" if prefix else self.base_url


@dataclass
class ResolverConfig:
    """Configuration for hierarchy linking and cross-reference resolution."""

    warn_on_unresolved: bool = True
    warn_on_duplicate_permalinks: bool = True
    index_descriptions: bool = True


@dataclass
class GlobalConfig:
    """Settings that apply across all components."""

    logging_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    run_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate global configuration."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.logging_level not in valid_levels:
            raise ValueError(f"logging_level must be one of {valid_levels}")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


_COMPONENTS = ("parser", "permalinks", "resolver", "global_")


@dataclass(frozen=True)
class GraphConfig:
    """Immutable configuration for a complete pipeline run.

    Example:
        >>> config = GraphConfig().override(permalinks__api_base_url="reference")
        >>> config.permalinks.page_base_url
        '/docs/reference/'
    """

    parser: ParserConfig = field(default_factory=ParserConfig)
    permalinks: PermalinkConfig = field(default_factory=PermalinkConfig)
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    version: str = "1.0.0"
    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete configuration."""
        try:
            self.parser.__post_init__()
            self.permalinks.__post_init__()
            self.global_.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    def override(self, **kwargs: Any) -> "GraphConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: ``component__field`` keys for component fields, plain
                keys for top-level fields

        Returns:
            New GraphConfig instance with overrides applied
        """
        nested_overrides: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                # ``global_`` itself ends with an underscore
                component = next(
                    (name for name in _COMPONENTS if key.startswith(f"{name}__")), None
                )
                if component is None:
                    field_name = key.split("__", 1)[1]
                    raise ConfigValidationError(
                        f"Unknown configuration component '{key.split('__', 1)[0]}'",
                        field_name=key,
                        suggestions=[f"{name}__{field_name}" for name in _COMPONENTS],
                    )
                field_name = key[len(component) + 2:]
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                top_level[key] = value

        new_fields: Dict[str, Any] = {}
        for component in _COMPONENTS:
            current = getattr(self, component)
            if component in nested_overrides:
                try:
                    new_fields[component] = replace(current, **nested_overrides[component])
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=component) from e
        new_fields.update(top_level)
        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a JSON-compatible dictionary."""
        def _to_plain(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {name: _to_plain(getattr(obj, name)) for name in obj.__dataclass_fields__}
            if isinstance(obj, (set, frozenset)):
                return sorted(obj)
            if isinstance(obj, (list, tuple)):
                return [_to_plain(item) for item in obj]
            if isinstance(obj, dict):
                return {key: _to_plain(value) for key, value in obj.items()}
            return obj

        return _to_plain(self)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GraphConfig":
        """Create configuration from a dictionary such as ``to_dict`` output."""
        component_types = {
            "parser": ParserConfig,
            "permalinks": PermalinkConfig,
            "resolver": ResolverConfig,
            "global_": GlobalConfig,
        }
        field_values: Dict[str, Any] = {}
        for key, value in data.items():
            if key in component_types:
                if not isinstance(value, dict):
                    raise ConfigValidationError(
                        f"Section '{key}' must be an object", field_name=key
                    )
                try:
                    field_values[key] = component_types[key](**value)
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            elif key in ("version", "name"):
                field_values[key] = value
            else:
                raise ConfigValidationError(
                    f"Unknown configuration key '{key}'",
                    field_name=key,
                    suggestions=list(component_types) + ["version", "name"],
                )
        return cls(**field_values)

    @classmethod
    def from_json(cls, json_str: str) -> "GraphConfig":
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def strict(cls) -> "GraphConfig":
        """Keep every text segment and report every degraded reference."""
        return cls(
            parser=ParserConfig(preserve_whitespace_text=True),
            resolver=ResolverConfig(
                warn_on_unresolved=True,
                warn_on_duplicate_permalinks=True,
            ),
            global_=GlobalConfig(logging_level="DEBUG"),
            name="strict",
        )

    @classmethod
    def quiet(cls) -> "GraphConfig":
        """Resolve silently; diagnostics are still collected."""
        return cls(
            resolver=ResolverConfig(
                warn_on_unresolved=False,
                warn_on_duplicate_permalinks=False,
            ),
            global_=GlobalConfig(logging_level="ERROR"),
            name="quiet",
        )
