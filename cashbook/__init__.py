"""Personal finance transaction tracker."""

__all__ = [
    "config",
    "database",
    "errors",
    "models",
    "repositories",
    "schemas",
    "services",
]
