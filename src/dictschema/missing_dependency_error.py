"""Error raised when an optional third-party backend is not installed."""


class MissingDependencyError(ImportError):
    """
    Raised when a feature needs an optional package that is not installed.

    Attributes:
        package: Distribution name of the missing package.
        feature: The dictschema feature that needed it.

    """

    def __init__(self, package: str, feature: str) -> None:
        """Build the message from the package and feature names."""
        self.package = package
        self.feature = feature
        super().__init__(f"{feature} requires {package}. Install it with: pip install dictschema[{package}]")
