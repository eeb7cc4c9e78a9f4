"""pandas and polars adapters for renderables and rendered output."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import pandas as pd
    import polars as pl

BACKENDS = ("pandas", "polars")


def frame_records(obj: Any) -> list[dict[str, Any]] | None:
    """
    Return the rows of a pandas or polars DataFrame as dicts.

    Returns None for anything that is not a DataFrame. Neither library is
    imported here: a DataFrame can only exist if its library is loaded already.

    Example:
        frame_records(pd.DataFrame({"id": [1, 2]}))  # [{"id": 1}, {"id": 2}]

    """
    pandas = sys.modules.get("pandas")
    if pandas is not None and isinstance(obj, pandas.DataFrame):
        return obj.to_dict(orient="records")
    polars = sys.modules.get("polars")
    if polars is not None and isinstance(obj, polars.DataFrame):
        return obj.to_dicts()
    return None


def to_frame(rendered: Any, backend: str = "pandas") -> pd.DataFrame | pl.DataFrame:
    """
    Build a DataFrame from rendered output.

    Args:
        rendered: A rendered record (dict) or collection (list of dicts).
        backend: ``"pandas"`` or ``"polars"``.

    Returns:
        One row per rendered record, one column per output key.

    Raises:
        MissingDependencyError: If the backend library is not installed.
        ValueError: If ``backend`` is not a known backend.

    """
    rows = [rendered] if isinstance(rendered, dict) else list(rendered)

    if backend == "pandas":
        try:
            import pandas as pd
        except ImportError:
            from .missing_dependency_error import MissingDependencyError

            package = "pandas"
            raise MissingDependencyError(package, "to_frame") from None
        return pd.DataFrame(rows)

    if backend == "polars":
        try:
            import polars as pl
        except ImportError:
            from .missing_dependency_error import MissingDependencyError

            package = "polars"
            raise MissingDependencyError(package, "to_frame") from None
        return pl.DataFrame(rows)

    msg = f"Unknown backend {backend!r}; expected one of {', '.join(BACKENDS)}"
    raise ValueError(msg)
