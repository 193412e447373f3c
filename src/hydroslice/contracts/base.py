"""The one assertion helper every slicing contract goes through."""

from hydroslice.contracts.failure import ContractViolation


def require(condition: bool, message: str) -> None:
    """Raise ContractViolation with ``message`` unless ``condition`` holds.

    Examples
    --------
    >>> require(ds.sizes["stationIdInd"] > 0, "Slice contract violated: no stations in slice")
    """
    if not condition:
        raise ContractViolation(message)
