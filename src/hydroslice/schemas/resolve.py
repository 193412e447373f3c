"""Layer the three config sources into one InternalConfig.

Later layers win: expert defaults (ParamConfig), then the user file
(UserConfig), then command-line flags (CLIConfig). Only fields a layer
actually sets take part in the merge.
"""

from typing import Optional, Type, TypeVar, Union

from pydantic import BaseModel

from hydroslice.schemas.cli import CLIConfig
from hydroslice.schemas.internal import InternalConfig
from hydroslice.schemas.param import ParamConfig
from hydroslice.schemas.user import UserConfig

M = TypeVar("M", bound=BaseModel)


def deep_merge(base: dict, *overrides: dict) -> dict:
    """Return ``base`` updated by each override in turn.

    Sections present on both sides as dicts are merged key by key; any other
    value is replaced outright. Inputs are not modified.

    Examples
    --------
    >>> deep_merge({"slicer": {"nearest_minutes": 1, "n_workers": 16}},
    ...            {"slicer": {"n_workers": 4}})
    {'slicer': {'nearest_minutes': 1, 'n_workers': 4}}
    """
    merged = dict(base)
    for override in overrides:
        for key, value in override.items():
            current = merged.get(key)
            if isinstance(current, dict) and isinstance(value, dict):
                merged[key] = deep_merge(current, value)
            else:
                merged[key] = value
    return merged


def _coerce(model: Type[M], value: Union[None, dict, M]) -> M:
    if isinstance(value, model):
        return value
    return model.model_validate(value or {})


def resolve_config(
    param_cfg: Union[dict, ParamConfig],
    user_cfg: Optional[Union[dict, UserConfig]] = None,
    cli_cfg: Optional[Union[dict, CLIConfig]] = None,
) -> InternalConfig:
    """Build the frozen runtime configuration.

    Parameters
    ----------
    param_cfg : dict or ParamConfig
        Complete expert defaults.
    user_cfg, cli_cfg : dict or model, optional
        Override layers. Dicts are validated first; None means no overrides.

    Returns
    -------
    InternalConfig

    Raises
    ------
    ValidationError
        If any layer, or the merged result, is invalid.

    Examples
    --------
    >>> config = resolve_config(ParamConfig(), UserConfig(NEAREST_MIN=15))
    >>> config.slicer.nearest_minutes
    15
    """
    param = _coerce(ParamConfig, param_cfg)
    user = _coerce(UserConfig, user_cfg)
    cli = _coerce(CLIConfig, cli_cfg)

    merged = deep_merge(
        param.model_dump(),
        user.to_internal_overrides(),
        cli.to_internal_overrides(),
    )
    return InternalConfig.model_validate(merged)
