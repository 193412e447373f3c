"""Shared pydantic base for every hydroslice config layer."""

from pydantic import BaseModel, ConfigDict


class SliceBaseModel(BaseModel):
    """Strict by default: unknown keys are errors, and assignments are re-validated.

    UserConfig loosens ``extra`` so that hand-edited files tolerate stray keys.
    """

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
    )
