"""
Builder Validation Helpers
==========================

Parameter validation and frame counting shared by the model builders.
"""

import math
from typing import Type, TypeVar

from pydantic import BaseModel, ValidationError

from loomer.errors import InvalidInputError


ParamsT = TypeVar("ParamsT", bound=BaseModel)


def validate_params(params_type: Type[ParamsT], **values) -> ParamsT:
    """
    Validate builder arguments against a pydantic parameter model.
    
    Args:
        params_type: Parameter model class
        **values: Raw argument values
        
    Returns:
        Validated parameter model
        
    Raises:
        InvalidInputError: Naming every offending parameter
    """
    try:
        return params_type.model_validate(values)
    except ValidationError as exc:
        problems = "; ".join(
            f"'{'.'.join(str(part) for part in error['loc'])}': {error['msg']}"
            for error in exc.errors()
        )
        raise InvalidInputError(f"Invalid parameters: {problems}") from exc


def frame_count(seconds: float, frame_rate: float) -> int:
    """
    Number of frames needed to cover ``seconds`` at ``frame_rate``.
    
    Rounded up, so the series is never a frame short. The product is
    rounded to 9 decimals first so floating error (0.1 * 30 gives
    3.0000000000000004) does not add a spurious frame.
    """
    return math.ceil(round(seconds * frame_rate, 9))
