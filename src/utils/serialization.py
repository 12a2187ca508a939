# src/utils/serialization.py

import math
import numpy as np


def to_native(obj):
    """
    Convert engine output into JSON-safe Python types.

    Dataclasses exposing to_dict() are expanded, numpy scalars/arrays become
    Python numbers/lists and infinities become None.
    """
    if hasattr(obj, 'to_dict'):
        return to_native(obj.to_dict())
    if isinstance(obj, (np.bool_, bool)):
        return bool(obj)
    if isinstance(obj, (np.integer,)):
        return int(obj)
    if isinstance(obj, (np.floating, float)):
        value = float(obj)
        return None if math.isinf(value) or math.isnan(value) else value
    if isinstance(obj, (np.ndarray, list, tuple)):
        return [to_native(i) for i in obj]
    if isinstance(obj, dict):
        return {k: to_native(v) for k, v in obj.items()}
    return obj
