"""
Exceptions raised by lanemap

All errors surface synchronously at the offending call. Each one is also a
ValueError so callers validating user input can catch them generically.
"""


class LaneMapError(Exception):
    """Base class for all lanemap errors"""


class DomainDegenerate(LaneMapError, ValueError):
    """Scale domain has max <= min"""

    def __init__(self, min_value: float, max_value: float) -> None:
        self.min_value = min_value
        self.max_value = max_value
        super().__init__(f"Degenerate domain: max ({max_value}) must be greater than min ({min_value})")


class FeatureInvalid(LaneMapError, ValueError):
    """Feature has a negative position or a non-positive length"""

    def __init__(self, position: int, length: int) -> None:
        self.position = position
        self.length = length
        super().__init__(f"Invalid feature geometry: position={position}, length={length} "
                         f"(position must be >= 0 and length > 0)")


class InvalidRange(LaneMapError, ValueError):
    """Slice range with from > to"""

    def __init__(self, start: float, end: float) -> None:
        self.start = start
        self.end = end
        super().__init__(f"Invalid slice range: from ({start}) is greater than to ({end})")
