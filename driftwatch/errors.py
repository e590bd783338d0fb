"""Engine exceptions."""


class InsufficientDataError(ValueError):
    """The series is shorter than one full rolling window."""

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(
            f"need at least {required} days of history for a {required}-day window "
            f"(got {available})"
        )
