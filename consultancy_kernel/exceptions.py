"""
Typed Exception Hierarchy for the Consultancy Kernel.

Every error raised by the kernel, the engines or the configuration layer has
a typed class with a machine-readable ``code`` and structured attributes, so
callers catch by type and never parse message strings.

    ConsultancyKernelError (base)
    |
    +-- InvalidArgumentError
    |
    +-- IntervalError
    |   +-- InvalidIntervalError
    |   +-- IntervalOverlapError
    |
    +-- ConfigurationError

Category        | Code                  | When Raised
----------------|-----------------------|------------------------------------------
Argument        | INVALID_ARGUMENT      | Engine argument outside its domain
                |                       | (e.g. months_to_spread < 1)
----------------|-----------------------|------------------------------------------
Interval        | INVALID_INTERVAL      | effective_to before effective_from
                | INTERVAL_OVERLAP      | Two records of one series overlap
----------------|-----------------------|------------------------------------------
Configuration   | CONFIGURATION_ERROR   | Configuration document cannot be used

Missing data is NOT an error: a metric without an actual, a zero target or a
scorecard with no weighted categories all resolve to zero.
"""


class ConsultancyKernelError(Exception):
    """
    Base exception for all consultancy kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "CONSULTANCY_KERNEL_ERROR"


class InvalidArgumentError(ConsultancyKernelError):
    """An engine was called with an argument outside its valid domain."""

    code: str = "INVALID_ARGUMENT"

    def __init__(self, argument: str, value: object, reason: str):
        self.argument = argument
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid argument {argument}={value!r}: {reason}")


# Interval-related exceptions


class IntervalError(ConsultancyKernelError):
    """Base exception for time-ranged configuration errors."""

    code: str = "INTERVAL_ERROR"


class InvalidIntervalError(IntervalError):
    """A time-ranged record ends before it starts."""

    code: str = "INVALID_INTERVAL"

    def __init__(self, effective_from: str, effective_to: str):
        self.effective_from = effective_from
        self.effective_to = effective_to
        super().__init__(
            f"effective_to ({effective_to}) cannot be before "
            f"effective_from ({effective_from})"
        )


class IntervalOverlapError(IntervalError):
    """
    Two records in the same configuration series overlap.

    Date ranges within one series must not overlap; otherwise a lookup
    could match more than one record.
    """

    code: str = "INTERVAL_OVERLAP"

    def __init__(
        self,
        series: str,
        overlap_start: str,
        overlap_end: str,
    ):
        self.series = series
        self.overlap_start = overlap_start
        self.overlap_end = overlap_end
        super().__init__(
            f"Overlapping intervals in {series} series "
            f"({overlap_start} to {overlap_end})"
        )


class ConfigurationError(ConsultancyKernelError):
    """A configuration document is structurally unusable."""

    code: str = "CONFIGURATION_ERROR"

    def __init__(self, source: str, detail: str):
        self.source = source
        self.detail = detail
        super().__init__(f"Invalid configuration {source}: {detail}")
