"""Trace sinks for human-readable computation steps."""

from collections.abc import Callable

TraceSink = Callable[[str], None]


class TraceRecorder(list):
    """Collect the trace lines emitted during a single computation.

    A `TraceRecorder` is a list of strings that can be passed wherever a `TraceSink` is expected: calling it
    appends the line. Create one recorder per request; recorders are never shared between calls.

    Example:
        >>> from ecc_elgamal.elliptic_curves.ec_operations import point_add
        >>> from ecc_elgamal.elliptic_curves.presets import TOY_CURVE
        >>> trace = TraceRecorder()
        >>> point_add(TOY_CURVE.generator, TOY_CURVE.generator, TOY_CURVE, trace)
        Point(x=5, y=9, infinity=False)
        >>> trace[-1]
        'Result: (5, 9)'
    """

    def __call__(self, line: str) -> None:
        self.append(line)


def emit(trace: TraceSink | None, line: str) -> None:
    """Send `line` to `trace`, doing nothing if `trace` is `None`."""
    if trace is not None:
        trace(line)
