"""util package.

Helpers shared by the engine and by its command line front end.

Modules:
    - trace: Trace sinks collecting the human-readable steps of a computation.
    - input_parsing: Conversion of user-supplied text and curve files into engine values.
"""
