"""basekit: base class for objects built from a configuration mapping.

Provides the ``new()``/``init()`` construction pattern and an ``error()``
helper that raises tagged ``ObjectError`` failures.
"""
