"""
CFFI trampolines for the engine callbacks.

Each duel is created with a handle to its CheckerContext as payload, so
these module-level callbacks recover the context with ffi.from_handle() and
dispatch to the plain handlers in script_checker.bridge.
"""

from .bindings import ffi
from .. import bridge


def _decode(string) -> str:
    if string == ffi.NULL:
        return ""
    return ffi.string(string).decode("utf-8", errors="replace")


@ffi.callback("void(void*, uint32_t, OCG_CardData*)")
def py_card_reader(payload, code, data):
    """Callback to provide card data to the engine."""
    ctx = ffi.from_handle(payload)
    ctx.guard(bridge.read_card, code, data)


@ffi.callback("int(void*, OCG_Duel, const char*)")
def py_script_reader(payload, duel, name):
    """Callback to load Lua scripts requested by the engine."""
    ctx = ffi.from_handle(payload)
    return 1 if ctx.guard(bridge.read_script, duel, _decode(name), default=False) else 0


@ffi.callback("void(void*, const char*, int)")
def py_log_handler(payload, string, log_type):
    """Callback for log messages from the engine."""
    ctx = ffi.from_handle(payload)
    ctx.guard(bridge.handle_log, _decode(string), log_type)
